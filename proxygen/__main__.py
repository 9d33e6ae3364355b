"""Run the service with uvicorn: ``python -m proxygen``."""

from __future__ import annotations

import uvicorn

from proxygen.config.settings import ProxygenSettings


def main() -> None:
    settings = ProxygenSettings()
    uvicorn.run("proxygen.main:app", host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
