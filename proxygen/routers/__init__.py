"""HTTP routers."""

from proxygen.routers.generate import create_generate_router
from proxygen.routers.health import create_health_router
from proxygen.routers.proxies import create_proxies_router

__all__ = ["create_generate_router", "create_health_router", "create_proxies_router"]
