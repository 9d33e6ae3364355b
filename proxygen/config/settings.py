"""Pydantic Settings for the proxygen service.

All environment variables use the PROXYGEN_ prefix.
Example: PROXYGEN_PORT=8080, PROXYGEN_FRONT_DOMAIN=cdn.example.com
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class ProxygenSettings(BaseSettings):
    """Service configuration validated from environment variables."""

    # Service
    port: int = Field(default=8080, ge=1, le=65535)
    log_level: str = "INFO"
    log_json: bool = True

    # Sources
    sources_path: str = str(Path(__file__).with_name("sources.yaml"))
    default_source_key: str = "all"
    cache_ttl_seconds: float = Field(default=600, ge=0)  # 10 minutes
    fetch_timeout_seconds: float = Field(default=15.0, gt=0)

    # Generation defaults, overridable per request
    front_domain: str = "df.game.naver.com"
    sni: str = "df.game.naver.com.ukonskypea.dpdns.org"
    host_header: str = ""  # Empty means "use the SNI value"
    tls_port: int = Field(default=443, ge=1, le=65535)
    gen_trojan: bool = True
    gen_vless: bool = True

    model_config = {"env_prefix": "PROXYGEN_"}
