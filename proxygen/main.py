"""FastAPI application entry point with lifespan management.

Startup: configure logging, load proxy sources, create the TTL cache, source
fetcher, URI builder and generation service, and mount routers.
Shutdown: drop cached records.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from proxygen.config.settings import ProxygenSettings
from proxygen.config.sources import load_sources
from proxygen.generator.uri_builder import CredentialFactory, UriBuilder, random_uuid
from proxygen.logging_config import configure_logging
from proxygen.middleware.error_handler import register_error_handlers
from proxygen.middleware.request_id import RequestIdMiddleware
from proxygen.routers.generate import create_generate_router
from proxygen.routers.health import create_health_router
from proxygen.routers.proxies import create_proxies_router
from proxygen.services.generation_service import GenerationService
from proxygen.sources.cache import Clock, TtlCache
from proxygen.sources.fetcher import SourceFetcher

logger = logging.getLogger(__name__)


def _make_lifespan(
    settings: ProxygenSettings,
    transport: httpx.AsyncBaseTransport | None,
    credential_factory: CredentialFactory,
    clock: Clock,
):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan: startup and shutdown logic."""
        configure_logging(settings.log_level, json_output=settings.log_json)
        logger.info("Starting proxygen service on port %d", settings.port)

        sources = load_sources(settings.sources_path)

        cache = TtlCache(ttl_seconds=settings.cache_ttl_seconds, clock=clock)
        fetcher = SourceFetcher(
            sources,
            cache,
            timeout_seconds=settings.fetch_timeout_seconds,
            transport=transport,
        )
        generation_service = GenerationService(
            fetcher=fetcher,
            uri_builder=UriBuilder(credential_factory),
            settings=settings,
        )

        app.include_router(create_health_router(fetcher=fetcher))
        app.include_router(
            create_proxies_router(
                fetcher=fetcher,
                default_source_key=settings.default_source_key,
            )
        )
        app.include_router(create_generate_router(generation_service=generation_service))

        app.state.settings = settings
        app.state.fetcher = fetcher
        app.state.generation_service = generation_service

        logger.info("Proxygen service started with %d sources", len(sources))

        yield

        cache.clear()
        logger.info("Proxygen service shut down")

    return lifespan


def create_app(
    settings: ProxygenSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    credential_factory: CredentialFactory = random_uuid,
    clock: Clock = time.monotonic,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings:
        Service settings; loaded from ``PROXYGEN_*`` environment variables
        when omitted.
    transport, credential_factory, clock:
        Overrides for the network layer, credential source, and cache clock.
    """
    settings = settings or ProxygenSettings()

    app = FastAPI(
        title="Proxygen",
        version="1.0.0",
        lifespan=_make_lifespan(settings, transport, credential_factory, clock),
    )

    register_error_handlers(app)
    app.add_middleware(RequestIdMiddleware)

    return app


app = create_app()
