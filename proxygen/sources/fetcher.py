"""Remote proxy source retrieval with TTL caching.

Leaf sources are fetched over HTTP(S), parsed according to their declared
format, normalized, and cached under their key. Composite (``multi``)
sources fetch all members concurrently and normalize the concatenation; if
any member fails the whole fetch fails and the other members are cancelled.
There are no retries.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Sequence

import httpx

from proxygen.config.sources import SourceDescriptor, SourceKind, validate_sources
from proxygen.middleware.error_handler import SourceFetchError
from proxygen.models.normalizer import normalize_records
from proxygen.models.records import ProxyRecord
from proxygen.parsers.registry import ParserRegistry, default_registry
from proxygen.sources.cache import TtlCache

logger = logging.getLogger(__name__)


class SourceFetcher:
    """Resolves source keys to normalized proxy records.

    Parameters
    ----------
    sources:
        Configured sources; the first one is used for unknown keys.
    cache:
        Shared TTL cache for leaf source results.
    parsers:
        Parser registry (defaults to the built-in parsers).
    timeout_seconds:
        Per-request HTTP timeout.
    transport:
        Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        sources: Sequence[SourceDescriptor],
        cache: TtlCache,
        *,
        parsers: ParserRegistry | None = None,
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        validate_sources(list(sources))
        self._sources = list(sources)
        self._by_key = {source.key: source for source in self._sources}
        self._cache = cache
        self._parsers = parsers or default_registry()
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def cache(self) -> TtlCache:
        return self._cache

    def resolve(self, source_key: str | None) -> SourceDescriptor:
        """Return the source for *source_key*, defaulting to the first source."""
        source = self._by_key.get(source_key or "")
        if source is None:
            logger.debug("Unknown source key %r, using '%s'", source_key, self._sources[0].key)
            return self._sources[0]
        return source

    def list_sources(self) -> list[dict]:
        """Describe the configured sources (key, name, kind) in config order."""
        return [
            {"key": source.key, "name": source.name, "kind": source.kind.value}
            for source in self._sources
        ]

    async def get_records(self, source_key: str | None) -> list[ProxyRecord]:
        """Return normalized records for *source_key*.

        Raises
        ------
        SourceFetchError
            If any remote retrieval fails or returns an undecodable body.
        """
        source = self.resolve(source_key)
        if source.kind is SourceKind.MULTI:
            return await self._get_composite(source)
        return await self._get_leaf(source)

    async def _get_composite(self, source: SourceDescriptor) -> list[ProxyRecord]:
        tasks = [asyncio.ensure_future(self.get_records(member)) for member in source.members]
        try:
            parts = await asyncio.gather(*tasks)
        except Exception:
            # Stop the remaining members and collect their outcomes
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        records = normalize_records(record for part in parts for record in part)
        logger.info(
            "Merged %d records from %s",
            len(records),
            ", ".join(source.members),
            extra={"source_key": source.key, "item_count": len(records)},
        )
        return records

    async def _get_leaf(self, source: SourceDescriptor) -> list[ProxyRecord]:
        cached = self._cache.get(source.key)
        if cached is not None:
            logger.debug("Cache hit for source '%s'", source.key)
            return cached

        started = time.monotonic()
        response = await self._download(source)
        parser = self._parsers.for_source(source)
        records = normalize_records(parser.parse(self._decode(source, response)))
        self._cache.set(source.key, records)

        logger.info(
            "Fetched %d records from %s",
            len(records),
            source.name,
            extra={
                "source_key": source.key,
                "status_code": response.status_code,
                "item_count": len(records),
                "duration_ms": round((time.monotonic() - started) * 1000, 1),
            },
        )
        return records

    async def _download(self, source: SourceDescriptor) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self._timeout_seconds,
                follow_redirects=True,
            ) as client:
                response = await client.get(source.url)
        except httpx.HTTPError as exc:
            logger.warning(
                "Fetch of %s failed: %s",
                source.name,
                exc,
                extra={"source_key": source.key, "source_url": source.url},
            )
            raise SourceFetchError(f"Failed to fetch {source.name}: {exc}") from exc

        if not response.is_success:
            logger.warning(
                "Fetch of %s returned status %d",
                source.name,
                response.status_code,
                extra={"source_key": source.key, "status_code": response.status_code},
            )
            raise SourceFetchError(
                f"Failed to fetch {source.name}: {response.status_code}"
            )
        return response

    @staticmethod
    def _decode(source: SourceDescriptor, response: httpx.Response) -> object:
        if source.kind is not SourceKind.JSON:
            return response.text
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise SourceFetchError(
                f"Failed to fetch {source.name}: invalid JSON ({exc})"
            ) from exc
