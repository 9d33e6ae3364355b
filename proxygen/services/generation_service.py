"""URI generation for a set of proxies.

The GenerationService resolves the effective record list for a request
(client selections when given, otherwise the full list of a source), fills
absent request parameters from settings, and builds trojan/vless URIs for
every record.
"""

from __future__ import annotations

import logging

from proxygen.config.settings import ProxygenSettings
from proxygen.generator.uri_builder import UriBuilder
from proxygen.middleware.error_handler import EmptyResultError
from proxygen.models.normalizer import normalize_records
from proxygen.models.records import ProxyRecord
from proxygen.models.requests import GenerateRequest, UriOptions
from proxygen.models.responses import GenerateResponse, SchemeCounts
from proxygen.sources.fetcher import SourceFetcher

logger = logging.getLogger(__name__)


def _pick(value, default):
    # Blank strings count as absent; False and 0 do not
    return default if value is None or value == "" else value


class GenerationService:
    """Turns generation requests into descriptor URIs.

    Parameters
    ----------
    fetcher:
        Source fetcher used when the request carries no selections.
    uri_builder:
        URI builder (inject a deterministic credential factory in tests).
    settings:
        Defaults for every optional request field.
    """

    def __init__(
        self,
        *,
        fetcher: SourceFetcher,
        uri_builder: UriBuilder,
        settings: ProxygenSettings,
    ) -> None:
        self._fetcher = fetcher
        self._uri_builder = uri_builder
        self._settings = settings

    def options_for(self, request: GenerateRequest) -> UriOptions:
        """Resolve request parameters against the configured defaults."""
        s = self._settings
        # An empty host header means "same as the SNI" at build time
        return UriOptions(
            front_domain=_pick(request.front_domain, s.front_domain),
            sni=_pick(request.sni, s.sni),
            host_header=_pick(request.host_header, s.host_header),
            tls_port=_pick(request.cf_tls_port, s.tls_port),
            include_trojan=bool(_pick(request.gen_trojan, s.gen_trojan)),
            include_vless=bool(_pick(request.gen_vless, s.gen_vless)),
        )

    async def resolve_records(self, request: GenerateRequest) -> list[ProxyRecord]:
        """Return the records to generate for.

        Raises
        ------
        EmptyResultError
            If the selections or the fetched source yield no valid records.
        SourceFetchError
            If the source has to be fetched and the fetch fails.
        """
        if isinstance(request.selected, list) and request.selected:
            records = normalize_records(request.selected)
            if not records:
                raise EmptyResultError("Selected proxies are invalid.")
            return records

        source_key = _pick(request.source_key, self._settings.default_source_key)
        records = await self._fetcher.get_records(source_key)
        if not records:
            raise EmptyResultError("Proxy list is empty or could not be fetched.")
        return records

    async def generate(self, request: GenerateRequest) -> GenerateResponse:
        records = await self.resolve_records(request)
        options = self.options_for(request)

        trojan: list[str] = []
        vless: list[str] = []
        for record in records:
            built = self._uri_builder.build(record, options)
            if built.trojan:
                trojan.append(built.trojan)
            if built.vless:
                vless.append(built.vless)

        logger.info(
            "Generated %d trojan and %d vless URIs for %d proxies",
            len(trojan),
            len(vless),
            len(records),
            extra={"item_count": len(records)},
        )
        return GenerateResponse(
            counts=SchemeCounts(trojan=len(trojan), vless=len(vless)),
            trojan=trojan,
            vless=vless,
            combined="\n".join(trojan + vless),
        )
