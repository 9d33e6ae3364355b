"""Unit tests for the generation service."""

from __future__ import annotations

import httpx
import pytest

from proxygen.config.settings import ProxygenSettings
from proxygen.generator.uri_builder import UriBuilder
from proxygen.middleware.error_handler import EmptyResultError, SourceFetchError
from proxygen.models.requests import GenerateRequest
from proxygen.services.generation_service import GenerationService
from proxygen.sources.fetcher import SourceFetcher

from conftest import TXT_URL, sequential_credentials


@pytest.fixture
def service(fetcher: SourceFetcher, settings: ProxygenSettings) -> GenerationService:
    return GenerationService(
        fetcher=fetcher,
        uri_builder=UriBuilder(sequential_credentials()),
        settings=settings,
    )


class TestOptions:
    def test_defaults_from_settings(self, service: GenerationService):
        options = service.options_for(GenerateRequest())
        assert options.front_domain == "cdn.example.com"
        assert options.sni == "edge.example.com"
        assert options.host_header == ""
        assert options.tls_port == 443
        assert options.include_trojan is True
        assert options.include_vless is True

    def test_request_overrides(self, service: GenerationService):
        request = GenerateRequest.model_validate(
            {
                "frontDomain": "front.test",
                "sni": "sni.test",
                "hostHeader": "host.test",
                "cfTlsPort": 2087,
                "genTrojan": False,
            }
        )
        options = service.options_for(request)
        assert options.front_domain == "front.test"
        assert options.sni == "sni.test"
        assert options.host_header == "host.test"
        assert options.tls_port == 2087
        assert options.include_trojan is False
        assert options.include_vless is True

    def test_blank_strings_use_defaults(self, service: GenerationService):
        request = GenerateRequest.model_validate({"frontDomain": "", "sni": ""})
        options = service.options_for(request)
        assert options.front_domain == "cdn.example.com"
        assert options.sni == "edge.example.com"


class TestGenerate:
    @pytest.mark.asyncio
    async def test_selected_records_used_without_fetching(
        self, service: GenerationService, transport
    ):
        request = GenerateRequest(selected=[{"ip": "8.8.8.8", "port": 443, "label": "Test"}])
        response = await service.generate(request)

        assert response.ok is True
        assert response.counts.trojan == 1
        assert response.counts.vless == 1
        assert response.combined == "\n".join(response.trojan + response.vless)
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_invalid_selection_raises_empty_result(self, service: GenerationService):
        request = GenerateRequest(selected=[{"ip": "999.1.1.1", "port": 443}, "junk"])
        with pytest.raises(EmptyResultError, match="Selected proxies are invalid"):
            await service.generate(request)

    @pytest.mark.asyncio
    async def test_falls_back_to_source(self, service: GenerationService):
        response = await service.generate(GenerateRequest(sourceKey="txt"))
        assert response.counts.trojan == 3
        assert response.counts.vless == 3
        # Output follows normalized order
        assert "%2F192.0.2.1-443" in response.trojan[0]

    @pytest.mark.asyncio
    async def test_empty_selected_list_falls_back_to_default_source(
        self, service: GenerationService
    ):
        response = await service.generate(GenerateRequest(selected=[]))
        assert response.counts.trojan == 5

    @pytest.mark.asyncio
    async def test_non_list_selection_falls_back_to_source(self, service: GenerationService):
        request = GenerateRequest(sourceKey="txt", selected={"ip": "8.8.8.8", "port": 443})
        response = await service.generate(request)
        assert response.counts.trojan == 3

    @pytest.mark.asyncio
    async def test_empty_source_raises(self, test_sources, cache, make_transport, settings):
        transport = make_transport({TXT_URL: lambda: httpx.Response(200, text="# empty\n")})
        service = GenerationService(
            fetcher=SourceFetcher(test_sources, cache, transport=transport),
            uri_builder=UriBuilder(),
            settings=settings,
        )
        with pytest.raises(EmptyResultError, match="empty or could not be fetched"):
            await service.generate(GenerateRequest(sourceKey="txt"))

    @pytest.mark.asyncio
    async def test_fetch_error_propagates(self, test_sources, cache, make_transport, settings):
        transport = make_transport({TXT_URL: lambda: httpx.Response(500)})
        service = GenerationService(
            fetcher=SourceFetcher(test_sources, cache, transport=transport),
            uri_builder=UriBuilder(),
            settings=settings,
        )
        with pytest.raises(SourceFetchError):
            await service.generate(GenerateRequest(sourceKey="txt"))

    @pytest.mark.asyncio
    async def test_no_schemes_requested(self, service: GenerationService):
        request = GenerateRequest(
            selected=[{"ip": "8.8.8.8", "port": 443}], genTrojan=False, genVless=False
        )
        response = await service.generate(request)
        assert response.counts.trojan == 0
        assert response.counts.vless == 0
        assert response.combined == ""
