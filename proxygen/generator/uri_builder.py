"""Descriptor URI construction for trojan (WebSocket + TLS) and vless clients.

Every URI carries a freshly generated credential; the trojan and vless URIs
of the same record never share one. The backend address travels in the
WebSocket path as ``/<ip>-<port>`` and the display name in the fragment.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote

from proxygen.models.records import ProxyRecord
from proxygen.models.requests import UriOptions

# Characters JavaScript's encodeURIComponent leaves unescaped on top of quote()'s defaults
_URI_COMPONENT_SAFE = "!~*'()"


class CredentialFactory(Protocol):
    """Produces one random credential string per call."""

    def __call__(self) -> str: ...


def random_uuid() -> str:
    return str(uuid.uuid4())


def encode_component(value: str) -> str:
    """Percent-encode *value* as a URI component."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def display_tag(record: ProxyRecord) -> str:
    """``"<label> [<ip>]"``, or ``"[<ip>]"`` for unlabelled records."""
    return f"{record.label} [{record.ip}]" if record.label else f"[{record.ip}]"


@dataclass(frozen=True)
class BuiltUris:
    """URIs generated for one record; a scheme that was not requested is None."""

    trojan: str | None
    vless: str | None
    tag: str


class UriBuilder:
    """Builds trojan/vless URIs for proxy records.

    Parameters
    ----------
    credential_factory:
        Source of per-URI credentials (default: random UUID4).
    """

    def __init__(self, credential_factory: CredentialFactory = random_uuid) -> None:
        self._new_credential = credential_factory

    def build(self, record: ProxyRecord, options: UriOptions) -> BuiltUris:
        tag = display_tag(record)
        fragment = encode_component(tag)
        path = encode_component(f"/{record.ip}-{record.port}")
        host = options.host_header or options.sni
        authority = f"{options.front_domain}:{options.tls_port}"

        trojan = None
        if options.include_trojan:
            trojan = (
                f"trojan://{self._new_credential()}@{authority}/"
                f"?type=ws&host={host}&path={path}&security=tls&sni={options.sni}"
                f"#{fragment}"
            )

        vless = None
        if options.include_vless:
            vless = (
                f"vless://{self._new_credential()}@{authority}/"
                f"?type=ws&encryption=none&flow=&host={host}&path={path}"
                f"&security=tls&sni={options.sni}#{fragment}"
            )

        return BuiltUris(trojan=trojan, vless=vless, tag=tag)
