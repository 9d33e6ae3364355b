"""Request models for the generation endpoint and URI builder options."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GenerateRequest(BaseModel):
    """Body of ``POST /generate``.

    Every field is optional; absent values fall back to the configured
    defaults. ``selected`` is accepted as any JSON value: only a non-empty
    array counts as a selection, and entries that are not valid proxy records
    are dropped during normalization rather than rejected here.
    """

    model_config = ConfigDict(populate_by_name=True)

    source_key: str | None = Field(default=None, alias="sourceKey")
    front_domain: str | None = Field(default=None, alias="frontDomain")
    sni: str | None = None
    host_header: str | None = Field(default=None, alias="hostHeader")
    cf_tls_port: int | None = Field(default=None, alias="cfTlsPort", ge=1, le=65535)
    gen_trojan: bool | None = Field(default=None, alias="genTrojan")
    gen_vless: bool | None = Field(default=None, alias="genVless")
    selected: Any = None


@dataclass(frozen=True)
class UriOptions:
    """Connection parameters shared by every URI built in one request."""

    front_domain: str
    sni: str
    host_header: str = ""
    tls_port: int = 443
    include_trojan: bool = True
    include_vless: bool = True
