"""Proxy record models.

``CandidateRecord`` is what the parsers emit: fields straight from source
content, not yet validated. ``ProxyRecord`` is the validated, immutable value
produced by normalization and consumed by the URI builder.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class CandidateRecord:
    """Unvalidated (ip, port, label) triple extracted by a parser."""

    ip: Any
    port: Any
    label: str = ""
    country: str | None = None


class ProxyRecord(BaseModel):
    """A validated proxy endpoint. Identity is the ``(ip, port)`` pair."""

    model_config = ConfigDict(frozen=True)

    ip: str
    port: int = Field(ge=1, le=65535)
    label: str = ""
    country: str | None = None

    @property
    def key(self) -> str:
        return f"{self.ip}:{self.port}"

    def to_dict(self) -> dict:
        """Serialize for API responses, omitting ``country`` when absent."""
        return self.model_dump(exclude_none=True)
