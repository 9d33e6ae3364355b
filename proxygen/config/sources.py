"""Proxy source models and YAML loader.

Provides typed Pydantic models for the configured proxy sources and a loader
that parses the YAML config into those models. Leaf sources (``text`` /
``json``) point at a remote document; ``multi`` sources merge other sources
by key.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, model_validator

from proxygen.middleware.error_handler import SourceConfigError

logger = logging.getLogger(__name__)


class SourceKind(str, Enum):
    """How a source's content is obtained and parsed."""

    TEXT = "text"
    JSON = "json"
    MULTI = "multi"


class TextFormat(str, Enum):
    """Line format of a ``text`` source."""

    LOOSE = "loose"  # "ip:port label" style log lines
    CSV = "csv"  # "ip,port,country,label" rows


class SourceDescriptor(BaseModel):
    """A single named proxy source."""

    key: str = Field(min_length=1)
    name: str = ""
    kind: SourceKind
    url: str | None = None
    text_format: TextFormat = TextFormat.LOOSE
    members: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_kind_fields(self) -> "SourceDescriptor":
        if not self.name:
            self.name = self.key
        if self.kind is SourceKind.MULTI:
            if not self.members:
                raise ValueError(f"multi source '{self.key}' needs at least one member")
        elif not self.url:
            raise ValueError(f"{self.kind.value} source '{self.key}' needs a url")
        return self

    @property
    def is_composite(self) -> bool:
        return self.kind is SourceKind.MULTI


_UPSTREAM = "https://raw.githubusercontent.com/mrzero0nol/My-v2ray/refs/heads/main"

DEFAULT_SOURCES: tuple[SourceDescriptor, ...] = (
    SourceDescriptor(
        key="all",
        name="All sources (merged)",
        kind=SourceKind.MULTI,
        members=["txt", "json"],
    ),
    SourceDescriptor(
        key="txt",
        name="proxyList.txt (raw)",
        kind=SourceKind.TEXT,
        url=f"{_UPSTREAM}/proxyList.txt",
    ),
    SourceDescriptor(
        key="json",
        name="KvProxyList.json",
        kind=SourceKind.JSON,
        url=f"{_UPSTREAM}/KvProxyList.json",
    ),
)


def validate_sources(sources: list[SourceDescriptor]) -> None:
    """Check that keys are unique, members exist, and there are no cycles.

    Raises
    ------
    SourceConfigError
        On any inconsistency.
    """
    if not sources:
        raise SourceConfigError("At least one proxy source must be configured")

    by_key: dict[str, SourceDescriptor] = {}
    for source in sources:
        if source.key in by_key:
            raise SourceConfigError(f"Duplicate proxy source key '{source.key}'")
        by_key[source.key] = source

    for source in sources:
        for member in source.members:
            if member not in by_key:
                raise SourceConfigError(
                    f"Source '{source.key}' references unknown member '{member}'"
                )

    def visit(key: str, trail: tuple[str, ...]) -> None:
        if key in trail:
            cycle = " -> ".join((*trail, key))
            raise SourceConfigError(f"Proxy source cycle detected: {cycle}")
        for member in by_key[key].members:
            visit(member, (*trail, key))

    for source in sources:
        if source.is_composite:
            visit(source.key, ())


def load_sources(yaml_path: str) -> list[SourceDescriptor]:
    """Parse a sources YAML file into typed SourceDescriptor objects.

    Args:
        yaml_path: Path to the YAML configuration file.

    Returns:
        The configured sources in file order. If the file is missing or
        unparseable, the built-in defaults are returned. Individually invalid
        entries are logged and skipped.

    Raises:
        SourceConfigError: If the surviving entries reference unknown members
            or form a cycle.
    """
    path = Path(yaml_path)

    if not path.exists():
        logger.warning("Sources file not found at %s, using built-in defaults", yaml_path)
        return list(DEFAULT_SOURCES)

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error("Failed to parse sources YAML at %s: %s", yaml_path, exc)
        return list(DEFAULT_SOURCES)

    if not isinstance(raw, dict) or not isinstance(raw.get("sources"), list):
        logger.warning("Sources YAML missing 'sources' list, using built-in defaults")
        return list(DEFAULT_SOURCES)

    sources: list[SourceDescriptor] = []
    for index, entry in enumerate(raw["sources"]):
        try:
            sources.append(SourceDescriptor.model_validate(entry))
        except Exception as exc:
            logger.error("Invalid source entry #%d: %s, skipping", index, exc)

    if not sources:
        logger.warning("No valid sources in %s, using built-in defaults", yaml_path)
        return list(DEFAULT_SOURCES)

    validate_sources(sources)
    logger.info("Loaded %d proxy sources from %s", len(sources), yaml_path)
    return sources
