"""Configuration module: settings and proxy sources."""

from proxygen.config.settings import ProxygenSettings
from proxygen.config.sources import (
    DEFAULT_SOURCES,
    SourceDescriptor,
    SourceKind,
    TextFormat,
    load_sources,
    validate_sources,
)

__all__ = [
    "DEFAULT_SOURCES",
    "ProxygenSettings",
    "SourceDescriptor",
    "SourceKind",
    "TextFormat",
    "load_sources",
    "validate_sources",
]
