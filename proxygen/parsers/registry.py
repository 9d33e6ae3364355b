"""Pluggable parser registry.

Maps a source's (kind, text format) to the ``ProxyParser`` that understands
its content. Adding a new format requires only a parser subclass and a
``register()`` call.
"""

from __future__ import annotations

import logging

from proxygen.config.sources import SourceDescriptor, SourceKind, TextFormat
from proxygen.parsers.base import ProxyParser
from proxygen.parsers.json_parser import JsonProxyParser
from proxygen.parsers.text import CsvTextParser, LooseTextParser

logger = logging.getLogger(__name__)

ParserKey = tuple[SourceKind, TextFormat | None]


class ParserRegistry:
    """Registry that maps source formats to their parser implementations."""

    def __init__(self) -> None:
        self._parsers: dict[ParserKey, ProxyParser] = {}

    def register(
        self,
        kind: SourceKind,
        parser: ProxyParser,
        text_format: TextFormat | None = None,
    ) -> None:
        """Register *parser* for sources of *kind* (and *text_format* for text).

        Raises
        ------
        ValueError
            If a parser for the same key is already registered.
        """
        key: ParserKey = (kind, text_format if kind is SourceKind.TEXT else None)
        if key in self._parsers:
            raise ValueError(f"Parser for {self._describe(key)} is already registered")
        self._parsers[key] = parser
        logger.debug("Registered %s parser for %s", parser.name, self._describe(key))

    def for_source(self, source: SourceDescriptor) -> ProxyParser:
        """Return the parser for *source*.

        Raises
        ------
        KeyError
            If no parser handles the source's format (including ``multi``
            sources, which have no content of their own).
        """
        key: ParserKey = (
            source.kind,
            source.text_format if source.kind is SourceKind.TEXT else None,
        )
        try:
            return self._parsers[key]
        except KeyError:
            raise KeyError(f"No parser registered for {self._describe(key)}") from None

    @staticmethod
    def _describe(key: ParserKey) -> str:
        kind, text_format = key
        return kind.value if text_format is None else f"{kind.value}/{text_format.value}"


def default_registry() -> ParserRegistry:
    """Registry with the built-in loose text, CSV text, and JSON parsers."""
    loose = LooseTextParser()
    registry = ParserRegistry()
    registry.register(SourceKind.TEXT, loose, TextFormat.LOOSE)
    registry.register(SourceKind.TEXT, CsvTextParser(), TextFormat.CSV)
    registry.register(SourceKind.JSON, JsonProxyParser(text_parser=loose))
    return registry
