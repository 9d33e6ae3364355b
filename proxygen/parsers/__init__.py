"""Source parsers: loose text, CSV text, and JSON, plus a registry."""

from proxygen.parsers.base import ProxyParser
from proxygen.parsers.json_parser import JsonProxyParser
from proxygen.parsers.registry import ParserRegistry, default_registry
from proxygen.parsers.text import CsvTextParser, LooseTextParser

__all__ = [
    "CsvTextParser",
    "JsonProxyParser",
    "LooseTextParser",
    "ParserRegistry",
    "ProxyParser",
    "default_registry",
]
