"""JSON source parser.

Proxy lists published as JSON come in several shapes: a bare array, an
object wrapping the array under ``list``/``items``/``proxies``, or a plain
key -> entry map. Entries are either objects with loosely-named fields or
strings holding a loose text line.
"""

from __future__ import annotations

from typing import Any

from proxygen.models.records import CandidateRecord
from proxygen.parsers.base import ProxyParser
from proxygen.parsers.text import DEFAULT_PORT, LooseTextParser
from proxygen.validators.address import parse_int_prefix
from proxygen.validators.label import sanitize_label

# Wrapper properties checked in order before falling back to the object's values
_COLLECTION_KEYS = ("list", "items", "proxies")

_IP_KEYS = ("ip", "address", "server", "host", "hostname", "domain")
_PORT_KEYS = ("port", "server_port", "p", "srv_port", "dstPort", "destinationPort")
_LABEL_KEYS = ("label", "name", "remark", "tag", "loc", "location", "country", "note")


def _first_truthy(entry: dict, keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = entry.get(key)
        if value:
            return value
    return None


def _entries(value: Any) -> list[Any]:
    """Locate the collection of proxy entries inside a decoded JSON value."""
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        for key in _COLLECTION_KEYS:
            if isinstance(value.get(key), list):
                return value[key]
        return list(value.values())
    return []


class JsonProxyParser(ProxyParser):
    """Parses decoded JSON payloads into candidate records."""

    name = "json"

    def __init__(self, text_parser: LooseTextParser | None = None) -> None:
        self._text_parser = text_parser or LooseTextParser()

    def parse(self, raw: Any) -> list[CandidateRecord]:
        records: list[CandidateRecord] = []
        for entry in _entries(raw):
            if not entry:
                continue
            if isinstance(entry, str):
                records.extend(self._text_parser.parse(entry))
            elif isinstance(entry, dict):
                record = self._parse_object(entry)
                if record is not None:
                    records.append(record)
        return records

    @staticmethod
    def _parse_object(entry: dict) -> CandidateRecord | None:
        ip = _first_truthy(entry, _IP_KEYS)
        if not ip:
            return None

        port = _first_truthy(entry, _PORT_KEYS)
        if isinstance(port, str):
            port = parse_int_prefix(port)
        if not port:
            port = DEFAULT_PORT

        label = _first_truthy(entry, _LABEL_KEYS) or ""
        return CandidateRecord(ip=ip, port=port, label=sanitize_label(label))
