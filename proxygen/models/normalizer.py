"""Record normalization: validate, deduplicate, and sort.

Transforms parser output (or client-submitted selections) into validated
``ProxyRecord`` objects:
- IP trimming and IPv4 validation
- Port coercion and range validation
- First-wins deduplication on ``ip:port``
- Label re-sanitization, country upper-casing
- Deterministic ordering: country, label (case-insensitive), ip (as a
  string), port

Invalid entries are dropped silently; callers decide whether an empty result
is an error.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from proxygen.models.records import CandidateRecord, ProxyRecord
from proxygen.validators.address import coerce_port, is_valid_ipv4, is_valid_port
from proxygen.validators.label import sanitize_label


def _fields(entry: Any) -> tuple[Any, Any, Any, Any] | None:
    """Pull (ip, port, label, country) out of any supported entry type."""
    if isinstance(entry, (CandidateRecord, ProxyRecord)):
        return entry.ip, entry.port, entry.label, entry.country
    if isinstance(entry, Mapping):
        return entry.get("ip"), entry.get("port"), entry.get("label"), entry.get("country")
    return None


def _clean_country(country: Any) -> str | None:
    if not country:
        return None
    cleaned = str(country).strip().upper()
    return cleaned or None


def to_record(entry: Any) -> ProxyRecord | None:
    """Validate a single entry, returning None if it is not a usable record."""
    fields = _fields(entry)
    if fields is None:
        return None
    raw_ip, raw_port, label, country = fields

    ip = str(raw_ip).strip() if raw_ip else ""
    if not is_valid_ipv4(ip):
        return None

    port = coerce_port(raw_port)
    if not is_valid_port(port):
        return None

    return ProxyRecord(
        ip=ip,
        port=port,
        label=sanitize_label(label),
        country=_clean_country(country),
    )


def sort_key(record: ProxyRecord) -> tuple[str, str, str, int]:
    """Ordering key: country, lower-cased label, ip string, port."""
    return (record.country or "", record.label.lower(), record.ip, record.port)


def normalize_records(entries: Iterable[Any]) -> list[ProxyRecord]:
    """Validate, deduplicate on ``ip:port`` (first wins), and sort *entries*.

    Idempotent: normalizing an already-normalized list returns it unchanged.
    """
    seen: set[str] = set()
    records: list[ProxyRecord] = []
    for entry in entries:
        record = to_record(entry)
        if record is None or record.key in seen:
            continue
        seen.add(record.key)
        records.append(record)

    records.sort(key=sort_key)
    return records
