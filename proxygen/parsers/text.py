"""Line-oriented text parsers.

Two distinct formats are seen in the wild and they are not interchangeable:

- ``LooseTextParser`` handles free-form lines such as
  ``203.0.113.5:8080 | Singapore Node`` where the port may be missing
  (defaults to 443) and whatever surrounds the address becomes the label.
- ``CsvTextParser`` handles ``ip,port,country,label`` rows; the country
  column is mandatory and the label may itself contain commas.
"""

from __future__ import annotations

import re
from typing import Any

from proxygen.models.records import CandidateRecord
from proxygen.parsers.base import ProxyParser
from proxygen.validators.address import parse_int_prefix
from proxygen.validators.label import sanitize_label

_LINE_SPLIT_RE = re.compile(r"\r?\n")

# IPv4 followed by a dash/colon/space separator and a 2-5 digit port
_IP_PORT_RE = re.compile(r"((?:[0-9]{1,3}\.){3}[0-9]{1,3})\s*[-:\s]\s*([0-9]{2,5})")
_IP_RE = re.compile(r"((?:[0-9]{1,3}\.){3}[0-9]{1,3})")
_SEPARATOR_RUN_RE = re.compile(r"[|,;]+")

DEFAULT_PORT = 443
_MIN_LINE_LENGTH = 4


def _lines(text: Any) -> list[str]:
    return _LINE_SPLIT_RE.split(str(text))


def _label_without(line: str, matched: str) -> str:
    """Remove the address text from *line* and turn the rest into a label."""
    rest = line.replace(matched, "", 1)
    rest = _SEPARATOR_RUN_RE.sub(" ", rest).strip()
    return sanitize_label(rest)


class LooseTextParser(ProxyParser):
    """Parses loose ``ip[:port] label`` lines."""

    name = "loose"

    def parse(self, raw: Any) -> list[CandidateRecord]:
        records: list[CandidateRecord] = []
        for line in _lines(raw):
            record = self.parse_line(line)
            if record is not None:
                records.append(record)
        return records

    @staticmethod
    def parse_line(line: str) -> CandidateRecord | None:
        """Parse a single line, or return None if it holds no address."""
        line = line.strip()
        if not line or line.startswith("#") or len(line) < _MIN_LINE_LENGTH:
            return None

        match = _IP_PORT_RE.search(line)
        if match:
            return CandidateRecord(
                ip=match.group(1),
                port=int(match.group(2)),
                label=_label_without(line, match.group(0)),
            )

        match = _IP_RE.search(line)
        if match:
            return CandidateRecord(
                ip=match.group(1),
                port=DEFAULT_PORT,
                label=_label_without(line, match.group(0)),
            )
        return None


class CsvTextParser(ProxyParser):
    """Parses ``ip,port,country,label`` rows."""

    name = "csv"

    def parse(self, raw: Any) -> list[CandidateRecord]:
        records: list[CandidateRecord] = []
        for line in _lines(raw):
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            parts = line.split(",")
            if len(parts) < 4:
                continue

            ip = parts[0].strip()
            port = parse_int_prefix(parts[1])
            country = parts[2].strip().upper()
            label = sanitize_label(",".join(parts[3:]).strip())

            if ip and port and country:
                records.append(
                    CandidateRecord(ip=ip, port=port, label=label, country=country)
                )
        return records
