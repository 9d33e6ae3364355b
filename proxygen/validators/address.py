"""IPv4 address and port validation for proxy records.

The address check is a shape regex plus a per-octet range check. Leading
zeros are accepted ("01.02.03.04" is valid) since only the numeric range of
each group is inspected.
"""

from __future__ import annotations

import re
from typing import Any

_IPV4_RE = re.compile(r"(?:[0-9]{1,3}\.){3}[0-9]{1,3}")
_INT_PREFIX_RE = re.compile(r"^\s*([+-]?[0-9]+)")

MIN_PORT = 1
MAX_PORT = 65535


def is_valid_ipv4(value: Any) -> bool:
    """Return True if *value* is a dotted-quad IPv4 string with octets in [0, 255]."""
    if not isinstance(value, str) or not _IPV4_RE.fullmatch(value):
        return False
    return all(0 <= int(octet) <= 255 for octet in value.split("."))


def is_valid_port(value: Any) -> bool:
    """Return True if *value* is an integer in [1, 65535]."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return MIN_PORT <= value <= MAX_PORT


def parse_int_prefix(value: str) -> int | None:
    """Parse the leading integer of a string, ignoring trailing garbage.

    ``"8443"`` and ``" 8443/tcp"`` both yield 8443; a string with no leading
    digits yields None.
    """
    match = _INT_PREFIX_RE.match(value)
    return int(match.group(1)) if match else None


def coerce_port(value: Any) -> int | None:
    """Coerce a loosely-typed port value to an int, or None if it isn't numeric.

    Accepts ints, integral floats, and strings holding a whole number
    (surrounding whitespace allowed). Booleans and fractional values are
    rejected.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        if number != number or number in (float("inf"), float("-inf")):
            return None
        return int(number) if number.is_integer() else None
    return None
