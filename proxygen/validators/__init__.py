"""Validation helpers for proxy addresses, ports, and labels."""

from proxygen.validators.address import (
    coerce_port,
    is_valid_ipv4,
    is_valid_port,
    parse_int_prefix,
)
from proxygen.validators.label import sanitize_label

__all__ = [
    "coerce_port",
    "is_valid_ipv4",
    "is_valid_port",
    "parse_int_prefix",
    "sanitize_label",
]
