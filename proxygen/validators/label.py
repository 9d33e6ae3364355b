"""Free-text label sanitization."""

from __future__ import annotations

import re
from typing import Any

_BRACKETS_RE = re.compile(r"[\[\]]")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_label(label: Any) -> str:
    """Strip ``[``/``]``, collapse whitespace runs to one space, and trim.

    ``None`` and empty values yield ``""``; other non-strings are stringified.
    Idempotent.
    """
    if not label:
        return ""
    text = label if isinstance(label, str) else str(label)
    text = _BRACKETS_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()
