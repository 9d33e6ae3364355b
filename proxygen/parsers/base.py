"""Abstract base class for proxy source parsers.

Each parser turns one kind of raw source content into candidate records.
Parsers never validate: invalid addresses and ports are filtered later by the
normalizer, so a parser only has to decide what *looks like* a record.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from proxygen.models.records import CandidateRecord


class ProxyParser(ABC):
    """Abstract parser that all source-format parsers extend.

    Subclasses MUST set ``name`` as a class attribute and implement
    ``parse``.
    """

    name: str

    @abstractmethod
    def parse(self, raw: Any) -> list[CandidateRecord]:
        """Extract candidate records from *raw* source content.

        Parameters
        ----------
        raw:
            Text for line-oriented parsers, or a decoded JSON value for the
            JSON parser.

        Returns
        -------
        list[CandidateRecord]
            Records in source order. Unrecognised content is skipped, never
            raised on.
        """
        ...
