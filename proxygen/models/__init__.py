"""Public models for the proxygen service."""

from proxygen.models.normalizer import normalize_records, to_record
from proxygen.models.records import CandidateRecord, ProxyRecord
from proxygen.models.requests import GenerateRequest, UriOptions
from proxygen.models.responses import GenerateResponse, ProxyListResponse, SchemeCounts

__all__ = [
    "CandidateRecord",
    "GenerateRequest",
    "GenerateResponse",
    "ProxyListResponse",
    "ProxyRecord",
    "SchemeCounts",
    "UriOptions",
    "normalize_records",
    "to_record",
]
