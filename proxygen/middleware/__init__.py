"""Middleware package: error hierarchy and request ID."""

from proxygen.middleware.error_handler import (
    EmptyResultError,
    ProxygenError,
    SourceConfigError,
    SourceFetchError,
    register_error_handlers,
)
from proxygen.middleware.request_id import RequestIdMiddleware, request_id_var

__all__ = [
    "EmptyResultError",
    "ProxygenError",
    "RequestIdMiddleware",
    "SourceConfigError",
    "SourceFetchError",
    "register_error_handlers",
    "request_id_var",
]
