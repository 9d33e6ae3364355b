"""Descriptor URI generation."""

from proxygen.generator.uri_builder import (
    BuiltUris,
    CredentialFactory,
    UriBuilder,
    display_tag,
    encode_component,
    random_uuid,
)

__all__ = [
    "BuiltUris",
    "CredentialFactory",
    "UriBuilder",
    "display_tag",
    "encode_component",
    "random_uuid",
]
