"""Proxy list ingestion and trojan/vless descriptor URI generation service."""

__version__ = "1.0.0"
