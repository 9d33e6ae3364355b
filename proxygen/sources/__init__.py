"""Source retrieval package: TTL cache and fetcher."""

from proxygen.sources.cache import CacheEntry, TtlCache
from proxygen.sources.fetcher import SourceFetcher

__all__ = ["CacheEntry", "SourceFetcher", "TtlCache"]
