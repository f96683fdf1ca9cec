"""Cache: in-process TTL cache used by record stores for get-by-id reads."""

from lendcrm.infrastructure.cache.cache_protocol import RecordCacheProtocol
from lendcrm.infrastructure.cache.memory_cache import RecordCache

__all__ = ["RecordCache", "RecordCacheProtocol"]
