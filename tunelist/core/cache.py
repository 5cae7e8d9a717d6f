# ============================================================================
# FILE: tunelist/core/cache.py
# ============================================================================
import redis
import json
from typing import Optional, Any
from tunelist.config import settings
import logging

logger = logging.getLogger(__name__)


class RedisCache:
    """JSON value cache on Redis; every call is a no-op when Redis is down"""

    def __init__(self, url: Optional[str] = None):
        self.url = url or settings.REDIS_URL
        self._client = None
        self._connected = False

    @property
    def redis_client(self):
        # Connect on first use so importing the app never touches the network
        if not self._connected:
            self._connected = True
            try:
                client = redis.from_url(self.url, decode_responses=True)
                client.ping()
                self._client = client
                logger.info("Redis connection established")
            except redis.RedisError as e:
                logger.warning(f"Redis connection failed: {e}. Caching disabled.")
                self._client = None
        return self._client

    def set_cache(self, key: str, value: Any, expire: Optional[int] = None) -> bool:
        """Set a cache value with optional expiration"""
        client = self.redis_client
        if not client:
            return False

        try:
            serialized = json.dumps(value)
            if expire:
                client.setex(key, expire, serialized)
            else:
                client.set(key, serialized)
            return True
        except (redis.RedisError, TypeError) as e:
            logger.error(f"Cache set error: {e}")
            return False

    def get_cache(self, key: str) -> Optional[Any]:
        client = self.redis_client
        if not client:
            return None

        try:
            value = client.get(key)
            if value:
                return json.loads(value)
            return None
        except (redis.RedisError, ValueError) as e:
            logger.error(f"Cache get error: {e}")
            return None


# Singleton instance
cache = RedisCache()
