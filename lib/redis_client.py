# =============================================================================
# lib/redis_client.py - Redis Key-Value Wrapper
# =============================================================================
# A small wrapper over redis-py exposing exactly what the auth session
# manager needs: get, set-with-expiry, delete and a liveness ping.
#
# Expiry is enforced by Redis itself (SETEX); nothing in the application
# sweeps expired keys. Each call is a single atomic per-key command, and the
# underlying connection pool is safe to share between request threads.
#
# Usage:
#   redis_client = RedisClient.from_url(settings.REDIS_URL)
#   redis_client.set("auth_<token>", user_id, ttl_seconds=86400)
#   redis_client.close()
# =============================================================================

import logging

import redis

logger = logging.getLogger(__name__)


class RedisClient:
    """Key-value store with per-key expiry backed by Redis."""

    def __init__(self, client: redis.Redis):
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisClient":
        """Create a client whose replies are decoded to str."""
        client = redis.Redis.from_url(url, decode_responses=True)
        logger.info(f"Redis client created for {url.split('@')[-1] if '@' in url else url}")
        return cls(client)

    def ping(self) -> bool:
        """Return True if Redis answers PING."""
        try:
            return bool(self._client.ping())
        except redis.RedisError as e:
            logger.warning(f"Redis ping failed: {e}")
            return False

    def get(self, key: str) -> str | None:
        return self._client.get(key)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._client.setex(key, ttl_seconds, value)

    def delete(self, key: str) -> bool:
        """Delete a key. Returns True if it existed."""
        return self._client.delete(key) > 0

    def close(self) -> None:
        self._client.close()
        logger.info("Redis client closed")
