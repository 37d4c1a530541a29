import asyncio
from typing import Optional
from redis.asyncio import Redis
from redis import exceptions as redis_exceptions
from ..config import store
from ..exceptions import StoreUnavailable
from ..logger import get_logger

logger = get_logger()

class RedisConnection:
    def __init__(self, client: Optional[Redis] = None):
        # An injected client is owned by the caller and never closed here
        self.client = client
        self._owns_client = client is None
        self._initialized = False
        self._init_lock = asyncio.Lock()

    async def initialize(self):
        """Create the Redis client and check that the server answers"""
        if self._initialized:
            return

        async with self._init_lock:
            if self._initialized:  # Double check after acquiring lock
                return

            if self.client is None:
                self.client = Redis.from_url(
                    store.url,
                    decode_responses=True,
                    socket_timeout=store.socket_timeout,
                    socket_connect_timeout=store.socket_connect_timeout,
                    client_name=store.client_name
                )

            try:
                await self.client.ping()
            except (redis_exceptions.ConnectionError, redis_exceptions.TimeoutError) as e:
                logger.error(f"Failed to connect to Redis at {store.url}: {e}")
                await self.close()
                raise StoreUnavailable(f"Redis unavailable: {e}") from e

            self._initialized = True
            logger.info("Redis connection initialized successfully")

    async def ping(self) -> bool:
        """Report whether the server currently answers PING"""
        if self.client is None:
            return False
        try:
            return bool(await self.client.ping())
        except (redis_exceptions.ConnectionError, redis_exceptions.TimeoutError) as e:
            logger.warning(f"Redis ping failed: {e}")
            return False

    async def close(self):
        """Close the Redis client"""
        if self.client is not None and self._owns_client:
            await self.client.aclose()
            self.client = None
        self._initialized = False
