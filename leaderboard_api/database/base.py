from typing import Optional
from redis.asyncio import Redis
from .connection import RedisConnection
from .identity_store import IdentityStore
from .ranking_engine import RankingEngine
from ..config import namespaces
from ..logger import get_logger

logger = get_logger()

class DatabaseManager:
    """Owns the Redis connection and the components built on top of it"""

    def __init__(self, client: Optional[Redis] = None,
                 user_prefix: str = namespaces.user,
                 activity_prefix: str = namespaces.activity,
                 timestamp_prefix: str = namespaces.timestamp):
        self.connection = RedisConnection(client)
        self.user_prefix = user_prefix
        self.activity_prefix = activity_prefix
        self.timestamp_prefix = timestamp_prefix
        self.leaderboard = None
        self.users = None
        self._initialized = False

    async def initialize(self):
        """Initialize all components"""
        if self._initialized:
            return

        try:
            await self.connection.initialize()

            client = self.connection.client
            self.leaderboard = RankingEngine(client, self.activity_prefix, self.timestamp_prefix)
            self.users = IdentityStore(client, self.user_prefix)

            self._initialized = True
            logger.info("Database manager initialized successfully")
        except Exception as e:
            logger.error(f"Failed to initialize database manager: {e}")
            await self.close()
            raise

    async def ping(self) -> bool:
        return await self.connection.ping()

    async def close(self):
        """Close the Redis connection"""
        await self.connection.close()
        self.leaderboard = None
        self.users = None
        self._initialized = False
