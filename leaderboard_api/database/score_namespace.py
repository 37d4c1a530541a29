from typing import List, Optional, Tuple
from redis.asyncio import Redis
from .patterns import escape_pattern

class ScoreNamespace:
    """One sorted set per activity, mapping username to its current score.

    Key layout: ``prefix + activity``.
    """

    def __init__(self, client: Redis, prefix: str):
        self.client = client
        self.prefix = prefix

    def key(self, activity: str) -> str:
        return f"{self.prefix}{activity}"

    def activity_of(self, key: str) -> Optional[str]:
        """Recover the activity name from a score-set key"""
        if not key.startswith(self.prefix):
            return None
        return key[len(self.prefix):]

    async def upsert(self, activity: str, username: str, score: float):
        await self.client.zadd(self.key(activity), {username: score})

    async def remove(self, activity: str, username: str) -> bool:
        return bool(await self.client.zrem(self.key(activity), username))

    async def exists(self, activity: str) -> bool:
        return bool(await self.client.exists(self.key(activity)))

    async def score(self, activity: str, username: str) -> Optional[float]:
        return await self.client.zscore(self.key(activity), username)

    async def scores(self, pairs: List[Tuple[str, str]]) -> List[Optional[float]]:
        """Read the score of many (activity, username) pairs in one round trip"""
        if not pairs:
            return []
        async with self.client.pipeline(transaction=False) as pipe:
            for activity, username in pairs:
                pipe.zscore(self.key(activity), username)
            return await pipe.execute()

    async def reverse_rank(self, activity: str, username: str) -> Optional[int]:
        """0-based position of the member on the descending board"""
        return await self.client.zrevrank(self.key(activity), username)

    async def count_above(self, activity: str, score: float) -> int:
        """Number of members whose score is strictly greater than ``score``"""
        return await self.client.zcount(self.key(activity), f"({score}", "+inf")

    async def range_desc(self, activity: str, start: int = 0, stop: int = -1) -> List[Tuple[str, float]]:
        return await self.client.zrevrange(self.key(activity), start, stop, withscores=True)

    async def range_asc(self, activity: str) -> List[Tuple[str, float]]:
        return await self.client.zrange(self.key(activity), 0, -1, withscores=True)

    async def activities(self) -> List[str]:
        """Every activity that currently has a score set"""
        names = []
        async for key in self.client.scan_iter(match=f"{escape_pattern(self.prefix)}*"):
            activity = self.activity_of(key)
            if activity is not None:
                names.append(activity)
        return sorted(names)
