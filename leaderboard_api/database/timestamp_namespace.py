import time
from typing import Dict, List, Optional, Tuple
from redis.asyncio import Redis
from .patterns import escape_pattern
from ..models.data import to_timestamp

DELIMITER = ':'
FIELD = 'timestamp'

class TimestampNamespace:
    """One hash per (activity, username) holding the last submission time.

    Key layout: ``prefix + activity + ":" + username``. Usernames never contain
    the delimiter, so a key is split on its last ``":"``.
    """

    def __init__(self, client: Redis, prefix: str):
        self.client = client
        self.prefix = prefix

    def key(self, activity: str, username: str) -> str:
        return f"{self.prefix}{activity}{DELIMITER}{username}"

    def parse(self, key: str) -> Optional[Tuple[str, str]]:
        """Split a timestamp key back into (activity, username)"""
        if not key.startswith(self.prefix):
            return None
        activity, sep, username = key[len(self.prefix):].rpartition(DELIMITER)
        if not sep:
            return None
        return activity, username

    @staticmethod
    def now() -> int:
        return int(time.time() * 1000)

    async def touch(self, activity: str, username: str, timestamp: Optional[int] = None) -> int:
        """Store the submission time for the pair and return it"""
        if timestamp is None:
            timestamp = self.now()
        await self.client.hset(self.key(activity, username), FIELD, str(timestamp))
        return timestamp

    async def get(self, activity: str, username: str) -> Optional[int]:
        return to_timestamp(await self.client.hget(self.key(activity, username), FIELD))

    async def delete_keys(self, keys: List[str]) -> int:
        if not keys:
            return 0
        return await self.client.delete(*keys)

    async def scan(self, activity: Optional[str] = None, username: Optional[str] = None) -> List[str]:
        """List timestamp keys, optionally restricted to one activity and/or one user"""
        activity_part = escape_pattern(activity) if activity is not None else '*'
        username_part = escape_pattern(username) if username is not None else '*'
        pattern = f"{escape_pattern(self.prefix)}{activity_part}{DELIMITER}{username_part}"

        keys = []
        async for key in self.client.scan_iter(match=pattern):
            pair = self.parse(key)
            if pair is None:
                continue
            # '*' can swallow a delimiter, so re-check against the parsed pair
            if activity is not None and pair[0] != activity:
                continue
            if username is not None and pair[1] != username:
                continue
            keys.append(key)
        return keys

    async def read(self, keys: List[str]) -> Dict[Tuple[str, str], Optional[int]]:
        """Fetch the timestamps behind ``keys``, keyed by (activity, username)"""
        if not keys:
            return {}
        async with self.client.pipeline(transaction=False) as pipe:
            for key in keys:
                pipe.hget(key, FIELD)
            values = await pipe.execute()

        joined = {}
        for key, value in zip(keys, values):
            pair = self.parse(key)
            if pair is not None:
                joined[pair] = to_timestamp(value)
        return joined
