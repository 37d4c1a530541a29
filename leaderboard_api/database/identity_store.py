import hmac
from typing import List, Optional
from redis.asyncio import Redis
from .patterns import escape_pattern
from ..exceptions import AlreadyExists, InvalidCredentials, NotFound, store_guard
from ..models.data import Account
from ..logger import get_logger

logger = get_logger()

PASSWORD_FIELD = 'password'

class IdentityStore:
    """Accounts stored as one hash per user at ``prefix + username``.

    Only password hashes reach this class; it knows nothing about scores.
    """

    def __init__(self, client: Redis, prefix: str):
        self.client = client
        self.prefix = prefix

    def key(self, username: str) -> str:
        return f"{self.prefix}{username}"

    async def _verify(self, username: str, password_hash: str):
        stored = await self.client.hget(self.key(username), PASSWORD_FIELD)
        if stored is None:
            raise NotFound("username does not exist")
        if not hmac.compare_digest(stored, password_hash):
            logger.warning(f"Password mismatch for {username}")
            raise InvalidCredentials("invalid password")

    @store_guard
    async def create_account(self, username: str, password_hash: str) -> Account:
        created = await self.client.hsetnx(self.key(username), PASSWORD_FIELD, password_hash)
        if not created:
            raise AlreadyExists("username already exists")
        logger.info(f"Created account {username}")
        return Account(username)

    @store_guard
    async def verify_and_update(self, username: str, password_hash: str,
                                new_password_hash: Optional[str] = None) -> Account:
        await self._verify(username, password_hash)
        if new_password_hash:
            await self.client.hset(self.key(username), PASSWORD_FIELD, new_password_hash)
            logger.info(f"Updated password for {username}")
        return Account(username)

    @store_guard
    async def verify_and_delete(self, username: str, password_hash: str):
        await self._verify(username, password_hash)
        await self.client.delete(self.key(username))
        logger.info(f"Deleted account {username}")

    @store_guard
    async def list_accounts(self) -> List[str]:
        usernames = []
        async for key in self.client.scan_iter(match=f"{escape_pattern(self.prefix)}*"):
            usernames.append(key[len(self.prefix):])
        return sorted(usernames)
