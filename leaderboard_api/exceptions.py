import functools
from redis import exceptions as redis_exceptions


class LeaderboardError(Exception):
    """Base class for every error the ranking core and identity store raise"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(LeaderboardError):
    """An activity, score entry or account was required but is absent"""


class AlreadyExists(LeaderboardError):
    """An account with the same username already exists"""


class InvalidCredentials(LeaderboardError):
    """The supplied password hash does not match the stored one"""


class InvalidArgument(LeaderboardError):
    """A required field is missing or malformed"""


class StoreUnavailable(LeaderboardError):
    """The Redis server cannot be reached"""


def store_guard(func):
    """Translate Redis connectivity failures into StoreUnavailable.

    Applied to the public coroutine methods of the store-facing components.
    Errors are not retried here.
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (redis_exceptions.ConnectionError, redis_exceptions.TimeoutError) as e:
            raise StoreUnavailable(f"Redis unavailable: {e}") from e
    return wrapper
