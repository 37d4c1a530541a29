import math
from numbers import Real
from typing import Dict, List, Optional, Tuple
from redis.asyncio import Redis
from .score_namespace import ScoreNamespace
from .timestamp_namespace import DELIMITER, TimestampNamespace
from ..exceptions import InvalidArgument, NotFound, store_guard
from ..models.data import ScoreEntry, to_score
from ..logger import get_logger

logger = get_logger()

def assign_ranks(entries: List[ScoreEntry], start: int = 1) -> List[ScoreEntry]:
    """Give ``entries`` consecutive 1-based ranks in their current order"""
    for offset, entry in enumerate(entries):
        entry.rank = start + offset
    return entries

class RankingEngine:
    """Leaderboard queries over the score and timestamp namespaces.

    A score entry is one logical row split across two keys: the member of the
    activity's sorted set and the pair's timestamp hash. The two writes are not
    atomic, so every read treats a missing timestamp as unknown and a missing
    score as an absent entry.
    """

    def __init__(self, client: Redis, score_prefix: str, timestamp_prefix: str):
        self.scores = ScoreNamespace(client, score_prefix)
        self.timestamps = TimestampNamespace(client, timestamp_prefix)

    @staticmethod
    def _check_score(score):
        if isinstance(score, bool) or not isinstance(score, Real):
            raise InvalidArgument("score must be a number")
        if not math.isfinite(score):
            raise InvalidArgument("score must be a finite number")

    @staticmethod
    def _check_username(username: str):
        if not username:
            raise InvalidArgument("no username given")
        if DELIMITER in username:
            raise InvalidArgument(f"username must not contain '{DELIMITER}'")

    @store_guard
    async def submit_score(self, activity: str, username: str, score: float) -> ScoreEntry:
        """Record ``score`` as the user's current score in ``activity``.

        The timestamp hash is written first, then the sorted-set member.
        """
        if not activity:
            raise InvalidArgument("no activity given")
        self._check_username(username)
        self._check_score(score)

        timestamp = await self.timestamps.touch(activity, username)
        await self.scores.upsert(activity, username, score)
        logger.info(f"Recorded score {score} for {username} in {activity}")
        return ScoreEntry(activity, username, to_score(score), timestamp)

    @store_guard
    async def remove_scores(self, username: str, activity: Optional[str] = None) -> List[Tuple[str, str]]:
        """Remove the user's entry in ``activity``, or in every activity when omitted.

        Returns the (activity, username) pairs that existed in either namespace.
        """
        self._check_username(username)
        removed = set()

        if activity is not None:
            if await self.timestamps.delete_keys([self.timestamps.key(activity, username)]):
                removed.add((activity, username))
        else:
            ts_keys = await self.timestamps.scan(username=username)
            await self.timestamps.delete_keys(ts_keys)
            for key in ts_keys:
                removed.add(self.timestamps.parse(key))

        activities = [activity] if activity is not None else await self.scores.activities()
        for name in activities:
            if await self.scores.remove(name, username):
                removed.add((name, username))

        if removed:
            logger.info(f"Removed {len(removed)} score entries for {username}")
        return sorted(removed)

    @store_guard
    async def get_score_and_rank(self, activity: str, username: str) -> ScoreEntry:
        """Score, submission time and descending rank of one user in one activity.

        An existing activity without an entry for the user yields a partial
        entry whose score, timestamp and rank are all None.
        """
        if not await self.scores.exists(activity):
            raise NotFound(f"no activity '{activity}'")

        score = await self.scores.score(activity, username)
        if score is None:
            logger.debug(f"No score for {username} in {activity}")
            return ScoreEntry(activity, username)

        rank = await self.scores.count_above(activity, score) + 1
        timestamp = await self.timestamps.get(activity, username)
        return ScoreEntry(activity, username, to_score(score), timestamp, rank)

    async def _board_slice(self, activity: str, start: int, stop: int) -> List[ScoreEntry]:
        members = await self.scores.range_desc(activity, start, stop)
        joined = await self.timestamps.read(
            [self.timestamps.key(activity, username) for username, _ in members]
        )
        entries = [
            ScoreEntry(activity, username, to_score(score), joined.get((activity, username)))
            for username, score in members
        ]
        return assign_ranks(entries, start=start + 1)

    @store_guard
    async def get_activity_board(self, activity: str) -> List[ScoreEntry]:
        """Every entry of ``activity``, highest score first.

        Equal scores keep the store's native order (reverse lexicographic by
        username for a descending range).
        """
        if not await self.scores.exists(activity):
            raise NotFound(f"no activity '{activity}'")
        return await self._board_slice(activity, 0, -1)

    @store_guard
    async def get_activity_top(self, activity: str, n: int) -> List[ScoreEntry]:
        """The ``n`` best entries of ``activity``; n <= 0 returns the whole board"""
        if not await self.scores.exists(activity):
            raise NotFound(f"no activity '{activity}'")
        stop = n - 1 if n > 0 else -1
        return await self._board_slice(activity, 0, stop)

    @store_guard
    async def get_users_around_user(self, activity: str, username: str, n: int) -> List[ScoreEntry]:
        """A window of ``n`` entries centered on ``username``.

        The window is clamped at the top of the board rather than shifted, so
        it is shorter for users near rank 1.
        """
        if n <= 0:
            raise InvalidArgument("window size must be positive")
        if not await self.scores.exists(activity):
            raise NotFound(f"no activity '{activity}'")

        position = await self.scores.reverse_rank(activity, username)
        if position is None:
            raise NotFound(f"no score for '{username}' in activity '{activity}'")

        first = position - n // 2
        start = max(0, first)
        stop = first + n - 1
        return await self._board_slice(activity, start, stop)

    @store_guard
    async def get_all_activities(self) -> List[ScoreEntry]:
        """Every entry of every activity, ranked globally.

        Sorted by score descending, then activity, then username.
        """
        entries = []
        for activity in await self.scores.activities():
            for username, score in await self.scores.range_asc(activity):
                entries.append(ScoreEntry(activity, username, to_score(score)))

        joined = await self.timestamps.read(await self.timestamps.scan())
        for entry in entries:
            entry.timestamp = joined.get((entry.activity, entry.username))

        entries.sort(key=lambda e: (-e.score, e.activity, e.username))
        return assign_ranks(entries)

    async def get_global_top(self, n: int) -> List[ScoreEntry]:
        """The first ``n`` entries of the global ranking"""
        entries = await self.get_all_activities()
        return entries[:n] if n > 0 else entries

    @store_guard
    async def get_user_activities(self, username: str) -> List[ScoreEntry]:
        """The user's entries across activities, ranked among themselves.

        Activities are discovered through the user's timestamp records. Ties
        on score are broken by activity name only.
        """
        joined: Dict[Tuple[str, str], Optional[int]] = await self.timestamps.read(
            await self.timestamps.scan(username=username)
        )
        pairs = sorted(joined)
        scores = await self.scores.scores(pairs)

        entries = []
        for (activity, _), score in zip(pairs, scores):
            if score is None:
                logger.debug(f"Timestamp without score for {username} in {activity}")
                continue
            entries.append(ScoreEntry(activity, username, to_score(score), joined[(activity, username)]))

        entries.sort(key=lambda e: (-e.score, e.activity))
        return assign_ranks(entries)
