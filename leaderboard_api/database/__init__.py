from .base import DatabaseManager
from .connection import RedisConnection
from .identity_store import IdentityStore
from .ranking_engine import RankingEngine
from .score_namespace import ScoreNamespace
from .timestamp_namespace import TimestampNamespace
