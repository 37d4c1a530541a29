from typing import Optional, Union

Score = Union[int, float]

def to_score(value) -> Optional[Score]:
    """Convert a Redis score to a number, keeping integral scores as int"""
    if value is None:
        return None
    value = float(value)
    return int(value) if value.is_integer() else value

def to_timestamp(value) -> Optional[int]:
    """Parse a stored submission time, returning None when it is absent or garbled"""
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None

class ScoreEntry:
    __slots__ = ('activity', 'username', 'score', 'timestamp', 'rank')
    def __init__(self, activity: str, username: str, score: Optional[Score] = None,
                 timestamp: Optional[int] = None, rank: Optional[int] = None):
        self.activity = activity
        self.username = username
        self.score = score
        self.timestamp = timestamp
        self.rank = rank

    def to_dict(self):
        return {
            'activity': self.activity,
            'username': self.username,
            'score': self.score,
            'timestamp': self.timestamp,
            'rank': self.rank
        }

    def __eq__(self, other):
        if not isinstance(other, ScoreEntry):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (f"ScoreEntry(activity={self.activity!r}, username={self.username!r}, "
                f"score={self.score!r}, timestamp={self.timestamp!r}, rank={self.rank!r})")

class Account:
    __slots__ = ('username',)
    def __init__(self, username: str):
        self.username = username

    def to_dict(self):
        return {'username': self.username}
