from pydantic import BaseModel
from typing import List, Literal, Optional, Union

class ScoreEntryResponse(BaseModel):
    activity: str
    username: str
    score: Optional[Union[int, float]] = None
    timestamp: Optional[int] = None
    rank: Optional[int] = None

class SubmissionResponse(BaseModel):
    activity: str
    username: str
    score: Union[int, float]
    timestamp: int

class TokenResponse(BaseModel):
    token: str

class HealthResponse(BaseModel):
    status: Literal["healthy", "degraded"] = "healthy"
    uptime: float
    store: bool

def entries_response(entries) -> List[ScoreEntryResponse]:
    return [ScoreEntryResponse(**entry.to_dict()) for entry in entries]
