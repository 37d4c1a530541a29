# --- Pydantic Models ---
import math
from pydantic import BaseModel, Field, field_validator
from typing import Union

def clean_activity(v: str) -> str:
    if not v.strip():
        raise ValueError('no activity given')
    return v.strip()

class ScoreRequest(BaseModel):
    activity: str = Field(..., min_length=1, max_length=100)
    score: Union[int, float]

    @field_validator('activity')
    @classmethod
    def validate_activity(cls, v):
        return clean_activity(v)

    @field_validator('score')
    @classmethod
    def validate_score(cls, v):
        if not math.isfinite(v):
            raise ValueError('score must be a finite number')
        return v

class ScoreRemoveRequest(BaseModel):
    activity: str = Field(..., min_length=1, max_length=100)

    @field_validator('activity')
    @classmethod
    def validate_activity(cls, v):
        return clean_activity(v)
