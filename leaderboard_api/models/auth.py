from pydantic import BaseModel, Field, field_validator
from typing import Optional

class CredentialsRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    newpassword: Optional[str] = None

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        v = v.strip().lower()
        if not v:
            raise ValueError('no username given')
        if ':' in v:
            raise ValueError("username must not contain ':'")
        return v
