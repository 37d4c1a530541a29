from typing import Optional
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from .security import read_token
from ..database import DatabaseManager
from ..exceptions import InvalidCredentials
from ..logger import get_logger

logger = get_logger()
bearer = HTTPBearer(auto_error=False)

async def get_db(request: Request) -> DatabaseManager:
    """The manager created at startup; initialized lazily if startup was skipped"""
    db = request.app.state.db
    await db.initialize()
    return db

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer)
) -> str:
    if credentials is None:
        raise HTTPException(
            status_code=401,
            detail="Authorization Error: no bearer token given",
            headers={"WWW-Authenticate": "Bearer"}
        )
    try:
        return read_token(credentials.credentials)
    except InvalidCredentials as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise HTTPException(
            status_code=401,
            detail=f"Authorization Error: {e.message}",
            headers={"WWW-Authenticate": "Bearer"}
        )
