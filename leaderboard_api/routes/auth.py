from typing import List
from fastapi import APIRouter, Depends, Response
from ..core.dependencies import get_db
from ..core.security import hash_password, issue_token
from ..database import DatabaseManager
from ..models.auth import CredentialsRequest
from ..models.response import TokenResponse
from ..logger import get_logger

logger = get_logger()
router = APIRouter(prefix="/auth", tags=["auth"])

@router.get("", response_model=List[str])
async def list_users(db: DatabaseManager = Depends(get_db)):
    """List registered usernames."""
    return await db.users.list_accounts()

@router.post("", response_model=TokenResponse, status_code=201)
async def register(data: CredentialsRequest, db: DatabaseManager = Depends(get_db)):
    """
    Create an account and return a bearer token for it.

    - **username**: Case-insensitive account name, without ':'
    - **password**: Account password
    """
    account = await db.users.create_account(data.username, hash_password(data.password))
    logger.info(f"Registered user {account.username}")
    return TokenResponse(token=issue_token(account.username))

@router.put("", response_model=TokenResponse, status_code=201)
async def login(data: CredentialsRequest, db: DatabaseManager = Depends(get_db)):
    """
    Verify credentials, optionally change the password, and return a fresh token.

    - **newpassword**: Replacement password (optional)
    """
    new_hash = hash_password(data.newpassword) if data.newpassword else None
    account = await db.users.verify_and_update(data.username, hash_password(data.password), new_hash)
    return TokenResponse(token=issue_token(account.username))

@router.patch("", status_code=204)
async def unregister(data: CredentialsRequest, db: DatabaseManager = Depends(get_db)):
    """Delete the account and every score it submitted."""
    await db.users.verify_and_delete(data.username, hash_password(data.password))
    removed = await db.leaderboard.remove_scores(data.username)
    logger.info(f"Unregistered user {data.username}, removed {len(removed)} score entries")
    return Response(status_code=204)
