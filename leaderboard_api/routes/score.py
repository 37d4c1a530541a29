from typing import List
from fastapi import APIRouter, Depends, Response
from ..core.dependencies import get_current_user, get_db
from ..database import DatabaseManager
from ..models.score import ScoreRemoveRequest, ScoreRequest
from ..models.response import ScoreEntryResponse, SubmissionResponse, entries_response
from ..logger import get_logger

logger = get_logger()
router = APIRouter(prefix="/score", tags=["score"])

@router.get("", response_model=List[ScoreEntryResponse])
async def my_scores(username: str = Depends(get_current_user), db: DatabaseManager = Depends(get_db)):
    """Scores of the authenticated user across all activities."""
    return entries_response(await db.leaderboard.get_user_activities(username))

@router.post("", response_model=SubmissionResponse, status_code=201)
async def submit_score(
    data: ScoreRequest,
    username: str = Depends(get_current_user),
    db: DatabaseManager = Depends(get_db)
):
    """
    Submit the authenticated user's score for an activity.

    - **activity**: Activity name; created on first submission
    - **score**: Numeric score, replacing any previous one
    """
    entry = await db.leaderboard.submit_score(data.activity, username, data.score)
    return SubmissionResponse(
        activity=entry.activity,
        username=entry.username,
        score=entry.score,
        timestamp=entry.timestamp
    )

@router.patch("", status_code=204)
async def remove_score(
    data: ScoreRemoveRequest,
    username: str = Depends(get_current_user),
    db: DatabaseManager = Depends(get_db)
):
    """Remove the authenticated user's score from one activity."""
    await db.leaderboard.remove_scores(username, data.activity)
    return Response(status_code=204)

@router.delete("", status_code=204)
async def remove_all_scores(username: str = Depends(get_current_user), db: DatabaseManager = Depends(get_db)):
    """Remove the authenticated user's scores from every activity."""
    removed = await db.leaderboard.remove_scores(username)
    logger.info(f"Removed {len(removed)} score entries for {username}")
    return Response(status_code=204)
