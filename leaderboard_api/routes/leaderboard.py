from typing import List
from fastapi import APIRouter, Depends, Path
from ..core.dependencies import get_current_user, get_db
from ..database import DatabaseManager
from ..exceptions import InvalidArgument
from ..models.response import ScoreEntryResponse, entries_response
from ..logger import get_logger

logger = get_logger()
# Global routes are declared first, so an activity named "global" is shadowed
router = APIRouter(prefix="/leaderboard", tags=["leaderboard"], dependencies=[Depends(get_current_user)])

def positive_count(count: int) -> int:
    if count <= 0:
        raise InvalidArgument("invalid top count")
    return count

@router.get("/global", response_model=List[ScoreEntryResponse])
async def get_global(db: DatabaseManager = Depends(get_db)):
    """Every entry of every activity, ranked globally."""
    entries = await db.leaderboard.get_all_activities()
    logger.info(f"Retrieved {len(entries)} global entries")
    return entries_response(entries)

@router.get("/global/top/{count}", response_model=List[ScoreEntryResponse])
async def get_global_top(count: int, db: DatabaseManager = Depends(get_db)):
    """
    The best entries across all activities.

    - **count**: Number of entries to return (positive)
    """
    return entries_response(await db.leaderboard.get_global_top(positive_count(count)))

@router.get("/global/rank/{username}", response_model=List[ScoreEntryResponse])
async def get_user_ranking(
    username: str = Path(..., min_length=1, max_length=100),
    db: DatabaseManager = Depends(get_db)
):
    """A user's entries across activities, ranked among themselves."""
    return entries_response(await db.leaderboard.get_user_activities(username.lower()))

@router.get("/{activity}", response_model=List[ScoreEntryResponse])
async def get_activity(
    activity: str = Path(..., min_length=1, max_length=100),
    db: DatabaseManager = Depends(get_db)
):
    """The full board of one activity, highest score first."""
    entries = await db.leaderboard.get_activity_board(activity)
    logger.info(f"Retrieved {len(entries)} entries for activity {activity}")
    return entries_response(entries)

@router.get("/{activity}/top/{count}", response_model=List[ScoreEntryResponse])
async def get_activity_top(
    count: int,
    activity: str = Path(..., min_length=1, max_length=100),
    db: DatabaseManager = Depends(get_db)
):
    """
    The best entries of one activity.

    - **activity**: Activity name
    - **count**: Number of entries to return (positive)
    """
    return entries_response(await db.leaderboard.get_activity_top(activity, positive_count(count)))

@router.get("/{activity}/rank/{username}", response_model=ScoreEntryResponse)
async def get_rank(
    activity: str = Path(..., min_length=1, max_length=100),
    username: str = Path(..., min_length=1, max_length=100),
    db: DatabaseManager = Depends(get_db)
):
    """
    Score and rank of one user in one activity.

    An existing activity without an entry for the user answers with null
    score, timestamp and rank.
    """
    entry = await db.leaderboard.get_score_and_rank(activity, username.lower())
    return ScoreEntryResponse(**entry.to_dict())

@router.get("/{activity}/around/{username}/{count}", response_model=List[ScoreEntryResponse])
async def get_around(
    count: int,
    activity: str = Path(..., min_length=1, max_length=100),
    username: str = Path(..., min_length=1, max_length=100),
    db: DatabaseManager = Depends(get_db)
):
    """
    Entries surrounding a user on an activity board.

    - **count**: Window size (positive); clamped at the top of the board
    """
    entries = await db.leaderboard.get_users_around_user(activity, username.lower(), positive_count(count))
    return entries_response(entries)
