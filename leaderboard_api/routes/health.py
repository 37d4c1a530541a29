import time
from fastapi import APIRouter, Request
from ..models.response import HealthResponse
from ..logger import get_logger

logger = get_logger()
router = APIRouter()

# Track application start time
start_time = time.time()

@router.get("/health", response_model=HealthResponse)
@router.head("/health")
async def health_check(request: Request):
    """Health check endpoint"""
    store_ok = await request.app.state.db.ping()
    response = HealthResponse(
        status="healthy" if store_ok else "degraded",
        uptime=time.time() - start_time,
        store=store_ok
    )
    logger.debug(f"Health check response: {response.model_dump()}")
    return response
