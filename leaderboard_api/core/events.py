import asyncio
from contextlib import asynccontextmanager
from fastapi import FastAPI
from ..logger import get_logger

logger = get_logger()

async def startup_event(app: FastAPI):
    """Open the Redis connection and build the leaderboard components"""
    try:
        await app.state.db.initialize()
        logger.info("Database initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

async def shutdown_event(app: FastAPI):
    """Close the Redis connection"""
    try:
        async with asyncio.timeout(5.0):
            await app.state.db.close()
            logger.info("Database connections closed")
    except asyncio.TimeoutError:
        logger.warning("Shutdown timed out, abandoning Redis connection")
    except Exception as e:
        logger.error(f"Error during shutdown: {e}")

@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup_event(app)
    yield
    await shutdown_event(app)
