# leaderboard_api application

from typing import Optional
from fastapi import FastAPI
from fastapi.responses import ORJSONResponse
from redis.asyncio import Redis

from .config import server
from .core.errors import register_error_handlers
from .core.events import lifespan
from .database import DatabaseManager
from .routes import auth, health, leaderboard, score
from .logger import get_logger

logger = get_logger()

def create_app(client: Optional[Redis] = None) -> FastAPI:
    """Build the application; ``client`` replaces the Redis client built from settings"""
    app = FastAPI(
        default_response_class=ORJSONResponse,
        title="Leaderboard API",
        description="Per-activity and global leaderboards backed by Redis",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.db = DatabaseManager(client)
    register_error_handlers(app)

    prefix = server.server_path.rstrip("/")
    app.include_router(health.router, prefix=prefix)
    app.include_router(auth.router, prefix=prefix)
    app.include_router(score.router, prefix=prefix)
    app.include_router(leaderboard.router, prefix=prefix)
    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "leaderboard_api.main:app",
        host=server.host,
        port=server.port,
        workers=server.workers,
        log_level=server.log_level.lower()
    )
