from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from ..exceptions import (
    AlreadyExists,
    InvalidArgument,
    InvalidCredentials,
    LeaderboardError,
    NotFound,
    StoreUnavailable,
)
from ..logger import get_logger

logger = get_logger()

STATUS_CODES = {
    NotFound: 404,
    AlreadyExists: 409,
    InvalidCredentials: 401,
    InvalidArgument: 400,
    StoreUnavailable: 503,
}

def status_for(exc: LeaderboardError) -> int:
    for kind, status in STATUS_CODES.items():
        if isinstance(exc, kind):
            return status
    return 500

async def leaderboard_error_handler(request: Request, exc: LeaderboardError):
    status = status_for(exc)
    if status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return ORJSONResponse(
        status_code=status,
        content={"error": type(exc).__name__, "detail": exc.message}
    )

async def validation_error_handler(request: Request, exc: RequestValidationError):
    # Payload problems are reported as 400, like any other invalid argument
    messages = "; ".join(str(err.get("msg")) for err in exc.errors())
    logger.info(f"{request.method} {request.url.path} invalid payload: {messages}")
    return ORJSONResponse(
        status_code=400,
        content={"error": "InvalidArgument", "detail": messages}
    )

def register_error_handlers(app: FastAPI):
    app.add_exception_handler(LeaderboardError, leaderboard_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
