"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import settings
from src.ba_analytics.api.creators_router import router as creators_router
from src.ba_analytics.api.router import router as analytics_router
from src.ba_chain.api.router import router as base_router
from src.ba_common.database import dispose_engine, get_engine
from src.ba_common.errors import AppError, InternalError, InvalidCredentialsError, ValidationError
from src.ba_common.logging_config import configure_logging
from src.ba_common.redis_client import close_redis, get_redis
from src.ba_common.response import error_response, success_response
from src.ba_gateway.api.router import router as auth_router
from src.ba_gateway.middleware.rate_limit import RateLimitMiddleware
from src.ba_gateway.middleware.request_log import RequestLogMiddleware
from src.ba_marketplace.api.router import router as marketplace_router
from src.ba_nft.api.router import router as nft_router
from src.ba_user.api.router import router as user_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger("ba.app")

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify the configured backends. Shutdown: dispose."""
    # Startup
    if settings.STORAGE_BACKEND == "postgres":
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
    if settings.RATE_LIMIT_ENABLED or settings.CHALLENGE_STORE == "redis":
        redis = await get_redis()
        await redis.ping()
    logger.info(
        "%s started: storage=%s network=%s",
        settings.APP_NAME, settings.STORAGE_BACKEND, settings.NETWORK,
    )
    yield
    # Shutdown
    await dispose_engine()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version=VERSION,
    lifespan=lifespan,
)


if settings.RATE_LIMIT_ENABLED:
    app.add_middleware(
        RateLimitMiddleware,
        redis_factory=get_redis,
        max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
    )
app.add_middleware(RequestLogMiddleware)


def _error(
    request: Request,
    status_code: int,
    code: int,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    resp = error_response(code, message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(status_code=status_code, content=resp.model_dump(), headers=headers)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error(request, exc.http_status, exc.code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    err = ValidationError(details or "Invalid request")
    return _error(request, err.http_status, err.code, err.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = InvalidCredentialsError().code if exc.status_code == 401 else exc.status_code
    return _error(request, exc.status_code, code, str(exc.detail), headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    err = InternalError()
    return _error(request, err.http_status, err.code, err.message)


app.include_router(auth_router, prefix="/api")
app.include_router(nft_router, prefix="/api")
app.include_router(marketplace_router, prefix="/api")
app.include_router(user_router, prefix="/api")
app.include_router(analytics_router, prefix="/api")
app.include_router(creators_router, prefix="/api")
app.include_router(base_router, prefix="/api")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": VERSION}


@app.get("/api/health")
async def api_health(request: Request) -> JSONResponse:
    resp = success_response({"status": "ok", "version": VERSION, "network": settings.NETWORK})
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(content=resp.model_dump())
