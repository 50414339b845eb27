"""FastAPI application entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import Depends, FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from chat_proxy import __version__
from chat_proxy.chat_handlers import chat_endpoint, method_not_allowed_handler
from chat_proxy.config import Settings, get_settings
from chat_proxy.logging import configure_logging
from chat_proxy.origin import OriginPolicy
from chat_proxy.rate_limit import InMemoryRateLimitStore, RateLimiter

CHAT_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create application resources during startup and clean up on shutdown."""

    async with httpx.AsyncClient() as client:
        app.state.http_client = client
        yield
        del app.state.http_client


def create_app() -> FastAPI:
    """Application factory."""

    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Portfolio Chat Proxy",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.rate_limiter = RateLimiter(
        InMemoryRateLimitStore(),
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.state.origin_policy = OriginPolicy(
        settings.allowed_origins,
        allow_missing_origin=settings.allow_missing_origin,
        allow_referer_prefix=settings.allow_referer_prefix,
    )
    app.add_exception_handler(StarletteHTTPException, method_not_allowed_handler)

    @app.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/version")
    async def version(settings: Settings = Depends(get_settings)) -> dict[str, str]:
        return {"version": __version__, "environment": settings.environment}

    app.add_api_route("/", chat_endpoint, methods=CHAT_METHODS, include_in_schema=False)

    return app


app = create_app()
