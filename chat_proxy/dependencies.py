"""Dependency providers for the FastAPI application."""

import httpx
from fastapi import Depends
from starlette.requests import HTTPConnection

from chat_proxy.config import Settings, get_settings, read_api_key
from chat_proxy.origin import OriginPolicy
from chat_proxy.rate_limit import RateLimiter
from chat_proxy.services.chat_service import ChatService


async def get_http_client(connection: HTTPConnection) -> httpx.AsyncClient:
    """Retrieve the shared AsyncClient from application state."""

    return connection.app.state.http_client  # type: ignore[return-value]


async def get_rate_limiter(connection: HTTPConnection) -> RateLimiter:
    """Retrieve the process-wide rate limiter from application state."""

    return connection.app.state.rate_limiter  # type: ignore[return-value]


async def get_origin_policy(connection: HTTPConnection) -> OriginPolicy:
    """Dependency provider for OriginPolicy."""

    return connection.app.state.origin_policy  # type: ignore[return-value]


async def get_api_key(settings: Settings = Depends(get_settings)) -> str | None:
    """Provider API key, read from the environment per request."""

    return read_api_key(settings)


async def get_chat_service(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
    api_key: str | None = Depends(get_api_key),
) -> ChatService:
    """Dependency provider for ChatService."""

    return ChatService(client=client, settings=settings, api_key=api_key)
