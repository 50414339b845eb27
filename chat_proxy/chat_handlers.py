"""HTTP handler for the chat proxy endpoint."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from chat_proxy.config import Settings, get_settings
from chat_proxy.dependencies import (
    get_api_key,
    get_chat_service,
    get_origin_policy,
    get_rate_limiter,
)
from chat_proxy.exceptions import (
    ConfigurationError,
    MessageValidationError,
    MethodNotAllowedError,
    OriginNotAllowedError,
    RateLimitExceededError,
    ServiceError,
)
from chat_proxy.models import ChatReply, ChatRequest
from chat_proxy.origin import OriginPolicy
from chat_proxy.rate_limit import RateLimiter, client_ip
from chat_proxy.services.chat_service import ChatService

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "Please type a message first!"
NOT_ALLOWED_MESSAGE = "Request not allowed."
METHOD_MESSAGE = "Method not allowed."
RATE_LIMITED_MESSAGE = (
    "Whoa, that's a lot of messages! Please wait a minute before sending another one."
)


async def chat_endpoint(
    request: Request,
    chat_service: Annotated[ChatService, Depends(get_chat_service)],
    rate_limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
    origin_policy: Annotated[OriginPolicy, Depends(get_origin_policy)],
    api_key: Annotated[str | None, Depends(get_api_key)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Response:
    """Main chat workflow: guards → validation → upstream → reply."""

    origin = request.headers.get("origin")
    headers = origin_policy.cors_headers(origin)

    if request.method == "OPTIONS":
        return PlainTextResponse("ok", headers=headers)

    ip = client_ip(request.headers)
    try:
        message = await _guarded_message(
            request, ip, rate_limiter, origin_policy, api_key, settings
        )
        reply = await chat_service.complete(message)
        return JSONResponse(reply.payload, status_code=reply.status_code, headers=headers)
    except ServiceError as exc:
        logger.info(
            "Chat request rejected",
            extra={"client_ip": ip, "code": exc.code, "status_code": exc.status_code},
        )
        return _error_response(exc.message, exc.status_code, headers)
    except Exception:
        logger.exception("Unhandled error while serving chat request", extra={"client_ip": ip})
        return _error_response(
            "Sorry, something went wrong on my end. Please try again later "
            f"or email {settings.contact_email}.",
            500,
            headers,
        )


async def method_not_allowed_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    """Render router-level 405s in the chat reply shape.

    Methods outside the route's list never reach ``chat_endpoint``; the
    origin guard still runs first so a disallowed origin sees 403.
    """

    if exc.status_code != 405:
        return await http_exception_handler(request, exc)

    origin_policy: OriginPolicy = request.app.state.origin_policy
    origin = request.headers.get("origin")
    headers = origin_policy.cors_headers(origin)

    if not origin_policy.is_allowed(origin, request.headers.get("referer")):
        return _error_response(NOT_ALLOWED_MESSAGE, 403, headers)

    if exc.headers:
        headers = {**exc.headers, **headers}
    return _error_response(METHOD_MESSAGE, 405, headers)


async def _guarded_message(
    request: Request,
    ip: str,
    rate_limiter: RateLimiter,
    origin_policy: OriginPolicy,
    api_key: str | None,
    settings: Settings,
) -> str:
    """Run every pre-upstream check and return the trimmed message."""

    origin = request.headers.get("origin")
    referer = request.headers.get("referer")
    if not origin_policy.is_allowed(origin, referer):
        logger.warning(
            "Blocked request from disallowed origin",
            extra={"origin": origin, "referer": referer, "client_ip": ip},
        )
        raise OriginNotAllowedError(NOT_ALLOWED_MESSAGE)

    if request.method != "POST":
        raise MethodNotAllowedError(METHOD_MESSAGE)

    if rate_limiter.is_rate_limited(ip):
        raise RateLimitExceededError(RATE_LIMITED_MESSAGE)

    if not api_key:
        logger.error("ANTHROPIC_API_KEY is not configured")
        raise ConfigurationError(
            "The chat assistant is offline right now. "
            f"Please reach out at {settings.contact_email} instead."
        )

    return parse_message(await request.body(), settings.max_message_length)


def parse_message(body: bytes, max_length: int) -> str:
    """Validate a raw request body and return the trimmed message text."""

    try:
        payload = ChatRequest.model_validate_json(body)
    except ValueError as exc:
        raise MessageValidationError(EMPTY_MESSAGE) from exc

    text = payload.message.strip()
    if not text:
        raise MessageValidationError(EMPTY_MESSAGE)

    if len(payload.message) > max_length:
        raise MessageValidationError(
            f"That message is a bit long. Please keep it to {max_length} characters or fewer."
        )

    return text


def _error_response(text: str, status_code: int, headers: dict[str, str]) -> JSONResponse:
    """Render an error in the same shape as a successful reply."""

    return JSONResponse(
        ChatReply.from_text(text).model_dump(),
        status_code=status_code,
        headers=headers,
    )
