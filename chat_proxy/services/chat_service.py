"""Adapter for the Anthropic Messages API."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from chat_proxy.config import Settings
from chat_proxy.exceptions import UpstreamServiceError
from chat_proxy.prompts import build_system_prompt

logger = logging.getLogger(__name__)

RETRY_MESSAGE = "I'm having trouble responding right now. Please try again in a moment."
LOGGED_BODY_LIMIT = 200


@dataclass(frozen=True)
class UpstreamReply:
    status_code: int
    payload: Any


def truncate(text: str, limit: int = LOGGED_BODY_LIMIT) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-finite JSON constant {name}")


class ChatService:
    """Wrapper around Anthropic's messages endpoint."""

    _endpoint = "https://api.anthropic.com/v1/messages"

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: Settings,
        api_key: str | None = None,
    ) -> None:
        self._client = client
        self._settings = settings
        self._api_key = api_key if api_key is not None else settings.anthropic_api_key

    async def complete(self, message: str) -> UpstreamReply:
        """Send one user message and return the provider's JSON verbatim."""

        payload = {
            "model": self._settings.chat_model,
            "max_tokens": self._settings.max_tokens,
            "system": build_system_prompt(
                self._settings.owner_name, self._settings.contact_email
            ),
            "messages": [{"role": "user", "content": message}],
        }

        headers = {
            "x-api-key": self._api_key or "",
            "anthropic-version": self._settings.anthropic_version,
            "Content-Type": "application/json",
        }

        try:
            response = await self._client.post(
                self._endpoint,
                headers=headers,
                json=payload,
                timeout=self._settings.chat_timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.warning("Chat completion timed out", exc_info=exc)
            raise UpstreamServiceError(RETRY_MESSAGE) from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Chat completion failed",
                extra={
                    "status_code": exc.response.status_code,
                    "response_text": truncate(exc.response.text),
                },
            )
            raise UpstreamServiceError(
                RETRY_MESSAGE,
                upstream_status=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.exception("Unexpected chat HTTP error")
            raise UpstreamServiceError(RETRY_MESSAGE) from exc

        try:
            data = json.loads(response.text, parse_constant=_reject_constant)
        except ValueError as exc:
            logger.error(
                "Malformed chat response",
                extra={"response_text": truncate(response.text)},
            )
            raise UpstreamServiceError(RETRY_MESSAGE) from exc

        logger.info(
            "Chat completion succeeded",
            extra={"status_code": response.status_code},
        )
        return UpstreamReply(status_code=response.status_code, payload=data)
