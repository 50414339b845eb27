"""Simple HTTP client for manual testing."""

from __future__ import annotations

import argparse
import logging
import time
from typing import Any

import httpx

DEFAULT_URL = "http://127.0.0.1:8000/"


def reply_text(payload: Any) -> str:
    """Join the text blocks of a chat reply."""

    try:
        blocks = payload["content"]
        return "\n".join(block["text"] for block in blocks if "text" in block)
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Unexpected reply payload: {payload!r}") from exc


def send_message(
    url: str,
    text: str,
    origin: str | None,
    timeout: float,
    transport: httpx.BaseTransport | None = None,
) -> tuple[int, str]:
    """Post one message to the chat endpoint and return (status, reply text)."""

    logger = logging.getLogger("chat_client")
    headers = {"Origin": origin} if origin else {}
    start = time.perf_counter()

    with httpx.Client(transport=transport, timeout=timeout) as client:
        response = client.post(url, json={"message": text}, headers=headers)

    elapsed = time.perf_counter() - start
    logger.info("Received HTTP %d in %.2fs", response.status_code, elapsed)
    return response.status_code, reply_text(response.json())


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Test client for the portfolio chat proxy.")
    parser.add_argument("--url", default=DEFAULT_URL, help="Endpoint URL (default: %(default)s)")
    parser.add_argument("--text", required=True, help="Message to send.")
    parser.add_argument("--origin", help="Optional Origin header to send.")
    parser.add_argument(
        "--timeout", type=float, default=60.0, help="Seconds to wait for the reply."
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    status, text = send_message(args.url, args.text, args.origin, args.timeout)
    print(text)
    if status >= 400:
        raise SystemExit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
