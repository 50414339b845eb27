import json

import httpx
import pytest

from client.chat_client import parse_args, reply_text, send_message


def test_send_message_posts_json_and_reads_reply() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["origin"] == "http://localhost:5173"
        assert json.loads(request.content.decode()) == {"message": "hello"}
        return httpx.Response(200, json={"content": [{"text": "Hi!"}, {"text": "Welcome."}]})

    status, text = send_message(
        "http://testserver/",
        "hello",
        "http://localhost:5173",
        5.0,
        transport=httpx.MockTransport(handler),
    )

    assert status == 200
    assert text == "Hi!\nWelcome."


def test_send_message_returns_error_text() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"content": [{"text": "Slow down"}]})

    status, text = send_message(
        "http://testserver/", "hello", None, 5.0, transport=httpx.MockTransport(handler)
    )

    assert status == 429
    assert text == "Slow down"


def test_reply_text_rejects_unknown_shape() -> None:
    with pytest.raises(ValueError):
        reply_text({"error": "nope"})


def test_parse_args_defaults() -> None:
    args = parse_args(["--text", "hi"])

    assert args.url == "http://127.0.0.1:8000/"
    assert args.origin is None
    assert args.timeout == 60.0
