import json
import logging

from chat_proxy.logging import JsonFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "chat_proxy.test", logging.WARNING, __file__, 10, "Blocked %s", ("origin",), None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields() -> None:
    line = JsonFormatter().format(_record(client_ip="203.0.113.1", status_code=403))

    payload = json.loads(line)
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "chat_proxy.test"
    assert payload["message"] == "Blocked origin"
    assert payload["client_ip"] == "203.0.113.1"
    assert payload["status_code"] == 403
    assert "timestamp" in payload


def test_json_formatter_skips_standard_attributes() -> None:
    payload = json.loads(JsonFormatter().format(_record()))

    assert "lineno" not in payload
    assert "args" not in payload
    assert "msg" not in payload
