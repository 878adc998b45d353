import json
import logging

import pytest

from smartpass.context import clear_context, request_id_var, user_id_var
from smartpass.logger import JSONFormatter

pytestmark = pytest.mark.unit


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="smartpass",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hello %s",
        args=("world",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_json_with_message():
    payload = json.loads(JSONFormatter().format(_record()))

    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "smartpass"


def test_sensitive_keys_are_dropped():
    payload = json.loads(
        JSONFormatter().format(
            _record(password="hunter2", token="abc", Authorization="Bearer x", ok=1)
        )
    )

    assert "password" not in payload
    assert "token" not in payload
    assert "Authorization" not in payload
    assert payload["ok"] == 1


def test_request_context_is_included():
    request_id_var.set("req-1")
    user_id_var.set("u-1")
    try:
        payload = json.loads(JSONFormatter().format(_record()))
    finally:
        clear_context()

    assert payload["request_id"] == "req-1"
    assert payload["user_id"] == "u-1"


def test_exception_info_is_serialized():
    try:
        raise ValueError("bad")
    except ValueError:
        import sys

        record = _record()
        record.exc_info = sys.exc_info()

    payload = json.loads(JSONFormatter().format(record))
    assert payload["exception"]["type"] == "ValueError"
    assert payload["exception"]["message"] == "bad"
