import json
import logging
import sys

import pytest

from wrappy.core.logging import (
    DevFormatter,
    JsonFormatter,
    clearLogContext,
    configureLogging,
    getLogContext,
    setLogContext,
)


@pytest.fixture(autouse=True)
def clean_context():
    clearLogContext()
    yield
    clearLogContext()


def _record(msg="hello %s", args=("world",), exc_info=None):
    return logging.LogRecord(
        name="wrappy.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=args,
        exc_info=exc_info,
    )


def test_context_updates_and_skips_none():
    setLogContext(command="validate")
    setLogContext(container="app", ignored=None)
    assert getLogContext() == {"command": "validate", "container": "app"}
    clearLogContext()
    assert getLogContext() is None


def test_dev_formatter_without_context():
    line = DevFormatter().format(_record())
    assert line == "WARNING: [wrappy.test] hello world"


def test_dev_formatter_with_context():
    setLogContext(command="validate", container="app")
    line = DevFormatter().format(_record())
    assert line.endswith("hello world [validate/app]")


def test_json_formatter_fields():
    setLogContext(container="app")
    payload = json.loads(JsonFormatter().format(_record()))
    assert payload["level"] == "warning"
    assert payload["logger"] == "wrappy.test"
    assert payload["message"] == "hello world"
    assert payload["context"] == {"container": "app"}
    assert "error" not in payload
    assert payload["time"].endswith("+00:00")


def test_json_formatter_exception():
    try:
        raise RuntimeError("broken")
    except RuntimeError:
        record = _record(exc_info=sys.exc_info())
    payload = json.loads(JsonFormatter().format(record))
    assert payload["error"]["type"] == "RuntimeError"
    assert payload["error"]["message"] == "broken"
    assert "Traceback" in payload["error"]["traceback"]


def test_configure_logging_explicit_level():
    root = logging.getLogger()
    saved = (root.level, list(root.handlers))
    try:
        configureLogging("warning")
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, DevFormatter)
    finally:
        root.handlers[:] = saved[1]
        root.setLevel(saved[0])
