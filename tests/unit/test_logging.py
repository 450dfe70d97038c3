"""Unit tests for logging setup, formatters and the TUI handler."""

import json
import logging
from unittest.mock import MagicMock

import pytest

from g1c.logging import JsonFormatter, TuiLogHandler, TuiLogMessage, parse_level, setup_logging
from g1c.logging.formatters import build_formatter


def make_record(message: str = "hello %s", level: int = logging.WARNING) -> logging.LogRecord:
    return logging.LogRecord(
        name="g1c.test",
        level=level,
        pathname="/src/g1c/test.py",
        lineno=12,
        msg=message,
        args=("world",),
        exc_info=None,
    )


@pytest.mark.parametrize(
    "name,level",
    [
        ("trace", logging.DEBUG),
        ("DEBUG", logging.DEBUG),
        ("info", logging.INFO),
        ("warn", logging.WARNING),
        ("error", logging.ERROR),
        ("bogus", logging.INFO),
        (None, logging.INFO),
    ],
)
def test_parse_level(name, level):
    assert parse_level(name) == level


def test_json_formatter_emits_one_object():
    payload = json.loads(JsonFormatter().format(make_record()))

    assert payload["level"] == "WARNING"
    assert payload["target"] == "g1c.test"
    assert payload["line"] == 12
    assert payload["message"] == "hello world"


def test_build_formatter_text():
    formatter = build_formatter("text")

    assert not isinstance(formatter, JsonFormatter)
    assert "hello world" in formatter.format(make_record())


def test_setup_logging_console_only_errors():
    setup_logging()

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert handlers[0].level == logging.ERROR


def test_setup_logging_writes_json_file(tmp_path):
    log_file = tmp_path / "nested" / "g1c.log"

    setup_logging(str(log_file), "debug", "json")
    logging.getLogger("g1c.test").debug("refresh done")
    for handler in logging.getLogger().handlers:
        handler.flush()

    lines = [json.loads(line) for line in log_file.read_text().splitlines()]
    assert any(line["message"] == "refresh done" for line in lines)
    assert logging.getLogger().level == logging.DEBUG


def test_setup_logging_quiets_textual():
    setup_logging(log_level="debug")

    assert logging.getLogger("textual").level == logging.WARNING


def test_tui_handler_ignores_stopped_app():
    app = MagicMock()
    app._running = False
    handler = TuiLogHandler(app)

    handler.emit(make_record())

    app.show_log_message.assert_not_called()
    app.post_message.assert_not_called()


def test_tui_handler_posts_from_other_thread():
    app = MagicMock()
    app._running = True
    app._thread_id = -1
    handler = TuiLogHandler(app)

    handler.emit(make_record())

    message = app.post_message.call_args[0][0]
    assert isinstance(message, TuiLogMessage)
    assert message.text == "hello world"
    assert message.levelno == logging.WARNING


def test_tui_handler_level_defaults_to_warning():
    assert TuiLogHandler(MagicMock()).level == logging.WARNING
