"""Unit tests for logging utilities."""

import json
import logging

import pytest

from speech_trigger.utils.logging import JsonFormatter, log_event, setup_logging


def test_json_formatter_includes_extra() -> None:
    """Test extra fields are emitted alongside the message."""
    record = logging.makeLogRecord(
        {
            "name": "speech_trigger.state",
            "levelno": logging.INFO,
            "levelname": "INFO",
            "msg": "Playback state transition",
            "from_state": "waiting",
            "to_state": "speaking",
        }
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "Playback state transition"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "speech_trigger.state"
    assert payload["from_state"] == "waiting"
    assert payload["to_state"] == "speaking"
    assert "args" not in payload


def test_setup_logging_json() -> None:
    """Test setup_logging installs a JSON handler at the requested level."""
    setup_logging("debug", json_format=True)

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert isinstance(root.handlers[0].formatter, JsonFormatter)


def test_setup_logging_text() -> None:
    """Test text mode uses a plain formatter."""
    setup_logging("WARNING", json_format=False)

    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert not isinstance(root.handlers[0].formatter, JsonFormatter)


def test_log_event(caplog: pytest.LogCaptureFixture) -> None:
    """Test structured events are logged as JSON."""
    with caplog.at_level(logging.INFO, logger="speech_trigger.events"):
        log_event("outputs_changed", {"state": "speaking", "autoSpeak": False})

    assert json.loads(caplog.records[-1].getMessage()) == {
        "event": "outputs_changed",
        "state": "speaking",
        "autoSpeak": False,
    }
