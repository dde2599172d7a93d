from __future__ import annotations

import json
import logging

import lessonmarket.core.logging_config as logging_config
from lessonmarket.core.logging import LogContext, build_log_event
from lessonmarket.core.logging_config import JsonFormatter


def test_json_formatter_includes_extra_fields():
    record = logging.makeLogRecord(
        {
            "name": "lessonmarket.services.status_service",
            "levelname": "INFO",
            "msg": "status.transition",
            "event": "status.transition",
            "to_status": "ACCEPTED",
        }
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "status.transition"
    assert payload["event"] == "status.transition"
    assert payload["to_status"] == "ACCEPTED"
    assert payload["level"] == "INFO"


def test_build_log_event_carries_context():
    payload = build_log_event(
        "status.transition",
        LogContext(entity_kind="Lesson", entity_id="lesson-1", actor_id="teacher-3"),
        to_status="ACCEPTED",
    )
    assert payload["event"] == "status.transition"
    assert payload["entity_kind"] == "Lesson"
    assert payload["actor_id"] == "teacher-3"
    assert payload["trace_id"] is None
    assert payload["to_status"] == "ACCEPTED"


def test_configure_logging_is_idempotent(monkeypatch):
    root = logging.Logger("lessonmarket-test-root")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    logging_config.configure_logging(root)
    first = list(root.handlers)
    logging_config.configure_logging(root)

    assert len(first) == 1
    assert isinstance(first[0].formatter, JsonFormatter)
    assert root.handlers == first
    assert root.level == logging.DEBUG


def test_configure_logging_adds_file_handler(monkeypatch, tmp_path):
    root = logging.Logger("lessonmarket-test-root")
    log_file = tmp_path / "lessonmarket.log"
    monkeypatch.setenv("LOG_FILE", str(log_file))

    logging_config.configure_logging(root)
    root.info("status.created", extra={"event": "status.created"})
    for handler in root.handlers:
        handler.close()

    assert len(root.handlers) == 2
    line = json.loads(log_file.read_text().splitlines()[0])
    assert line["event"] == "status.created"
