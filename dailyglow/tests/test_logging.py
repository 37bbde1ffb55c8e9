import json
import logging

from dailyglow.core.logging import (
    JsonFormatter,
    PrettyFormatter,
    _safe_truncate,
    latency_bucket_ms,
    log_event,
    request_id_ctx_var,
)


def make_record(**extra):
    record = logging.LogRecord("dailyglow", logging.INFO, __file__, 1, "favorite.toggled", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_event_fields():
    record = make_record(request_id="rid-1", event_type="favorite.toggled", affirmation_id="a-1")
    payload = json.loads(JsonFormatter().format(record))
    assert payload["message"] == "favorite.toggled"
    assert payload["request_id"] == "rid-1"
    assert payload["event_type"] == "favorite.toggled"
    assert payload["affirmation_id"] == "a-1"
    assert "entry_id" not in payload


def test_pretty_formatter():
    line = PrettyFormatter().format(make_record(request_id="rid-2", event_type="streak.updated"))
    assert "[dailyglow] [rid=rid-2] favorite.toggled (streak.updated)" in line


def test_log_event_uses_context_request_id(caplog):
    token = request_id_ctx_var.set("rid-ctx")
    try:
        with caplog.at_level(logging.INFO, logger="dailyglow"):
            log_event("info", "streak.updated", event_type="streak.updated", extra={"streak": 3})
    finally:
        request_id_ctx_var.reset(token)

    record = caplog.records[-1]
    assert record.request_id == "rid-ctx"
    assert record.event_type == "streak.updated"
    assert record.streak == "3"


def test_session_events_are_logged(caplog, session, fixed_now):
    with caplog.at_level(logging.INFO, logger="dailyglow"):
        session.open_app(fixed_now)
    events = {getattr(r, "event_type", None) for r in caplog.records}
    assert {"streak.updated", "affirmation.selected"} <= events


def test_truncation_and_buckets():
    assert _safe_truncate("x" * 600).endswith("...<truncated>")
    assert latency_bucket_ms(None) == "unknown"
    assert latency_bucket_ms(5) == "<10ms"
    assert latency_bucket_ms(250) == "100-500ms"
    assert latency_bucket_ms(5000) == ">=1000ms"
