# tests/unit/conftest.py
import json
import os
import logging
from datetime import datetime, timedelta, timezone

import pytest

from oztail.config import settings as settings_mod
from oztail.core.events import Event, EventType, MeterEvent

T0 = datetime(2020, 6, 1, 10, 0, 0, 500000, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """
    Keep configuration predictable: drop any OZTAIL_* vars from the runner's
    environment and reset the settings singleton around every test.
    """
    for key in list(os.environ):
        if key.startswith("OZTAIL_"):
            monkeypatch.delenv(key, raising=False)
    settings_mod._settings_singleton = None
    yield
    settings_mod._settings_singleton = None
    # CliRunner swaps sys.stderr; handlers bound to it must not outlive the test.
    logger = logging.getLogger("oztail")
    logger.setLevel(logging.NOTSET)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def make_meter(kind, start=0.0, end=None, at=0.0, flags=None, seconds_viewed=0.0):
    """Build a single-event envelope; ``at`` is seconds after T0."""
    event = Event(
        type=EventType(kind),
        from_position=start,
        to_position=start if end is None else end,
        timestamp=T0 + timedelta(seconds=at),
    )
    return MeterEvent(events=(event,), seconds_viewed=seconds_viewed, oztam_flags=flags)


def make_session(*specs):
    """
    Envelopes one second apart. Each spec is either an event type name or a
    (type, from, to) tuple.
    """
    session = []
    for i, spec in enumerate(specs):
        if isinstance(spec, str):
            session.append(make_meter(spec, at=i))
        else:
            kind, start, end = spec
            session.append(make_meter(kind, start, end, at=i))
    return session


def wire_event(kind, start=0, end=0, timestamp="2020-06-01T10:00:00.000Z"):
    return {"event": kind, "fromPosition": start, "toPosition": end, "timestamp": timestamp}


def wire_session():
    """A conformant session in the tail service's JSON shape."""
    return [
        {"events": [wire_event("LOAD", timestamp="2020-06-01T10:00:00.100Z")], "secondsViewed": 0},
        {"events": [wire_event("BEGIN", timestamp="2020-06-01T10:00:01.250Z")], "secondsViewed": 0},
        {"events": [wire_event("PROGRESS", 0, 30, "2020-06-01T10:00:31.250Z")], "secondsViewed": 30},
        {"events": [wire_event("COMPLETE", 30, 30, "2020-06-01T10:00:32.000Z")], "secondsViewed": 30},
    ]


@pytest.fixture
def session_file(tmp_path):
    """Write a session payload to <tmp>/<session_id>.json and return its path."""
    def _write(payload, session_id="s1"):
        path = tmp_path / f"{session_id}.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path
    return _write
