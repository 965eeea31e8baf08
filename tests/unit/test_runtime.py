import logging

import pytest

from conftest import make_session
from oztail.core.logger_config import setup_logger
from oztail.plugins.sources.file.impl import JsonFileSessionSource
from oztail.plugins.sources.http.impl import HttpSessionSource
from oztail.sdk import REGISTRY, SDK_CONFIG, Registry, ValidationSession, check_events, create_source


class FakeSource:
    def __init__(self, session):
        self.session = session
        self.requested = []
        self.closed = False

    def fetch(self, session_id):
        self.requested.append(session_id)
        return self.session

    def close(self):
        self.closed = True


def test_validation_session_fetches_and_validates():
    source = FakeSource(make_session("LOAD", "BEGIN", ("PROGRESS", 0, 30), "COMPLETE"))
    run = ValidationSession("abc", source)

    report = run.run()
    run.close()

    assert source.requested == ["abc"]
    assert source.closed
    assert report.passed
    assert report.session_id == "abc"
    assert report.event_count == 4
    assert report.run_id == run.run_id
    assert len(report.run_id) == 26  # ULID


def test_validation_session_reports_empty_session():
    report = ValidationSession("abc", FakeSource([])).run()

    assert not report.passed
    assert [v.kind for v in report.violations] == ["NoEvents"]


def test_check_events_logs_summary_and_each_violation(caplog):
    with caplog.at_level(logging.DEBUG, logger="oztail"):
        report = check_events(make_session("LOAD", "LOAD", "BEGIN"), session_id="dup")

    assert "session dup: 3 events, 2 violations" in caplog.text
    assert "MultipleLoad" in caplog.text
    assert report.run_id in caplog.text


def test_create_source_resolves_registered_plugins(tmp_path):
    assert isinstance(create_source("file", root=tmp_path), JsonFileSessionSource)
    assert isinstance(create_source("source.http"), HttpSessionSource)
    assert SDK_CONFIG.source_key("http") == "source.http"
    assert REGISTRY.keys() == ["source.file", "source.http"]


def test_registry_rejects_unknown_keys():
    registry = Registry()
    registry.register("source.fake", "tests_fake_module:Nothing")

    with pytest.raises(KeyError, match="source.fake"):
        registry.target("source.mock")


def test_setup_logger_attaches_handlers_once(tmp_path):
    log_file = tmp_path / "oztail.log"

    logger = setup_logger("oztail", str(log_file), logging.INFO)
    again = setup_logger("oztail", str(log_file), logging.DEBUG)
    again.info("validation done")

    assert logger is again
    assert len(logger.handlers) == 2
    assert all(h.level == logging.DEBUG for h in logger.handlers)
    for handler in logger.handlers:
        handler.flush()
    assert "[INFO] validation done" in log_file.read_text(encoding="utf-8")
