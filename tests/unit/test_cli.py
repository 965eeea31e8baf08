import json

from typer.testing import CliRunner

from conftest import wire_event, wire_session
from oztail.apps.validator_cli import EXIT_ERROR, EXIT_FAILED, app

runner = CliRunner()


def test_check_passes_for_conformant_session(session_file):
    path = session_file(wire_session())

    result = runner.invoke(app, ["check", "s1", "--source", "file", "--path", str(path)])

    assert result.exit_code == 0, result.output
    assert "Checking load and begin events" in result.output
    assert "Basic validation PASSED" in result.output


def test_check_fails_and_lists_violations(session_file):
    payload = wire_session()
    payload.append({"events": [wire_event("PROGRESS", 30, 40, "2020-06-01T10:00:40.000Z")], "secondsViewed": 40})
    path = session_file(payload)

    result = runner.invoke(app, ["check", "s1", "--source", "file", "--path", str(path)])

    assert result.exit_code == EXIT_FAILED
    assert "COMPLETE event must not be immediately followed by a PROGRESS event." in result.output
    assert "Validation FAILED" in result.output


def test_check_json_output(monkeypatch, tmp_path, session_file):
    monkeypatch.setenv("OZTAIL_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("OZTAIL_SESSIONS_ROOT", str(tmp_path))
    payload = wire_session()
    payload[2]["oztamFlags"] = {"progressTooLong": True}
    session_file(payload, session_id="flagged")

    result = runner.invoke(app, ["check", "flagged", "--source", "file", "--json"])

    assert result.exit_code == EXIT_FAILED
    report = json.loads(result.stdout)
    assert report["session_id"] == "flagged"
    assert report["passed"] is False
    assert [v["kind"] for v in report["violations"]] == ["ProgressTooLong"]


def test_check_reports_decode_errors(session_file):
    payload = wire_session()
    payload[0]["events"][0]["timestamp"] = "2020-06-01T10:00:00Z"
    path = session_file(payload)

    result = runner.invoke(app, ["check", "s1", "--source", "file", "--path", str(path)])

    assert result.exit_code == EXIT_ERROR
    assert "Malformed timestamp" in result.output


def test_check_reports_missing_session(tmp_path):
    result = runner.invoke(app, ["check", "nope", "--source", "file", "--path", str(tmp_path / "nope.json")])

    assert result.exit_code == EXIT_ERROR
    assert "Failed to fetch session nope" in result.output


def test_check_rejects_unknown_source():
    result = runner.invoke(app, ["check", "s1", "--source", "ftp"])
    assert result.exit_code != 0


def test_invalid_configuration_exits_with_error(monkeypatch):
    monkeypatch.setenv("OZTAIL_TIMEOUT", "never")

    result = runner.invoke(app, ["check", "s1"])

    assert result.exit_code == EXIT_ERROR
    assert "invalid configuration" in result.output


def test_fetch_dumps_session_json(monkeypatch, session_file):
    monkeypatch.setenv("OZTAIL_LOG_LEVEL", "WARNING")
    path = session_file(wire_session())

    result = runner.invoke(app, ["fetch", "s1", "--source", "file", "--path", str(path)])

    assert result.exit_code == 0
    dumped = json.loads(result.stdout)
    assert [m["events"][0]["event"] for m in dumped] == ["LOAD", "BEGIN", "PROGRESS", "COMPLETE"]
    assert "oztamFlags" in dumped[0] and dumped[0]["oztamFlags"] is None
