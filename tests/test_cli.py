import json

from typer.testing import CliRunner

from timesheet_cli.__main__ import app

runner = CliRunner()


def _run(path, *args, env=None):
    return runner.invoke(app, ["--file", str(path), *args], env=env)


def test_missing_command_exits_1(tmp_path):
    result = runner.invoke(app, [])
    assert result.exit_code == 1
    assert "Not enough parameters given" in result.output


def test_unknown_command_is_a_usage_error(tmp_path):
    result = _run(tmp_path / "ts.json", "x")
    assert result.exit_code not in (0, 1)


def test_list_creates_empty_file(tmp_path):
    path = tmp_path / "ts.json"
    result = _run(path, "l")
    assert result.exit_code == 0, result.output
    assert json.loads(path.read_text()) == []


def test_default_path_is_under_home(tmp_path):
    result = runner.invoke(app, ["l"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "home" / ".timesheet").exists()


def test_start_end_then_reports(tmp_path):
    path = tmp_path / "ts.json"
    r1 = _run(path, "s", "09:00")
    assert r1.exit_code == 0, r1.output
    assert "09:00:00 | s" in r1.output
    r2 = _run(path, "e", "17:00")
    assert r2.exit_code == 0, r2.output

    stored = json.loads(path.read_text())
    assert [e["type"] for e in stored] == ["s", "e"]

    listed = _run(path, "t")
    assert listed.exit_code == 0
    assert "Today:" in listed.output
    assert "17:00:00 | e" in listed.output

    report = _run(path, "a")
    assert report.exit_code == 0, report.output
    assert ": 8h00m" in report.output
    assert "Expected: 8h00m" in report.output
    assert "Diff: 0h00m" in report.output


def test_quota_from_environment(tmp_path):
    path = tmp_path / "ts.json"
    _run(path, "start", "09:00")
    _run(path, "stop", "17:00")
    report = _run(path, "all", env={"TIMESHEET_DAILY_QUOTA_HOURS": "7.5"})
    assert report.exit_code == 0, report.output
    assert "Expected: 7h30m" in report.output
    assert "Diff: 0h30m" in report.output


def test_start_without_time_uses_now(tmp_path):
    path = tmp_path / "ts.json"
    result = _run(path, "s")
    assert result.exit_code == 0, result.output
    assert result.output == ""
    assert len(json.loads(path.read_text())) == 1

    calc = _run(path, "c")
    assert calc.exit_code == 0, calc.output
    assert "Working for:" in calc.output
    assert "Clock off at:" in calc.output


def test_bad_time_exits_1_without_writing(tmp_path):
    path = tmp_path / "ts.json"
    result = _run(path, "s", "9am")
    assert result.exit_code == 1
    assert "Invalid time" in result.output
    assert not path.exists()


def test_malformed_file_exits_1(tmp_path):
    path = tmp_path / "ts.json"
    path.write_text('[{"timestamp": "2024-01-01T09:00:00+00:00", "type": "x"}]')
    result = _run(path, "l")
    assert result.exit_code == 1
    assert "malformed timesheet" in result.output


def test_verify(tmp_path):
    path = tmp_path / "ts.json"
    assert _run(path, "v").exit_code == 0
    path.write_text(
        json.dumps(
            [
                {"timestamp": "2024-01-01T17:00:00+00:00", "type": "e"},
            ]
        )
    )
    result = _run(path, "verify")
    assert result.exit_code == 1
    assert "orphan_end" in result.output


def test_subcommand_help_leaves_file_alone(tmp_path):
    path = tmp_path / "ts.json"
    result = _run(path, "s", "--help")
    assert result.exit_code == 0, result.output
    assert not path.exists()


def test_out_of_range_timestamp_exits_1(tmp_path):
    path = tmp_path / "ts.json"
    path.write_text('[{"timestamp": "0001-01-01T00:30:00+05:00", "type": "s"}]')
    for cmd in ("l", "t", "c", "a", "v"):
        result = _run(path, cmd)
        assert result.exit_code == 1, (cmd, result.output)
        assert "malformed timesheet" in result.output
