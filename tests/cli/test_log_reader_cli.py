from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from log_reader.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _write(tmp_path: Path, text: str, name: str = "app.log") -> Path:
    p = tmp_path / name
    p.write_bytes(text.encode("utf-8"))
    return p


def test_report_for_mixed_file(runner: CliRunner, tmp_path: Path):
    log = _write(tmp_path, '{"type":"B"}\n{"type":"A"}\nnot json\n{"type":"A"}\n')

    result = runner.invoke(cli, [str(log)])

    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0] == "Found 1 invalid log lines (8 bytes)"
    assert lines[1] == "Found 2 valid log types"
    assert lines[3] == "┃ Type ┃ Count ┃ Bytes ┃"
    assert lines[5] == '│ "A"  │     2 │    24 │'
    assert lines[6] == '│ "B"  │     1 │    12 │'
    assert lines[7].startswith("└")


def test_empty_file_prints_zero_types_and_no_table(runner: CliRunner, tmp_path: Path):
    log = _write(tmp_path, "")

    result = runner.invoke(cli, [str(log)])

    assert result.exit_code == 0
    assert result.output == "Found 0 valid log types\n"


def test_missing_file_exits_non_zero_without_report(runner: CliRunner, tmp_path: Path):
    result = runner.invoke(cli, [str(tmp_path / "nope.log")])

    assert result.exit_code == 1
    assert "Found" not in result.output
    assert "Error opening file" in result.output


def test_invalid_utf8_is_fatal(runner: CliRunner, tmp_path: Path):
    log = tmp_path / "binary.log"
    log.write_bytes(b'{"type":"A"}\n\xff\xfe\n')

    result = runner.invoke(cli, [str(log)])

    assert result.exit_code == 1
    assert "Found" not in result.output


def test_input_argument_is_required(runner: CliRunner):
    result = runner.invoke(cli, [])

    assert result.exit_code != 0
    assert "INPUT" in result.output


def test_version(runner: CliRunner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_debug_level_shows_parse_failures(runner: CliRunner, tmp_path: Path):
    log = _write(tmp_path, 'garbage\n{"type":"A"}\n')

    result = runner.invoke(cli, ["--log-level", "debug", str(log)])

    assert result.exit_code == 0
    assert "Error deserializing row" in result.output
    assert "Found 1 invalid log lines (7 bytes)" in result.output


def test_config_file_selects_json_logging(runner: CliRunner, tmp_path: Path):
    cfg = tmp_path / "cfg.yml"
    cfg.write_text("logging:\n  level: INFO\n  format: json\n", encoding="utf-8")
    log = _write(tmp_path, '{"type":"A"}\n')

    result = runner.invoke(cli, ["--config", str(cfg), str(log)])

    assert result.exit_code == 0
    assert '"level": "INFO"' in result.output
    assert '"types": 1' in result.output


def test_lone_surrogate_type_is_reported_as_invalid(runner: CliRunner, tmp_path: Path):
    log = _write(tmp_path, '{"type":"\\ud800"}\n{"type":1e400}\n')

    result = runner.invoke(cli, [str(log)])

    assert result.exit_code == 0
    assert result.exception is None
    assert result.output == "Found 2 invalid log lines (31 bytes)\nFound 0 valid log types\n"
