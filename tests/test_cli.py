from __future__ import annotations

import json

import pytest

from tactspectre.cli import EXIT_ERROR, EXIT_FAILURES, EXIT_OK, create_parser, main


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_run_text_report(examples_dir, capsys):
    assert main(["run", str(examples_dir / "math.tact")]) == EXIT_OK
    out = capsys.readouterr().out
    assert "TactSpectre - Symbolic Execution Report" in out
    assert "abs()" in out
    assert "Path: (>= x 0)" in out
    assert "4 function(s), 11 path(s), 0 failure(s)" in out


def test_run_json_single_function(examples_dir, capsys):
    code = main(["run", str(examples_dir / "math.tact"), "-f", "collatzStep", "--format", "json"])
    assert code == EXIT_OK
    data = json.loads(capsys.readouterr().out)
    assert data["meta"]["tool"] == "TactSpectre"
    (function,) = data["functions"]
    assert function["function"] == "collatzStep"
    assert [o["path_conditions"] for o in function["outcomes"]] == [
        ["(= (mod x 2) 0)"],
        ["(not (= (mod x 2) 0))"],
    ]
    assert data["summary"] == {"functions": 1, "paths": 2, "failures": 0}


def test_failures_set_exit_code(examples_dir, capsys):
    assert main(["run", str(examples_dir / "unsupported.tact")]) == EXIT_FAILURES
    out = capsys.readouterr().out
    assert "UNSUPPORTED_CONSTRUCT" in out


def test_report_written_to_file(examples_dir, tmp_path, capsys):
    report = tmp_path / "report.md"
    code = main(["run", str(examples_dir / "math.tact"), "--format", "markdown", "-o", str(report)])
    assert code == EXIT_OK
    assert report.read_text(encoding="utf-8").startswith("# TactSpectre")
    assert "Report saved to" in capsys.readouterr().err


def test_limits_from_command_line(examples_dir, capsys):
    code = main(["run", str(examples_dir / "math.tact"), "-f", "clamp", "--max-paths", "2"])
    assert code == EXIT_OK
    captured = capsys.readouterr()
    assert "Truncated" in captured.out
    assert "was truncated" in captured.err


def test_config_file_is_applied(examples_dir, tmp_path, capsys):
    (tmp_path / "tactspectre.toml").write_text('[output]\nformat = "json"\n', encoding="utf-8")
    assert main(["run", str(examples_dir / "math.tact"), "-f", "abs"]) == EXIT_OK
    assert json.loads(capsys.readouterr().out)["summary"]["paths"] == 2


@pytest.mark.parametrize(
    "argv_tail",
    [
        ["missing.tact"],
        ["broken.tact"],
        ["broken.tact", "--config", "nowhere.toml"],
    ],
)
def test_errors_exit_with_two(tmp_path, capsys, argv_tail):
    (tmp_path / "broken.tact").write_text("fun broken( {", encoding="utf-8")
    assert main(["run", *argv_tail]) == EXIT_ERROR
    assert "✗" in capsys.readouterr().err


def test_unknown_function(examples_dir, capsys):
    assert main(["run", str(examples_dir / "math.tact"), "-f", "nope"]) == EXIT_ERROR
    assert "Function 'nope' not found" in capsys.readouterr().err


def test_init(tmp_path, capsys):
    assert main(["init"]) == EXIT_OK
    assert (tmp_path / "tactspectre.toml").exists()
    assert main(["init", str(tmp_path)]) == EXIT_ERROR


def test_no_command_prints_help(capsys):
    assert main([]) == EXIT_OK
    assert "usage: tactspectre" in capsys.readouterr().out


def test_version(capsys):
    with pytest.raises(SystemExit):
        create_parser().parse_args(["--version"])
    assert "TactSpectre" in capsys.readouterr().out
