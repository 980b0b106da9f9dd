from __future__ import annotations

import json

import pytest
from conftest import ABS_SOURCE

from tactspectre.api import analyze_source, run_symbolic_execution
from tactspectre.core.exceptions import FailureKind
from tactspectre.execution.extraction import FunctionAnalysis, SymbolicExecutionFailure
from tactspectre.logging import Colors
from tactspectre.reporting import (
    JSONFormatter,
    MarkdownFormatter,
    TextFormatter,
    format_outcomes,
    format_report,
)

UNSUPPORTED = SymbolicExecutionFailure(
    "countdown",
    ["(> n 0)"],
    FailureKind.UNSUPPORTED_CONSTRUCT,
    "Unsupported construct: while loop (at 3:9)",
    "while loop",
)


@pytest.fixture
def abs_analyses():
    return analyze_source(ABS_SOURCE)


def test_text_report(abs_analyses):
    text = TextFormatter(color=False).format(abs_analyses, "math.tact")
    assert "File:      math.tact" in text
    assert "┌─ abs() " in text
    assert "[1] ✓ returns" in text
    assert "Path: (not (>= x 0))" in text
    assert "↳ Inputs:" in text
    assert "Return expression: -x" in text
    assert "1 function(s), 2 path(s), 0 failure(s)" in text
    assert "\033[" not in text


def test_text_report_options(abs_analyses):
    text = TextFormatter(color=True, verbose=True, show_expressions=False).format(abs_analyses)
    assert Colors.GREEN in text
    assert "Solver queries:" in text
    assert "Return expression" not in text


def test_text_report_failure_and_empty_function():
    analyses = [FunctionAnalysis("countdown", [UNSUPPORTED]), FunctionAnalysis("dead")]
    text = TextFormatter(color=False).format(analyses)
    assert "[1] ✗ UNSUPPORTED_CONSTRUCT" in text
    assert "Unsupported construct: while loop (at 3:9)" in text
    assert "No terminal paths." in text
    assert "2 function(s), 1 path(s), 1 failure(s)" in text


def test_empty_path_condition_shown_as_true():
    outcomes = run_symbolic_execution("fun one(): Int { return 1; }")
    assert "Path: true" in format_outcomes(outcomes, color=False)


def test_json_report(abs_analyses):
    data = json.loads(JSONFormatter().format(abs_analyses, "math.tact"))
    assert data["source_file"] == "math.tact"
    (function,) = data["functions"]
    assert function["statistics"]["forks"] == 1
    assert [o["status"] for o in function["outcomes"]] == ["success", "success"]
    assert data["summary"] == {"functions": 1, "paths": 2, "failures": 0}


def test_json_without_statistics(abs_analyses):
    data = json.loads(JSONFormatter(include_statistics=False).format(abs_analyses))
    assert "statistics" not in data["functions"][0]


def test_markdown_report(abs_analyses):
    markdown = MarkdownFormatter().format(abs_analyses)
    assert "## `abs`" in markdown
    assert "| Forks | 1 |" in markdown
    assert "| 1 | `(>= x 0)` |" in markdown
    failure_md = MarkdownFormatter().format([FunctionAnalysis("countdown", [UNSUPPORTED])])
    assert "**UNSUPPORTED_CONSTRUCT**" in failure_md


def test_format_report_dispatch(abs_analyses, tmp_path):
    assert format_report(abs_analyses, "md").startswith("# TactSpectre")
    assert json.loads(format_report(abs_analyses, "JSON"))["summary"]["paths"] == 2
    assert "╔" in format_report(abs_analyses, "unknown", color=False)
    target = tmp_path / "out.json"
    JSONFormatter().save(abs_analyses, str(target))
    assert json.loads(target.read_text(encoding="utf-8"))["summary"]["functions"] == 1


def test_format_outcomes_names_function():
    text = format_outcomes([UNSUPPORTED], color=False)
    assert "countdown()" in text
    assert "Path: (> n 0)" in text
