from __future__ import annotations

import pytest
from conftest import ABS_SOURCE, COLLATZ_SOURCE, first_function

from tactspectre import (
    ExecutionConfig,
    ParseError,
    analyze_file,
    analyze_source,
    bind_parameters,
    explore_function,
    run_symbolic_execution,
)
from tactspectre.core.exceptions import FailureKind
from tactspectre.core.expressions import BoolVar, Var


def test_run_symbolic_execution_abs():
    outcomes = run_symbolic_execution(ABS_SOURCE)
    assert [o.path_conditions for o in outcomes] == [["(>= x 0)"], ["(not (>= x 0))"]]
    assert all(o.is_success for o in outcomes)
    assert all(o.return_value >= 0 for o in outcomes)


def test_outcomes_are_flattened_across_functions():
    outcomes = run_symbolic_execution(ABS_SOURCE + COLLATZ_SOURCE)
    assert [o.function_name for o in outcomes] == ["abs", "abs", "collatzStep", "collatzStep"]


DISTINCT_TEMPLATE = """
fun {name}(a: {t}, b: {t}, c: {t}): Int {{
    if (a != b) {{
        if (a != c) {{
            if (b != c) {{
                return 1;
            }}
        }}
    }}
    return 0;
}}
"""


def test_shared_solver_keeps_parameter_sorts_apart():
    source = DISTINCT_TEMPLATE.format(name="ints", t="Int") + DISTINCT_TEMPLATE.format(
        name="bools", t="Bool"
    )
    ints, bools = analyze_source(source)
    assert sorted(o.return_value for o in ints.outcomes) == [0, 0, 0, 1]
    assert [o.return_value for o in bools.outcomes] == [0, 0, 0]
    for outcome in ints.outcomes + bools.outcomes:
        assert outcome.is_success
        distinct = len(set(outcome.inputs.values())) == 3
        assert outcome.return_value == (1 if distinct else 0)


def test_function_filter():
    (analysis,) = analyze_source(ABS_SOURCE + COLLATZ_SOURCE, "collatzStep")
    assert analysis.function_name == "collatzStep"
    with pytest.raises(ValueError, match="Function 'missing' not found in source"):
        analyze_source(ABS_SOURCE, "missing")


def test_parse_errors_propagate():
    with pytest.raises(ParseError):
        run_symbolic_execution("fun broken( {")


def test_bind_parameters_by_declared_type():
    func = first_function("fun f(a: Int, flag: Bool, maybe: Bool?, raw) { return; }")
    state, pc = bind_parameters(func)
    assert state.variables == {
        "a": Var("a"),
        "flag": BoolVar("flag"),
        "maybe": BoolVar("maybe"),
        "raw": Var("raw"),
    }
    assert len(pc) == 0


def test_boolean_parameters_get_boolean_witnesses(examples_dir):
    analyses = analyze_file(examples_dir / "math.tact", "choose")
    (choose,) = analyses
    assert [o.path_conditions for o in choose.outcomes] == [
        ["(and flag (> a b))"],
        ["(not (and flag (> a b)))", "(not flag)"],
        ["(not (and flag (> a b)))", "(not (not flag))"],
    ]
    taken, disabled, fallback = choose.outcomes
    assert taken.inputs["flag"] is True
    assert taken.return_value == taken.inputs["a"] - taken.inputs["b"]
    assert list(disabled.inputs) == ["flag", "a", "b"]
    assert disabled.inputs["flag"] is False
    assert disabled.return_value == 0
    assert fallback.inputs["flag"] is True
    assert fallback.inputs["a"] <= fallback.inputs["b"]


def test_analyze_file_all_functions(examples_dir):
    analyses = analyze_file(examples_dir / "math.tact")
    assert [a.function_name for a in analyses] == ["abs", "collatzStep", "clamp", "choose"]
    assert [len(a.outcomes) for a in analyses] == [2, 2, 4, 3]
    assert not any(a.has_failures() for a in analyses)


def test_analyze_file_reports_unsupported(examples_dir):
    countdown, dead = analyze_file(examples_dir / "unsupported.tact")
    failure, success = countdown.outcomes
    assert failure.kind is FailureKind.UNSUPPORTED_CONSTRUCT
    assert failure.path_conditions == ["(> n 0)"]
    assert success.return_value == 0
    assert success.inputs["n"] <= 0
    assert dead.outcomes == []
    assert dead.exploration.paths_pruned == 1


def test_analyze_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        analyze_file(tmp_path / "nope.tact")


def test_explore_function_with_bounded_backend():
    config = ExecutionConfig(solver_backend="bounded")
    analysis = explore_function(first_function(ABS_SOURCE), config)
    non_negative, negative = analysis.outcomes
    assert non_negative.inputs == {"x": 0}
    assert negative.inputs == {"x": -1}
    assert negative.return_value == 1
