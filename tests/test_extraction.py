from __future__ import annotations

from conftest import ABS_SOURCE, COLLATZ_SOURCE, explore_source

from tactspectre.core.exceptions import FailureKind
from tactspectre.core.expressions import BinOp, BoolConst, Compare, Const, Var
from tactspectre.core.state import PathCondition, SymbolicState
from tactspectre.execution.executor import ExecutionResult, ExplorationResult, PathFailure
from tactspectre.execution.extraction import (
    FunctionAnalysis,
    SymbolicExecutionFailure,
    SymbolicExecutionSuccess,
    extract_outcome,
    extract_outcomes,
    failure_outcome,
)
from tactspectre.testing import smt_div


def test_abs_outcomes_are_consistent(z3_ctx):
    outcomes = extract_outcomes(explore_source(ABS_SOURCE, z3_ctx), z3_ctx)
    assert [o.path_conditions for o in outcomes] == [["(>= x 0)"], ["(not (>= x 0))"]]
    non_negative, negative = outcomes
    assert non_negative.inputs["x"] >= 0
    assert non_negative.return_value == non_negative.inputs["x"]
    assert negative.inputs["x"] < 0
    assert negative.return_value == -negative.inputs["x"]
    assert negative.return_expression == "-x"
    assert all(o.function_name == "abs" for o in outcomes)


def test_collatz_outcomes(z3_ctx):
    even, odd = extract_outcomes(explore_source(COLLATZ_SOURCE, z3_ctx), z3_ctx)
    x = even.inputs["x"]
    assert x % 2 == 0
    assert even.return_value == smt_div(x, 2)
    x = odd.inputs["x"]
    assert x % 2 == 1
    assert odd.return_value == x * 3 + 1


def test_return_expression_variables_are_completed(z3_ctx):
    source = """
    fun f(x: Int, y: Int): Int {
        if (x > 0) {
            return x + y;
        }
        return 0;
    }
    """
    first, second = extract_outcomes(explore_source(source, z3_ctx), z3_ctx)
    assert set(first.inputs) == {"x", "y"}
    assert first.return_value == first.inputs["x"] + first.inputs["y"]
    assert set(second.inputs) == {"x"}
    assert second.return_value == 0


def test_empty_path_condition_has_no_inputs(z3_ctx):
    result = ExecutionResult(SymbolicState(), PathCondition(), Const(7))
    outcome = extract_outcome(result, z3_ctx, "seven")
    assert isinstance(outcome, SymbolicExecutionSuccess)
    assert outcome.path_conditions == []
    assert outcome.inputs == {}
    assert outcome.return_value == 7


def test_unsatisfiable_path_becomes_failure(z3_ctx):
    pc = PathCondition()
    pc.add_constraint(BoolConst(False))
    outcome = extract_outcome(ExecutionResult(SymbolicState(), pc, Const(1)), z3_ctx, "f")
    assert isinstance(outcome, SymbolicExecutionFailure)
    assert outcome.kind is FailureKind.UNSATISFIABLE_PATH
    assert outcome.path_conditions == ["false"]
    assert outcome.message == "Solver result is unsat, no model available."


def test_unknown_becomes_failure(bounded_ctx):
    pc = PathCondition()
    pc.add_constraint(Compare(">", Var("x"), Const(1000)))
    outcome = extract_outcome(ExecutionResult(SymbolicState(), pc, Var("x")), bounded_ctx)
    assert outcome.kind is FailureKind.SOLVER_UNKNOWN
    assert outcome.message == (
        "Solver result is unknown, no model available. (bounded domain exhausted)"
    )
    assert outcome.details == {"reason": "bounded domain exhausted"}


def test_division_by_zero_follows_solver_semantics(bounded_ctx):
    result = ExecutionResult(SymbolicState(), PathCondition(), BinOp("/", Var("x"), Const(0)))
    outcome = extract_outcome(result, bounded_ctx)
    assert outcome.inputs == {"x": 0}
    assert outcome.return_value == 0


def test_fall_through_outcome(z3_ctx):
    result = ExecutionResult(SymbolicState(), PathCondition(), None, fell_through=True)
    outcome = extract_outcome(result, z3_ctx, "f")
    assert outcome.fell_through
    assert outcome.return_value is None
    assert outcome.return_expression is None
    assert outcome.to_dict()["fell_through"] is True


def test_failure_outcome_keeps_kind_and_construct(z3_ctx):
    pc = PathCondition()
    pc.add_constraint(Compare(">", Var("n"), Const(0)))
    failure = PathFailure(
        FailureKind.UNSUPPORTED_CONSTRUCT, "Unsupported construct: while loop", pc, "while loop"
    )
    outcome = failure_outcome(failure, z3_ctx, "countdown")
    assert outcome.path_conditions == ["(> n 0)"]
    assert outcome.construct == "while loop"
    assert outcome.to_dict() == {
        "status": "failure",
        "function": "countdown",
        "path_conditions": ["(> n 0)"],
        "kind": "UNSUPPORTED_CONSTRUCT",
        "message": "Unsupported construct: while loop",
        "construct": "while loop",
    }


def test_function_analysis(z3_ctx):
    exploration = ExplorationResult(function_name="f")
    pc = PathCondition()
    exploration.paths.append(ExecutionResult(SymbolicState(), pc, Const(1)))
    exploration.paths.append(PathFailure(FailureKind.TYPE_MISMATCH, "bad guard", pc))
    analysis = FunctionAnalysis("f", extract_outcomes(exploration, z3_ctx), exploration)
    assert len(analysis.successes) == 1
    assert len(analysis.failures) == 1
    assert analysis.has_failures()
    assert not analysis.truncated
    data = analysis.to_dict()
    assert data["function"] == "f"
    assert [o["status"] for o in data["outcomes"]] == ["success", "failure"]
    assert data["statistics"]["results"] == 1
