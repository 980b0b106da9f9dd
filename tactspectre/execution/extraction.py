"""Result and model extraction.

Turns the symbolic paths recorded by the executor into concrete outcomes:
for every terminal path, one solver query produces input values that drive
execution down that path, together with the value the function returns
for them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from tactspectre.core.exceptions import FailureKind, PathError
from tactspectre.core.expressions import compile_term, free_variables, symbol
from tactspectre.core.solver import SolverContext
from tactspectre.execution.executor import ExecutionResult, ExplorationResult, PathFailure
from tactspectre.logging import get_logger


@dataclass
class SymbolicExecutionSuccess:
    """A feasible terminal path with a concrete witness."""

    function_name: str
    path_conditions: list[str]
    inputs: dict[str, int | bool]
    return_value: int | bool | None
    return_expression: str | None = None
    fell_through: bool = False

    @property
    def is_success(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "status": "success",
            "function": self.function_name,
            "path_conditions": list(self.path_conditions),
            "inputs": dict(self.inputs),
            "return_value": self.return_value,
            "return_expression": self.return_expression,
            "fell_through": self.fell_through,
        }


@dataclass
class SymbolicExecutionFailure:
    """A path that produced no witness, with the reason why."""

    function_name: str
    path_conditions: list[str]
    kind: FailureKind
    message: str
    construct: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "status": "failure",
            "function": self.function_name,
            "path_conditions": list(self.path_conditions),
            "kind": self.kind.name,
            "message": self.message,
            "construct": self.construct,
        }


PathOutcome = Union[SymbolicExecutionSuccess, SymbolicExecutionFailure]


@dataclass
class FunctionAnalysis:
    """Outcomes of one function, with the exploration that produced them."""

    function_name: str
    outcomes: list[PathOutcome] = field(default_factory=list)
    exploration: ExplorationResult | None = None

    @property
    def successes(self) -> list[SymbolicExecutionSuccess]:
        return [o for o in self.outcomes if isinstance(o, SymbolicExecutionSuccess)]

    @property
    def failures(self) -> list[SymbolicExecutionFailure]:
        return [o for o in self.outcomes if isinstance(o, SymbolicExecutionFailure)]

    @property
    def truncated(self) -> bool:
        return self.exploration is not None and self.exploration.truncated

    def has_failures(self) -> bool:
        return any(not o.is_success for o in self.outcomes)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data: dict[str, Any] = {
            "function": self.function_name,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }
        if self.exploration is not None:
            data["statistics"] = self.exploration.to_dict()
        return data


def extract_outcome(
    result: ExecutionResult,
    ctx: SolverContext,
    function_name: str = "",
) -> PathOutcome:
    """Produce the concrete outcome of one terminal path.

    Asserts the path condition into a fresh scope and, on sat, evaluates
    every free variable of the path condition and of the return expression
    under the model (with model completion), plus the return expression
    itself.

    Args:
        result: Terminal path recorded by the executor.
        ctx: Solver context used to build and check the terms.
        function_name: Name reported with the outcome.

    Returns:
        SymbolicExecutionSuccess on sat; SymbolicExecutionFailure of kind
        UNSATISFIABLE_PATH or SOLVER_UNKNOWN otherwise.
    """
    rendered = result.path_condition.render(ctx)
    check = result.path_condition.check(ctx)
    if not check.is_sat:
        kind = FailureKind.UNSATISFIABLE_PATH if check.is_unsat else FailureKind.SOLVER_UNKNOWN
        message = f"Solver result is {check.verdict.value}, no model available."
        if check.is_unknown and check.reason:
            message = f"{message} ({check.reason})"
        get_logger().debug(f"no model for '{function_name}': {message}", category="extraction")
        return SymbolicExecutionFailure(
            function_name, rendered, kind, message, details={"reason": check.reason}
        )

    variables = result.path_condition.free_variables()
    if result.return_value is not None:
        for name, sort in free_variables(result.return_value).items():
            variables.setdefault(name, sort)
    try:
        inputs = {
            name: ctx.evaluate(check.model, compile_term(symbol(name, sort), ctx))
            for name, sort in variables.items()
        }
        return_value = None
        if result.return_value is not None:
            return_value = ctx.evaluate(check.model, compile_term(result.return_value, ctx))
    except PathError as e:
        return SymbolicExecutionFailure(function_name, rendered, e.kind, e.message)
    return SymbolicExecutionSuccess(
        function_name,
        rendered,
        inputs,
        return_value,
        str(result.return_value) if result.return_value is not None else None,
        result.fell_through,
    )


def failure_outcome(
    failure: PathFailure,
    ctx: SolverContext,
    function_name: str = "",
) -> SymbolicExecutionFailure:
    """Convert a path aborted during exploration into a failure outcome."""
    return SymbolicExecutionFailure(
        function_name,
        failure.path_condition.render(ctx),
        failure.kind,
        failure.message,
        construct=failure.construct,
    )


def extract_outcomes(exploration: ExplorationResult, ctx: SolverContext) -> list[PathOutcome]:
    """Map every recorded path of an exploration to an outcome, in order."""
    outcomes: list[PathOutcome] = []
    for path in exploration.paths:
        if isinstance(path, PathFailure):
            outcomes.append(failure_outcome(path, ctx, exploration.function_name))
        else:
            outcomes.append(extract_outcome(path, ctx, exploration.function_name))
    return outcomes


__all__ = [
    "SymbolicExecutionSuccess",
    "SymbolicExecutionFailure",
    "PathOutcome",
    "FunctionAnalysis",
    "extract_outcome",
    "extract_outcomes",
    "failure_outcome",
]
