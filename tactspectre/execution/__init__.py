"""Path exploration and outcome extraction."""

from tactspectre.execution.evaluator import evaluate, make_binary, make_unary
from tactspectre.execution.executor import (
    ExecutionConfig,
    ExecutionResult,
    ExplorationResult,
    PathFailure,
    SymbolicExecutor,
    explore,
)
from tactspectre.execution.extraction import (
    FunctionAnalysis,
    PathOutcome,
    SymbolicExecutionFailure,
    SymbolicExecutionSuccess,
    extract_outcome,
    extract_outcomes,
    failure_outcome,
)

__all__ = [
    "evaluate",
    "make_binary",
    "make_unary",
    "ExecutionConfig",
    "ExecutionResult",
    "ExplorationResult",
    "PathFailure",
    "SymbolicExecutor",
    "explore",
    "FunctionAnalysis",
    "PathOutcome",
    "SymbolicExecutionFailure",
    "SymbolicExecutionSuccess",
    "extract_outcome",
    "extract_outcomes",
    "failure_outcome",
]
