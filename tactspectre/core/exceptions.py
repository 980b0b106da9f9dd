"""
Error taxonomy for TactSpectre.
Every error that can stop a single execution path derives from PathError,
so the executor can record it against that path and keep exploring the
others. Infeasible branches are not errors and have no class here.
- UnsupportedConstructError: AST node kind the executor does not model
- TypeMismatchError: operator applied to operand sorts it cannot accept
- SolverUnknownError: the solver could not decide satisfiability
- UnsatisfiablePathError: model requested for an infeasible path
- ResourceLimitError: caller-imposed exploration budget exceeded
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum, auto
from typing import Any


class FailureKind(Enum):
    """Categories of per-path failure outcomes."""

    UNSUPPORTED_CONSTRUCT = auto()
    TYPE_MISMATCH = auto()
    SOLVER_UNKNOWN = auto()
    UNSATISFIABLE_PATH = auto()
    RESOURCE_LIMIT = auto()


class TactSpectreError(Exception):
    """Base class for all TactSpectre errors."""


class ParseError(TactSpectreError):
    """Raised by the front-end on malformed source text."""

    def __init__(self, message: str, line: int = 0, column: int = 0):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"Line {line}, Col {column}: {message}")


class PathError(TactSpectreError):
    """An error that aborts exploration of one path only.
    Attributes:
        kind: FailureKind reported for the aborted path.
        constraints: Path condition constraints at the failure point, if known.
    """

    kind: FailureKind = FailureKind.UNSUPPORTED_CONSTRUCT

    def __init__(self, message: str, constraints: Sequence[Any] | None = None):
        self.message = message
        self.constraints: list[Any] = list(constraints or [])
        super().__init__(message)


class UnsupportedConstructError(PathError):
    """Raised for loops, calls, field access and unknown operators."""

    kind = FailureKind.UNSUPPORTED_CONSTRUCT

    def __init__(self, construct: str, detail: str = ""):
        self.construct = construct
        message = f"Unsupported construct: {construct}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class TypeMismatchError(PathError):
    """Raised when an operator receives operands of the wrong sort."""

    kind = FailureKind.TYPE_MISMATCH


class SolverUnknownError(PathError):
    """Raised when the solver answers unknown; never coerced to sat/unsat."""

    kind = FailureKind.SOLVER_UNKNOWN

    def __init__(
        self,
        reason: str = "unknown",
        constraints: Sequence[Any] | None = None,
    ):
        self.reason = reason
        super().__init__(f"Solver result is unknown ({reason})", constraints)


class UnsatisfiablePathError(PathError):
    """Raised when a model is requested for an unsatisfiable path condition."""

    kind = FailureKind.UNSATISFIABLE_PATH

    def __init__(self, constraints: Sequence[Any] | None = None):
        super().__init__("Path condition is unsatisfiable", constraints)


class ResourceLimitError(PathError):
    """Raised when a path exceeds the caller-imposed exploration budget."""

    kind = FailureKind.RESOURCE_LIMIT

    def __init__(self, resource: str, current: Any, limit: Any):
        self.resource = resource
        self.current = current
        self.limit = limit
        super().__init__(f"{resource} limit exceeded: {current} >= {limit}")


__all__ = [
    "FailureKind",
    "TactSpectreError",
    "ParseError",
    "PathError",
    "UnsupportedConstructError",
    "TypeMismatchError",
    "SolverUnknownError",
    "UnsatisfiablePathError",
    "ResourceLimitError",
]
