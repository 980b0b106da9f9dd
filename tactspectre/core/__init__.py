"""Core module for TactSpectre.
Provides:
- Symbolic expressions (Var, Const, BinOp, Compare, ...)
- Symbolic state and path conditions
- The solver capability interface and its Z3 backend
- The error taxonomy
"""

from tactspectre.core.exceptions import (
    FailureKind,
    ParseError,
    PathError,
    ResourceLimitError,
    SolverUnknownError,
    TactSpectreError,
    TypeMismatchError,
    UnsatisfiablePathError,
    UnsupportedConstructError,
)
from tactspectre.core.expressions import (
    BinOp,
    BoolConst,
    BoolVar,
    Compare,
    Const,
    Logical,
    Not,
    Sort,
    SymExpr,
    UnaryOp,
    Var,
    compile_term,
    free_variables,
)
from tactspectre.core.solver import (
    SolverContext,
    SolverResult,
    Verdict,
    Z3Context,
    create_solver,
)
from tactspectre.core.state import PathCondition, SymbolicState, create_initial_state

__all__ = [
    "Sort",
    "SymExpr",
    "Var",
    "Const",
    "BinOp",
    "UnaryOp",
    "BoolVar",
    "BoolConst",
    "Compare",
    "Logical",
    "Not",
    "compile_term",
    "free_variables",
    "SymbolicState",
    "PathCondition",
    "create_initial_state",
    "SolverContext",
    "SolverResult",
    "Verdict",
    "Z3Context",
    "create_solver",
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
