"""Symbolic state management for TactSpectre.
This module defines the per-path execution state of the explorer: the
variable bindings (SymbolicState) and the accumulated branch constraints
(PathCondition), both forked by value at every conditional.
"""
from __future__ import annotations
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from tactspectre.core.exceptions import (
    SolverUnknownError,
    TypeMismatchError,
    UnsatisfiablePathError,
)
from tactspectre.core.expressions import (
    Sort,
    SymExpr,
    compile_term,
    free_variables,
    symbol,
)
if TYPE_CHECKING:
    from tactspectre.core.solver import SolverContext, SolverResult
@dataclass
class SymbolicState:
    """Variable bindings of one execution path.
    Attributes:
        variables: Mapping from variable name to its current symbolic value.
    """
    variables: dict[str, SymExpr] = field(default_factory=dict)
    def clone(self) -> SymbolicState:
        """Create an independent copy of this state for branching.
        Expressions are immutable, so a shallow copy of the mapping is
        sufficient.
        """
        return SymbolicState(variables=dict(self.variables))
    def set_var(self, name: str, expr: SymExpr) -> None:
        """Bind `name` to `expr`, replacing any previous binding."""
        self.variables[name] = expr
    def get_var(self, name: str) -> SymExpr | None:
        """Get the binding of `name`, or None if unbound."""
        return self.variables.get(name)
    def __contains__(self, name: object) -> bool:
        return name in self.variables
    def __len__(self) -> int:
        return len(self.variables)
    def __repr__(self) -> str:
        bindings = ", ".join(f"{k}={v}" for k, v in self.variables.items())
        return f"SymbolicState({bindings})"
@dataclass
class PathCondition:
    """Conjunction of boolean constraints accumulated along one path.
    Constraints are append-only; clone() copies the list by value, so a
    forked sibling never observes later appends. An empty path condition
    is trivially satisfiable.
    """
    _constraints: list[SymExpr] = field(default_factory=list)
    @property
    def constraints(self) -> tuple[SymExpr, ...]:
        return tuple(self._constraints)
    def clone(self) -> PathCondition:
        """Create a value copy of this path condition."""
        return PathCondition(list(self._constraints))
    def add_constraint(self, expr: SymExpr) -> None:
        """Append a boolean constraint. No deduplication or simplification."""
        if not isinstance(expr, SymExpr) or not expr.is_bool:
            raise TypeMismatchError(f"Path constraint must be boolean, got {expr}")
        self._constraints.append(expr)
    def to_terms(self, ctx: SolverContext) -> list[Any]:
        """Compile every constraint into `ctx` terms."""
        return [compile_term(c, ctx) for c in self._constraints]
    def check(self, ctx: SolverContext) -> SolverResult:
        """Assert all constraints into a fresh solver scope and check."""
        return ctx.check(self.to_terms(ctx))
    def is_satisfiable(self, ctx: SolverContext) -> bool:
        """Check satisfiability of the path condition.
        Returns:
            True on sat, False on unsat.
        Raises:
            SolverUnknownError: If the solver cannot decide.
        """
        result = self.check(ctx)
        if result.is_unknown:
            raise SolverUnknownError(result.reason, self.render(ctx))
        return result.is_sat
    def get_model(self, ctx: SolverContext) -> dict[str, int | bool]:
        """Get a concrete assignment of the free variables of this condition.
        Raises:
            UnsatisfiablePathError: If the condition is unsatisfiable.
            SolverUnknownError: If the solver cannot decide.
        """
        result = self.check(ctx)
        if result.is_unsat:
            raise UnsatisfiablePathError(self.render(ctx))
        if result.is_unknown:
            raise SolverUnknownError(result.reason, self.render(ctx))
        return {
            name: ctx.evaluate(result.model, compile_term(symbol(name, sort), ctx))
            for name, sort in self.free_variables().items()
        }
    def free_variables(self) -> dict[str, Sort]:
        """Free variables of all constraints, in first-occurrence order."""
        found: dict[str, Sort] = {}
        for constraint in self._constraints:
            for name, sort in free_variables(constraint).items():
                found.setdefault(name, sort)
        return found
    def render(self, ctx: SolverContext) -> list[str]:
        """Human-readable constraint list, one entry per constraint."""
        return [ctx.render(term) for term in self.to_terms(ctx)]
    def __iter__(self) -> Iterator[SymExpr]:
        return iter(self._constraints)
    def __len__(self) -> int:
        return len(self._constraints)
    def __repr__(self) -> str:
        return f"PathCondition([{', '.join(str(c) for c in self._constraints)}])"
def create_initial_state(
    variables: dict[str, SymExpr] | None = None,
    constraints: list[SymExpr] | None = None,
) -> tuple[SymbolicState, PathCondition]:
    """Create the entry state and path condition for exploration.
    Args:
        variables: Initial bindings, typically parameters bound to fresh
            symbolic variables.
        constraints: Initial path constraints (preconditions).
    Returns:
        A fresh (SymbolicState, PathCondition) pair.
    """
    state = SymbolicState(variables=dict(variables or {}))
    path_condition = PathCondition()
    for constraint in constraints or []:
        path_condition.add_constraint(constraint)
    return state, path_condition
