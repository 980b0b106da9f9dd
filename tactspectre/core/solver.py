"""Solver boundary for TactSpectre.
This module defines the narrow capability interface the engine needs from a
constraint solver (declare constants, build terms, check a fresh scope,
read a model) and the Z3 implementation of it, with caching and
model extraction utilities.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

import z3

from tactspectre.core.exceptions import SolverUnknownError
from tactspectre.logging import get_logger

ARITH_OPS = ("+", "-", "*", "/", "%")
COMPARE_OPS = ("==", "!=", ">", ">=", "<", "<=")
LOGICAL_OPS = ("&&", "||")


class Verdict(Enum):
    """Possible answers of a satisfiability check."""

    SAT = "sat"
    UNSAT = "unsat"
    UNKNOWN = "unknown"


@dataclass
class SolverResult:
    """Result of a satisfiability check."""

    is_sat: bool
    is_unsat: bool
    is_unknown: bool
    model: Any | None = None
    reason: str = ""

    @property
    def verdict(self) -> Verdict:
        if self.is_sat:
            return Verdict.SAT
        if self.is_unsat:
            return Verdict.UNSAT
        return Verdict.UNKNOWN

    @staticmethod
    def sat(model: Any) -> SolverResult:
        return SolverResult(is_sat=True, is_unsat=False, is_unknown=False, model=model)

    @staticmethod
    def unsat() -> SolverResult:
        return SolverResult(is_sat=False, is_unsat=True, is_unknown=False)

    @staticmethod
    def unknown(reason: str = "unknown") -> SolverResult:
        return SolverResult(is_sat=False, is_unsat=False, is_unknown=True, reason=reason)


class SolverContext(ABC):
    """Capability interface between the engine and a constraint solver.
    Terms are opaque to the engine: only the context that built a term
    may combine, check, evaluate or render it. Constants are declared by
    name and are idempotent per name within one context. Every call to
    check() runs in its own scope, so no assertion made for one path is
    ever visible to another.
    """

    name: str = "abstract"

    @abstractmethod
    def int_const(self, name: str) -> Any:
        """Declare (or obtain) the free integer constant `name`."""

    @abstractmethod
    def bool_const(self, name: str) -> Any:
        """Declare (or obtain) the free boolean constant `name`."""

    @abstractmethod
    def int_val(self, value: int) -> Any:
        """Integer literal term."""

    @abstractmethod
    def bool_val(self, value: bool) -> Any:
        """Boolean literal term."""

    @abstractmethod
    def arith(self, op: str, left: Any, right: Any) -> Any:
        """Binary arithmetic term for op in ARITH_OPS."""

    @abstractmethod
    def neg(self, operand: Any) -> Any:
        """Arithmetic negation."""

    @abstractmethod
    def compare(self, op: str, left: Any, right: Any) -> Any:
        """Comparison term for op in COMPARE_OPS."""

    @abstractmethod
    def logical(self, op: str, left: Any, right: Any) -> Any:
        """Boolean connective for op in LOGICAL_OPS."""

    @abstractmethod
    def negate(self, operand: Any) -> Any:
        """Boolean negation."""

    @abstractmethod
    def check(self, terms: Sequence[Any]) -> SolverResult:
        """Assert `terms` into a fresh scope and check satisfiability."""

    @abstractmethod
    def evaluate(self, model: Any, term: Any) -> int | bool:
        """Evaluate `term` under `model`, completing unassigned constants."""

    @abstractmethod
    def render(self, term: Any) -> str:
        """Human-readable (SMT-LIB style) rendering of a term."""


class Z3Context(SolverContext):
    """Z3-backed solver context with caching and utilities.
    This class provides:
    - A private z3.Context so terms never leak between engines
    - One fresh z3.Solver per query, with timeout
    - Result caching for repeated queries
    - Model evaluation and formatting
    """

    name = "z3"

    def __init__(self, timeout_ms: int = 10000, enable_caching: bool = True) -> None:
        """Initialize the context.
        Args:
            timeout_ms: Per-query solver timeout in milliseconds (default: 10s).
            enable_caching: Reuse results of identical queries.
        """
        self._ctx = z3.Context()
        self.timeout_ms = timeout_ms
        self.enable_caching = enable_caching
        self._cache: dict[str, SolverResult] = {}
        self._query_count = 0
        self._cache_hits = 0

    @property
    def z3_context(self) -> z3.Context:
        return self._ctx

    def int_const(self, name: str) -> z3.ArithRef:
        return z3.Int(name, ctx=self._ctx)

    def bool_const(self, name: str) -> z3.BoolRef:
        return z3.Bool(name, ctx=self._ctx)

    def int_val(self, value: int) -> z3.ArithRef:
        return z3.IntVal(value, ctx=self._ctx)

    def bool_val(self, value: bool) -> z3.BoolRef:
        return z3.BoolVal(value, ctx=self._ctx)

    def arith(self, op: str, left: z3.ArithRef, right: z3.ArithRef) -> z3.ArithRef:
        # unbound ArithRef methods pin the operand order; numeral subclasses
        # may otherwise take over through reflected operators
        if op == "+":
            return z3.ArithRef.__add__(left, right)
        elif op == "-":
            return z3.ArithRef.__sub__(left, right)
        elif op == "*":
            return z3.ArithRef.__mul__(left, right)
        elif op == "/":
            return z3.ArithRef.__truediv__(left, right)
        elif op == "%":
            return z3.ArithRef.__mod__(left, right)
        raise ValueError(f"Unknown arithmetic operator: {op}")

    def neg(self, operand: z3.ArithRef) -> z3.ArithRef:
        return z3.ArithRef.__neg__(operand)

    def compare(self, op: str, left: z3.ExprRef, right: z3.ExprRef) -> z3.BoolRef:
        if op == "==":
            return z3.ExprRef.__eq__(left, right)
        elif op == "!=":
            return z3.Not(z3.ExprRef.__eq__(left, right))
        elif op == ">":
            return z3.ArithRef.__gt__(left, right)
        elif op == ">=":
            return z3.ArithRef.__ge__(left, right)
        elif op == "<":
            return z3.ArithRef.__lt__(left, right)
        elif op == "<=":
            return z3.ArithRef.__le__(left, right)
        raise ValueError(f"Unknown comparison operator: {op}")

    def logical(self, op: str, left: z3.BoolRef, right: z3.BoolRef) -> z3.BoolRef:
        if op == "&&":
            return z3.And(left, right)
        elif op == "||":
            return z3.Or(left, right)
        raise ValueError(f"Unknown logical operator: {op}")

    def negate(self, operand: z3.BoolRef) -> z3.BoolRef:
        return z3.Not(operand)

    def check(self, terms: Sequence[z3.BoolRef]) -> SolverResult:
        """Check satisfiability of `terms` in a fresh solver.
        Args:
            terms: Z3 boolean terms asserted conjunctively.
        Returns:
            SolverResult indicating sat/unsat/unknown with optional model.
        """
        terms = list(terms)
        self._query_count += 1
        solver = z3.Solver(ctx=self._ctx)
        solver.add(*terms)
        # the SMT-LIB dump carries the declarations, so `x: Int` and `x: Bool`
        # never share an entry
        cache_key = solver.sexpr()
        if self.enable_caching and cache_key in self._cache:
            self._cache_hits += 1
            return self._cache[cache_key]
        solver.set("timeout", self.timeout_ms)
        result = solver.check()
        if result == z3.sat:
            outcome = SolverResult.sat(solver.model())
        elif result == z3.unsat:
            outcome = SolverResult.unsat()
        else:
            outcome = SolverResult.unknown(solver.reason_unknown())
        get_logger().trace(
            f"check {len(terms)} constraint(s): {outcome.verdict.value}",
            category="solver",
        )
        if self.enable_caching and not outcome.is_unknown:
            self._cache[cache_key] = outcome
        return outcome

    def evaluate(self, model: z3.ModelRef, term: z3.ExprRef) -> int | bool:
        value = model.eval(term, model_completion=True)
        if z3.is_int_value(value):
            return value.as_long()
        if z3.is_true(value):
            return True
        if z3.is_false(value):
            return False
        raise SolverUnknownError(f"model value {value} is not concrete")

    def render(self, term: z3.ExprRef) -> str:
        # sexpr() wraps long terms over several lines
        return " ".join(term.sexpr().split())

    def implies(self, antecedent: z3.BoolRef, consequent: z3.BoolRef) -> bool:
        """Check if antecedent implies consequent.
        Returns:
            True if antecedent => consequent is valid.
        """
        return self.check([antecedent, z3.Not(consequent)]).is_unsat

    def reset(self) -> None:
        """Drop cached results and statistics."""
        self._cache.clear()
        self._query_count = 0
        self._cache_hits = 0

    def get_stats(self) -> dict[str, int]:
        """Get solver statistics."""
        return {
            "queries": self._query_count,
            "cache_hits": self._cache_hits,
            "cache_size": len(self._cache),
        }

    def __repr__(self) -> str:
        return f"Z3Context(queries={self._query_count}, cache_hits={self._cache_hits})"


def create_solver(backend: str = "z3", **kwargs: Any) -> SolverContext:
    """Create a solver context by backend name ("z3" or "bounded")."""
    backend = backend.lower()
    if backend == "z3":
        return Z3Context(**kwargs)
    if backend == "bounded":
        from tactspectre.testing.bounded_solver import BoundedSolverContext

        kwargs.pop("timeout_ms", None)
        kwargs.pop("enable_caching", None)
        return BoundedSolverContext(**kwargs)
    raise ValueError(f"Unknown solver backend: {backend}")


__all__ = [
    "ARITH_OPS",
    "COMPARE_OPS",
    "LOGICAL_OPS",
    "Verdict",
    "SolverResult",
    "SolverContext",
    "Z3Context",
    "create_solver",
]
