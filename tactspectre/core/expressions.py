"""Symbolic expressions for TactSpectre.
A symbolic expression is an immutable tree drawn from a closed set of
variants in two families:
- Arithmetic (Sort.INT): Var, Const, BinOp, UnaryOp
- Boolean (Sort.BOOL): BoolVar, BoolConst, Compare, Logical, Not
Constructors check operand sorts, so every tree that exists is well typed.
Trees are never mutated and are shared freely between forked paths.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any
from tactspectre.core.exceptions import TypeMismatchError
if TYPE_CHECKING:
    from tactspectre.core.solver import SolverContext
class Sort(Enum):
    """Sort of a symbolic expression."""
    INT = "Int"
    BOOL = "Bool"
ARITH_OPERATORS = frozenset({"+", "-", "*", "/", "%"})
ORDER_OPERATORS = frozenset({">", ">=", "<", "<="})
EQUALITY_OPERATORS = frozenset({"==", "!="})
LOGICAL_OPERATORS = frozenset({"&&", "||"})
class SymExpr:
    """Base class of all symbolic expression variants."""
    sort: Sort
    def to_solver_term(self, ctx: SolverContext) -> Any:
        """Compile this tree into `ctx`'s term language."""
        return compile_term(self, ctx)
    @property
    def is_arith(self) -> bool:
        return self.sort is Sort.INT
    @property
    def is_bool(self) -> bool:
        return self.sort is Sort.BOOL
def _require(expr: SymExpr, sort: Sort, op: str) -> None:
    if not isinstance(expr, SymExpr):
        raise TypeMismatchError(f"Operator '{op}' expects a symbolic expression, got {expr!r}")
    if expr.sort is not sort:
        raise TypeMismatchError(
            f"Operator '{op}' expects {sort.value} operands, got {expr.sort.value} ({expr})"
        )
@dataclass(frozen=True)
class Var(SymExpr):
    """Free integer variable."""
    name: str
    sort = Sort.INT
    def __str__(self) -> str:
        return self.name
@dataclass(frozen=True)
class Const(SymExpr):
    """Integer constant."""
    value: int
    sort = Sort.INT
    def __str__(self) -> str:
        return str(self.value)
@dataclass(frozen=True)
class BinOp(SymExpr):
    """Binary arithmetic operation."""
    op: str
    left: SymExpr
    right: SymExpr
    sort = Sort.INT
    def __post_init__(self) -> None:
        if self.op not in ARITH_OPERATORS:
            raise TypeMismatchError(f"'{self.op}' is not an arithmetic operator")
        _require(self.left, Sort.INT, self.op)
        _require(self.right, Sort.INT, self.op)
    def __str__(self) -> str:
        return f"({self.left} {self.op} {self.right})"
@dataclass(frozen=True)
class UnaryOp(SymExpr):
    """Unary arithmetic operation (negation)."""
    op: str
    operand: SymExpr
    sort = Sort.INT
    def __post_init__(self) -> None:
        if self.op != "-":
            raise TypeMismatchError(f"'{self.op}' is not an arithmetic unary operator")
        _require(self.operand, Sort.INT, self.op)
    def __str__(self) -> str:
        return f"-{self.operand}"
@dataclass(frozen=True)
class BoolVar(SymExpr):
    """Free boolean variable."""
    name: str
    sort = Sort.BOOL
    def __str__(self) -> str:
        return self.name
@dataclass(frozen=True)
class BoolConst(SymExpr):
    """Boolean constant."""
    value: bool
    sort = Sort.BOOL
    def __str__(self) -> str:
        return "true" if self.value else "false"
@dataclass(frozen=True)
class Compare(SymExpr):
    """Comparison of two operands.
    Ordering operators take integers; == and != take two operands of
    the same sort.
    """
    op: str
    left: SymExpr
    right: SymExpr
    sort = Sort.BOOL
    def __post_init__(self) -> None:
        if self.op in ORDER_OPERATORS:
            _require(self.left, Sort.INT, self.op)
            _require(self.right, Sort.INT, self.op)
        elif self.op in EQUALITY_OPERATORS:
            if not isinstance(self.left, SymExpr):
                raise TypeMismatchError(f"Operator '{self.op}' expects a symbolic expression")
            _require(self.right, self.left.sort, self.op)
        else:
            raise TypeMismatchError(f"'{self.op}' is not a comparison operator")
    def __str__(self) -> str:
        return f"({self.left} {self.op} {self.right})"
@dataclass(frozen=True)
class Logical(SymExpr):
    """Boolean connective (&&, ||)."""
    op: str
    left: SymExpr
    right: SymExpr
    sort = Sort.BOOL
    def __post_init__(self) -> None:
        if self.op not in LOGICAL_OPERATORS:
            raise TypeMismatchError(f"'{self.op}' is not a logical operator")
        _require(self.left, Sort.BOOL, self.op)
        _require(self.right, Sort.BOOL, self.op)
    def __str__(self) -> str:
        return f"({self.left} {self.op} {self.right})"
@dataclass(frozen=True)
class Not(SymExpr):
    """Boolean negation."""
    operand: SymExpr
    sort = Sort.BOOL
    def __post_init__(self) -> None:
        _require(self.operand, Sort.BOOL, "!")
    def __str__(self) -> str:
        return f"!{self.operand}"
def symbol(name: str, sort: Sort) -> SymExpr:
    """Fresh variable of the given sort."""
    return BoolVar(name) if sort is Sort.BOOL else Var(name)
def compile_term(expr: SymExpr, ctx: SolverContext) -> Any:
    """Compile a symbolic expression into the solver's term language.
    The translation is a structural recursion with no hidden state, so
    compiling the same tree twice yields structurally equal terms.
    Args:
        expr: Expression to compile.
        ctx: Solver context that owns the resulting term.
    Returns:
        A term of `ctx`.
    """
    if isinstance(expr, Var):
        return ctx.int_const(expr.name)
    if isinstance(expr, Const):
        return ctx.int_val(expr.value)
    if isinstance(expr, BinOp):
        return ctx.arith(expr.op, compile_term(expr.left, ctx), compile_term(expr.right, ctx))
    if isinstance(expr, UnaryOp):
        return ctx.neg(compile_term(expr.operand, ctx))
    if isinstance(expr, BoolVar):
        return ctx.bool_const(expr.name)
    if isinstance(expr, BoolConst):
        return ctx.bool_val(expr.value)
    if isinstance(expr, Compare):
        return ctx.compare(expr.op, compile_term(expr.left, ctx), compile_term(expr.right, ctx))
    if isinstance(expr, Logical):
        return ctx.logical(expr.op, compile_term(expr.left, ctx), compile_term(expr.right, ctx))
    if isinstance(expr, Not):
        return ctx.negate(compile_term(expr.operand, ctx))
    raise TypeError(f"Not a symbolic expression: {expr!r}")
def free_variables(expr: SymExpr) -> dict[str, Sort]:
    """Collect the free variables of an expression, in first-occurrence order."""
    found: dict[str, Sort] = {}
    stack: list[SymExpr] = [expr]
    while stack:
        node = stack.pop()
        if isinstance(node, (Var, BoolVar)):
            found.setdefault(node.name, node.sort)
        elif isinstance(node, (BinOp, Compare, Logical)):
            stack.append(node.right)
            stack.append(node.left)
        elif isinstance(node, (UnaryOp, Not)):
            stack.append(node.operand)
    return found
def negate(expr: SymExpr) -> Not:
    """Logical negation of a boolean expression."""
    return Not(expr)
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
    "symbol",
    "compile_term",
    "free_variables",
    "negate",
    "ARITH_OPERATORS",
    "ORDER_OPERATORS",
    "EQUALITY_OPERATORS",
    "LOGICAL_OPERATORS",
]
