"""Expression evaluation: AST expressions to symbolic expressions.
Evaluation is pure. It reads the symbolic state but never writes it, and
it builds a new tree for every syntactic occurrence.
"""
from __future__ import annotations
from tactspectre.core.exceptions import TypeMismatchError, UnsupportedConstructError
from tactspectre.core.expressions import (
    ARITH_OPERATORS,
    EQUALITY_OPERATORS,
    LOGICAL_OPERATORS,
    ORDER_OPERATORS,
    BinOp,
    BoolConst,
    Compare,
    Const,
    Logical,
    Not,
    Sort,
    SymExpr,
    UnaryOp,
    Var,
)
from tactspectre.core.state import SymbolicState
from tactspectre.frontend.ast import (
    BinaryOperation,
    BooleanLiteral,
    Call,
    Expression,
    FieldAccess,
    Identifier,
    NumberLiteral,
    UnaryOperation,
    node_name,
)
def evaluate(expr: Expression, state: SymbolicState) -> SymExpr:
    """Translate an AST expression into a symbolic expression.
    Identifiers resolve against `state`; an unbound identifier becomes a
    fresh integer variable of the same name, which is how unbound
    function parameters turn into symbolic inputs.
    Args:
        expr: AST expression node.
        state: Current symbolic state of the path.
    Returns:
        The symbolic expression for `expr`.
    Raises:
        TypeMismatchError: An operator received operands of the wrong sort.
        UnsupportedConstructError: The expression uses a construct or
            operator outside the modelled vocabulary.
    """
    if isinstance(expr, NumberLiteral):
        return Const(expr.value)
    if isinstance(expr, BooleanLiteral):
        return BoolConst(expr.value)
    if isinstance(expr, Identifier):
        bound = state.get_var(expr.name)
        return bound if bound is not None else Var(expr.name)
    if isinstance(expr, BinaryOperation):
        left = evaluate(expr.left, state)
        right = evaluate(expr.right, state)
        return make_binary(expr.op, left, right, where=expr.loc)
    if isinstance(expr, UnaryOperation):
        operand = evaluate(expr.operand, state)
        return make_unary(expr.op, operand, where=expr.loc)
    if isinstance(expr, (Call, FieldAccess)):
        raise UnsupportedConstructError(node_name(expr), _at(expr.loc))
    raise UnsupportedConstructError(node_name(expr), "unknown expression kind")
def make_binary(op: str, left: SymExpr, right: SymExpr, where=None) -> SymExpr:
    """Build the symbolic variant for a binary operator token."""
    if op in ARITH_OPERATORS:
        _expect_sort(op, Sort.INT, (left, right), where)
        return BinOp(op, left, right)
    if op in ORDER_OPERATORS:
        _expect_sort(op, Sort.INT, (left, right), where)
        return Compare(op, left, right)
    if op in EQUALITY_OPERATORS:
        if left.sort is not right.sort:
            raise TypeMismatchError(
                f"Operator '{op}' compares {left.sort.value} with {right.sort.value}"
                f" ({left} {op} {right}){_suffix(where)}"
            )
        return Compare(op, left, right)
    if op in LOGICAL_OPERATORS:
        _expect_sort(op, Sort.BOOL, (left, right), where)
        return Logical(op, left, right)
    raise UnsupportedConstructError(f"operator '{op}'", _at(where))
def make_unary(op: str, operand: SymExpr, where=None) -> SymExpr:
    """Build the symbolic variant for a unary operator token."""
    if op == "-":
        _expect_sort(op, Sort.INT, (operand,), where)
        return UnaryOp(op, operand)
    if op == "!":
        _expect_sort(op, Sort.BOOL, (operand,), where)
        return Not(operand)
    raise UnsupportedConstructError(f"operator '{op}'", _at(where))
def _expect_sort(op: str, sort: Sort, operands: tuple[SymExpr, ...], where) -> None:
    for operand in operands:
        if operand.sort is not sort:
            raise TypeMismatchError(
                f"Operator '{op}' expects {sort.value} operands, got"
                f" {operand.sort.value} ({operand}){_suffix(where)}"
            )
def _at(where) -> str:
    return f"at {where}" if where is not None else ""
def _suffix(where) -> str:
    return f" at {where}" if where is not None else ""
