from __future__ import annotations

import pytest

from tactspectre.core.exceptions import TypeMismatchError
from tactspectre.core.expressions import (
    BinOp,
    BoolConst,
    BoolVar,
    Compare,
    Const,
    Logical,
    Not,
    Sort,
    UnaryOp,
    Var,
    compile_term,
    free_variables,
    negate,
    symbol,
)


def test_sorts_of_variants():
    assert Var("x").sort is Sort.INT
    assert Const(3).is_arith
    assert BinOp("+", Var("x"), Const(1)).sort is Sort.INT
    assert UnaryOp("-", Var("x")).sort is Sort.INT
    assert BoolVar("b").is_bool
    assert BoolConst(True).sort is Sort.BOOL
    assert Compare(">=", Var("x"), Const(0)).sort is Sort.BOOL
    assert Logical("&&", BoolVar("a"), BoolVar("b")).sort is Sort.BOOL
    assert Not(BoolVar("a")).sort is Sort.BOOL


def test_expressions_are_immutable_values():
    left = BinOp("*", Var("x"), Const(3))
    assert left == BinOp("*", Var("x"), Const(3))
    assert hash(left) == hash(BinOp("*", Var("x"), Const(3)))
    with pytest.raises(AttributeError):
        left.op = "+"


@pytest.mark.parametrize(
    "build",
    [
        lambda: BinOp("+", Var("x"), BoolConst(True)),
        lambda: UnaryOp("-", BoolVar("b")),
        lambda: Compare("<", BoolVar("b"), Const(1)),
        lambda: Compare("==", Var("x"), BoolConst(False)),
        lambda: Logical("||", Var("x"), BoolVar("b")),
        lambda: Not(Const(1)),
        lambda: BinOp("&&", Var("x"), Const(1)),
        lambda: UnaryOp("!", Var("x")),
    ],
)
def test_constructors_reject_ill_sorted_operands(build):
    with pytest.raises(TypeMismatchError):
        build()


def test_equality_accepts_two_booleans():
    expr = Compare("!=", BoolVar("a"), BoolConst(True))
    assert expr.is_bool


def test_infix_rendering():
    expr = Logical("&&", Compare(">=", Var("x"), Const(0)), Not(BoolVar("b")))
    assert str(expr) == "((x >= 0) && !b)"
    assert str(UnaryOp("-", Var("x"))) == "-x"
    assert str(BoolConst(False)) == "false"


def test_free_variables_in_first_occurrence_order():
    expr = Logical(
        "||",
        Compare("<", BinOp("+", Var("y"), Var("x")), Var("y")),
        BoolVar("flag"),
    )
    assert free_variables(expr) == {"y": Sort.INT, "x": Sort.INT, "flag": Sort.BOOL}
    assert list(free_variables(expr)) == ["y", "x", "flag"]
    assert free_variables(Const(4)) == {}


def test_negate_wraps_in_not():
    guard = Compare(">", Var("x"), Const(1))
    assert negate(guard) == Not(guard)


def test_compile_renders_smtlib(z3_ctx):
    guard = Compare(">=", Var("x"), Const(0))
    assert z3_ctx.render(compile_term(guard, z3_ctx)) == "(>= x 0)"
    assert z3_ctx.render(compile_term(Not(guard), z3_ctx)) == "(not (>= x 0))"
    parity = Compare("==", BinOp("%", Var("x"), Const(2)), Const(0))
    assert z3_ctx.render(parity.to_solver_term(z3_ctx)) == "(= (mod x 2) 0)"
    half = BinOp("/", Var("x"), Const(2))
    assert z3_ctx.render(compile_term(half, z3_ctx)) == "(div x 2)"
    neq = Compare("!=", Var("x"), Const(1))
    assert z3_ctx.render(compile_term(neq, z3_ctx)) == "(not (= x 1))"


def test_compile_is_referentially_transparent(z3_ctx):
    expr = Logical("||", Compare("<", Var("x"), Const(3)), BoolVar("b"))
    first = compile_term(expr, z3_ctx)
    second = compile_term(expr, z3_ctx)
    assert first.eq(second)


def test_compile_matches_bounded_rendering(z3_ctx, bounded_ctx):
    expr = Logical(
        "&&",
        Compare("<=", UnaryOp("-", Var("x")), BinOp("*", Var("y"), Const(3))),
        Compare("!=", BinOp("/", Var("x"), Const(2)), Const(0)),
    )
    assert bounded_ctx.render(compile_term(expr, bounded_ctx)) == z3_ctx.render(
        compile_term(expr, z3_ctx)
    )


def test_compile_rejects_non_expressions(z3_ctx):
    with pytest.raises(TypeError):
        compile_term("x", z3_ctx)


def test_symbol_follows_sort():
    assert symbol("flag", Sort.BOOL) == BoolVar("flag")
    assert symbol("n", Sort.INT) == Var("n")
    expr = Logical("&&", BoolVar("flag"), Compare(">", Var("n"), Const(0)))
    assert {name: symbol(name, sort) for name, sort in free_variables(expr).items()} == {
        "flag": BoolVar("flag"),
        "n": Var("n"),
    }
