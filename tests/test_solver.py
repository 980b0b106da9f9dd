from __future__ import annotations

from tactspectre.core.expressions import BinOp, BoolVar, Compare, Const, Var
from tactspectre.core.solver import SolverResult, Verdict, Z3Context, create_solver


def test_sat_model_and_evaluate(z3_ctx):
    x = z3_ctx.int_const("x")
    doubled = z3_ctx.arith("*", x, z3_ctx.int_val(2))
    result = z3_ctx.check([z3_ctx.compare("==", doubled, z3_ctx.int_val(8))])
    assert result.verdict is Verdict.SAT
    assert z3_ctx.evaluate(result.model, x) == 4


def test_model_completion_for_unconstrained_constants(z3_ctx):
    result = z3_ctx.check([])
    assert result.is_sat
    assert isinstance(z3_ctx.evaluate(result.model, z3_ctx.int_const("free")), int)
    assert z3_ctx.evaluate(result.model, z3_ctx.bool_const("flag")) is False


def test_every_check_is_a_fresh_scope(z3_ctx):
    x = Var("x")
    z3_ctx.check([Compare(">", x, Const(0)).to_solver_term(z3_ctx)])
    assert z3_ctx.check([Compare("<", x, Const(0)).to_solver_term(z3_ctx)]).is_sat


def test_cache_hits_on_repeated_queries(z3_ctx):
    term = Compare("==", BinOp("%", Var("x"), Const(3)), Const(1)).to_solver_term(z3_ctx)
    first = z3_ctx.check([term])
    second = z3_ctx.check([term])
    assert first is second
    assert z3_ctx.get_stats() == {"queries": 2, "cache_hits": 1, "cache_size": 1}
    z3_ctx.reset()
    assert z3_ctx.get_stats()["queries"] == 0


def test_caching_disabled():
    ctx = Z3Context(enable_caching=False)
    term = BoolVar("b").to_solver_term(ctx)
    ctx.check([term])
    ctx.check([term])
    assert ctx.get_stats()["cache_hits"] == 0


def test_implies(z3_ctx):
    x = Var("x")
    big = Compare(">", x, Const(10)).to_solver_term(z3_ctx)
    positive = Compare(">", x, Const(0)).to_solver_term(z3_ctx)
    assert z3_ctx.implies(big, positive)
    assert not z3_ctx.implies(positive, big)


def test_contexts_are_isolated():
    first = Z3Context()
    second = Z3Context()
    assert first.z3_context is not second.z3_context
    assert first.int_const("x").ctx is first.z3_context


def test_solver_result_constructors():
    assert SolverResult.unsat().verdict is Verdict.UNSAT
    unknown = SolverResult.unknown("timeout")
    assert unknown.verdict is Verdict.UNKNOWN
    assert unknown.reason == "timeout"


def test_factory_defaults_to_z3():
    ctx = create_solver(timeout_ms=100)
    assert isinstance(ctx, Z3Context)
    assert ctx.timeout_ms == 100
    assert ctx.name == "z3"


def test_cache_separates_int_and_bool_constants_with_one_name(z3_ctx):
    def pairwise_distinct(make):
        a, b, c = make("a"), make("b"), make("c")
        return [
            z3_ctx.compare("!=", a, b),
            z3_ctx.compare("!=", a, c),
            z3_ctx.compare("!=", b, c),
        ]

    assert z3_ctx.check(pairwise_distinct(z3_ctx.int_const)).is_sat
    assert z3_ctx.check(pairwise_distinct(z3_ctx.bool_const)).is_unsat
    assert z3_ctx.get_stats()["cache_hits"] == 0


def test_terms_keep_source_operand_order(z3_ctx):
    x = z3_ctx.int_const("x")
    zero = z3_ctx.int_val(0)
    two = z3_ctx.int_val(2)
    rendered = {
        op: z3_ctx.render(z3_ctx.compare(op, x, zero))
        for op in ("==", "!=", ">", ">=", "<", "<=")
    }
    assert rendered == {
        "==": "(= x 0)",
        "!=": "(not (= x 0))",
        ">": "(> x 0)",
        ">=": "(>= x 0)",
        "<": "(< x 0)",
        "<=": "(<= x 0)",
    }
    remainder = z3_ctx.arith("%", x, two)
    assert z3_ctx.render(z3_ctx.compare("==", remainder, zero)) == "(= (mod x 2) 0)"
    assert z3_ctx.render(z3_ctx.arith("-", zero, x)) == "(- 0 x)"
    assert z3_ctx.render(z3_ctx.arith("/", x, two)) == "(div x 2)"
