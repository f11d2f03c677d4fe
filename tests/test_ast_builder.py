import pytest

from polyopt.ast_builder import (
    AstBinOp,
    AstBuilder,
    BinaryExpr,
    CeilDivExpr,
    FloorDivExpr,
    IntExpr,
    LoopNode,
    MaxExpr,
    MinExpr,
    ModExpr,
    RawNode,
    StatementNode,
    VarExpr,
    const,
    expr_to_c,
    var,
)


def test_simplify_zero_plus_x():
    assert const(0).add(var("x")).simplify() == VarExpr("x")


def test_simplify_x_times_one():
    assert var("x").mul(const(1)).simplify() == VarExpr("x")


def test_simplify_constant_fold():
    assert const(2).add(const(3)).simplify() == IntExpr(5)


def test_simplify_nested():
    expr = var("i").add(const(2).mul(const(3)).sub(const(6)))
    assert expr.simplify() == VarExpr("i")


def test_simplify_mul_zero():
    assert var("x").mul(const(0)).simplify() == IntExpr(0)
    assert const(0).mul(var("x")).simplify() == IntExpr(0)


def test_simplify_div_one_and_sub_zero():
    assert var("x").div(const(1)).simplify() == VarExpr("x")
    assert var("x").sub(const(0)).simplify() == VarExpr("x")


def test_simplify_div_by_zero_kept():
    expr = const(4).div(const(0))
    assert expr.simplify() == BinaryExpr(AstBinOp.DIV, IntExpr(4), IntExpr(0))


def test_simplify_comparison_not_folded():
    expr = BinaryExpr(AstBinOp.LT, const(1), const(2))
    assert expr.simplify() == expr


def test_simplify_min_max():
    assert const(3).min(const(7)).simplify() == IntExpr(3)
    assert const(3).max(const(7)).simplify() == IntExpr(7)
    assert var("N").min(const(1).add(const(1))).simplify() == MinExpr(VarExpr("N"), IntExpr(2))


def test_eval_constant_truncates_toward_zero():
    assert const(-7).div(const(2)).eval_constant() == -3
    assert const(7).div(const(2)).eval_constant() == 3


def test_eval_constant_none_for_variables():
    assert var("x").add(const(1)).eval_constant() is None
    assert const(4).floordiv(const(2)).eval_constant() is None


def test_is_constant():
    assert const(5).is_constant() is True
    assert var("x").is_constant() is False
    assert const(1).add(const(2)).is_constant() is False


def test_expr_to_c():
    assert expr_to_c(var("i").add(const(1))) == "(i + 1)"
    assert expr_to_c(var("i").floordiv(const(32))) == "FLOOR_DIV(i, 32)"


@pytest.mark.parametrize(
    "expr, expected",
    [
        (CeilDivExpr(VarExpr("N"), IntExpr(4)), "CEIL_DIV(N, 4)"),
        (MinExpr(VarExpr("a"), VarExpr("b")), "MIN(a, b)"),
        (MaxExpr(VarExpr("a"), IntExpr(0)), "MAX(a, 0)"),
        (ModExpr(VarExpr("i"), IntExpr(2)), "(i % 2)"),
        (BinaryExpr(AstBinOp.LE, VarExpr("i"), VarExpr("N")), "(i <= N)"),
        (BinaryExpr(AstBinOp.AND, VarExpr("p"), VarExpr("q")), "(p && q)"),
        (IntExpr(-3), "-3"),
    ],
)
def test_expr_to_c_forms(expr, expected):
    assert expr_to_c(expr) == expected


def test_ast_builder():
    builder = AstBuilder()
    builder.add_loop("i", const(0), var("N"), 1, True).add_statement(0, [var("i")])
    ast = builder.build()
    assert len(ast) == 2
    assert ast[0] == LoopNode("i", IntExpr(0), VarExpr("N"), 1, [], True)
    assert ast[1] == StatementNode(0, [VarExpr("i")])


def test_ast_builder_raw():
    ast = AstBuilder().add_raw("// hello").build()
    assert ast == [RawNode("// hello")]