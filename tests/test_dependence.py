import pytest

from polyopt.dependence import (
    Dependence,
    DependenceEquation,
    DependenceKind,
    Direction,
    banerjee_test,
    extended_gcd,
    gcd_test,
    solve_diophantine,
)


def test_gcd_test():
    assert not gcd_test([2, -2], 1)
    assert gcd_test([2, -2], 0)
    assert gcd_test([3, -6], 9)
    assert not gcd_test([3, -6], 10)


def test_gcd_test_all_zero_coeffs():
    assert gcd_test([0, 0], 0)
    assert not gcd_test([0, 0], 3)


def test_banerjee():
    assert banerjee_test([1, -1], 0, [0, 0], [9, 9])
    assert not banerjee_test([1, -1], 20, [0, 0], [9, 9])


def test_banerjee_default_bounds():
    # default upper bound 100 lets -50 be reached
    assert banerjee_test([1], -50, [], [])
    assert not banerjee_test([1], -150, [], [])


def test_extended_gcd():
    g, x, y = extended_gcd(12, 8)
    assert g == 4
    assert 12 * x + 8 * y == 4


def test_extended_gcd_negative():
    g, x, y = extended_gcd(-4, 0)
    assert g == 4
    assert -4 * x + 0 * y == 4


@pytest.mark.parametrize("a,b", [(-12, 8), (7, -3), (-9, -6), (35, 15)])
def test_extended_gcd_identity(a, b):
    g, x, y = extended_gcd(a, b)
    assert g > 0
    assert a * x + b * y == g
    assert a % g == 0 and b % g == 0


def test_solve_diophantine():
    x, y = solve_diophantine(3, 5, 1)
    assert 3 * x + 5 * y == 1
    assert solve_diophantine(2, 4, 3) is None


def test_solve_diophantine_degenerate():
    assert solve_diophantine(0, 0, 0) == (0, 0)
    assert solve_diophantine(0, 0, 1) is None


def test_direction_from_distance():
    assert Direction.from_distance(1) is Direction.LT
    assert Direction.from_distance(0) is Direction.EQ
    assert Direction.from_distance(-1) is Direction.GT


def test_direction_union():
    assert Direction.LT.union(Direction.EQ) is Direction.LE
    assert Direction.GT.union(Direction.EQ) is Direction.GE
    assert Direction.LT.union(Direction.GT) is Direction.STAR
    assert Direction.EQ.union(Direction.EQ) is Direction.EQ
    assert Direction.LE.union(Direction.GE) is Direction.STAR


def test_direction_chars_and_parallel():
    assert "".join(d.to_char() for d in Direction) == "<=>≤≥*"
    assert Direction.EQ.allows_parallel()
    assert not Direction.LT.allows_parallel()


def test_dependence_kind():
    assert DependenceKind.FLOW.is_true_dependence()
    assert DependenceKind.ANTI.is_true_dependence()
    assert DependenceKind.OUTPUT.is_true_dependence()
    assert not DependenceKind.INPUT.is_true_dependence()
    assert not DependenceKind.INPUT.involves_write()
    assert DependenceKind.OUTPUT.involves_write()


def test_short_names():
    assert DependenceKind.FLOW.short_name() == "RAW"
    assert DependenceKind.ANTI.short_name() == "WAR"
    assert DependenceKind.OUTPUT.short_name() == "WAW"
    assert DependenceKind.INPUT.short_name() == "RAR"


def _dep(direction, **kw):
    return Dependence(
        source=0,
        target=1,
        kind=DependenceKind.FLOW,
        direction=direction,
        array="A",
        **kw,
    )


def test_dependence_parallelizable_at():
    dep = _dep([Direction.EQ, Direction.LT])
    assert dep.is_parallelizable_at(0)
    assert not dep.is_parallelizable_at(1)
    assert dep.is_parallelizable_at(5)


def test_dependence_loop_carried():
    assert _dep([Direction.LT]).is_loop_carried()
    assert not _dep([Direction.EQ], is_loop_independent=True).is_loop_carried()


def test_dependence_description():
    dep = _dep([Direction.LT, Direction.EQ])
    assert dep.description() == "0 -> 1 [flow (RAW)] on A dir=<<=>"


def test_equation_helpers():
    eq = DependenceEquation([1, 0], [-1], [2], 3)
    assert eq.has_variables()
    assert eq.all_coeffs() == [1, 0, -1]
    empty = DependenceEquation([0], [0], [1], 5)
    assert not empty.has_variables()