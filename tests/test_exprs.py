import dataclasses

import numpy as np
import pytest

from rearrange.debug.test_utils import assert_eq_strict, x, y
from rearrange.debug.utils import debug_repr
from rearrange.expr import *


def test_equality():
    assert x == x
    assert x == Var("x")  # seperately created variables with the same name are the same
    assert x != y
    assert (x + 2) == (x + 2)
    # structural, not mathematical
    assert x + y != y + x
    assert Num(2) == Num(2.0)


def test_operators_build_raw_nodes():
    assert_eq_strict(x + 0, Add(x, Num(0)))
    assert_eq_strict(2 * x, Mul(Num(2), x))
    assert_eq_strict(x / 2, Div(x, Num(2)))
    assert_eq_strict(1 - x, Sub(Num(1), x))
    assert_eq_strict(x**2, Pow(x, Num(2)))
    assert_eq_strict(2**x, Pow(Num(2), x))
    assert_eq_strict(-x, Neg(x))


def test_cast():
    with pytest.raises(NotImplementedError):
        x + "y"
    with pytest.raises(NotImplementedError):
        x + True


def test_exprs_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        x.name = "y"


def test_invalid_nodes():
    with pytest.raises(AssertionError):
        Var("")
    with pytest.raises(AssertionError):
        Fn("gamma", (x,))
    with pytest.raises(AssertionError):
        Fn("sin", ())


def test_symbols_and_contains():
    expr = Pm(x, fn("log", Var("z"), Var("b"))) * 2
    assert collect_vars(expr) == {"x", "z", "b"}
    assert expr.symbols() == {"x", "z", "b"}
    assert contains_var(expr, "b")
    assert not contains_var(expr, "y")
    assert Num(3).symbolless
    assert not (x + 1).symbolless
    assert Eq(x, y).symbols() == {"x", "y"}


def test_symbols_helper():
    assert symbols("x") == x
    assert symbols("x y") == [x, y]


def test_evalf():
    assert np.allclose((x * 2 + 1).evalf({"x": 3}), [7])
    assert np.allclose((x / y).evalf({"x": 1, "y": 4}), [0.25])
    assert np.allclose(fn("log", Num(8), Num(2)).evalf(), [3])
    assert np.allclose(fn("log", Num(100)).evalf(), [2])
    assert np.allclose(fn("sec", Num(0)).evalf(), [1])


def test_evalf_pm_branches():
    assert np.allclose((Pm(Num(1), Num(2)) * 3).evalf(), [9, -3])
    assert np.allclose(Pm(Num(0), Num(2)).evalf(), [2, -2])
    assert np.allclose(Pow(Pm(Num(0), Num(2)), Num(2)).evalf(), [4, 4])
    # every combination
    assert len((Pm(Num(0), x) + Pm(Num(0), y)).evalf({"x": 1, "y": 2})) == 4


def test_evalf_missing_variable():
    with pytest.raises(ValueError):
        (x + y).evalf({"x": 1})


def test_evalf_ieee():
    assert np.isinf(Div(Num(1), Num(0)).evalf()[0])
    assert np.isnan(Pow(Num(-4), Num(0.5)).evalf()[0])


def test_real_power():
    # odd roots of negative numbers stay real
    assert np.isclose(real_power(-8, 1 / 3), -2)
    assert np.isclose(real_power(-32, 1 / 5), -2)
    assert np.isclose(real_power(4, 0.5), 2)
    assert np.isnan(real_power(-4, 0.5))
    assert np.isclose(real_power(-2, 2), 4)


def test_eq_evalf_is_the_residual():
    assert np.allclose(Eq(x, Num(2)).evalf({"x": 5}), [3])


def test_fold():
    assert fold(np.divide, 1, 0) == float("inf")
    assert np.isnan(fold(np.divide, 0, 0))
    assert fold(np.add, 1, 2) == 3


def test_is_num():
    assert is_num(Num(2))
    assert is_num(Num(2), 2)
    assert not is_num(Num(2), 3)
    assert not is_num(x)
    assert is_even_int(Num(4))
    assert not is_even_int(Num(3))
    assert not is_even_int(Num(0))
    assert not is_even_int(Num(2.5))


def test_debug_repr():
    assert debug_repr(x + 2) == "Add(Var('x'), Num(2.0))"
    assert debug_repr(fn("log", x, 2)) == "Fn('log', (Var('x'), Num(2.0),))"
    assert debug_repr(Pm(Num(0), -x)) == "Pm(Num(0.0), Neg(Var('x')))"
