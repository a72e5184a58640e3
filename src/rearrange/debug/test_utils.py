from typing import Dict, Optional

import numpy as np

from rearrange.debug.utils import debug_repr
from rearrange.equation import rearrange_latex, solve
from rearrange.expr import Expr, cast, latex, symbols
from rearrange.parser import parse

x, y = symbols("x y")


def assert_latex(expr: Expr, expected_latex: str):
    """Spaces don't count."""
    result = latex(expr)
    assert result.replace(" ", "") == expected_latex.replace(" ", ""), f"{result} != {expected_latex}"


@cast
def assert_eq_strict(a: Expr, b: Expr):
    """Tests that the structure of a and b exprs are the same, not just their values or reprs."""
    assert a == b, f"STRICT: {a} != {b}, \n\tDebug repr: {debug_repr(a)} != {debug_repr(b)}"


def assert_rearrangement(equation: str, var: str, expected: Optional[str]):
    """expected is the exact latex of the result, or None if var shouldn't be solvable."""
    results = {r.variable: r for r in rearrange_latex(equation)}
    assert var in results, f"{var} not in {list(results)}"
    result = results[var]
    if expected is None:
        assert not result.solved, f"Expected {var} to be unsolvable, got {result.latex}"
        return
    assert result.solved, f"Could not solve {equation} for {var}: {result.reason}"
    assert result.latex == expected, f"{result.latex} != {expected}"


def _random_subs(names, rng: np.random.Generator, low: float, high: float) -> Dict[str, float]:
    return {name: float(rng.uniform(low, high)) for name in names}


def assert_solves(equation: str, var: str, samples: int = 20, seed: int = 0, low: float = 0.5, high: float = 3.0):
    """Numerically checks the solution for var: put random values in for the other variables,
    get the candidate values of var from the solution and check they satisfy the equation.

    Candidates that come out nan/inf (sqrt of a negative, arcsin(2), ...) are skipped, but
    at least one has to be checked.
    """
    eq = parse(equation)
    solution = solve(eq, var)
    assert solution is not None, f"Could not solve {equation} for {var}"
    assert not solution.contains(var), f"{var} is still in the solution {solution}"

    rng = np.random.default_rng(seed)
    others = sorted(eq.symbols() - {var})
    checked = 0
    for _ in range(samples):
        subs = _random_subs(others, rng, low, high)
        for candidate in solution.evalf(subs):
            if not np.isfinite(candidate):
                continue
            subs[var] = candidate
            lhs = eq.left.evalf(subs)
            rhs = eq.right.evalf(subs)
            assert np.any(
                np.isclose(lhs[:, None], rhs[None, :], rtol=1e-6, atol=1e-8)
            ), f"{var} = {solution} is wrong at {subs}: {lhs} != {rhs}, \n\tDebug repr: {debug_repr(solution)}"
            checked += 1
    assert checked > 0, f"{var} = {solution} never evaluated to a finite number"


def assert_round_trip(expr: Expr, seed: int = 0, low: float = 0.5, high: float = 3.0):
    """latex(expr) has to parse back into something with the same variables and the same value."""
    text = latex(expr)
    reparsed = parse(text).left
    assert reparsed.symbols() == expr.symbols(), f"{text}: {reparsed.symbols()} != {expr.symbols()}"

    subs = _random_subs(sorted(expr.symbols()), np.random.default_rng(seed), low, high)
    expected = np.sort(expr.evalf(subs))
    result = np.sort(reparsed.evalf(subs))
    assert expected.shape == result.shape and np.allclose(
        expected, result, equal_nan=True
    ), f"{text}: {debug_repr(expr)} != {debug_repr(reparsed)}"
