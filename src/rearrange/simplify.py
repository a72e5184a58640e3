"""Local rewrite rules.

simplify() does one bottom-up pass: children first, then the rule for the parent.
It does not try to reach any canonical form; it just cleans up the mess that isolating
and solving leaves behind (x * 1, 0 - c, --b, m g h / (m/2), ...).

Equivalence here is syntactic: a - a = 0 only if both sides are written exactly the same.
"""

import warnings
from typing import List, Optional, Tuple

import numpy as np

from .expr import (
    FUNCTIONS,
    Add,
    Div,
    Eq,
    Expr,
    Fn,
    Mul,
    Neg,
    Num,
    Pm,
    Pow,
    Sub,
    Var,
    fold,
    is_even_int,
    is_num,
    real_power,
)

DEEP_SIMPLIFY_MAX_ITERATIONS = 20


def simplify(expr: Expr) -> Expr:
    if isinstance(expr, (Num, Var)):
        return expr
    if isinstance(expr, Neg):
        return _neg(simplify(expr.arg))
    if isinstance(expr, Add):
        return _add(simplify(expr.left), simplify(expr.right))
    if isinstance(expr, Sub):
        return _sub(simplify(expr.left), simplify(expr.right))
    if isinstance(expr, Mul):
        return _mul(simplify(expr.left), simplify(expr.right))
    if isinstance(expr, Div):
        return _div(simplify(expr.left), simplify(expr.right))
    if isinstance(expr, Pow):
        return _pow(simplify(expr.base), simplify(expr.exponent))
    if isinstance(expr, Pm):
        return _pm(simplify(expr.base), simplify(expr.delta))
    if isinstance(expr, Fn):
        return _fn(expr.name, tuple(simplify(a) for a in expr.args))
    if isinstance(expr, Eq):
        return Eq(simplify(expr.left), simplify(expr.right))
    raise NotImplementedError(f"Cannot simplify {expr.__class__.__name__}")


def deep_simplify(expr: Expr) -> Expr:
    """simplify() until the latex stops changing.

    One pass doesn't always finish the job when a rule exposes a pattern further up the tree.
    """
    current = expr
    current_latex = current.latex()
    for _ in range(DEEP_SIMPLIFY_MAX_ITERATIONS):
        new = simplify(current)
        new_latex = new.latex()
        if new_latex == current_latex:
            return new
        current, current_latex = new, new_latex

    warnings.warn(f"Simplification of {expr.latex()} did not settle after {DEEP_SIMPLIFY_MAX_ITERATIONS} passes")
    return current


def same(a: Expr, b: Expr) -> bool:
    return a.latex() == b.latex()


def _neg(a: Expr) -> Expr:
    if isinstance(a, Num):
        return Num(-a.value)
    if isinstance(a, Neg):
        return a.arg
    if isinstance(a, Pm) and is_num(a.base, 0):
        return a
    return Neg(a)


def _add(l: Expr, r: Expr) -> Expr:
    if isinstance(l, Num) and isinstance(r, Num):
        return Num(fold(np.add, l.value, r.value))
    if is_num(l, 0):
        return r
    if is_num(r, 0):
        return l
    if isinstance(r, Neg):
        return _sub(l, r.arg)
    if isinstance(r, Num) and r.value < 0:
        return _sub(l, Num(-r.value))
    return Add(l, r)


def _sub(l: Expr, r: Expr) -> Expr:
    if isinstance(l, Num) and isinstance(r, Num):
        return Num(fold(np.subtract, l.value, r.value))
    if is_num(r, 0):
        return l
    if is_num(l, 0):
        return _neg(r)
    if same(l, r):
        return Num(0)
    if isinstance(r, Neg):
        return _add(l, r.arg)
    if isinstance(r, Num) and r.value < 0:
        return _add(l, Num(-r.value))
    return Sub(l, r)


def _mul(l: Expr, r: Expr) -> Expr:
    if isinstance(l, Num) and isinstance(r, Num):
        return Num(fold(np.multiply, l.value, r.value))
    if is_num(l, 0) or is_num(r, 0):
        return Num(0)
    if is_num(l, 1):
        return r
    if is_num(r, 1):
        return l
    if is_num(l, -1):
        return _neg(r)
    if is_num(r, -1):
        return _neg(l)

    # pull signs out
    if isinstance(l, Neg) and isinstance(r, Neg):
        return _mul(l.arg, r.arg)
    if isinstance(r, Neg):
        return _neg(_mul(l, r.arg))
    if isinstance(l, Neg):
        return _neg(_mul(l.arg, r))

    # constants go first
    if isinstance(r, Num):
        return _mul(r, l)

    if isinstance(l, Num):
        # 2 * (3 * x) -> 6 * x
        if isinstance(r, Mul) and isinstance(r.left, Num):
            return _mul(Num(fold(np.multiply, l.value, r.left.value)), r.right)
        # 2 * (3 / x) -> 6 / x, 2 * (1 / 4) -> 1/2
        if isinstance(r, Div) and isinstance(r.left, Num):
            return _div(Num(fold(np.multiply, l.value, r.left.value)), r.right)

    # a * (1 / b) -> a / b
    if isinstance(r, Div) and is_num(r.left, 1):
        return _div(l, r.right)
    if isinstance(l, Div) and is_num(l.left, 1):
        return _div(r, l.right)

    return Mul(l, r)


def _div(l: Expr, r: Expr) -> Expr:
    if isinstance(l, Num) and isinstance(r, Num):
        return Num(fold(np.divide, l.value, r.value))
    if is_num(l, 0):
        return Num(0)
    if is_num(r, 1):
        return l
    if is_num(r, -1):
        return _neg(l)
    if same(l, r):
        return Num(1)
    if isinstance(l, Neg) and isinstance(r, Neg):
        return _div(l.arg, r.arg)

    # (6 * x) / 2 -> 3 * x
    if isinstance(l, Mul) and isinstance(l.left, Num) and isinstance(r, Num):
        return _mul(Num(fold(np.divide, l.left.value, r.value)), l.right)

    # no fractions inside fractions
    if isinstance(l, Div):
        return _div(l.left, _mul(l.right, r))
    if isinstance(r, Div):
        return _div(_mul(l, r.right), r.left)

    cancelled = _cancel_common_factors(l, r)
    if cancelled is not None:
        return cancelled
    return Div(l, r)


def _factors(expr: Expr) -> Tuple[float, List[Expr]]:
    """Splits a product into its numeric coefficient and the other factors.

    ex: -(2 * m * g) -> (-2, [m, g])
    """
    if isinstance(expr, Num):
        return expr.value, []
    if isinstance(expr, Neg):
        coeff, factors = _factors(expr.arg)
        return -coeff, factors
    if isinstance(expr, Mul):
        lc, lf = _factors(expr.left)
        rc, rf = _factors(expr.right)
        return fold(np.multiply, lc, rc), lf + rf
    return 1.0, [expr]


def _product(coeff: float, factors: List[Expr]) -> Expr:
    terms = factors if coeff == 1 else [Num(coeff)] + factors
    if not terms:
        return Num(1)
    result = terms[0]
    for term in terms[1:]:
        result = _mul(result, term)
    return result


def _cancel_common_factors(num: Expr, den: Expr) -> Optional[Expr]:
    """m g h / (m / 2) -> 2 g h. Returns None if nothing cancels."""
    num_coeff, num_factors = _factors(num)
    den_coeff, den_factors = _factors(den)
    den_latex = [f.latex() for f in den_factors]

    remaining = []
    for factor in num_factors:
        factor_latex = factor.latex()
        if factor_latex in den_latex:
            i = den_latex.index(factor_latex)
            del den_factors[i]
            del den_latex[i]
        else:
            remaining.append(factor)

    if len(remaining) == len(num_factors):
        return None

    if den_factors:
        return _div(_product(num_coeff, remaining), _product(den_coeff, den_factors))
    return _product(fold(np.divide, num_coeff, den_coeff), remaining)


def _pow(b: Expr, x: Expr) -> Expr:
    if isinstance(b, Num) and isinstance(x, Num):
        return Num(float(real_power(b.value, x.value)))
    if is_num(x, 1):
        return b
    if is_num(x, 0):
        return Num(1)
    if is_num(b, 1):
        return Num(1)
    if isinstance(b, Neg) and is_even_int(x):
        return _pow(b.arg, x)
    return Pow(b, x)


def _pm(b: Expr, d: Expr) -> Expr:
    if is_num(d, 0):
        return b
    if isinstance(d, Neg):
        return _pm(b, d.arg)
    if isinstance(d, Num) and d.value < 0:
        return Pm(b, Num(-d.value))
    return Pm(b, d)


def _fn(name: str, args: Tuple[Expr, ...]) -> Expr:
    if all(isinstance(a, Num) for a in args):
        if name == "log":
            base = args[1].value if len(args) > 1 else 10.0
            return Num(fold(lambda v, b: np.log(v) / np.log(b), args[0].value, base))
        if len(args) == 1 and name in FUNCTIONS:
            return Num(fold(FUNCTIONS[name], args[0].value))
    return Fn(name, args)
