from typing import Dict, List, Optional

from .expr import Add, Div, Expr, Mul, Neg, Num, Pm, Pow, Sub, Var, is_num
from .simplify import deep_simplify

Polynomial = Dict[int, Expr]  # power -> coefficient. missing powers are zero.


def is_polynomial(expr: Expr, target: str) -> bool:
    try:
        _extract_poly(expr, target)
        return True
    except AssertionError:
        return False


def _add_terms(poly: Polynomial, power: int, coeff: Expr) -> None:
    poly[power] = Add(poly[power], coeff) if power in poly else coeff


def _extract_poly(expr: Expr, target: str) -> Polynomial:
    if not expr.contains(target):
        return {0: expr}

    if isinstance(expr, Var):
        return {1: Num(1)}

    if isinstance(expr, Neg):
        return {p: Neg(c) for p, c in _extract_poly(expr.arg, target).items()}

    if isinstance(expr, Add):
        answer = _extract_poly(expr.left, target)
        for power, coeff in _extract_poly(expr.right, target).items():
            _add_terms(answer, power, coeff)
        return answer

    if isinstance(expr, Sub):
        answer = _extract_poly(expr.left, target)
        for power, coeff in _extract_poly(expr.right, target).items():
            answer[power] = Sub(answer[power], coeff) if power in answer else Neg(coeff)
        return answer

    if isinstance(expr, Mul):
        if not expr.left.contains(target):
            return {p: Mul(expr.left, c) for p, c in _extract_poly(expr.right, target).items()}
        if not expr.right.contains(target):
            return {p: Mul(c, expr.right) for p, c in _extract_poly(expr.left, target).items()}

        # both sides: multiply out
        left = _extract_poly(expr.left, target)
        right = _extract_poly(expr.right, target)
        answer: Polynomial = {}
        for pa, ca in left.items():
            for pb, cb in right.items():
                _add_terms(answer, pa + pb, Mul(ca, cb))
        return answer

    if isinstance(expr, Div):
        assert not expr.right.contains(target), f"{target} is in the denominator of {expr}"
        return {p: Div(c, expr.right) for p, c in _extract_poly(expr.left, target).items()}

    if isinstance(expr, Pow):
        assert expr.base == Var(target), f"Base of {expr} is not {target}"
        exponent = expr.exponent
        assert isinstance(exponent, Num) and exponent.is_int and exponent.value >= 0, f"Bad exponent in {expr}"
        return {int(exponent.value): Num(1)}

    raise AssertionError(f"Not allowed expr for polynomial: {expr}")


def extract_poly(expr: Expr, target: str) -> Optional[Polynomial]:
    """Write expr as sum(c_k * target^k), with every c_k free of target.

    Returns None if expr isn't a polynomial in target (target inside a function, an
    exponent, a denominator, ...). Coefficients that simplify to 0 are left out.
    """
    try:
        answer = _extract_poly(deep_simplify(expr), target)
    except AssertionError:
        return None

    poly: Polynomial = {}
    for power in sorted(answer):
        coeff = deep_simplify(answer[power])
        if not is_num(coeff, 0):
            poly[power] = coeff
    return poly


def _sqrt(expr: Expr) -> Expr:
    return Pow(expr, Div(Num(1), Num(2)))


def _cbrt(expr: Expr) -> Expr:
    return Pow(expr, Div(Num(1), Num(3)))


def solve_poly(poly: Polynomial) -> Optional[List[Expr]]:
    """Roots of sum(poly[k] * x^k) = 0, as expressions.

    A quadratic gives one Pm node holding both roots. Returns None when there's nothing
    to solve (degree 0, or degree 1 with no constant term) or when we don't know how:
    degree > 3, or a cubic with an x^2 term.
    """
    poly = {p: c for p, c in poly.items() if not is_num(c, 0)}
    if not poly:
        return None
    degree = max(poly)

    if degree == 1:
        a, b = poly[1], poly.get(0)
        if b is None:
            # ax = 0. the variable cancelled out of something, e.g. m in mv^2/2 = mgh
            return None
        if isinstance(b, Neg):
            return [Div(b.arg, a)]
        return [Div(Neg(b), a)]

    if degree == 2:
        a, b, c = poly[2], poly.get(1), poly.get(0, Num(0))
        if b is None:
            return [Pm(Num(0), deep_simplify(_sqrt(Div(Neg(c), a))))]

        two_a = deep_simplify(Mul(Num(2), a))
        base = deep_simplify(Div(Neg(b), two_a))
        discriminant = deep_simplify(Sub(Pow(b, Num(2)), Mul(Mul(Num(4), a), c)))
        delta = deep_simplify(Div(_sqrt(discriminant), two_a))
        return [Pm(base, delta)]

    if degree == 3:
        if 2 in poly:
            # only depressed cubics
            return None
        lead = poly[3]
        p = deep_simplify(Div(poly.get(1, Num(0)), lead))
        q = deep_simplify(Div(poly.get(0, Num(0)), lead))

        half_q = deep_simplify(Div(Neg(q), Num(2)))
        root = deep_simplify(_sqrt(Add(Div(Pow(q, Num(2)), Num(4)), Div(Pow(p, Num(3)), Num(27)))))
        return [deep_simplify(Add(_cbrt(Add(half_q, root)), _cbrt(Sub(half_q, root))))]

    return None
