"""Latex utility functions

Everything here has to produce latex that parse() reads back into the same tree
(or at least a tree with the same value), so be careful with brackets.
"""

import math
from typing import Optional, Union

import numpy as np

from .expr import Add, Div, Expr, Fn, Mul, Neg, Num, Pm, Pow, Sub, Var

FRACTION_DENOMINATORS = (2, 3, 4, 5, 6, 7, 8, 9, 10, 12)
FRACTION_TOLERANCE = 1e-10

# how function names are written. anything missing is written \name
FUNCTION_COMMANDS = {
    "arcsinh": "\\operatorname{arcsinh}",
    "arccosh": "\\operatorname{arccosh}",
    "arctanh": "\\operatorname{arctanh}",
    "sgn": "\\operatorname{sgn}",
}


def format_number(value: float) -> str:
    """
    >>> format_number(2.0)
    '2'
    >>> format_number(-0.75)
    '-\\\\frac{3}{4}'
    """
    if math.isnan(value):
        return "\\text{NaN}"
    if math.isinf(value):
        return "\\infty" if value > 0 else "-\\infty"
    if value.is_integer():
        return str(int(value))
    for d in FRACTION_DENOMINATORS:
        n = round(value * d)
        if n == 0:
            # too small to be a nice fraction
            continue
        if abs(n / d - value) < FRACTION_TOLERANCE:
            if n % d == 0:
                # float noise around an integer, e.g. 1.0000000000000002
                return str(n // d)
            if n < 0:
                return "-\\frac{" + str(-n) + "}{" + str(d) + "}"
            return "\\frac{" + str(n) + "}{" + str(d) + "}"
    # positional so that 6.674e-11 doesn't come back as 6.674 * e - 11
    return np.format_float_positional(value, trim="-")


def group(expr: Union[Expr, str]) -> str:
    """wrap expr latex with curly brackets if necessary"""
    if isinstance(expr, Expr):
        expr = expr.latex()
    return expr if len(expr) == 1 else "{" + expr + "}"


def bracketfy(expr: Expr, *, bracket="()") -> str:
    """Makes expr latex with \\left \\right brackets around it.

    args:
        expr: the expr to bracketfy
        bracket: must be a str of length 2
    """
    b1, b2 = bracket
    return f"\\left{b1}{expr.latex()}\\right{b2}"


def needs_brackets(child: Expr, parent: Expr) -> bool:
    if isinstance(child, (Add, Sub, Pm)):
        if isinstance(parent, (Mul, Div, Pow, Neg)):
            return True
        # a - (b + c), a ± (b + c)
        if isinstance(parent, Sub) and child is parent.right:
            return True
        if isinstance(parent, Pm) and child is parent.delta:
            return True
    if isinstance(child, Neg):
        return isinstance(parent, Pow)
    return False


def wrap(child: Expr, parent: Expr) -> str:
    if needs_brackets(child, parent):
        return bracketfy(child)
    return child.latex()


def is_juxtaposable(expr: Expr) -> bool:
    """Whether `2 expr` reads fine without a \\cdot: variables, functions and their powers."""
    if isinstance(expr, Pow):
        return isinstance(expr.base, (Var, Fn))
    return isinstance(expr, (Var, Fn))


def root_degree(exponent: Expr) -> Optional[str]:
    """If b^exponent should be written as a root, the degree of the root as latex.

    1/2 -> "2", 1/3 -> "3", Div(1, n) -> "n". Otherwise None.
    """
    if isinstance(exponent, Div) and isinstance(exponent.left, Num) and exponent.left.value == 1:
        return exponent.right.latex()
    if isinstance(exponent, Num) and exponent.value > 0 and math.isfinite(exponent.value):
        inverse = 1 / exponent.value
        n = round(inverse)
        if 2 <= n <= 12 and abs(inverse - n) < 1e-9:
            return str(n)
    return None


def pm_latex(pm: Pm) -> str:
    delta = wrap(pm.delta, pm)
    base = pm.base
    if isinstance(base, Num) and base.value == 0:
        return "\\pm " + delta

    # (-b)/(2a) ± sqrt(...)/(2a) is written as one fraction
    d = pm.delta
    if isinstance(base, Div) and isinstance(d, Div):
        denominator = base.right.latex()
        if denominator == d.right.latex():
            top = Pm(base.left, d.left)
            return "\\frac{" + top.latex() + "}{" + denominator + "}"

    return base.latex() + " \\pm " + delta


def fn_latex(f: Fn) -> str:
    inner = f.args[0]
    if f.name == "abs":
        return "\\left|" + inner.latex() + "\\right|"
    if f.name == "log":
        base = f.args[1] if len(f.args) > 1 else Num(10)
        arg = inner.latex() if isinstance(inner, (Var, Num)) and not is_negative(inner) else bracketfy(inner)
        return "\\log_{" + base.latex() + "} " + arg
    command = FUNCTION_COMMANDS.get(f.name, "\\" + f.name)
    return command + bracketfy(inner)


def is_negative(expr: Expr) -> bool:
    return isinstance(expr, Num) and expr.value < 0
