"""Solving by undoing: peel the outermost operation off the side holding the target
and apply its inverse to the other side, until the target is alone.

Only works when the target appears once. When it appears more than once the result still
contains it, and the caller throws it away.
"""

from typing import Callable, Dict, Optional, Tuple

from .expr import Add, Div, Expr, Fn, Mul, Neg, Num, Pm, Pow, Sub, Var, is_even_int
from .simplify import simplify

# f(x) = r  ->  x = inverse(r, args of f)
INVERSE_FUNCTIONS: Dict[str, Callable[[Expr, Tuple[Expr, ...]], Expr]] = {
    "ln": lambda r, args: Fn("exp", (r,)),
    "exp": lambda r, args: Fn("ln", (r,)),
    "sin": lambda r, args: Fn("arcsin", (r,)),
    "cos": lambda r, args: Fn("arccos", (r,)),
    "tan": lambda r, args: Fn("arctan", (r,)),
    "arcsin": lambda r, args: Fn("sin", (r,)),
    "arccos": lambda r, args: Fn("cos", (r,)),
    "arctan": lambda r, args: Fn("tan", (r,)),
    "sec": lambda r, args: Fn("arccos", (Div(Num(1), r),)),
    "csc": lambda r, args: Fn("arcsin", (Div(Num(1), r),)),
    "cot": lambda r, args: Fn("arctan", (Div(Num(1), r),)),
    "sinh": lambda r, args: Fn("arcsinh", (r,)),
    "cosh": lambda r, args: Fn("arccosh", (r,)),
    "tanh": lambda r, args: Fn("arctanh", (r,)),
    "arcsinh": lambda r, args: Fn("sinh", (r,)),
    "arccosh": lambda r, args: Fn("cosh", (r,)),
    "arctanh": lambda r, args: Fn("tanh", (r,)),
    # |x| = k -> x = ±k
    "abs": lambda r, args: Pm(Num(0), r),
    "log": lambda r, args: Pow(args[1] if len(args) > 1 else Num(10), r),
    "sqrt": lambda r, args: Pow(r, Num(2)),
}


def isolate(lhs: Expr, rhs: Expr, target: str) -> Optional[Expr]:
    """Solve lhs = rhs for target, where lhs is the side holding it.

    Returns None if an operation on the way can't be undone.
    """
    lhs = simplify(lhs)
    rhs = simplify(rhs)

    if isinstance(lhs, Var) and lhs.name == target:
        return simplify(rhs)
    if isinstance(lhs, (Num, Var)):
        return None

    if isinstance(lhs, Neg):
        return isolate(lhs.arg, Neg(rhs), target)

    if isinstance(lhs, Add):
        if lhs.left.contains(target):
            return isolate(lhs.left, Sub(rhs, lhs.right), target)
        if lhs.right.contains(target):
            return isolate(lhs.right, Sub(rhs, lhs.left), target)
        return None

    if isinstance(lhs, Sub):
        if lhs.left.contains(target):
            return isolate(lhs.left, Add(rhs, lhs.right), target)
        if lhs.right.contains(target):
            return isolate(lhs.right, Sub(lhs.left, rhs), target)
        return None

    if isinstance(lhs, Mul):
        if lhs.left.contains(target):
            return isolate(lhs.left, Div(rhs, lhs.right), target)
        if lhs.right.contains(target):
            return isolate(lhs.right, Div(rhs, lhs.left), target)
        return None

    if isinstance(lhs, Div):
        if lhs.left.contains(target):
            return isolate(lhs.left, Mul(rhs, lhs.right), target)
        if lhs.right.contains(target):
            return isolate(lhs.right, Div(lhs.left, rhs), target)
        return None

    if isinstance(lhs, Pow):
        if lhs.base.contains(target):
            root = Pow(rhs, Div(Num(1), lhs.exponent))
            if is_even_int(lhs.exponent):
                # even roots come in pairs
                root = Pm(Num(0), root)
            return isolate(lhs.base, root, target)
        if lhs.exponent.contains(target):
            return isolate(lhs.exponent, Div(Fn("ln", (rhs,)), Fn("ln", (lhs.base,))), target)
        return None

    if isinstance(lhs, Fn):
        inner = lhs.args[0]
        if not inner.contains(target) or lhs.name not in INVERSE_FUNCTIONS:
            return None
        return isolate(inner, INVERSE_FUNCTIONS[lhs.name](rhs, lhs.args), target)

    if isinstance(lhs, Pm):
        return None

    raise NotImplementedError(f"Cannot isolate inside {lhs.__class__.__name__}")
