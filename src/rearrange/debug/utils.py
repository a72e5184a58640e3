from ..expr import BinOp, Eq, Expr, Fn, Neg, Num, Pm, Pow, Var


def debug_repr(expr: Expr) -> str:
    """The constructor calls that would build expr. Handy when two trees print the same latex.

    >>> debug_repr(Var("x") + 2)
    "Add(Var('x'), Num(2.0))"
    """
    name = expr.__class__.__name__
    if isinstance(expr, Num):
        return f"{name}({expr.value!r})"
    if isinstance(expr, Var):
        return f"{name}({expr.name!r})"
    if isinstance(expr, (BinOp, Eq)):
        return f"{name}({debug_repr(expr.left)}, {debug_repr(expr.right)})"
    if isinstance(expr, Pow):
        return f"{name}({debug_repr(expr.base)}, {debug_repr(expr.exponent)})"
    if isinstance(expr, Neg):
        return f"{name}({debug_repr(expr.arg)})"
    if isinstance(expr, Pm):
        return f"{name}({debug_repr(expr.base)}, {debug_repr(expr.delta)})"
    if isinstance(expr, Fn):
        args = ", ".join(debug_repr(a) for a in expr.args)
        return f"{name}({expr.name!r}, ({args},))"
    raise NotImplementedError(f"Cannot get debug repr of {name}")
