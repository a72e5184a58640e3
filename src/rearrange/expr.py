"""RULES OF EXPRs:

1. Exprs shall NOT be mutated after they are constructed. Subtrees are freely shared between trees,
so every function that "changes" a tree builds a new one.

2. The set of node classes is closed: Num, Var, Add, Sub, Mul, Div, Pow, Neg, Pm, Fn, Eq.
Anything that walks a tree (simplify, isolate, extract_poly, latex, evalf) handles every one of them
and raises NotImplementedError for anything else, so adding a class means visiting all of them.

3. Python operators build the raw node and nothing else: x + 0 is Add(x, Num(0)), not x.
Simplification only ever happens in simplify.py.

Note on equality: (expr1 == expr2) compares structure, not value. x + y != y + x.
Two variables are the same variable iff their names are the same string.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Set, Tuple, Union

import numpy as np


def _cast(x):
    """Cast x to an Expr if possible."""
    if x is None or isinstance(x, Expr):
        return x
    if isinstance(x, bool):
        raise NotImplementedError(f"Cannot cast {x} to Expr")
    if isinstance(x, (int, float, np.integer, np.floating)):
        return Num(float(x))
    if isinstance(x, tuple):
        return tuple(_cast(v) for v in x)
    if isinstance(x, list):
        return [_cast(v) for v in x]
    raise NotImplementedError(f"Cannot cast {x} to Expr")


def cast(func):
    """Decorator to cast all arguments to Expr."""

    def wrapper(*args, **kwargs) -> "Expr":
        return func(*map(_cast, args), **{k: _cast(v) for k, v in kwargs.items()})

    return wrapper


def real_power(base, exponent) -> np.ndarray:
    """base ** exponent, except odd roots of negative numbers stay real.

    (-8) ** (1/3) is nan for numpy; here it's -2.
    """
    base = np.asarray(base, dtype=float)
    exponent = np.asarray(exponent, dtype=float)
    with np.errstate(all="ignore"):
        result = np.power(base, exponent)
        inverse = 1 / exponent
        n = np.round(inverse)
        odd_root = (np.abs(inverse - n) < 1e-9) & (np.mod(n, 2) == 1)
        return np.where((base < 0) & odd_root, -np.power(-base, exponent), result)


# single-argument functions we know how to evaluate (and therefore constant fold).
# log is missing on purpose, it takes a base.
FUNCTIONS: Dict[str, Callable[[np.ndarray], np.ndarray]] = {
    "sin": np.sin,
    "cos": np.cos,
    "tan": np.tan,
    "sec": lambda x: 1 / np.cos(x),
    "csc": lambda x: 1 / np.sin(x),
    "cot": lambda x: 1 / np.tan(x),
    "arcsin": np.arcsin,
    "arccos": np.arccos,
    "arctan": np.arctan,
    "sinh": np.sinh,
    "cosh": np.cosh,
    "tanh": np.tanh,
    "arcsinh": np.arcsinh,
    "arccosh": np.arccosh,
    "arctanh": np.arctanh,
    "ln": np.log,
    "exp": np.exp,
    "abs": np.abs,
    "sqrt": np.sqrt,
    "sgn": np.sign,
}

FUNCTION_NAMES = set(FUNCTIONS) | {"log"}


def fold(func: Callable, *values: float) -> float:
    """Apply func to plain floats with IEEE semantics: 1/0 is inf, 0/0 is nan, nothing raises."""
    with np.errstate(all="ignore"):
        return float(func(*(np.float64(v) for v in values)))


class Expr(ABC):
    """Base class for all expressions."""

    @cast
    def __add__(self, other) -> "Expr":
        return Add(self, other)

    @cast
    def __radd__(self, other) -> "Expr":
        return Add(other, self)

    @cast
    def __sub__(self, other) -> "Expr":
        return Sub(self, other)

    @cast
    def __rsub__(self, other) -> "Expr":
        return Sub(other, self)

    @cast
    def __mul__(self, other) -> "Expr":
        return Mul(self, other)

    @cast
    def __rmul__(self, other) -> "Expr":
        return Mul(other, self)

    @cast
    def __truediv__(self, other) -> "Expr":
        return Div(self, other)

    @cast
    def __rtruediv__(self, other) -> "Expr":
        return Div(other, self)

    @cast
    def __pow__(self, other) -> "Expr":
        return Pow(self, other)

    @cast
    def __rpow__(self, other) -> "Expr":
        return Pow(other, self)

    def __neg__(self) -> "Expr":
        return Neg(self)

    def simplify(self) -> "Expr":
        from .simplify import simplify

        return simplify(self)

    @abstractmethod
    def children(self) -> List["Expr"]:
        raise NotImplementedError(f"Cannot get children of {self.__class__.__name__}")

    def contains(self, name: str) -> bool:
        """Whether the variable called `name` appears anywhere in the tree."""
        if isinstance(self, Var):
            return self.name == name
        return any(c.contains(name) for c in self.children())

    def symbols(self) -> Set[str]:
        """Names of all the variables in the tree."""
        if isinstance(self, Var):
            return {self.name}
        return {name for c in self.children() for name in c.symbols()}

    @property
    def symbolless(self) -> bool:
        return len(self.symbols()) == 0

    @abstractmethod
    def latex(self) -> str:
        raise NotImplementedError(f"Cannot convert {self.__class__.__name__} to latex")

    def __repr__(self) -> str:
        return self.latex()

    @abstractmethod
    def _evalf(self, subs: Dict[str, float]) -> np.ndarray:
        raise NotImplementedError(f"Cannot evaluate {self.__class__.__name__}")

    def evalf(self, subs: Optional[Dict[str, float]] = None) -> np.ndarray:
        """Evaluate numerically.

        Returns an array of candidate values: one per combination of ± branches, so
        (1 ± 2) * 3 gives [9, -3]. Trees without a Pm give a single value.
        """
        if subs is None:
            subs = {}
        with np.errstate(all="ignore"):
            return self._evalf(subs)


@dataclass(frozen=True, repr=False)
class Num(Expr):
    """A numeric literal. Always a float; may be inf or nan after constant folding."""

    value: float

    def __post_init__(self):
        object.__setattr__(self, "value", float(self.value))

    def children(self) -> List[Expr]:
        return []

    def latex(self) -> str:
        from .latex import format_number

        return format_number(self.value)

    def _evalf(self, subs):
        return np.array([self.value])

    @property
    def is_int(self) -> bool:
        return float(self.value).is_integer()


@dataclass(frozen=True, repr=False)
class Var(Expr):
    """A variable. The name is its identity, including any subscript or accent: "v_0", "\\hat{x}"."""

    name: str

    def __post_init__(self):
        assert len(self.name) > 0, "Variable name cannot be empty"

    def children(self) -> List[Expr]:
        return []

    def latex(self) -> str:
        return self.name

    def _evalf(self, subs):
        if self.name not in subs:
            raise ValueError(f"No value given for variable {self.name}")
        return np.array([float(subs[self.name])])


@dataclass(frozen=True, repr=False)
class BinOp(Expr):
    left: Expr
    right: Expr

    def children(self) -> List[Expr]:
        return [self.left, self.right]

    def _outer(self, ufunc, subs) -> np.ndarray:
        return ufunc.outer(self.left._evalf(subs), self.right._evalf(subs)).ravel()


@dataclass(frozen=True, repr=False)
class Add(BinOp):
    def latex(self) -> str:
        return f"{self.left.latex()} + {self.right.latex()}"

    def _evalf(self, subs):
        return self._outer(np.add, subs)


@dataclass(frozen=True, repr=False)
class Sub(BinOp):
    def latex(self) -> str:
        from .latex import wrap

        return f"{self.left.latex()} - {wrap(self.right, self)}"

    def _evalf(self, subs):
        return self._outer(np.subtract, subs)


@dataclass(frozen=True, repr=False)
class Mul(BinOp):
    def latex(self) -> str:
        from .latex import is_juxtaposable, wrap

        left, right = wrap(self.left, self), wrap(self.right, self)
        if isinstance(self.left, Num) and is_juxtaposable(self.right):
            return f"{left} {right}"
        return f"{left} \\cdot {right}"

    def _evalf(self, subs):
        return self._outer(np.multiply, subs)


@dataclass(frozen=True, repr=False)
class Div(BinOp):
    def latex(self) -> str:
        # the frac bar is its own bracket
        return "\\frac{" + self.left.latex() + "}{" + self.right.latex() + "}"

    def _evalf(self, subs):
        return self._outer(np.divide, subs)


@dataclass(frozen=True, repr=False)
class Pow(Expr):
    base: Expr
    exponent: Expr

    def children(self) -> List[Expr]:
        return [self.base, self.exponent]

    def latex(self) -> str:
        from .latex import bracketfy, group, root_degree

        # special case for roots
        degree = root_degree(self.exponent)
        if degree is not None:
            if degree == "2":
                return "\\sqrt{" + self.base.latex() + "}"
            return "\\sqrt[" + degree + "]{" + self.base.latex() + "}"

        base = self.base
        if isinstance(base, Var) or isinstance(base, Num) and base.is_int and base.value >= 0:
            base_latex = base.latex()
        else:
            base_latex = bracketfy(base)
        return base_latex + "^" + group(self.exponent)

    def _evalf(self, subs):
        base = self.base._evalf(subs)
        exponent = self.exponent._evalf(subs)
        return real_power(base[:, None], exponent[None, :]).ravel()


@dataclass(frozen=True, repr=False)
class Neg(Expr):
    arg: Expr

    def children(self) -> List[Expr]:
        return [self.arg]

    def latex(self) -> str:
        from .latex import wrap

        return "-" + wrap(self.arg, self)

    def _evalf(self, subs):
        return -self.arg._evalf(subs)


@dataclass(frozen=True, repr=False)
class Pm(Expr):
    """base ± delta. Pm(Num(0), delta) is a plain ±delta."""

    base: Expr
    delta: Expr

    def children(self) -> List[Expr]:
        return [self.base, self.delta]

    def latex(self) -> str:
        from .latex import pm_latex

        return pm_latex(self)

    def _evalf(self, subs):
        base = self.base._evalf(subs)
        delta = self.delta._evalf(subs)
        plus = np.add.outer(base, delta).ravel()
        minus = np.subtract.outer(base, delta).ravel()
        return np.concatenate([plus, minus])


@dataclass(frozen=True, repr=False)
class Fn(Expr):
    """A named function. log is Fn("log", (inner, base)); everything else takes one argument."""

    name: str
    args: Tuple[Expr, ...]

    def __post_init__(self):
        assert self.name in FUNCTION_NAMES, f"Unknown function {self.name}"
        assert len(self.args) >= 1, f"{self.name} needs an argument"

    def children(self) -> List[Expr]:
        return list(self.args)

    def latex(self) -> str:
        from .latex import fn_latex

        return fn_latex(self)

    def _evalf(self, subs):
        inner = self.args[0]._evalf(subs)
        if self.name == "log":
            base = self.args[1]._evalf(subs) if len(self.args) > 1 else np.array([10.0])
            return np.divide.outer(np.log(inner), np.log(base)).ravel()
        return FUNCTIONS[self.name](inner)


@dataclass(frozen=True, repr=False)
class Eq(Expr):
    """lhs = rhs. Only ever at the top of a tree."""

    left: Expr
    right: Expr

    def children(self) -> List[Expr]:
        return [self.left, self.right]

    def latex(self) -> str:
        return f"{self.left.latex()} = {self.right.latex()}"

    def _evalf(self, subs):
        # the residual lhs - rhs, zero when the equation holds
        return np.subtract.outer(self.left._evalf(subs), self.right._evalf(subs)).ravel()


def fn(name: str, *args) -> Fn:
    return Fn(name, tuple(_cast(a) for a in args))


def symbols(names: str) -> Union[Var, List[Var]]:
    """symbols("x y") -> [Var("x"), Var("y")]"""
    vars = [Var(name) for name in names.split(" ")]
    return vars[0] if len(vars) == 1 else vars


def is_num(expr: Expr, value: Optional[float] = None) -> bool:
    """Whether expr is a literal (equal to value, if given)."""
    return isinstance(expr, Num) and (value is None or expr.value == value)


def is_even_int(expr: Expr) -> bool:
    return isinstance(expr, Num) and expr.is_int and expr.value > 0 and int(expr.value) % 2 == 0


def collect_vars(expr: Expr) -> Set[str]:
    return expr.symbols()


def contains_var(expr: Expr, name: str) -> bool:
    return expr.contains(name)


def latex(expr: Expr) -> str:
    return expr.latex()
