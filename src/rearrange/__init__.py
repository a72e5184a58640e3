# has to be imported before the latex function below, or loading it later replaces the function
from .latex import format_number  # isort: skip

from .equation import Rearrangement, RearrangementResult, rearrange_latex, solve, solved_variants
from .expr import (
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
    collect_vars,
    contains_var,
    fn,
    latex,
    symbols,
)
from .isolate import isolate
from .parser import ParseError, parse
from .polynomial import extract_poly, is_polynomial, solve_poly
from .simplify import deep_simplify, simplify
from .tokens import Token, tokenize
