import time
import warnings
from typing import Iterable, List, NamedTuple, Optional

from .expr import Eq, Expr, Sub
from .isolate import isolate
from .parser import ParseError, parse
from .polynomial import extract_poly, solve_poly
from .simplify import deep_simplify


class RearrangementResult(NamedTuple):
    variable: str  # "?" when the equation couldn't be read or has no variables
    latex: str  # "v = ..." if solved, otherwise the equation as written back out
    solved: bool
    reason: Optional[str] = None


def _unsolved_reason(var: str) -> str:
    return f"Could not isolate '{var}': it may appear in multiple terms or in a nonlinear position."


def solve(equation: Eq, var: str, debug: bool = False) -> Optional[Expr]:
    """Solve equation for var. Returns the other side of `var = ...`, or None.

    First tries isolating var in whichever side holds it, then treats lhs - rhs as a polynomial in var.
    """
    for side, other in ((equation.left, equation.right), (equation.right, equation.left)):
        if not side.contains(var):
            continue
        solution = isolate(side, other, var)
        if debug:
            print(f"[{var}] isolate {side} = {other}: {solution}")
        if solution is not None and not solution.contains(var):
            return deep_simplify(solution)

    candidates = []
    for expr in (Sub(equation.left, equation.right), Sub(equation.right, equation.left)):
        poly = extract_poly(expr, var)
        roots = solve_poly(poly) if poly is not None else None
        if debug:
            print(f"[{var}] polynomial {expr} = 0: {poly} -> {roots}")
        if roots is None:
            continue
        root = deep_simplify(roots[0])
        if not root.contains(var):
            candidates.append(root)

    if not candidates:
        return None
    # both orientations are right; pick the one that reads better
    return min(candidates, key=lambda c: c.latex().count("-"))


def rearrange_latex(latex: str, **kwargs) -> List[RearrangementResult]:
    """
    Rearranges a latex equation for each of its variables.

    Args:
        latex: the equation. an expression without '=' is taken to equal 0.
    kwargs:
        debug: prints every strategy tried for every variable.

        Examples of valid uses:
            rearrange_latex("v = u + at")
            rearrange_latex("\\frac{1}{2}mv^2 = mgh")
            rearrange_latex("ax^2 + bx + c")

    Returns:
        One result per variable, sorted by variable name. Never raises: an equation
        that can't be parsed gives a single unsolved result with variable "?".
    """
    return Rearrangement(**kwargs).rearrange(latex)


def solved_variants(latexes: Iterable[str], **kwargs) -> List[RearrangementResult]:
    """All the solved rearrangements of a list of equations, without duplicates.

    Two results are duplicates if their latex is the same, even if they came from different equations.
    The first one wins.
    """
    rearrangement = Rearrangement(**kwargs)
    seen = set()
    variants = []
    for latex in latexes:
        for result in rearrangement.rearrange(latex):
            if result.solved and result.latex not in seen:
                seen.add(result.latex)
                variants.append(result)
    return variants


class Rearrangement:
    """
    Rearranges one equation at a time.
    """

    logger = None

    def __init__(self, *, debug: bool = False):
        self._debug = debug

    def rearrange(self, latex: str) -> List[RearrangementResult]:
        start = time.time()
        results = self._rearrange(latex)
        if self.logger is not None:
            self.logger.log(latex, time.time() - start, results)
        return results

    def _rearrange(self, latex: str) -> List[RearrangementResult]:
        try:
            equation = parse(latex)
        except (ParseError, RecursionError) as e:
            warnings.warn(f"Failed to parse {latex!r}: {e}")
            return [RearrangementResult("?", latex, False, f"Parse error: {e}")]

        variables = sorted(equation.symbols())
        if not variables:
            return [RearrangementResult("?", latex, False, "no variables")]

        if self._debug:
            print(f"Parsed {latex!r} as {equation}")
        return [self.solve_for(equation, var) for var in variables]

    def solve_for(self, equation: Eq, var: str) -> RearrangementResult:
        try:
            solution = solve(equation, var, debug=self._debug)
        except (RecursionError, NotImplementedError, ValueError) as e:
            warnings.warn(f"Error while solving {equation} for {var}: {e!r}")
            solution = None

        if solution is None:
            warnings.warn(f"Failed to solve {equation} for {var}")
            return RearrangementResult(var, equation.latex(), False, _unsolved_reason(var))
        return RearrangementResult(var, f"{var} = {solution.latex()}", True)
