"""python -m rearrange [latex ...]

Prints every rearrangement of each equation. Without arguments, runs through some demo equations.
"""

import sys
import warnings

from .equation import rearrange_latex

DEMO_EQUATIONS = [
    "v = u + at",
    "E = mc^2",
    "\\frac{1}{2}mv^2 = mgh",
    "PV = nRT",
    "F = \\frac{Gm_1 m_2}{r^2}",
    "v^2 = u^2 + 2as",
    "T = 2\\pi\\sqrt{\\frac{L}{g}}",
    "\\ln(N) = \\ln(N_0) - \\lambda t",
    "ax^2 + bx + c = 0",
    # modifier prefixes
    "v = v_0 + a \\delta t",
    "\\Delta x = v_0 t + \\frac{1}{2} a t^2",
    "\\partial E = \\mathcal{H} \\delta q",
    # fonts and accents
    "\\mathcal{L} = \\mathbf{F} \\cdot \\vec{r}",
    "\\hat{p} = m \\hat{v}",
]

RULE = "-" * 60


def print_results(latex: str) -> None:
    print()
    print(RULE)
    print(f"  Input:  {latex}")
    print(RULE)
    for r in rearrange_latex(latex):
        if r.solved:
            print(f"  ✓  {r.latex}")
        else:
            print(f"  ✗  [{r.variable}] {r.reason}")


def main(argv=None) -> int:
    equations = sys.argv[1:] if argv is None else argv
    with warnings.catch_warnings():
        # the ✗ lines already say what went wrong
        warnings.simplefilter("ignore")
        for latex in equations or DEMO_EQUATIONS:
            print_results(latex)
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
