import pytest

import rearrange.__main__ as cli
from rearrange import RearrangementResult, rearrange_latex, solved_variants
from rearrange.debug.logger import Logger
from rearrange.debug.test_utils import assert_rearrangement, assert_solves
from rearrange.equation import Rearrangement


def test_linear_motion():
    assert_rearrangement("v = u + at", "a", "a = \\frac{v - u}{t}")
    assert_rearrangement("v = u + at", "t", "t = \\frac{v - u}{a}")
    assert_rearrangement("v = u + at", "u", "u = v - a \\cdot t")
    assert_rearrangement("v = u + at", "v", "v = u + a \\cdot t")


def test_mass_energy():
    assert_rearrangement("E = mc^2", "m", "m = \\frac{E}{c^2}")
    assert_rearrangement("E = mc^2", "c", "c = \\pm \\sqrt{\\frac{E}{m}}")
    assert_rearrangement("E = mc^2", "E", "E = m \\cdot c^2")


def test_even_power():
    assert_rearrangement("x^2 = 4", "x", "x = \\pm 2")


def test_quadratic_formula():
    assert_rearrangement("ax^2 + bx + c = 0", "x", "x = \\frac{-b \\pm \\sqrt{b^2 - 4 a \\cdot c}}{2 a}")


def test_energy_conservation():
    equation = "\\frac{1}{2}mv^2 = mgh"
    assert_rearrangement(equation, "v", "v = \\pm \\sqrt{2 g \\cdot h}")
    # m cancels out
    assert_rearrangement(equation, "m", None)
    results = {r.variable: r for r in rearrange_latex(equation)}
    assert results["m"].latex == "\\frac{1}{2} \\cdot m \\cdot v^2 = m \\cdot g \\cdot h"
    assert results["m"].reason == "Could not isolate 'm': it may appear in multiple terms or in a nonlinear position."


def test_variable_names():
    assert_rearrangement("I_{total} = I_1 + I_2", "I_1", "I_1 = I_total - I_2")
    assert_rearrangement("\\Delta x = v_0 t", "t", "t = \\frac{\\Delta x}{v_0}")


def test_functions():
    assert_rearrangement("y = \\log_{2} x", "x", "x = 2^y")
    assert_rearrangement("\\sin(\\theta) = \\frac{o}{h}", "\\theta", "\\theta = \\arcsin\\left(\\frac{o}{h}\\right)")
    assert_rearrangement(
        "\\ln(N) = \\ln(N_0) - \\lambda t", "N", "N = \\exp\\left(\\ln\\left(N_0\\right) - \\lambda \\cdot t\\right)"
    )


def test_unsolvable():
    assert_rearrangement("x = x", "x", None)
    assert_rearrangement("x = \\sin(x) + y", "x", None)
    # but y is fine
    assert_rearrangement("x = \\sin(x) + y", "y", "y = x - \\sin\\left(x\\right)")


@pytest.mark.parametrize(
    "equation, var",
    [
        ["v = u + at", "a"],
        ["\\frac{1}{f} = \\frac{1}{u} + \\frac{1}{v}", "f"],
        ["\\frac{1}{f} = \\frac{1}{u} + \\frac{1}{v}", "u"],
        ["\\frac{1}{2}mv^2 = mgh", "v"],
        ["\\frac{1}{2}mv^2 = mgh", "h"],
        ["F = \\frac{Gm_1 m_2}{r^2}", "r"],
        ["F = \\frac{Gm_1 m_2}{r^2}", "m_2"],
        ["T = 2\\pi\\sqrt{\\frac{L}{g}}", "g"],
        ["T = 2\\pi\\sqrt{\\frac{L}{g}}", "L"],
        ["v^2 = u^2 + 2as", "u"],
        ["y = e^{kx}", "x"],
        ["y = e^{kx}", "k"],
        ["y = \\abs{x}", "x"],
        ["P = \\frac{1}{2}\\rho v^3 A", "v"],
        ["E = E^\\circ - \\frac{RT}{nF}\\ln Q", "Q"],
        ["E = E^\\circ - \\frac{RT}{nF}\\ln Q", "T"],
        ["\\mathcal{L} = \\mathbf{F} \\cdot \\vec{r}", "\\vec{r}"],
        ["A = \\pi r^2", "r"],
        ["y = \\sqrt[3]{x}", "x"],
        ["ax^2 + bx - c = 0", "x"],
        ["x = x_0 + v_0 t + \\frac{1}{2}at^2", "t"],
        ["x^2 + 3x = y", "x"],
    ],
)
def test_solutions_satisfy_equation(equation, var):
    assert_solves(equation, var)


def test_one_result_per_variable_sorted():
    results = rearrange_latex("F = G\\frac{m_1 m_2}{r^2}")
    assert [r.variable for r in results] == ["F", "G", "m_1", "m_2", "r"]
    assert all(r.solved for r in results)
    assert all(r.latex.startswith(r.variable + " = ") for r in results)


def test_deterministic():
    assert rearrange_latex("v^2 = u^2 + 2as") == rearrange_latex("v^2 = u^2 + 2as")


def test_no_equals_sign():
    assert_rearrangement("ax + b", "x", "x = \\frac{-b}{a}")


def test_parse_error():
    with pytest.warns(UserWarning, match="Failed to parse"):
        results = rearrange_latex("x = (y")
    assert len(results) == 1
    result = results[0]
    assert result.variable == "?"
    assert result.latex == "x = (y"
    assert not result.solved
    assert result.reason.startswith("Parse error: ")


def test_no_variables():
    assert rearrange_latex("1 + 1 = 2") == [RearrangementResult("?", "1 + 1 = 2", False, "no variables")]


@pytest.mark.filterwarnings("ignore")
@pytest.mark.parametrize(
    "junk",
    ["", "=", "x = ", "\\frac{", "((x", "x^", "1.2.3 = x", "= = =", "\\sqrt[3", "x_", "}", "x = y = z", "\\frac{1}{0} = x"],
)
def test_never_raises(junk):
    results = rearrange_latex(junk)
    assert len(results) >= 1
    assert all(isinstance(r, RearrangementResult) for r in results)


def test_unsolved_warns():
    with pytest.warns(UserWarning, match="Failed to solve"):
        rearrange_latex("x = x")


def test_solved_variants():
    variants = solved_variants(["v = u + at", "u = v - at"])
    assert [v.latex for v in variants] == [
        "a = \\frac{v - u}{t}",
        "t = \\frac{v - u}{a}",
        "u = v - a \\cdot t",
        "v = u + a \\cdot t",
    ]


@pytest.mark.filterwarnings("ignore")
def test_solved_variants_skips_unsolved():
    variants = solved_variants(["\\frac{1}{2}mv^2 = mgh", "x = (y"])
    assert "m" not in [v.variable for v in variants]
    assert all(v.solved for v in variants)


@pytest.mark.filterwarnings("ignore")
def test_logger(monkeypatch, tmp_path):
    filename = tmp_path / "log.txt"
    logger = Logger(filename=str(filename))
    monkeypatch.setattr(Rearrangement, "logger", logger)

    rearrange_latex("v = u + at")
    rearrange_latex("\\frac{1}{2}mv^2 = mgh")
    assert list(logger.data) == ["v = u + at", "\\frac{1}{2}mv^2 = mgh"]
    assert len(logger.data["v = u + at"].results) == 4

    logger.dump()
    text = filename.read_text()
    assert "v = u + at: " in text
    assert ", 4/4" in text
    assert "Unsolved:" in text
    assert "\\frac{1}{2}mv^2 = mgh [m]: Could not isolate 'm'" in text


def test_debug_prints_strategies(capsys):
    rearrange_latex("v = u + at", debug=True)
    out = capsys.readouterr().out
    assert "Parsed 'v = u + at'" in out
    assert "[a] isolate" in out


def test_no_debug_no_output(capsys):
    rearrange_latex("v = u + at")
    assert capsys.readouterr().out == ""


def test_cli(capsys):
    assert cli.main(["v = u + at", "x = (y"]) == 0
    out = capsys.readouterr().out
    assert "Input:  v = u + at" in out
    assert "✓  a = \\frac{v - u}{t}" in out
    assert "✗  [?] Parse error: " in out


def test_cli_demo(capsys):
    assert cli.main([]) == 0
    out = capsys.readouterr().out
    for equation in cli.DEMO_EQUATIONS:
        assert f"Input:  {equation}" in out
