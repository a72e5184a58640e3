# All are taken from the formula tables the engine was written for.
BENCHMARKING_SUITE = [
    "v = u + at",
    "E = mc^2",
    "\\frac{1}{2}mv^2 = mgh",
    "PV = nRT",
    "F = G\\frac{m_1 m_2}{r^2}",
    "v^2 = u^2 + 2as",
    "T = 2\\pi\\sqrt{\\frac{L}{g}}",
    "\\ln(N) = \\ln(N_0) - \\lambda t",
    "x = x_0 + v_0 t + \\frac{1}{2}at^2",
    "a = \\frac{v^2 - v_0^2}{2(x - x_0)}",
    "t = \\sqrt{\\frac{2y}{g}}",
    "B = \\frac{\\mu_0 N I}{2\\pi r}",
    "C = 4\\pi\\epsilon_0 \\frac{r_a r_b}{r_b - r_a}",
    "C = \\frac{2\\pi\\epsilon_0 L}{\\ln(r_b/r_a)}",
    "E = E^\\circ - \\frac{RT}{nF}\\ln Q",
    "F_c = m\\omega^2 r",
    "H_{products} = \\Delta H + H_{reactants}",
    "ax^2 + bx + c = 0",
    "x^3 + px + q = 0",
    "\\mathcal{L} = \\mathbf{F} \\cdot \\vec{r}",
]
