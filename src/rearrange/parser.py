"""Recursive descent parser: latex -> Eq.

Grammar, lowest precedence first:

    equation = expr ('=' expr)? end          no '=' means expr = 0
    expr     = term (('+' | '-' | '±') term)*
    term     = unary (('*' | '/' | <implicit>) unary)*
    unary    = '-' unary | '+' unary | '±' unary | power
    power    = atom ('^' brace_or_atom)*     x^2^3 is (x^2)^3
    atom     = number | identifier [subscript] | command | '(' expr ')' | '{' expr '}'

Implicit multiplication is what makes mc^2, 2\\pi\\sqrt{...} and Gm_1m_2 work.
"""

from typing import List, Optional

from .expr import FUNCTION_NAMES, Add, Div, Eq, Expr, Fn, Mul, Neg, Num, Pm, Pow, Sub, Var
from .tokens import Token, TokenKind, tokenize

GREEK = [
    "alpha", "beta", "gamma", "delta", "epsilon", "varepsilon", "zeta", "eta", "theta", "vartheta",
    "iota", "kappa", "lambda", "mu", "nu", "xi", "pi", "varpi", "rho", "varrho", "sigma", "varsigma",
    "tau", "upsilon", "phi", "varphi", "chi", "psi", "omega",
    "Alpha", "Beta", "Gamma", "Delta", "Epsilon", "Zeta", "Eta", "Theta", "Iota", "Kappa", "Lambda",
    "Mu", "Nu", "Xi", "Pi", "Rho", "Sigma", "Tau", "Upsilon", "Phi", "Chi", "Psi", "Omega",
]  # fmt: skip

# commands that are variables/constants rather than functions
VARIABLE_COMMANDS = set(GREEK) | {"infty", "infinity", "partial"}

# fuse with the next token into one variable: \delta t -> "\delta t"
MODIFIER_PREFIXES = {"delta", "Delta", "partial", "nabla"}

# the argument becomes part of the variable: \mathcal{L} -> "\mathcal{L}"
FONT_ACCENT_COMMANDS = {
    # fonts
    "mathcal", "mathbb", "mathbf", "mathit", "mathrm", "mathsf", "mathtt", "mathfrak",
    "boldsymbol", "bm", "pmb",
    # accents
    "hat", "tilde", "bar", "vec", "dot", "ddot", "breve", "check", "acute", "grave",
    "widehat", "widetilde", "overline", "underline", "overrightarrow", "overleftarrow",
    "overbrace", "underbrace",
}  # fmt: skip

KNOWN_FUNCTIONS = {
    "sin", "cos", "tan", "sec", "csc", "cot",
    "arcsin", "arccos", "arctan",
    "sinh", "cosh", "tanh",
    "ln", "log", "exp", "sqrt", "abs", "sgn",
}  # fmt: skip

# \operatorname{arcsinh} and \text{...}
NAMED_OPERATOR_COMMANDS = {"operatorname", "text"}

# tokens inside a subscript group that mean "this is an expression, not a label"
_EXPRESSION_TOKENS = {"operator", "caret"}


class ParseError(ValueError):
    """The latex could not be read."""


class Parser:
    def __init__(self, tokens: List[Token]):
        self._tokens = tokens
        self._pos = 0

    def _peek(self, offset: int = 0) -> Token:
        return self._tokens[min(self._pos + offset, len(self._tokens) - 1)]

    def _consume(self) -> Token:
        token = self._peek()
        if token.kind != "end":
            self._pos += 1
        return token

    def _at(self, kind: TokenKind, value: Optional[str] = None) -> bool:
        token = self._peek()
        return token.kind == kind and (value is None or token.value == value)

    def _expect(self, kind: TokenKind) -> Token:
        token = self._consume()
        if token.kind != kind:
            raise ParseError(f"Expected {kind}, got {_describe(token)}")
        return token

    ## Grammar ##

    def parse_equation(self) -> Eq:
        lhs = self.parse_expr()
        rhs = Num(0)
        if self._at("equals"):
            self._consume()
            rhs = self.parse_expr()
        if not self._at("end"):
            raise ParseError(f"Unexpected {_describe(self._peek())} after the end of the equation")
        return Eq(lhs, rhs)

    def parse_expr(self) -> Expr:
        left = self.parse_term()
        while self._at("operator"):
            op = self._peek().value
            if op == "+":
                self._consume()
                left = Add(left, self.parse_term())
            elif op == "-":
                self._consume()
                left = Sub(left, self.parse_term())
            elif op == "±":
                self._consume()
                left = Pm(left, self.parse_term())
            else:
                break
        return left

    def parse_term(self) -> Expr:
        left = self.parse_unary()
        while True:
            if self._at("operator", "*"):
                self._consume()
                left = Mul(left, self.parse_unary())
            elif self._at("operator", "/"):
                self._consume()
                left = Div(left, self.parse_unary())
            elif self._starts_implicit_product():
                # \frac lands here too: 2\frac{a}{b} is 2 * (a/b)
                left = Mul(left, self.parse_unary())
            else:
                return left

    def _starts_implicit_product(self) -> bool:
        token = self._peek()
        if token.kind in ("number", "identifier", "lparen", "lbrace"):
            return True
        # any alphabetic command is an atom: a known one, or an opaque variable like \hbar
        return token.kind == "latex_command" and token.value.isalpha()

    def parse_unary(self) -> Expr:
        if self._at("operator", "-"):
            self._consume()
            return Neg(self.parse_unary())
        if self._at("operator", "+"):
            self._consume()
            return self.parse_unary()
        if self._at("operator", "±"):
            self._consume()
            return Pm(Num(0), self.parse_unary())
        return self.parse_power()

    def parse_power(self) -> Expr:
        base = self.parse_atom()
        while self._at("caret"):
            self._consume()
            base = Pow(base, self.parse_brace_or_atom())
        return base

    def parse_atom(self) -> Expr:
        token = self._peek()

        if token.kind == "number":
            self._consume()
            try:
                return Num(float(token.value))
            except ValueError:
                raise ParseError(f"Invalid number {token.value!r}") from None

        if token.kind == "identifier":
            self._consume()
            return Var(self._with_subscript(token.value))

        if token.kind == "latex_command":
            self._consume()
            return self._parse_command(token.value)

        if token.kind == "lparen":
            self._consume()
            inner = self.parse_expr()
            self._expect("rparen")
            return inner

        if token.kind == "lbrace":
            return self.parse_brace_group()

        raise ParseError(f"Unexpected {_describe(token)}")

    def parse_brace_group(self) -> Expr:
        self._expect("lbrace")
        inner = self.parse_expr()
        self._expect("rbrace")
        return inner

    def parse_brace_or_atom(self) -> Expr:
        if self._at("lbrace"):
            return self.parse_brace_group()
        return self.parse_atom()

    ## Commands ##

    def _parse_command(self, cmd: str) -> Expr:
        if cmd in FONT_ACCENT_COMMANDS:
            arg = self.parse_brace_or_atom()
            inner = arg.name if isinstance(arg, Var) else arg.latex()
            return Var(self._with_subscript(f"\\{cmd}{{{inner}}}"))

        if cmd in MODIFIER_PREFIXES:
            following = self._peek()
            if following.kind in ("identifier", "latex_command"):
                self._consume()
                return Var(self._with_subscript(f"\\{cmd} {following.text}"))
            return Var(self._with_subscript(f"\\{cmd}"))

        if cmd in VARIABLE_COMMANDS:
            return Var(self._with_subscript(f"\\{cmd}"))

        if cmd == "sqrt":
            degree: Expr = Num(2)
            if self._at("lbracket"):
                self._consume()
                degree = self.parse_expr()
                self._expect("rbracket")
            return Pow(self.parse_brace_or_atom(), Div(Num(1), degree))

        if cmd == "frac":
            numerator = self.parse_brace_or_atom()
            denominator = self.parse_brace_or_atom()
            return Div(numerator, denominator)

        if cmd == "log":
            base: Expr = Num(10)
            if self._at("underscore"):
                self._consume()
                base = self.parse_brace_or_atom()
            return self._function_application("log", base)

        if cmd in KNOWN_FUNCTIONS:
            return self._function_application(cmd)

        if cmd in NAMED_OPERATOR_COMMANDS:
            name = self._raw_group()
            if name in FUNCTION_NAMES:
                return self._function_application(name, Num(10) if name == "log" else None)
            return Var(self._with_subscript(f"\\{cmd}{{{name}}}"))

        # unknown command: opaque variable, e.g. \hbar
        return Var(self._with_subscript(f"\\{cmd}"))

    def _function_application(self, name: str, base: Optional[Expr] = None) -> Expr:
        # \sin^2 x is (\sin x)^2
        exponent = None
        if self._at("caret"):
            self._consume()
            exponent = self.parse_brace_or_atom()
        arg = self.parse_brace_or_atom()
        result = Fn(name, (arg,) if base is None else (arg, base))
        return result if exponent is None else Pow(result, exponent)

    ## Subscripts ##

    def _with_subscript(self, name: str) -> str:
        if not self._at("underscore"):
            return name
        self._consume()
        return name + "_" + self._subscript_label()

    def _subscript_label(self) -> str:
        """I_{total} -> "total", x_0 -> "0", x_{n+1} -> "n + 1" (parsed and written back out)."""
        if not self._at("lbrace"):
            token = self._consume()
            if token.kind not in ("number", "identifier", "latex_command"):
                raise ParseError(f"Unexpected {_describe(token)} in subscript")
            return token.text

        group = self._group_tokens()
        if any(t.kind in _EXPRESSION_TOKENS or t.value in ("frac", "sqrt") for t in group):
            return self.parse_brace_group().latex()

        self._pos += len(group) + 2
        label = ""
        for prev, token in zip([None] + group, group):
            if prev is not None and prev.kind == "latex_command" and prev.value.isalpha() and token.kind in ("identifier", "number"):
                # \alpha b, not \alphab
                label += " "
            label += token.text
        return label

    def _raw_group(self) -> str:
        """The raw text of a {...} group, consumed."""
        if not self._at("lbrace"):
            raise ParseError(f"Expected {{, got {_describe(self._peek())}")
        group = self._group_tokens()
        self._pos += len(group) + 2
        return "".join(t.text for t in group)

    def _group_tokens(self) -> List[Token]:
        """Tokens strictly inside the brace group starting at the current token. Does not consume."""
        depth = 0
        for i in range(self._pos, len(self._tokens)):
            token = self._tokens[i]
            if token.kind == "lbrace":
                depth += 1
            elif token.kind == "rbrace":
                depth -= 1
                if depth == 0:
                    return self._tokens[self._pos + 1 : i]
            elif token.kind == "end":
                break
        raise ParseError("Unterminated { group")


def _describe(token: Token) -> str:
    if token.kind == "end":
        return "end of input"
    return f"{token.kind} {token.text!r}"


def parse(latex: str) -> Eq:
    """Parse a latex equation. An expression without '=' is taken to equal zero.

    Raises ParseError if the latex is malformed.
    """
    return Parser(tokenize(latex)).parse_equation()
