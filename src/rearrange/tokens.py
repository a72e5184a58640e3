"""Turns a latex string into a flat list of tokens.

The tokenizer is intentionally dumb: one latin letter is one identifier. Multi-letter
variable names (subscripts, \\delta t, \\mathcal{L}, ...) are the parser's problem.
"""

import re
from typing import List, Literal, NamedTuple

TokenKind = Literal[
    "number",
    "identifier",
    "latex_command",
    "operator",
    "lparen",
    "rparen",
    "lbrace",
    "rbrace",
    "lbracket",
    "rbracket",
    "equals",
    "caret",
    "underscore",
    "comma",
    "end",
]


class Token(NamedTuple):
    kind: TokenKind
    value: str

    @property
    def text(self) -> str:
        """The token as it would be written in latex."""
        if self.kind == "latex_command":
            return "\\" + self.value
        return self.value


# commands that are really just operators
OPERATOR_ALIASES = {
    "cdot": "*",
    "times": "*",
    "div": "/",
    "pm": "±",
    "mp": "±",
}

SINGLE_CHARS = {
    "+": "operator",
    "-": "operator",
    "*": "operator",
    "/": "operator",
    "^": "caret",
    "_": "underscore",
    "=": "equals",
    "(": "lparen",
    ")": "rparen",
    "{": "lbrace",
    "}": "rbrace",
    "[": "lbracket",
    "]": "rbracket",
    ",": "comma",
}

_PREPROCESS = [
    (re.compile(r"^\s*\$\$?\s*"), ""),
    (re.compile(r"\s*\$?\$\s*$"), ""),
    # \left( and \right) are just brackets. careful not to eat \leftarrow.
    (re.compile(r"\\left(?![a-zA-Z])\s*"), ""),
    (re.compile(r"\\right(?![a-zA-Z])\s*"), ""),
    (re.compile(r"\\[!,;: ]"), ""),
    (re.compile(r"\\qquad(?![a-zA-Z])"), ""),
    (re.compile(r"\\quad(?![a-zA-Z])"), ""),
    (re.compile(r"\s+"), " "),
]


def preprocess(latex: str) -> str:
    """Strips math-mode wrappers, sizing and spacing commands that carry no meaning."""
    s = latex.strip()
    for pattern, replacement in _PREPROCESS:
        s = pattern.sub(replacement, s)
    return s


def tokenize(latex: str) -> List[Token]:
    """
    >>> [t.value for t in tokenize("mc^2")]
    ['m', 'c', '^', '2', '']
    """
    s = preprocess(latex)
    tokens: List[Token] = []
    i = 0

    while i < len(s):
        ch = s[i]

        if ch == " ":
            i += 1
            continue

        # "1.2.3" is happily scanned as one number; the parser rejects it.
        if ch.isdigit() or (ch == "." and i + 1 < len(s) and s[i + 1].isdigit()):
            start = i
            while i < len(s) and (s[i].isdigit() or s[i] == "."):
                i += 1
            tokens.append(Token("number", s[start:i]))
            continue

        if ch.isascii() and ch.isalpha():
            tokens.append(Token("identifier", ch))
            i += 1
            continue

        if ch == "\\":
            i += 1
            start = i
            while i < len(s) and s[i].isascii() and s[i].isalpha():
                i += 1
            if i == start and i < len(s):
                # \{ , \| and friends: exactly one character
                i += 1
            cmd = s[start:i]
            if cmd in OPERATOR_ALIASES:
                tokens.append(Token("operator", OPERATOR_ALIASES[cmd]))
            elif cmd:
                tokens.append(Token("latex_command", cmd))
            continue

        if ch in SINGLE_CHARS:
            tokens.append(Token(SINGLE_CHARS[ch], ch))
        elif ch == "±":
            tokens.append(Token("operator", "±"))
        # anything else (|, !, ', ...) is dropped
        i += 1

    tokens.append(Token("end", ""))
    return tokens
