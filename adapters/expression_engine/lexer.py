"""
Lexer — raw expression text → ordered list of raw tokens.

Character-class segmentation only; precedence and arity are resolved later.
Multi-character comparison operators are tried before single-character
ones, and "!" is only valid as part of "!=".
"""
from __future__ import annotations

import re

from contracts import LexError, Token, TokenKind

KEYWORDS = frozenset({"and", "or", "not"})

_WHITESPACE_RE = re.compile(r"\s+")

_TOKEN_RE = re.compile(
    r"(?P<number>[0-9.]+)"              # literal; format checked by the validator
    r"|(?P<name>[^\W\d_][^\W_]*)"       # identifier: letter, then letters/digits
    r"|(?P<operator><=|>=|!=|[-+*/^<>=≤≥≠×÷])"
    r"|(?P<left_paren>\()"
    r"|(?P<right_paren>\))"
)

_GROUP_KINDS = {
    "number": TokenKind.NUMBER,
    "operator": TokenKind.OPERATOR,
    "left_paren": TokenKind.LEFT_PAREN,
    "right_paren": TokenKind.RIGHT_PAREN,
}


def tokenize(expression: str) -> list[Token]:
    """Splits expression into tokens. Raises LexError on an unknown character."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(expression):
        ws = _WHITESPACE_RE.match(expression, pos)
        if ws:
            pos = ws.end()
            continue

        m = _TOKEN_RE.match(expression, pos)
        if m is None:
            char = expression[pos]
            raise LexError(
                f"Unrecognized character {char!r} at position {pos}",
                position=pos,
                char=char,
            )

        text = m.group()
        if m.lastgroup == "name":
            # \w also admits numeric symbols such as '½' or '²'
            length = _identifier_length(text)
            if length == 0:
                raise LexError(
                    f"Unrecognized character {text[0]!r} at position {pos}",
                    position=pos,
                    char=text[0],
                )
            text = text[:length]
            kind = TokenKind.OPERATOR if text in KEYWORDS else TokenKind.VARIABLE
        else:
            kind = _GROUP_KINDS[m.lastgroup]
        tokens.append(Token(kind, text))
        pos += len(text)
    return tokens


def _identifier_length(text: str) -> int:
    """Length of the leading letter-then-letters/digits run of text."""
    for i, ch in enumerate(text):
        if not (ch.isalpha() or (i > 0 and ch.isdecimal())):
            return i
    return len(text)
