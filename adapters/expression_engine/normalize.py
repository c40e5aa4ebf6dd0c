"""
Normalizer — maps unicode math symbols to their ASCII operators.
"""
from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType
from typing import Iterable

from contracts import Token, TokenKind

UNICODE_OPERATORS = MappingProxyType({
    "≤": "<=",
    "≥": ">=",
    "≠": "!=",
    "×": "*",
    "÷": "/",
})


def normalize_token(token: Token) -> Token:
    if token.kind is TokenKind.OPERATOR and token.text in UNICODE_OPERATORS:
        return replace(token, text=UNICODE_OPERATORS[token.text])
    return token


def normalize_tokens(tokens: Iterable[Token]) -> list[Token]:
    """Token-by-token substitution; identity on everything else."""
    return [normalize_token(t) for t in tokens]
