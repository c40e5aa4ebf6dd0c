"""
Classifier — shape flags of a canonical token sequence.

Pure predicate scans; no validation happens here.
"""
from __future__ import annotations

from typing import NamedTuple, Sequence

from contracts import BOOLEAN_OPERATOR_KINDS, Token, TokenKind

from .precedence import DEFAULT_PRECEDENCE, PrecedenceTable


class ExpressionShape(NamedTuple):
    is_boolean_expression: bool
    has_numeric_variables: bool


def is_boolean_expression(
    tokens: Sequence[Token],
    table: PrecedenceTable = DEFAULT_PRECEDENCE,
) -> bool:
    """True iff any comparison or logical operator is present."""
    boolean_symbols = table.symbols_of(*BOOLEAN_OPERATOR_KINDS)
    return any(
        t.kind is TokenKind.OPERATOR and t.text in boolean_symbols for t in tokens
    )


def has_numeric_variables(tokens: Sequence[Token]) -> bool:
    return any(t.kind is TokenKind.VARIABLE for t in tokens)


def classify(
    tokens: Sequence[Token],
    table: PrecedenceTable = DEFAULT_PRECEDENCE,
) -> ExpressionShape:
    return ExpressionShape(
        is_boolean_expression=is_boolean_expression(tokens, table),
        has_numeric_variables=has_numeric_variables(tokens),
    )
