"""
Shunting-yard converter — validated infix tokens → postfix (RPN) tokens.

Operator tokens in the output carry their resolved kind, and unary
plus/minus are emitted under their internal symbols ("u+", "u-"), so the
postfix sequence alone determines every operator's arity.

Popping rule for an incoming binary operator with precedence p:
  pop while the stack top is an operator with precedence > p,
  or equal precedence and the incoming operator is left-associative.
Prefix unary operators have no left operand, so they are pushed without
popping anything.
"""
from __future__ import annotations

import logging
from typing import Sequence

from contracts import Associativity, ExpressionSyntaxError, Token, TokenKind

from .precedence import OperatorSpec, PrecedenceTable, resolve_operator

logger = logging.getLogger(__name__)


def _should_pop(top: OperatorSpec, incoming: OperatorSpec) -> bool:
    if top.precedence > incoming.precedence:
        return True
    return (
        top.precedence == incoming.precedence
        and incoming.associativity is Associativity.LEFT
    )


def infix_to_postfix(tokens: Sequence[Token], table: PrecedenceTable) -> list[Token]:
    output: list[Token] = []
    stack: list[Token] = []  # resolved operators and "(" only

    for i, token in enumerate(tokens):
        if token.is_value:
            output.append(token)

        elif token.kind is TokenKind.LEFT_PAREN:
            stack.append(token)

        elif token.kind is TokenKind.RIGHT_PAREN:
            while stack and stack[-1].kind is not TokenKind.LEFT_PAREN:
                output.append(stack.pop())
            if not stack:
                raise ExpressionSyntaxError(
                    "Parentheses not balanced: unexpected ')'", (token.text,)
                )
            stack.pop()

        else:
            spec = resolve_operator(tokens, i, table)
            if spec is None:
                raise ExpressionSyntaxError(f"Invalid token '{token.text}'", (token.text,))
            if not spec.is_unary:
                while stack and stack[-1].kind is TokenKind.OPERATOR:
                    if not _should_pop(table[stack[-1].text], spec):
                        break
                    output.append(stack.pop())
            stack.append(Token(TokenKind.OPERATOR, spec.symbol, spec.kind))

    while stack:
        top = stack.pop()
        if top.kind is TokenKind.LEFT_PAREN:
            raise ExpressionSyntaxError("Parentheses not balanced: unclosed '('", ("(",))
        output.append(top)

    logger.debug("postfix: %s", " ".join(t.text for t in output))
    return output
