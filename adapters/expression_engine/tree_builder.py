"""
Tree builder — postfix tokens → expression tree + referenced variable names.

Single left-to-right scan over an operand stack. Binary operands are popped
right-then-left so the tree keeps the source order. Any stack underflow or
leftover operand means the postfix sequence is malformed (TreeError).
"""
from __future__ import annotations

from typing import Sequence

from contracts import (
    BinOpNode,
    ExprAST,
    NumberNode,
    Token,
    TokenKind,
    TreeError,
    UnaryOpNode,
    VariableNode,
)

from .precedence import PrecedenceTable


def build_tree(
    postfix: Sequence[Token],
    table: PrecedenceTable,
) -> tuple[ExprAST, list[str]]:
    """Returns (root, distinct variable names in first-seen order)."""
    stack: list[ExprAST] = []
    names: dict[str, None] = {}

    for token in postfix:
        if token.kind is TokenKind.NUMBER:
            stack.append(NumberNode(value=float(token.text)))

        elif token.kind is TokenKind.VARIABLE:
            names.setdefault(token.text, None)
            stack.append(VariableNode(name=token.text))

        elif token.kind is TokenKind.OPERATOR:
            spec = table.get(token.text)
            if spec is None:
                raise TreeError(f"Unknown operator {token.text!r} in postfix sequence")
            if token.operator is not None and token.operator is not spec.kind:
                raise TreeError(
                    f"Operator {token.text!r} resolved as {token.operator.value}, "
                    f"table says {spec.kind.value}"
                )
            if len(stack) < spec.arity:
                raise TreeError(
                    f"Operator {token.text!r} expects {int(spec.arity)} operand(s), "
                    f"found {len(stack)}"
                )
            if spec.is_unary:
                operand = stack.pop()
                stack.append(UnaryOpNode(op=spec.symbol, kind=spec.kind, operand=operand))
            else:
                right = stack.pop()
                left = stack.pop()
                stack.append(BinOpNode(op=spec.symbol, kind=spec.kind, left=left, right=right))

        else:
            raise TreeError(f"Unexpected {token.text!r} in postfix sequence")

    if len(stack) != 1:
        raise TreeError(
            f"Malformed postfix expression: {len(stack)} operands left on the stack"
        )
    return stack[0], list(names)
