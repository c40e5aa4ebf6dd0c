"""
Validator — accepts or rejects a canonical token sequence.

Never transforms or repairs the tokens; the first violated rule raises
ExpressionSyntaxError naming the offending token(s). Checks, in order:

  1. the sequence is non-empty
  2. parentheses balance (no premature ")" and nothing left unclosed)
  3. per token: well-formed token, operands around operators,
     no value directly after a value or ")", no "()" and no binary
     operator right after "("
  4. the expression neither starts with a binary-only operator nor ends
     with any operator
"""
from __future__ import annotations

from typing import Optional, Sequence

from contracts import ExpressionSyntaxError, Token, TokenKind

from .lexer import KEYWORDS
from .precedence import (
    UNARY_CAPABLE,
    UNARY_MINUS,
    UNARY_PLUS,
    PrecedenceTable,
    resolve_operator,
)


def is_valid_number(text: str) -> bool:
    if not text or text.count(".") > 1:
        return False
    if text.startswith(".") or text.endswith("."):
        return False
    return all(c.isdigit() or c == "." for c in text) and text.isascii()


def is_valid_variable(text: str) -> bool:
    return bool(text) and text[0].isalpha() and text not in KEYWORDS


def _starts_operand(token: Optional[Token]) -> bool:
    if token is None:
        return False
    if token.is_value or token.kind is TokenKind.LEFT_PAREN:
        return True
    return token.kind is TokenKind.OPERATOR and token.text in UNARY_CAPABLE


def _fail(message: str, *tokens: Token) -> ExpressionSyntaxError:
    return ExpressionSyntaxError(message, tuple(t.text for t in tokens))


def _check_parentheses(tokens: Sequence[Token]) -> None:
    depth = 0
    for token in tokens:
        if token.kind is TokenKind.LEFT_PAREN:
            depth += 1
        elif token.kind is TokenKind.RIGHT_PAREN:
            depth -= 1
            if depth < 0:
                raise _fail("Parentheses not balanced: unexpected ')'", token)
    if depth > 0:
        raise ExpressionSyntaxError(
            f"Parentheses not balanced: {depth} unclosed '('", ("(",) * depth
        )


def _check_form(token: Token, table: PrecedenceTable) -> None:
    if token.kind is TokenKind.NUMBER:
        if not is_valid_number(token.text):
            raise _fail(f"Invalid number format '{token.text}'", token)
    elif token.kind is TokenKind.VARIABLE:
        if not is_valid_variable(token.text):
            raise _fail(f"Invalid variable name '{token.text}'", token)
    elif token.kind is TokenKind.OPERATOR:
        # "u+" / "u-" are internal symbols and never valid in source text
        if token.text not in table or token.text in (UNARY_PLUS, UNARY_MINUS):
            raise _fail(f"Invalid token '{token.text}'", token)


def validate_tokens(tokens: Sequence[Token], table: PrecedenceTable) -> Sequence[Token]:
    """Returns tokens unchanged when valid, raises ExpressionSyntaxError otherwise."""
    if not tokens:
        raise ExpressionSyntaxError("Expression cannot be empty")

    _check_parentheses(tokens)

    for i, token in enumerate(tokens):
        prev_token = tokens[i - 1] if i > 0 else None
        next_token = tokens[i + 1] if i + 1 < len(tokens) else None

        _check_form(token, table)

        if token.is_value:
            if next_token is not None and (
                next_token.is_value or next_token.kind is TokenKind.LEFT_PAREN
            ):
                raise _fail(
                    f"Missing operator between '{token.text}' and '{next_token.text}'",
                    token, next_token,
                )

        elif token.kind is TokenKind.OPERATOR:
            spec = resolve_operator(tokens, i, table)
            if spec is None:
                raise _fail(f"Invalid token '{token.text}'", token)
            if spec.is_unary:
                # only "not" can land here after a value; "+"/"-" would be binary
                if prev_token is not None and (
                    prev_token.is_value or prev_token.kind is TokenKind.RIGHT_PAREN
                ):
                    raise _fail(
                        f"Missing operator between '{prev_token.text}' and '{token.text}'",
                        prev_token, token,
                    )
                if not _starts_operand(next_token):
                    if token.text == "not":
                        raise _fail("'not' operator missing operand", token)
                    raise _fail(f"Unary operator '{token.text}' missing operand", token)
            else:
                if prev_token is None or prev_token.kind in (
                    TokenKind.LEFT_PAREN, TokenKind.OPERATOR
                ):
                    raise _fail(f"Binary operator '{token.text}' missing left operand", token)
                if not _starts_operand(next_token):
                    raise _fail(f"Binary operator '{token.text}' missing right operand", token)

        elif token.kind is TokenKind.LEFT_PAREN:
            if next_token is not None and next_token.kind is TokenKind.RIGHT_PAREN:
                raise _fail("Empty parentheses '()'", token, next_token)
            if (
                next_token is not None
                and next_token.kind is TokenKind.OPERATOR
                and next_token.text not in UNARY_CAPABLE
            ):
                raise _fail(
                    f"'(' cannot be followed by binary operator '{next_token.text}'",
                    token, next_token,
                )

        elif token.kind is TokenKind.RIGHT_PAREN:
            if next_token is not None and (
                next_token.is_value or next_token.kind is TokenKind.LEFT_PAREN
            ):
                raise _fail(
                    f"Missing operator between ')' and '{next_token.text}'",
                    token, next_token,
                )

    first, last = tokens[0], tokens[-1]
    if first.kind is TokenKind.OPERATOR and first.text not in UNARY_CAPABLE:
        raise _fail(f"Expression cannot start with binary operator '{first.text}'", first)
    if last.kind is TokenKind.OPERATOR:
        raise _fail(f"Expression cannot end with operator '{last.text}'", last)

    return tokens
