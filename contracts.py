"""
contracts.py — single source of truth for every data type in Evalr.
All modules import shared types from here only.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

CONTRACTS_VERSION = "1.0.0"

# Tolerance for division-by-zero, equality and truthiness checks.
DEFAULT_EPSILON = 1e-9


# ─────────────────────────── Tokens ──────────────────────────────────────

class TokenKind(str, Enum):
    NUMBER = "number"
    VARIABLE = "variable"
    OPERATOR = "operator"
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"


class OperatorKind(str, Enum):
    UNARY_PLUS = "unary_plus"
    UNARY_MINUS = "unary_minus"
    ADDITIVE = "additive"              # binary + -
    MULTIPLICATIVE = "multiplicative"  # * /
    EXPONENT = "exponent"              # ^
    COMPARISON = "comparison"          # < <= > >= = !=
    LOGICAL_AND = "logical_and"
    LOGICAL_OR = "logical_or"
    LOGICAL_NOT = "logical_not"


BOOLEAN_OPERATOR_KINDS = frozenset({
    OperatorKind.COMPARISON,
    OperatorKind.LOGICAL_AND,
    OperatorKind.LOGICAL_OR,
    OperatorKind.LOGICAL_NOT,
})


class Associativity(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class Arity(int, Enum):
    UNARY = 1
    BINARY = 2


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    operator: Optional[OperatorKind] = None  # set once arity is resolved

    @property
    def is_value(self) -> bool:
        return self.kind in (TokenKind.NUMBER, TokenKind.VARIABLE)

    def __str__(self) -> str:
        return self.text


# ─────────────────────────── Expression tree ─────────────────────────────

_FROZEN = ConfigDict(frozen=True)


class NumberNode(BaseModel):
    model_config = _FROZEN

    node_type: Literal["number"] = "number"
    value: float


class VariableNode(BaseModel):
    model_config = _FROZEN

    node_type: Literal["variable"] = "variable"
    name: str


class UnaryOpNode(BaseModel):
    model_config = _FROZEN

    node_type: Literal["unary"] = "unary"
    op: str                 # canonical symbol: "u+", "u-", "not"
    kind: OperatorKind
    operand: ExprAST


class BinOpNode(BaseModel):
    model_config = _FROZEN

    node_type: Literal["binop"] = "binop"
    op: str
    kind: OperatorKind
    left: ExprAST
    right: ExprAST


ExprAST = Union[NumberNode, VariableNode, UnaryOpNode, BinOpNode]
UnaryOpNode.model_rebuild()
BinOpNode.model_rebuild()


# ─────────────────────────── Evaluation result ───────────────────────────

def format_number(value: float) -> str:
    """Shortest round-trip text of a double, without a trailing '.0'."""
    text = repr(float(value))
    if text.endswith(".0"):
        return text[:-2]
    return text


class EvaluationResult(BaseModel):
    """Immutable outcome of one evaluate() call.

    For boolean expressions value is encoded as 1.0 (true) / 0.0 (false).
    epsilon is the tolerance the value was computed with; truthiness and
    the true/false rendering use it too.
    """

    model_config = _FROZEN

    value: float
    is_boolean_expression: bool = False
    has_numeric_variables: bool = False
    variables: dict[str, float] = Field(default_factory=dict)
    original_expression: str = ""
    postfix_notation: str = ""
    epsilon: float = Field(default=DEFAULT_EPSILON, gt=0)

    def as_bool(self) -> bool:
        return abs(self.value) >= self.epsilon

    @property
    def display_value(self) -> str:
        if self.is_boolean_expression:
            if abs(self.value - 1.0) < self.epsilon:
                return "true"
            if abs(self.value) < self.epsilon:
                return "false"
        return format_number(self.value)

    def __str__(self) -> str:
        return self.display_value


# ─────────────────────────── Errors ──────────────────────────────────────

class ErrorKind(str, Enum):
    LEX = "LexError"
    SYNTAX = "SyntaxError"
    MISSING_VARIABLE = "MissingVariableError"
    EVALUATION = "EvaluationError"
    DIVISION_BY_ZERO = "DivisionByZeroError"
    INTERNAL = "InternalConsistencyError"


class EvalrError(Exception):
    """Base class of every error raised by the evaluation pipeline."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.kind.value, "message": self.message}


class LexError(EvalrError):
    kind = ErrorKind.LEX

    def __init__(self, message: str, position: int, char: str) -> None:
        super().__init__(message)
        self.position = position
        self.char = char


class ExpressionSyntaxError(EvalrError):
    kind = ErrorKind.SYNTAX

    def __init__(self, message: str, tokens: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.tokens = tokens


class MissingVariableError(EvalrError):
    kind = ErrorKind.MISSING_VARIABLE

    def __init__(self, names: list[str]) -> None:
        super().__init__(f"Missing values for variables: {', '.join(names)}")
        self.names = list(names)

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "missing": self.names}


class EvaluationError(EvalrError):
    kind = ErrorKind.EVALUATION


class DivisionByZeroError(EvaluationError, ZeroDivisionError):
    kind = ErrorKind.DIVISION_BY_ZERO


class InternalConsistencyError(EvalrError):
    kind = ErrorKind.INTERNAL


class TreeError(InternalConsistencyError):
    """Malformed postfix sequence reached the tree builder."""
