"""
Evaluator — post-order evaluation of an expression tree.

Every value is a double; boolean operators return 1.0 / 0.0, so boolean
and arithmetic sub-expressions compose freely ("(5 > 3) + 1" = 2).

Epsilon rules:
  - "/" fails when |divisor| < epsilon, not only at exactly zero
  - "=" / "!=" treat |a - b| < epsilon as equal
  - "and" / "or" / "not" treat |x| >= epsilon as true
"""
from __future__ import annotations

import math
from typing import Callable, Mapping

from contracts import (
    DEFAULT_EPSILON,
    BinOpNode,
    DivisionByZeroError,
    EvaluationError,
    ExprAST,
    InternalConsistencyError,
    NumberNode,
    OperatorKind,
    UnaryOpNode,
    VariableNode,
)


def _truth(flag: bool) -> float:
    return 1.0 if flag else 0.0


def _divide(a: float, b: float, eps: float) -> float:
    if abs(b) < eps:
        raise DivisionByZeroError("Division by zero")
    return a / b


def _power(a: float, b: float, eps: float) -> float:
    """a ** b with IEEE-754 results instead of Python exceptions."""
    try:
        return math.pow(a, b)
    except OverflowError:
        odd_integer = b.is_integer() and int(b) % 2 == 1
        return -math.inf if a < 0 and odd_integer else math.inf
    except ValueError:
        if a == 0.0 and b < 0:
            return math.inf
        return math.nan


_BINARY_FUNCS: dict[tuple[OperatorKind, str], Callable[[float, float, float], float]] = {
    (OperatorKind.ADDITIVE, "+"):        lambda a, b, eps: a + b,
    (OperatorKind.ADDITIVE, "-"):        lambda a, b, eps: a - b,
    (OperatorKind.MULTIPLICATIVE, "*"):  lambda a, b, eps: a * b,
    (OperatorKind.MULTIPLICATIVE, "/"):  _divide,
    (OperatorKind.EXPONENT, "^"):        _power,
    (OperatorKind.COMPARISON, "<"):      lambda a, b, eps: _truth(a < b),
    (OperatorKind.COMPARISON, "<="):     lambda a, b, eps: _truth(a <= b),
    (OperatorKind.COMPARISON, ">"):      lambda a, b, eps: _truth(a > b),
    (OperatorKind.COMPARISON, ">="):     lambda a, b, eps: _truth(a >= b),
    (OperatorKind.COMPARISON, "="):      lambda a, b, eps: _truth(abs(a - b) < eps),
    (OperatorKind.COMPARISON, "!="):     lambda a, b, eps: _truth(abs(a - b) >= eps),
    (OperatorKind.LOGICAL_AND, "and"):   lambda a, b, eps: _truth(abs(a) >= eps and abs(b) >= eps),
    (OperatorKind.LOGICAL_OR, "or"):     lambda a, b, eps: _truth(abs(a) >= eps or abs(b) >= eps),
}

_UNARY_FUNCS: dict[tuple[OperatorKind, str], Callable[[float, float], float]] = {
    (OperatorKind.UNARY_PLUS, "u+"):     lambda x, eps: x,
    (OperatorKind.UNARY_MINUS, "u-"):    lambda x, eps: -x,
    (OperatorKind.LOGICAL_NOT, "not"):   lambda x, eps: _truth(abs(x) < eps),
}


class TreeEvaluator:
    """Evaluates ExprAST trees against a name → double binding mapping.

    Walks the tree with an explicit stack, so evaluation depth is bounded
    by memory rather than the interpreter's recursion limit.
    """

    def __init__(self, epsilon: float = DEFAULT_EPSILON) -> None:
        self.epsilon = epsilon

    def evaluate(self, node: ExprAST, bindings: Mapping[str, float]) -> float:
        values: list[float] = []
        pending: list[tuple[ExprAST, bool]] = [(node, False)]

        while pending:
            current, expanded = pending.pop()

            if isinstance(current, NumberNode):
                values.append(current.value)

            elif isinstance(current, VariableNode):
                values.append(self._lookup(current.name, bindings))

            elif isinstance(current, UnaryOpNode):
                fn = _UNARY_FUNCS.get((current.kind, current.op))
                if fn is None:
                    raise InternalConsistencyError(
                        f"Unknown unary operator: {current.op!r} ({current.kind.value})"
                    )
                if expanded:
                    values.append(fn(values.pop(), self.epsilon))
                else:
                    pending.append((current, True))
                    pending.append((current.operand, False))

            elif isinstance(current, BinOpNode):
                fn = _BINARY_FUNCS.get((current.kind, current.op))
                if fn is None:
                    raise InternalConsistencyError(
                        f"Unknown binary operator: {current.op!r} ({current.kind.value})"
                    )
                if expanded:
                    right = values.pop()
                    left = values.pop()
                    values.append(fn(left, right, self.epsilon))
                else:
                    # left is popped first, so its value lands below the right one
                    pending.append((current, True))
                    pending.append((current.right, False))
                    pending.append((current.left, False))

            else:
                raise InternalConsistencyError(f"Unknown AST node type: {type(current)}")

        if len(values) != 1:
            raise InternalConsistencyError(
                f"Evaluation left {len(values)} values on the stack"
            )
        return values[0]

    @staticmethod
    def _lookup(name: str, bindings: Mapping[str, float]) -> float:
        # normally unreachable: the engine checks bindings up front
        if name not in bindings:
            raise EvaluationError(f"Undefined variable: {name!r}")
        return bindings[name]
