"""
Adapter: ShuntingYardEngine
Implements the ExpressionEngine port.

Pipeline (strictly sequential, no state kept between calls):
  lexer → normalizer → validator → classifier → shunting-yard
        → tree builder → binding check → evaluator
"""
from __future__ import annotations

import logging
import math
from typing import Mapping, Optional

from contracts import (
    DEFAULT_EPSILON,
    EvaluationError,
    EvaluationResult,
    ExprAST,
    MissingVariableError,
    Token,
)

from .classifier import classify
from .evaluator import TreeEvaluator
from .lexer import tokenize
from .normalize import normalize_tokens
from .precedence import DEFAULT_PRECEDENCE, PrecedenceTable
from .shunting_yard import infix_to_postfix
from .tree_builder import build_tree
from .validator import validate_tokens

logger = logging.getLogger(__name__)


def _coerce_bindings(variables: Optional[Mapping[str, float]]) -> dict[str, float]:
    bindings: dict[str, float] = {}
    for name, value in (variables or {}).items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise EvaluationError(f"Variable {name!r} must be numeric, got {value!r}")
        bindings[name] = float(value)
    return bindings


class ShuntingYardEngine:
    """Evaluates arithmetic, comparison and boolean expressions."""

    def __init__(
        self,
        table: PrecedenceTable = DEFAULT_PRECEDENCE,
        epsilon: float = DEFAULT_EPSILON,
    ) -> None:
        if not (epsilon > 0 and math.isfinite(epsilon)):
            raise ValueError(f"epsilon must be a positive finite number, got {epsilon!r}")
        self._table = table
        self._evaluator = TreeEvaluator(epsilon=epsilon)

    @property
    def epsilon(self) -> float:
        return self._evaluator.epsilon

    # -- ExpressionEngine protocol ------------------------------------------

    def evaluate(
        self,
        expression: str,
        variables: Optional[Mapping[str, float]] = None,
    ) -> EvaluationResult:
        tokens = self._canonical_tokens(expression)
        shape = classify(tokens, self._table)
        postfix = infix_to_postfix(tokens, self._table)
        tree, names = build_tree(postfix, self._table)

        bindings = _coerce_bindings(variables)
        missing = [name for name in names if name not in bindings]
        if missing:
            raise MissingVariableError(missing)
        used = {name: bindings[name] for name in names}

        value = self._evaluator.evaluate(tree, used)

        result = EvaluationResult(
            value=value,
            is_boolean_expression=shape.is_boolean_expression,
            has_numeric_variables=shape.has_numeric_variables,
            variables=used,
            original_expression=expression,
            postfix_notation=" ".join(t.text for t in postfix),
            epsilon=self.epsilon,
        )
        logger.debug("%r -> %s", expression, result.display_value)
        return result

    def extract_variables(self, expression: str) -> list[str]:
        tokens = self._canonical_tokens(expression)
        _, names = build_tree(infix_to_postfix(tokens, self._table), self._table)
        return names

    # -- Extra helpers -------------------------------------------------------

    def to_postfix(self, expression: str) -> list[Token]:
        """Validated postfix tokens, without evaluating or requiring bindings."""
        return infix_to_postfix(self._canonical_tokens(expression), self._table)

    def parse(self, expression: str) -> ExprAST:
        tree, _ = build_tree(self.to_postfix(expression), self._table)
        return tree

    # -- Private --------------------------------------------------------------

    def _canonical_tokens(self, expression: str) -> list[Token]:
        tokens = normalize_tokens(tokenize(expression))
        validate_tokens(tokens, self._table)
        return tokens
