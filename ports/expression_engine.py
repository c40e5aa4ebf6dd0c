"""
Port: ExpressionEngine
Responsibility: evaluate textual arithmetic/comparison/boolean expressions.
"""
from typing import Mapping, Optional, Protocol, runtime_checkable

from contracts import EvaluationResult


@runtime_checkable
class ExpressionEngine(Protocol):
    def evaluate(
        self,
        expression: str,
        variables: Optional[Mapping[str, float]] = None,
    ) -> EvaluationResult:
        """
        Evaluates expression with optional variable bindings.
        Returns EvaluationResult with:
          - value: double (1.0 / 0.0 for boolean expressions)
          - postfix_notation: space-joined postfix tokens
          - variables: the bindings the expression actually referenced
        Raises LexError / ExpressionSyntaxError for malformed text,
        MissingVariableError listing every unbound name,
        DivisionByZeroError when a divisor is within epsilon of zero.
        """
        ...

    def extract_variables(self, expression: str) -> list[str]:
        """
        Distinct variable names in first-seen order.
        Needs no bindings and performs no evaluation.
        """
        ...
