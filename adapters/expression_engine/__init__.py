"""
Expression engine — ExpressionEngine adapter built on the shunting-yard algorithm.

Stages (one module each):
  - tokenize            — raw text → tokens
  - normalize_tokens    — unicode operators → ASCII
  - validate_tokens     — structural acceptance/rejection
  - classify            — boolean / variable flags
  - infix_to_postfix    — shunting-yard conversion
  - build_tree          — postfix → ExprAST + variable names
  - TreeEvaluator       — ExprAST + bindings → double

ShuntingYardEngine wires them together.
"""
from .classifier import ExpressionShape, classify
from .engine import ShuntingYardEngine
from .evaluator import TreeEvaluator
from .lexer import tokenize
from .normalize import normalize_tokens
from .precedence import (
    DEFAULT_PRECEDENCE,
    OperatorSpec,
    PrecedenceTable,
    default_precedence_table,
)
from .shunting_yard import infix_to_postfix
from .tree_builder import build_tree
from .validator import validate_tokens

__all__ = [
    "DEFAULT_PRECEDENCE",
    "ExpressionShape",
    "OperatorSpec",
    "PrecedenceTable",
    "ShuntingYardEngine",
    "TreeEvaluator",
    "build_tree",
    "classify",
    "default_precedence_table",
    "infix_to_postfix",
    "normalize_tokens",
    "tokenize",
    "validate_tokens",
]
