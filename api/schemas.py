"""
schemas.py — FastAPI request/response models.
Kept apart from contracts.py so the API can evolve independently.
"""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, FiniteFloat

from contracts import EvaluationResult

_MAX_EXPRESSION = 10_000


def _now() -> datetime:
    return datetime.now(tz=timezone.utc)


# ─────────────────────────── /evaluate ───────────────────────────

class EvaluateRequest(BaseModel):
    expression: str = Field(..., min_length=1, max_length=_MAX_EXPRESSION)
    variables: Optional[dict[str, FiniteFloat]] = None


class EvaluateResponse(BaseModel):
    value: Optional[float]      # null for inf/nan; see display_value
    display_value: str          # "true"/"false" for boolean expressions
    is_boolean_expression: bool
    has_numeric_variables: bool
    variables: dict[str, float]
    expression: str
    postfix_notation: str

    @classmethod
    def from_result(cls, result: EvaluationResult) -> "EvaluateResponse":
        return cls(
            value=result.value if math.isfinite(result.value) else None,
            display_value=result.display_value,
            is_boolean_expression=result.is_boolean_expression,
            has_numeric_variables=result.has_numeric_variables,
            variables=result.variables,
            expression=result.original_expression,
            postfix_notation=result.postfix_notation,
        )


# ─────────────────────────── /extract-variables ──────────────────

class ExtractVariablesRequest(BaseModel):
    expression: str = Field(..., min_length=1, max_length=_MAX_EXPRESSION)


class ExtractVariablesResponse(BaseModel):
    variables: list[str]
    expression: str
    has_variables: bool


# ─────────────────────────── errors ──────────────────────────────

class ErrorResponse(BaseModel):
    error: str                  # e.g. "SyntaxError", "DivisionByZeroError"
    message: str
    expression: Optional[str] = None
    status_code: int
    missing: Optional[list[str]] = None


# ─────────────────────────── /health ─────────────────────────────

class HealthResponse(BaseModel):
    status: str                 # "healthy" | "unhealthy"
    version: str
    timestamp: datetime = Field(default_factory=_now)
    checks: dict[str, str] = {}
