"""
errors.py — maps pipeline errors to JSON error responses.
"""
from __future__ import annotations

from typing import Optional

from fastapi.responses import JSONResponse

from api.schemas import ErrorResponse
from contracts import ErrorKind, EvalrError, MissingVariableError

# Everything the caller can fix by changing the request is a 400.
_STATUS_BY_KIND = {
    ErrorKind.LEX: 400,
    ErrorKind.SYNTAX: 400,
    ErrorKind.MISSING_VARIABLE: 400,
    ErrorKind.EVALUATION: 400,
    ErrorKind.DIVISION_BY_ZERO: 400,
    ErrorKind.INTERNAL: 500,
}


def error_response(
    status_code: int,
    error: str,
    message: str,
    expression: Optional[str] = None,
    missing: Optional[list[str]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        message=message,
        expression=expression,
        status_code=status_code,
        missing=missing,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def evalr_error_response(exc: EvalrError, expression: Optional[str] = None) -> JSONResponse:
    missing = exc.names if isinstance(exc, MissingVariableError) else None
    return error_response(
        _STATUS_BY_KIND.get(exc.kind, 500),
        exc.kind.value,
        exc.message,
        expression=expression,
        missing=missing,
    )
