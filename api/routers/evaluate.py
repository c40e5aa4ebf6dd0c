"""
Router: POST /evaluate

Evaluates an expression with optional variable bindings. Pipeline errors
are returned as ErrorResponse bodies carrying the error kind.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from adapters.expression_engine import ShuntingYardEngine
from api.dependencies import get_engine
from api.errors import evalr_error_response
from api.schemas import ErrorResponse, EvaluateRequest, EvaluateResponse
from contracts import EvalrError, InternalConsistencyError

logger = logging.getLogger("evalr")

router = APIRouter(prefix="/evaluate", tags=["evaluate"])


@router.post(
    "",
    response_model=EvaluateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def evaluate(
    body: EvaluateRequest,
    engine: ShuntingYardEngine = Depends(get_engine),
):
    logger.info("Evaluating expression: %s", body.expression)
    try:
        result = engine.evaluate(body.expression, body.variables)
    except InternalConsistencyError as exc:
        logger.error("Internal consistency error for %r: %s", body.expression, exc)
        return evalr_error_response(exc, body.expression)
    except EvalrError as exc:
        logger.warning("%s: %s", exc.kind.value, exc.message)
        return evalr_error_response(exc, body.expression)

    return EvaluateResponse.from_result(result)
