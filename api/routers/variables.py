"""
Router: POST /extract-variables

Lists the variable names an expression references, without evaluating it.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from adapters.expression_engine import ShuntingYardEngine
from api.dependencies import get_engine
from api.errors import evalr_error_response
from api.schemas import ErrorResponse, ExtractVariablesRequest, ExtractVariablesResponse
from contracts import EvalrError

logger = logging.getLogger("evalr")

router = APIRouter(prefix="/extract-variables", tags=["variables"])


@router.post(
    "",
    response_model=ExtractVariablesResponse,
    responses={400: {"model": ErrorResponse}},
)
def extract_variables(
    body: ExtractVariablesRequest,
    engine: ShuntingYardEngine = Depends(get_engine),
):
    logger.info("Extracting variables from: %s", body.expression)
    try:
        names = engine.extract_variables(body.expression)
    except EvalrError as exc:
        logger.warning("%s: %s", exc.kind.value, exc.message)
        return evalr_error_response(exc, body.expression)

    return ExtractVariablesResponse(
        variables=names,
        expression=body.expression,
        has_variables=bool(names),
    )
