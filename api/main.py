"""
api/main.py — FastAPI entry point.

Lifespan:
  - Builds the ShuntingYardEngine once (stateless, shared by every request)

Every route is served both at "/<name>" and "/api/<name>".
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from adapters.expression_engine import ShuntingYardEngine, default_precedence_table
from api.errors import error_response
from api.routers import evaluate, variables
from api.schemas import HealthResponse
from config import Settings

logger = logging.getLogger("evalr")

_HEALTH_PROBE = "2 + 2"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    app.state.engine = ShuntingYardEngine(
        table=default_precedence_table(),
        epsilon=settings.epsilon,
    )
    logger.info("Evalr API ready.")
    yield
    logger.info("Shutting down.")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # Routers
    for prefix in ("", "/api"):
        app.include_router(evaluate.router, prefix=prefix)
        app.include_router(variables.router, prefix=prefix)

    # Health
    @app.get("/health", response_model=HealthResponse, tags=["health"])
    @app.get("/api/health", response_model=HealthResponse, include_in_schema=False)
    def health(request: Request):
        checks: dict[str, str] = {}
        try:
            request.app.state.engine.evaluate(_HEALTH_PROBE)
            checks["engine"] = "ok"
        except Exception as exc:
            logger.error("Health check failed: %s", exc)
            checks["engine"] = "failed"

        healthy = all(v == "ok" for v in checks.values())
        response = HealthResponse(
            status="healthy" if healthy else "unhealthy",
            version=settings.app_version,
            checks=checks,
        )
        if not healthy:
            return JSONResponse(status_code=503, content=response.model_dump(mode="json"))
        return response

    # Malformed bodies are reported in the same shape as pipeline errors
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = "; ".join(
            f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg', '')}" for e in errors
        ) or "Invalid request body"
        logger.warning("Invalid request: %s", message)
        return error_response(400, "ValidationError", message)

    return app


app = create_app()
