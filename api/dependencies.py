"""
dependencies.py — FastAPI dependency injection.
Each dependency returns its adapter from Request.app.state.
"""
from __future__ import annotations

from fastapi import Request

from adapters.expression_engine import ShuntingYardEngine


def get_engine(request: Request) -> ShuntingYardEngine:
    return request.app.state.engine