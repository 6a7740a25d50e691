"""HTTP middleware stack.

Starlette runs the last added middleware first, so the order below is
innermost to outermost: logging context, CORS, correlation id.
"""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from src.teamkick.core.config import Settings

from .logging_context import logging_context_middleware

__all__ = ["logging_context_middleware", "setup_middlewares"]

# Browsers send the session cookie only when credentials are allowed
CORS_ALLOWED_HEADERS = ["Content-Type", "Accept-Language", "X-Request-ID"]


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    app.add_middleware(BaseHTTPMiddleware, dispatch=logging_context_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=CORS_ALLOWED_HEADERS,
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(CorrelationIdMiddleware)
