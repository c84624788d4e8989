"""CORS for the browser client."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zyscope.config import Settings

# Verbs the API routes use; preflights for anything else are refused.
ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]

# Sign-in is stateless and carries no bearer token, so only JSON bodies and
# request ids cross origins.
ALLOWED_HEADERS = ["Content-Type", "X-Request-Id"]


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Admit the configured client origins (the Vite dev server by default)."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        expose_headers=["X-Request-Id", "X-RateLimit-Remaining", "X-RateLimit-Limit"],
    )
