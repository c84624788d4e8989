"""HTTP middleware and exception handlers for the zyscope app."""

from fastapi import FastAPI

from zyscope.config import Settings
from zyscope.middleware.cors import setup_cors
from zyscope.middleware.error_handler import setup_error_handlers
from zyscope.middleware.logging import setup_logging
from zyscope.middleware.rate_limit import RateLimitMiddleware
from zyscope.middleware.request_id import RequestIdMiddleware


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure logging, then wire handlers and the middleware stack onto ``app``.

    Starlette runs the last-added middleware first, so the resulting order
    per request is CORS, request id, rate limit, then the route. A 429 from
    the limiter still carries the request id and CORS headers the browser
    client needs to read it.
    """
    setup_logging(settings)
    setup_error_handlers(app)
    app.add_middleware(
        RateLimitMiddleware,
        requests_per_window=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.add_middleware(RequestIdMiddleware)
    setup_cors(app, settings)
