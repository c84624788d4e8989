"""structlog setup.

Every event carries the app version and environment next to the request id
bound by :class:`~zyscope.middleware.request_id.RequestIdMiddleware`, so
lines from several deployments can share one log sink.
"""

import logging

import structlog

from zyscope.config import Settings

# Chatty at INFO: one line per migration step or per SQL statement.
_QUIET_LOGGERS = ("alembic", "sqlalchemy.engine", "aiosqlite")


def _renderer(settings: Settings) -> structlog.types.Processor:
    if settings.log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(settings: Settings) -> None:
    """Route structlog through stdlib logging at ``settings.log_level``."""
    app_context = {"app_version": settings.app_version, "environment": settings.environment}

    def add_app_context(
        _logger: object, _method: str, event_dict: structlog.types.EventDict,
    ) -> structlog.types.EventDict:
        for key, value in app_context.items():
            event_dict.setdefault(key, value)
        return event_dict

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_app_context,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            _renderer(settings),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level)
    quiet_level = level if settings.debug else max(level, logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)
