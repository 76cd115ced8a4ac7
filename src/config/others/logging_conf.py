"""
structlog + django-structlog logging.

Console rendering in development and tests, JSON lines in production.
Every event carries the request_id bound by django-structlog's
RequestMiddleware and, once a bearer token is accepted, the user_id.
"""

import structlog

from src.config.env import env

APP_LOG_LEVEL = env.LOG_LEVEL.upper()

# ── Processors ──────────────────────────────────────────────────────────

shared_processors: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]

if env.is_production:
    renderer = structlog.processors.JSONRenderer()
else:
    renderer = structlog.dev.ConsoleRenderer(colors=env.is_development)

structlog.configure(
    processors=[
        *shared_processors,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)


def _logger(level: str) -> dict:
    return {"handlers": ["console"], "level": level, "propagate": False}


# ── Django LOGGING ──────────────────────────────────────────────────────

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "structlog": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processors": [
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "structlog",
        },
    },
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        "django": _logger("INFO"),
        "django.db.backends": _logger("WARNING"),
        "django.request": _logger("INFO"),
        "django_structlog": _logger("INFO"),
        "src": _logger(APP_LOG_LEVEL),
        # document-level writes log at DEBUG
        "src.apps.store": _logger("DEBUG" if APP_LOG_LEVEL == "DEBUG" else "WARNING"),
    },
}
