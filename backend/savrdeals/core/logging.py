"""Logging setup for the Savrdeals backend.

Every record, whether it comes from a structlog logger in this package or from
stdlib loggers (uvicorn, httpx, asyncio), is enriched and rendered by the same
ProcessorFormatter chain. Each line therefore carries the service name, the
request's correlation id and any request context bound by the middleware.
"""

import logging
import logging.config

import structlog
from asgi_correlation_id.context import correlation_id

from savrdeals.core.config import Settings

SERVICE_NAME = "savrdeals-backend"

# Chatty libraries this app drives; their INFO output is one line per request.
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "watchfiles")


def add_service(logger, method, event_dict):
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def add_correlation_id(logger, method, event_dict):
    """Attach the X-Request-ID of the request being served, if any."""
    cid = correlation_id.get(None)
    if cid:
        event_dict.setdefault("correlation_id", cid)
    return event_dict


def build_formatter(json_logs: bool = True) -> structlog.stdlib.ProcessorFormatter:
    """Formatter that enriches and renders both structlog and stdlib records.

    Enrichment lives here rather than in structlog.configure so stdlib records
    get it without a second copy of the chain in foreign_pre_chain.
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_service,
        add_correlation_id,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if json_logs:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    return structlog.stdlib.ProcessorFormatter(
        processors=processors,
        foreign_pre_chain=[structlog.stdlib.ExtraAdder()],
    )


def configure_logging(settings: Settings) -> None:
    """Route all logging through structlog's formatter.

    Debug mode switches to DEBUG level and the colored console renderer;
    otherwise INFO and one JSON object per line.

    Call this before other app imports: structlog caches loggers on first use.
    """
    log_level = "DEBUG" if settings.debug else "INFO"

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "structlog": {
                "()": build_formatter,
                "json_logs": not settings.debug,
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "structlog",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"handlers": ["default"], "level": log_level},
        "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
    })

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
