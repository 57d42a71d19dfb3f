"""Structured logging for fxrates using structlog.

Rate documents are parsed on LoaderService worker threads while callers
resolve on their own threads. Each ingestion binds its resource id and
provider through structlog.contextvars, so every event a parser emits on a
worker thread carries the document it came from without threading those
fields through the parser API.
"""

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager

import structlog


def setup_logging(log_level: str = "INFO", log_format: str | None = None) -> None:
    """Route structlog events through the stdlib root logger.

    Args:
        log_level: Root logger level name; unknown names fall back to INFO.
        log_format: "json" or "console". Defaults to the LOG_FORMAT
            environment variable, then "console".
    """
    log_format = (log_format or os.environ.get("LOG_FORMAT", "console")).lower()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


@contextmanager
def ingestion_context(resource_id: str, provider: str) -> Iterator[None]:
    """Bind ``resource_id`` and ``provider`` to every event logged inside the block.

    Bindings are scoped to the current thread's context and removed on exit,
    so a loader worker reused for another document starts clean.
    """
    with structlog.contextvars.bound_contextvars(resource_id=resource_id, provider=provider):
        yield


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger with the given name."""
    return structlog.get_logger(name)
