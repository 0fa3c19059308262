from __future__ import annotations
import logging, sys
import structlog
import structlog.stdlib

# Loggers from the server and the database driver that should follow the app level
NOISY_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "sqlalchemy.engine", "asyncpg")


def _shared_processors() -> list:
    """Run for structlog events and for foreign stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def _renderer(json_logs: bool):
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(level: int | str = logging.INFO, json_logs: bool = True) -> None:
    """
    Route structlog and stdlib logging through one stdout handler.

    Every record, including uvicorn access lines and SQLAlchemy echo output,
    gets the same timestamp, level and request context before rendering.
    JSON output renames "event" to "message" for log shippers.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    shared = _shared_processors()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    final = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if json_logs:
        final += [structlog.processors.format_exc_info, structlog.processors.EventRenamer("message")]
    final.append(_renderer(json_logs))

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(foreign_pre_chain=shared, processors=final))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
    for name in NOISY_LOGGERS:
        noisy = logging.getLogger(name)
        noisy.handlers = []
        noisy.propagate = True
        noisy.setLevel(level)
