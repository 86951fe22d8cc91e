"""Logging configuration for the storefront.

Everything goes through structlog. Records emitted by Protean, uvicorn or
SQLAlchemy via the stdlib ``logging`` module are routed through the same
processor chain with ``structlog.stdlib.ProcessorFormatter``, so a request's
context variables show up on framework log lines too.

The console is rendered for humans outside production. The rotating files
under ``STOREFRONT_LOG_DIR`` (``logs/`` by default) are always JSON.
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "sqlite": "DEBUG",
    "test": "WARNING",
}

_QUIET_LOGGERS = ("urllib3", "asyncio", "sqlalchemy.engine", "uvicorn.access")


class LogSettings:
    """Logging knobs resolved from the environment."""

    def __init__(self, environ=None):
        environ = os.environ if environ is None else environ
        self.environment = (
            environ.get("ENV") or environ.get("ENVIRONMENT") or environ.get("PROTEAN_ENV") or "development"
        ).lower()
        self.level = environ.get("LOG_LEVEL", _LEVELS.get(self.environment, "INFO")).upper()
        self.json_console = self.environment in ("production", "staging")
        self.directory = Path(environ.get("STOREFRONT_LOG_DIR", "logs"))
        self.write_files = environ.get("STOREFRONT_LOG_FILES", "1") != "0"


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
    ]


def _formatter(renderer) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )


def _json_renderer():
    return structlog.processors.JSONRenderer()


def _console_renderer():
    return structlog.dev.ConsoleRenderer(
        colors=sys.stdout.isatty(),
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=4),
    )


def _file_handler(path: Path, level) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    handler.setLevel(level)
    # Tracebacks in files are rendered into the JSON event, not drawn with rich
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_shared_processors(),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.dict_tracebacks,
                _json_renderer(),
            ],
        )
    )
    return handler


def _handlers(settings: LogSettings) -> list[logging.Handler]:
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(settings.level)
    console.setFormatter(_formatter(_json_renderer() if settings.json_console else _console_renderer()))
    handlers = [console]

    if settings.write_files:
        settings.directory.mkdir(parents=True, exist_ok=True)
        handlers.append(_file_handler(settings.directory / "storefront.log", settings.level))
        handlers.append(_file_handler(settings.directory / "storefront_error.log", logging.ERROR))

    return handlers


def configure_logging(settings: LogSettings | None = None) -> LogSettings:
    """Route stdlib and structlog output through one set of handlers."""
    settings = settings or LogSettings()

    root_logger = logging.getLogger()
    root_logger.handlers = _handlers(settings)
    root_logger.setLevel(settings.level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_shared_processors(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return settings


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind values onto every log line emitted until ``clear_context``."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
