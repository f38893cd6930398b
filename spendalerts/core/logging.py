"""Structured logging setup using structlog."""

from __future__ import annotations

import logging
import sys

import structlog

from spendalerts.core.config import LoggingConfig, get_settings

# Third-party loggers that are chatty at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore")


def _build_renderer(fmt: str) -> structlog.types.Processor:
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def setup_logging(
    level: str | None = None,
    fmt: str | None = None,
    config: LoggingConfig | None = None,
) -> None:
    """Configure structlog on top of stdlib logging.

    Args:
        level: Log level override (e.g. "DEBUG"). Uses config if None.
        fmt: Renderer format override ("json" or "console"). Uses config if None.
        config: Logging section to use instead of the cached settings.
    """
    cfg = config or get_settings().logging
    log_level = getattr(logging, (level or cfg.level).upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _build_renderer(fmt or cfg.format),
        ],
    ))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
