"""Logging configuration using structlog for structured logging."""

import logging
import sys
from collections.abc import MutableMapping
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer
from structlog.stdlib import LoggerFactory, add_log_level, add_logger_name

# Standard library logging levels mapping
_LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Events shown on the terminal without --verbose, plus all WARNING and above
USER_FACING_EVENTS: set[str] = {
    "generation_started",
    "choices_generated",
    "flashcards_generated",
    "media_processed",
}

# Global state for handlers
_configured = False
_handlers: list[logging.Handler] = []


def _get_level_no(level_name: str) -> int:
    """Get numeric log level from name."""
    return _LOG_LEVELS.get(level_name.upper(), logging.INFO)


class UserFacingConsoleFilter(logging.Filter):
    """Only pass user-facing events and warnings to the console.

    Verbose mode lets everything through.
    """

    def __init__(self, verbose: bool = False) -> None:
        super().__init__()
        self.verbose = verbose

    def filter(self, record: logging.LogRecord) -> bool:
        if self.verbose or record.levelno >= logging.WARNING:
            return True
        msg = record.msg
        if isinstance(msg, dict):
            return msg.get("event") in USER_FACING_EVENTS
        return False


def _redact_secrets_processor(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Redact credential-looking keys before rendering."""
    for key in ("api_key", "token", "password", "authorization"):
        if event_dict.get(key):
            event_dict[key] = "***REDACTED***"
    return event_dict


def _create_console_renderer() -> ConsoleRenderer:
    """Create console renderer with custom formatting."""
    return ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def _create_json_renderer() -> JSONRenderer:
    """Create JSON renderer for file logs."""
    return JSONRenderer()


def _base_processors() -> list[structlog.typing.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        add_log_level,
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _redact_secrets_processor,
    ]


def configure_logging(
    log_level: str = "INFO",
    log_file: Path | None = None,
    verbose: bool = False,
) -> None:
    """Configure structlog logging on top of the stdlib root logger.

    Args:
        log_level: Minimum console log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional JSON log file (rotated at 10MB, 3 backups)
        verbose: Show every event on the terminal instead of user-facing ones
    """
    global _configured

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in _handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _handlers.clear()

    structlog.configure(
        processors=[
            *_base_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Console handler - human-readable
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(_get_level_no(log_level))
    console_handler.addFilter(UserFacingConsoleFilter(verbose=verbose))
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_create_console_renderer(),
            foreign_pre_chain=_base_processors(),
        )
    )
    root_logger.addHandler(console_handler)
    _handlers.append(console_handler)

    # File handler - JSON format with size-based rotation
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            filename=str(log_file),
            maxBytes=10 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=_create_json_renderer(),
                foreign_pre_chain=_base_processors(),
            )
        )
        root_logger.addHandler(file_handler)
        _handlers.append(file_handler)

    # Third-party HTTP clients log every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    _configured = True

    get_logger(__name__).debug(
        "logging_configured",
        console_level=log_level,
        log_file=str(log_file) if log_file else None,
        verbose=verbose,
    )


def get_logger(name: str) -> Any:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger bound to the given name
    """
    if not _configured:
        configure_logging()
    return structlog.get_logger(name)
