"""Structured Logging for textgate

Validators log through structlog. The library never configures logging on
import; applications call `configure_logging` (or `configure_from_settings`)
once, and until then events go to structlog's defaults.

Events:
- validator.input_rejected (DEBUG, opt-in via TEXTGATE_LOG_REJECTIONS)
- validator.policy_conflict_deferred (WARNING)
- config.validators_loaded / validators_file_* / validator_rejected

Rejected input is caller data. Its `value` field is masked unless
TEXTGATE_LOG_REDACT_VALUES is turned off.
"""
import logging
import sys
from functools import partial

import structlog
from structlog.types import EventDict, Processor

from textgate import __version__

# Event fields that carry caller-supplied text.
VALUE_FIELDS = frozenset({"value"})
REDACTED = "[REDACTED]"


def _mask_values(
    logger: logging.Logger, method_name: str, event_dict: EventDict, *, enabled: bool = True
) -> EventDict:
    """Processor that hides rejected input, keeping only its length."""
    if not enabled:
        return event_dict
    for key in VALUE_FIELDS & event_dict.keys():
        if isinstance(text := event_dict[key], str):
            event_dict[key] = f"{REDACTED} ({len(text)} chars)"
        else:
            event_dict[key] = REDACTED
    return event_dict


def _add_library_info(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    event_dict.setdefault("service", "textgate")
    event_dict.setdefault("version", __version__)
    return event_dict


def get_shared_processors(redact_values: bool = True) -> list[Processor]:
    """Processors used by both the console and the JSON renderer."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _add_library_info,
        partial(_mask_values, enabled=redact_values),
    ]


def configure_logging(level: str = "INFO", json_logs: bool = False, redact_values: bool = True) -> None:
    """Route textgate events through the stdlib root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: JSON lines instead of colored console output
        redact_values: Mask caller-supplied input in rejection events
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    shared = get_shared_processors(redact_values)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=True, exception_formatter=structlog.dev.plain_traceback)
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )

    structlog.configure(
        processors=[
            *shared,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(log_level)
    logging.getLogger("textgate").setLevel(log_level)


def configure_from_settings() -> None:
    """Configure logging from TEXTGATE_* environment settings."""
    from textgate.config import get_settings

    s = get_settings()
    configure_logging(level=s.LOG_LEVEL, json_logs=s.LOG_JSON, redact_values=s.LOG_REDACT_VALUES)


class LoggerRegistry:
    """One structlog logger per textgate domain ("validator", "config")."""

    _loggers: dict[str, structlog.stdlib.BoundLogger] = {}

    @classmethod
    def get(cls, name: str) -> structlog.stdlib.BoundLogger:
        if name not in cls._loggers:
            cls._loggers[name] = structlog.get_logger(f"textgate.{name}")
        return cls._loggers[name]


def validator_logger() -> structlog.stdlib.BoundLogger:
    """Logger for validation outcomes and policy construction."""
    return LoggerRegistry.get("validator")


def config_logger() -> structlog.stdlib.BoundLogger:
    """Logger for declarative configuration loading."""
    return LoggerRegistry.get("config")
