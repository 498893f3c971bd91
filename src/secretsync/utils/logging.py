"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict

from ..config.settings import Settings
from ..github.commands import escape_data

# Log levels that map onto GitHub workflow commands
ANNOTATION_COMMANDS = {
    "debug": "debug",
    "warning": "warning",
    "error": "error",
    "critical": "error",
    "exception": "error",
}


class GitHubActionsRenderer:
    """Render events as plain lines, prefixing annotations for the Actions runner."""

    def __call__(self, logger: Any, method_name: str, event_dict: EventDict) -> str:
        level = str(event_dict.pop("level", method_name)).lower()
        event = str(event_dict.pop("event", ""))
        event_dict.pop("timestamp", None)

        context = " ".join(f"{k}={v}" for k, v in event_dict.items())
        line = f"{event} [{context}]" if context else event

        command = ANNOTATION_COMMANDS.get(level)
        if command is None:
            return line
        return f"::{command}::{escape_data(line)}"


def build_processors(settings: Settings) -> list:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if settings.structured_logging:
        # JSON output for log shipping
        processors.extend([
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ])
    elif settings.github_actions:
        processors.extend([
            structlog.processors.format_exc_info,
            GitHubActionsRenderer(),
        ])
    else:
        processors.extend([
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
        ])
    return processors


def setup_logging(settings: Settings) -> None:
    """Configure structured logging for the action run."""

    # Workflow commands are only honoured on stdout
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
        force=True,
    )

    structlog.configure(
        processors=build_processors(settings),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Set log levels for external libraries
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("grpc").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
