"""Structured logging configuration for the chat bot."""

import json
import logging
import logging.config
import logging.handlers
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from .config import DEFAULT_LOG_PATH

REDACTED = "***"

# Environment variables whose values must never reach a log line
SECRET_ENV_VARS = (
    "TELEGRAM_TOKEN",
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "REPLICATE_API_TOKEN",
)


class JSONFormatter(logging.Formatter):
    """One JSON object per line; correlation fields are lifted to the top level."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        context = getattr(record, "context", None)
        if context:
            log_data["context"] = context
            for key in ("error_id", "chat_id"):
                if key in context:
                    log_data[key] = context[key]

        if record.exc_text:
            log_data["exception"] = record.exc_text
        elif record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class SecretsFilter(logging.Filter):
    """Replaces known credential values in the message, exception text and context."""

    def __init__(self, secrets: Iterable[str] = ()):
        super().__init__()
        self._secrets = [s for s in secrets if s]

    def redact(self, text: str) -> str:
        for secret in self._secrets:
            text = text.replace(secret, REDACTED)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True

        message = record.getMessage()
        redacted = self.redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None

        # Formatters reuse exc_text instead of rendering exc_info again
        if record.exc_info and not record.exc_text:
            record.exc_text = logging.Formatter().formatException(record.exc_info)
        if record.exc_text:
            record.exc_text = self.redact(record.exc_text)

        context = getattr(record, "context", None)
        if isinstance(context, dict):
            record.context = {
                key: self.redact(value) if isinstance(value, str) else value
                for key, value in context.items()
            }
        return True


def secrets_from_env() -> list[str]:
    return [os.environ[name] for name in SECRET_ENV_VARS if os.environ.get(name)]


def setup_logging(
    log_level: str | None = None,
    log_file: str | None = None,
    secrets: Iterable[str] | None = None,
) -> None:
    """
    Setup structured logging for the application.

    Args:
        log_level: Level for the chatbot loggers. Defaults to LOG_LEVEL env var or INFO.
        log_file: Path to log file. Defaults to 04_logs/app.log; backend
                  failures also go to errors.log next to it.
        secrets: Values to mask in every record. Defaults to the credentials
                 found in the environment.
    """
    if log_level is None:
        log_level = os.getenv("LOG_LEVEL", "INFO")

    log_path = Path(log_file) if log_file else DEFAULT_LOG_PATH
    log_path.parent.mkdir(parents=True, exist_ok=True)

    if secrets is None:
        secrets = secrets_from_env()

    handler_common = {
        "formatter": "json",
        "filters": ["secrets"],
    }

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": "chatbot.logging_config.JSONFormatter"},
        },
        "filters": {
            "secrets": {
                "()": "chatbot.logging_config.SecretsFilter",
                "secrets": list(secrets),
            },
        },
        "handlers": {
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": str(log_path),
                "maxBytes": 10 * 1024 * 1024,  # 10 MB
                "backupCount": 5,
                "encoding": "utf-8",
                **handler_common,
            },
            "errors": {
                "class": "logging.handlers.RotatingFileHandler",
                "filename": str(log_path.with_name("errors.log")),
                "maxBytes": 10 * 1024 * 1024,
                "backupCount": 5,
                "encoding": "utf-8",
                "level": "ERROR",
                **handler_common,
            },
            "console": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
                **handler_common,
            },
        },
        "loggers": {
            "chatbot": {"level": log_level.upper()},
            "sim": {"level": log_level.upper()},
            # Request URLs carry the bot token; keep these quiet
            "httpx": {"level": "WARNING"},
            "telegram": {"level": "WARNING"},
        },
        "root": {
            "level": "INFO",
            "handlers": ["file", "errors", "console"],
        },
    }

    logging.config.dictConfig(logging_config)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance (typically for __name__)."""
    return logging.getLogger(name)
