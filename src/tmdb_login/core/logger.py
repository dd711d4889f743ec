"""
Logging configuration for TMDB login.

Console and file handlers share a SecretFilter, so API keys and passwords
never reach a log line, whether they appear as URL query parameters or as
literal values registered at runtime.
"""

import logging
import os
import re
import time
from pathlib import Path
from typing import Iterable, Optional, Set

_SECRET_PARAMS = re.compile(r"\b(api_key|password)=[^&\s'\"]*")
MASK = "***"

CONSOLE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def redact(text: str, secrets: Iterable[str] = ()) -> str:
    """
    Mask API key and password values in text.

    Args:
        text: Text that may contain a request URL or a secret
        secrets: Literal values to mask wherever they appear

    Returns:
        Text with query parameter values and literal secrets replaced by ***
    """
    text = _SECRET_PARAMS.sub(rf"\1={MASK}", text)
    for secret in secrets:
        if secret:
            text = text.replace(secret, MASK)
    return text


class SecretFilter(logging.Filter):
    """Rewrites each record's message and traceback with secrets masked."""

    def __init__(self, secrets: Iterable[str] = ()):
        super().__init__()
        self.secrets: Set[str] = {s for s in secrets if s}

    def add(self, secret: Optional[str]) -> None:
        if secret:
            self.secrets.add(secret)

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact(record.getMessage(), self.secrets)
        record.args = ()
        if record.exc_info and not record.exc_text:
            record.exc_text = logging.Formatter().formatException(record.exc_info)
        if record.exc_text:
            record.exc_text = redact(record.exc_text, self.secrets)
        return True


def _handler(handler: logging.Handler, level: int, fmt: str, secret_filter: SecretFilter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=DATE_FORMAT))
    handler.addFilter(secret_filter)
    return handler


def setup_logger(
    name: str = "tmdb_login",
    log_file: Optional[str] = None,
    log_level: str = "INFO",
    secrets: Iterable[str] = ()
) -> logging.Logger:
    """
    Set up the application logger with redacting console and file handlers.

    Args:
        name: Logger name
        log_file: Path to log file. If None, uses LOG_FILE env var or default
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        secrets: Literal values to mask in every record, e.g. the API key

    Returns:
        Configured logger instance
    """
    log_path = Path(log_file or os.getenv("LOG_FILE", "logs/tmdb_login.log"))
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    secret_filter = SecretFilter(secrets)
    logger.addHandler(_handler(logging.StreamHandler(), logging.INFO, CONSOLE_FORMAT, secret_filter))
    logger.addHandler(_handler(
        logging.FileHandler(log_path, mode="a", encoding="utf-8"),
        logging.DEBUG, FILE_FORMAT, secret_filter,
    ))
    logger.propagate = False

    return logger


def register_secret(logger: logging.Logger, secret: Optional[str]) -> None:
    """Mask a value learned after setup, such as a password typed at login."""
    for handler in logger.handlers:
        for log_filter in handler.filters:
            if isinstance(log_filter, SecretFilter):
                log_filter.add(secret)


class LoggerContext:
    """Logs start, completion and failure of an operation with its duration."""

    def __init__(self, logger: logging.Logger, operation: str):
        self.logger = logger
        self.operation = operation
        self._started = 0.0

    def __enter__(self):
        self._started = time.monotonic()
        self.logger.info(f"Starting {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = time.monotonic() - self._started
        if exc_type is not None:
            self.logger.error(f"Failed {self.operation} after {duration:.2f}s: {exc_val}", exc_info=True)
        else:
            self.logger.info(f"Completed {self.operation} in {duration:.2f}s")
        return False
