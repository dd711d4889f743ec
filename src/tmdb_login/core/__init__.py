"""
Core utilities for TMDB login.

Provides configuration management and logging functionality.
"""

from .config import Config
from .logger import setup_logger, register_secret, redact, SecretFilter, LoggerContext
from . import constants

__all__ = [
    "Config",
    "setup_logger",
    "register_secret",
    "redact",
    "SecretFilter",
    "LoggerContext",
    "constants",
]
