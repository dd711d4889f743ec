"""
API layer for TMDB.

Provides the low-level HTTP client and the authentication handshake calls.
"""

import logging
from typing import Optional, TYPE_CHECKING

from ..core.logger import redact
from .client import APIClient
from .authentication import AuthenticationAPI

if TYPE_CHECKING:
    from ..core.config import Config


class TMDBAPI(AuthenticationAPI):
    """
    Unified API client for TMDB.

    Currently covers authentication; further endpoint mixins hang off this class.
    """

    @classmethod
    def from_config(cls, config: "Config", logger: Optional[logging.Logger] = None) -> "TMDBAPI":
        """
        Build a client from application configuration.

        Args:
            config: Loaded configuration
            logger: Logger instance

        Returns:
            Configured TMDBAPI
        """
        return cls(
            api_key=config.api_key,
            base_url=config.api_base_url,
            timeout=config.api_timeout,
            max_retries=config.api_max_retries,
            verify_ssl=config.api_verify_ssl,
            validation_method=config.validation_method,
            logger=logger,
        )


__all__ = [
    "APIClient",
    "AuthenticationAPI",
    "TMDBAPI",
    "redact",
]
