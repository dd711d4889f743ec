"""
Configuration module for TMDB login.

Loads configuration from JSON file and environment variables.
"""

import json
import os
from typing import Dict, Any, Optional
from pathlib import Path

from . import constants


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'
        """
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = {}
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        with open(config_path, "r", encoding="utf-8") as f:
            self.config = json.load(f)

    def _section(self, name: str) -> Dict[str, Any]:
        if name not in self.config:
            self.config[name] = {}
        return self.config[name]

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        # API configuration
        if os.getenv("API_BASE_URL"):
            self._section("api")["base_url"] = os.getenv("API_BASE_URL")

        if os.getenv("TMDB_API_KEY"):
            self._section("api")["api_key"] = os.getenv("TMDB_API_KEY")

        # Authentication
        if os.getenv("API_USERNAME"):
            self._section("authentication")["username"] = os.getenv("API_USERNAME")

        if os.getenv("API_PASSWORD"):
            self._section("authentication")["password"] = os.getenv("API_PASSWORD")

        # Environment
        if os.getenv("ENVIRONMENT"):
            self.config["environment"] = os.getenv("ENVIRONMENT")

    def _validate_config(self) -> None:
        """Validate that required configuration keys are present."""
        required_config = {
            "api": ["api_key"],
        }

        missing_sections = [
            section for section in required_config if section not in self.config
        ]
        if missing_sections:
            raise ValueError(
                f"Missing required configuration sections: {', '.join(missing_sections)}"
            )

        missing_keys = []
        for section, keys in required_config.items():
            for key in keys:
                if not self.config[section].get(key):
                    missing_keys.append(f"{section}.{key}")

        if missing_keys:
            raise ValueError(
                f"Missing required configuration keys: {', '.join(missing_keys)}"
            )

        method = str(self.get("api.validation_method", "GET")).upper()
        if method not in ("GET", "POST"):
            raise ValueError(f"api.validation_method must be GET or POST, got {method}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'api.base_url')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def api_base_url(self) -> str:
        """Get API base URL."""
        return self.get("api.base_url", constants.DEFAULT_API_BASE_URL)

    @property
    def api_key(self) -> str:
        """Get TMDB API key."""
        return self.get("api.api_key", "")

    @property
    def api_timeout(self) -> int:
        """Get API timeout in seconds."""
        return self.get("api.timeout", constants.DEFAULT_TIMEOUT)

    @property
    def api_max_retries(self) -> int:
        """Get maximum transport retry attempts."""
        return self.get("api.max_retries", constants.DEFAULT_MAX_RETRIES)

    @property
    def api_verify_ssl(self) -> bool:
        """Get API SSL verification setting."""
        return self.get("api.verify_ssl", True)

    @property
    def validation_method(self) -> str:
        """Get HTTP method used for validate_with_login."""
        return str(self.get("api.validation_method", "GET")).upper()

    @property
    def auth_username(self) -> Optional[str]:
        """Get default login username."""
        return self.get("authentication.username")

    @property
    def auth_password(self) -> Optional[str]:
        """Get default login password."""
        return self.get("authentication.password")

    @property
    def log_level(self) -> str:
        return self.get("logging.level", "INFO")

    @property
    def log_file(self) -> Optional[str]:
        return self.get("logging.file")

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, env={self.get('environment')})"
