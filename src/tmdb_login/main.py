"""
Main entry point for TMDB login.

Logs in with username and password and reports the resulting account.
"""

import asyncio
import getpass
import sys
from typing import Optional

from .core import Config, setup_logger, register_secret, LoggerContext
from .api import TMDBAPI
from .models import Credentials, PipelineResult
from .services import AuthenticationPipeline, ConsolePresenter, CredentialStore


class LoginApp:
    """Command line application that establishes a TMDB session."""

    def __init__(self, config_file: Optional[str] = None, log_level: Optional[str] = None):
        """
        Initialize application.

        Args:
            config_file: Path to configuration file
            log_level: Overrides the configured log level
        """
        self.config = Config(config_file)

        self.logger = setup_logger(
            log_file=self.config.log_file,
            log_level=log_level or self.config.log_level,
            secrets=[self.config.api_key, self.config.auth_password],
        )
        self.logger.info(f"Configuration: {self.config}")

        self.store = CredentialStore()
        self.presenter = ConsolePresenter()
        self.api_client: Optional[TMDBAPI] = None
        self.pipeline: Optional[AuthenticationPipeline] = None

    def initialize_components(self) -> None:
        """Initialize API client and login pipeline."""
        self.api_client = TMDBAPI.from_config(self.config, logger=self.logger)
        self.pipeline = AuthenticationPipeline(
            api=self.api_client,
            store=self.store,
            presenter=self.presenter,
            logger=self.logger,
        )

    def run(self, username: Optional[str] = None, password: Optional[str] = None) -> PipelineResult:
        """
        Log in once.

        Args:
            username: TMDB username, defaults to the configured one
            password: TMDB password, defaults to the configured one

        Returns:
            Result of the login attempt
        """
        try:
            self.initialize_components()
            if not self.pipeline:
                raise RuntimeError("Components not properly initialized")

            credentials = Credentials(
                username=username or self.config.auth_username or "",
                password=password or self.config.auth_password or "",
            )
            register_secret(self.logger, credentials.password)

            with LoggerContext(self.logger, "TMDB login"):
                result = asyncio.run(self.pipeline.authenticate(credentials))

            if result.success:
                self.logger.info(f"Session established for account {result.user.user_id}")
            return result

        except Exception as e:
            self.logger.error(f"Application error: {e}", exc_info=True)
            raise

        finally:
            if self.api_client:
                self.api_client.close()


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Log in to The Movie Database and create a session"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--username",
        type=str,
        default=None,
        help="TMDB username. Default: authentication.username from config"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    args = parser.parse_args(argv)

    try:
        app = LoginApp(config_file=args.config, log_level=args.log_level)
        username = args.username or app.config.auth_username
        if not username:
            username = input("Username: ")
        password = app.config.auth_password
        if not password:
            password = getpass.getpass("Password: ")
        result = app.run(username=username, password=password)
    except Exception as e:
        print(f"Application failed: {e}")
        return 1

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
