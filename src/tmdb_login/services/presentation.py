"""
Presentation adapters for the login pipeline.

The pipeline reports progress, failure and success through an adapter;
UI layers subclass PresentationAdapter and override what they need.
"""

import logging
import sys
from typing import Callable, Optional, TextIO

from ..models import FailureStage


_STAGE_LABELS = {
    FailureStage.REQUEST_TOKEN: "Requesting token",
    FailureStage.VALIDATE_CREDENTIALS: "Validating credentials",
    FailureStage.CREATE_SESSION: "Creating session",
    FailureStage.RESOLVE_USER: "Resolving user",
}


class PresentationAdapter:
    """Receives pipeline notifications. All callbacks default to no-ops."""

    def on_progress(self, stage: FailureStage) -> None:
        """Called when a handshake step starts."""

    def on_failure(self, stage: FailureStage, message: str) -> None:
        """Called once when the attempt fails."""

    def on_success(self, user_id: int, session_id: str) -> None:
        """Called once when the user is authenticated."""


class LoggingPresenter(PresentationAdapter):
    """Adapter that writes every notification to a logger."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def on_progress(self, stage: FailureStage) -> None:
        self.logger.info(f"{_STAGE_LABELS.get(stage, stage.value)}...")

    def on_failure(self, stage: FailureStage, message: str) -> None:
        self.logger.error(f"{message} [{stage.value}]")

    def on_success(self, user_id: int, session_id: str) -> None:
        self.logger.info(f"Logged in as account {user_id}")


class ConsolePresenter(PresentationAdapter):
    """Adapter for the command line: prints a status line per notification."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        on_complete: Optional[Callable[[int, str], None]] = None
    ):
        """
        Args:
            stream: Output stream, defaults to stdout
            on_complete: Called after success, plays the role of navigating to the next view
        """
        self.stream = stream or sys.stdout
        self.on_complete = on_complete
        self.last_message = ""

    def _write(self, text: str) -> None:
        self.last_message = text
        print(text, file=self.stream)

    def on_progress(self, stage: FailureStage) -> None:
        self._write(f"… {_STAGE_LABELS.get(stage, stage.value)}")

    def on_failure(self, stage: FailureStage, message: str) -> None:
        self._write(f"✗ {message}")

    def on_success(self, user_id: int, session_id: str) -> None:
        self._write(f"✓ Logged in (account {user_id})")
        if self.on_complete:
            self.on_complete(user_id, session_id)
