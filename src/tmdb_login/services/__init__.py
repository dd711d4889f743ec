"""
Services layer for TMDB login.

Contains the login pipeline, the credential store and presentation adapters.
"""

from .credential_store import CredentialStore
from .presentation import PresentationAdapter, LoggingPresenter, ConsolePresenter
from .pipeline import AuthenticationPipeline, FAILURE_MESSAGES

__all__ = [
    "CredentialStore",
    "PresentationAdapter",
    "LoggingPresenter",
    "ConsolePresenter",
    "AuthenticationPipeline",
    "FAILURE_MESSAGES",
]
