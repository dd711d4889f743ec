"""
Data models for TMDB login.

Contains DTOs for credentials, tokens, sessions and pipeline results.
"""

from .auth import (
    Credentials,
    RequestToken,
    Session,
    AuthenticatedUser,
    PipelineResult,
    FailureStage,
    FailureKind,
    PipelineState,
)

__all__ = [
    "Credentials",
    "RequestToken",
    "Session",
    "AuthenticatedUser",
    "PipelineResult",
    "FailureStage",
    "FailureKind",
    "PipelineState",
]
