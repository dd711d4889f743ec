"""
Authentication data models.

Contains DTOs for the login handshake and its outcome.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

import pytz


class FailureStage(str, Enum):
    """Handshake step a progress or failure notification refers to."""

    INVALID_INPUT = "InvalidInput"
    REQUEST_TOKEN = "RequestToken"
    VALIDATE_CREDENTIALS = "ValidateCredentials"
    CREATE_SESSION = "CreateSession"
    RESOLVE_USER = "ResolveUser"


class FailureKind(str, Enum):
    """Classification of a failed login attempt."""

    INVALID_INPUT = "InvalidInput"
    TRANSPORT_ERROR = "TransportError"
    HTTP_STATUS_ERROR = "HttpStatusError"
    MALFORMED_RESPONSE = "MalformedResponseError"
    MISSING_FIELD = "MissingFieldError"
    CREDENTIALS_REJECTED = "CredentialsRejected"
    ABANDONED = "Abandoned"


class PipelineState(str, Enum):
    """Position of the pipeline in the login handshake."""

    IDLE = "Idle"
    REQUESTING_TOKEN = "RequestingToken"
    VALIDATING_CREDENTIALS = "ValidatingCredentials"
    CREATING_SESSION = "CreatingSession"
    RESOLVING_USER = "ResolvingUser"
    AUTHENTICATED = "Authenticated"
    FAILED = "Failed"


@dataclass(frozen=True)
class Credentials:
    """Login credentials supplied by the user."""

    username: str
    password: str = field(repr=False)

    @property
    def is_complete(self) -> bool:
        return bool(self.username) and bool(self.password)


@dataclass(frozen=True)
class RequestToken:
    """Unvalidated request token issued by TMDB."""

    value: str


@dataclass(frozen=True)
class Session:
    """Authenticated TMDB session."""

    session_id: str
    created_at: datetime = field(
        default_factory=lambda: datetime.now(pytz.UTC), compare=False
    )


@dataclass(frozen=True)
class AuthenticatedUser:
    """Account resolved from a session."""

    user_id: int


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of a login attempt: success with user and session, or a tagged failure."""

    success: bool
    user: Optional[AuthenticatedUser] = None
    session: Optional[Session] = None
    stage: Optional[FailureStage] = None
    kind: Optional[FailureKind] = None
    reason: Optional[str] = None

    @classmethod
    def succeeded(cls, user: AuthenticatedUser, session: Session) -> "PipelineResult":
        return cls(success=True, user=user, session=session)

    @classmethod
    def failed(cls, stage: FailureStage, kind: FailureKind, reason: str) -> "PipelineResult":
        return cls(success=False, stage=stage, kind=kind, reason=reason)
