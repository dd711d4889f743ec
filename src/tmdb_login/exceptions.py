"""
Exceptions raised by the TMDB API layer and the login pipeline.

Every API error carries a ``kind`` so the pipeline can tag failures
without inspecting exception types.
"""

from typing import Optional

from .models.auth import FailureKind


class TMDBError(Exception):
    """Base class for errors raised while talking to TMDB."""

    kind: FailureKind = FailureKind.TRANSPORT_ERROR

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class TransportError(TMDBError):
    """Raised when the request never produced an HTTP response."""

    kind = FailureKind.TRANSPORT_ERROR


class HttpStatusError(TMDBError):
    """Raised when TMDB answers with a status outside 200-299."""

    kind = FailureKind.HTTP_STATUS_ERROR

    def __init__(self, reason: str, status_code: int, status_message: Optional[str] = None):
        super().__init__(reason)
        self.status_code = status_code
        self.status_message = status_message


class MalformedResponseError(TMDBError):
    """Raised when the response body is not a JSON object."""

    kind = FailureKind.MALFORMED_RESPONSE


class MissingFieldError(TMDBError):
    """Raised when the JSON object lacks the expected field."""

    kind = FailureKind.MISSING_FIELD

    def __init__(self, reason: str, field: str):
        super().__init__(reason)
        self.field = field


class CredentialsRejectedError(TMDBError):
    """Raised when validate_with_login does not report success."""

    kind = FailureKind.CREDENTIALS_REJECTED


class LoginInProgressError(RuntimeError):
    """Raised when a login is started while another one is outstanding."""
