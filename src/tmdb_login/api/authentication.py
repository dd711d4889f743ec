"""
Authentication operations for the TMDB v3 API.

Handles request tokens, login validation, sessions and account lookup.
See https://developer.themoviedb.org/docs/authentication-user for the flow.
"""

import logging
from typing import Any, Dict, Optional

from ..core import constants
from ..exceptions import CredentialsRejectedError, MissingFieldError
from ..models import AuthenticatedUser, Credentials, RequestToken, Session
from .client import APIClient


class AuthenticationAPI(APIClient):
    """API client with the TMDB session handshake calls."""

    logger: logging.Logger

    def __init__(
        self,
        api_key: str,
        base_url: str = constants.DEFAULT_API_BASE_URL,
        timeout: int = constants.DEFAULT_TIMEOUT,
        max_retries: int = constants.DEFAULT_MAX_RETRIES,
        verify_ssl: bool = True,
        validation_method: str = "GET",
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize API client with authentication calls.

        Args:
            api_key: TMDB API key
            base_url: Base URL for the API
            timeout: Request timeout in seconds
            max_retries: Maximum number of transport retry attempts
            verify_ssl: Whether to verify SSL certificates
            validation_method: HTTP method for validate_with_login (GET or POST)
            logger: Logger instance
        """
        super().__init__(api_key, base_url, timeout, max_retries, verify_ssl, logger)
        self.validation_method = validation_method.upper()

    def create_request_token(self) -> RequestToken:
        """
        Request a new, unvalidated request token.

        Raises:
            MissingFieldError: If the response has no request_token
        """
        self.logger.debug("Requesting new request token")
        data = self.get(constants.PATH_REQUEST_TOKEN)
        token = _string_field(data, constants.FIELD_REQUEST_TOKEN, constants.REASON_TOKEN_MISSING)
        return RequestToken(token)

    def validate_with_login(self, token: RequestToken, credentials: Credentials) -> RequestToken:
        """
        Validate a request token with the user's username and password.

        The same token is returned; TMDB mints the session from it.

        Raises:
            CredentialsRejectedError: If the response does not report success
        """
        self.logger.debug(f"Validating request token for user {credentials.username}")
        payload = {
            constants.PARAM_REQUEST_TOKEN: token.value,
            constants.PARAM_USERNAME: credentials.username,
            constants.PARAM_PASSWORD: credentials.password,
        }
        if self.validation_method == "POST":
            data = self.post(constants.PATH_VALIDATE_WITH_LOGIN, data=payload)
        else:
            data = self.get(constants.PATH_VALIDATE_WITH_LOGIN, params=payload)

        if data.get(constants.FIELD_SUCCESS) is not True:
            message = data.get("status_message")
            if message:
                self.logger.warning(f"Login rejected by TMDB: {message}")
            raise CredentialsRejectedError(constants.REASON_REJECTED)
        return token

    def create_session(self, token: RequestToken) -> Session:
        """
        Create a session from a validated request token.

        Raises:
            MissingFieldError: If the response has no session_id
        """
        self.logger.debug("Creating session from validated request token")
        data = self.get(
            constants.PATH_SESSION_NEW,
            params={constants.PARAM_REQUEST_TOKEN: token.value},
        )
        session_id = _string_field(data, constants.FIELD_SESSION_ID, constants.REASON_SESSION_MISSING)
        return Session(session_id)

    def get_account(self, session: Session) -> AuthenticatedUser:
        """
        Resolve the account id behind a session.

        Raises:
            MissingFieldError: If the response has no integer id
        """
        self.logger.debug("Resolving account for session")
        data = self.get(
            constants.PATH_ACCOUNT,
            params={constants.PARAM_SESSION_ID: session.session_id},
        )
        user_id = data.get(constants.FIELD_ACCOUNT_ID)
        # bool is an int subclass
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise MissingFieldError(constants.REASON_USER_MISSING, constants.FIELD_ACCOUNT_ID)
        return AuthenticatedUser(user_id)

    def delete_session(self, session_id: str) -> bool:
        """
        Delete a session on the server (logout).

        Returns:
            True if TMDB reported success
        """
        self.logger.info("Deleting TMDB session")
        data = self.delete(
            constants.PATH_SESSION,
            data={constants.PARAM_SESSION_ID: session_id},
        )
        return data.get(constants.FIELD_SUCCESS) is True


def _string_field(data: Dict[str, Any], field: str, reason: str) -> str:
    value = data.get(field)
    if not isinstance(value, str) or not value:
        raise MissingFieldError(reason, field)
    return value
