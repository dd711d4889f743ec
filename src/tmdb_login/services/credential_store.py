"""
In-memory holder of the login artifacts for the lifetime of the process.
"""

import threading
from typing import Optional


class CredentialStore:
    """Last-write-wins holder of request token, session id and user id."""

    def __init__(self):
        self._lock = threading.Lock()
        self._request_token: Optional[str] = None
        self._session_id: Optional[str] = None
        self._user_id: Optional[int] = None

    @property
    def request_token(self) -> Optional[str]:
        return self._request_token

    @property
    def session_id(self) -> Optional[str]:
        return self._session_id

    @property
    def user_id(self) -> Optional[int]:
        return self._user_id

    @property
    def is_authenticated(self) -> bool:
        return self._session_id is not None and self._user_id is not None

    def set_request_token(self, request_token: str) -> None:
        with self._lock:
            self._request_token = request_token

    def set_session_id(self, session_id: str) -> None:
        with self._lock:
            self._session_id = session_id

    def set_user_id(self, user_id: int) -> None:
        with self._lock:
            self._user_id = user_id

    def clear(self) -> None:
        """Forget all stored artifacts."""
        with self._lock:
            self._request_token = None
            self._session_id = None
            self._user_id = None

    def __repr__(self) -> str:
        return (
            f"CredentialStore(request_token={'set' if self._request_token else None}, "
            f"session_id={'set' if self._session_id else None}, user_id={self._user_id})"
        )
