"""
Login pipeline for TMDB.

Drives the four-step session handshake:

1. request a token
2. validate the token with username and password
3. create a session from the validated token
4. resolve the account id behind the session

Steps run strictly in sequence and the first failure ends the attempt.
Each blocking HTTP call runs in a worker thread so the caller's event loop
stays responsive. Notifications to the presentation layer go through
``report_via``, which lets a UI marshal them onto its own thread.
"""

import asyncio
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

from ..api import AuthenticationAPI
from ..core import constants
from ..exceptions import LoginInProgressError, TMDBError
from ..models import (
    Credentials,
    FailureKind,
    FailureStage,
    PipelineResult,
    PipelineState,
)
from .credential_store import CredentialStore
from .presentation import PresentationAdapter


FAILURE_MESSAGES = {
    FailureStage.INVALID_INPUT: constants.MESSAGE_EMPTY_INPUT,
    FailureStage.REQUEST_TOKEN: constants.MESSAGE_REQUEST_TOKEN_FAILED,
    FailureStage.VALIDATE_CREDENTIALS: constants.MESSAGE_AUTHENTICATE_FAILED,
    FailureStage.CREATE_SESSION: constants.MESSAGE_SESSION_FAILED,
    FailureStage.RESOLVE_USER: constants.MESSAGE_AUTHENTICATE_FAILED,
}

_TERMINAL_STATES = (PipelineState.AUTHENTICATED, PipelineState.FAILED)


def _call_inline(fn: Callable[[], None]) -> None:
    fn()


class _Abandoned(Exception):
    """The attempt was detached while a step was in flight."""


class AuthenticationPipeline:
    """Establishes a TMDB session from a username and password."""

    def __init__(
        self,
        api: AuthenticationAPI,
        store: CredentialStore,
        presenter: Optional[PresentationAdapter] = None,
        report_via: Optional[Callable[[Callable[[], None]], Any]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the pipeline.

        Args:
            api: Client providing the handshake calls
            store: Receives request token, session id and user id as each step succeeds
            presenter: Receives progress, failure and success notifications
            report_via: Called with a zero-argument callable for every notification,
                        e.g. ``root.after_idle`` or ``loop.call_soon_threadsafe``.
                        Defaults to calling it immediately.
            logger: Logger instance
        """
        self.api = api
        self.store = store
        self.presenter = presenter or PresentationAdapter()
        self.logger = logger or logging.getLogger(__name__)
        self._report_via = report_via or _call_inline

        self._lock = threading.Lock()
        self._busy = False
        self._attempt = 0
        self._abandoned_through = 0
        self._state = PipelineState.IDLE
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._busy

    async def authenticate(self, credentials: Credentials) -> PipelineResult:
        """
        Run the login handshake.

        Args:
            credentials: Username and password

        Returns:
            Success with user and session, or the failing stage and reason

        Raises:
            LoginInProgressError: If another attempt is still running
        """
        attempt = self._begin()
        return await self._run(attempt, credentials)

    def submit(self, credentials: Credentials) -> "Future[PipelineResult]":
        """
        Run the login handshake on a background thread.

        For callers without an event loop. The busy check happens before
        returning, so a second submit while one is pending raises at once.

        Raises:
            LoginInProgressError: If another attempt is still running
        """
        attempt = self._begin()
        try:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="tmdb-login")
            return self._executor.submit(asyncio.run, self._run(attempt, credentials))
        except BaseException:
            self._finish(attempt)
            raise

    def abandon(self) -> None:
        """
        Detach the running attempt, e.g. when its view goes away.

        Responses that arrive afterwards are discarded: no notifications,
        no store writes. The pipeline is immediately ready for a new attempt.
        """
        with self._lock:
            if not self._busy:
                return
            self._attempt += 1
            self._busy = False
            self._state = PipelineState.IDLE
            self._abandoned_through = self._attempt - 1
        self.logger.info("Login attempt abandoned")

    def sign_out(self) -> bool:
        """
        Delete the stored session on the server and forget all artifacts.

        Returns:
            True if TMDB confirmed the deletion, False if there was no session
        """
        if self._busy:
            raise LoginInProgressError("Cannot sign out while a login is in progress")

        session_id = self.store.session_id
        if not session_id:
            self.logger.warning("Not authenticated, skipping sign out")
            return False

        try:
            deleted = self.api.delete_session(session_id)
        finally:
            self.store.clear()
            self._state = PipelineState.IDLE

        self.logger.info("Signed out" if deleted else "Session deletion not confirmed by TMDB")
        return deleted

    def close(self) -> None:
        """Abandon any running attempt and stop the background worker."""
        self.abandon()
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    def _begin(self) -> int:
        with self._lock:
            if self._busy:
                raise LoginInProgressError("A login attempt is already in progress")
            self._busy = True
            self._attempt += 1
            self._state = PipelineState.IDLE
            return self._attempt

    def _finish(self, attempt: int) -> None:
        with self._lock:
            if attempt != self._attempt:
                return
            self._busy = False
            if self._state not in _TERMINAL_STATES:
                self._state = PipelineState.FAILED

    def _is_current(self, attempt: int) -> bool:
        with self._lock:
            return attempt == self._attempt

    def _is_abandoned(self, attempt: int) -> bool:
        with self._lock:
            return attempt <= self._abandoned_through

    async def _run(self, attempt: int, credentials: Credentials) -> PipelineResult:
        try:
            if not credentials.is_complete:
                return self._fail(
                    attempt,
                    FailureStage.INVALID_INPUT,
                    FailureKind.INVALID_INPUT,
                    constants.REASON_EMPTY_INPUT,
                )
            return await self._handshake(attempt, credentials)
        finally:
            self._finish(attempt)

    async def _handshake(self, attempt: int, credentials: Credentials) -> PipelineResult:
        self.logger.info(f"Logging in to TMDB as {credentials.username}")

        stage = FailureStage.REQUEST_TOKEN
        try:
            token = await self._step(
                attempt, stage, PipelineState.REQUESTING_TOKEN,
                self.api.create_request_token,
            )
            self._commit(attempt, self.store.set_request_token, token.value)

            stage = FailureStage.VALIDATE_CREDENTIALS
            token = await self._step(
                attempt, stage, PipelineState.VALIDATING_CREDENTIALS,
                self.api.validate_with_login, token, credentials,
            )

            stage = FailureStage.CREATE_SESSION
            session = await self._step(
                attempt, stage, PipelineState.CREATING_SESSION,
                self.api.create_session, token,
            )
            self._commit(attempt, self.store.set_session_id, session.session_id)

            stage = FailureStage.RESOLVE_USER
            user = await self._step(
                attempt, stage, PipelineState.RESOLVING_USER,
                self.api.get_account, session,
            )
            self._commit(attempt, self.store.set_user_id, user.user_id)

        except _Abandoned:
            return self._abandoned(stage)
        except TMDBError as e:
            return self._fail(attempt, stage, e.kind, e.reason)

        with self._lock:
            if attempt != self._attempt:
                return self._abandoned(stage)
            self._state = PipelineState.AUTHENTICATED

        self.logger.info(f"Login complete, account id {user.user_id}")
        self._notify(attempt, self.presenter.on_success, user.user_id, session.session_id)
        return PipelineResult.succeeded(user, session)

    async def _step(
        self,
        attempt: int,
        stage: FailureStage,
        state: PipelineState,
        call: Callable[..., Any],
        *args: Any
    ) -> Any:
        with self._lock:
            if attempt != self._attempt:
                raise _Abandoned()
            self._state = state
        self.logger.debug(f"Login step {stage.value}")
        self._notify(attempt, self.presenter.on_progress, stage)

        result = await asyncio.to_thread(call, *args)

        if not self._is_current(attempt):
            raise _Abandoned()
        return result

    def _commit(self, attempt: int, setter: Callable[[Any], None], value: Any) -> None:
        with self._lock:
            if attempt != self._attempt:
                raise _Abandoned()
            setter(value)

    def _fail(
        self,
        attempt: int,
        stage: FailureStage,
        kind: FailureKind,
        reason: str
    ) -> PipelineResult:
        with self._lock:
            if attempt != self._attempt:
                return self._abandoned(stage)
            self._state = PipelineState.FAILED

        self.logger.error(f"Login failed at {stage.value} ({kind.value}): {reason}")
        self._notify(attempt, self.presenter.on_failure, stage, FAILURE_MESSAGES[stage])
        return PipelineResult.failed(stage, kind, reason)

    def _abandoned(self, stage: FailureStage) -> PipelineResult:
        self.logger.debug(f"Discarding result of abandoned login at {stage.value}")
        return PipelineResult.failed(stage, FailureKind.ABANDONED, constants.REASON_ABANDONED)

    def _notify(self, attempt: int, callback: Callable[..., None], *args: Any) -> None:
        def deliver() -> None:
            # Deferred deliveries are dropped once the attempt is abandoned
            if not self._is_abandoned(attempt):
                callback(*args)

        self._report_via(deliver)
