"""
Model, credential store and presenter tests.
"""

import io
import threading
import unittest
from unittest.mock import Mock

from tmdb_login.models import (
    AuthenticatedUser,
    Credentials,
    FailureKind,
    FailureStage,
    PipelineResult,
    Session,
)
from tmdb_login.services import ConsolePresenter, CredentialStore, LoggingPresenter


class TestModels(unittest.TestCase):

    def test_password_hidden_from_repr(self):
        credentials = Credentials(username="movie_fan", password="hunter2")

        self.assertNotIn("hunter2", repr(credentials))
        self.assertTrue(credentials.is_complete)
        self.assertFalse(Credentials(username="movie_fan", password="").is_complete)

    def test_session_equality_ignores_creation_time(self):
        first = Session("S1")
        second = Session("S1")

        self.assertEqual(first, second)
        self.assertEqual(first.created_at.utcoffset().total_seconds(), 0)

    def test_result_constructors(self):
        ok = PipelineResult.succeeded(AuthenticatedUser(42), Session("S1"))
        failed = PipelineResult.failed(
            FailureStage.CREATE_SESSION, FailureKind.MISSING_FIELD, "session id missing from response"
        )

        self.assertTrue(ok.success)
        self.assertIsNone(ok.stage)
        self.assertFalse(failed.success)
        self.assertIsNone(failed.user)
        self.assertEqual(failed.stage.value, "CreateSession")


class TestCredentialStore(unittest.TestCase):

    def test_last_write_wins(self):
        store = CredentialStore()
        store.set_session_id("S1")
        store.set_session_id("S2")

        self.assertEqual(store.session_id, "S2")
        self.assertFalse(store.is_authenticated)

        store.set_user_id(42)
        self.assertTrue(store.is_authenticated)

    def test_clear(self):
        store = CredentialStore()
        store.set_request_token("T1")
        store.set_session_id("S1")
        store.set_user_id(42)

        store.clear()

        self.assertIsNone(store.request_token)
        self.assertIsNone(store.session_id)
        self.assertIsNone(store.user_id)

    def test_repr_hides_secrets(self):
        store = CredentialStore()
        store.set_session_id("secret-session")

        self.assertNotIn("secret-session", repr(store))

    def test_concurrent_writers(self):
        store = CredentialStore()
        threads = [
            threading.Thread(target=store.set_user_id, args=(i,)) for i in range(20)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertIn(store.user_id, range(20))


class TestPresenters(unittest.TestCase):

    def test_console_presenter(self):
        stream = io.StringIO()
        completed = Mock()
        presenter = ConsolePresenter(stream=stream, on_complete=completed)

        presenter.on_progress(FailureStage.REQUEST_TOKEN)
        presenter.on_failure(FailureStage.REQUEST_TOKEN, "Login Failed (Request Token).")
        presenter.on_success(42, "S1")

        output = stream.getvalue()
        self.assertIn("Requesting token", output)
        self.assertIn("Login Failed (Request Token).", output)
        self.assertEqual(presenter.last_message, "✓ Logged in (account 42)")
        completed.assert_called_once_with(42, "S1")

    def test_logging_presenter(self):
        logger = Mock()
        presenter = LoggingPresenter(logger=logger)

        presenter.on_progress(FailureStage.CREATE_SESSION)
        presenter.on_failure(FailureStage.CREATE_SESSION, "Login Failed (Session ID).")
        presenter.on_success(42, "S1")

        logger.info.assert_any_call("Creating session...")
        logger.error.assert_called_once_with("Login Failed (Session ID). [CreateSession]")
        self.assertNotIn("S1", str(logger.info.call_args_list))
