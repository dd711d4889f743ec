"""
Command line entry point tests.
"""

from unittest.mock import Mock, patch

import pytest

from tmdb_login.api import TMDBAPI
from tmdb_login.main import LoginApp, main

from conftest import build_response


@pytest.fixture
def app_config(config_file, tmp_path, monkeypatch):
    for name in ("CONFIG_FILE", "API_BASE_URL", "TMDB_API_KEY", "API_USERNAME", "API_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
    return config_file({
        "api": {"api_key": "test-key", "base_url": "https://api.example.test/3"},
        "authentication": {"username": "movie_fan", "password": "hunter2"},
        "logging": {"level": "DEBUG", "file": str(tmp_path / "logs" / "login.log")},
    })


def mocked_api(responses):
    api = TMDBAPI(api_key="test-key", base_url="https://api.example.test/3")
    api.session.request = Mock(side_effect=responses)
    return api


class TestLoginApp:

    def test_run_success(self, app_config, happy_responses, capsys):
        api = mocked_api(happy_responses)
        with patch.object(TMDBAPI, "from_config", return_value=api):
            app = LoginApp(config_file=app_config)
            result = app.run()

        assert result.success
        assert app.store.user_id == 42
        assert app.store.session_id == "S1"
        out = capsys.readouterr().out
        assert "Logged in (account 42)" in out

    def test_run_uses_explicit_credentials(self, app_config, happy_responses):
        api = mocked_api(happy_responses)
        with patch.object(TMDBAPI, "from_config", return_value=api):
            LoginApp(config_file=app_config).run(username="other", password="secret")

        params = api.session.request.call_args_list[1].kwargs["params"]
        assert params["username"] == "other"
        assert params["password"] == "secret"

    def test_log_file_never_contains_secrets(self, app_config, tmp_path):
        api = mocked_api([
            build_response(body={"request_token": "T1"}),
            build_response(status=401, body={"success": False}),
        ])
        with patch.object(TMDBAPI, "from_config", return_value=api):
            app = LoginApp(config_file=app_config)
            app.logger.info("Request URL /3/x?api_key=test-key&password=hunter2")
            app.run(password="typed-at-prompt")
            app.logger.warning("Credential typed-at-prompt was rejected")

        written = (tmp_path / "logs" / "login.log").read_text(encoding="utf-8")
        assert "test-key" not in written
        assert "hunter2" not in written
        assert "typed-at-prompt" not in written
        assert "***" in written


class TestMain:

    def test_exit_code_success(self, app_config, happy_responses):
        api = mocked_api(happy_responses)
        with patch.object(TMDBAPI, "from_config", return_value=api):
            assert main(["--config", app_config]) == 0

    def test_exit_code_rejected(self, app_config, capsys):
        api = mocked_api([
            build_response(body={"request_token": "T1"}),
            build_response(status=401, body={"success": False, "status_code": 30}),
        ])
        with patch.object(TMDBAPI, "from_config", return_value=api):
            assert main(["--config", app_config, "--username", "movie_fan"]) == 1

        assert "Login Failed (Authenticate Token)." in capsys.readouterr().out

    def test_missing_config(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "missing.json")]) == 1
        assert "Application failed" in capsys.readouterr().out
