"""
Configuration tests.
"""

import pytest

from tmdb_login.core import Config

ENV_VARS = ["CONFIG_FILE", "API_BASE_URL", "TMDB_API_KEY", "API_USERNAME", "API_PASSWORD", "ENVIRONMENT"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestConfig:
    """Test configuration loading, overrides and validation."""

    def test_loads_file_with_defaults(self, config_file):
        config = Config(config_file({"api": {"api_key": "abc123"}}))

        assert config.api_key == "abc123"
        assert config.api_base_url == "https://api.themoviedb.org/3"
        assert config.api_timeout == 30
        assert config.api_max_retries == 0
        assert config.api_verify_ssl is True
        assert config.validation_method == "GET"
        assert config.auth_username is None
        assert config.log_level == "INFO"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config(str(tmp_path / "nope.json"))

    def test_config_file_from_env(self, config_file, monkeypatch):
        path = config_file({"api": {"api_key": "abc123"}})
        monkeypatch.setenv("CONFIG_FILE", path)

        assert Config().config_file == path

    def test_missing_api_section(self, config_file):
        with pytest.raises(ValueError, match="sections: api"):
            Config(config_file({"authentication": {"username": "u"}}))

    def test_missing_api_key(self, config_file):
        with pytest.raises(ValueError, match="api.api_key"):
            Config(config_file({"api": {"base_url": "https://example.test"}}))

    def test_env_overrides(self, config_file, monkeypatch):
        monkeypatch.setenv("TMDB_API_KEY", "from-env")
        monkeypatch.setenv("API_BASE_URL", "https://proxy.example.test/3")
        monkeypatch.setenv("API_USERNAME", "movie_fan")
        monkeypatch.setenv("API_PASSWORD", "hunter2")
        monkeypatch.setenv("ENVIRONMENT", "staging")

        config = Config(config_file({}))

        assert config.api_key == "from-env"
        assert config.api_base_url == "https://proxy.example.test/3"
        assert config.auth_username == "movie_fan"
        assert config.auth_password == "hunter2"
        assert "staging" in repr(config)

    def test_validation_method(self, config_file):
        config = Config(config_file({"api": {"api_key": "k", "validation_method": "post"}}))
        assert config.validation_method == "POST"

        with pytest.raises(ValueError, match="validation_method"):
            Config(config_file({"api": {"api_key": "k", "validation_method": "PUT"}}))

    def test_dot_notation_get(self, config_file):
        config = Config(config_file({"api": {"api_key": "k", "timeout": 5}}))

        assert config.get("api.timeout") == 5
        assert config.get("api.missing", "fallback") == "fallback"
        assert config.get("api.api_key.deeper", "fallback") == "fallback"
