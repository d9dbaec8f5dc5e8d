"""Tests for environment settings."""

import pytest

from snadmin.config.settings import DEFAULT_TIMEOUT, AdminSettings, load_settings
from snadmin.utils.errors import ConfigError, MissingCredentialError

ENV = {
    "SNADMIN_FEED_ID": "feed-123",
    "SNADMIN_TOKEN": "secret-token",
    "SNADMIN_BASE_URL": "https://snapcast.test/api/podcasts/",
}


class TestLoadSettings:
    """Tests for load_settings."""

    def test_load_from_mapping(self) -> None:
        """Test loading all required variables."""
        settings = load_settings(ENV)

        assert settings.feed_id == "feed-123"
        assert settings.token == "secret-token"
        assert settings.base_url == "https://snapcast.test/api/podcasts"
        assert settings.timeout == DEFAULT_TIMEOUT

    def test_feed_url(self) -> None:
        """Test the feed root URL."""
        assert load_settings(ENV).feed_url == "https://snapcast.test/api/podcasts/feed-123"

    @pytest.mark.parametrize("name", sorted(ENV))
    def test_missing_variable(self, name: str) -> None:
        """Test that each required variable is enforced."""
        env = {k: v for k, v in ENV.items() if k != name}

        with pytest.raises(MissingCredentialError, match=name) as exc_info:
            load_settings(env)
        assert f"export {name}" in exc_info.value.suggestion

    def test_blank_variable(self) -> None:
        """Test that whitespace-only values count as missing."""
        with pytest.raises(MissingCredentialError, match="SNADMIN_TOKEN"):
            load_settings(ENV | {"SNADMIN_TOKEN": "   "})

    def test_reads_os_environ(self, admin_env) -> None:
        """Test that os.environ is the default source."""
        assert load_settings().feed_id == "feed-123"

    def test_timeout_override(self) -> None:
        """Test SNADMIN_TIMEOUT."""
        assert load_settings(ENV | {"SNADMIN_TIMEOUT": "2.5"}).timeout == 2.5

    @pytest.mark.parametrize("value", ["soon", "0", "-1"])
    def test_invalid_timeout(self, value: str) -> None:
        """Test that a bad timeout is a configuration error."""
        with pytest.raises(ConfigError, match="SNADMIN_TIMEOUT"):
            load_settings(ENV | {"SNADMIN_TIMEOUT": value})


class TestAdminSettings:
    """Tests for the AdminSettings model."""

    def test_token_hidden_from_repr(self) -> None:
        """Test that the token does not appear in repr."""
        settings = AdminSettings(feed_id="f", token="secret-token", base_url="https://x")
        assert "secret-token" not in repr(settings)
