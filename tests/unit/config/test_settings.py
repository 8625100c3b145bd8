"""Unit tests for settings."""

import pytest

from spicecheck.config import Settings
from spicecheck.constants import DEFAULT_ENDPOINT, DEFAULT_PRESHARED_KEY
from spicecheck.errors import ConfigurationError


pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop SPICECHECK_* variables from the environment."""
    import os

    for key in list(os.environ):
        if key.upper().startswith("SPICECHECK_"):
            monkeypatch.delenv(key)


def make_settings(**kwargs) -> Settings:
    return Settings(_env_file=None, **kwargs)  # type: ignore[call-arg]


class TestSettings:
    """Tests for Settings."""

    def test_defaults_target_local_spicedb(self):
        """Defaults should point at a local development instance."""
        settings = make_settings()

        assert settings.endpoint == DEFAULT_ENDPOINT
        assert settings.token.get_secret_value() == DEFAULT_PRESHARED_KEY
        assert settings.insecure is True
        assert settings.timeout == 10.0
        assert settings.is_production is False

    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch):
        """SPICECHECK_* variables should configure the settings."""
        monkeypatch.setenv("SPICECHECK_ENDPOINT", "spicedb:50051")
        monkeypatch.setenv("SPICECHECK_TOKEN", "from-env")
        monkeypatch.setenv("SPICECHECK_INSECURE", "false")
        monkeypatch.setenv("SPICECHECK_TIMEOUT", "2.5")

        settings = make_settings()

        assert settings.endpoint == "spicedb:50051"
        assert settings.token.get_secret_value() == "from-env"
        assert settings.insecure is False
        assert settings.timeout == 2.5

    def test_zero_timeout_disables_timeout(self):
        """A zero timeout should mean no timeout."""
        assert make_settings(timeout=0).timeout is None

    def test_negative_timeout_rejected(self):
        """Negative timeouts are invalid."""
        with pytest.raises(ValueError):
            make_settings(timeout=-1)

    def test_log_level_normalized(self):
        """Log level names should be upper-cased and validated."""
        assert make_settings(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValueError):
            make_settings(log_level="chatty")

    def test_token_is_not_printed(self):
        """The preshared key should be masked in reprs."""
        assert "secret-key" not in repr(make_settings(token="secret-key"))

    def test_production_rejects_default_token(self):
        """Production must not use the default preshared key."""
        settings = make_settings(environment="production", insecure=False)

        with pytest.raises(ConfigurationError):
            _ = settings.is_production

    def test_production_rejects_plaintext(self):
        """Production must not use a plaintext channel."""
        settings = make_settings(environment="production", token="real-key", insecure=True)

        with pytest.raises(ConfigurationError):
            _ = settings.is_production

    def test_production_with_real_token(self):
        """A real key over TLS should be accepted in production."""
        settings = make_settings(environment="production", token="real-key", insecure=False)

        assert settings.is_production is True
