"""Tests for environment variable secret source."""

import pytest

from vaultbridge.secrets.env_source import EnvSecretSource, path_to_env
from vaultbridge.secrets.exceptions import SecretNotFoundError


class TestPathToEnv:
    """Tests for path_to_env."""

    def test_normalizes_separators(self):
        assert path_to_env("consul/creds/read-only") == "CONSUL_CREDS_READ_ONLY"

    def test_strips_edges(self):
        assert path_to_env("/secret/app/") == "SECRET_APP"


class TestEnvSecretSource:
    """Tests for EnvSecretSource."""

    def test_read_secret_success(self, monkeypatch):
        """Should collect variables under the path."""
        # Arrange
        monkeypatch.setenv("CONSUL_CREDS_APP_TOKEN", "abc123")
        monkeypatch.setenv("CONSUL_CREDS_APP_ACCESSOR", "acc-1")
        source = EnvSecretSource()

        # Act
        result = source.read_secret("consul/creds/app")

        # Assert
        assert result == {"accessor": "acc-1", "token": "abc123"}

    def test_read_secret_with_prefix(self, monkeypatch):
        """Should prepend prefix to the path."""
        # Arrange
        monkeypatch.setenv("VAULT_CONSUL_CREDS_APP_TOKEN", "secret123")
        monkeypatch.setenv("CONSUL_CREDS_APP_TOKEN", "unprefixed")
        source = EnvSecretSource(prefix="VAULT_")

        # Act
        result = source.read_secret("consul/creds/app")

        # Assert
        assert result == {"token": "secret123"}

    def test_other_paths_not_included(self, monkeypatch):
        monkeypatch.setenv("CONSUL_CREDS_APP_TOKEN", "a")
        monkeypatch.setenv("CONSUL_CREDS_APPX_TOKEN", "b")
        source = EnvSecretSource()

        assert source.read_secret("consul/creds/app") == {"token": "a"}

    def test_read_secret_not_found(self, monkeypatch):
        """Should raise SecretNotFoundError when nothing matches."""
        # Arrange
        monkeypatch.delenv("CONSUL_CREDS_MISSING_TOKEN", raising=False)
        source = EnvSecretSource()

        # Act & Assert
        with pytest.raises(SecretNotFoundError) as exc_info:
            source.read_secret("consul/creds/missing")

        assert "CONSUL_CREDS_MISSING_" in str(exc_info.value)

    def test_health_check_always_true(self):
        """Health check should always return True for env source."""
        assert EnvSecretSource().health_check() is True

    def test_longer_path_variables_are_read_by_prefix(self, monkeypatch):
        """Without keys, variables of a longer path share the prefix."""
        monkeypatch.setenv("VAULT_CONSUL_CREDS_APP_TOKEN", "a")
        monkeypatch.setenv("VAULT_CONSUL_CREDS_APP_EXTRA_TOKEN", "b")
        source = EnvSecretSource(prefix="VAULT_")

        assert source.read_secret("consul/creds/app") == {
            "extra_token": "b",
            "token": "a",
        }

    def test_keys_restrict_payload(self, monkeypatch):
        """With keys, only the listed variables are read."""
        # Arrange
        monkeypatch.setenv("VAULT_CONSUL_CREDS_APP_TOKEN", "a")
        monkeypatch.setenv("VAULT_CONSUL_CREDS_APP_EXTRA_TOKEN", "b")
        source = EnvSecretSource(prefix="VAULT_", keys=["token", "accessor"])

        # Act
        result = source.read_secret("consul/creds/app")

        # Assert
        assert result == {"token": "a"}

    def test_keys_with_nothing_set(self, monkeypatch):
        monkeypatch.delenv("VAULT_CONSUL_CREDS_NONE_TOKEN", raising=False)
        source = EnvSecretSource(prefix="VAULT_", keys=["token"])

        with pytest.raises(SecretNotFoundError):
            source.read_secret("consul/creds/none")
