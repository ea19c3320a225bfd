"""Tests for overlay resolver."""

import json

import pytest

from vaultbridge.secrets.descriptors import ConsulDescriptor, KeyValueDescriptor
from vaultbridge.secrets.exceptions import (
    InvalidDescriptorError,
    SecretBackendError,
    SecretNotFoundError,
)
from vaultbridge.secrets.factory import default_factories
from vaultbridge.secrets.file_source import FileSecretSource
from vaultbridge.secrets.registry import BackendRegistry
from vaultbridge.secrets.resolver import OverlayResolver, create_source


@pytest.fixture
def secrets_file(tmp_path):
    path = tmp_path / "secrets.json"
    path.write_text(
        json.dumps(
            {
                "consul/creds/readonly": {"token": "abc123"},
                "secret/app-db": {"username": "app", "password": "pw"},
            }
        )
    )
    return path


@pytest.fixture
def resolver(secrets_file):
    registry = BackendRegistry(default_factories(kv_backends=["app-db"]))
    return OverlayResolver(registry, FileSecretSource(str(secrets_file)))


APP_DB = KeyValueDescriptor(
    name="app-db",
    backend="secret",
    path_template="{backend}/app-db",
    key_mapping={"username": "spring.datasource.username"},
)


class TestOverlayResolver:
    """Tests for OverlayResolver."""

    def test_resolve_consul(self, resolver):
        """Should read the payload and fan out the token."""
        # Act
        overlay = resolver.resolve(ConsulDescriptor(role="readonly", enabled=True))

        # Assert
        assert overlay == {
            "spring.cloud.consul.config.acl-token": "abc123",
            "spring.cloud.consul.discovery.acl-token": "abc123",
        }

    def test_resolve_all_combines_in_order(self, resolver):
        """Should merge overlays of every enabled descriptor."""
        # Act
        overlay = resolver.resolve_all([ConsulDescriptor(role="readonly", enabled=True), APP_DB])

        # Assert
        assert list(overlay.keys()) == [
            "spring.cloud.consul.config.acl-token",
            "spring.cloud.consul.discovery.acl-token",
            "spring.datasource.username",
        ]

    def test_resolve_all_skips_disabled(self, resolver):
        """Disabled descriptors contribute nothing."""
        overlay = resolver.resolve_all([ConsulDescriptor(role="readonly"), APP_DB])

        assert overlay == {"spring.datasource.username": "app"}

    def test_resolve_none_fails(self, resolver):
        with pytest.raises(InvalidDescriptorError):
            resolver.resolve(None)

    def test_resolve_all_with_none_fails(self, resolver):
        with pytest.raises(InvalidDescriptorError):
            resolver.resolve_all([None])

    def test_resolve_all_with_non_descriptor_fails(self, resolver):
        with pytest.raises(InvalidDescriptorError):
            resolver.resolve_all([{"name": "consul", "enabled": True}])

    def test_missing_secret_propagates(self, resolver):
        """Source errors should reach the caller unchanged."""
        with pytest.raises(SecretNotFoundError):
            resolver.resolve(ConsulDescriptor(role="admin", enabled=True))

    def test_health_check(self, resolver):
        assert resolver.health_check() is True


class TestCreateSource:
    """Tests for create_source."""

    def test_env_source(self):
        from vaultbridge.secrets.env_source import EnvSecretSource

        source = create_source("env", prefix="VAULT_")

        assert isinstance(source, EnvSecretSource)
        assert source.prefix == "VAULT_"

    def test_file_source_requires_path(self):
        """Should raise error when path not provided."""
        with pytest.raises(SecretBackendError) as exc_info:
            create_source("file")

        assert "path" in str(exc_info.value)

    def test_unknown_source(self):
        with pytest.raises(SecretBackendError) as exc_info:
            create_source("unknown_source")

        assert "Unknown source" in str(exc_info.value)
