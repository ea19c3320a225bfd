"""Secret backend metadata: descriptors, factories, transformers and sources."""

# Public API
from vaultbridge.secrets.descriptors import (
    BackendDescriptor,
    ConsulDescriptor,
    KeyValueDescriptor,
)
from vaultbridge.secrets.events import (
    EventPublisher,
    LoggingEventPublisher,
    MetadataCreatedEvent,
    NullEventPublisher,
    RefreshEvent,
)
from vaultbridge.secrets.exceptions import (
    InvalidDescriptorError,
    SecretBackendError,
    SecretNotFoundError,
)
from vaultbridge.secrets.factory import (
    ConsulSecretBackendMetadataFactory,
    KeyValueSecretBackendMetadataFactory,
    SecretBackendMetadataFactory,
    default_factories,
)
from vaultbridge.secrets.metadata import SecretBackendMetadata
from vaultbridge.secrets.registry import BackendRegistry, register_source, get_source
from vaultbridge.secrets.resolver import OverlayResolver, create_source

__all__ = [
    "BackendDescriptor",
    "ConsulDescriptor",
    "KeyValueDescriptor",
    "EventPublisher",
    "LoggingEventPublisher",
    "MetadataCreatedEvent",
    "NullEventPublisher",
    "RefreshEvent",
    "InvalidDescriptorError",
    "SecretBackendError",
    "SecretNotFoundError",
    "ConsulSecretBackendMetadataFactory",
    "KeyValueSecretBackendMetadataFactory",
    "SecretBackendMetadataFactory",
    "default_factories",
    "SecretBackendMetadata",
    "BackendRegistry",
    "register_source",
    "get_source",
    "OverlayResolver",
    "create_source",
]
