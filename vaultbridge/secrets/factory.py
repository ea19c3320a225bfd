"""Metadata factories - turn a descriptor into SecretBackendMetadata."""

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Optional

from vaultbridge.secrets.descriptors import (
    BackendDescriptor,
    ConsulDescriptor,
    KeyValueDescriptor,
)
from vaultbridge.secrets.events import EventPublisher, MetadataCreatedEvent
from vaultbridge.secrets.exceptions import InvalidDescriptorError
from vaultbridge.secrets.metadata import (
    LEASE_RENEW,
    LEASE_ROTATE,
    SecretBackendMetadata,
)
from vaultbridge.secrets.transformers import PropertyTransformer, fan_out, rename
from vaultbridge.utils.decorators import log_call
from vaultbridge.utils.logging import get_logger

logger = get_logger(__name__)


class SecretBackendMetadataFactory(ABC):
    """
    Abstract base class for metadata factories.

    Subclasses set ``backend_name``, ``descriptor_type`` and
    ``lease_mode`` and implement build_transformer().

    The publisher is optional. When it is None no events are published.
    Factories hold no other state, so one instance can be shared
    between threads.
    """

    backend_name: str = ""
    descriptor_type: type = BackendDescriptor
    lease_mode: str = LEASE_RENEW

    def __init__(self, publisher: Optional[EventPublisher] = None):
        self._publisher = publisher

    @property
    def publisher(self) -> Optional[EventPublisher]:
        return self._publisher

    def supports(self, descriptor) -> bool:
        """True iff ``descriptor`` is exactly of ``descriptor_type``."""
        return type(descriptor) is self.descriptor_type

    @abstractmethod
    def build_transformer(self, descriptor) -> PropertyTransformer:
        """Build the transformer for ``descriptor``'s secret payload."""
        pass

    @log_call
    def create_metadata(self, descriptor) -> SecretBackendMetadata:
        """
        Create metadata for a descriptor.

        Args:
            descriptor: Must not be None and must pass supports()

        Returns:
            New SecretBackendMetadata

        Raises:
            InvalidDescriptorError: If descriptor is None or unsupported
        """
        if descriptor is None:
            raise InvalidDescriptorError(
                f"{self.descriptor_type.__name__} must not be None"
            )
        if not self.supports(descriptor):
            raise InvalidDescriptorError(
                f"{type(self).__name__} does not support {type(descriptor).__name__}"
            )

        path = descriptor.path
        metadata = SecretBackendMetadata(
            name=descriptor.name,
            path=path,
            variables=MappingProxyType(self.variables(descriptor)),
            transformer=self.build_transformer(descriptor),
            lease_mode=self.lease_mode,
            publisher=self._publisher,
        )

        if self._publisher is not None:
            self._publisher.publish(MetadataCreatedEvent(descriptor.name, path))

        logger.debug(f"Created metadata for '{descriptor.name}' at {path}")
        return metadata

    def variables(self, descriptor) -> dict:
        """URL template variables: the mount and the path below it."""
        path = descriptor.path
        prefix = f"{descriptor.backend}/"
        key = path[len(prefix):] if path.startswith(prefix) else path
        return {"backend": descriptor.backend, "key": key}


class ConsulSecretBackendMetadataFactory(SecretBackendMetadataFactory):
    """
    Consul integration.

    The token in the payload is fanned out to both the config and the
    discovery ACL token properties. Tokens are rotated, not renewed.
    """

    backend_name = "consul"
    descriptor_type = ConsulDescriptor
    lease_mode = LEASE_ROTATE

    def __init__(
        self, publisher: Optional[EventPublisher] = None, backend_name: str = "consul"
    ):
        super().__init__(publisher)
        self.backend_name = backend_name

    def build_transformer(self, descriptor: ConsulDescriptor) -> PropertyTransformer:
        prefix = descriptor.property_prefix
        return fan_out(
            descriptor.token_property,
            f"{prefix}.config.acl-token",
            f"{prefix}.discovery.acl-token",
        )


class KeyValueSecretBackendMetadataFactory(SecretBackendMetadataFactory):
    """Generic backend that renames payload keys."""

    descriptor_type = KeyValueDescriptor

    def __init__(self, backend_name: str, publisher: Optional[EventPublisher] = None):
        super().__init__(publisher)
        self.backend_name = backend_name

    def build_transformer(self, descriptor: KeyValueDescriptor) -> PropertyTransformer:
        return rename(descriptor.key_mapping, forward_unmapped=descriptor.forward_unmapped)


def default_factories(
    publisher: Optional[EventPublisher] = None,
    consul_backends=("consul",),
    kv_backends=(),
) -> list:
    """Factories for a standard process: one per Consul and key-value backend name."""
    factories = []
    for name in consul_backends:
        factories.append(ConsulSecretBackendMetadataFactory(publisher, backend_name=name))
    for name in kv_backends:
        factories.append(KeyValueSecretBackendMetadataFactory(name, publisher))
    return factories
