"""Registries: descriptor types, secret sources and metadata factories."""

from vaultbridge.secrets.exceptions import InvalidDescriptorError
from vaultbridge.utils.logging import get_logger

logger = get_logger(__name__)

DESCRIPTOR_TYPES = {}
SOURCES = {}


def _lookup(table: dict, kind: str, name: str):
    if name not in table:
        available = ", ".join(table.keys()) or "none"
        raise KeyError(f"Unknown {kind}: '{name}'. Available: {available}")
    return table[name]


def register_descriptor(name: str):
    """
    Decorator to register a descriptor class under a config type name.

    Usage:
        @register_descriptor("consul")
        class ConsulDescriptor(BackendDescriptor):
            ...
    """

    def decorator(cls):
        DESCRIPTOR_TYPES[name] = cls
        return cls

    return decorator


def get_descriptor_type(name: str):
    """
    Get descriptor class by config type name.

    Raises:
        KeyError: If type not registered
    """
    return _lookup(DESCRIPTOR_TYPES, "descriptor type", name)


def register_source(name: str):
    """
    Decorator to register a secret source class.

    Usage:
        @register_source("env")
        class EnvSecretSource(SecretSource):
            ...
    """

    def decorator(cls):
        SOURCES[name] = cls
        return cls

    return decorator


def get_source(name: str):
    """
    Get secret source class by name.

    Args:
        name: Source identifier (env, file)

    Returns:
        Source class (not instance)

    Raises:
        KeyError: If source not registered
    """
    return _lookup(SOURCES, "source", name)


class BackendRegistry:
    """
    Explicit table of metadata factories keyed by backend name.

    Populated once at startup; nothing is discovered implicitly.

    Usage:
        registry = BackendRegistry([ConsulSecretBackendMetadataFactory()])
        if registry.supports(descriptor):
            metadata = registry.create_metadata(descriptor)
    """

    def __init__(self, factories=()):
        self._factories = {}
        for factory in factories:
            self.register(factory)

    def register(self, factory) -> None:
        """
        Register a factory under its ``backend_name``.

        Raises:
            ValueError: If the name is already taken
        """
        name = factory.backend_name
        if name in self._factories:
            raise ValueError(f"Backend '{name}' is already registered")
        self._factories[name] = factory
        logger.debug(f"Registered metadata factory for backend '{name}'")

    def names(self) -> list[str]:
        return list(self._factories.keys())

    def factory_for(self, descriptor):
        """
        Find the factory able to handle ``descriptor``.

        Raises:
            InvalidDescriptorError: If descriptor is None or unsupported
        """
        if descriptor is None:
            raise InvalidDescriptorError("Backend descriptor must not be None")

        name = getattr(descriptor, "name", None)
        factory = self._factories.get(name) if isinstance(name, str) else None
        if factory is None or not factory.supports(descriptor):
            available = ", ".join(self._factories.keys()) or "none"
            raise InvalidDescriptorError(
                f"No factory supports {type(descriptor).__name__} "
                f"'{name}'. Available: {available}"
            )
        return factory

    def supports(self, descriptor) -> bool:
        """False for None and for objects that are not registered descriptors."""
        name = getattr(descriptor, "name", None)
        if not isinstance(name, str):
            return False
        factory = self._factories.get(name)
        return factory is not None and factory.supports(descriptor)

    def create_metadata(self, descriptor):
        """Create metadata through the factory registered for ``descriptor``."""
        return self.factory_for(descriptor).create_metadata(descriptor)
