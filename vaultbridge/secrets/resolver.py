"""Overlay resolver - descriptors in, property overlay out."""

from typing import Iterable

from monitoring import Metrics, track_time
from vaultbridge.secrets.base import SecretSource
from vaultbridge.secrets.exceptions import InvalidDescriptorError, SecretBackendError
from vaultbridge.secrets.registry import BackendRegistry, get_source
from vaultbridge.utils.logging import get_logger

# Import sources to trigger registration
from vaultbridge.secrets import env_source, file_source  # noqa: F401

logger = get_logger(__name__)


def create_source(source: str = "env", **source_config) -> SecretSource:
    """
    Create a secret source using the registry.

    Raises:
        SecretBackendError: If the source is unknown or misconfigured
    """
    try:
        source_cls = get_source(source)
        return source_cls(**source_config)
    except KeyError as e:
        raise SecretBackendError(str(e))
    except TypeError as e:
        # Missing required argument (e.g., file source needs path)
        raise SecretBackendError(f"Source '{source}' config error: {e}")


class OverlayResolver:
    """
    Resolves descriptors into one property overlay.

    For each descriptor: create metadata, read the payload at its path,
    apply the transformer.

    Usage:
        resolver = OverlayResolver(registry, create_source("file", path="secrets.json"))
        overlay = resolver.resolve_all(descriptors)
    """

    def __init__(self, registry: BackendRegistry, source: SecretSource):
        self.registry = registry
        self.source = source
        self.source_name = type(source).__name__
        logger.info(f"Initialized OverlayResolver with source: {self.source_name}")

    def resolve(self, descriptor) -> dict:
        """
        Resolve the overlay of a single descriptor.

        Raises:
            InvalidDescriptorError: If no registered factory supports it
            SecretNotFoundError: If the source has nothing at the path
        """
        try:
            metadata = self.registry.create_metadata(descriptor)
        except InvalidDescriptorError:
            Metrics.descriptor_rejected(type(descriptor).__name__)
            raise
        Metrics.metadata_created(metadata.name)

        try:
            with track_time() as t:
                data = self.source.read_secret(metadata.path)
        except Exception:
            Metrics.secret_read_error(self.source_name)
            raise
        Metrics.secret_read(self.source_name, latency=t["duration"])

        overlay = metadata.overlay(data)
        Metrics.overlay_resolved(metadata.name, len(overlay))
        logger.info(f"Resolved {len(overlay)} properties for '{metadata.name}'")
        return overlay

    def resolve_all(self, descriptors: Iterable) -> dict:
        """Resolve every enabled descriptor. Later descriptors win on conflicts."""
        combined = {}
        for descriptor in descriptors:
            if not getattr(descriptor, "enabled", True):
                logger.debug(f"Skipping disabled backend '{descriptor.name}'")
                continue
            combined.update(self.resolve(descriptor))
        return combined

    def health_check(self) -> bool:
        """Check if source is healthy."""
        return self.source.health_check()
