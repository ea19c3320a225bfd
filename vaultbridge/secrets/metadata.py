"""Secret backend metadata - the output of a metadata factory."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from vaultbridge.secrets.events import EventPublisher, RefreshEvent
from vaultbridge.secrets.transformers import PropertyTransformer
from vaultbridge.utils.logging import get_logger

logger = get_logger(__name__)

LEASE_RENEW = "renew"
LEASE_ROTATE = "rotate"


@dataclass(frozen=True)
class SecretBackendMetadata:
    """
    Where a backend's secret lives and how to turn it into properties.

    Equality and hashing cover name, path, variables and lease mode; the transformer
    and publisher are behavior, not identity.

    Usage:
        metadata = factory.create_metadata(descriptor)
        overlay = metadata.overlay(source.read_secret(metadata.path))
    """

    name: str
    path: str
    variables: Mapping[str, str]
    transformer: PropertyTransformer = field(compare=False, repr=False)
    lease_mode: str = LEASE_RENEW
    publisher: Optional[EventPublisher] = field(
        default=None, compare=False, repr=False
    )

    def __hash__(self):
        return hash(
            (self.name, self.path, frozenset(self.variables.items()), self.lease_mode)
        )

    def overlay(self, secret_data: Optional[Mapping[str, Any]] = None) -> dict:
        """
        Apply the transformer to a secret payload.

        Args:
            secret_data: Payload read from ``path``; None is treated as empty

        Returns:
            Ordered property overlay
        """
        return dict(self.transformer(secret_data or {}))

    def lease_rotated(self, reason: Optional[str] = None) -> bool:
        """
        Signal that the lease behind ``path`` was replaced.

        Returns:
            True if a RefreshEvent was published
        """
        if self.lease_mode != LEASE_ROTATE or self.publisher is None:
            return False

        self.publisher.publish(RefreshEvent(self.name, self.path, reason))
        logger.info(f"Requested refresh for '{self.name}' after rotation of {self.path}")
        return True
