"""Abstract base class for secret sources."""

from abc import ABC, abstractmethod


class SecretSource(ABC):
    """
    Abstract base class that all secret sources must implement.

    A source returns the raw payload stored at a metadata path, e.g.
    ``consul/creds/readonly`` -> {"token": "..."}. Talking to Vault over
    HTTP is left to the host application; it can plug in its own source.
    """

    @abstractmethod
    def read_secret(self, path: str) -> dict:
        """
        Read the payload stored at a path.

        Args:
            path: Secret path, e.g. "consul/creds/readonly"

        Returns:
            Payload as a flat dict

        Raises:
            SecretNotFoundError: If nothing is stored at path
            SecretBackendError: If the source fails
        """
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """
        Check if source is accessible.

        Returns:
            True if healthy, False otherwise
        """
        pass
