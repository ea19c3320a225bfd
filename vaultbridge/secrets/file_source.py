"""File-based secret source."""

import json
from pathlib import Path

from vaultbridge.secrets.base import SecretSource
from vaultbridge.secrets.exceptions import SecretBackendError, SecretNotFoundError
from vaultbridge.secrets.registry import register_source
from vaultbridge.utils.logging import get_logger

logger = get_logger(__name__)


@register_source("file")
class FileSecretSource(SecretSource):
    """
    Reads payloads from a JSON file keyed by secret path.

    File format:
        {
            "consul/creds/readonly": {"token": "abc123"},
            "secret/app": {"username": "app", "password": "s3cret"}
        }
    """

    def __init__(self, path: str):
        """
        Args:
            path: Path to JSON secrets file

        Raises:
            SecretBackendError: If file not found or invalid JSON
        """
        self.file_path = Path(path)
        self._secrets: dict = {}
        self._load_secrets()

    def _load_secrets(self) -> None:
        if not self.file_path.exists():
            raise SecretBackendError(f"Secret file not found: {self.file_path}")

        try:
            with open(self.file_path) as f:
                self._secrets = json.load(f)
        except json.JSONDecodeError as e:
            raise SecretBackendError(f"Invalid JSON in {self.file_path}: {e}")

        if not isinstance(self._secrets, dict):
            raise SecretBackendError(
                f"Expected a JSON object of paths in {self.file_path}"
            )

        logger.info(f"Loaded {len(self._secrets)} secret paths from {self.file_path}")

    def read_secret(self, path: str) -> dict:
        """
        Get the payload stored at a path.

        Raises:
            SecretNotFoundError: If path not in file
            SecretBackendError: If the stored value is not an object
        """
        if path not in self._secrets:
            raise SecretNotFoundError(f"Secret '{path}' not found in {self.file_path}")

        payload = self._secrets[path]
        if not isinstance(payload, dict):
            raise SecretBackendError(
                f"Secret '{path}' in {self.file_path} is not a JSON object"
            )
        return dict(payload)

    def health_check(self) -> bool:
        """Check if file exists and is readable."""
        return self.file_path.exists()
