"""Environment variable secret source."""

import os
import re
from typing import Iterable, Optional

from vaultbridge.secrets.base import SecretSource
from vaultbridge.secrets.exceptions import SecretNotFoundError
from vaultbridge.secrets.registry import register_source
from vaultbridge.utils.logging import get_logger

logger = get_logger(__name__)

NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


def path_to_env(path: str) -> str:
    """consul/creds/read-only -> CONSUL_CREDS_READ_ONLY"""
    return NON_ALNUM.sub("_", path).strip("_").upper()


@register_source("env")
class EnvSecretSource(SecretSource):
    """
    Reads payloads from environment variables.

    Every variable named ``<PREFIX><PATH>_<KEY>`` becomes one payload
    entry with the lower-cased key.

    Examples:
        VAULT_CONSUL_CREDS_APP_TOKEN=abc  (prefix "VAULT_")
        read_secret("consul/creds/app") -> {"token": "abc"}

    Matching is by prefix, so without ``keys`` the variables of a longer
    path leak into a shorter one: VAULT_CONSUL_CREDS_APP_EXTRA_TOKEN is
    read by "consul/creds/app" as "extra_token". Pass ``keys`` to read
    only the listed keys.
    """

    def __init__(self, prefix: str = "", keys: Optional[Iterable[str]] = None):
        """
        Args:
            prefix: Optional prefix for env vars (e.g., 'VAULT_')
            keys: Optional allow-list of payload keys (e.g., ["token"])
        """
        self.prefix = prefix
        self.keys = tuple(key.lower() for key in keys) if keys is not None else None

    def read_secret(self, path: str) -> dict:
        """
        Collect the variables stored under a path.

        Raises:
            SecretNotFoundError: If no variable matches
        """
        env_prefix = f"{self.prefix}{path_to_env(path)}_"
        if self.keys is not None:
            payload = {
                key: os.environ[f"{env_prefix}{key.upper()}"]
                for key in self.keys
                if f"{env_prefix}{key.upper()}" in os.environ
            }
        else:
            payload = {
                name[len(env_prefix):].lower(): value
                for name, value in sorted(os.environ.items())
                if name.startswith(env_prefix) and len(name) > len(env_prefix)
            }

        if not payload:
            raise SecretNotFoundError(
                f"Secret '{path}' not found. Set environment variables: {env_prefix}<KEY>"
            )

        logger.debug(f"Resolved {len(payload)} keys for '{path}' from env '{env_prefix}*'")
        return payload

    def health_check(self) -> bool:
        """Environment source is always available."""
        return True
