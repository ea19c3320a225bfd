"""Configuration loader - reads backend descriptors and the secret source from YAML."""

from pathlib import Path
from typing import Optional

import yaml

from vaultbridge.config.exceptions import (
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
)
from vaultbridge.config.merger import deep_merge
from vaultbridge.secrets.base import SecretSource
from vaultbridge.secrets.descriptors import (
    BackendDescriptor,
    ConsulDescriptor,
    KeyValueDescriptor,
)
from vaultbridge.secrets.exceptions import InvalidDescriptorError, SecretBackendError
from vaultbridge.secrets.factory import default_factories
from vaultbridge.secrets.registry import BackendRegistry, get_descriptor_type
from vaultbridge.secrets.resolver import OverlayResolver, create_source
from vaultbridge.utils.decorators import log_time
from vaultbridge.utils.logging import get_logger

logger = get_logger(__name__)

CONFIG_FILE = "bridge.yaml"


class ConfigLoader:
    """
    Loads bridge configuration.

    Load order (later wins):
        1. bridge.yaml
        2. environments/{env}.yaml (optional overrides)

    File layout:
        source:
          type: file
          path: secrets.json
        backends:
          consul:
            enabled: true
            role: readonly
        properties:
          spring.cloud.consul.host: consul.internal

    Each entry under ``backends`` is keyed by backend name; ``type``
    selects the descriptor class and defaults to the name.

    Usage:
        loader = ConfigLoader("config")
        descriptors = loader.load_descriptors(environment="prod")
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else Path.cwd() / "config"

    def _load_yaml(self, path: Path) -> dict:
        """Load and parse a YAML file."""
        if not path.exists():
            raise ConfigNotFoundError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                content = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigParseError(f"Invalid YAML in {path}: {e}")

        if not isinstance(content, dict):
            raise ConfigParseError(f"Expected a mapping at the top of {path}")

        logger.debug(f"Loaded config: {path}")
        return content

    @log_time
    def load(self, environment: Optional[str] = None) -> dict:
        """
        Load the merged raw configuration.

        Args:
            environment: Optional environment (e.g., "prod", "staging")
        """
        base_path = self.config_dir / CONFIG_FILE
        config = self._load_yaml(base_path)
        logger.info(f"Loaded bridge config: {base_path}")

        if environment:
            env_path = self.config_dir / "environments" / f"{environment}.yaml"
            if env_path.exists():
                config = deep_merge(config, self._load_yaml(env_path))
                logger.info(f"Merged environment config: {env_path}")

        return config

    def load_descriptors(
        self, environment: Optional[str] = None, config: Optional[dict] = None
    ) -> list[BackendDescriptor]:
        """
        Build descriptors from the ``backends`` section.

        Raises:
            ConfigValidationError: If a section names an unknown type,
                unknown fields, or fails descriptor validation
        """
        config = config if config is not None else self.load(environment)
        backends = config.get("backends") or {}
        if not isinstance(backends, dict):
            raise ConfigValidationError("'backends' must be a mapping of name -> settings")

        descriptors = []
        for name, section in backends.items():
            section = dict(section or {})
            type_name = section.pop("type", name)
            try:
                descriptor_cls = get_descriptor_type(type_name)
                descriptors.append(descriptor_cls(name=name, **section))
            except KeyError as e:
                raise ConfigValidationError(f"Backend '{name}': {e.args[0]}")
            except TypeError as e:
                raise ConfigValidationError(f"Backend '{name}' config error: {e}")
            except InvalidDescriptorError as e:
                raise ConfigValidationError(f"Backend '{name}' is invalid: {e}")

        logger.info(f"Loaded {len(descriptors)} backend descriptors")
        return descriptors

    def load_source(
        self, environment: Optional[str] = None, config: Optional[dict] = None
    ) -> SecretSource:
        """
        Create the secret source named in the ``source`` section (default env).

        A relative ``path`` is resolved against the config directory.
        """
        config = config if config is not None else self.load(environment)
        section = dict(config.get("source") or {})
        source_type = section.pop("type", "env")
        if section.get("path") and not Path(section["path"]).is_absolute():
            section["path"] = str(self.config_dir / section["path"])
        try:
            return create_source(source_type, **section)
        except SecretBackendError as e:
            raise ConfigValidationError(str(e))

    def load_properties(
        self, environment: Optional[str] = None, config: Optional[dict] = None
    ) -> dict:
        """Base properties the overlay is applied to."""
        config = config if config is not None else self.load(environment)
        return dict(config.get("properties") or {})

    def health_check(self) -> bool:
        """Check if bridge.yaml exists."""
        return (self.config_dir / CONFIG_FILE).exists()


def build_registry(descriptors, publisher=None) -> BackendRegistry:
    """Registry with one factory per configured backend name."""
    consul_backends = [d.name for d in descriptors if isinstance(d, ConsulDescriptor)]
    kv_backends = [d.name for d in descriptors if isinstance(d, KeyValueDescriptor)]
    return BackendRegistry(
        default_factories(publisher, consul_backends=consul_backends, kv_backends=kv_backends)
    )


def build_resolver(
    loader: ConfigLoader, environment: Optional[str] = None, publisher=None
) -> tuple:
    """
    Wire up a resolver from configuration.

    Returns:
        (resolver, descriptors, properties)
    """
    config = loader.load(environment)
    descriptors = loader.load_descriptors(config=config)
    source = loader.load_source(config=config)
    resolver = OverlayResolver(build_registry(descriptors, publisher), source)
    return resolver, descriptors, loader.load_properties(config=config)
