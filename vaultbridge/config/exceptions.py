"""Exceptions raised while loading bridge configuration."""


class ConfigError(Exception):
    """Base exception for bridge config errors."""

    pass


class ConfigNotFoundError(ConfigError):
    """Raised when bridge.yaml is missing from the config directory."""

    pass


class ConfigParseError(ConfigError):
    """Raised when a bridge config file is not valid YAML."""

    pass


class ConfigValidationError(ConfigError):
    """Raised when a backend or source section cannot be turned into an object."""

    pass
