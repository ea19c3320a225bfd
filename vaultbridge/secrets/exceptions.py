"""Custom exceptions for secret backends and sources."""


class InvalidDescriptorError(Exception):
    """Raised when a backend descriptor is missing, malformed or unsupported."""

    pass


class SecretNotFoundError(Exception):
    """Raised when a secret cannot be found in the source."""

    pass


class SecretBackendError(Exception):
    """Raised when there's an issue with the secret source itself."""

    pass
