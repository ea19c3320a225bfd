"""Backend descriptors - immutable descriptions of a secret backend integration."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from vaultbridge.secrets.exceptions import InvalidDescriptorError
from vaultbridge.secrets.registry import register_descriptor


@dataclass(frozen=True)
class BackendDescriptor:
    """
    Base descriptor.

    Attributes:
        name: Backend name, also the key used by the registry
        backend: Vault mount the secret lives under
        path_template: Format string rendered with the descriptor's fields
        token_property: Key holding the token in the secret payload
        enabled: Disabled descriptors are skipped during resolution
    """

    name: str
    backend: str
    path_template: str = "{backend}"
    token_property: str = "token"
    enabled: bool = True

    def __post_init__(self):
        if not self.name:
            raise InvalidDescriptorError("Descriptor name must not be empty")
        if not self.backend:
            raise InvalidDescriptorError(f"Descriptor '{self.name}' has no backend")
        # the template must render for every constructed descriptor
        self.path

    @property
    def path(self) -> str:
        """Secret path rendered from ``path_template``."""
        try:
            return self.path_template.format(**self.__dict__)
        except (KeyError, IndexError, AttributeError, ValueError) as e:
            raise InvalidDescriptorError(
                f"Path template '{self.path_template}' of '{self.name}' "
                f"cannot be rendered: {type(e).__name__}: {e}"
            )


@register_descriptor("consul")
@dataclass(frozen=True)
class ConsulDescriptor(BackendDescriptor):
    """
    Consul ACL token issued by Vault's consul secrets engine.

    Defaults mirror the stock integration: disabled until switched on,
    mounted at ``consul`` and reading ``consul/creds/<role>``.
    """

    name: str = "consul"
    backend: str = "consul"
    path_template: str = "{backend}/creds/{role}"
    enabled: bool = False
    role: str = ""
    property_prefix: str = "spring.cloud.consul"

    def __post_init__(self):
        super().__post_init__()
        if self.enabled and not self.role:
            raise InvalidDescriptorError("Consul descriptor requires a role when enabled")


@register_descriptor("kv")
@dataclass(frozen=True)
class KeyValueDescriptor(BackendDescriptor):
    """Generic backend whose payload keys are renamed through ``key_mapping``."""

    key_mapping: Mapping[str, str] = field(default_factory=dict)
    forward_unmapped: bool = False

    def __post_init__(self):
        super().__post_init__()
        object.__setattr__(self, "key_mapping", MappingProxyType(dict(self.key_mapping)))

    def __hash__(self):
        return hash(
            (
                self.name,
                self.backend,
                self.path_template,
                self.token_property,
                self.enabled,
                frozenset(self.key_mapping.items()),
                self.forward_unmapped,
            )
        )
