"""Registries and the registry variant catalog."""

from .base import BaseRegistry
from .exceptions import (
    RegistryCollisionError,
    RegistryDuplicateError,
    RegistryError,
    RegistryFrozenError,
    RegistryLookupError,
    RegistryTypeError,
    UnsupportedRegistryError,
)
from .interfaces import (
    IdentityPrioritizedServiceRegistryInterface,
    IdentityServiceRegistryInterface,
    PrioritizedServiceRegistryInterface,
    ServiceRegistryInterface,
)
from .records import ResolvedRegistration
from .services import (
    CallableRegistry,
    IdentityPrioritizedServiceRegistry,
    IdentityServiceRegistry,
    IdentitySinglePrioritizedServiceRegistry,
    PrioritizedEntry,
    PrioritizedServiceRegistry,
    ServiceRegistry,
)
from .variants import REGISTRY_CATALOG, RegistryVariant, registration_arguments, variant_for

__all__ = [
    "BaseRegistry",
    "ServiceRegistry",
    "IdentityServiceRegistry",
    "CallableRegistry",
    "PrioritizedServiceRegistry",
    "IdentityPrioritizedServiceRegistry",
    "IdentitySinglePrioritizedServiceRegistry",
    "PrioritizedEntry",
    "ServiceRegistryInterface",
    "IdentityServiceRegistryInterface",
    "PrioritizedServiceRegistryInterface",
    "IdentityPrioritizedServiceRegistryInterface",
    "RegistryVariant",
    "REGISTRY_CATALOG",
    "variant_for",
    "registration_arguments",
    "ResolvedRegistration",
    "RegistryError",
    "RegistryDuplicateError",
    "RegistryCollisionError",
    "RegistryLookupError",
    "RegistryFrozenError",
    "RegistryTypeError",
    "UnsupportedRegistryError",
]
