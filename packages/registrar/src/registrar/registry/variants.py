# registrar/registry/variants.py
"""
Registry variant catalog.

The catalog is the single place that knows which registry interfaces exist, which
metadata capabilities each one requires, and the argument shape of its
``register`` call. Adding a variant means updating ``RegistryVariant``,
``REGISTRY_CATALOG`` and ``_CALL_SHAPES``; the module refuses to import if the
call-shape table is not exhaustive.
"""

from __future__ import annotations

import enum
from typing import Any, Callable

from registrar.metadata.capabilities import Capability

from .exceptions import UnsupportedRegistryError
from .interfaces import (
    IdentityPrioritizedServiceRegistryInterface,
    IdentityServiceRegistryInterface,
    PrioritizedServiceRegistryInterface,
    ServiceRegistryInterface,
)

__all__ = [
    "RegistryVariant",
    "REGISTRY_CATALOG",
    "variant_for",
    "registration_arguments",
]


class RegistryVariant(enum.Enum):
    PLAIN = "plain"
    IDENTITY = "identity"
    PRIORITIZED = "prioritized"
    IDENTITY_PRIORITIZED = "identity+prioritized"

    @property
    def keyed(self) -> bool:
        return self in (RegistryVariant.IDENTITY, RegistryVariant.IDENTITY_PRIORITIZED)

    @property
    def prioritized(self) -> bool:
        return self in (RegistryVariant.PRIORITIZED, RegistryVariant.IDENTITY_PRIORITIZED)

    @property
    def required_capabilities(self) -> tuple[Capability, ...]:
        """Capabilities in the order they are checked (most specific first)."""
        required: list[Capability] = []
        if self.prioritized:
            required.append(Capability.PRIORITIZED)
        if self.keyed:
            required.append(Capability.IDENTIFIABLE)
        required.append(Capability.SERVICE)
        return tuple(required)


# Most specific first.
REGISTRY_CATALOG: tuple[tuple[type, RegistryVariant], ...] = (
    (IdentityPrioritizedServiceRegistryInterface, RegistryVariant.IDENTITY_PRIORITIZED),
    (PrioritizedServiceRegistryInterface, RegistryVariant.PRIORITIZED),
    (IdentityServiceRegistryInterface, RegistryVariant.IDENTITY),
    (ServiceRegistryInterface, RegistryVariant.PLAIN),
)


def variant_for(registry_cls: type) -> RegistryVariant:
    """Return the variant implemented by `registry_cls`.

    :raises UnsupportedRegistryError: if it implements no catalogued interface.
    """
    if isinstance(registry_cls, type):
        for interface, variant in REGISTRY_CATALOG:
            if issubclass(registry_cls, interface):
                return variant

    name = getattr(registry_cls, "__qualname__", repr(registry_cls))
    supported = ", ".join(i.__qualname__ for i, _ in REGISTRY_CATALOG)
    raise UnsupportedRegistryError(
        f'Class "{name}" does not implement any available registry type: [{supported}]',
        component=registry_cls,
    )


_CALL_SHAPES: dict[RegistryVariant, Callable[[str | None, Any, int | None], tuple[Any, ...]]] = {
    RegistryVariant.PLAIN: lambda identifier, value, priority: (value,),
    RegistryVariant.IDENTITY: lambda identifier, value, priority: (identifier, value),
    RegistryVariant.PRIORITIZED: lambda identifier, value, priority: (value, priority),
    RegistryVariant.IDENTITY_PRIORITIZED: lambda identifier, value, priority: (identifier, value, priority),
}

_missing = set(RegistryVariant) - set(_CALL_SHAPES)
if _missing:  # pragma: no cover - import-time guard
    raise RuntimeError(f"registry call shapes missing for: {sorted(v.name for v in _missing)}")


def registration_arguments(
    variant: RegistryVariant,
    *,
    identifier: str | None,
    value: Any,
    priority: int | None,
) -> tuple[Any, ...]:
    """Return the ``register`` arguments for `variant`."""
    if variant.keyed and identifier is None:
        raise ValueError(f"{variant.name} registrations require an identifier")
    if variant.prioritized and priority is None:
        raise ValueError(f"{variant.name} registrations require a priority")
    return _CALL_SHAPES[variant](identifier, value, priority)
