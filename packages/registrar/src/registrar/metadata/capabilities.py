# registrar/metadata/capabilities.py
"""Capability flags derived from metadata types."""

from __future__ import annotations

import enum
from typing import Any

from .attributes import IdentityServiceAttribute, PrioritizedServiceAttribute, ServiceAttribute

__all__ = ["Capability", "capabilities_of", "satisfies"]


class Capability(str, enum.Enum):
    SERVICE = "service"
    IDENTIFIABLE = "identifiable"
    PRIORITIZED = "prioritized"

    @property
    def interface(self) -> type:
        return _INTERFACES[self]

    @property
    def interface_name(self) -> str:
        iface = self.interface
        return f"{iface.__module__}.{iface.__qualname__}"


_INTERFACES: dict[Capability, type] = {
    Capability.SERVICE: ServiceAttribute,
    Capability.IDENTIFIABLE: IdentityServiceAttribute,
    Capability.PRIORITIZED: PrioritizedServiceAttribute,
}


def satisfies(metadata: Any, capability: Capability) -> bool:
    return isinstance(metadata, capability.interface)


def capabilities_of(metadata: Any) -> frozenset[Capability]:
    """Return every capability the metadata instance satisfies."""
    return frozenset(c for c in Capability if satisfies(metadata, c))
