"""Registration records produced by registry passes.

Passes never call registries directly. Each accepted candidate becomes an
immutable :class:`ResolvedRegistration`; once the whole pass succeeded the
records are turned into ``register`` calls on the registry definition.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from registrar.container.definitions import MethodCall

from .variants import RegistryVariant, registration_arguments


@dataclass(frozen=True, slots=True)
class ResolvedRegistration:
    """Immutable registration payload."""

    variant: RegistryVariant
    value: Any
    identifier: str | None = None
    priority: int | None = None
    source: str = ""
    component: Any = None
    method: str | None = None

    @property
    def arguments(self) -> tuple[Any, ...]:
        return registration_arguments(
            self.variant,
            identifier=self.identifier,
            value=self.value,
            priority=self.priority,
        )

    def as_call(self) -> MethodCall:
        return MethodCall("register", self.arguments)


__all__ = ["ResolvedRegistration"]
