# registrar/passes/binding.py
"""Callable binding: a component method turned into one invocable unit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from registrar.container.definitions import Definition, Reference, Resolvable

if TYPE_CHECKING:
    from registrar.container import Container

__all__ = ["CallableBinding", "callable_definition_id"]


@dataclass(frozen=True, slots=True)
class CallableBinding(Resolvable):
    """Binds a component (by reference) and one of its method names.

    The compiled container resolves the binding to the bound method of the
    shared component instance, so consumers only ever see a plain callable.
    """

    component: Reference
    method: str

    def resolve(self, container: "Container") -> Callable[..., Any]:
        return getattr(self.component.resolve(container), self.method)

    def as_definition(self) -> Definition:
        """A definition building the same bound method, for direct container access."""
        return Definition(factory=getattr, arguments=[self.component, self.method], autoconfigured=False)


def callable_definition_id(identifier: str, suffix: str = "callable") -> str:
    """Container id under which the callable registered as `identifier` is published."""
    normalized = identifier.replace("\\", ".").replace("/", ".")
    return f"{normalized}.{suffix}"
