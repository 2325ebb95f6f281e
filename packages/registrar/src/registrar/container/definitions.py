# registrar/container/definitions.py
"""Service definitions held by the container builder.

A :class:`Definition` describes how to build one service: the class (or
factory), constructor arguments, and method calls replayed on the instance
after construction. Registry passes append ``register`` calls to registry
definitions; the compiled container replays them in order.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable, Iterable

if TYPE_CHECKING:
    from .container import Container

__all__ = ["Resolvable", "Reference", "MethodCall", "Definition"]


class Resolvable(ABC):
    """A value the container replaces with something it builds."""

    __slots__ = ()

    @abstractmethod
    def resolve(self, container: "Container") -> Any: ...


@dataclass(frozen=True, slots=True)
class Reference(Resolvable):
    """Points at another service by id."""

    id: str

    def resolve(self, container: "Container") -> Any:
        return container.get(self.id)

    def __str__(self) -> str:  # pragma: no cover
        return f"@{self.id}"


@dataclass(frozen=True, slots=True)
class MethodCall:
    method: str
    arguments: tuple[Any, ...] = ()


@dataclass(eq=False)
class Definition:
    """How to build one service.

    ``autoconfigured`` marks the definition as eligible for metadata scanning.
    ``tags`` maps a tag name to the attribute mappings it was added with (a tag
    may be added more than once).
    """

    cls: type | None = None
    arguments: list[Any] = field(default_factory=list)
    calls: list[MethodCall] = field(default_factory=list)
    tags: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    autoconfigured: bool = True
    factory: Callable[..., Any] | None = None
    id: str | None = None

    def __post_init__(self) -> None:
        if self.cls is None and self.factory is None:
            raise ValueError("a definition needs a class or a factory")

    # --- tags ---

    def add_tag(self, name: str, **attributes: Any) -> "Definition":
        self.tags.setdefault(name, []).append(dict(attributes))
        return self

    def has_tag(self, name: str) -> bool:
        return name in self.tags

    def tag(self, name: str) -> list[dict[str, Any]]:
        return list(self.tags.get(name, ()))

    # --- calls ---

    def add_call(self, method: str, arguments: Iterable[Any] = ()) -> "Definition":
        self.calls.append(MethodCall(method, tuple(arguments)))
        return self

    def add_calls(self, calls: Iterable[MethodCall]) -> "Definition":
        self.calls.extend(calls)
        return self

    def copy(self) -> "Definition":
        return replace(
            self,
            arguments=list(self.arguments),
            calls=list(self.calls),
            tags={name: [dict(a) for a in attrs] for name, attrs in self.tags.items()},
        )

    @property
    def class_name(self) -> str:
        target = self.cls or self.factory
        return f"{target.__module__}.{target.__qualname__}"
