# registrar/metadata/attributes.py
"""
Declarative capability metadata.

A metadata instance is a class-based decorator: applying it records a
:class:`MetadataDeclaration` on the decorated class or function. Nothing is
registered at decoration time; registry passes read the declarations later,
once, while the container is being built.

Usage
-----
    class CommandHandler(IdentityService):
        ...

    @CommandHandler(identifier="orders")
    class OrderHandlers:

        @CommandHandler("create")
        def create(self, command: CreateOrder) -> None: ...

Capabilities
------------
Capabilities are nominal mix-ins. A metadata type satisfies a capability when it
inherits the corresponding mix-in:

  • ``ServiceAttribute``            - base capability required by every registry
  • ``IdentityServiceAttribute``    - carries an optional ``identifier``
  • ``PrioritizedServiceAttribute`` - carries a ``priority``

A metadata type inheriting none of them is still a valid declaration; it just
cannot feed any registry.
"""

from __future__ import annotations

import enum
import inspect
import logging
from dataclasses import dataclass
from typing import Any, ClassVar, TypeVar

from .exceptions import MetadataError

logger = logging.getLogger(__name__)

__all__ = [
    "METADATA_ATTR",
    "Target",
    "MetadataDeclaration",
    "ServiceAttribute",
    "IdentityServiceAttribute",
    "PrioritizedServiceAttribute",
    "Metadata",
    "Service",
    "IdentityService",
    "PrioritizedService",
    "IdentityPrioritizedService",
    "declare",
    "declarations_of",
]

METADATA_ATTR = "__registrar_metadata__"

T = TypeVar("T")


class Target(enum.Flag):
    """Where a metadata declaration may be (or was) applied."""

    CLASS = enum.auto()
    METHOD = enum.auto()
    ANY = CLASS | METHOD


@dataclass(frozen=True, slots=True)
class MetadataDeclaration:
    """One recorded application of a metadata instance."""

    metadata: Any
    target: Target

    @property
    def name(self) -> str:
        return type(self.metadata).__name__


# ---------------------------------------------------------------------------
# Capability mix-ins
# ---------------------------------------------------------------------------

class ServiceAttribute:
    """Base capability: the declaring component is a service for some registry."""


class IdentityServiceAttribute(ServiceAttribute):
    """Capability for metadata carrying an optional identifier."""

    identifier: str | None

    def has_identifier(self) -> bool:
        return getattr(self, "identifier", None) is not None

    def check_identifier(self) -> None:
        """Reject blank identifiers; omit the identifier instead."""
        identifier = getattr(self, "identifier", None)
        if identifier is not None and not str(identifier).strip():
            raise MetadataError(
                f"#[{type(self).__name__}] identifier must not be empty; omit it to derive one",
                metadata=self,
            )

    def get_identifier(self) -> str:
        if not self.has_identifier():
            raise ValueError(f"{type(self).__name__} does not carry an identifier")
        return str(self.identifier)


class PrioritizedServiceAttribute(ServiceAttribute):
    """Capability for metadata carrying an integer priority."""

    priority: int

    def get_priority(self) -> int:
        return int(getattr(self, "priority", 0))


# ---------------------------------------------------------------------------
# Declaration helpers
# ---------------------------------------------------------------------------

def _declaration_site(obj: Any) -> tuple[Target, Any]:
    """Return the target kind and the object holding declarations for `obj`."""
    if inspect.isclass(obj):
        return Target.CLASS, obj
    if isinstance(obj, (staticmethod, classmethod)):
        return Target.METHOD, obj.__func__
    if inspect.isfunction(obj):
        return Target.METHOD, obj
    raise TypeError(
        f"metadata can only decorate classes or functions (got {type(obj).__name__})"
    )


def declarations_of(obj: Any) -> tuple[MetadataDeclaration, ...]:
    """Return the declarations recorded directly on `obj`.

    Class declarations are read from the class's own namespace only, so a
    subclass does not inherit its parent's declarations.
    """
    if isinstance(obj, (staticmethod, classmethod)):
        obj = obj.__func__
    namespace = vars(obj) if hasattr(obj, "__dict__") else {}
    return tuple(namespace.get(METADATA_ATTR, ()))


def declare(obj: T, metadata: Any, *, target: Target | None = None) -> T:
    """Record `metadata` on `obj`.

    `target` defaults to where `obj` actually is (class or function). Passing an
    explicit target is meant for declaration sources other than decorators.
    """
    actual, holder = _declaration_site(obj)
    declarations = vars(holder).get(METADATA_ATTR)
    if declarations is None:
        declarations = []
        setattr(holder, METADATA_ATTR, declarations)
    declarations.append(MetadataDeclaration(metadata=metadata, target=target or actual))
    logger.debug(
        "declared #[%s] on %s",
        type(metadata).__name__,
        getattr(holder, "__qualname__", holder),
    )
    return obj


# ---------------------------------------------------------------------------
# Concrete metadata types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Metadata:
    """Base for metadata types usable as decorators.

    ``targets`` lists where declarations of this type are allowed. It is checked
    by the registry passes, not at decoration time.
    """

    targets: ClassVar[Target] = Target.ANY

    def __call__(self, obj: T) -> T:
        return declare(obj, self)


@dataclass(frozen=True)
class Service(Metadata, ServiceAttribute):
    """Plain service declaration."""


@dataclass(frozen=True)
class IdentityService(Metadata, IdentityServiceAttribute):
    """Service declaration with an optional identifier."""

    identifier: str | None = None

    def __post_init__(self) -> None:
        self.check_identifier()


@dataclass(frozen=True)
class PrioritizedService(Metadata, PrioritizedServiceAttribute):
    """Service declaration with a priority (higher is consumed first)."""

    priority: int = 0


@dataclass(frozen=True)
class IdentityPrioritizedService(Metadata, IdentityServiceAttribute, PrioritizedServiceAttribute):
    """Service declaration with an optional identifier and a priority."""

    identifier: str | None = None
    priority: int = 0

    def __post_init__(self) -> None:
        self.check_identifier()
