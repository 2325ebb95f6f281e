# registrar/identity/resolvers.py
"""
Identifier resolution.

Class-level registrations
-------------------------
  1. explicit identifier on *Identifiable* class metadata → used verbatim
  2. otherwise → the component's qualified name (``module.QualName``)

Method-level (callable) registrations
-------------------------------------
  1. a configured resolver wins outright; its result is coerced to ``str``
  2. base = class metadata identifier (if *Identifiable* and present)
  3. method metadata not *Identifiable* → base
  4. compound mode and no method identifier → ``CompoundIdentifierError``
  5. method identifier and base → ``base + separator + method identifier``
  6. method identifier only → method identifier
  7. nothing → ``None``; the build pass raises ``IdentifierNotSpecifiedError``

This module must not import container or pass code.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, Union, runtime_checkable

from registrar.metadata.attributes import IdentityServiceAttribute
from registrar.metadata.reader import DeclaredMethod

from .exceptions import CompoundIdentifierError

__all__ = [
    "DEFAULT_SEPARATOR",
    "IdentifierResolver",
    "ResolverLike",
    "CallableIdentifierStrategy",
    "as_identifier_resolver",
    "qualified_name",
    "resolve_class_identifier",
    "resolve_callable_identifier",
]

DEFAULT_SEPARATOR = ":"


# ------------------------- helpers (pure) -------------------------

def qualified_name(obj: Any) -> str:
    """Return ``module.QualName`` for a class or function."""
    return f"{obj.__module__}.{obj.__qualname__}"


def _explicit_identifier(metadata: Any) -> str | None:
    if isinstance(metadata, IdentityServiceAttribute) and metadata.has_identifier():
        return metadata.get_identifier()
    return None


def resolve_class_identifier(component: type, metadata: Any) -> str:
    """Identifier for a class-level registration. Never fails."""
    return _explicit_identifier(metadata) or qualified_name(component)


def resolve_callable_identifier(
    class_metadata: Any,
    method_metadata: Any,
    *,
    compound: bool = False,
    separator: str = DEFAULT_SEPARATOR,
) -> str | None:
    """Built-in identifier rules for a method-level registration (steps 2-7)."""
    base = _explicit_identifier(class_metadata)

    if not isinstance(method_metadata, IdentityServiceAttribute):
        return base

    if compound and not method_metadata.has_identifier():
        raise CompoundIdentifierError(
            f"Metadata #[{type(method_metadata).__name__}] should have an identifier, because no "
            f"identifier resolver is configured for this registry and compound identifiers are enabled",
            metadata=method_metadata,
        )

    if not method_metadata.has_identifier():
        return base

    method_identifier = method_metadata.get_identifier()
    if base is not None:
        return separator.join((base, method_identifier))
    return method_identifier


# ------------------------- pluggable resolvers -------------------------

@runtime_checkable
class IdentifierResolver(Protocol):
    def resolve(
        self,
        component: type,
        method: DeclaredMethod,
        method_metadata: Any,
        class_metadata: Any,
    ) -> str: ...


ResolverLike = Union[IdentifierResolver, Callable[[type, DeclaredMethod, Any, Any], Any]]
ResolveFn = Callable[[type, DeclaredMethod, Any, Any], str]


def as_identifier_resolver(resolver: ResolverLike | None) -> ResolveFn | None:
    """Normalize a resolver object or a plain callable into one call signature.

    This is the only place that distinguishes the two forms.
    """
    if resolver is None:
        return None
    if isinstance(resolver, type):
        raise TypeError(f"identifier resolver must be an instance or a function, got class {resolver!r}")

    resolve = getattr(resolver, "resolve", None)
    fn = resolve if callable(resolve) else resolver
    if not callable(fn):
        raise TypeError(f"{resolver!r} is neither callable nor implements resolve()")

    def _resolve(component: type, method: DeclaredMethod, method_metadata: Any, class_metadata: Any) -> str:
        return str(fn(component, method, method_metadata, class_metadata))

    return _resolve


class CallableIdentifierStrategy:
    """Resolves identifiers for method-level registrations.

    A configured resolver takes absolute precedence and is invoked once per
    candidate; otherwise the built-in metadata rules apply.
    """

    def __init__(
        self,
        resolver: ResolverLike | None = None,
        *,
        compound: bool = False,
        separator: str = DEFAULT_SEPARATOR,
    ) -> None:
        self._resolve = as_identifier_resolver(resolver)
        self.compound = compound
        self.separator = separator

    @property
    def has_resolver(self) -> bool:
        return self._resolve is not None

    def resolve(
        self,
        component: type,
        method: DeclaredMethod,
        method_metadata: Any,
        class_metadata: Any,
    ) -> str | None:
        if self._resolve is not None:
            return self._resolve(component, method, method_metadata, class_metadata)
        return resolve_callable_identifier(
            class_metadata,
            method_metadata,
            compound=self.compound,
            separator=self.separator,
        )
