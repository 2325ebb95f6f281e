# registrar/identity/__init__.py
"""Public identifier-resolution API."""

from .exceptions import (
    CompoundIdentifierError,
    DuplicateIdentifierError,
    IdentifierError,
    IdentifierNotSpecifiedError,
    InvalidHandlerSignatureError,
)
from .first_parameter import FirstParameterIdentifierResolver
from .resolvers import (
    DEFAULT_SEPARATOR,
    CallableIdentifierStrategy,
    IdentifierResolver,
    ResolverLike,
    as_identifier_resolver,
    qualified_name,
    resolve_callable_identifier,
    resolve_class_identifier,
)

__all__ = [
    "DEFAULT_SEPARATOR",
    "CallableIdentifierStrategy",
    "FirstParameterIdentifierResolver",
    "IdentifierResolver",
    "ResolverLike",
    "as_identifier_resolver",
    "qualified_name",
    "resolve_callable_identifier",
    "resolve_class_identifier",
    "IdentifierError",
    "IdentifierNotSpecifiedError",
    "CompoundIdentifierError",
    "DuplicateIdentifierError",
    "InvalidHandlerSignatureError",
]
