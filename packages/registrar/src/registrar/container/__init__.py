"""Minimal dependency-injection container hosting the registry passes."""

from .builder import BuildPass, ContainerBuilder
from .container import Container
from .definitions import Definition, MethodCall, Reference, Resolvable
from .exceptions import (
    CircularReferenceError,
    ContainerError,
    DefinitionCollisionError,
    DefinitionNotFoundError,
)

__all__ = [
    "BuildPass",
    "Container",
    "ContainerBuilder",
    "Definition",
    "MethodCall",
    "Reference",
    "Resolvable",
    "ContainerError",
    "DefinitionNotFoundError",
    "DefinitionCollisionError",
    "CircularReferenceError",
]
