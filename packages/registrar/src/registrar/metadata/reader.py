# registrar/metadata/reader.py
"""
Metadata reading.

The build passes never inspect decorated objects themselves; they go through a
:class:`MetadataReader`. The default :class:`DeclaredMetadataReader` reads the
declarations recorded by metadata decorators. Alternative readers (static
configuration, generated tables) only have to keep the cardinality contract:
any number of class declarations are *returned* (the pass rejects more than one),
and at most one declaration is returned per method.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Protocol, runtime_checkable

from .attributes import MetadataDeclaration, declarations_of

__all__ = ["DeclaredMethod", "MetadataReader", "DeclaredMetadataReader"]


@dataclass(frozen=True, slots=True)
class DeclaredMethod:
    """A method of a component class, as seen by a metadata reader."""

    name: str
    function: Callable[..., Any]
    owner: type
    binding: str = "instance"  # "instance" | "class" | "static"

    @property
    def qualname(self) -> str:
        return f"{self.owner.__module__}.{self.owner.__qualname__}.{self.name}"

    @property
    def is_static(self) -> bool:
        return self.binding == "static"


@runtime_checkable
class MetadataReader(Protocol):
    def read_class_metadata(self, component: type, kind: type) -> list[MetadataDeclaration]: ...

    def read_method_metadata(self, method: DeclaredMethod, kind: type) -> MetadataDeclaration | None: ...

    def list_methods_declaring(self, component: type, kind: type) -> list[DeclaredMethod]: ...


class DeclaredMetadataReader:
    """Reads declarations recorded by :mod:`registrar.metadata.attributes` decorators.

    Kind matching uses ``isinstance``: subclasses of `kind` match.
    """

    def read_class_metadata(self, component: type, kind: type) -> list[MetadataDeclaration]:
        return [d for d in declarations_of(component) if isinstance(d.metadata, kind)]

    def read_method_metadata(self, method: DeclaredMethod, kind: type) -> MetadataDeclaration | None:
        for declaration in declarations_of(method.function):
            if isinstance(declaration.metadata, kind):
                return declaration
        return None

    def list_methods_declaring(self, component: type, kind: type) -> list[DeclaredMethod]:
        """Return methods declaring `kind`, component class first, then its bases (MRO order)."""
        seen: set[str] = set()
        methods: list[DeclaredMethod] = []
        for owner in inspect.getmro(component):
            if owner is object:
                continue
            for name, raw in vars(owner).items():
                if name in seen:
                    continue
                seen.add(name)
                method = self._as_method(name, raw, owner)
                if method is None:
                    continue
                if self.read_method_metadata(method, kind) is not None:
                    methods.append(method)
        return methods

    @staticmethod
    def _as_method(name: str, raw: Any, owner: type) -> DeclaredMethod | None:
        if isinstance(raw, staticmethod):
            return DeclaredMethod(name=name, function=raw.__func__, owner=owner, binding="static")
        if isinstance(raw, classmethod):
            return DeclaredMethod(name=name, function=raw.__func__, owner=owner, binding="class")
        if inspect.isfunction(raw):
            return DeclaredMethod(name=name, function=raw, owner=owner)
        return None
