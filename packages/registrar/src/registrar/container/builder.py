# registrar/container/builder.py
"""Mutable container builder: the component source scanned by registry passes."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Protocol

from registrar.identity.resolvers import qualified_name
from registrar.tracing import build_span

from .container import Container
from .definitions import Definition
from .exceptions import DefinitionNotFoundError

logger = logging.getLogger(__name__)

__all__ = ["BuildPass", "ContainerBuilder"]


class BuildPass(Protocol):
    def process(self, builder: "ContainerBuilder") -> None: ...


class ContainerBuilder:
    """Collects definitions and build passes, then compiles a :class:`Container`.

    Definitions are kept in registration (discovery) order. ``compile()`` works
    on a copy of the definitions, so a failing pass leaves the builder untouched
    and compiling the same builder twice gives identical results.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, Definition] = {}
        self._passes: list[BuildPass] = []

    # --- definitions ---

    def register(
        self,
        cls: type,
        id: str | None = None,
        *,
        arguments: Iterable[Any] = (),
        tags: dict[str, dict[str, Any] | list[dict[str, Any]]] | None = None,
        autoconfigured: bool = True,
    ) -> Definition:
        """Define `cls` as a service; the id defaults to its qualified name."""
        definition = Definition(cls=cls, arguments=list(arguments), autoconfigured=autoconfigured)
        for name, attributes in (tags or {}).items():
            for attrs in attributes if isinstance(attributes, list) else [attributes]:
                definition.add_tag(name, **attrs)
        return self.set_definition(id or qualified_name(cls), definition)

    def set_definition(self, id: str, definition: Definition) -> Definition:
        definition.id = id
        self._definitions[id] = definition
        return definition

    def has_definition(self, id: str) -> bool:
        return id in self._definitions

    def get_definition(self, id: str) -> Definition:
        try:
            return self._definitions[id]
        except KeyError as err:
            raise DefinitionNotFoundError(f"No definition for service {id!r}") from err

    def definitions(self) -> list[Definition]:
        """Snapshot of all definitions, in discovery order."""
        return list(self._definitions.values())

    def is_eligible(self, definition: Definition) -> bool:
        return definition.autoconfigured

    def find_tagged(self, tag: str) -> dict[str, list[dict[str, Any]]]:
        return {
            id_: definition.tag(tag)
            for id_, definition in self._definitions.items()
            if definition.has_tag(tag)
        }

    # --- passes ---

    def add_pass(self, build_pass: BuildPass) -> BuildPass:
        self._passes.append(build_pass)
        return build_pass

    @property
    def passes(self) -> tuple[BuildPass, ...]:
        return tuple(self._passes)

    def copy(self) -> "ContainerBuilder":
        clone = type(self)()
        for id_, definition in self._definitions.items():
            clone.set_definition(id_, definition.copy())
        clone._passes = list(self._passes)
        return clone

    # --- compilation ---

    def process(self) -> "ContainerBuilder":
        """Run every pass against a copy of this builder and return the copy."""
        working = self.copy()
        for build_pass in working.passes:
            build_pass.process(working)
        return working

    def compile(self) -> Container:
        attrs = {
            "registrar.definitions": len(self._definitions),
            "registrar.passes": len(self._passes),
        }
        with build_span("registrar.compile", attributes=attrs):
            working = self.process()
            logger.info(
                "[CONTAINER] ✅ compiled %d definitions with %d passes",
                len(working._definitions),
                len(working._passes),
            )
            return Container({d.id: d for d in working.definitions()})
