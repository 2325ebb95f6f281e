# registrar/container/container.py
"""Compiled, read-only service container."""

from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Mapping

from registrar.registry.base import BaseRegistry

from .definitions import Definition, Resolvable
from .exceptions import CircularReferenceError, DefinitionNotFoundError

logger = logging.getLogger(__name__)


class Container:
    """Builds shared services on first access.

    Arguments and method-call arguments are resolved recursively: resolvable
    values (references, callable bindings) are replaced with what they point at.
    Registries are frozen once their registration calls have been replayed.
    """

    def __init__(self, definitions: Mapping[str, Definition]) -> None:
        self._definitions = dict(definitions)
        self._instances: dict[str, Any] = {}
        self._loading: list[str] = []
        self._lock = RLock()

    def has(self, id: str) -> bool:
        return id in self._definitions

    def ids(self) -> tuple[str, ...]:
        return tuple(self._definitions)

    def definition(self, id: str) -> Definition:
        try:
            return self._definitions[id]
        except KeyError as err:
            raise DefinitionNotFoundError(f"No definition for service {id!r}") from err

    def get(self, id: str) -> Any:
        with self._lock:
            if id in self._instances:
                return self._instances[id]
            definition = self.definition(id)
            if id in self._loading:
                chain = " -> ".join([*self._loading, id])
                raise CircularReferenceError(f"Circular reference detected: {chain}")
            self._loading.append(id)
            try:
                instance = self._build(definition)
            finally:
                self._loading.pop()
            self._instances[id] = instance
            return instance

    def _build(self, definition: Definition) -> Any:
        arguments = [self.resolve(a) for a in definition.arguments]
        target = definition.factory or definition.cls
        instance = target(*arguments)

        for call in definition.calls:
            getattr(instance, call.method)(*(self.resolve(a) for a in call.arguments))

        if isinstance(instance, BaseRegistry):
            instance.freeze()
        logger.debug("built %s (%d calls)", definition.id, len(definition.calls))
        return instance

    def resolve(self, value: Any) -> Any:
        if isinstance(value, Resolvable):
            return value.resolve(self)
        if isinstance(value, list):
            return [self.resolve(v) for v in value]
        if isinstance(value, tuple):
            return tuple(self.resolve(v) for v in value)
        if isinstance(value, dict):
            return {k: self.resolve(v) for k, v in value.items()}
        return value
