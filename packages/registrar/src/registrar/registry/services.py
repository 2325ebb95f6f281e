# registrar/registry/services.py
"""Concrete registries, one per registry variant.

Priority convention: higher priority values are consumed first. Entries with
equal priority keep their registration order (Python's sort is stable).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, TypeVar

from asgiref.sync import sync_to_async

from .base import BaseRegistry
from .exceptions import (
    RegistryCollisionError,
    RegistryDuplicateError,
    RegistryLookupError,
    RegistryTypeError,
)
from .interfaces import (
    IdentityPrioritizedServiceRegistryInterface,
    IdentityServiceRegistryInterface,
    PrioritizedServiceRegistryInterface,
    ServiceRegistryInterface,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

__all__ = [
    "PrioritizedEntry",
    "ServiceRegistry",
    "IdentityServiceRegistry",
    "CallableRegistry",
    "PrioritizedServiceRegistry",
    "IdentityPrioritizedServiceRegistry",
    "IdentitySinglePrioritizedServiceRegistry",
]


@dataclass(frozen=True, slots=True)
class PrioritizedEntry(Generic[T]):
    service: T
    priority: int


def _by_priority(entries: list[PrioritizedEntry[T]]) -> list[PrioritizedEntry[T]]:
    return sorted(entries, key=lambda e: e.priority, reverse=True)


# ---------------------------------------------------------------------------
# Plain
# ---------------------------------------------------------------------------

class ServiceRegistry(BaseRegistry[T], ServiceRegistryInterface):
    """Ordered collection of services."""

    def __init__(self, interface: type | None = None) -> None:
        super().__init__(interface)
        self._store: list[T] = []

    def register(self, service: T) -> None:
        self._check_service(service)
        with self._lock:
            self._check_writable()
            self._store.append(service)

    def all(self) -> tuple[T, ...]:
        with self._lock:
            return tuple(self._store)

    async def aall(self) -> tuple[T, ...]:
        """Async wrapper around `all`."""
        return await sync_to_async(self.all)()

    def _count(self) -> int:
        return len(self._store)

    def __iter__(self) -> Iterator[T]:
        return iter(self.all())

    def __contains__(self, service: object) -> bool:
        with self._lock:
            return service in self._store


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------

class IdentityServiceRegistry(BaseRegistry[T], IdentityServiceRegistryInterface):
    """Services keyed by a unique string identifier."""

    def __init__(self, interface: type | None = None) -> None:
        super().__init__(interface)
        self._store: dict[str, T] = {}

    def register(self, identifier: str, service: T, *, strict: bool = True) -> None:
        """
        Registers `service` under `identifier`.

        Registering the very same object twice under one identifier raises
        `RegistryDuplicateError` in strict mode and is ignored otherwise. A
        different object under an existing identifier always raises
        `RegistryCollisionError`.
        """
        key = str(identifier)
        self._check_service(service)
        with self._lock:
            self._check_writable()
            if key in self._store:
                if self._store[key] is service:
                    if strict:
                        raise RegistryDuplicateError(f"Service already registered: {key}")
                    logger.debug("Duplicate registration ignored: %s", key)
                    return
                raise RegistryCollisionError(
                    f"Identifier {key!r} already registered to {self._store[key]!r}; "
                    f"cannot register {service!r}"
                )
            self._store[key] = service

    # --- retrieval ---

    def get(self, identifier: str) -> T:
        """
        Retrieve the service registered under `identifier`.

        :raises RegistryLookupError: If nothing is registered under `identifier`.
        """
        with self._lock:
            try:
                return self._store[str(identifier)]
            except KeyError as err:
                raise RegistryLookupError(
                    f"Service with identifier {identifier!r} not found or not registered"
                ) from err

    async def aget(self, identifier: str) -> T:
        """
        Asynchronously retrieve the service registered under `identifier`.

        This is a thin async wrapper around `get`.
        """
        return await sync_to_async(self.get)(identifier)

    def try_get(self, identifier: str) -> T | None:
        try:
            return self.get(identifier)
        except RegistryLookupError:
            return None

    def has(self, identifier: str) -> bool:
        with self._lock:
            return str(identifier) in self._store

    def keys(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._store)

    def all(self) -> dict[str, T]:
        with self._lock:
            return dict(self._store)

    async def aall(self) -> dict[str, T]:
        """Async wrapper around `all`."""
        return await sync_to_async(self.all)()

    def _count(self) -> int:
        return len(self._store)

    def __contains__(self, identifier: object) -> bool:
        return self.has(str(identifier))


class CallableRegistry(IdentityServiceRegistry[Callable[..., Any]]):
    """Identity registry whose values are invocable units (e.g. command handlers)."""

    def _check_service(self, service: Any) -> None:
        if not callable(service):
            raise RegistryTypeError(f"{service!r} is not callable")

    def dispatch(self, identifier: str, /, *args: Any, **kwargs: Any) -> Any:
        """Invoke the callable registered under `identifier`."""
        return self.get(identifier)(*args, **kwargs)

    async def adispatch(self, identifier: str, /, *args: Any, **kwargs: Any) -> Any:
        """Async wrapper around `dispatch`."""
        return await sync_to_async(self.dispatch)(identifier, *args, **kwargs)


# ---------------------------------------------------------------------------
# Prioritized
# ---------------------------------------------------------------------------

class PrioritizedServiceRegistry(BaseRegistry[T], PrioritizedServiceRegistryInterface):
    """Services consumed by descending priority."""

    def __init__(self, interface: type | None = None) -> None:
        super().__init__(interface)
        self._entries: list[PrioritizedEntry[T]] = []

    def register(self, service: T, priority: int = 0) -> None:
        self._check_service(service)
        with self._lock:
            self._check_writable()
            self._entries.append(PrioritizedEntry(service=service, priority=int(priority)))

    def entries(self) -> tuple[PrioritizedEntry[T], ...]:
        with self._lock:
            return tuple(_by_priority(self._entries))

    def all(self) -> tuple[T, ...]:
        return tuple(e.service for e in self.entries())

    async def aall(self) -> tuple[T, ...]:
        """Async wrapper around `all`."""
        return await sync_to_async(self.all)()

    def _count(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        return iter(self.all())


# ---------------------------------------------------------------------------
# Identity + Prioritized
# ---------------------------------------------------------------------------

class IdentityPrioritizedServiceRegistry(BaseRegistry[T], IdentityPrioritizedServiceRegistryInterface):
    """Several services per identifier, each group consumed by descending priority."""

    def __init__(self, interface: type | None = None) -> None:
        super().__init__(interface)
        self._store: dict[str, list[PrioritizedEntry[T]]] = {}

    def register(self, identifier: str, service: T, priority: int = 0) -> None:
        self._check_service(service)
        with self._lock:
            self._check_writable()
            self._store.setdefault(str(identifier), []).append(
                PrioritizedEntry(service=service, priority=int(priority))
            )

    def get(self, identifier: str) -> tuple[T, ...]:
        with self._lock:
            try:
                entries = self._store[str(identifier)]
            except KeyError as err:
                raise RegistryLookupError(
                    f"Service with identifier {identifier!r} not found or not registered"
                ) from err
            return tuple(e.service for e in _by_priority(entries))

    async def aget(self, identifier: str) -> tuple[T, ...]:
        return await sync_to_async(self.get)(identifier)

    def has(self, identifier: str) -> bool:
        with self._lock:
            return str(identifier) in self._store

    def keys(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._store)

    def all(self) -> dict[str, tuple[T, ...]]:
        return {key: self.get(key) for key in self.keys()}

    async def aall(self) -> dict[str, tuple[T, ...]]:
        return await sync_to_async(self.all)()

    def _count(self) -> int:
        return sum(len(v) for v in self._store.values())

    def __contains__(self, identifier: object) -> bool:
        return self.has(str(identifier))


class IdentitySinglePrioritizedServiceRegistry(BaseRegistry[T], IdentityPrioritizedServiceRegistryInterface):
    """One service per identifier: the highest priority wins, ties keep the first."""

    def __init__(self, interface: type | None = None) -> None:
        super().__init__(interface)
        self._store: dict[str, PrioritizedEntry[T]] = {}

    def register(self, identifier: str, service: T, priority: int = 0) -> None:
        key = str(identifier)
        self._check_service(service)
        with self._lock:
            self._check_writable()
            current = self._store.get(key)
            if current is not None and current.priority >= int(priority):
                logger.debug(
                    "Kept %r for %s (priority %d >= %d)", current.service, key, current.priority, priority
                )
                return
            self._store[key] = PrioritizedEntry(service=service, priority=int(priority))

    def get(self, identifier: str) -> T:
        with self._lock:
            try:
                return self._store[str(identifier)].service
            except KeyError as err:
                raise RegistryLookupError(
                    f"Service with identifier {identifier!r} not found or not registered"
                ) from err

    async def aget(self, identifier: str) -> T:
        return await sync_to_async(self.get)(identifier)

    def has(self, identifier: str) -> bool:
        with self._lock:
            return str(identifier) in self._store

    def all(self) -> dict[str, T]:
        """Return services keyed by identifier, ordered by descending priority."""
        with self._lock:
            ordered = sorted(self._store.items(), key=lambda kv: kv[1].priority, reverse=True)
            return {key: entry.service for key, entry in ordered}

    async def aall(self) -> dict[str, T]:
        return await sync_to_async(self.all)()

    def _count(self) -> int:
        return len(self._store)

    def __contains__(self, identifier: object) -> bool:
        return self.has(str(identifier))
