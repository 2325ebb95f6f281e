# registrar/registry/interfaces.py
"""Registry capability interfaces.

A registry class declares its shape by inheriting one of these interfaces. The
variant catalog (:mod:`registrar.registry.variants`) maps them to call shapes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

__all__ = [
    "ServiceRegistryInterface",
    "IdentityServiceRegistryInterface",
    "PrioritizedServiceRegistryInterface",
    "IdentityPrioritizedServiceRegistryInterface",
]


class ServiceRegistryInterface(ABC):
    @abstractmethod
    def register(self, service: Any) -> None: ...

    @abstractmethod
    def all(self) -> Any: ...


class IdentityServiceRegistryInterface(ABC):
    @abstractmethod
    def register(self, identifier: str, service: Any) -> None: ...

    @abstractmethod
    def get(self, identifier: str) -> Any: ...

    @abstractmethod
    def has(self, identifier: str) -> bool: ...

    @abstractmethod
    def all(self) -> Any: ...


class PrioritizedServiceRegistryInterface(ABC):
    @abstractmethod
    def register(self, service: Any, priority: int = 0) -> None: ...

    @abstractmethod
    def all(self) -> Any: ...


class IdentityPrioritizedServiceRegistryInterface(ABC):
    @abstractmethod
    def register(self, identifier: str, service: Any, priority: int = 0) -> None: ...

    @abstractmethod
    def get(self, identifier: str) -> Any: ...

    @abstractmethod
    def has(self, identifier: str) -> bool: ...

    @abstractmethod
    def all(self) -> Any: ...
