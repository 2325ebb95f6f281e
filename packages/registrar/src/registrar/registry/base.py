# registrar/registry/base.py


import logging
from threading import RLock
from typing import Any, Generic, TypeVar

from asgiref.sync import sync_to_async

from .exceptions import RegistryFrozenError, RegistryTypeError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseRegistry(Generic[T]):
    """Framework-agnostic, freezable store shared by every registry shape.

    Registries are written once by the container (replaying the registration
    calls collected by registry passes) and frozen right after. Reads are
    lock-protected so a built registry can be shared across threads.
    """

    def __init__(self, interface: type | None = None) -> None:
        self._interface = interface
        self._lock = RLock()
        self._frozen = False

    @property
    def interface(self) -> type | None:
        return self._interface

    def _check_writable(self) -> None:
        if self._frozen:
            raise RegistryFrozenError(f"{type(self).__name__} is frozen")

    def _check_service(self, service: Any) -> None:
        """Ensure `service` implements the registry interface, when one is set."""
        if self._interface is not None and not isinstance(service, self._interface):
            raise RegistryTypeError(
                f"{type(service).__module__}.{type(service).__qualname__} does not implement "
                f"{self._interface.__module__}.{self._interface.__qualname__}"
            )

    # --- counting ---

    def count(self) -> int:
        """Number of registered entries."""
        with self._lock:
            return self._count()

    async def acount(self) -> int:
        """Async wrapper around `count`."""
        return await sync_to_async(self.count)()

    def _count(self) -> int:  # pragma: no cover - overridden
        raise NotImplementedError

    def __len__(self) -> int:
        return self.count()

    # --- mutation / control ---

    def freeze(self) -> None:
        """
        Reject every later `register` call. Reads stay available.
        """
        with self._lock:
            self._frozen = True
        logger.debug("%s frozen with %d entries", type(self).__name__, self.count())

    async def afreeze(self) -> None:
        """
        Async wrapper around `freeze`.
        """
        return await sync_to_async(self.freeze)()

    @property
    def frozen(self) -> bool:
        return self._frozen
