# registrar/exceptions.py
"""Root exceptions shared by every registrar package."""

from __future__ import annotations

from typing import Any

__all__ = ["RegistrarError", "ConfigurationError"]


class RegistrarError(Exception): ...


class ConfigurationError(RegistrarError):
    """Raised while building registries when a declaration is invalid.

    Configuration errors are fatal to the build run that raised them. They carry
    enough context to locate the offending declaration.
    """

    def __init__(
        self,
        message: str,
        *,
        component: Any = None,
        method: str | None = None,
        metadata: Any = None,
    ) -> None:
        super().__init__(message)
        self.component = component
        self.method = method
        self.metadata = metadata
