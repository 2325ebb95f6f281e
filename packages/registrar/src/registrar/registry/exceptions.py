# registrar/registry/exceptions.py
"""Registry exceptions"""
from registrar.exceptions import ConfigurationError, RegistrarError


# ----------------------------------------------------------------------------
# Registry errors
# ----------------------------------------------------------------------------
class RegistryError(RegistrarError): ...


class RegistryDuplicateError(RegistryError): ...


class RegistryCollisionError(RegistryError): ...


class RegistryLookupError(RegistryError, KeyError): ...


class RegistryFrozenError(RuntimeError, RegistryError): ...


class RegistryTypeError(RegistryError, TypeError): ...


# ----------------------------------------------------------------------------
# Build-time errors
# ----------------------------------------------------------------------------
class UnsupportedRegistryError(ConfigurationError):
    """Raised when a registry class implements none of the known registry interfaces."""
