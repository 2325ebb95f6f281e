# registrar/container/exceptions.py
"""Container exceptions"""
from registrar.exceptions import ConfigurationError, RegistrarError


class ContainerError(RegistrarError): ...


class DefinitionNotFoundError(ContainerError, KeyError): ...


class CircularReferenceError(ContainerError): ...


class DefinitionCollisionError(ContainerError, ConfigurationError):
    """Raised when a build pass would replace a definition it does not own."""
