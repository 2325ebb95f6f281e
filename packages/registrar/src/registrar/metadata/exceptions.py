# registrar/metadata/exceptions.py
"""Metadata declaration errors."""

from registrar.exceptions import ConfigurationError


class MetadataError(ConfigurationError): ...


class DuplicateMetadataError(MetadataError):
    """Raised when a component declares the targeted metadata kind more than once."""


class MetadataTargetError(MetadataError):
    """Raised when a declaration was applied to the wrong kind of target."""


class MissingCapabilityError(MetadataError):
    """Raised when metadata lacks a capability required by the bound registry."""
