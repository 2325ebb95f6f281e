# registrar/metadata/__init__.py
"""Public metadata API: capability mix-ins, metadata decorators, readers."""

from .attributes import (
    METADATA_ATTR,
    IdentityPrioritizedService,
    IdentityService,
    IdentityServiceAttribute,
    Metadata,
    MetadataDeclaration,
    PrioritizedService,
    PrioritizedServiceAttribute,
    Service,
    ServiceAttribute,
    Target,
    declarations_of,
    declare,
)
from .capabilities import Capability, capabilities_of, satisfies
from .exceptions import (
    DuplicateMetadataError,
    MetadataError,
    MetadataTargetError,
    MissingCapabilityError,
)
from .reader import DeclaredMetadataReader, DeclaredMethod, MetadataReader

__all__ = [
    # Types
    "Metadata", "MetadataDeclaration", "Target", "Capability", "DeclaredMethod",
    "Service", "IdentityService", "PrioritizedService", "IdentityPrioritizedService",
    # Capability mix-ins
    "ServiceAttribute", "IdentityServiceAttribute", "PrioritizedServiceAttribute",
    # Readers
    "MetadataReader", "DeclaredMetadataReader",
    # Helpers
    "METADATA_ATTR", "declare", "declarations_of", "capabilities_of", "satisfies",
    # Errors
    "MetadataError", "DuplicateMetadataError", "MetadataTargetError", "MissingCapabilityError",
]
