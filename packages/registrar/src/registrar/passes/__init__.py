"""Registry build passes."""

from .base import AbstractMetadataRegistryPass
from .binding import CallableBinding, callable_definition_id
from .callable import CallableMetadataRegistryPass
from .service import ServiceMetadataRegistryPass
from .tagged import ReferenceRegistryPass, TaggedServiceRegistryPass

__all__ = [
    "AbstractMetadataRegistryPass",
    "ServiceMetadataRegistryPass",
    "CallableMetadataRegistryPass",
    "CallableBinding",
    "callable_definition_id",
    "TaggedServiceRegistryPass",
    "ReferenceRegistryPass",
]
