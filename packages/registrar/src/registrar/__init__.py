# registrar/__init__.py
"""Metadata-driven registry wiring.

Components declare what they provide with metadata decorators; registry passes
scan a :class:`~registrar.container.ContainerBuilder` once at build time and
append registrations to the matching registry definitions.

    from registrar import ContainerBuilder, IdentityService, IdentityServiceRegistry
    from registrar.passes import ServiceMetadataRegistryPass

    class Exporter(IdentityService): ...

    @Exporter(identifier="csv")
    class CsvExporter: ...

    builder = ContainerBuilder()
    builder.register(CsvExporter)
    builder.add_pass(ServiceMetadataRegistryPass("exporters", IdentityServiceRegistry, Exporter))
    container = builder.compile()
    container.get("exporters").get("csv")
"""

from .container import Container, ContainerBuilder, Definition, MethodCall, Reference
from .exceptions import ConfigurationError, RegistrarError
from .metadata import (
    IdentityPrioritizedService,
    IdentityService,
    PrioritizedService,
    Service,
    Target,
)
from .registry import (
    CallableRegistry,
    IdentityPrioritizedServiceRegistry,
    IdentityServiceRegistry,
    IdentitySinglePrioritizedServiceRegistry,
    PrioritizedServiceRegistry,
    RegistryVariant,
    ServiceRegistry,
)

__all__ = [
    # container
    "Container",
    "ContainerBuilder",
    "Definition",
    "MethodCall",
    "Reference",
    # errors
    "ConfigurationError",
    "RegistrarError",
    # metadata
    "Service",
    "IdentityService",
    "PrioritizedService",
    "IdentityPrioritizedService",
    "Target",
    # registries
    "RegistryVariant",
    "ServiceRegistry",
    "IdentityServiceRegistry",
    "CallableRegistry",
    "PrioritizedServiceRegistry",
    "IdentityPrioritizedServiceRegistry",
    "IdentitySinglePrioritizedServiceRegistry",
]
