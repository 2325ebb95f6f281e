# registrar/passes/service.py
"""Class-level registration: one component, one registry entry."""

from __future__ import annotations

import logging
from typing import Any

from registrar.container.builder import ContainerBuilder
from registrar.container.definitions import Definition, Reference
from registrar.identity.resolvers import resolve_class_identifier
from registrar.registry.records import ResolvedRegistration
from registrar.registry.variants import RegistryVariant

from .base import AbstractMetadataRegistryPass

logger = logging.getLogger(__name__)

__all__ = ("ServiceMetadataRegistryPass",)


class ServiceMetadataRegistryPass(AbstractMetadataRegistryPass):
    """
    Registers every component declaring `class_metadata` as a service.

    Usage
    -----
        class Exporter(IdentityPrioritizedService): ...

        @Exporter(identifier="csv", priority=10)
        class CsvExporter: ...

        builder.add_pass(
            ServiceMetadataRegistryPass("exporters", IdentitySinglePrioritizedServiceRegistry, Exporter)
        )

    The registered value is a reference to the component's own definition, so
    the registry receives the shared component instance.
    """

    log_category = "services"

    def process_component(
        self,
        builder: ContainerBuilder,
        definition: Definition,
        class_metadata: Any,
        variant: RegistryVariant,
    ) -> list[ResolvedRegistration]:
        component = definition.cls
        self.validate_capabilities(class_metadata, variant, component=component)

        identifier = resolve_class_identifier(component, class_metadata)
        priority = self.resolve_priority(variant, class_metadata, component=component)

        logger.debug("[%s] %s -> `%s`", self.log_category.upper(), definition.id, identifier)
        return [
            ResolvedRegistration(
                variant=variant,
                value=Reference(definition.id),
                identifier=identifier,
                priority=priority,
                source=definition.id,
                component=component,
            )
        ]
