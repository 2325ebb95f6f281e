# registrar/passes/callable.py
"""Method-level registration: each qualifying method becomes a registry entry."""

from __future__ import annotations

import logging
from typing import Any

from registrar.conf.defaults import DEFAULTS
from registrar.container.builder import ContainerBuilder
from registrar.container.definitions import Definition, Reference
from registrar.container.exceptions import DefinitionCollisionError
from registrar.identity.exceptions import IdentifierNotSpecifiedError
from registrar.identity.resolvers import CallableIdentifierStrategy, ResolverLike, qualified_name
from registrar.metadata.attributes import Target
from registrar.metadata.capabilities import Capability
from registrar.metadata.exceptions import MetadataTargetError
from registrar.metadata.reader import DeclaredMethod, MetadataReader
from registrar.registry.records import ResolvedRegistration
from registrar.registry.variants import RegistryVariant

from .base import AbstractMetadataRegistryPass
from .binding import CallableBinding, callable_definition_id

logger = logging.getLogger(__name__)

__all__ = ("CallableMetadataRegistryPass",)


class CallableMetadataRegistryPass(AbstractMetadataRegistryPass):
    """
    Registers methods of components declaring `class_metadata`.

    Usage
    -----
        class CommandHandler(IdentityService): ...

        @CommandHandler("orders")
        class OrderHandlers:
            @CommandHandler("create")
            def create(self, command): ...

        builder.add_pass(
            CallableMetadataRegistryPass("commands", CallableRegistry, CommandHandler, CommandHandler)
        )
        # -> "orders:create" bound to OrderHandlers().create

    The class metadata must satisfy the registry's capabilities, except that the
    priority of prioritized registries may come from the method metadata.
    """

    log_category = "callables"

    def __init__(
        self,
        definition_id: str,
        registry_class: type,
        class_metadata: type,
        method_metadata: type,
        *,
        interface: type | None = None,
        compound_identifier: bool = False,
        identifier_resolver: ResolverLike | None = None,
        separator: str = DEFAULTS["COMPOUND_IDENTIFIER_SEPARATOR"],
        definition_suffix: str = DEFAULTS["CALLABLE_DEFINITION_SUFFIX"],
        reader: MetadataReader | None = None,
        ignore_tag: str = DEFAULTS["IGNORE_METADATA_TAG"],
    ) -> None:
        super().__init__(
            definition_id,
            registry_class,
            class_metadata,
            interface=interface,
            reader=reader,
            ignore_tag=ignore_tag,
        )
        self.method_metadata = method_metadata
        self.definition_suffix = definition_suffix
        self.identifiers = CallableIdentifierStrategy(
            identifier_resolver,
            compound=compound_identifier,
            separator=separator,
        )

    @property
    def compound_identifier(self) -> bool:
        return self.identifiers.compound

    def process_component(
        self,
        builder: ContainerBuilder,
        definition: Definition,
        class_metadata: Any,
        variant: RegistryVariant,
    ) -> list[ResolvedRegistration]:
        component = definition.cls
        self.validate_capabilities(class_metadata, variant, component=component, exclude=(Capability.PRIORITIZED,))

        registrations: list[ResolvedRegistration] = []
        for method in self.reader.list_methods_declaring(component, self.method_metadata):
            method_metadata = self.extract_method_metadata(component, method)
            identifier = self.resolve_identifier(component, method, method_metadata, class_metadata)
            priority = self.resolve_priority(
                variant, class_metadata, method_metadata, component=component, method=method.name
            )

            binding = CallableBinding(component=Reference(definition.id), method=method.name)
            logger.debug("[%s] %s.%s -> `%s`", self.log_category.upper(), definition.id, method.name, identifier)
            registrations.append(
                ResolvedRegistration(
                    variant=variant,
                    value=binding,
                    identifier=identifier,
                    priority=priority,
                    source=f"{definition.id}.{method.name}",
                    component=component,
                    method=method.name,
                )
            )
        return registrations

    def check_registrations(
        self,
        builder: ContainerBuilder,
        registry_definition: Definition,
        registrations: list[ResolvedRegistration],
    ) -> None:
        super().check_registrations(builder, registry_definition, registrations)
        for definition_id, registration in self._published(registrations).items():
            if builder.has_definition(definition_id):
                raise DefinitionCollisionError(
                    f'Callable of "{qualified_name(registration.component)}.{registration.method}" would replace '
                    f"the existing definition `{definition_id}`",
                    component=registration.component,
                    method=registration.method,
                )

    def publish(self, builder: ContainerBuilder, registrations: list[ResolvedRegistration]) -> None:
        """Expose each bound callable as its own container definition.

        Identifiers shared by several callables (prioritized registries) get no
        definition of their own; reach them through the registry instead.
        """
        for definition_id, registration in self._published(registrations).items():
            builder.set_definition(definition_id, registration.value.as_definition())

    def _published(self, registrations: list[ResolvedRegistration]) -> dict[str, ResolvedRegistration]:
        grouped: dict[str, list[ResolvedRegistration]] = {}
        for registration in registrations:
            definition_id = callable_definition_id(registration.identifier, self.definition_suffix)
            grouped.setdefault(definition_id, []).append(registration)

        published: dict[str, ResolvedRegistration] = {}
        for definition_id, group in grouped.items():
            if len(group) > 1:
                logger.debug(
                    "[%s] `%s` is shared by %s; not published",
                    self.log_category.upper(),
                    definition_id,
                    ", ".join(r.source for r in group),
                )
                continue
            published[definition_id] = group[0]
        return published

    def extract_method_metadata(self, component: type, method: DeclaredMethod) -> Any:
        declaration = self.reader.read_method_metadata(method, self.method_metadata)
        if declaration is None:
            raise MetadataTargetError(
                f'Method "{qualified_name(component)}.{method.name}" was listed for '
                f"#[{self.method_metadata.__name__}] but declares none",
                component=component,
                method=method.name,
                metadata=self.method_metadata,
            )
        self.check_target(declaration, Target.METHOD, component=component, method=method.name)
        return declaration.metadata

    def resolve_identifier(
        self,
        component: type,
        method: DeclaredMethod,
        method_metadata: Any,
        class_metadata: Any,
    ) -> str:
        identifier = self.identifiers.resolve(component, method, method_metadata, class_metadata)
        if identifier is None:
            raise IdentifierNotSpecifiedError(
                f'Method "{qualified_name(component)}.{method.name}": the class metadata '
                f'#[{type(class_metadata).__name__}] and the method metadata #[{type(method_metadata).__name__}] '
                f'must implement "IdentityServiceAttribute" with an identifier, or '
                f'{type(self).__name__}("{self.definition_id}") must have an identifier resolver.',
                component=component,
                method=method.name,
                metadata=method_metadata,
            )
        return identifier
