# registrar/passes/base.py
"""
Metadata-driven registry pass (orchestrator).

One pass fills one registry definition. For every component definition, in
discovery order:

    filtering → extracting metadata → validating capability →
    resolving identifier → resolving priority → binding → appending

Subclasses implement the per-component part (``process_component``). Every
failure is a :class:`~registrar.exceptions.ConfigurationError` and aborts the
run; registrations are appended to the registry definition only once every
component went through, so a failed run leaves nothing half-registered.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from registrar.conf.defaults import DEFAULTS
from registrar.container.builder import ContainerBuilder
from registrar.container.definitions import Definition
from registrar.identity.exceptions import DuplicateIdentifierError
from registrar.identity.resolvers import qualified_name
from registrar.metadata.attributes import MetadataDeclaration, Target
from registrar.metadata.capabilities import Capability, satisfies
from registrar.metadata.exceptions import (
    DuplicateMetadataError,
    MetadataTargetError,
    MissingCapabilityError,
)
from registrar.metadata.reader import DeclaredMetadataReader, MetadataReader
from registrar.registry.records import ResolvedRegistration
from registrar.registry.variants import RegistryVariant, variant_for
from registrar.tracing import build_span

logger = logging.getLogger(__name__)

__all__ = ["AbstractMetadataRegistryPass"]


class AbstractMetadataRegistryPass(ABC):
    """Base build pass scanning components for class metadata of one kind.

    :param definition_id: container id of the registry to fill; created from
        `registry_class` when the builder does not define it yet.
    :param registry_class: registry implementation; its variant decides the
        shape of each ``register`` call.
    :param class_metadata: metadata kind (type) a component must declare once.
    :param interface: optional type components must subclass; others are skipped.
        Also handed to the registry constructor.
    :param reader: metadata reader owned by this pass.
    :param ignore_tag: definitions carrying this tag are never scanned.
    """

    log_category = "registry"

    def __init__(
        self,
        definition_id: str,
        registry_class: type,
        class_metadata: type,
        *,
        interface: type | None = None,
        reader: MetadataReader | None = None,
        ignore_tag: str = DEFAULTS["IGNORE_METADATA_TAG"],
    ) -> None:
        self.definition_id = definition_id
        self.registry_class = registry_class
        self.class_metadata = class_metadata
        self.interface = interface
        self.reader: MetadataReader = reader or DeclaredMetadataReader()
        self.ignore_tag = ignore_tag

    # ---------------- entry point ----------------
    def process(self, builder: ContainerBuilder) -> None:
        attrs = {
            "registrar.pass": type(self).__name__,
            "registrar.definition": self.definition_id,
            "registrar.metadata": self.class_metadata.__name__,
        }
        with build_span(f"registrar.pass.process ({self.definition_id})", attributes=attrs) as span:
            registry_definition = self.registry_definition(builder)
            variant = variant_for(registry_definition.cls)

            registrations: list[ResolvedRegistration] = []
            for definition in builder.definitions():
                registrations.extend(self.process_definition(builder, definition, variant))

            self.check_registrations(builder, registry_definition, registrations)
            registry_definition.add_calls(r.as_call() for r in registrations)
            if not builder.has_definition(self.definition_id):
                builder.set_definition(self.definition_id, registry_definition)
            self.publish(builder, registrations)
            span.set_attribute("registrar.variant", variant.value)
            span.set_attribute("registrar.registrations", len(registrations))

        logger.info(
            "[%s] ✅ %d registration(s) into `%s` (%s)",
            self.log_category.upper(),
            len(registrations),
            self.definition_id,
            variant.value,
        )

    def process_definition(
        self,
        builder: ContainerBuilder,
        definition: Definition,
        variant: RegistryVariant,
    ) -> list[ResolvedRegistration]:
        """Filter and extract one definition, then delegate to ``process_component``."""
        if definition.cls is None or not self.accept(definition, builder):
            return []

        component = definition.cls
        declarations = self.reader.read_class_metadata(component, self.class_metadata)
        if not declarations:
            return []

        if self.interface is not None and not issubclass(component, self.interface):
            logger.debug("skipping %s: does not implement %s", definition.id, qualified_name(self.interface))
            return []

        class_metadata = self.extract_class_metadata(component, declarations)
        return self.process_component(builder, definition, class_metadata, variant)

    # ---------------- hooks / extension points ----------------
    @abstractmethod
    def process_component(
        self,
        builder: ContainerBuilder,
        definition: Definition,
        class_metadata: Any,
        variant: RegistryVariant,
    ) -> list[ResolvedRegistration]:
        """Return the registrations contributed by one accepted component."""

    def check_registrations(
        self,
        builder: ContainerBuilder,
        registry_definition: Definition,
        registrations: list[ResolvedRegistration],
    ) -> None:
        """Validate the whole run before anything is appended.

        Unique-key (identity) registries reject an identifier seen twice, including
        identifiers already registered by calls on an existing registry definition.
        """
        if not registrations or registrations[0].variant is not RegistryVariant.IDENTITY:
            return

        seen: dict[str, str] = {
            str(call.arguments[0]): f"an existing call on `{self.definition_id}`"
            for call in registry_definition.calls
            if call.method == "register" and call.arguments
        }
        for registration in registrations:
            identifier = str(registration.identifier)
            if identifier in seen:
                raise DuplicateIdentifierError(
                    f'Identifier "{identifier}" of {registration.source} is already registered by '
                    f"{seen[identifier]} in `{self.definition_id}`",
                    component=registration.component,
                    method=registration.method,
                )
            seen[identifier] = registration.source

    def publish(self, builder: ContainerBuilder, registrations: list[ResolvedRegistration]) -> None:
        """Called once the whole run succeeded; add extra definitions here."""
        return

    def accept(self, definition: Definition, builder: ContainerBuilder) -> bool:
        """Eligible for auto-wiring and not excluded from metadata scanning."""
        return builder.is_eligible(definition) and not definition.has_tag(self.ignore_tag)

    def registry_definition(self, builder: ContainerBuilder) -> Definition:
        """The existing registry definition, or a new one added once the run succeeds."""
        if builder.has_definition(self.definition_id):
            return builder.get_definition(self.definition_id)
        arguments = [] if self.interface is None else [self.interface]
        return Definition(cls=self.registry_class, arguments=arguments, autoconfigured=False)

    # ---------------- validation ----------------
    def extract_class_metadata(self, component: type, declarations: list[MetadataDeclaration]) -> Any:
        kind = self.class_metadata.__name__
        if len(declarations) != 1:
            raise DuplicateMetadataError(
                f"Metadata #[{kind}] should be declared once only on {qualified_name(component)} "
                f"(found {len(declarations)}).",
                component=component,
                metadata=self.class_metadata,
            )

        declaration = declarations[0]
        self.check_target(declaration, Target.CLASS, component=component)

        metadata = declaration.metadata
        if not satisfies(metadata, Capability.SERVICE):
            raise MissingCapabilityError(
                f'Metadata #[{declaration.name}] should implement "{Capability.SERVICE.interface_name}"',
                component=component,
                metadata=metadata,
            )
        return metadata

    @staticmethod
    def check_target(
        declaration: MetadataDeclaration,
        expected: Target,
        *,
        component: type,
        method: str | None = None,
    ) -> None:
        allowed = getattr(type(declaration.metadata), "targets", Target.ANY)
        if declaration.target is not expected or not (allowed & expected):
            raise MetadataTargetError(
                f'Metadata "#[{declaration.name}]" target should be only "Target.{expected.name}"',
                component=component,
                method=method,
                metadata=declaration.metadata,
            )

    def validate_capabilities(
        self,
        metadata: Any,
        variant: RegistryVariant,
        *,
        component: type,
        exclude: tuple[Capability, ...] = (),
    ) -> None:
        """Ensure `metadata` has every capability `variant` requires."""
        for capability in variant.required_capabilities:
            if capability in exclude:
                continue
            if not satisfies(metadata, capability):
                raise MissingCapabilityError(
                    f'Metadata #[{type(metadata).__name__}] should implement "{capability.interface_name}" '
                    f"to be registered into {qualified_name(self.registry_class)} ({variant.value})",
                    component=component,
                    metadata=metadata,
                )

    def resolve_priority(
        self,
        variant: RegistryVariant,
        *candidates: Any,
        component: type,
        method: str | None = None,
    ) -> int | None:
        """Priority of the first *Prioritized* candidate; ``None`` for unprioritized variants."""
        if not variant.prioritized:
            return None
        for metadata in candidates:
            if metadata is not None and satisfies(metadata, Capability.PRIORITIZED):
                return metadata.get_priority()
        names = ", ".join(type(m).__name__ for m in candidates if m is not None)
        raise MissingCapabilityError(
            f'Metadata #[{names}] should implement "{Capability.PRIORITIZED.interface_name}"',
            component=component,
            method=method,
            metadata=candidates[0] if candidates else None,
        )
