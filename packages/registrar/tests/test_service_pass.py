import abc
from dataclasses import dataclass

import pytest

from registrar import ContainerBuilder, Reference
from registrar.exceptions import ConfigurationError
from registrar.identity import DuplicateIdentifierError, qualified_name
from registrar.metadata import (
    DuplicateMetadataError,
    IdentityPrioritizedService,
    IdentityService,
    Metadata,
    MetadataTargetError,
    MissingCapabilityError,
    PrioritizedService,
    Service,
    Target,
    declare,
)
from registrar.passes import ServiceMetadataRegistryPass
from registrar.registry import (
    IdentityServiceRegistry,
    IdentitySinglePrioritizedServiceRegistry,
    PrioritizedServiceRegistry,
    RegistryTypeError,
    ServiceRegistry,
    UnsupportedRegistryError,
)


class Plugin(Service): ...


class Exporter(IdentityService): ...


class Ranked(PrioritizedService): ...


class Formatter(IdentityPrioritizedService): ...


@dataclass(frozen=True)
class Note(Metadata):
    text: str = ""


class MethodOnly(Service):
    targets = Target.METHOD


def test_plain_registry_receives_shared_components_in_discovery_order(builder):
    @Plugin()
    class B: ...

    @Plugin()
    class A: ...

    class Undecorated: ...

    builder.register(B)
    builder.register(Undecorated)
    builder.register(A)
    builder.add_pass(ServiceMetadataRegistryPass("plugins", ServiceRegistry, Plugin))

    container = builder.compile()
    registry = container.get("plugins")

    assert [type(s) for s in registry.all()] == [B, A]
    assert registry.all()[1] is container.get(qualified_name(A))
    assert registry.frozen


def test_identity_registry_uses_explicit_identifier_or_qualified_name(builder):
    @Exporter(identifier="csv")
    class CsvExporter: ...

    @Exporter()
    class JsonExporter: ...

    builder.register(CsvExporter)
    builder.register(JsonExporter)
    builder.add_pass(ServiceMetadataRegistryPass("exporters", IdentityServiceRegistry, Exporter))

    registry = builder.compile().get("exporters")

    assert registry.keys() == ("csv", qualified_name(JsonExporter))
    assert isinstance(registry.get("csv"), CsvExporter)


def test_prioritized_registry_orders_by_metadata_priority(builder):
    components = []
    for index, priority in enumerate((5, 1, 5)):
        component = Ranked(priority=priority)(type(f"Item{index}", (), {}))
        builder.register(component)
        components.append(component)
    builder.add_pass(ServiceMetadataRegistryPass("ranked", PrioritizedServiceRegistry, Ranked))

    registry = builder.compile().get("ranked")

    assert [type(s) for s in registry.all()] == [components[0], components[2], components[1]]


def test_single_prioritized_registry_keeps_highest_priority(builder):
    @Formatter("text", priority=1)
    class Plain: ...

    @Formatter("text", priority=10)
    class Rich: ...

    builder.register(Plain)
    builder.register(Rich)
    builder.add_pass(
        ServiceMetadataRegistryPass("formatters", IdentitySinglePrioritizedServiceRegistry, Formatter)
    )

    assert isinstance(builder.compile().get("formatters").get("text"), Rich)


def test_existing_registry_definition_is_extended(builder):
    @Exporter("csv")
    class CsvExporter: ...

    builder.register(IdentityServiceRegistry, "exporters", autoconfigured=False)
    builder.register(CsvExporter)
    builder.add_pass(ServiceMetadataRegistryPass("exporters", IdentityServiceRegistry, Exporter))

    assert builder.compile().get("exporters").has("csv")


def test_ignored_and_non_autoconfigured_definitions_are_skipped(builder):
    @Plugin()
    class Ignored: ...

    @Plugin()
    class Manual: ...

    @Plugin()
    class Kept: ...

    builder.register(Ignored, tags={"container.ignore_attributes": {}})
    builder.register(Manual, autoconfigured=False)
    builder.register(Kept)
    builder.add_pass(ServiceMetadataRegistryPass("plugins", ServiceRegistry, Plugin))

    assert [type(s) for s in builder.compile().get("plugins").all()] == [Kept]


def test_interface_filter_skips_other_components(builder):
    class ExporterInterface(abc.ABC):
        @abc.abstractmethod
        def export(self, rows): ...

    @Exporter("csv")
    class CsvExporter(ExporterInterface):
        def export(self, rows):
            return ",".join(rows)

    @Exporter("legacy")
    class LegacyExporter: ...

    builder.register(CsvExporter)
    builder.register(LegacyExporter)
    builder.add_pass(
        ServiceMetadataRegistryPass(
            "exporters", IdentityServiceRegistry, Exporter, interface=ExporterInterface
        )
    )

    container = builder.compile()
    registry = container.get("exporters")

    assert registry.keys() == ("csv",)
    assert registry.interface is ExporterInterface
    with pytest.raises(RegistryTypeError):
        IdentityServiceRegistry(ExporterInterface).register("legacy", container.get(qualified_name(LegacyExporter)))


def test_duplicate_class_metadata(builder):
    @Plugin()
    @Plugin()
    class Twice: ...

    builder.register(Twice)
    builder.add_pass(ServiceMetadataRegistryPass("plugins", ServiceRegistry, Plugin))

    with pytest.raises(DuplicateMetadataError) as exc:
        builder.compile()
    assert "should be declared once only" in str(exc.value)
    assert exc.value.component is Twice


def test_metadata_declared_for_wrong_target():
    class Explicit: ...

    declare(Explicit, Plugin(), target=Target.METHOD)

    @MethodOnly()
    class Restricted: ...

    for component in (Explicit, Restricted):
        local = ContainerBuilder()
        local.register(component)
        local.add_pass(ServiceMetadataRegistryPass("plugins", ServiceRegistry, Service))
        with pytest.raises(MetadataTargetError):
            local.compile()


@pytest.mark.parametrize(
    "registry_cls, metadata, missing",
    [
        (IdentityServiceRegistry, Plugin(), "IdentityServiceAttribute"),
        (PrioritizedServiceRegistry, Exporter("x"), "PrioritizedServiceAttribute"),
        (IdentitySinglePrioritizedServiceRegistry, Ranked(), "IdentityServiceAttribute"),
        (ServiceRegistry, Note(), "ServiceAttribute"),
    ],
)
def test_missing_capability(builder, registry_cls, metadata, missing):
    component = metadata(type("Component", (), {}))
    builder.register(component)
    builder.add_pass(ServiceMetadataRegistryPass("registry", registry_cls, Metadata))

    with pytest.raises(MissingCapabilityError) as exc:
        builder.compile()
    assert f'.{missing}"' in str(exc.value)


def test_unsupported_registry_class(builder):
    class Bag:
        def register(self, service): ...

    builder.add_pass(ServiceMetadataRegistryPass("bag", Bag, Plugin))

    with pytest.raises(UnsupportedRegistryError):
        builder.compile()


def test_failed_run_registers_nothing(builder):
    @Plugin()
    class Valid: ...

    @Plugin()
    @Plugin()
    class Invalid: ...

    builder.register(Valid)
    builder.register(Invalid)
    build_pass = ServiceMetadataRegistryPass("plugins", ServiceRegistry, Plugin)

    with pytest.raises(ConfigurationError):
        build_pass.process(builder)
    assert not builder.has_definition("plugins")

    builder.register(ServiceRegistry, "plugins", autoconfigured=False)
    with pytest.raises(ConfigurationError):
        build_pass.process(builder)
    assert builder.get_definition("plugins").calls == []


def test_duplicate_identifiers_fail_the_build(builder):
    @Exporter("csv")
    class CsvExporter: ...

    @Exporter("csv")
    class ExcelCsvExporter: ...

    builder.register(CsvExporter)
    builder.register(ExcelCsvExporter)
    build_pass = ServiceMetadataRegistryPass("exporters", IdentityServiceRegistry, Exporter)

    with pytest.raises(DuplicateIdentifierError) as exc:
        build_pass.process(builder)

    assert isinstance(exc.value, ConfigurationError)
    assert exc.value.component is ExcelCsvExporter
    assert qualified_name(CsvExporter) in str(exc.value)
    assert qualified_name(ExcelCsvExporter) in str(exc.value)
    assert not builder.has_definition("exporters")


def test_duplicate_of_an_existing_registry_call(builder):
    @Exporter("csv")
    class CsvExporter: ...

    registry = builder.register(IdentityServiceRegistry, "exporters", autoconfigured=False)
    registry.add_call("register", ("csv", Reference("legacy.csv")))
    builder.register(CsvExporter)
    builder.add_pass(ServiceMetadataRegistryPass("exporters", IdentityServiceRegistry, Exporter))

    with pytest.raises(DuplicateIdentifierError, match="existing call on `exporters`"):
        builder.compile()
    assert len(registry.calls) == 1
