import pytest

from registrar import ContainerBuilder, Definition, Reference
from registrar.container import CircularReferenceError, DefinitionNotFoundError
from registrar.identity import qualified_name
from registrar.metadata import IdentityService
from registrar.passes import ServiceMetadataRegistryPass
from registrar.registry import IdentityServiceRegistry, RegistryFrozenError


class Exporter(IdentityService): ...


class Connection:
    def __init__(self, dsn):
        self.dsn = dsn


class Repository:
    def __init__(self, connection, options):
        self.connection = connection
        self.options = options


@Exporter("csv")
class CsvExporter: ...


def exporters_builder():
    builder = ContainerBuilder()
    builder.register(CsvExporter)
    builder.add_pass(ServiceMetadataRegistryPass("exporters", IdentityServiceRegistry, Exporter))
    return builder


def test_services_are_shared_and_arguments_resolved(builder):
    builder.register(Connection, "db", arguments=["sqlite://"])
    builder.register(Repository, "repo", arguments=[Reference("db"), {"replicas": [Reference("db")]}])

    container = builder.compile()
    repo = container.get("repo")

    assert repo is container.get("repo")
    assert repo.connection is container.get("db")
    assert repo.options["replicas"][0] is repo.connection


def test_method_calls_replayed_after_construction(builder):
    definition = builder.register(IdentityServiceRegistry, "plain", autoconfigured=False)
    definition.add_call("register", ["a", 1]).add_call("register", ["b", 2])

    assert builder.compile().get("plain").all() == {"a": 1, "b": 2}


def test_factory_definition(builder):
    builder.set_definition("answer", Definition(factory=lambda: 42))

    assert builder.compile().get("answer") == 42


def test_definition_needs_class_or_factory():
    with pytest.raises(ValueError):
        Definition()


def test_unknown_service(builder):
    container = builder.compile()

    with pytest.raises(DefinitionNotFoundError):
        container.get("missing")
    with pytest.raises(KeyError):
        builder.get_definition("missing")


def test_circular_reference(builder):
    builder.register(Connection, "a", arguments=[Reference("b")])
    builder.register(Connection, "b", arguments=[Reference("a")])

    with pytest.raises(CircularReferenceError) as exc:
        builder.compile().get("a")
    assert "a -> b -> a" in str(exc.value)


def test_compiled_registries_are_frozen():
    registry = exporters_builder().compile().get("exporters")

    with pytest.raises(RegistryFrozenError):
        registry.register("json", object())


def test_compile_is_deterministic_and_leaves_builder_untouched():
    builder = exporters_builder()

    first = builder.compile()
    second = builder.compile()

    assert first.ids() == second.ids()
    assert first.definition("exporters").calls == second.definition("exporters").calls
    assert first.get("exporters").keys() == second.get("exporters").keys() == ("csv",)
    assert not builder.has_definition("exporters")
    assert first.get(qualified_name(CsvExporter)) is not second.get(qualified_name(CsvExporter))


def test_process_returns_processed_copy():
    builder = exporters_builder()

    processed = builder.process()

    assert processed is not builder
    assert processed.has_definition("exporters")
    assert processed.get_definition(qualified_name(CsvExporter)) is not builder.get_definition(
        qualified_name(CsvExporter)
    )


def test_find_tagged_and_copy(builder):
    builder.register(Connection, "db", tags={"infra": [{"role": "primary"}, {"role": "replica"}]})

    assert builder.find_tagged("infra") == {"db": [{"role": "primary"}, {"role": "replica"}]}
    clone = builder.copy()
    clone.get_definition("db").add_tag("extra")
    assert not builder.get_definition("db").has_tag("extra")
