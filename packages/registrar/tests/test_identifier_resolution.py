import pytest

from registrar.identity import (
    CallableIdentifierStrategy,
    CompoundIdentifierError,
    as_identifier_resolver,
    qualified_name,
    resolve_callable_identifier,
    resolve_class_identifier,
)
from registrar.metadata import DeclaredMethod, IdentityService, Service


class Handler(IdentityService): ...


class Listener(Service): ...


class Orders:
    def create(self, command): ...


CREATE = DeclaredMethod(name="create", function=Orders.create, owner=Orders)


def test_class_identifier_prefers_explicit_identifier():
    assert resolve_class_identifier(Orders, Handler("orders")) == "orders"
    assert resolve_class_identifier(Orders, Handler()) == qualified_name(Orders)
    assert resolve_class_identifier(Orders, Listener()) == qualified_name(Orders)


@pytest.mark.parametrize(
    "class_metadata, method_metadata, compound, expected",
    [
        (Handler("cmd"), Handler("create"), False, "cmd:create"),
        (Handler("cmd"), Handler("create"), True, "cmd:create"),
        (Handler(), Handler("create"), False, "create"),
        (Handler(), Handler("create"), True, "create"),
        (Listener(), Handler("create"), False, "create"),
        (Handler("cmd"), Handler(), False, "cmd"),
        (Handler("cmd"), Listener(), False, "cmd"),
        (Handler("cmd"), Listener(), True, "cmd"),
        (Handler(), Handler(), False, None),
        (Listener(), Listener(), False, None),
    ],
)
def test_callable_identifier_rules(class_metadata, method_metadata, compound, expected):
    assert resolve_callable_identifier(class_metadata, method_metadata, compound=compound) == expected


def test_compound_mode_requires_method_identifier():
    with pytest.raises(CompoundIdentifierError):
        resolve_callable_identifier(Handler("cmd"), Handler(), compound=True)


def test_custom_separator():
    assert resolve_callable_identifier(Handler("cmd"), Handler("create"), separator="/") == "cmd/create"


def test_resolver_function_takes_precedence_over_metadata():
    seen = []

    def resolver(component, method, method_metadata, class_metadata):
        seen.append((component, method.name, method_metadata, class_metadata))
        return f"custom.{method.name}"

    strategy = CallableIdentifierStrategy(resolver, compound=True)

    assert strategy.has_resolver
    assert strategy.resolve(Orders, CREATE, Handler(), Handler("cmd")) == "custom.create"
    assert seen == [(Orders, "create", Handler(), Handler("cmd"))]


def test_resolver_object_and_string_coercion():
    class Numbered:
        def resolve(self, component, method, method_metadata, class_metadata):
            return 42

    strategy = CallableIdentifierStrategy(Numbered())
    assert strategy.resolve(Orders, CREATE, Handler(), Handler()) == "42"


def test_resolver_classes_are_rejected():
    class Resolver:
        def resolve(self, *args): ...

    with pytest.raises(TypeError):
        as_identifier_resolver(Resolver)
    with pytest.raises(TypeError):
        as_identifier_resolver("not callable")


def test_strategy_without_resolver_uses_metadata_rules():
    strategy = CallableIdentifierStrategy(separator=".")

    assert not strategy.has_resolver
    assert strategy.resolve(Orders, CREATE, Handler("create"), Handler("orders")) == "orders.create"
    assert strategy.resolve(Orders, CREATE, Handler(), Handler()) is None
