import textwrap

import pytest
from pydantic import ValidationError

from registrar import ContainerBuilder, IdentityService
from registrar.conf import DEFAULTS, RegistrarSettings, RegistryPassConfig, Settings
from registrar.conf.loader import build_passes, configure_builder, import_from_path, load_settings
from registrar.passes import (
    CallableMetadataRegistryPass,
    ReferenceRegistryPass,
    ServiceMetadataRegistryPass,
    TaggedServiceRegistryPass,
)
from registrar.registry import IdentityServiceRegistry

SERVICE_PASS = {
    "kind": "service",
    "definition_id": "exporters",
    "registry": "registrar.registry:IdentityServiceRegistry",
    "class_metadata": "registrar.metadata.IdentityService",
}


def test_defaults():
    settings = RegistrarSettings()

    assert settings.IGNORE_METADATA_TAG == DEFAULTS["IGNORE_METADATA_TAG"] == "container.ignore_attributes"
    assert settings.COMPOUND_IDENTIFIER_SEPARATOR == ":"
    assert settings.CALLABLE_DEFINITION_SUFFIX == "callable"
    assert settings.REGISTRY_PASSES == []


def test_settings_layers_and_namespaces():
    settings = Settings({"COMPOUND_IDENTIFIER_SEPARATOR": "/"})
    settings.update_from_mapping({"REGISTRAR_CALLABLE_DEFINITION_SUFFIX": "handler", "OTHER": 1}, namespace="REGISTRAR")

    assert settings["COMPOUND_IDENTIFIER_SEPARATOR"] == "/"
    assert settings["CALLABLE_DEFINITION_SUFFIX"] == "handler"
    assert settings["IGNORE_METADATA_TAG"] == "container.ignore_attributes"
    assert "OTHER" not in settings


def test_settings_from_envvar_module(tmp_path, monkeypatch):
    (tmp_path / "registrar_test_config.py").write_text(
        textwrap.dedent(
            """
            COMPOUND_IDENTIFIER_SEPARATOR = "::"
            lowercase_is_ignored = True
            """
        )
    )
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.setenv("REGISTRAR_CONFIG_MODULE", "registrar_test_config")

    settings = load_settings()

    assert settings.COMPOUND_IDENTIFIER_SEPARATOR == "::"
    assert not hasattr(settings, "lowercase_is_ignored")


def test_load_settings_without_envvar(monkeypatch):
    monkeypatch.delenv("REGISTRAR_CONFIG_MODULE", raising=False)

    assert load_settings() == RegistrarSettings()


@pytest.mark.parametrize(
    "config",
    [
        {"kind": "service", "definition_id": "x"},
        {"kind": "callable", **{k: v for k, v in SERVICE_PASS.items() if k != "kind"}},
        {"kind": "unknown", "definition_id": "x"},
        {"kind": "tagged", "definition_id": ""},
        {**SERVICE_PASS, "unexpected": True},
    ],
)
def test_invalid_pass_config(config):
    with pytest.raises(ValidationError):
        RegistryPassConfig.model_validate(config)


def test_import_from_path():
    assert import_from_path("registrar.registry:IdentityServiceRegistry") is IdentityServiceRegistry
    assert import_from_path("registrar.registry.IdentityServiceRegistry") is IdentityServiceRegistry
    with pytest.raises(ImportError):
        import_from_path("not_a_registrar_module.Thing")


def test_build_passes_in_configuration_order():
    passes = build_passes(
        {
            "COMPOUND_IDENTIFIER_SEPARATOR": "/",
            "REGISTRY_PASSES": [
                SERVICE_PASS,
                {
                    "kind": "callable",
                    "definition_id": "commands",
                    "registry": "registrar.registry:CallableRegistry",
                    "class_metadata": "registrar.metadata:IdentityService",
                    "method_metadata": "registrar.metadata:IdentityService",
                    "identifier_resolver": "registrar.identity:FirstParameterIdentifierResolver",
                    "compound_identifier": True,
                },
                {"kind": "tagged", "definition_id": "formats", "attribute": "format"},
                {"kind": "reference", "definition_id": "locator", "tag": "app.locator"},
            ],
        }
    )

    service, callable_, tagged, reference = passes
    assert isinstance(service, ServiceMetadataRegistryPass)
    assert service.registry_class is IdentityServiceRegistry
    assert isinstance(callable_, CallableMetadataRegistryPass)
    assert callable_.compound_identifier
    assert callable_.identifiers.has_resolver
    assert callable_.identifiers.separator == "/"
    assert isinstance(tagged, TaggedServiceRegistryPass) and tagged.attribute == "format"
    assert isinstance(reference, ReferenceRegistryPass) and reference.tag == "app.locator"


@IdentityService("csv")
class CsvExporter: ...


def test_configure_builder_end_to_end():
    builder = ContainerBuilder()
    builder.register(CsvExporter)

    configure_builder(builder, {"REGISTRY_PASSES": [SERVICE_PASS]})

    assert isinstance(builder.compile().get("exporters").get("csv"), CsvExporter)


def test_settings_from_object_and_validation():
    class Overrides:
        CALLABLE_DEFINITION_SUFFIX = "handler"
        REGISTRY_PASSES = [SERVICE_PASS]
        ignored = "lowercase"

    settings = Settings()
    settings.update_from_object(Overrides)

    assert settings.overrides() == {
        "CALLABLE_DEFINITION_SUFFIX": "handler",
        "REGISTRY_PASSES": [SERVICE_PASS],
    }
    validated = settings.validated()
    assert validated.CALLABLE_DEFINITION_SUFFIX == "handler"
    assert validated.REGISTRY_PASSES[0].definition_id == "exporters"
    assert load_settings(settings) == validated
    assert load_settings(validated) is validated


def test_update_from_envvar_reports_missing_module(monkeypatch):
    monkeypatch.delenv("REGISTRAR_CONFIG_MODULE", raising=False)

    assert Settings().update_from_envvar() is False


def test_writes_land_in_overrides():
    settings = Settings({"COMPOUND_IDENTIFIER_SEPARATOR": "/"})
    settings["COMPOUND_IDENTIFIER_SEPARATOR"] = "::"

    assert settings.overrides() == {"COMPOUND_IDENTIFIER_SEPARATOR": "::"}
    del settings["COMPOUND_IDENTIFIER_SEPARATOR"]
    assert settings["COMPOUND_IDENTIFIER_SEPARATOR"] == "/"
    with pytest.raises(KeyError):
        del settings["IGNORE_METADATA_TAG"]
    assert settings["IGNORE_METADATA_TAG"] == DEFAULTS["IGNORE_METADATA_TAG"]
