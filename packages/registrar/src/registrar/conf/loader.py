# registrar/conf/loader.py

import importlib
import inspect
import logging
from typing import Any, Mapping

from registrar.container.builder import BuildPass, ContainerBuilder
from registrar.passes import (
    CallableMetadataRegistryPass,
    ReferenceRegistryPass,
    ServiceMetadataRegistryPass,
    TaggedServiceRegistryPass,
)

from .models import RegistrarSettings, RegistryPassConfig
from .settings import Settings

logger = logging.getLogger(__name__)

__all__ = ["import_from_path", "load_settings", "build_pass", "build_passes", "configure_builder"]


def import_from_path(path: str) -> Any:
    """
    Import "pkg.module:attr" or "pkg.module.attr" into a Python object.
    """
    if ":" in path:
        mod_path, attr = path.split(":", 1)
        obj: Any = importlib.import_module(mod_path)
        for a in attr.split("."):
            obj = getattr(obj, a)
        return obj
    # Try dotted attribute on module
    parts = path.split(".")
    for i in range(len(parts), 0, -1):
        mod_path = ".".join(parts[:i])
        try:
            mod = importlib.import_module(mod_path)
        except ModuleNotFoundError:
            continue
        obj = mod
        for a in parts[i:]:
            obj = getattr(obj, a)
        return obj
    raise ImportError(f"Could not import from path: {path}")


def _optional(path: str | None) -> Any:
    return None if path is None else import_from_path(path)


def load_settings(settings: RegistrarSettings | Mapping[str, Any] | None = None) -> RegistrarSettings:
    """Validate settings; reads the module named by REGISTRAR_CONFIG_MODULE when none are given."""
    if isinstance(settings, RegistrarSettings):
        return settings
    if not isinstance(settings, Settings):
        layered = Settings(settings or {})
        if settings is None:
            layered.update_from_envvar()
        settings = layered
    return settings.validated()


def build_pass(config: RegistryPassConfig, settings: RegistrarSettings | None = None) -> BuildPass:
    settings = settings or RegistrarSettings()

    if config.kind == "tagged":
        return TaggedServiceRegistryPass(config.definition_id, config.attribute, tag=config.tag)
    if config.kind == "reference":
        return ReferenceRegistryPass(config.definition_id, tag=config.tag)

    registry = import_from_path(config.registry)
    class_metadata = import_from_path(config.class_metadata)
    interface = _optional(config.interface)

    if config.kind == "service":
        return ServiceMetadataRegistryPass(
            config.definition_id,
            registry,
            class_metadata,
            interface=interface,
            ignore_tag=settings.IGNORE_METADATA_TAG,
        )

    resolver = _optional(config.identifier_resolver)
    if inspect.isclass(resolver):
        resolver = resolver()
    return CallableMetadataRegistryPass(
        config.definition_id,
        registry,
        class_metadata,
        import_from_path(config.method_metadata),
        interface=interface,
        compound_identifier=config.compound_identifier,
        identifier_resolver=resolver,
        separator=settings.COMPOUND_IDENTIFIER_SEPARATOR,
        definition_suffix=settings.CALLABLE_DEFINITION_SUFFIX,
        ignore_tag=settings.IGNORE_METADATA_TAG,
    )


def build_passes(settings: RegistrarSettings | Mapping[str, Any] | None = None) -> list[BuildPass]:
    settings = load_settings(settings)
    passes = [build_pass(config, settings) for config in settings.REGISTRY_PASSES]
    logger.debug("built %d registry pass(es) from settings", len(passes))
    return passes


def configure_builder(
    builder: ContainerBuilder,
    settings: RegistrarSettings | Mapping[str, Any] | None = None,
) -> ContainerBuilder:
    """Add every configured registry pass to `builder`, in configuration order."""
    for build_pass_ in build_passes(settings):
        builder.add_pass(build_pass_)
    return builder
