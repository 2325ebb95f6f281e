"""Default configuration values for registrar."""

DEFAULTS: dict[str, object] = {
    # Definitions carrying this tag are never scanned for metadata.
    "IGNORE_METADATA_TAG": "container.ignore_attributes",
    # Joins class and method identifiers of callable registrations.
    "COMPOUND_IDENTIFIER_SEPARATOR": ":",
    # Bound callables are published as "<identifier>.<suffix>".
    "CALLABLE_DEFINITION_SUFFIX": "callable",
    # Declarative pass configuration, see registrar.conf.models.RegistryPassConfig.
    "REGISTRY_PASSES": (),
}
