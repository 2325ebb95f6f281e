# registrar/conf/models.py

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .defaults import DEFAULTS


class RegistryPassConfig(BaseModel):
    """Declarative description of one registry pass.

    Types are given as import paths ("pkg.mod:Attr" or "pkg.mod.Attr").
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["service", "callable", "tagged", "reference"] = "service"
    definition_id: str = Field(min_length=1)

    # metadata passes
    registry: str | None = None
    class_metadata: str | None = None
    method_metadata: str | None = None
    interface: str | None = None
    compound_identifier: bool = False
    identifier_resolver: str | None = None

    # tag passes
    attribute: str = "code"
    tag: str | None = None

    @model_validator(mode="after")
    def _check_required_paths(self) -> "RegistryPassConfig":
        missing: list[str] = []
        if self.kind in ("service", "callable"):
            if not self.registry:
                missing.append("registry")
            if not self.class_metadata:
                missing.append("class_metadata")
        if self.kind == "callable" and not self.method_metadata:
            missing.append("method_metadata")
        if missing:
            raise ValueError(f"{self.kind} pass {self.definition_id!r} requires: {', '.join(missing)}")
        return self


class RegistrarSettings(BaseModel):
    model_config = ConfigDict(extra="allow")

    IGNORE_METADATA_TAG: str = str(DEFAULTS["IGNORE_METADATA_TAG"])
    COMPOUND_IDENTIFIER_SEPARATOR: str = Field(default=str(DEFAULTS["COMPOUND_IDENTIFIER_SEPARATOR"]), min_length=1)
    CALLABLE_DEFINITION_SUFFIX: str = Field(default=str(DEFAULTS["CALLABLE_DEFINITION_SUFFIX"]), min_length=1)

    REGISTRY_PASSES: list[RegistryPassConfig] = Field(default_factory=list)
