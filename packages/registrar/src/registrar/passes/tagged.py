# registrar/passes/tagged.py
"""Tag-driven passes for registries filled without metadata.

Both passes only act when the registry definition already exists and use the
registry's definition id as the tag name unless told otherwise.
"""

from __future__ import annotations

import logging

from registrar.container.builder import ContainerBuilder
from registrar.container.definitions import MethodCall, Reference
from registrar.tracing import build_span

logger = logging.getLogger(__name__)

__all__ = ["TaggedServiceRegistryPass", "ReferenceRegistryPass"]


class TaggedServiceRegistryPass:
    """Registers tagged services under the value of one tag attribute.

        builder.register(CsvExporter, tags={"exporters": {"code": "csv"}})
        TaggedServiceRegistryPass("exporters")  # register("csv", @CsvExporter)

    Tags without the attribute are ignored; the first tag carrying it wins.
    """

    def __init__(self, definition_id: str, attribute: str = "code", *, tag: str | None = None) -> None:
        self.definition_id = definition_id
        self.attribute = attribute
        self.tag = tag or definition_id

    def process(self, builder: ContainerBuilder) -> None:
        if not builder.has_definition(self.definition_id):
            logger.debug("no `%s` definition; skipping %s", self.definition_id, type(self).__name__)
            return

        attrs = {"registrar.pass": type(self).__name__, "registrar.definition": self.definition_id}
        with build_span(f"registrar.pass.process ({self.definition_id})", attributes=attrs):
            calls: list[MethodCall] = []
            for service_id, tags in builder.find_tagged(self.tag).items():
                filtered = [t for t in tags if self.attribute in t]
                if not filtered:
                    continue
                calls.append(MethodCall("register", (filtered[0][self.attribute], Reference(service_id))))
            builder.get_definition(self.definition_id).add_calls(calls)

        logger.info("[TAGGED] ✅ %d registration(s) into `%s`", len(calls), self.definition_id)


class ReferenceRegistryPass:
    """Registers every tagged service under its own service id."""

    def __init__(self, definition_id: str, *, tag: str | None = None) -> None:
        self.definition_id = definition_id
        self.tag = tag or definition_id

    def process(self, builder: ContainerBuilder) -> None:
        if not builder.has_definition(self.definition_id):
            return

        calls = [MethodCall("register", (service_id, Reference(service_id))) for service_id in builder.find_tagged(self.tag)]
        builder.get_definition(self.definition_id).add_calls(calls)
        logger.info("[TAGGED] ✅ %d reference(s) into `%s`", len(calls), self.definition_id)
