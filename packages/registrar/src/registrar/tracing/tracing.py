# registrar/tracing/tracing.py
"""OpenTelemetry spans around container builds.

The host application owns the OTEL SDK setup; without one the API hands out
no-op tracers and these helpers cost next to nothing.
"""

import logging
from collections.abc import Mapping, Sequence
from contextlib import contextmanager
from typing import Any, Iterator

from opentelemetry import trace
from opentelemetry.trace import Span, SpanKind, Status, StatusCode, Tracer

logger = logging.getLogger(__name__)

TRACER_NAME = "registrar"

# Attribute value types OpenTelemetry accepts (alone or as homogeneous sequences).
_SCALARS = (bool, str, bytes, int, float)


def get_tracer(name: str | None = None) -> Tracer:
    return trace.get_tracer(name or TRACER_NAME)


def span_attributes(attrs: Mapping[str, Any] | None) -> dict[str, Any]:
    """Coerce `attrs` into OTEL attribute values; ``None`` values are dropped.

    Classes become their qualified name, other objects their ``str()``.
    """
    clean: dict[str, Any] = {}
    for key, value in (attrs or {}).items():
        if value is None:
            continue
        if isinstance(value, _SCALARS):
            clean[key] = value
        elif isinstance(value, type):
            clean[key] = f"{value.__module__}.{value.__qualname__}"
        elif isinstance(value, Sequence):
            items = [str(v) for v in value if v is not None]
            if items:
                clean[key] = items
        else:
            clean[key] = str(value)
    return clean


def _record_error(span: Span, err: BaseException) -> None:
    span.record_exception(err)
    span.set_status(Status(StatusCode.ERROR, description=str(err)))
    span.set_attributes(
        span_attributes(
            {
                "registrar.error.type": type(err).__name__,
                "registrar.error.component": getattr(err, "component", None),
                "registrar.error.method": getattr(err, "method", None),
            }
        )
    )


@contextmanager
def build_span(name: str, *, attributes: Mapping[str, Any] | None = None) -> Iterator[Span]:
    """Span around one build step (a pass run, a compilation).

    Errors are recorded on the span, with the offending component and method
    when the error carries them, then re-raised.

        with build_span("registrar.pass.process", attributes={"registrar.definition": "handlers"}):
            ...
    """
    with get_tracer().start_as_current_span(
        name,
        kind=SpanKind.INTERNAL,
        attributes=span_attributes(attributes),
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        try:
            yield span
        except Exception as err:
            _record_error(span, err)
            raise
        span.set_status(Status(StatusCode.OK))


__all__ = ["TRACER_NAME", "build_span", "get_tracer", "span_attributes"]
