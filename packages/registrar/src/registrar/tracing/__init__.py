from .tracing import TRACER_NAME, build_span, get_tracer, span_attributes

__all__ = ["TRACER_NAME", "build_span", "get_tracer", "span_attributes"]
