# registrar/identity/first_parameter.py
"""Identifier resolver keyed on a handler's message type.

Typical for command/query buses: ``def handle(self, command: CreateOrder)`` is
registered under ``"app.commands.CreateOrder"``.
"""

from __future__ import annotations

import inspect
import typing
from typing import Any

from registrar.metadata.reader import DeclaredMethod

from .exceptions import InvalidHandlerSignatureError
from .resolvers import qualified_name

__all__ = ["FirstParameterIdentifierResolver"]

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _is_interface(cls: type) -> bool:
    return bool(getattr(cls, "_is_protocol", False)) or inspect.isabstract(cls)


class FirstParameterIdentifierResolver:
    """Returns the qualified name of the handler's single required parameter type.

    The method must take exactly one required argument (besides ``self``/``cls``),
    annotated with one concrete, non-builtin class. Unions, generics and builtins
    are rejected. With ``allow_interface=False`` protocols and abstract classes
    are rejected as well.
    """

    def __init__(self, allow_interface: bool = True) -> None:
        self.allow_interface = allow_interface

    def resolve(
        self,
        component: type,
        method: DeclaredMethod,
        method_metadata: Any,
        class_metadata: Any,
    ) -> str:
        where = f"{qualified_name(component)}.{method.name}"
        parameter = self._single_parameter(component, method, where)

        try:
            hints = typing.get_type_hints(method.function)
        except (NameError, TypeError, AttributeError) as err:
            raise InvalidHandlerSignatureError(
                f'Annotations of handler method "{where}" cannot be evaluated: {err}',
                component=component, method=method.name, metadata=method_metadata,
            ) from err

        annotation = hints.get(parameter.name)
        if (
            annotation is None
            or typing.get_origin(annotation) is not None
            or not inspect.isclass(annotation)
            or annotation.__module__ == "builtins"
        ):
            raise InvalidHandlerSignatureError(
                f'First parameter of handler method "{where}" must be a single class type.',
                component=component, method=method.name, metadata=method_metadata,
            )

        if not self.allow_interface and _is_interface(annotation):
            raise InvalidHandlerSignatureError(
                f'First parameter of handler method "{where}" should be a class, '
                f"interface types are not allowed.",
                component=component, method=method.name, metadata=method_metadata,
            )

        return qualified_name(annotation)

    @staticmethod
    def _single_parameter(component: type, method: DeclaredMethod, where: str) -> inspect.Parameter:
        parameters = list(inspect.signature(method.function).parameters.values())
        if not method.is_static and parameters:
            parameters = parameters[1:]

        required = [
            p for p in parameters
            if p.default is inspect.Parameter.empty
            and p.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        ]
        if len(required) != 1 or required[0] is not parameters[0] or parameters[0].kind not in _POSITIONAL:
            raise InvalidHandlerSignatureError(
                f'Handler method "{where}" should have exactly one required argument, '
                f"the message it handles.",
                component=component, method=method.name,
            )
        return parameters[0]
