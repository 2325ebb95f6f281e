# registrar/conf/settings.py
"""Layered registrar settings.

A :class:`Settings` is a :class:`~collections.ChainMap` whose first map holds
overrides, followed by the layers it was created with and a copy of
:data:`~registrar.conf.defaults.DEFAULTS`. Writes always land in the overrides.
Only upper-case names are read from modules and objects.
"""

import importlib
import logging
import os
from collections import ChainMap
from typing import Any, Mapping

from .defaults import DEFAULTS
from .models import RegistrarSettings

logger = logging.getLogger(__name__)

ENVVAR = "REGISTRAR_CONFIG_MODULE"


class Settings(ChainMap):
    def __init__(self, *layers: Mapping[str, Any]) -> None:
        super().__init__({}, *(dict(layer) for layer in layers), dict(DEFAULTS))

    def __repr__(self) -> str:
        return f"<Settings overrides={sorted(self.maps[0])}>"

    def update_from_object(self, obj: Any, *, namespace: str | None = None) -> None:
        """Read upper-case attributes of a module, class or instance.

        A string is imported as a module path first.
        """
        if isinstance(obj, str):
            obj = importlib.import_module(obj)
        self.update_from_mapping({name: getattr(obj, name) for name in dir(obj)}, namespace=namespace)

    def update_from_envvar(self, envvar: str = ENVVAR, *, namespace: str | None = None) -> bool:
        """Load the module named by `envvar`; return whether one was configured."""
        module_name = os.environ.get(envvar)
        if not module_name:
            return False
        logger.debug("loading registrar settings from %s=%s", envvar, module_name)
        self.update_from_object(module_name, namespace=namespace)
        return True

    def update_from_mapping(self, mapping: Mapping[str, Any], *, namespace: str | None = None) -> None:
        prefix = f"{namespace}_" if namespace else ""
        for key, value in mapping.items():
            name = key[len(prefix):] if key.startswith(prefix) else None
            if name and name.isupper():
                self.maps[0][name] = value

    def overrides(self) -> dict[str, Any]:
        return dict(self.maps[0])

    def validated(self) -> RegistrarSettings:
        """Validate every setting, pass configuration included."""
        data = dict(self)
        data["REGISTRY_PASSES"] = list(data.get("REGISTRY_PASSES") or ())
        return RegistrarSettings.model_validate(data)
