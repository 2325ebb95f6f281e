"""Configuration: layered settings and validated models.

Pass construction lives in :mod:`registrar.conf.loader`, which imports the passes.
"""

from .defaults import DEFAULTS
from .models import RegistrarSettings, RegistryPassConfig
from .settings import Settings

__all__ = [
    "DEFAULTS",
    "Settings",
    "RegistrarSettings",
    "RegistryPassConfig",
]
