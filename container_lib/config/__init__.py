"""YAML configuration for the object container."""

from .loader import apply_component, apply_settings, import_ref, load_settings, parse_settings
from .settings import ComponentSettings, ContainerSettings

__all__ = [
    "ComponentSettings",
    "ContainerSettings",
    "apply_component",
    "apply_settings",
    "import_ref",
    "load_settings",
    "parse_settings",
]
