"""Load container settings from YAML and apply `components:` registrations."""
from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from container_lib.components.container import ObjectContainer
from container_lib.components.errors import ConfigError
from container_lib.config.settings import ComponentSettings, ContainerSettings

logger = logging.getLogger(__name__)


def load_settings(config_path: Optional[Path] = None) -> ContainerSettings:
    """Read and validate the container YAML file.

    No path means defaults. A path that does not exist, cannot be parsed or
    fails validation raises `ConfigError`.
    """
    if config_path is None:
        return ContainerSettings()
    path = Path(config_path)
    if not path.exists():
        raise ConfigError(f"Container config not found: {path}")
    try:
        with path.open('r', encoding='utf-8') as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    return parse_settings(raw, source=str(path))


def parse_settings(raw: Any, source: str = '<dict>') -> ContainerSettings:
    if not isinstance(raw, dict):
        raise ConfigError(f"Container config in {source} must be a mapping")
    try:
        return ContainerSettings.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid container config in {source}: {exc}") from exc


def import_ref(ref: str) -> Any:
    """Import `module:attr` (or `module.attr`) and return the attribute."""
    if ':' in ref:
        module_name, _, attr_path = ref.partition(':')
    else:
        module_name, _, attr_path = ref.rpartition('.')
    if not module_name or not attr_path:
        raise ConfigError(f"Invalid reference '{ref}', expected 'module:attribute'")
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"Cannot import module '{module_name}' for '{ref}': {exc}") from exc
    for part in attr_path.split('.'):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ConfigError(f"'{ref}' does not exist") from exc
    return obj


def apply_component(container: ObjectContainer, component: ComponentSettings) -> None:
    service = import_ref(component.service)
    if component.instance:
        container.register_instance(import_ref(component.instance), service,
                                    service_name=component.name)
    elif component.factory:
        container.register_factory(service, import_ref(component.factory),
                                   service_name=component.name, lifecycle=component.lifecycle)
    else:
        impl = import_ref(component.implementation) if component.implementation else None
        container.register_type(service, impl,
                                service_name=component.name, lifecycle=component.lifecycle)


def apply_settings(container: ObjectContainer, settings: ContainerSettings) -> int:
    """Register every configured component. Returns the number registered."""
    for component in settings.components:
        apply_component(container, component)
        logger.debug("Configured component %s", component.service)
    if settings.components:
        logger.info("Registered %d components from configuration", len(settings.components))
    return len(settings.components)
