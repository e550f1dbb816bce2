"""Bootstrap helpers for the object container.

`configure_container` is the single startup entry point: it picks the
backing engine, builds the `ObjectContainer`, applies the YAML component
registrations and installs the result as the process-wide container.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional

from container_lib.components.container import ObjectContainer
from container_lib.components.current import set_container
from container_lib.components.engine import KernelEngine
from container_lib.components.errors import ConfigError
from container_lib.components.interfaces import EngineProtocol
from container_lib.config.loader import apply_settings, load_settings
from container_lib.logging_config import configure_logging

logger = logging.getLogger(__name__)

ENGINES: Dict[str, Callable[[], EngineProtocol]] = {
    'kernel': KernelEngine,
}


@dataclass
class Config:
    config_path: Optional[Path] = None
    # If None, use the `engine` key from the YAML file
    engine: Optional[str] = None
    configure_logs: bool = False
    install: bool = True


def create_engine(name: str) -> EngineProtocol:
    try:
        factory = ENGINES[name]
    except KeyError:
        raise ConfigError(f"Unknown container engine '{name}' (known: {', '.join(sorted(ENGINES))})")
    return factory()


def use_engine(engine: EngineProtocol) -> ObjectContainer:
    """Wrap `engine` in an `ObjectContainer` and install it process-wide."""
    return set_container(ObjectContainer(engine))


def configure_container(config: Optional[Config] = None) -> ObjectContainer:
    config = config or Config()
    if config.configure_logs:
        configure_logging(config.config_path)

    settings = load_settings(config.config_path)
    engine_name = config.engine or settings.engine
    container = ObjectContainer(create_engine(engine_name))
    apply_settings(container, settings)
    container.build()
    logger.info("Object container ready (engine=%s)", engine_name)

    if config.install:
        set_container(container)
    return container
