"""Process-wide container accessor.

Set once during startup, read many times afterwards. Components that can take
the container as an argument should do so; this accessor exists for code
that has no other way to reach it.
"""
import logging
import threading
from typing import Optional

from container_lib.components.container import ObjectContainer
from container_lib.components.errors import ContainerAlreadySetError, ContainerNotSetError

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_current: Optional[ObjectContainer] = None


def set_container(container: ObjectContainer) -> ObjectContainer:
    global _current
    if container is None:
        raise ValueError("container must not be None")
    with _lock:
        if _current is not None:
            raise ContainerAlreadySetError("The process-wide object container is already set")
        _current = container
    logger.debug("Process-wide object container set (%s)", type(container.engine).__name__)
    return container


def get_container() -> ObjectContainer:
    container = _current
    if container is None:
        raise ContainerNotSetError("The process-wide object container has not been set")
    return container


def has_container() -> bool:
    return _current is not None
