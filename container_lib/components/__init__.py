"""Object container: registration, lifecycle and resolution of services."""

from .container import ObjectContainer
from .current import get_container, has_container, set_container
from .engine import ActivationError, KernelEngine
from .errors import (
    ConfigError,
    ConstructionError,
    ContainerAlreadySetError,
    ContainerError,
    ContainerNotSetError,
    RegistrationConflictError,
    RegistrationError,
    RegistrationTypeMismatchError,
    ServiceNotRegisteredError,
)
from .interfaces import EngineProtocol, ObjectContainerProtocol
from .keys import Registration, ServiceKey
from .lifecycle import Lifecycle
from .result import Resolution

__all__ = [
    "ObjectContainer",
    "KernelEngine",
    "ActivationError",
    "EngineProtocol",
    "ObjectContainerProtocol",
    "Registration",
    "ServiceKey",
    "Lifecycle",
    "Resolution",
    "get_container",
    "has_container",
    "set_container",
    "ContainerError",
    "RegistrationError",
    "RegistrationTypeMismatchError",
    "RegistrationConflictError",
    "ServiceNotRegisteredError",
    "ConstructionError",
    "ContainerAlreadySetError",
    "ContainerNotSetError",
    "ConfigError",
]
