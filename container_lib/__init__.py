"""Object/service container with singleton and transient lifecycles."""

from container_lib.components import (
    ConstructionError,
    ContainerError,
    KernelEngine,
    Lifecycle,
    ObjectContainer,
    RegistrationConflictError,
    RegistrationError,
    RegistrationTypeMismatchError,
    Resolution,
    ServiceKey,
    ServiceNotRegisteredError,
    get_container,
    set_container,
)

__all__ = [
    "ObjectContainer",
    "KernelEngine",
    "Lifecycle",
    "Resolution",
    "ServiceKey",
    "get_container",
    "set_container",
    "ContainerError",
    "RegistrationError",
    "RegistrationTypeMismatchError",
    "RegistrationConflictError",
    "ServiceNotRegisteredError",
    "ConstructionError",
]
