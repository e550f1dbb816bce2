"""Error taxonomy for the object container.

Strict operations surface these directly. Lenient operations only absorb
`ServiceNotRegisteredError` and `ConstructionError`.
"""
from container_lib.components.keys import type_label


class ContainerError(Exception):
    """Base class for every error raised by the container package."""


class RegistrationError(ContainerError):
    """A registration call was rejected."""


class RegistrationTypeMismatchError(RegistrationError, TypeError):
    """The implementer does not satisfy the declared service type."""


class RegistrationConflictError(RegistrationError):
    """An explicit service name is already taken for the service type."""


class ServiceNotRegisteredError(ContainerError, LookupError):
    def __init__(self, service_type, service_name=None):
        self.service_type = service_type
        self.service_name = service_name
        label = type_label(service_type)
        if service_name is None:
            msg = f"No default registration for service '{label}'"
        else:
            msg = f"No registration for service '{label}' named '{service_name}'"
        super().__init__(msg)


class ConstructionError(ContainerError):
    """The engine could not build an instance (constructor raised, missing
    dependency, circular dependency, factory returned the wrong type)."""


class ContainerAlreadySetError(ContainerError):
    pass


class ContainerNotSetError(ContainerError):
    pass


class ConfigError(ContainerError, ValueError):
    """Invalid container configuration (YAML, engine name, dotted reference)."""
