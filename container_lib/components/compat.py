"""Registration-time compatibility checks between implementers and services."""
import inspect
from typing import Any, Iterable, Set

from container_lib.components.errors import RegistrationTypeMismatchError
from container_lib.components.keys import type_label

_PROTOCOL_BASES = {'Protocol', 'Generic', 'object'}


def is_protocol(tp: Any) -> bool:
    return bool(getattr(tp, '_is_protocol', False))


def protocol_members(proto: type, include_annotations: bool = True) -> Set[str]:
    """Public member names declared by a Protocol and its protocol bases."""
    names: Set[str] = set()
    for base in proto.__mro__:
        if base.__name__ in _PROTOCOL_BASES and base.__module__ in ('typing', 'builtins', 'typing_extensions'):
            continue
        if not is_protocol(base):
            continue
        names.update(n for n in vars(base) if not n.startswith('_'))
        if include_annotations:
            names.update(n for n in inspect.get_annotations(base) if not n.startswith('_'))
    return names


def _missing(target: Any, members: Iterable[str]) -> list:
    return sorted(m for m in members if not hasattr(target, m))


def check_service_type(service_type: Any) -> None:
    if not isinstance(service_type, type):
        raise RegistrationTypeMismatchError(
            f"Service type must be a class or protocol, got {service_type!r}"
        )


def check_implementation(service_type: type, implementation: Any) -> None:
    """Raise unless `implementation` is a concrete class providing `service_type`.

    Nominal subclassing is checked first. Protocols that reject `issubclass`
    (not runtime checkable, or declaring data members) are checked
    structurally against the methods they declare.
    """
    check_service_type(service_type)
    if not isinstance(implementation, type):
        raise RegistrationTypeMismatchError(
            f"Implementation for '{type_label(service_type)}' must be a class, got {implementation!r}"
        )
    if inspect.isabstract(implementation):
        raise RegistrationTypeMismatchError(
            f"'{type_label(implementation)}' is abstract and cannot be instantiated"
        )
    try:
        ok = issubclass(implementation, service_type)
    except TypeError:
        if not is_protocol(service_type):
            raise
        missing = _missing(implementation, protocol_members(service_type, include_annotations=False))
        ok = not missing
    if not ok:
        raise RegistrationTypeMismatchError(
            f"'{type_label(implementation)}' does not implement '{type_label(service_type)}'"
        )


def check_instance(service_type: type, instance: Any) -> None:
    check_service_type(service_type)
    try:
        ok = isinstance(instance, service_type)
    except TypeError:
        if not is_protocol(service_type):
            raise
        ok = not _missing(instance, protocol_members(service_type))
    if not ok:
        raise RegistrationTypeMismatchError(
            f"Instance of '{type_label(type(instance))}' does not implement '{type_label(service_type)}'"
        )


def instance_satisfies(service_type: type, instance: Any) -> bool:
    try:
        check_instance(service_type, instance)
    except RegistrationTypeMismatchError:
        return False
    return True
