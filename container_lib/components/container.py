"""Object container façade.

`ObjectContainer` normalises whatever the backing engine offers into two
resolution families:

- strict (`resolve`, `resolve_named`): failures propagate as
  `ServiceNotRegisteredError` or `ConstructionError`;
- lenient (`try_resolve`, `try_resolve_named`): failures become
  `Resolution(found=False, instance=None)`.

Registration validates type compatibility up front, so a bad registration
never surfaces later as a resolution failure.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Type, TypeVar

from container_lib.components import compat
from container_lib.components.engine import ActivationError, KernelEngine
from container_lib.components.errors import (
    ConstructionError,
    RegistrationConflictError,
    RegistrationError,
    RegistrationTypeMismatchError,
    ServiceNotRegisteredError,
)
from container_lib.components.interfaces import EngineProtocol
from container_lib.components.keys import Registration, ServiceKey, auto_name, type_label
from container_lib.components.lifecycle import Lifecycle
from container_lib.components.result import MISSING, Resolution

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ObjectContainer:
    def __init__(self, engine: Optional[EngineProtocol] = None) -> None:
        self._engine: EngineProtocol = engine if engine is not None else KernelEngine()
        self._built = False

    @property
    def engine(self) -> EngineProtocol:
        return self._engine

    def build(self) -> "ObjectContainer":
        """Mark the end of the registration phase."""
        self._built = True
        logger.info("Object container built with %d registrations", len(self.registrations()))
        return self

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register_type(self, service_type: Any, implementation_type: Any = None, *,
                      service_name: Optional[str] = None,
                      lifecycle: Lifecycle = Lifecycle.SINGLETON) -> None:
        """Register a type.

        With a single type the class is registered as its own service. With
        two, `implementation_type` is registered as the provider of
        `service_type`.
        """
        if implementation_type is None:
            implementation_type = service_type
        compat.check_implementation(service_type, implementation_type)
        self._add(service_type, service_name, Lifecycle(lifecycle),
                  implementation=implementation_type)

    def register(self, service_type: Type[T], implementer: Type[T], *,
                 service_name: Optional[str] = None,
                 lifecycle: Lifecycle = Lifecycle.SINGLETON) -> None:
        self.register_type(service_type, implementer,
                           service_name=service_name, lifecycle=lifecycle)

    def register_instance(self, instance: Any, service_type: Any = None, *,
                          service_name: Optional[str] = None) -> None:
        """Bind a pre-built object. It is stored as transient and handed out as-is."""
        if service_type is None:
            service_type = type(instance)
        compat.check_instance(service_type, instance)
        self._add(service_type, service_name, Lifecycle.TRANSIENT, instance=instance)

    def register_factory(self, service_type: Type[T], factory: Callable[[], T], *,
                         service_name: Optional[str] = None,
                         lifecycle: Lifecycle = Lifecycle.SINGLETON) -> None:
        compat.check_service_type(service_type)
        if not callable(factory):
            raise RegistrationTypeMismatchError(
                f"Factory for '{type_label(service_type)}' is not callable: {factory!r}"
            )
        self._add(service_type, service_name, Lifecycle(lifecycle), factory=factory)

    def _add(self, service_type: Any, service_name: Optional[str],
             lifecycle: Lifecycle, **provider: Any) -> None:
        if service_name is not None:
            if not isinstance(service_name, str) or not service_name:
                raise RegistrationError(f"Invalid service name {service_name!r}")
            if self._engine.contains(service_type, service_name):
                raise RegistrationConflictError(
                    f"'{type_label(service_type)}' already has a registration named '{service_name}'"
                )
            key = ServiceKey(service_type, service_name)
            is_default = False
        else:
            source = provider.get('implementation') or provider.get('factory')
            if source is None:
                source = type(provider['instance'])
            name = auto_name(source, lambda n: self._engine.contains(service_type, n))
            key = ServiceKey(service_type, name, auto=True)
            is_default = True

        if self._built:
            logger.warning("Registering %s after the container was built", key)
        registration = Registration(key=key, lifecycle=lifecycle, is_default=is_default, **provider)
        try:
            self._engine.add(registration)
        except KeyError as exc:
            raise RegistrationConflictError(str(exc)) from exc
        logger.debug("Registered %s -> %s (%s%s)", key, type_label(registration.provider),
                     lifecycle.value, ", default" if is_default else "")

    # ------------------------------------------------------------------
    # Strict resolution
    # ------------------------------------------------------------------
    def resolve(self, service_type: Type[T]) -> T:
        return self._resolve(service_type, None)

    def resolve_named(self, service_name: str, service_type: Type[T]) -> T:
        return self._resolve(service_type, service_name)

    def _resolve(self, service_type: Any, service_name: Optional[str]) -> Any:
        try:
            return self._engine.resolve(service_type, service_name)
        except KeyError as exc:
            raise ServiceNotRegisteredError(service_type, service_name) from exc
        except ActivationError as exc:
            raise ConstructionError(str(exc)) from exc

    # ------------------------------------------------------------------
    # Lenient resolution
    # ------------------------------------------------------------------
    def try_resolve(self, service_type: Type[T]) -> Resolution[T]:
        return self._try_resolve(service_type, None)

    def try_resolve_named(self, service_name: str, service_type: Type[T]) -> Resolution[T]:
        return self._try_resolve(service_type, service_name)

    def _try_resolve(self, service_type: Any, service_name: Optional[str]) -> Resolution:
        try:
            return Resolution(True, self._resolve(service_type, service_name))
        except (ServiceNotRegisteredError, ConstructionError) as exc:
            logger.debug("Lenient lookup of %s failed: %s",
                         ServiceKey(service_type, service_name), exc)
            return MISSING
        except Exception as exc:
            # Engines other than KernelEngine may signal failures differently
            logger.debug("Lenient lookup of %s failed in engine: %s",
                         ServiceKey(service_type, service_name), exc)
            return MISSING

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def is_registered(self, service_type: Any, service_name: Optional[str] = None) -> bool:
        try:
            return self._engine.contains(service_type, service_name)
        except TypeError:
            return False

    def registrations(self) -> List[Registration]:
        return list(self._engine.registrations())
