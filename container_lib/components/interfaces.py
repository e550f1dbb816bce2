from typing import Any, Iterable, Optional, Protocol, Type, TypeVar, runtime_checkable

from container_lib.components.keys import Registration
from container_lib.components.lifecycle import Lifecycle
from container_lib.components.result import Resolution

T = TypeVar("T")


@runtime_checkable
class EngineProtocol(Protocol):
    """Backing engine contract consumed by `ObjectContainer`.

    Implementations raise `KeyError` when nothing is registered for the
    requested key and `ActivationError` (or a subclass) when an instance
    cannot be built.
    """

    def add(self, registration: Registration) -> None: ...

    def resolve(self, service_type: Any, name: Optional[str] = None) -> Any: ...

    def contains(self, service_type: Any, name: Optional[str] = None) -> bool: ...

    def registrations(self) -> Iterable[Registration]: ...


@runtime_checkable
class ObjectContainerProtocol(Protocol):
    """Public surface of the object container."""

    def register_type(self, service_type: Any, implementation_type: Any = None, *,
                      service_name: Optional[str] = None,
                      lifecycle: Lifecycle = Lifecycle.SINGLETON) -> None: ...

    def register(self, service_type: Type[T], implementer: Type[T], *,
                 service_name: Optional[str] = None,
                 lifecycle: Lifecycle = Lifecycle.SINGLETON) -> None: ...

    def register_instance(self, instance: Any, service_type: Any = None, *,
                          service_name: Optional[str] = None) -> None: ...

    def resolve(self, service_type: Type[T]) -> T: ...

    def try_resolve(self, service_type: Type[T]) -> Resolution[T]: ...

    def resolve_named(self, service_name: str, service_type: Type[T]) -> T: ...

    def try_resolve_named(self, service_name: str, service_type: Type[T]) -> Resolution[T]: ...
