"""Registration table records: service keys and registrations."""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from container_lib.components.lifecycle import Lifecycle

# Marks a singleton slot that has not been filled yet. `None` is a valid
# product of a factory, so it cannot be used for this.
_UNSET = object()


@dataclass(frozen=True)
class ServiceKey:
    service_type: Any
    name: Optional[str] = None
    # Set for names derived from the implementation; not part of identity
    auto: bool = field(default=False, compare=False)

    def __str__(self) -> str:
        label = type_label(self.service_type)
        return label if self.name is None or self.auto else f"{label}[{self.name}]"


@dataclass(eq=False)
class Registration:
    """One entry of the registration table.

    Exactly one of `implementation`, `instance` or `factory` is set. Entries
    are never mutated after being added to an engine except for the singleton
    cache slot, which is filled at most once under `lock`.
    """

    key: ServiceKey
    lifecycle: Lifecycle = Lifecycle.SINGLETON
    implementation: Optional[type] = None
    instance: Any = _UNSET
    factory: Optional[Callable[[], Any]] = None
    is_default: bool = False
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    cached: Any = field(default=_UNSET, init=False, repr=False)

    @property
    def service_type(self) -> Any:
        return self.key.service_type

    @property
    def name(self) -> Optional[str]:
        return self.key.name

    @property
    def has_instance(self) -> bool:
        return self.instance is not _UNSET

    @property
    def is_cached(self) -> bool:
        return self.cached is not _UNSET

    @property
    def provider(self) -> Any:
        if self.has_instance:
            return self.instance
        return self.implementation if self.implementation is not None else self.factory


def type_label(obj: Any) -> str:
    """Fully qualified label for a type or callable, e.g. ``pkg.mod.Class``."""
    module = getattr(obj, '__module__', None)
    qualname = getattr(obj, '__qualname__', None) or getattr(obj, '__name__', None)
    if qualname is None:
        return repr(obj)
    if module in (None, 'builtins'):
        return qualname
    return f"{module}.{qualname}"


def auto_name(provider: Any, taken: Callable[[str], bool]) -> str:
    """Derive a bookkeeping name for an unnamed registration.

    The base name is the provider's fully qualified label. If it is already
    used for the same service type a ``#n`` suffix is appended so that
    re-registering the same implementation adds a new entry.
    """
    base = type_label(provider)
    candidate = base
    n = 1
    while taken(candidate):
        n += 1
        candidate = f"{base}#{n}"
    return candidate
