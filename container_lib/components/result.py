from typing import Generic, NamedTuple, Optional, TypeVar

T = TypeVar("T")


class Resolution(NamedTuple, Generic[T]):
    """Outcome of a lenient lookup.

    Unpacks like the classic ``(found, instance)`` pair::

        found, logger = container.try_resolve(Logger)
    """

    found: bool
    instance: Optional[T] = None


MISSING: Resolution = Resolution(False, None)
