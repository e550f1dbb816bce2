"""Backing registration/resolution engine.

The engine owns the raw registration table, builds instances (wiring
annotated constructor parameters from its own defaults) and caches
singletons. It signals a missing key with `KeyError` and any failure to
build with `ActivationError`; `ObjectContainer` translates both into the
public error taxonomy.
"""
from __future__ import annotations

import inspect
import logging
import threading
from typing import Any, Dict, List, Optional

from container_lib.components.compat import instance_satisfies
from container_lib.components.keys import Registration, ServiceKey, type_label
from container_lib.components.lifecycle import Lifecycle

logger = logging.getLogger(__name__)


class ActivationError(RuntimeError):
    """Raised when a registration exists but an instance could not be built."""

    def __init__(self, key: ServiceKey, message: str):
        self.key = key
        super().__init__(f"Cannot build '{key}': {message}")


class KernelEngine:
    """In-process engine keyed by `ServiceKey`.

    Registration is expected to finish before concurrent resolution starts,
    so the table itself is only guarded against torn writes. Singleton
    construction is construct-once under the registration's own lock.
    """

    def __init__(self) -> None:
        self._table_lock = threading.RLock()
        self._registrations: Dict[ServiceKey, Registration] = {}
        self._defaults: Dict[Any, ServiceKey] = {}
        self._order: List[Registration] = []
        self._local = threading.local()
        # Cross-thread wait graph for singleton construction
        self._graph_lock = threading.Lock()
        self._owners: Dict[ServiceKey, int] = {}
        self._waiting: Dict[int, ServiceKey] = {}

    # ------------------------------------------------------------------
    # Registration table
    # ------------------------------------------------------------------
    def add(self, registration: Registration) -> None:
        with self._table_lock:
            if registration.key in self._registrations:
                raise KeyError(f"Key '{registration.key}' already registered")
            self._registrations[registration.key] = registration
            self._order.append(registration)
            if registration.is_default:
                self._defaults[registration.service_type] = registration.key

    def contains(self, service_type: Any, name: Optional[str] = None) -> bool:
        key = self._lookup_key(service_type, name)
        return key is not None and key in self._registrations

    def registrations(self) -> List[Registration]:
        with self._table_lock:
            return list(self._order)

    def _lookup_key(self, service_type: Any, name: Optional[str]) -> Optional[ServiceKey]:
        if name is None:
            return self._defaults.get(service_type)
        return ServiceKey(service_type, name)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def resolve(self, service_type: Any, name: Optional[str] = None) -> Any:
        try:
            key = self._lookup_key(service_type, name)
            registration = self._registrations.get(key) if key is not None else None
        except TypeError:
            # unhashable service types can never have been registered
            registration = None
        if registration is None:
            raise KeyError(f"No service registered for key '{ServiceKey(service_type, name)}'")
        return self._get(registration)

    def _get(self, registration: Registration) -> Any:
        if registration.has_instance:
            return registration.instance
        if registration.lifecycle is Lifecycle.TRANSIENT:
            return self._activate(registration)
        if registration.is_cached:
            return registration.cached
        key = registration.key
        me = threading.get_ident()
        with self._graph_lock:
            owns = self._owners.get(key) == me
            if not owns:
                self._check_wait(key, me)
                self._waiting[me] = key
        try:
            with registration.lock:
                if not owns:
                    with self._graph_lock:
                        self._waiting.pop(me, None)
                        self._owners[key] = me
                try:
                    if not registration.is_cached:
                        registration.cached = self._activate(registration)
                        logger.debug("Cached singleton for %s", key)
                    return registration.cached
                finally:
                    if not owns:
                        with self._graph_lock:
                            self._owners.pop(key, None)
        finally:
            if not owns:
                with self._graph_lock:
                    self._waiting.pop(me, None)

    def _check_wait(self, key: ServiceKey, me: int) -> None:
        """Raise if waiting for `key` would close a cycle of threads.

        Follows owner -> awaited key links; must be called under `_graph_lock`.
        """
        seen = set()
        current = key
        while current is not None and current not in seen:
            seen.add(current)
            owner = self._owners.get(current)
            if owner is None:
                return
            if owner == me:
                raise ActivationError(key, f"circular dependency across threads (waiting on '{current}')")
            current = self._waiting.get(owner)

    def _activate(self, registration: Registration) -> Any:
        stack = self._resolving()
        key = registration.key
        if key in stack:
            chain = " -> ".join(str(k) for k in stack + [key])
            raise ActivationError(key, f"circular dependency ({chain})")
        stack.append(key)
        try:
            if registration.factory is not None:
                product = self._call(key, registration.factory, {})
                if not instance_satisfies(registration.service_type, product):
                    raise ActivationError(
                        key,
                        f"factory returned '{type_label(type(product))}', "
                        f"not a '{type_label(registration.service_type)}'",
                    )
                return product
            impl = registration.implementation
            return self._call(key, impl, self._dependencies(key, impl))
        finally:
            stack.pop()

    def _call(self, key: ServiceKey, provider: Any, kwargs: Dict[str, Any]) -> Any:
        try:
            return provider(**kwargs)
        except ActivationError:
            raise
        except Exception as exc:
            raise ActivationError(key, f"{type(exc).__name__}: {exc}") from exc

    def _resolving(self) -> List[ServiceKey]:
        stack = getattr(self._local, 'stack', None)
        if stack is None:
            stack = self._local.stack = []
        return stack

    # ------------------------------------------------------------------
    # Constructor wiring
    # ------------------------------------------------------------------
    def _dependencies(self, key: ServiceKey, impl: type) -> Dict[str, Any]:
        init = impl.__init__
        if init is object.__init__:
            return {}
        try:
            signature = _signature(init)
        except (TypeError, ValueError):
            return {}
        globalns = getattr(init, '__globals__', {})

        kwargs: Dict[str, Any] = {}
        for index, (pname, param) in enumerate(signature.parameters.items()):
            if index == 0 and pname == 'self':
                continue
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue
            has_default = param.default is not param.empty
            dependency = _evaluate_annotation(param.annotation, globalns)
            if not isinstance(dependency, type):
                if has_default:
                    continue
                raise ActivationError(key, f"cannot satisfy constructor parameter '{pname}'")
            dep_key = self._defaults.get(dependency)
            if dep_key is None:
                if has_default:
                    continue
                raise ActivationError(
                    key, f"missing dependency '{type_label(dependency)}' for parameter '{pname}'"
                )
            kwargs[pname] = self._get(self._registrations[dep_key])
        return kwargs


def _signature(init: Any) -> inspect.Signature:
    try:
        return inspect.signature(init)
    except NameError:
        # Lazily evaluated annotations naming types that only exist for type
        # checkers; keep them as forward references.
        import annotationlib
        return inspect.signature(init, annotation_format=annotationlib.Format.FORWARDREF)


def _evaluate_annotation(annotation: Any, globalns: Dict[str, Any]) -> Any:
    """Evaluate one parameter annotation, or return None if it cannot be."""
    if annotation is inspect.Parameter.empty:
        return None
    ref = getattr(annotation, '__forward_arg__', annotation)
    if not isinstance(ref, str):
        return ref
    try:
        return eval(ref, dict(globalns))
    except Exception:
        logger.debug("Cannot evaluate annotation %r", ref)
        return None
