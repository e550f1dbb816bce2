from typing import Any, Callable, Optional
from fastapi import HTTPException
from starlette.requests import Request

from container_lib.components.errors import ConstructionError, ServiceNotRegisteredError
from container_lib.components.keys import type_label


def _container(request: Request) -> Any:
    return getattr(request.app.state, 'container', None)


def resolve_service(request: Request, service_type: Any, service_name: Optional[str] = None) -> Any:
    """Resolve a service from the `ObjectContainer` stored on `app.state.container`.

    A missing container, a missing registration or a failed construction is
    reported as HTTP 500.
    """
    container = _container(request)
    if container is None:
        raise HTTPException(status_code=500, detail="Service container not configured")
    label = type_label(service_type) if service_name is None else f"{type_label(service_type)}[{service_name}]"
    try:
        if service_name is None:
            return container.resolve(service_type)
        return container.resolve_named(service_name, service_type)
    except ServiceNotRegisteredError:
        raise HTTPException(status_code=500, detail=f"Service '{label}' not configured")
    except ConstructionError:
        raise HTTPException(status_code=500, detail=f"Service '{label}' could not be created")


def resolve_optional_service(request: Request, service_type: Any, service_name: Optional[str] = None) -> Any:
    """Resolve an optional service, returning None if it is not available."""
    container = _container(request)
    if container is None:
        return None
    if service_name is None:
        found, instance = container.try_resolve(service_type)
    else:
        found, instance = container.try_resolve_named(service_name, service_type)
    return instance if found else None


def provide(service_type: Any, service_name: Optional[str] = None, optional: bool = False) -> Callable[[Request], Any]:
    """Build a FastAPI dependency for `Depends(...)`.

        @app.get('/log')
        def log(logger: Logger = Depends(provide(Logger))): ...
    """
    def dependency(request: Request) -> Any:
        if optional:
            return resolve_optional_service(request, service_type, service_name)
        return resolve_service(request, service_type, service_name)

    dependency.__name__ = f"provide_{getattr(service_type, '__name__', 'service')}"
    return dependency
