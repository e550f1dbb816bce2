"""Request-time access to the object container for FastAPI applications."""
from .resolver import provide, resolve_optional_service, resolve_service

__all__ = [
    "provide",
    "resolve_optional_service",
    "resolve_service",
]
