"""Keyed dependency container with lazy factories, cached services, and extension."""

from .bindings import (
    Binding,
    Factory,
    Plain,
    Service,
    factory,
    is_factory,
    is_service,
    service,
)
from .config import RegistrySettings, default_config_path
from .errors import (
    CircularDependencyError,
    InvalidBindingError,
    NotFoundError,
    RegistryError,
)
from .protocols import RegistryIterator
from .registry import EntryInfo, Registry

__all__ = [
    "Registry",
    "RegistryIterator",
    "EntryInfo",
    "RegistrySettings",
    "default_config_path",
    "Binding",
    "Plain",
    "Factory",
    "Service",
    "factory",
    "service",
    "is_factory",
    "is_service",
    "RegistryError",
    "NotFoundError",
    "InvalidBindingError",
    "CircularDependencyError",
]
