"""Tagged binding variants stored at registry keys."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Callable, ClassVar

if TYPE_CHECKING:  # pragma: no cover - type narrowing only
    from .registry import Registry

__all__ = [
    "Binding",
    "Plain",
    "Factory",
    "Service",
    "Provider",
    "Decorator",
    "factory",
    "service",
    "is_factory",
    "is_service",
    "wrap",
]

Provider = Callable[["Registry"], Any]
Decorator = Callable[[Any, "Registry"], Any]


class Binding(ABC):
    """Base interface for values stored at a registry key."""

    kind: ClassVar[str]

    @abstractmethod
    def resolve(self, registry: "Registry") -> Any:
        """Produce the value handed out by ``Registry.get``."""

    @abstractmethod
    def raw(self) -> Any:
        """Return the value exactly as it was passed to ``Registry.set``."""


@dataclass(frozen=True)
class Plain(Binding):
    """Any untagged value, callables included; resolved verbatim."""

    kind: ClassVar[str] = "plain"

    value: Any

    def resolve(self, registry: "Registry") -> Any:
        return self.value

    def raw(self) -> Any:
        return self.value


@dataclass(frozen=True, eq=False)
class _CallableBinding(Binding):
    provider: Provider

    def __post_init__(self) -> None:
        if not callable(self.provider):
            raise TypeError(
                f"{type(self).__name__.lower()} bindings require a callable, "
                f"got {type(self.provider).__name__}."
            )

    def __call__(self, registry: "Registry") -> Any:
        return self.provider(registry)

    def resolve(self, registry: "Registry") -> Any:
        return self(registry)

    def raw(self) -> Any:
        return self

    def decorated(self, decorator: Decorator) -> "_CallableBinding":
        """Return a binding of the same kind that post-processes this one."""

        def extended(registry: "Registry") -> Any:
            return decorator(self(registry), registry)

        return replace(self, provider=extended)


class Factory(_CallableBinding):
    """Callable binding invoked on every resolution."""

    kind: ClassVar[str] = "factory"


class Service(_CallableBinding):
    """Callable binding invoked once; the result is cached per key."""

    kind: ClassVar[str] = "service"


def factory(provider: Provider) -> Factory:
    """Tag ``provider`` as a factory. Usable as a bare decorator."""
    return Factory(provider)


def service(provider: Provider) -> Service:
    """Tag ``provider`` as a service. Usable as a bare decorator."""
    return Service(provider)


def is_factory(value: Any) -> bool:
    return isinstance(value, Factory)


def is_service(value: Any) -> bool:
    return isinstance(value, Service)


def wrap(value: Any) -> Binding:
    """Return ``value`` as a binding, wrapping untagged values in ``Plain``."""

    if isinstance(value, _CallableBinding):
        return value
    return Plain(value)
