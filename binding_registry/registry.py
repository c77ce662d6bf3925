"""Keyed container that resolves plain values, factories, and services."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from .bindings import (
    Binding,
    Decorator,
    Factory,
    Provider,
    Service,
    factory as _factory,
    is_factory as _is_factory,
    is_service as _is_service,
    service as _service,
    wrap,
)
from .config import RegistrySettings
from .errors import CircularDependencyError, InvalidBindingError, NotFoundError
from .protocols import CountableMixin, IterableMixin, SubscriptMixin

__all__ = ["EntryInfo", "Registry"]


@dataclass(frozen=True)
class EntryInfo:
    """Read-only view of one key, as reported by ``Registry.describe``."""

    key: str
    kind: str
    cached: bool


class Registry(CountableMixin, SubscriptMixin, IterableMixin):
    """Dependency container mapping string keys to bindings.

    Plain values are handed back verbatim. Factories run on every ``get``.
    Services run on the first ``get`` and their result is cached under the
    key until the key is deleted, rebound, or its instance is cleared.
    Providers receive the registry itself so they can pull their own
    dependencies.

    The registry performs no locking; callers sharing one across threads
    must serialize access themselves.
    """

    def __init__(
        self,
        items: Mapping[str, Any] | None = None,
        *,
        settings: RegistrySettings | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.settings = settings or RegistrySettings()
        self.logger = logger or logging.getLogger(__name__)
        self._items: dict[str, Binding] = {}
        self._instances: dict[str, Any] = {}
        self._resolving: list[str] = []
        for key, value in (items or {}).items():
            self.set(key, value)

    def has(self, key: str) -> bool:
        return isinstance(key, str) and key in self._items

    def raw(self, key: str) -> Any:
        """Return the value stored at ``key`` without resolving it."""

        return self._binding(key).raw()

    def get(self, key: str) -> Any:
        """Resolve ``key``, invoking a factory or service binding when needed."""

        binding = self._binding(key)
        if key in self._instances:
            return self._instances[key]

        if not isinstance(binding, (Factory, Service)):
            return binding.resolve(self)

        instance = self._invoke(key, binding)
        if isinstance(binding, Service):
            self.logger.debug("service %s instantiated and cached", key)
            self._instances[key] = instance
        return instance

    def set(self, key: str, value: Any) -> "Registry":
        """Bind ``value`` to ``key``, replacing any previous binding."""

        replacing = key in self._items
        self._items[key] = wrap(value)
        if replacing:
            self._invalidate_on_rebind(key)
        self.logger.debug("bound %s as %s", key, self._items[key].kind)
        return self

    def delete(self, key: str) -> "Registry":
        """Remove the binding and any cached instance; unknown keys are ignored."""

        if not self.has(key):
            return self
        binding = self._items.pop(key)
        self._instances.pop(key, None)
        self.logger.debug("deleted %s binding %s", binding.kind, key)
        return self

    def delete_instance(self, key: str) -> "Registry":
        """Forget the cached instance for ``key``; the binding stays."""

        if isinstance(key, str):
            self._instances.pop(key, None)
        return self

    def delete_all_instances(self) -> "Registry":
        self._instances.clear()
        return self

    def keys(self) -> list[str]:
        return list(self._items)

    @staticmethod
    def factory(provider: Provider) -> Factory:
        return _factory(provider)

    @staticmethod
    def is_factory(value: Any) -> bool:
        return _is_factory(value)

    @staticmethod
    def service(provider: Provider) -> Service:
        return _service(provider)

    @staticmethod
    def is_service(value: Any) -> bool:
        return _is_service(value)

    def extend(self, key: str, decorator: Decorator) -> Factory | Service:
        """Wrap the factory or service at ``key`` so ``decorator`` post-processes its result.

        The decorator receives the instance produced by the current binding and
        the registry, and returns the value to hand out. The new binding keeps
        the kind of the one it replaces and is stored at ``key``.
        """

        binding = self._binding(key)
        if not isinstance(binding, (Factory, Service)):
            raise InvalidBindingError(key)

        extended = binding.decorated(decorator)
        self._items[key] = extended
        self._invalidate_on_rebind(key)
        self.logger.debug("extended %s binding %s", extended.kind, key)
        return extended

    def reset(self) -> "Registry":
        """Drop every binding and cached instance."""

        self._items.clear()
        self._instances.clear()
        self.logger.debug("registry reset")
        return self

    def count(self) -> int:
        return len(self._items)

    def describe(self) -> tuple[EntryInfo, ...]:
        """Report kind and cache state for every key without resolving anything."""

        return tuple(
            EntryInfo(key=key, kind=binding.kind, cached=key in self._instances)
            for key, binding in self._items.items()
        )

    def _binding(self, key: str) -> Binding:
        if not self.has(key):
            raise NotFoundError(key)
        return self._items[key]

    def _invoke(self, key: str, binding: Factory | Service) -> Any:
        if self.settings.detect_cycles and key in self._resolving:
            start = self._resolving.index(key)
            raise CircularDependencyError([*self._resolving[start:], key])

        self._resolving.append(key)
        try:
            return binding.resolve(self)
        finally:
            self._resolving.pop()

    def _invalidate_on_rebind(self, key: str) -> None:
        if not self.settings.invalidate_on_overwrite:
            return
        if key in self._instances:
            del self._instances[key]
            self.logger.debug("dropped cached instance for rebound key %s", key)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(count={self.count()}, keys={self.keys()!r})"
