"""Size, subscript, and iteration protocols layered over the named registry API."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterator, Sequence

__all__ = [
    "CountableMixin",
    "SubscriptMixin",
    "IterableMixin",
    "RegistryIterator",
]


class CountableMixin(ABC):
    """``len()`` support backed by ``count``."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored bindings."""

    def __len__(self) -> int:
        return self.count()


class SubscriptMixin(ABC):
    """``obj[key]`` read, write, membership and deletion as synonyms of the named methods."""

    @abstractmethod
    def has(self, key: str) -> bool: ...

    @abstractmethod
    def get(self, key: str) -> Any: ...

    @abstractmethod
    def set(self, key: str, value: Any) -> Any: ...

    @abstractmethod
    def delete(self, key: str) -> Any: ...

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        self.delete(key)


class IterableMixin(ABC):
    """Iteration over ``(key, resolved value)`` pairs."""

    @abstractmethod
    def keys(self) -> list[str]: ...

    @abstractmethod
    def get(self, key: str) -> Any: ...

    def __iter__(self) -> "RegistryIterator":
        return RegistryIterator(self)


class RegistryIterator(Iterator[tuple[str, Any]]):
    """Forward cursor with explicit rewind.

    The key order is captured from ``keys()`` when the cursor is created and
    on every ``rewind``. Values are resolved lazily, one ``get`` per step, so
    factory keys produce a fresh value on each pass. Adding or removing keys
    during a pass is not supported.
    """

    def __init__(self, source: IterableMixin) -> None:
        self._source = source
        self._keys: Sequence[str] = ()
        self._pointer = 0
        self.rewind()

    def rewind(self) -> None:
        self._keys = tuple(self._source.keys())
        self._pointer = 0

    def valid(self) -> bool:
        return self._pointer < len(self._keys)

    def key(self) -> str:
        if not self.valid():
            raise IndexError("iterator is exhausted")
        return self._keys[self._pointer]

    def current(self) -> Any:
        return self._source.get(self.key())

    def advance(self) -> None:
        self._pointer += 1

    def __iter__(self) -> "RegistryIterator":
        return self

    def __next__(self) -> tuple[str, Any]:
        if not self.valid():
            raise StopIteration
        key = self.key()
        value = self._source.get(key)
        self.advance()
        return key, value
