"""Custom errors raised by the binding registry."""

from __future__ import annotations

from typing import Sequence


class RegistryError(Exception):
    """Base class for binding registry errors."""


class NotFoundError(RegistryError, KeyError):
    """Raised when a key has no binding."""

    def __init__(self, key: str) -> None:
        super().__init__(f'Identifier "{key}" is not defined.')
        self.key = key

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class InvalidBindingError(RegistryError, TypeError):
    """Raised when extending a key that holds neither a factory nor a service."""

    def __init__(self, key: str) -> None:
        super().__init__(f'Identifier "{key}" does not contain an object definition.')
        self.key = key


class CircularDependencyError(RegistryError, RuntimeError):
    """Raised when resolving a key re-enters its own resolution."""

    def __init__(self, chain: Sequence[str]) -> None:
        message = f"circular dependency detected: {' -> '.join(chain)}"
        super().__init__(message)
        self.chain = tuple(chain)
