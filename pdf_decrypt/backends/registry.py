"""Registry of available decryption backends."""

from __future__ import annotations

from typing import Dict, Iterable

from ..exceptions import ArgumentError
from .base import DecryptBackend


class BackendRegistry:
    """Registry storing decryption backends by identifier."""

    def __init__(self) -> None:
        self._backends: Dict[str, DecryptBackend] = {}

    def register(self, backend: DecryptBackend) -> DecryptBackend:
        if backend.name in self._backends:
            raise ValueError(f"Backend '{backend.name}' is already registered")
        self._backends[backend.name] = backend
        return backend

    def get(self, name: str) -> DecryptBackend | None:
        return self._backends.get(name)

    def names(self) -> Iterable[str]:
        return sorted(self._backends.keys())

    def resolve(self, names: Iterable[str]) -> list[DecryptBackend]:
        """Return backends for *names* in order, rejecting unknown identifiers."""

        names = list(names)
        unknown = [name for name in names if name not in self._backends]
        if unknown:
            raise ArgumentError(
                f"Unknown backend(s): {', '.join(unknown)}. "
                f"Choose from: {', '.join(self.names())}"
            )
        return [self._backends[name] for name in names]

    def __contains__(self, name: object) -> bool:
        return name in self._backends

    def __len__(self) -> int:
        return len(self._backends)


registry = BackendRegistry()


def register_backend(backend: DecryptBackend) -> DecryptBackend:
    return registry.register(backend)


__all__ = ["BackendRegistry", "registry", "register_backend"]
