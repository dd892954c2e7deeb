"""Request-scoped attribute storage."""

from __future__ import annotations

import threading
from typing import Any, Callable, Generic, Hashable, TypeVar

K = TypeVar("K")
V = TypeVar("V")
T = TypeVar("T")


class IdentityMap(Generic[K, V]):
    """Mapping keyed by object identity rather than equality.

    Two keys that compare equal are still distinct entries unless they are
    the same object. Keys are held strongly so their ids cannot be reused
    while the map is alive.
    """

    def __init__(self) -> None:
        self._entries: dict[int, tuple[K, V]] = {}
        self._lock = threading.Lock()

    def put_if_absent(self, key: K, value: V) -> V | None:
        """Store ``value`` unless ``key`` is present; return the previous value."""
        with self._lock:
            entry = self._entries.get(id(key))
            if entry is not None:
                return entry[1]
            self._entries[id(key)] = (key, value)
            return None

    def get(self, key: K, default: V | None = None) -> V | None:
        entry = self._entries.get(id(key))
        return default if entry is None else entry[1]

    def __contains__(self, key: object) -> bool:
        return id(key) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


class RequestAttribute(Generic[T]):
    """Named attribute of a single :class:`RequestScope`."""

    def __init__(self, scope: RequestScope, name: str) -> None:
        self.scope = scope
        self.name = name

    def get(self) -> T | None:
        return self.scope._attributes.get(self.name)

    def compute_if_absent(self, factory: Callable[[str], T]) -> T:
        """Return the attribute, creating it with ``factory(name)`` first if missing."""
        with self.scope._lock:
            if self.name not in self.scope._attributes:
                self.scope._attributes[self.name] = factory(self.name)
            return self.scope._attributes[self.name]

    def remove(self) -> None:
        with self.scope._lock:
            self.scope._attributes.pop(self.name, None)


class RequestScope:
    """Attributes that live for one rendering request.

    A scope is created per request and discarded when the request ends; it
    is never shared between requests.
    """

    def __init__(self) -> None:
        self._attributes: dict[Hashable, Any] = {}
        self._lock = threading.RLock()
        self.closed = False

    def attribute(self, name: str) -> RequestAttribute[Any]:
        if self.closed:
            raise RuntimeError("Request scope is closed")
        return RequestAttribute(self, name)

    def close(self) -> None:
        with self._lock:
            self._attributes.clear()
            self.closed = True

    def __enter__(self) -> RequestScope:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
