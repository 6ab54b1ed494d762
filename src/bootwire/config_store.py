"""Ordered key-value storage for constructor configuration.

A :class:`ConfigStore` holds the values a resolver passes to a class's
scalar constructor parameters, keyed by parameter name. Stores registered
for a class and its ancestors are folded together into a single store when
that class is resolved, so the store supports merging another store into it
with later entries overwriting earlier ones.

Example:
    >>> store = ConfigStore().add("host", "localhost").add("port", 8080)
    >>> store.get("port")
    8080
    >>> list(store)
    ['host', 'port']
"""

from typing import Any, Iterator, Mapping, Optional

from bootwire.errors import InvalidKeyError

__all__ = ["ConfigStore"]


class ConfigStore:
    """Mapping from non-empty string keys to arbitrary values, in insertion order.

    Iterating a store yields its keys; iteration can be restarted any number of
    times and yields the same sequence while the store is not modified.
    """

    def __init__(self, entries: Optional[Mapping[str, Any]] = None):
        self._data: dict[str, Any] = {}
        if entries:
            for key, value in entries.items():
                self.add(key, value)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "ConfigStore":
        """Copy a plain mapping into a new store, validating every key."""
        return cls(mapping)

    def add(self, key: str, value: Any) -> "ConfigStore":
        """Insert or overwrite the value stored under ``key``.

        Args:
            key: A non-empty string.
            value: Any value, including None.

        Returns:
            This store, so calls can be chained.

        Raises:
            InvalidKeyError: If ``key`` is empty or not a string.
        """
        if not isinstance(key, str) or not key:
            raise InvalidKeyError(f"Key cannot be empty, got {key!r}.")

        self._data[key] = value
        return self

    def get(self, key: str) -> Any:
        """Return the value stored under ``key``.

        Raises:
            KeyError: If nothing is stored under ``key``; check with :meth:`has` first.
        """
        return self._data[key]

    def has(self, key: str) -> bool:
        return key in self._data

    def delete(self, key: str) -> "ConfigStore":
        self._data.pop(key, None)
        return self

    def merge(self, other: "ConfigStore") -> "ConfigStore":
        """Fold every entry of ``other`` into this store, overwriting same-named keys."""
        for key, value in other.items():
            self.add(key, value)
        return self

    def items(self) -> Iterator[tuple[str, Any]]:
        return iter(list(self._data.items()))

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._data))

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigStore):
            return NotImplemented
        return list(self._data.items()) == list(other._data.items())

    def __repr__(self) -> str:
        return f"ConfigStore({self._data!r})"
