"""Key-value storage with buffered, all-or-nothing write batches."""

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Hashable, Iterator

from delphi.exceptions import StorageError

logger = logging.getLogger(__name__)

Key = tuple[str, Hashable]  # (namespace, id)

# Operation tags used in ``apply``
SET = "set"
DELETE = "delete"


class _Deleted:
    """Marker for a key deleted inside a pending batch."""

    def __repr__(self) -> str:
        return "<deleted>"


DELETED = _Deleted()


class KeyValueStore(ABC):
    """Minimal storage contract the registry runs on.

    Implementations only need independent key writes; multi-key atomicity
    comes from ``apply``, which backends should implement as a single
    transaction where they can.
    """

    @abstractmethod
    def get(self, key: Key) -> Any | None:
        """Return the value at ``key`` or None."""

    @abstractmethod
    def set(self, key: Key, value: Any) -> None:
        """Store ``value`` at ``key``."""

    @abstractmethod
    def delete(self, key: Key) -> None:
        """Remove ``key``; missing keys are ignored."""

    @abstractmethod
    def scan(self, namespace: str) -> Iterator[tuple[Key, Any]]:
        """Iterate every (key, value) stored under ``namespace``."""

    def apply(self, ops: list[tuple[str, Key, Any]]) -> None:
        """Apply a list of (op, key, value) writes in order."""
        for op, key, value in ops:
            if op == SET:
                self.set(key, value)
            elif op == DELETE:
                self.delete(key)
            else:
                raise StorageError(f"Unknown storage operation {op!r}")


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store.

    Values are copied on the way in and out so callers cannot mutate stored
    records behind the store's back.
    """

    def __init__(self) -> None:
        self._data: dict[Key, Any] = {}

    def get(self, key: Key) -> Any | None:
        value = self._data.get(key)
        return copy.deepcopy(value) if value is not None else None

    def set(self, key: Key, value: Any) -> None:
        if value is None:
            raise StorageError(f"Cannot store None at {key!r}")
        self._data[key] = copy.deepcopy(value)

    def delete(self, key: Key) -> None:
        self._data.pop(key, None)

    def scan(self, namespace: str) -> Iterator[tuple[Key, Any]]:
        for key, value in list(self._data.items()):
            if key[0] == namespace:
                yield key, copy.deepcopy(value)

    def apply(self, ops: list[tuple[str, Key, Any]]) -> None:
        # Stage on a copy and swap, so a bad op leaves nothing half-written
        staged = dict(self._data)
        for op, key, value in ops:
            if op == SET:
                if value is None:
                    raise StorageError(f"Cannot store None at {key!r}")
                staged[key] = copy.deepcopy(value)
            elif op == DELETE:
                staged.pop(key, None)
            else:
                raise StorageError(f"Unknown storage operation {op!r}")
        self._data = staged

    def __len__(self) -> int:
        return len(self._data)


class WriteBatch:
    """Buffer of pending writes over a ``KeyValueStore``.

    Reads see the batch's own pending writes first. Nothing reaches the
    backing store until ``commit``.
    """

    def __init__(self, backend: KeyValueStore) -> None:
        self._backend = backend
        self._pending: dict[Key, Any] = {}

    def get(self, key: Key) -> Any | None:
        if key in self._pending:
            value = self._pending[key]
            return None if value is DELETED else copy.deepcopy(value)
        return self._backend.get(key)

    def set(self, key: Key, value: Any) -> None:
        if value is None:
            raise StorageError(f"Cannot store None at {key!r}")
        self._pending[key] = copy.deepcopy(value)

    def delete(self, key: Key) -> None:
        self._pending[key] = DELETED

    def scan(self, namespace: str) -> Iterator[tuple[Key, Any]]:
        seen = set()
        for key, value in self._backend.scan(namespace):
            seen.add(key)
            if key in self._pending:
                pending = self._pending[key]
                if pending is not DELETED:
                    yield key, copy.deepcopy(pending)
            else:
                yield key, value
        for key, pending in self._pending.items():
            if key[0] == namespace and key not in seen and pending is not DELETED:
                yield key, copy.deepcopy(pending)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def commit(self) -> None:
        """Apply every pending write in one ``apply`` call."""
        if not self._pending:
            return
        ops = [
            (DELETE, key, None) if value is DELETED else (SET, key, value)
            for key, value in self._pending.items()
        ]
        logger.debug("Committing %d buffered writes", len(ops))
        self._backend.apply(ops)
        self._pending.clear()

    def discard(self) -> None:
        if self._pending:
            logger.debug("Discarding %d buffered writes", len(self._pending))
        self._pending.clear()
