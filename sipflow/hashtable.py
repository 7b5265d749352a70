"""Fixed-size string-keyed hash table with chained buckets."""

from __future__ import annotations

from typing import Any

_SIZE_MASK = (1 << 64) - 1


class HashTable:
    """Hash table with a fixed number of buckets.

    The number of buckets should be a power of two, since positions are
    taken by masking the hash with ``size - 1``. Inserting a key that is
    already present adds another entry; lookups return the oldest one.
    """

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError(f"hash table size must be positive, got {size}")
        self.size = size
        self._buckets: list[list[tuple[str, Any]]] = [[] for _ in range(size)]

    def insert(self, key: str, data: Any) -> None:
        """Append an entry for ``key`` to the end of its bucket."""
        self._buckets[self.hash(key)].append((key, data))

    def remove(self, key: str) -> None:
        """Remove the first entry stored for ``key``, if any."""
        bucket = self._buckets[self.hash(key)]
        for position, (entry_key, _) in enumerate(bucket):
            if entry_key == key:
                del bucket[position]
                return

    def find(self, key: str) -> Any:
        """Return the data of the first entry for ``key``, or None."""
        for entry_key, data in self._buckets[self.hash(key)]:
            if entry_key == key:
                return data
        return None

    def hash(self, key: str) -> int:
        """Return the bucket position of ``key``.

        The hash starts at 5381 and, once per byte of the key, multiplies
        by 33 and mixes in the byte that follows (the final round mixes in
        a zero terminator), so the first byte never affects the result.
        """
        raw = key.encode("utf-8")
        value = 5381
        for following in (*raw[1:], 0):
            signed = following if following < 0x80 else (following - 0x100) & _SIZE_MASK
            value = (((value << 5) + value) & _SIZE_MASK) ^ signed
        return value & (self.size - 1)

    def __contains__(self, key: str) -> bool:
        return any(entry_key == key for entry_key, _ in self._buckets[self.hash(key)])