#!/usr/bin/env python3
"""
Bounded position history for bodies.

TrailBuffer is a fixed-capacity ring buffer: appends are O(1) and, once full,
each append overwrites the oldest point. Iteration and every exported form are
chronological (oldest first) and only cover the points actually recorded.
"""
from typing import Iterator, List, Optional

from .vector_utils import Vec3


class TrailBuffer:
    """
    Ring buffer of past positions.

    Storage is a preallocated list; ``_start`` indexes the oldest point and
    ``_size`` counts the valid points.
    """

    def __init__(self, capacity: int):
        if int(capacity) < 1:
            raise ValueError(f"trail capacity must be >= 1, got {capacity}")
        self._capacity = int(capacity)
        self._items: List[Optional[Vec3]] = [None] * self._capacity
        self._start = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Vec3]:
        for i in range(self._size):
            yield self._items[(self._start + i) % self._capacity]

    def __getitem__(self, index: int) -> Vec3:
        if index < 0:
            index += self._size
        if not 0 <= index < self._size:
            raise IndexError("trail index out of range")
        return self._items[(self._start + index) % self._capacity]

    def __repr__(self) -> str:
        return f"TrailBuffer(capacity={self._capacity}, size={self._size})"

    def append(self, position: Vec3) -> None:
        """Record a position, evicting the oldest one when the buffer is full."""
        if self._size < self._capacity:
            self._items[(self._start + self._size) % self._capacity] = position
            self._size += 1
        else:
            self._items[self._start] = position
            self._start = (self._start + 1) % self._capacity

    def points(self) -> List[Vec3]:
        return list(self)

    def as_flat(self) -> List[float]:
        """Flat [x0, y0, z0, x1, ...] coordinates of the valid range, for renderers."""
        flat: List[float] = []
        for p in self:
            flat.extend(p)
        return flat

    def clear(self) -> None:
        self._items = [None] * self._capacity
        self._start = 0
        self._size = 0

    def resize(self, capacity: int) -> None:
        """Change capacity, keeping the most recent points that still fit."""
        if int(capacity) < 1:
            raise ValueError(f"trail capacity must be >= 1, got {capacity}")
        kept = self.points()[-int(capacity):]
        self._capacity = int(capacity)
        self._items = [None] * self._capacity
        self._items[:len(kept)] = kept
        self._start = 0
        self._size = len(kept)
