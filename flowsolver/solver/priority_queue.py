"""Minimal priority queue used by the A* open set.

A plain list scanned for the minimum on every dequeue.  There is no
decrease-key: callers check ``contains`` before pushing, and equal
priorities come out in insertion order.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Generic, TypeVar

from .models import EmptyQueueError


T = TypeVar("T", bound=Hashable)


class PriorityQueue(Generic[T]):

    def __init__(self) -> None:
        self._elements: list[tuple[T, float]] = []

    def __len__(self) -> int:
        return len(self._elements)

    def __bool__(self) -> bool:
        return bool(self._elements)

    def enqueue(self, item: T, priority: float) -> None:
        """Append *item* unconditionally."""
        self._elements.append((item, float(priority)))

    def dequeue(self) -> T:
        """Remove and return the item with the lowest priority.

        Ties go to the earliest inserted element: only a strictly
        smaller priority replaces the current best during the scan.
        """
        if not self._elements:
            raise EmptyQueueError("dequeue from an empty priority queue")

        best_index = 0
        best_priority = self._elements[0][1]
        for i in range(1, len(self._elements)):
            if self._elements[i][1] < best_priority:
                best_priority = self._elements[i][1]
                best_index = i

        item, _ = self._elements.pop(best_index)
        return item

    def contains(self, item: T) -> bool:
        return any(e == item for e, _ in self._elements)

    __contains__ = contains
