# min-heap used to rank exploration candidates
# src/nav_core/explore/priority_queue.py
"""
Binary min-heap keyed by a numeric priority.

Unlike `heapq` over tuples, only priorities are ever compared, so values
do not need to be orderable. Equal priorities come out in heap order, which
is NOT insertion order; callers must not rely on tie-break stability.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass
class QueueItem(Generic[T]):
    value: T
    priority: float


class PriorityQueue(Generic[T]):
    """
    Array-backed heap with 1-indexed arithmetic.

    Slot 0 of `_heap` is an unused sentinel so that for node i the parent
    is i // 2 and the children are 2i and 2i + 1.
    """

    def __init__(self) -> None:
        self._heap: List[Optional[QueueItem[T]]] = [None]

    def __len__(self) -> int:
        return len(self._heap) - 1

    def __bool__(self) -> bool:
        return len(self) > 0

    def push(self, value: T, priority: float) -> None:
        self._heap.append(QueueItem(value=value, priority=float(priority)))
        self._sift_up(len(self))

    def pop(self) -> Optional[QueueItem[T]]:
        """Remove and return the minimum-priority item, or None when empty."""
        size = len(self)
        if size == 0:
            return None
        top = self._heap[1]
        last = self._heap.pop()
        if size > 1:
            self._heap[1] = last
            self._sift_down(1)
        return top

    def peek(self) -> Optional[QueueItem[T]]:
        return self._heap[1] if len(self) else None

    def clear(self) -> None:
        self._heap = [None]

    # ------------------------------------------------------------------
    # Heap maintenance
    # ------------------------------------------------------------------

    def _priority(self, index: int) -> float:
        item = self._heap[index]
        assert item is not None
        return item.priority

    def _swap(self, a: int, b: int) -> None:
        self._heap[a], self._heap[b] = self._heap[b], self._heap[a]

    def _sift_up(self, index: int) -> None:
        parent = index // 2
        while index > 1 and self._priority(index) < self._priority(parent):
            self._swap(index, parent)
            index, parent = parent, parent // 2

    def _sift_down(self, index: int) -> None:
        size = len(self)
        while True:
            smallest, left, right = index, 2 * index, 2 * index + 1
            if left <= size and self._priority(left) < self._priority(smallest):
                smallest = left
            if right <= size and self._priority(right) < self._priority(smallest):
                smallest = right
            if smallest == index:
                return
            self._swap(index, smallest)
            index = smallest
