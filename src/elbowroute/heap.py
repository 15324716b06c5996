"""
Binary min-heap with decrease-key, used by the shortest-path search.

Entries are ordered by (priority, insertion sequence), so equal priorities
come out in the order they were inserted.
"""

from typing import Dict, List, Optional, Tuple


class MinHeap:
    """
    Min-heap of integer ids keyed by priority.

    Keeps an id -> array index map so decrease_key runs in O(log n).
    """

    def __init__(self):
        self._entries: List[Tuple[float, int, int]] = []  # (priority, seq, id)
        self._index: Dict[int, int] = {}
        self._counter = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, item_id: int) -> bool:
        return item_id in self._index

    def is_empty(self) -> bool:
        return not self._entries

    def insert(self, item_id: int, priority: float) -> None:
        if item_id in self._index:
            raise ValueError(f"id {item_id} is already in the heap")
        self._entries.append((priority, self._counter, item_id))
        self._counter += 1
        self._index[item_id] = len(self._entries) - 1
        self._sift_up(len(self._entries) - 1)

    def peek(self) -> Optional[Tuple[int, float]]:
        if not self._entries:
            return None
        priority, _, item_id = self._entries[0]
        return item_id, priority

    def extract_min(self) -> Optional[Tuple[int, float]]:
        """Remove and return (id, priority) of the smallest entry."""
        if not self._entries:
            return None

        priority, _, item_id = self._entries[0]
        last = self._entries.pop()
        del self._index[item_id]

        if self._entries:
            self._entries[0] = last
            self._index[last[2]] = 0
            self._sift_down(0)

        return item_id, priority

    def decrease_key(self, item_id: int, priority: float) -> None:
        """Lower the priority of an id already in the heap."""
        index = self._index[item_id]
        current, seq, _ = self._entries[index]
        if priority > current:
            raise ValueError(
                f"new priority {priority} is greater than current {current}"
            )
        self._entries[index] = (priority, seq, item_id)
        self._sift_up(index)

    def _swap(self, i: int, j: int) -> None:
        self._entries[i], self._entries[j] = self._entries[j], self._entries[i]
        self._index[self._entries[i][2]] = i
        self._index[self._entries[j][2]] = j

    def _sift_up(self, index: int) -> None:
        while index > 0:
            parent = (index - 1) // 2
            if self._entries[index] < self._entries[parent]:
                self._swap(index, parent)
                index = parent
            else:
                break

    def _sift_down(self, index: int) -> None:
        size = len(self._entries)
        while True:
            smallest = index
            left = 2 * index + 1
            right = left + 1
            if left < size and self._entries[left] < self._entries[smallest]:
                smallest = left
            if right < size and self._entries[right] < self._entries[smallest]:
                smallest = right
            if smallest == index:
                break
            self._swap(index, smallest)
            index = smallest
