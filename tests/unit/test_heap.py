"""Tests for the MinHeap used by the shortest-path search."""

import random

import pytest

from elbowroute.heap import MinHeap


class TestMinHeap:
    """Tests for MinHeap."""

    def test_empty(self):
        heap = MinHeap()
        assert heap.is_empty()
        assert len(heap) == 0
        assert heap.peek() is None
        assert heap.extract_min() is None

    def test_extracts_in_priority_order(self):
        heap = MinHeap()
        for item_id, priority in [(1, 5.0), (2, 1.0), (3, 3.0), (4, 0.5)]:
            heap.insert(item_id, priority)

        order = []
        while not heap.is_empty():
            order.append(heap.extract_min())
        assert order == [(4, 0.5), (2, 1.0), (3, 3.0), (1, 5.0)]

    def test_equal_priorities_in_insertion_order(self):
        heap = MinHeap()
        for item_id in [5, 3, 9, 1]:
            heap.insert(item_id, 2.0)

        assert [heap.extract_min()[0] for _ in range(4)] == [5, 3, 9, 1]

    def test_peek_does_not_remove(self):
        heap = MinHeap()
        heap.insert(1, 2.0)
        assert heap.peek() == (1, 2.0)
        assert len(heap) == 1

    def test_contains(self):
        heap = MinHeap()
        heap.insert(7, 1.0)
        assert 7 in heap
        assert 8 not in heap
        heap.extract_min()
        assert 7 not in heap

    def test_decrease_key_moves_to_front(self):
        heap = MinHeap()
        heap.insert(1, 1.0)
        heap.insert(2, 2.0)
        heap.insert(3, 3.0)

        heap.decrease_key(3, 0.5)
        assert heap.extract_min() == (3, 0.5)
        assert heap.extract_min() == (1, 1.0)

    def test_decrease_key_to_equal_priority(self):
        heap = MinHeap()
        heap.insert(1, 1.0)
        heap.decrease_key(1, 1.0)
        assert heap.peek() == (1, 1.0)

    def test_duplicate_insert_rejected(self):
        heap = MinHeap()
        heap.insert(1, 1.0)
        with pytest.raises(ValueError):
            heap.insert(1, 0.5)

    def test_increasing_key_rejected(self):
        heap = MinHeap()
        heap.insert(1, 1.0)
        with pytest.raises(ValueError):
            heap.decrease_key(1, 2.0)

    def test_random_operations_stay_sorted(self):
        """Test heap order under a mix of inserts and decrease-keys."""
        rng = random.Random(3)
        heap = MinHeap()
        priorities = {}
        for item_id in range(200):
            priority = rng.uniform(0, 1000)
            heap.insert(item_id, priority)
            priorities[item_id] = priority

        for item_id in rng.sample(range(200), 50):
            priorities[item_id] -= rng.uniform(0, 500)
            heap.decrease_key(item_id, priorities[item_id])

        extracted = []
        while not heap.is_empty():
            item_id, priority = heap.extract_min()
            assert priority == priorities[item_id]
            extracted.append(priority)

        assert extracted == sorted(priorities.values())
