"""
Shortest-path search over a perimeter graph.
"""

import math
from typing import Dict, List, Optional, Sequence

from .heap import MinHeap
from .perimeter import PerimeterGraph

# Used for an edge with no recorded length; construction always records one
MISSING_WEIGHT = 1


def shortest_path(
    graph: PerimeterGraph, start: int, goal: int
) -> Optional[List[int]]:
    """
    Dijkstra's algorithm from start to goal.

    Stops as soon as the goal is popped. Among equal-weight paths the one
    reached through earlier heap insertions wins, so identical graphs always
    give identical paths.

    Returns:
        Node ids from start to goal inclusive, or None if goal is unreachable
    """
    distances: Dict[int, float] = {node.id: math.inf for node in graph.nodes}
    previous: Dict[int, Optional[int]] = {node.id: None for node in graph.nodes}
    heap = MinHeap()

    distances[start] = 0
    heap.insert(start, 0)

    while not heap.is_empty():
        current, _ = heap.extract_min()

        if current == goal:
            path = []
            step: Optional[int] = goal
            while step is not None:
                path.append(step)
                step = previous[step]
            path.reverse()
            return path

        for neighbor, length in graph.nodes[current].edges.items():
            weight = MISSING_WEIGHT if length is None else length
            candidate = distances[current] + weight
            if candidate < distances[neighbor]:
                distances[neighbor] = candidate
                previous[neighbor] = current
                if neighbor in heap:
                    heap.decrease_key(neighbor, candidate)
                else:
                    heap.insert(neighbor, candidate)

    return None


def path_weight(graph: PerimeterGraph, node_path: Sequence[int]) -> float:
    """Total edge length along a node path."""
    return sum(
        graph.nodes[a].edges[b] for a, b in zip(node_path, node_path[1:])
    )
