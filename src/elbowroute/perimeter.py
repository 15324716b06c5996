"""
Perimeter graph construction.

Turns one or two padded block rectangles into a graph whose nodes are the
corners of the navigable perimeter and whose edges run along it. Endpoint
rays are spliced into the graph before searching it.

Nodes live in a list and are addressed by their index; neighbour links are
id -> edge length maps, so splitting an edge never has to chase object
references.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

import networkx as nx

from .config import EPSILON
from .geometry import (
    Aabb,
    Ray,
    RayIntersection,
    Vec2,
    approx_equal,
    distance,
    points_equal,
)


@dataclass
class GraphNode:
    """A perimeter node and its outgoing edges."""

    id: int
    coords: Vec2
    edges: Dict[int, float] = field(default_factory=dict)  # neighbor id -> length

    @property
    def neighbors(self) -> List[int]:
        return list(self.edges)


class PerimeterGraph:
    """Undirected graph of perimeter nodes, valid for one routing call."""

    def __init__(self, points: Iterable[Vec2] = ()):
        self.nodes: List[GraphNode] = []
        for point in points:
            self.add_node(point)

    def __len__(self) -> int:
        return len(self.nodes)

    def add_node(self, coords: Vec2) -> int:
        node_id = len(self.nodes)
        self.nodes.append(GraphNode(node_id, coords))
        return node_id

    def connect(self, a: int, b: int, length: float) -> None:
        self.nodes[a].edges[b] = length
        self.nodes[b].edges[a] = length

    def disconnect(self, a: int, b: int) -> None:
        self.nodes[a].edges.pop(b, None)
        self.nodes[b].edges.pop(a, None)

    def edges(self) -> List[Tuple[int, int, float]]:
        """Each undirected edge once, as (lower id, higher id, length)."""
        return [
            (node.id, neighbor, length)
            for node in self.nodes
            for neighbor, length in node.edges.items()
            if node.id < neighbor
        ]

    def find_node(self, coords: Vec2, epsilon: float = EPSILON) -> Optional[int]:
        for node in self.nodes:
            if points_equal(node.coords, coords, epsilon):
                return node.id
        return None

    def coords_of(self, node_ids: Iterable[int]) -> List[Vec2]:
        return [self.nodes[node_id].coords for node_id in node_ids]

    def connect_aligned(self, epsilon: float = EPSILON) -> None:
        """
        Link nodes that share an axis.

        Nodes whose x agrees within epsilon are chained in y order, and
        nodes whose y agrees are chained in x order. Edge length is the
        distance along the shared axis.
        """
        for dim in (0, 1):
            other = 1 - dim
            for group in _aligned_groups(self.nodes, dim, epsilon):
                group.sort(key=lambda n: n.coords[other])
                for node_a, node_b in zip(group, group[1:]):
                    length = abs(node_b.coords[other] - node_a.coords[other])
                    self.connect(node_a.id, node_b.id, length)

    def nearest_edge_hit(
        self, ray: Ray
    ) -> Optional[Tuple[RayIntersection, int, int]]:
        """Find the closest edge the ray crosses, as (hit, node a, node b)."""
        hits = []
        for a, b, _ in self.edges():
            hit = ray.intersect_segment(self.nodes[a].coords, self.nodes[b].coords)
            if hit is not None:
                hits.append((hit, a, b))
        return min(hits, key=lambda item: item[0].distance, default=None)

    def insert_ray(self, ray: Ray) -> Optional[int]:
        """
        Splice a ray into the graph and return the node it lands on.

        A node already at the ray origin (or at the nearest hit) is reused.
        Otherwise a new node is placed where the ray first crosses an edge,
        and that edge is split in two around it.

        Returns:
            Node id, or None if the ray crosses no edge at all
        """
        existing = self.find_node(ray.origin)
        if existing is not None:
            return existing

        nearest = self.nearest_edge_hit(ray)
        if nearest is None:
            return None

        hit, a, b = nearest
        for node_id in (a, b):
            if points_equal(self.nodes[node_id].coords, hit.point):
                return node_id

        new_id = self.add_node(hit.point)
        self.disconnect(a, b)
        self.connect(new_id, a, distance(hit.point, self.nodes[a].coords))
        self.connect(new_id, b, distance(hit.point, self.nodes[b].coords))
        return new_id

    def to_networkx(self) -> nx.Graph:
        """Export as a networkx graph (coords node attribute, weight edges)."""
        graph = nx.Graph()
        for node in self.nodes:
            graph.add_node(node.id, coords=node.coords)
        for a, b, length in self.edges():
            graph.add_edge(a, b, weight=length)
        return graph


def extend_to_meet(a: Aabb, b: Aabb) -> None:
    """
    Stretch two disjoint boxes toward each other, in place.

    Along each axis that separates them, both boxes grow until they meet at
    the midpoint of the gap.
    """
    if a.intersects(b):
        return

    if a.right < b.left:
        mid = (a.right + b.left) / 2
        a.right = mid
        b.left = mid
    elif b.right < a.left:
        mid = (b.right + a.left) / 2
        b.right = mid
        a.left = mid

    if a.bottom < b.top:
        mid = (a.bottom + b.top) / 2
        a.bottom = mid
        b.top = mid
    elif b.bottom < a.top:
        mid = (b.bottom + a.top) / 2
        b.bottom = mid
        a.top = mid


def _aligned_groups(
    nodes: List[GraphNode], dim: int, epsilon: float
) -> List[List[GraphNode]]:
    """Cluster nodes whose coordinate on dim agrees within epsilon."""
    groups: List[List[GraphNode]] = []
    for node in sorted(nodes, key=lambda n: n.coords[dim]):
        anchor = groups[-1][0].coords[dim] if groups else None
        if anchor is not None and approx_equal(anchor, node.coords[dim], epsilon):
            groups[-1].append(node)
        else:
            groups.append([node])
    return groups


def _unique_points(points: Iterable[Vec2], epsilon: float = EPSILON) -> List[Vec2]:
    # Near-coincident corners of the two boxes are distinct outline vertices
    unique: List[Vec2] = []
    for point in points:
        if not any(points_equal(point, kept, epsilon) for kept in unique):
            unique.append(point)
    return unique


def build_block_pair_graph(a: Aabb, b: Aabb) -> PerimeterGraph:
    """
    Build the perimeter graph around two padded boxes.

    The boxes are extended to meet first (mutating them). The perimeter
    points are the corners of each box outside the other, plus the corners
    of their overlap that lie outside both.
    """
    extend_to_meet(a, b)
    if not a.intersects(b):
        return PerimeterGraph()

    perimeter = [c for c in a.corners() if not b.contains_point(c, inclusive=False)]
    perimeter += [c for c in b.corners() if not a.contains_point(c, inclusive=False)]

    overlap = a.intersection(b)
    perimeter += [
        c
        for c in overlap.corners()
        if not (
            a.contains_point(c, inclusive=False)
            or b.contains_point(c, inclusive=False)
        )
    ]

    graph = PerimeterGraph(_unique_points(perimeter))
    graph.connect_aligned()
    return graph


def build_block_graph(aabb: Aabb) -> PerimeterGraph:
    """Build the perimeter graph of a single padded box: its corner cycle."""
    graph = PerimeterGraph(_unique_points(aabb.corners()))
    graph.connect_aligned()
    return graph
