"""Tests for the Dijkstra search over perimeter graphs."""

import random

import networkx as nx
import pytest

from elbowroute.geometry import RIGHT, Aabb, Ray, distance
from elbowroute.perimeter import (
    PerimeterGraph,
    build_block_graph,
    build_block_pair_graph,
)
from elbowroute.search import path_weight, shortest_path


class TestShortestPath:
    """Tests for shortest_path."""

    def test_adjacent_nodes(self):
        graph = build_block_graph(Aabb(0, 0, 10, 10))
        assert shortest_path(graph, 0, 1) == [0, 1]

    def test_opposite_corners(self):
        """Test that ties resolve the same way on every call."""
        graph = build_block_graph(Aabb(0, 0, 10, 10))
        path = shortest_path(graph, 0, 2)

        assert path == [0, 3, 2]
        assert path_weight(graph, path) == 20
        assert shortest_path(graph, 0, 2) == path

    def test_prefers_shorter_side(self):
        graph = build_block_graph(Aabb(0, 0, 100, 10))
        start = graph.insert_ray(Ray((5, 5), (0, -1)))
        goal = graph.insert_ray(Ray((5, 5), (0, 1)))

        path = shortest_path(graph, start, goal)
        # Around the left end (5 + 10 + 5), not the right end (95 + 10 + 95)
        assert path_weight(graph, path) == pytest.approx(20)
        assert graph.nodes[path[1]].coords == (0, 0)

    def test_start_is_goal(self):
        graph = build_block_graph(Aabb(0, 0, 10, 10))
        assert shortest_path(graph, 2, 2) == [2]

    def test_unreachable_goal(self):
        graph = PerimeterGraph([(0, 0), (10, 0), (20, 0)])
        graph.connect(0, 1, 10)
        assert shortest_path(graph, 0, 2) is None

    def test_missing_length_counts_as_unit(self):
        graph = PerimeterGraph([(0, 0), (10, 0), (20, 0)])
        graph.connect(0, 1, None)
        graph.connect(1, 2, 5)
        assert shortest_path(graph, 0, 2) == [0, 1, 2]

    def test_path_through_spliced_rays(self):
        """Test a route between two rays spliced into a two-block outline."""
        graph = build_block_pair_graph(
            Aabb(-220, -70, -80, 70), Aabb(80, -70, 220, 70)
        )
        start = graph.insert_ray(Ray((-125, 25), RIGHT))
        goal = graph.insert_ray(Ray((125, -25), (0, -1)))

        path = graph.coords_of(shortest_path(graph, start, goal))
        assert path == [(0, 25), (0, -70), (125, -70)]


class TestAgainstNetworkx:
    """Cross-check path lengths against networkx's Dijkstra."""

    def test_random_graphs(self):
        rng = random.Random(42)
        for _ in range(30):
            points = [
                (rng.randint(0, 100), rng.randint(0, 100)) for _ in range(12)
            ]
            graph = PerimeterGraph(points)
            for _ in range(20):
                a, b = rng.sample(range(len(points)), 2)
                graph.connect(a, b, distance(points[a], points[b]))

            reference = graph.to_networkx()
            start, goal = rng.sample(range(len(points)), 2)
            path = shortest_path(graph, start, goal)

            if nx.has_path(reference, start, goal):
                expected = nx.dijkstra_path_length(reference, start, goal)
                assert path is not None
                assert path[0] == start
                assert path[-1] == goal
                assert path_weight(graph, path) == pytest.approx(expected)
            else:
                assert path is None

    def test_block_outlines(self):
        rng = random.Random(5)
        for _ in range(30):
            a = Aabb.from_points(
                [(rng.uniform(-300, 0), rng.uniform(-300, 300)) for _ in range(2)]
            )
            b = Aabb.from_points(
                [(rng.uniform(50, 300), rng.uniform(-300, 300)) for _ in range(2)]
            )
            graph = build_block_pair_graph(a, b)
            reference = graph.to_networkx()

            for _ in range(5):
                start, goal = rng.sample(range(len(graph)), 2)
                path = shortest_path(graph, start, goal)
                expected = nx.dijkstra_path_length(reference, start, goal)
                assert path_weight(graph, path) == pytest.approx(expected)
