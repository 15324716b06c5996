"""
elbowroute - Obstacle-aware orthogonal arrow routing

Computes elbow (axis-aligned) paths between two arrow endpoints, each either
a free point or an anchor on a rectangular, possibly rotated block, routing
around the blocks' padded footprints.

Example:
    >>> from elbowroute import BlockRect, route
    >>> a = BlockRect(position=(0, 0), size=(100, 100))
    >>> b = BlockRect(position=(300, 0), size=(100, 100))
    >>> route((100, 50), (350, 0), a, b, padding=20)

Debug Mode Example:
    >>> router = ElbowRouter(debug=True)
    >>> path = router.route((0, 0), (100, 50))
    >>> print(router.get_trace().summary())
"""

from .config import DEFAULT_PADDING, RoutingConfig
from .diagnostics import (
    Diagnostic,
    DiagnosticLevel,
    DiagnosticSink,
    RouteStage,
    RouteTrace,
    logging_sink,
    null_sink,
)
from .exits import ExitRayCalculator, dominant_direction
from .geometry import Aabb, BlockRect, Ray, RayIntersection, Vec2
from .heap import MinHeap
from .perimeter import (
    GraphNode,
    PerimeterGraph,
    build_block_graph,
    build_block_pair_graph,
    extend_to_meet,
)
from .router import (
    ElbowRouter,
    Endpoint,
    route,
    route_endpoints,
    route_point_to_point,
)
from .search import shortest_path
from .simplify import simplify_path
from .transform import Affine2, ArrowFrame

__version__ = "0.1.0"

__all__ = [
    # Main API
    "ElbowRouter",
    "Endpoint",
    "route",
    "route_endpoints",
    "route_point_to_point",
    # Configuration
    "RoutingConfig",
    "DEFAULT_PADDING",
    # Geometry
    "Vec2",
    "Aabb",
    "Ray",
    "RayIntersection",
    "BlockRect",
    "Affine2",
    "ArrowFrame",
    # Routing stages
    "ExitRayCalculator",
    "dominant_direction",
    "GraphNode",
    "PerimeterGraph",
    "build_block_graph",
    "build_block_pair_graph",
    "extend_to_meet",
    "MinHeap",
    "shortest_path",
    "simplify_path",
    # Diagnostics/Tracing
    "Diagnostic",
    "DiagnosticLevel",
    "DiagnosticSink",
    "logging_sink",
    "null_sink",
    "RouteStage",
    "RouteTrace",
]
