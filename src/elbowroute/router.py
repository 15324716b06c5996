"""
Elbow arrow router.

Routes an orthogonal path between two endpoints, each either a free point or
an anchor on a (possibly rotated) block, keeping clear of the blocks'
padded footprints.

Pipeline for one call:
1. Map endpoints and blocks into the arrow-aligned local frame
2. Compute exit rays for both endpoints
3. Pick a strategy: point-to-point, block-to-point or block-to-block
4. For the block cases, build the perimeter graph, splice in the rays and
   run Dijkstra over it
5. Simplify the path and map it back to world space

Example:
    >>> from elbowroute import BlockRect, route
    >>> a = BlockRect(position=(0, 0), size=(100, 100))
    >>> b = BlockRect(position=(300, 0), size=(100, 100))
    >>> route((100, 50), (300, 50), a, b, padding=20)
    [(100, 50), (300, 50)]
"""

from dataclasses import dataclass
from typing import Any, List, Optional

from .config import DEFAULT_PADDING, EPSILON, RoutingConfig
from .diagnostics import (
    GRAPH_INSERTION_FAILED,
    NO_PATH_FOUND,
    Diagnostic,
    DiagnosticSink,
    RouteTrace,
    logging_sink,
    warn,
)
from .exits import ExitRayCalculator, dominant_direction
from .geometry import BlockRect, Ray, Vec2, approx_equal
from .perimeter import PerimeterGraph, build_block_graph, build_block_pair_graph
from .search import shortest_path
from .simplify import simplify_path
from .transform import ArrowFrame


def route_point_to_point(
    start: Vec2, end: Vec2, epsilon: float = EPSILON
) -> List[Vec2]:
    """
    Route between two free points.

    Horizontal or vertical pairs are joined directly. Otherwise the path
    runs half way along the dominant axis, crosses the other axis, and
    finishes along the dominant axis (a 4-point Z).
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]

    if approx_equal(dy, 0, epsilon) or approx_equal(dx, 0, epsilon):
        return [start, end]

    direction = dominant_direction(start, end)
    half = (abs(dx) if direction[0] else abs(dy)) / 2
    bend = (start[0] + direction[0] * half, start[1] + direction[1] * half)

    if direction[0]:
        second_bend = (bend[0], end[1])
    else:
        second_bend = (end[0], bend[1])

    return [start, bend, second_bend, end]


@dataclass(frozen=True)
class Endpoint:
    """
    One end of an arrow.

    Attributes:
        point: World position of a free endpoint (or of an anchor, when uv
            is not given)
        block: Block the endpoint is attached to, if any
        uv: Anchor position in the block's normalized (0-1) coordinates
    """

    point: Optional[Vec2] = None
    block: Optional[BlockRect] = None
    uv: Optional[Vec2] = None

    def __post_init__(self):
        if self.uv is not None and self.block is None:
            raise ValueError("uv anchors require a block")
        if self.point is None and self.uv is None:
            raise ValueError("endpoint needs a point or a block uv")

    def resolve(self) -> Vec2:
        """World position of this endpoint."""
        if self.uv is not None:
            return self.block.uv_to_world(self.uv)
        return self.point


class _RouteCalculation:
    """State for a single routing call, discarded once the path is returned."""

    def __init__(
        self,
        config: RoutingConfig,
        sink: DiagnosticSink,
        trace: Optional[RouteTrace],
        start: Vec2,
        end: Vec2,
        padding: float,
        rotation: float,
    ):
        self.config = config
        self.sink = sink
        self.trace = trace
        self.padding = padding
        self.frame = ArrowFrame(start, end, rotation)
        self.local_start = self.frame.to_local(start)
        self.local_end = self.frame.to_local(end)
        self.exits = ExitRayCalculator(config, sink)

    def _stage(self, stage: str, **data: Any) -> None:
        if self.trace is not None:
            self.trace.add_stage(stage, data)

    def _inside_margin(self, point: Vec2, block: BlockRect) -> bool:
        """Check if a local point lies within the block's padded box."""
        aabb = block.aabb()
        aabb.pad(self.padding)
        return aabb.contains_point(point)

    def run(
        self, start_block: Optional[BlockRect], end_block: Optional[BlockRect]
    ) -> List[Vec2]:
        local_start_block = (
            self.frame.block_to_local(start_block) if start_block else None
        )
        local_end_block = self.frame.block_to_local(end_block) if end_block else None

        start_ray = self.exits.calculate(
            self.local_start, self.local_end, local_start_block
        )
        end_ray = self.exits.calculate(
            self.local_end, self.local_start, local_end_block
        )

        self._stage(
            "local_space",
            pivot=self.frame.pivot,
            start=self.local_start,
            end=self.local_end,
            start_block=local_start_block,
            end_block=local_end_block,
        )
        self._stage("exit_rays", start=start_ray, end=end_ray)

        if local_start_block and local_end_block:
            # Endpoints inside each other's margin mean the blocks touch or
            # overlap; a perimeter route would loop around for nothing
            if self._inside_margin(
                self.local_start, local_end_block
            ) or self._inside_margin(self.local_end, local_start_block):
                self._stage("strategy", name="point_to_point", reason="blocks_overlap")
                path = route_point_to_point(
                    start_ray.origin, end_ray.origin, self.config.epsilon
                )
            else:
                self._stage("strategy", name="block_to_block")
                path = self.route_block_to_block(
                    local_start_block, local_end_block, start_ray, end_ray
                )
        elif local_start_block:
            if self._inside_margin(self.local_end, local_start_block):
                self._stage("strategy", name="point_to_point", reason="point_in_margin")
                path = route_point_to_point(
                    start_ray.origin, self.local_end, self.config.epsilon
                )
            else:
                self._stage("strategy", name="block_to_point")
                path = self.route_block_to_point(
                    local_start_block, start_ray, self.local_end
                )
        elif local_end_block:
            if self._inside_margin(self.local_start, local_end_block):
                self._stage("strategy", name="point_to_point", reason="point_in_margin")
                path = route_point_to_point(
                    self.local_start, end_ray.origin, self.config.epsilon
                )
            else:
                self._stage("strategy", name="point_to_block")
                path = self.route_block_to_point(
                    local_end_block, end_ray, self.local_start
                )
                path.reverse()
        else:
            self._stage("strategy", name="point_to_point")
            path = route_point_to_point(
                start_ray.origin, self.local_end, self.config.epsilon
            )

        self._stage("simplified", path=list(path))

        world_path = [self.frame.to_world(point) for point in path]
        self._stage("world_path", path=world_path)
        return world_path

    def _fallback(self, start: Vec2, end: Vec2) -> List[Vec2]:
        return route_point_to_point(start, end, self.config.epsilon)

    def _search(
        self,
        graph: PerimeterGraph,
        start_ray: Ray,
        end_ray: Ray,
        source: str,
        end_first: bool = False,
    ) -> Optional[List[Vec2]]:
        """Splice both rays into the graph and return the node coordinates."""
        if end_first:
            end_id = graph.insert_ray(end_ray)
            start_id = graph.insert_ray(start_ray)
        else:
            start_id = graph.insert_ray(start_ray)
            end_id = graph.insert_ray(end_ray)
        self._stage(
            "graph",
            nodes=len(graph),
            edges=len(graph.edges()),
            start_node=start_id,
            end_node=end_id,
        )

        if start_id is None or end_id is None:
            warn(
                self.sink,
                GRAPH_INSERTION_FAILED,
                "Failed to add start or end node to the perimeter graph",
                source,
                start_ray=start_ray,
                end_ray=end_ray,
                start_node=start_id,
                end_node=end_id,
            )
            return None

        node_path = shortest_path(graph, start_id, end_id)
        self._stage("search", node_path=node_path)

        if node_path is None:
            warn(
                self.sink,
                NO_PATH_FOUND,
                "No path between the start and end nodes of the perimeter graph",
                source,
                start_node=start_id,
                end_node=end_id,
                nodes=len(graph),
            )
            return None

        return graph.coords_of(node_path)

    def route_block_to_block(
        self,
        start_block: BlockRect,
        end_block: BlockRect,
        start_ray: Ray,
        end_ray: Ray,
    ) -> List[Vec2]:
        start_aabb = start_block.aabb()
        end_aabb = end_block.aabb()
        start_aabb.pad(self.padding)
        end_aabb.pad(self.padding)

        graph = build_block_pair_graph(start_aabb, end_aabb)
        nodes = self._search(
            graph, start_ray, end_ray, "ElbowRouter.route_block_to_block"
        )
        if nodes is None:
            return self._fallback(start_ray.origin, end_ray.origin)

        path = [start_ray.origin] + nodes + [end_ray.origin]
        return simplify_path(
            path,
            self.config.epsilon,
            self.config.max_simplify_passes,
            obstacles=(start_block.aabb(), end_block.aabb()),
        )

    def route_block_to_point(
        self, block: BlockRect, ray: Ray, point: Vec2
    ) -> List[Vec2]:
        """Route from an anchored ray to a free point around one block."""
        origin = ray.origin
        dominant = dominant_direction(origin, point)
        if ray.direction == dominant:
            return route_point_to_point(origin, point, self.config.epsilon)

        aabb = block.aabb()
        aabb.pad(self.padding)

        # Ray from the point back toward the block; if it misses, the point
        # is beside or behind the block, so the box grows to reach it
        back_ray = Ray(point, (-dominant[0], -dominant[1]))
        if not back_ray.intersect_aabb(aabb):
            aabb.expand(point)

        graph = build_block_graph(aabb)
        nodes = self._search(
            graph, ray, back_ray, "ElbowRouter.route_block_to_point", end_first=True
        )
        if nodes is None:
            return self._fallback(origin, point)

        path = [origin] + nodes + [point]
        return simplify_path(
            path,
            self.config.epsilon,
            self.config.max_simplify_passes,
            obstacles=(block.aabb(),),
        )


class ElbowRouter:
    """
    Computes elbow arrow paths.

    Example:
        >>> router = ElbowRouter(debug=True)
        >>> router.route((0, 0), (100, 50))
        [(0, 0), (50.0, 0.0), (50.0, 50.0), (100, 50)]
        >>> router.get_trace().get_stage("strategy").data["name"]
        'point_to_point'
    """

    def __init__(
        self,
        config: Optional[RoutingConfig] = None,
        sink: Optional[DiagnosticSink] = None,
        debug: bool = False,
    ):
        """
        Initialize the router.

        Args:
            config: Routing parameters (defaults to RoutingConfig())
            sink: Receives diagnostics for recoverable anomalies
                (defaults to logging_sink)
            debug: Record a RouteTrace for each call, see get_trace()
        """
        self.config = config or RoutingConfig()
        self.sink = sink or logging_sink
        self.debug = debug
        self._trace: Optional[RouteTrace] = None

    def get_trace(self) -> Optional[RouteTrace]:
        """Trace of the most recent call, or None when debug is off."""
        return self._trace

    def route(
        self,
        start: Vec2,
        end: Vec2,
        start_block: Optional[BlockRect] = None,
        end_block: Optional[BlockRect] = None,
        padding: Optional[float] = None,
        arrow_rotation: float = 0.0,
    ) -> List[Vec2]:
        """
        Route an elbow path between two world-space endpoints.

        Args:
            start: World position of the arrow's start
            end: World position of the arrow's end
            start_block: Block the start is attached to, if any
            end_block: Block the end is attached to, if any
            padding: Clearance around blocks (defaults to config.padding)
            arrow_rotation: Rotation of the routing frame in radians

        Returns:
            World-space points, at least two, starting at start and ending
            at end
        """
        if padding is None:
            padding = self.config.padding

        trace = RouteTrace() if self.debug else None
        self._trace = trace

        sink = self.sink
        if trace is not None:
            sink = _tee(trace, self.sink)

        calculation = _RouteCalculation(
            self.config, sink, trace, start, end, padding, arrow_rotation
        )
        path = calculation.run(start_block, end_block)

        # Endpoints are exact; only interior points carry transform rounding
        path[0] = start
        path[-1] = end
        return path

    def route_endpoints(
        self,
        start: Endpoint,
        end: Endpoint,
        arrow_rotation: float = 0.0,
        padding: Optional[float] = None,
    ) -> List[Vec2]:
        """Resolve anchored/free endpoints and route between them."""
        return self.route(
            start.resolve(),
            end.resolve(),
            start.block,
            end.block,
            padding=padding,
            arrow_rotation=arrow_rotation,
        )


def _tee(trace: RouteTrace, sink: DiagnosticSink) -> DiagnosticSink:
    def record(diagnostic: Diagnostic) -> None:
        trace.record(diagnostic)
        sink(diagnostic)

    return record


def route(
    start: Vec2,
    end: Vec2,
    start_block: Optional[BlockRect] = None,
    end_block: Optional[BlockRect] = None,
    padding: float = DEFAULT_PADDING,
    arrow_rotation: float = 0.0,
    *,
    config: Optional[RoutingConfig] = None,
    sink: Optional[DiagnosticSink] = None,
) -> List[Vec2]:
    """Route an elbow path; see ElbowRouter.route."""
    return ElbowRouter(config, sink).route(
        start, end, start_block, end_block, padding, arrow_rotation
    )


def route_endpoints(
    start: Endpoint,
    end: Endpoint,
    arrow_rotation: float = 0.0,
    padding: float = DEFAULT_PADDING,
    *,
    config: Optional[RoutingConfig] = None,
    sink: Optional[DiagnosticSink] = None,
) -> List[Vec2]:
    """Route between Endpoint descriptions; see ElbowRouter.route_endpoints."""
    return ElbowRouter(config, sink).route_endpoints(
        start, end, arrow_rotation, padding
    )
