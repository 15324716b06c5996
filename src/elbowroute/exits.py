"""
Exit-ray calculation.

Decides which axis-aligned direction a path leaves (or enters) an endpoint
in. Free endpoints head toward the other endpoint along the dominant axis;
anchored endpoints leave their block through the nearest side.
"""

from dataclasses import dataclass
from typing import List, Optional

from .config import RoutingConfig
from .diagnostics import NO_EXIT_DIRECTION, DiagnosticSink, logging_sink, warn
from .geometry import AXIS_DIRECTIONS, UP, BlockRect, Ray, Vec2, sign


def dominant_direction(start: Vec2, end: Vec2) -> Vec2:
    """
    Axis-aligned direction from start toward end along the larger delta.

    Ties go to the horizontal axis. Coincident points give (0, 0).
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if abs(dx) >= abs(dy):
        return (sign(dx), 0)
    return (0, sign(dy))


@dataclass(frozen=True)
class ExitCandidate:
    """A direction that leaves the block, and the distance to its side."""

    direction: Vec2
    distance: float


class ExitRayCalculator:
    """
    Computes exit rays for endpoints expressed in local space.

    Blocks passed in must already be expressed in local space (see
    ArrowFrame.block_to_local), so the four candidate directions are the
    local axes.
    """

    def __init__(
        self,
        config: Optional[RoutingConfig] = None,
        sink: Optional[DiagnosticSink] = None,
    ):
        self.config = config or RoutingConfig()
        self.sink = sink or logging_sink

    def calculate(
        self, point: Vec2, target: Vec2, block: Optional[BlockRect] = None
    ) -> Ray:
        """
        Build the ray a path follows from point.

        Args:
            point: Endpoint in local space
            target: The other endpoint in local space
            block: Local-space block the endpoint is anchored to, if any

        Returns:
            Ray starting at point
        """
        if block is None:
            return Ray(point, dominant_direction(point, target))
        return Ray(point, self.exit_direction(point, target, block))

    def exit_candidates(self, point: Vec2, block: BlockRect) -> List[ExitCandidate]:
        """Directions that leave the block from point, in axis order."""
        cx, cy = block.center
        nudge = self.config.nudge_factor
        nudged = (
            point[0] + (cx - point[0]) * nudge,
            point[1] + (cy - point[1]) * nudge,
        )

        candidates = []
        for direction in AXIS_DIRECTIONS:
            hits = [
                hit
                for hit in Ray(nudged, direction).intersect_rect(block)
                if hit.distance > 0
            ]
            if hits:
                candidates.append(ExitCandidate(direction, hits[0].distance))
        return candidates

    def exit_direction(self, point: Vec2, target: Vec2, block: BlockRect) -> Vec2:
        candidates = self.exit_candidates(point, block)

        if not candidates:
            fallback = dominant_direction(block.center, point)
            if fallback == (0, 0):
                fallback = UP
            warn(
                self.sink,
                NO_EXIT_DIRECTION,
                "No side of the block is reachable from the anchor; "
                "exiting away from the block center",
                "ExitRayCalculator.exit_direction",
                point=point,
                block=block,
                direction=fallback,
            )
            return fallback

        closest = min(candidates, key=lambda candidate: candidate.distance)

        u, v = block.world_to_uv(point)
        threshold = self.config.center_threshold
        if abs(u - 0.5) < threshold and abs(v - 0.5) < threshold:
            preferred = dominant_direction(point, target)
            for candidate in candidates:
                if candidate.direction == preferred:
                    return candidate.direction

        return closest.direction
