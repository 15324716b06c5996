"""
Geometry primitives for elbow routing.

Provides:
- Vec2 points as plain (x, y) tuples
- Axis-aligned bounding boxes that are padded/expanded in place
- Rays with segment, box and rotated-rectangle intersection
- BlockRect, the read-only rectangle snapshot of a host block
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .config import EPSILON

Vec2 = Tuple[float, float]

# Axis-aligned unit directions (y grows downward)
UP: Vec2 = (0, -1)
RIGHT: Vec2 = (1, 0)
DOWN: Vec2 = (0, 1)
LEFT: Vec2 = (-1, 0)

AXIS_DIRECTIONS: Tuple[Vec2, ...] = (UP, RIGHT, DOWN, LEFT)

# Below this determinant a ray and a segment are treated as parallel
PARALLEL_TOLERANCE = 1e-10


def sign(value: float) -> int:
    """Return -1, 0 or 1 according to the sign of value."""
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def approx_equal(a: float, b: float, epsilon: float = EPSILON) -> bool:
    return abs(a - b) <= epsilon


def points_equal(a: Vec2, b: Vec2, epsilon: float = EPSILON) -> bool:
    return approx_equal(a[0], b[0], epsilon) and approx_equal(a[1], b[1], epsilon)


def rotate(point: Vec2, angle: float) -> Vec2:
    """Rotate a vector about the origin by angle radians."""
    cos = math.cos(angle)
    sin = math.sin(angle)
    return (point[0] * cos - point[1] * sin, point[0] * sin + point[1] * cos)


def midpoint(a: Vec2, b: Vec2) -> Vec2:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


def distance(a: Vec2, b: Vec2) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


@dataclass
class Aabb:
    """Axis-aligned bounding box, [left, top, right, bottom]."""

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_points(cls, points: Sequence[Vec2]) -> "Aabb":
        if not points:
            return cls(0, 0, 0, 0)
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> Vec2:
        return ((self.left + self.right) / 2, (self.top + self.bottom) / 2)

    def copy(self) -> "Aabb":
        return Aabb(self.left, self.top, self.right, self.bottom)

    def corners(self) -> List[Vec2]:
        """Corners in TL, TR, BR, BL order."""
        return [
            (self.left, self.top),
            (self.right, self.top),
            (self.right, self.bottom),
            (self.left, self.bottom),
        ]

    def contains_point(self, point: Vec2, inclusive: bool = True) -> bool:
        x, y = point
        if inclusive:
            return self.left <= x <= self.right and self.top <= y <= self.bottom
        return self.left < x < self.right and self.top < y < self.bottom

    def intersects(self, other: "Aabb") -> bool:
        """Check for overlap; boxes that only touch count as intersecting."""
        return not (
            self.right < other.left
            or self.left > other.right
            or self.bottom < other.top
            or self.top > other.bottom
        )

    def intersection(self, other: "Aabb") -> "Aabb":
        """Return the overlap region (inverted if the boxes are disjoint)."""
        return Aabb(
            max(self.left, other.left),
            max(self.top, other.top),
            min(self.right, other.right),
            min(self.bottom, other.bottom),
        )

    def pad(self, padding: float) -> None:
        """Grow every side outward by padding, in place."""
        self.left -= padding
        self.top -= padding
        self.right += padding
        self.bottom += padding

    def expand(self, point: Vec2) -> None:
        """Grow in place just enough to contain point."""
        self.left = min(self.left, point[0])
        self.top = min(self.top, point[1])
        self.right = max(self.right, point[0])
        self.bottom = max(self.bottom, point[1])


@dataclass(frozen=True)
class RayIntersection:
    """Where a ray meets a shape, and how far along the ray that is."""

    point: Vec2
    distance: float


@dataclass(frozen=True)
class Ray:
    """A half-line starting at origin and heading along direction."""

    origin: Vec2
    direction: Vec2

    def intersect_segment(self, a: Vec2, b: Vec2) -> Optional[RayIntersection]:
        """
        Intersect the ray with the segment a-b.

        Parallel rays only hit segments lying on the same line: at the ray
        origin if it is inside the segment, otherwise at the nearest segment
        end ahead of the origin.

        Returns:
            The intersection, or None if the ray misses the segment
        """
        ox, oy = self.origin
        dx1, dy1 = self.direction
        dx2 = b[0] - a[0]
        dy2 = b[1] - a[1]

        det = dx1 * dy2 - dy1 * dx2
        if abs(det) < PARALLEL_TOLERANCE:
            return self._intersect_collinear(a, b)

        dx = a[0] - ox
        dy = a[1] - oy
        u = (dx * dy2 - dy * dx2) / det
        v = (dx * dy1 - dy * dx1) / det

        if u >= 0 and 0 <= v <= 1:
            return RayIntersection(
                point=(ox + u * dx1, oy + u * dy1),
                distance=u * math.hypot(dx1, dy1),
            )
        return None

    def _intersect_collinear(self, a: Vec2, b: Vec2) -> Optional[RayIntersection]:
        ox, oy = self.origin
        dir_x, dir_y = self.direction

        if a == b:
            if self.origin == a:
                return RayIntersection(point=self.origin, distance=0)
            return None

        if dir_y == 0 and a[1] == b[1] == oy:
            dim = 0
        elif dir_x == 0 and a[0] == b[0] == ox:
            dim = 1
        else:
            return None

        origin = self.origin[dim]
        direction = self.direction[dim]
        if min(a[dim], b[dim]) <= origin <= max(a[dim], b[dim]):
            return RayIntersection(point=self.origin, distance=0)

        candidates = []
        for end in (a, b):
            ahead = (end[dim] - origin) * direction
            if direction != 0 and ahead >= 0:
                candidates.append(RayIntersection(point=end, distance=abs(ahead)))
        if not candidates:
            return None
        return min(candidates, key=lambda hit: hit.distance)

    def intersect_polygon(self, corners: Sequence[Vec2]) -> List[RayIntersection]:
        """Intersect with every edge of a closed polygon, nearest first."""
        hits = []
        for i, corner in enumerate(corners):
            hit = self.intersect_segment(corner, corners[(i + 1) % len(corners)])
            if hit is not None:
                hits.append(hit)
        hits.sort(key=lambda hit: hit.distance)
        return hits

    def intersect_aabb(self, aabb: Aabb) -> List[RayIntersection]:
        return self.intersect_polygon(aabb.corners())

    def intersect_rect(self, rect: "BlockRect") -> List[RayIntersection]:
        return self.intersect_polygon(rect.corners())


@dataclass(frozen=True)
class BlockRect:
    """
    Read-only snapshot of a host block's rectangle.

    Attributes:
        position: Top-left corner of the unrotated rectangle
        size: (width, height)
        rotation: Rotation about the rectangle center, in radians
    """

    position: Vec2
    size: Vec2
    rotation: float = 0.0

    @property
    def center(self) -> Vec2:
        return (
            self.position[0] + self.size[0] / 2,
            self.position[1] + self.size[1] / 2,
        )

    def corners(self) -> List[Vec2]:
        """Rotated corners in TL, TR, BR, BL order."""
        cx, cy = self.center
        half_w = self.size[0] / 2
        half_h = self.size[1] / 2
        offsets = [
            (-half_w, -half_h),
            (half_w, -half_h),
            (half_w, half_h),
            (-half_w, half_h),
        ]
        corners = []
        for offset in offsets:
            rx, ry = rotate(offset, self.rotation)
            corners.append((cx + rx, cy + ry))
        return corners

    def aabb(self) -> Aabb:
        return Aabb.from_points(self.corners())

    def uv_to_world(self, uv: Vec2) -> Vec2:
        """Map normalized block coordinates (0-1 per axis) to world space."""
        local = ((uv[0] - 0.5) * self.size[0], (uv[1] - 0.5) * self.size[1])
        rx, ry = rotate(local, self.rotation)
        cx, cy = self.center
        return (cx + rx, cy + ry)

    def world_to_uv(self, point: Vec2) -> Vec2:
        """Map a world point to normalized block coordinates."""
        cx, cy = self.center
        lx, ly = rotate((point[0] - cx, point[1] - cy), -self.rotation)
        u = lx / self.size[0] + 0.5 if self.size[0] else 0.5
        v = ly / self.size[1] + 0.5 if self.size[1] else 0.5
        return (u, v)
