"""
Coordinate-space transforms for elbow routing.

Routing happens in an arrow-aligned "local" frame: the origin sits at the
midpoint of the arrow's endpoints and the axes follow the arrow's rotation,
so horizontal/vertical routing means horizontal/vertical relative to the
arrow. Paths are mapped back to world space once routing is done.
"""

import math
from dataclasses import dataclass

from .geometry import Aabb, BlockRect, Vec2, midpoint


@dataclass(frozen=True)
class Affine2:
    """
    2D affine transform stored as a 2x3 matrix.

    | a  c  tx |
    | b  d  ty |
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    @classmethod
    def from_translation(cls, tx: float, ty: float) -> "Affine2":
        return cls(tx=tx, ty=ty)

    @classmethod
    def from_rotation(cls, angle: float) -> "Affine2":
        cos = math.cos(angle)
        sin = math.sin(angle)
        return cls(a=cos, b=sin, c=-sin, d=cos)

    def then(self, other: "Affine2") -> "Affine2":
        """Return the transform that applies self first, then other."""
        return Affine2(
            a=other.a * self.a + other.c * self.b,
            b=other.b * self.a + other.d * self.b,
            c=other.a * self.c + other.c * self.d,
            d=other.b * self.c + other.d * self.d,
            tx=other.a * self.tx + other.c * self.ty + other.tx,
            ty=other.b * self.tx + other.d * self.ty + other.ty,
        )

    def apply(self, point: Vec2) -> Vec2:
        x, y = point
        return (
            self.a * x + self.c * y + self.tx,
            self.b * x + self.d * y + self.ty,
        )

    def apply_vector(self, vector: Vec2) -> Vec2:
        """Apply the linear part only (directions ignore translation)."""
        x, y = vector
        return (self.a * x + self.c * y, self.b * x + self.d * y)

    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    def invert(self) -> "Affine2":
        det = self.determinant()
        if det == 0:
            raise ValueError("transform is not invertible")
        inv = 1 / det
        return Affine2(
            a=self.d * inv,
            b=-self.b * inv,
            c=-self.c * inv,
            d=self.a * inv,
            tx=(self.c * self.ty - self.d * self.tx) * inv,
            ty=(self.b * self.tx - self.a * self.ty) * inv,
        )


class ArrowFrame:
    """
    The arrow-aligned local frame for one routing call.

    to_local translates by -pivot then rotates by -rotation; to_world rotates
    by rotation then translates by +pivot, where pivot is the midpoint of the
    arrow's endpoints.
    """

    def __init__(self, start: Vec2, end: Vec2, rotation: float = 0.0):
        self.rotation = rotation
        self.pivot = midpoint(start, end)

        px, py = self.pivot
        self.to_local_transform = Affine2.from_translation(-px, -py).then(
            Affine2.from_rotation(-rotation)
        )
        self.to_world_transform = Affine2.from_rotation(rotation).then(
            Affine2.from_translation(px, py)
        )

    def to_local(self, point: Vec2) -> Vec2:
        return self.to_local_transform.apply(point)

    def to_world(self, point: Vec2) -> Vec2:
        return self.to_world_transform.apply(point)

    def block_to_local(self, block: BlockRect) -> BlockRect:
        """
        Express a block in local space.

        The block keeps its size; its center moves into the local frame and
        its rotation becomes relative to the arrow's rotation.
        """
        cx, cy = self.to_local(block.center)
        width, height = block.size
        return BlockRect(
            position=(cx - width / 2, cy - height / 2),
            size=block.size,
            rotation=block.rotation - self.rotation,
        )

    def local_block_aabb(self, block: BlockRect) -> Aabb:
        return self.block_to_local(block).aabb()
