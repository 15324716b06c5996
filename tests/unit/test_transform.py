"""Tests for affine transforms and the arrow-aligned frame."""

import math
import random

import pytest

from elbowroute.geometry import BlockRect
from elbowroute.transform import Affine2, ArrowFrame


class TestAffine2:
    """Tests for Affine2."""

    def test_identity(self):
        assert Affine2().apply((3, 4)) == (3, 4)

    def test_translation(self):
        assert Affine2.from_translation(10, -5).apply((1, 1)) == (11, -4)

    def test_translation_ignored_for_vectors(self):
        assert Affine2.from_translation(10, -5).apply_vector((1, 1)) == (1, 1)

    def test_rotation(self):
        x, y = Affine2.from_rotation(math.pi / 2).apply((1, 0))
        assert x == pytest.approx(0, abs=1e-12)
        assert y == pytest.approx(1)

    def test_then_applies_self_first(self):
        """Test translate-then-rotate differs from rotate-then-translate."""
        move = Affine2.from_translation(1, 0)
        turn = Affine2.from_rotation(math.pi / 2)

        x, y = move.then(turn).apply((0, 0))
        assert x == pytest.approx(0, abs=1e-12)
        assert y == pytest.approx(1)

        x, y = turn.then(move).apply((0, 0))
        assert x == pytest.approx(1)
        assert y == pytest.approx(0, abs=1e-12)

    def test_invert_round_trip(self):
        transform = Affine2.from_translation(5, 7).then(Affine2.from_rotation(0.3))
        inverse = transform.invert()
        x, y = inverse.apply(transform.apply((12, -3)))
        assert x == pytest.approx(12)
        assert y == pytest.approx(-3)

    def test_singular_transform_cannot_be_inverted(self):
        with pytest.raises(ValueError):
            Affine2(a=0, b=0, c=0, d=0).invert()


class TestArrowFrame:
    """Tests for ArrowFrame."""

    def test_pivot_is_endpoint_midpoint(self):
        frame = ArrowFrame((100, 50), (350, 0))
        assert frame.pivot == (225, 25)

    def test_unrotated_frame_only_translates(self):
        frame = ArrowFrame((100, 50), (350, 0))
        assert frame.to_local((100, 50)) == (-125, 25)
        assert frame.to_local((350, 0)) == (125, -25)

    def test_rotated_frame_aligns_arrow(self):
        """Test that a vertical arrow lies along local x under a quarter turn."""
        frame = ArrowFrame((0, 0), (0, 100), rotation=math.pi / 2)
        x, y = frame.to_local((0, 100))
        assert x == pytest.approx(50)
        assert y == pytest.approx(0, abs=1e-9)

    def test_round_trip_random_rotations(self):
        """Test to_world(to_local(p)) == p across rotations."""
        rng = random.Random(7)
        for _ in range(200):
            start = (rng.uniform(-500, 500), rng.uniform(-500, 500))
            end = (rng.uniform(-500, 500), rng.uniform(-500, 500))
            frame = ArrowFrame(start, end, rotation=rng.uniform(0, 2 * math.pi))
            point = (rng.uniform(-1000, 1000), rng.uniform(-1000, 1000))

            x, y = frame.to_world(frame.to_local(point))
            assert x == pytest.approx(point[0], abs=1e-6)
            assert y == pytest.approx(point[1], abs=1e-6)

    def test_block_to_local_relative_rotation(self):
        frame = ArrowFrame((0, 0), (100, 0), rotation=0.1)
        block = BlockRect(position=(200, 200), size=(80, 40), rotation=0.3)

        local = frame.block_to_local(block)
        assert local.size == (80, 40)
        assert local.rotation == pytest.approx(0.2)

        cx, cy = local.center
        ex, ey = frame.to_local(block.center)
        assert cx == pytest.approx(ex)
        assert cy == pytest.approx(ey)

    def test_block_aligned_with_arrow_is_axis_aligned_locally(self):
        """Test a block rotated like the arrow has an exact-size local box."""
        frame = ArrowFrame((0, 0), (100, 100), rotation=math.pi / 4)
        block = BlockRect(position=(0, 0), size=(60, 30), rotation=math.pi / 4)

        box = frame.local_block_aabb(block)
        assert box.width == pytest.approx(60)
        assert box.height == pytest.approx(30)
