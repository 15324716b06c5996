"""
Path simplification for elbow arrows.

Three passes, each editing the point list in place:
- remove_duplicates: drop consecutive repeats
- remove_collinear_points: drop interior points that do not turn
- remove_zigzags: collapse S-shaped left/right/left (or right/left/right)
  turn runs into a single bend

The first and last points are never moved or removed.
"""

from typing import List, Optional, Sequence

from .config import EPSILON, MAX_SIMPLIFY_PASSES
from .geometry import Aabb, Vec2, approx_equal, points_equal

LEFT_TURN = "left"
RIGHT_TURN = "right"


def remove_duplicates(path: List[Vec2], epsilon: float = EPSILON) -> None:
    if len(path) < 2:
        return

    unique = [path[0]]
    for point in path[1:-1]:
        if not points_equal(unique[-1], point, epsilon):
            unique.append(point)

    # Both endpoints survive exactly, even when they coincide
    last = path[-1]
    if len(unique) > 1 and points_equal(unique[-1], last, epsilon):
        unique[-1] = last
    else:
        unique.append(last)

    path[:] = unique


def remove_collinear_points(path: List[Vec2], epsilon: float = EPSILON) -> None:
    if len(path) < 3:
        return

    to_remove = []
    for i in range(1, len(path) - 1):
        prev, current, nxt = path[i - 1], path[i], path[i + 1]
        same_x = approx_equal(prev[0], current[0], epsilon) and approx_equal(
            current[0], nxt[0], epsilon
        )
        same_y = approx_equal(prev[1], current[1], epsilon) and approx_equal(
            current[1], nxt[1], epsilon
        )
        if same_x or same_y:
            to_remove.append(i)

    for i in reversed(to_remove):
        del path[i]


def turn_direction(
    a: Vec2, b: Vec2, c: Vec2, epsilon: float = EPSILON
) -> Optional[str]:
    """Which way the path turns at b, or None if it goes straight."""
    cross = (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])
    if abs(cross) <= epsilon:
        return None
    return LEFT_TURN if cross > 0 else RIGHT_TURN


def _blocked(point: Vec2, obstacles: Sequence[Aabb]) -> bool:
    return any(box.contains_point(point, inclusive=False) for box in obstacles)


def remove_zigzags(
    path: List[Vec2],
    epsilon: float = EPSILON,
    obstacles: Sequence[Aabb] = (),
) -> None:
    """
    Collapse zig-zags in one sweep.

    For a turn run like left-right-left at points i, i+1, i+2, point i+1 is
    snapped so it lines up with both outer neighbours (i-1 and i+3), and
    points i and i+2 are dropped. Runs that overlap an earlier merge in the
    same sweep are left for the next sweep. A merge whose snapped corner
    would fall strictly inside one of the obstacles is skipped.
    """
    if len(path) < 5:
        return

    turns = [
        turn_direction(path[i - 1], path[i], path[i + 1], epsilon)
        for i in range(1, len(path) - 1)
    ]

    to_remove = []
    i = 1
    while i < len(turns) - 1:
        prev, current, nxt = turns[i - 1], turns[i], turns[i + 1]
        if prev is None or current is None or prev != nxt or prev == current:
            i += 1
            continue

        p, q, r = path[i], path[i + 1], path[i + 2]
        if approx_equal(q[0], p[0], epsilon):
            snapped = (r[0], p[1])
        elif approx_equal(q[1], p[1], epsilon):
            snapped = (p[0], r[1])
        else:
            # Snapping would introduce a diagonal
            i += 1
            continue

        if _blocked(snapped, obstacles):
            i += 1
            continue

        path[i + 1] = snapped
        to_remove.extend((i, i + 2))
        i += 4

    for index in reversed(to_remove):
        del path[index]


def simplify_path(
    path: List[Vec2],
    epsilon: float = EPSILON,
    max_passes: int = MAX_SIMPLIFY_PASSES,
    obstacles: Sequence[Aabb] = (),
) -> List[Vec2]:
    """
    Return a simplified copy of path.

    The three passes repeat until a sweep changes nothing, so simplifying an
    already simplified path (with the same obstacles) is a no-op.
    """
    result = list(path)
    for _ in range(max_passes):
        before = list(result)
        remove_duplicates(result, epsilon)
        remove_collinear_points(result, epsilon)
        remove_zigzags(result, epsilon, obstacles)
        if result == before:
            break
    return result
