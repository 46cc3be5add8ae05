"""Liang-Barsky clipping of a closed polygon to a rectangle.

Each edge ``(v[i], v[i+1 mod N])`` is classified against the entry and
exit boundaries it would cross on each axis.  Depending on where the
parametric entry/exit values fall, the edge contributes 0-3 vertices
to the clipped ring, including turning-point corners when the edge
passes through a corner region of the window.

The per-edge construction can leave duplicate vertices and, for
five-vertex results, a zero-area 'hat' or 'line' tail.  With
``discard_degenerates`` these are removed; results smaller than a
triangle are always discarded.

References:
    Liang & Barsky, "An Analysis and Algorithm for Polygon Clipping",
    CACM 26(11), November 1983.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from map_subset.core.constants import (
    DEGENERATE_TRIM_PASSES,
    HAT_VERTEX_COUNT,
    MIN_POLYGON_VERTICES,
    TRIM_AREA_REL_TOLERANCE,
)
from map_subset.core.exceptions import ValidationError
from map_subset.core.geometry import area_of_triangle
from map_subset.models.bounds import Bounds, bounds_overlap, bounds_subsumes, validate_bounds

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

logger = logging.getLogger("map_subset.clipping.polygon")

Vertex = tuple[float, float]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def clip_polygon(
    bounds: Bounds,
    vertices: ArrayLike,
    *,
    discard_degenerates: bool = True,
) -> np.ndarray:
    """Clip a closed polygon to ``bounds``.

    Args:
        bounds: Clip rectangle.
        vertices: ``N >= 3`` ``(lon, lat)`` vertices; the ring closes
            implicitly from the last vertex back to the first.
        discard_degenerates: Remove duplicate vertices and zero-area
            five-vertex tails produced by the per-edge construction.

    Returns:
        ``(M, 2)`` array with ``M == 0`` or ``M >= 3``.  For convex input
        ``M <= 2N + 2``; concave input can turn through more window
        corners and produce up to ``3N`` vertices.  The ring starts with
        the vertex produced by the closing edge, so a polygon strictly
        inside ``bounds`` comes back unchanged (less any repeated
        vertices when ``discard_degenerates`` is set).

    Raises:
        BoundsValidationError: If ``bounds`` is malformed.
        ValidationError: If ``vertices`` is not a finite ``(N, 2)``
            array with ``N >= 3``.
    """
    validate_bounds(bounds, stage="clip_polygon")
    points = _as_polygon(vertices)
    count = points.shape[0]

    clipped = _clip_ring(
        bounds.longitude_min,
        bounds.latitude_min,
        bounds.longitude_max,
        bounds.latitude_max,
        points.tolist(),
    )
    # Each edge contributes at most an entry, an exit and a corner vertex.
    assert len(clipped) <= 3 * count

    if discard_degenerates:
        clipped = _remove_degenerates(clipped)

    if len(clipped) < MIN_POLYGON_VERTICES:
        clipped = []
    else:
        clipped = clipped[-1:] + clipped[:-1]

    logger.debug(
        "Polygon clipped | input_vertices=%d | output_vertices=%d | discard_degenerates=%s",
        count,
        len(clipped),
        discard_degenerates,
    )

    dtype = points.dtype if points.dtype.kind == "f" else np.float64
    return np.asarray(clipped, dtype=dtype).reshape(-1, 2)


def polygon_area(vertices: ArrayLike) -> float:
    """Unsigned shoelace area of a closed ring (0 for fewer than 3 vertices)."""
    points = np.asarray(vertices, dtype=np.float64).reshape(-1, 2)
    if points.shape[0] < MIN_POLYGON_VERTICES:
        return 0.0
    x = points[:, 0]
    y = points[:, 1]
    return float(abs(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1))) * 0.5)


def polygon_intersects_bounds(bounds: Bounds, vertices: ArrayLike) -> bool:
    """Return True if the polygon shares area with ``bounds``.

    Polygons whose own bounds lie inside ``bounds`` are accepted without
    clipping; polygons whose bounds do not even overlap are rejected;
    the rest are decided by ``clip_polygon``.

    Raises:
        BoundsValidationError: If ``bounds`` is malformed.
        ValidationError: If ``vertices`` is not a valid polygon or lies
            outside the longitude-latitude domain.
    """
    validate_bounds(bounds, stage="clip_polygon")
    points = _as_polygon(vertices)
    polygon_bounds = Bounds.from_vertices(points.tolist())

    if bounds_subsumes(bounds, polygon_bounds):
        return True
    if not bounds_overlap(bounds, polygon_bounds):
        return False
    return clip_polygon(bounds, points, discard_degenerates=False).shape[0] > 0


# ---------------------------------------------------------------------------
# Clipping
# ---------------------------------------------------------------------------


def _clip_ring(
    x_min: float,
    y_min: float,
    x_max: float,
    y_max: float,
    points: list[list[float]],
) -> list[Vertex]:
    """Run the per-edge construction over the ring."""
    inf = math.inf
    result: list[Vertex] = []
    count = len(points)

    for index in range(count):
        vx, vy = points[index]
        nx, ny = points[(index + 1) % count]
        dx = nx - vx
        dy = ny - vy
        one_over_dx = 1.0 / dx if dx else 0.0
        one_over_dy = 1.0 / dy if dy else 0.0

        # Boundaries crossed on entry and exit.  An axis-parallel edge
        # outside the window exits through its nearest boundary.
        if dx > 0.0 or (dx == 0.0 and vx > x_max):
            x_in, x_out = x_min, x_max
        else:
            x_in, x_out = x_max, x_min

        if dy > 0.0 or (dy == 0.0 and vy > y_max):
            y_in, y_out = y_min, y_max
        else:
            y_in, y_out = y_max, y_min

        if dx != 0.0:
            t_out_x = (x_out - vx) * one_over_dx
        elif x_min <= vx <= x_max:
            t_out_x = inf
        else:
            t_out_x = -inf

        if dy != 0.0:
            t_out_y = (y_out - vy) * one_over_dy
        elif y_min <= vy <= y_max:
            t_out_y = inf
        else:
            t_out_y = -inf

        if t_out_x < t_out_y:
            t_out1, t_out2 = t_out_x, t_out_y
        else:
            t_out1, t_out2 = t_out_y, t_out_x

        if t_out2 <= 0.0:
            continue

        t_in_x = (x_in - vx) * one_over_dx if dx != 0.0 else -inf
        t_in_y = (y_in - vy) * one_over_dy if dy != 0.0 else -inf
        t_in2 = t_in_y if t_in_x < t_in_y else t_in_x

        if t_out1 < t_in2:
            # No visible segment: the edge only crosses a corner region.
            if 0.0 < t_out1 <= 1.0:
                if t_in_x < t_in_y:
                    result.append((x_out, y_in))
                else:
                    result.append((x_in, y_out))
        elif 0.0 < t_out1 and t_in2 <= 1.0:
            if 0.0 <= t_in2:
                if t_in_x > t_in_y:
                    result.append((x_in, vy + t_in_x * dy))
                else:
                    result.append((vx + t_in_y * dx, y_in))

            if t_out1 <= 1.0:
                if t_out_x < t_out_y:
                    result.append((x_out, vy + t_out_x * dy))
                else:
                    result.append((vx + t_out_y * dx, y_out))
            else:
                result.append((nx, ny))

        if 0.0 < t_out2 <= 1.0:
            result.append((x_out, y_out))

    return result


def _remove_degenerates(ring: list[Vertex]) -> list[Vertex]:
    """Drop repeated vertices, then trim a zero-area five-vertex tail.

    The last two vertices are removed only when the last three are
    collinear and removing them leaves the ring's area unchanged.
    """
    result: list[Vertex] = []
    for vertex in ring:
        if not result or vertex != result[-1]:
            result.append(vertex)
    while len(result) > 1 and result[-1] == result[0]:
        result.pop()

    if len(result) == HAT_VERTEX_COUNT:
        for _ in range(DEGENERATE_TRIM_PASSES):
            if len(result) >= MIN_POLYGON_VERTICES:
                (x1, y1), (x2, y2), (x3, y3) = result[-3:]
                if area_of_triangle(x1, y1, x2, y2, x3, y3) != 0.0:
                    continue
                trimmed = result[:-2]
                if math.isclose(
                    polygon_area(trimmed),
                    polygon_area(result),
                    rel_tol=TRIM_AREA_REL_TOLERANCE,
                ):
                    result = trimmed

    return result


def _as_polygon(vertices: ArrayLike) -> np.ndarray:
    points = np.asarray(vertices)
    if points.dtype.kind not in "fiu":
        msg = f"Polygon vertices must be numeric, got dtype {points.dtype}"
        raise ValidationError(msg, stage="clip_polygon")
    if points.ndim != 2 or points.shape[1] != 2:
        msg = f"Polygon vertices must have shape (N, 2), got {points.shape}"
        raise ValidationError(msg, stage="clip_polygon")
    if points.shape[0] < MIN_POLYGON_VERTICES:
        msg = (
            f"Polygon needs at least {MIN_POLYGON_VERTICES} vertices, "
            f"got {points.shape[0]}"
        )
        raise ValidationError(msg, stage="clip_polygon")
    if not np.all(np.isfinite(points)):
        msg = "Polygon vertices must be finite"
        raise ValidationError(msg, stage="clip_polygon")
    return points
