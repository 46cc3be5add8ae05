"""Liang-Barsky clipping of a single line segment.

The segment is treated parametrically as ``P(t) = p1 + t * (p2 - p1)``
for ``t`` in ``[0, 1]``; each rectangle edge narrows the visible
interval ``[t1, t2]`` until it is either empty (rejected) or final.

References:
    Liang & Barsky, "A New Concept and Method for Line Clipping",
    ACM Transactions on Graphics 3(1), 1984, pp. 1-22.
"""

from __future__ import annotations

from collections.abc import Sequence

from map_subset.models.bounds import Bounds, validate_bounds

Vertex = tuple[float, float]


def clip_segment(
    bounds: Bounds,
    p1: Sequence[float],
    p2: Sequence[float],
) -> tuple[Vertex, Vertex] | None:
    """Clip the segment ``p1``-``p2`` to ``bounds``.

    Args:
        bounds: Clip rectangle.
        p1: Start ``(lon, lat)``.
        p2: End ``(lon, lat)``.

    Returns:
        The visible part as ``(start, end)``, or ``None`` if the segment
        misses the rectangle.  Endpoints already inside are returned
        exactly as given.

    Raises:
        BoundsValidationError: If ``bounds`` is malformed.
    """
    validate_bounds(bounds, stage="clip_segment")
    return clip_coordinates(
        bounds.longitude_min,
        bounds.latitude_min,
        bounds.longitude_max,
        bounds.latitude_max,
        float(p1[0]),
        float(p1[1]),
        float(p2[0]),
        float(p2[1]),
    )


def clip_coordinates(
    x_min: float,
    y_min: float,
    x_max: float,
    y_max: float,
    x1: float,
    y1: float,
    x2: float,
    y2: float,
) -> tuple[Vertex, Vertex] | None:
    """Clip ``(x1, y1)-(x2, y2)`` to the window without validating it.

    Used directly by per-edge loops that validated the window once up front.
    """
    dx = x2 - x1
    dy = y2 - y1
    interval = [0.0, 1.0]

    # Left, right, bottom, top.
    if not (
        _clip_boundary(-dx, x1 - x_min, interval)
        and _clip_boundary(dx, x_max - x1, interval)
        and _clip_boundary(-dy, y1 - y_min, interval)
        and _clip_boundary(dy, y_max - y1, interval)
    ):
        return None

    t1, t2 = interval

    # End point first: both use the original start point.
    if t2 < 1.0:
        x2 = x1 + t2 * dx
        y2 = y1 + t2 * dy

    if t1 > 0.0:
        x1 += t1 * dx
        y1 += t1 * dy

    return (x1, y1), (x2, y2)


def _clip_boundary(p: float, q: float, interval: list[float]) -> bool:
    """Narrow ``interval`` against one boundary; False if nothing remains.

    ``p`` is the outward component of the direction and ``q`` the signed
    distance of the start point inside the boundary.
    """
    if p < 0.0:
        # Entering through this boundary.
        r = q / p
        if r > interval[1]:
            return False
        if r > interval[0]:
            interval[0] = r
    elif p > 0.0:
        # Leaving through this boundary.
        r = q / p
        if r < interval[0]:
            return False
        if r < interval[1]:
            interval[1] = r
    elif q < 0.0:
        # Parallel and outside.
        return False
    return True
