"""Bounds and resolution subsetting of a polyline collection.

Walks every edge of every input polyline, optionally skips edges whose
endpoints are near-duplicates, clips the rest to the bounds and stitches
the surviving pieces back into output polylines:

- a clipped edge starting exactly where the last written vertex ended
  extends the current output polyline by its end point;
- any other clipped edge starts a new output polyline with both points.

Contiguity is tracked across polyline boundaries too, so an input
polyline that continues where the previous one stopped is merged into
the same output polyline.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator

import numpy as np

from map_subset.clipping.segment import Vertex, clip_coordinates
from map_subset.core.constants import IN_BOUNDS_TOLERANCE
from map_subset.core.exceptions import ValidationError
from map_subset.core.geometry import in_bounds, is_valid_longitude_latitude, unique_points
from map_subset.models.bounds import Bounds, validate_bounds
from map_subset.models.polylines import PolylineCollection

logger = logging.getLogger("map_subset.clipping.subset")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def subset(
    bounds: Bounds,
    polylines: PolylineCollection,
    *,
    resolution: float = 0.0,
) -> PolylineCollection:
    """Clip a polyline collection to ``bounds``.

    Args:
        bounds: Clip rectangle.
        polylines: Input collection; every polyline needs two or more vertices.
        resolution: Edges whose endpoints are within ``resolution`` degrees
            on both axes are skipped.  ``0`` disables the filter.

    Returns:
        The clipped collection, in the input's vertex dtype.  Empty (no
        polylines, no vertices) when nothing intersects ``bounds``.

    Raises:
        BoundsValidationError: If ``bounds`` is malformed.
        ValidationError: If ``resolution`` is negative or not finite, a
            polyline is too short, or the first vertex is off the globe.
        ContractError: If the counts and vertex arrays disagree.
    """
    _validate_inputs(bounds, polylines, resolution, stage="subset")

    counts: list[int] = []
    points: list[Vertex] = []

    for start, end, contiguous in _kept_edges(bounds, polylines, resolution):
        if contiguous:
            counts[-1] += 1
            points.append(end)
        else:
            counts.append(2)
            points.append(start)
            points.append(end)

    if not points:
        result = PolylineCollection.empty(polylines.dtype)
    else:
        result = PolylineCollection(
            counts=np.asarray(counts, dtype=np.int64),
            vertices=np.asarray(points, dtype=polylines.dtype),
        )

    assert result.vertex_count <= 2 * polylines.vertex_count
    assert in_bounds(result.vertices, bounds, IN_BOUNDS_TOLERANCE)

    logger.debug(
        "Subset complete | input_polylines=%d | input_vertices=%d | "
        "output_polylines=%d | output_vertices=%d | resolution=%g",
        polylines.polyline_count,
        polylines.vertex_count,
        result.polyline_count,
        result.vertex_count,
        resolution,
    )
    return result


def count_subset(
    bounds: Bounds,
    polylines: PolylineCollection,
    *,
    resolution: float = 0.0,
) -> tuple[int, int]:
    """Return ``(polyline_count, vertex_count)`` that ``subset`` would produce.

    Runs the same walk without storing any output vertices, so callers
    can size their own buffers first.

    Raises:
        Same as ``subset``.
    """
    _validate_inputs(bounds, polylines, resolution, stage="count_subset")

    polyline_count = 0
    vertex_count = 0
    for _start, _end, contiguous in _kept_edges(bounds, polylines, resolution):
        if contiguous:
            vertex_count += 1
        else:
            polyline_count += 1
            vertex_count += 2

    return polyline_count, vertex_count


# ---------------------------------------------------------------------------
# Edge walk
# ---------------------------------------------------------------------------


def _kept_edges(
    bounds: Bounds,
    polylines: PolylineCollection,
    resolution: float,
) -> Iterator[tuple[Vertex, Vertex, bool]]:
    """Yield ``(start, end, contiguous)`` for every edge that survives clipping.

    ``contiguous`` is True when ``start`` equals the end of the previously
    yielded edge exactly.
    """
    x_min = bounds.longitude_min
    x_max = bounds.longitude_max
    y_min = bounds.latitude_min
    y_max = bounds.latitude_max
    vertices = polylines.vertices.tolist()
    last_written: Vertex | None = None
    offset = 0

    for count in polylines.counts.tolist():
        lon1, lat1 = vertices[offset]

        for lon2, lat2 in vertices[offset + 1 : offset + count]:
            if resolution == 0.0 or unique_points(lon1, lat1, lon2, lat2, resolution):
                clipped = clip_coordinates(x_min, y_min, x_max, y_max, lon1, lat1, lon2, lat2)
                if clipped is not None:
                    start, end = clipped
                    yield start, end, start == last_written
                    last_written = end

            lon1, lat1 = lon2, lat2

        offset += count


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _validate_inputs(
    bounds: Bounds,
    polylines: PolylineCollection,
    resolution: float,
    *,
    stage: str,
) -> None:
    validate_bounds(bounds, stage=stage)

    if not math.isfinite(resolution) or resolution < 0.0:
        msg = f"Resolution must be a finite number >= 0, got {resolution!r}"
        raise ValidationError(msg, stage=stage, code="RESOLUTION_INVALID")

    polylines.validate(stage=stage)

    if polylines.vertex_count:
        longitude, latitude = polylines.vertices[0].tolist()
        if not is_valid_longitude_latitude(longitude, latitude):
            msg = (
                f"First vertex ({longitude}, {latitude}) is outside the "
                "longitude-latitude domain"
            )
            raise ValidationError(msg, stage=stage, code="COORDINATE_INVALID")
