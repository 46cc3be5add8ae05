"""Config-driven subset entry points.

Ties the clipping engine to ``SubsetConfig``:
- ``subset_map`` converts polylines to the configured vertex width, runs
  ``subset`` with the configured resolution and records the run as a
  ``SubsetSummary``
- ``clip_region`` clips a polygon with the configured degenerate cleanup

Observability:
- one INFO line per run with input/output accounting
- a WARNING when nothing survives the subset
- validation failures are logged with their structured error payload
  and re-raised unchanged
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from map_subset.clipping.polygon import clip_polygon
from map_subset.clipping.subset import subset
from map_subset.core.config import SubsetConfig
from map_subset.core.exceptions import SubsetError
from map_subset.models.bounds import Bounds
from map_subset.models.polylines import PolylineCollection
from map_subset.models.summary import SubsetSummary

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

logger = logging.getLogger("map_subset.pipeline")


def configure_logging(config: SubsetConfig) -> None:
    """Apply ``config.log_level`` to the package logger.

    Handlers are left to the application.
    """
    logging.getLogger("map_subset").setLevel(config.log_level)


def subset_map(
    polylines: PolylineCollection,
    bounds: Bounds,
    *,
    config: SubsetConfig | None = None,
) -> tuple[PolylineCollection, SubsetSummary]:
    """Subset a polyline collection using pipeline configuration.

    Args:
        polylines: Input collection (any float width).
        bounds: Clip rectangle.
        config: Pipeline configuration; loaded from the environment when
            omitted.

    Returns:
        ``(clipped, summary)`` where ``clipped`` uses
        ``config.vertex_dtype``.

    Raises:
        SubsetError: Any validation or contract failure from ``subset``.
    """
    if config is None:
        config = SubsetConfig.from_env()

    dtype = np.dtype(config.vertex_dtype)
    source = PolylineCollection(
        counts=polylines.counts,
        vertices=polylines.vertices.astype(dtype, copy=False),
    )

    try:
        clipped = subset(bounds, source, resolution=config.resolution)
    except SubsetError as exc:
        logger.error("Subset rejected | error=%s", exc.to_error_dict())
        raise

    summary = SubsetSummary(
        bounds=bounds.to_array(),
        resolution=config.resolution,
        vertex_dtype=dtype.name,
        input_polyline_count=source.polyline_count,
        input_vertex_count=source.vertex_count,
        output_polyline_count=clipped.polyline_count,
        output_vertex_count=clipped.vertex_count,
        discontinuities=max(clipped.polyline_count - 1, 0),
    )

    logger.info(
        "Subset | bounds=[%.4f, %.4f, %.4f, %.4f] | resolution=%g | dtype=%s | "
        "polylines=%d->%d | vertices=%d->%d",
        *bounds.bbox,
        config.resolution,
        dtype.name,
        summary.input_polyline_count,
        summary.output_polyline_count,
        summary.input_vertex_count,
        summary.output_vertex_count,
    )

    if clipped.is_empty and not source.is_empty:
        logger.warning(
            "No geometry within bounds [%.4f, %.4f, %.4f, %.4f]",
            *bounds.bbox,
        )

    return clipped, summary


def clip_region(
    vertices: ArrayLike,
    bounds: Bounds,
    *,
    config: SubsetConfig | None = None,
) -> np.ndarray:
    """Clip a polygonal region using pipeline configuration.

    Applies ``config.discard_degenerates`` and stores the result with
    ``config.vertex_dtype``.

    Raises:
        SubsetError: Any validation failure from ``clip_polygon``.
    """
    if config is None:
        config = SubsetConfig.from_env()

    try:
        clipped = clip_polygon(
            bounds,
            vertices,
            discard_degenerates=config.discard_degenerates,
        )
    except SubsetError as exc:
        logger.error("Region rejected | error=%s", exc.to_error_dict())
        raise

    logger.info(
        "Region | bounds=[%.4f, %.4f, %.4f, %.4f] | discard_degenerates=%s | vertices=%d",
        *bounds.bbox,
        config.discard_degenerates,
        clipped.shape[0],
    )
    return clipped.astype(config.vertex_dtype, copy=False)
