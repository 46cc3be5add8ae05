"""Liang-Barsky clipping against a longitude-latitude rectangle.

- segment: Single line segment clip
- polygon: Closed polygon clip with degenerate cleanup
- subset: Polyline collection subsetting with contiguity tracking
"""

from map_subset.clipping.polygon import clip_polygon, polygon_area, polygon_intersects_bounds
from map_subset.clipping.segment import clip_segment
from map_subset.clipping.subset import count_subset, subset

__all__ = [
    "clip_polygon",
    "clip_segment",
    "count_subset",
    "polygon_area",
    "polygon_intersects_bounds",
    "subset",
]
