"""Map polyline/polygon subsetting.

Clips vector coastline and boundary data to a longitude-latitude
rectangle with the Liang-Barsky line and polygon algorithms, and
re-assembles clipped polylines into a compact collection.
"""

from map_subset.clipping import (
    clip_polygon,
    clip_segment,
    count_subset,
    polygon_area,
    polygon_intersects_bounds,
    subset,
)
from map_subset.core.config import ConfigValidationError, SubsetConfig
from map_subset.core.exceptions import ContractError, SubsetError, ValidationError
from map_subset.models import (
    Bounds,
    BoundsValidationError,
    PolylineCollection,
    SubsetSummary,
    bounds_overlap,
    bounds_subsumes,
    is_valid_bounds,
    validate_bounds,
)
from map_subset.pipeline import clip_region, subset_map

__version__ = "0.1.0"

__all__ = [
    "Bounds",
    "BoundsValidationError",
    "ConfigValidationError",
    "ContractError",
    "PolylineCollection",
    "SubsetConfig",
    "SubsetError",
    "SubsetSummary",
    "ValidationError",
    "bounds_overlap",
    "bounds_subsumes",
    "clip_polygon",
    "clip_region",
    "clip_segment",
    "count_subset",
    "is_valid_bounds",
    "polygon_area",
    "polygon_intersects_bounds",
    "subset",
    "subset_map",
    "validate_bounds",
]
