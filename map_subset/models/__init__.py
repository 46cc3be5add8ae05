"""Data models.

Defines the data structures shared by the clipping engine:
- Bounds: Longitude-latitude clip rectangle and its validation
- PolylineCollection: Flat vertex array plus per-polyline counts
- SubsetSummary: Input/output accounting for one subset run
"""

from map_subset.models.bounds import (
    Bounds,
    BoundsValidationError,
    bounds_overlap,
    bounds_subsumes,
    is_valid_bounds,
    validate_bounds,
)
from map_subset.models.polylines import PolylineCollection
from map_subset.models.summary import SubsetSummary

__all__ = [
    "Bounds",
    "BoundsValidationError",
    "PolylineCollection",
    "SubsetSummary",
    "bounds_overlap",
    "bounds_subsumes",
    "is_valid_bounds",
    "validate_bounds",
]
