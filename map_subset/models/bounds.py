"""Longitude-latitude bounding rectangle and its validation.

A ``Bounds`` is the clip window shared by every clipping operation.
It is deliberately permissive at construction time so that
``is_valid_bounds`` can judge any rectangle; the clipping entry points
call ``validate_bounds`` before doing any work.

All coordinates are WGS 84 degrees.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from map_subset.core.constants import MAX_LATITUDE, MAX_LONGITUDE, MIN_LATITUDE, MIN_LONGITUDE
from map_subset.core.exceptions import ValidationError

if TYPE_CHECKING:
    from shapely.geometry import Polygon


class BoundsValidationError(ValidationError):
    """Raised when a rectangle is not a well-formed longitude-latitude box."""

    default_code = "BOUNDS_INVALID"


@dataclass(frozen=True, slots=True)
class Bounds:
    """An axis-aligned longitude-latitude rectangle.

    Attributes:
        longitude_min: Western edge in degrees.
        longitude_max: Eastern edge in degrees.
        latitude_min: Southern edge in degrees.
        latitude_max: Northern edge in degrees.
    """

    longitude_min: float
    longitude_max: float
    latitude_min: float
    latitude_max: float

    @classmethod
    def from_array(cls, values: Sequence[Sequence[float]]) -> Bounds:
        """Build from ``[[lon_min, lon_max], [lat_min, lat_max]]``."""
        (lon_min, lon_max), (lat_min, lat_max) = values
        return cls(float(lon_min), float(lon_max), float(lat_min), float(lat_max))

    @classmethod
    def from_bbox(cls, bbox: Sequence[float]) -> Bounds:
        """Build from ``(min_lon, min_lat, max_lon, max_lat)``."""
        min_lon, min_lat, max_lon, max_lat = bbox
        return cls(float(min_lon), float(max_lon), float(min_lat), float(max_lat))

    @classmethod
    def from_vertices(cls, vertices: Iterable[Sequence[float]]) -> Bounds:
        """Tight bounds of a sequence of ``(lon, lat)`` vertices.

        Raises:
            ValidationError: If no vertices are given.
        """
        points = [(float(v[0]), float(v[1])) for v in vertices]
        if not points:
            msg = "Cannot compute bounds of an empty vertex sequence"
            raise ValidationError(msg, stage="bounds")
        lons = [p[0] for p in points]
        lats = [p[1] for p in points]
        return cls(min(lons), max(lons), min(lats), max(lats))

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> Bounds:
        """Deserialise from a ``to_dict`` payload.

        Raises:
            KeyError: If a required edge is missing.
        """
        return cls(
            longitude_min=float(data["longitude_min"]),  # type: ignore[arg-type]
            longitude_max=float(data["longitude_max"]),  # type: ignore[arg-type]
            latitude_min=float(data["latitude_min"]),  # type: ignore[arg-type]
            latitude_max=float(data["latitude_max"]),  # type: ignore[arg-type]
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "longitude_min": self.longitude_min,
            "longitude_max": self.longitude_max,
            "latitude_min": self.latitude_min,
            "latitude_max": self.latitude_max,
        }

    def to_array(self) -> list[list[float]]:
        """Return ``[[lon_min, lon_max], [lat_min, lat_max]]``."""
        return [
            [self.longitude_min, self.longitude_max],
            [self.latitude_min, self.latitude_max],
        ]

    @property
    def bbox(self) -> tuple[float, float, float, float]:
        """``(min_lon, min_lat, max_lon, max_lat)``."""
        return (self.longitude_min, self.latitude_min, self.longitude_max, self.latitude_max)

    def contains(self, longitude: float, latitude: float, tolerance: float = 0.0) -> bool:
        """Return True if the point lies inside the rectangle (edges included)."""
        return (
            self.longitude_min - tolerance <= longitude <= self.longitude_max + tolerance
            and self.latitude_min - tolerance <= latitude <= self.latitude_max + tolerance
        )

    def to_shapely(self) -> Polygon:
        """Return the rectangle as a Shapely polygon."""
        from shapely.geometry import box

        return box(*self.bbox)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def is_valid_bounds(bounds: Bounds | None) -> bool:
    """Return True if ``bounds`` is a well-formed longitude-latitude box.

    Requires ``-180 <= lon_min <= lon_max <= 180`` and
    ``-90 <= lat_min <= lat_max <= 90``.  NaN edges fail every comparison
    and are therefore invalid.
    """
    if bounds is None:
        return False
    return (
        MIN_LONGITUDE <= bounds.longitude_min <= MAX_LONGITUDE
        and bounds.longitude_min <= bounds.longitude_max <= MAX_LONGITUDE
        and MIN_LATITUDE <= bounds.latitude_min <= MAX_LATITUDE
        and bounds.latitude_min <= bounds.latitude_max <= MAX_LATITUDE
    )


def validate_bounds(bounds: Bounds | None, *, stage: str = "") -> None:
    """Validate ``bounds`` at an API boundary.

    Raises:
        BoundsValidationError: If the rectangle is malformed.
    """
    if bounds is None:
        msg = "Bounds are required"
        raise BoundsValidationError(msg, stage=stage)
    if is_valid_bounds(bounds):
        return

    edges = (bounds.longitude_min, bounds.longitude_max, bounds.latitude_min, bounds.latitude_max)
    if any(math.isnan(edge) for edge in edges):
        msg = f"Bounds contain NaN edges: {bounds.to_array()}"
    elif bounds.longitude_min > bounds.longitude_max or bounds.latitude_min > bounds.latitude_max:
        msg = f"Bounds minimum exceeds maximum: {bounds.to_array()}"
    else:
        msg = (
            f"Bounds {bounds.to_array()} outside WGS 84 range "
            f"[[{MIN_LONGITUDE}, {MAX_LONGITUDE}], [{MIN_LATITUDE}, {MAX_LATITUDE}]]"
        )
    raise BoundsValidationError(msg, stage=stage)


def bounds_overlap(a: Bounds, b: Bounds) -> bool:
    """Return True if the two rectangles share any point (edges included).

    Raises:
        BoundsValidationError: If either rectangle is malformed.
    """
    validate_bounds(a, stage="bounds")
    validate_bounds(b, stage="bounds")
    outside = (
        a.latitude_min > b.latitude_max
        or a.latitude_max < b.latitude_min
        or a.longitude_min > b.longitude_max
        or a.longitude_max < b.longitude_min
    )
    return not outside


def bounds_subsumes(a: Bounds, b: Bounds) -> bool:
    """Return True if ``b`` lies completely inside ``a``.

    Raises:
        BoundsValidationError: If either rectangle is malformed.
    """
    validate_bounds(a, stage="bounds")
    validate_bounds(b, stage="bounds")
    return (
        a.longitude_min <= b.longitude_min <= a.longitude_max
        and a.longitude_min <= b.longitude_max <= a.longitude_max
        and a.latitude_min <= b.latitude_min <= a.latitude_max
        and a.latitude_min <= b.latitude_max <= a.latitude_max
    )
