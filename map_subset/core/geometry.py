"""Shared planar geometry primitives.

Small, pure helpers used by the clipping modules: triangle area,
point uniqueness and coordinate/containment checks.
All functions operate on plain floats in longitude-latitude degrees.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from map_subset.core.constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MIN_LATITUDE,
    MIN_LONGITUDE,
)

if TYPE_CHECKING:
    from numpy.typing import ArrayLike

    from map_subset.models.bounds import Bounds


def is_valid_longitude_latitude(longitude: float, latitude: float) -> bool:
    """Return True if ``(longitude, latitude)`` lies in the WGS 84 domain."""
    return MIN_LONGITUDE <= longitude <= MAX_LONGITUDE and MIN_LATITUDE <= latitude <= MAX_LATITUDE


def area_of_triangle(
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    x3: float,
    y3: float,
) -> float:
    """Unsigned area of the triangle ``(x1, y1), (x2, y2), (x3, y3)``.

    Half the magnitude of the cross product of two edge vectors (shoelace).
    Zero for collinear or coincident vertices.
    """
    a = x1 - x3
    b = y1 - y3
    c = x2 - x3
    d = y2 - y3
    return abs(0.5 * (a * d - b * c))


def unique_points(
    longitude1: float,
    latitude1: float,
    longitude2: float,
    latitude2: float,
    tolerance: float,
) -> bool:
    """Return True if the points differ by more than ``tolerance`` on either axis."""
    return abs(longitude1 - longitude2) > tolerance or abs(latitude1 - latitude2) > tolerance


def in_bounds(vertices: ArrayLike, bounds: Bounds, tolerance: float = 0.0) -> bool:
    """Return True if every ``(lon, lat)`` row lies within ``bounds`` ± ``tolerance``."""
    points = np.asarray(vertices, dtype=np.float64).reshape(-1, 2)
    if points.size == 0:
        return True
    longitudes = points[:, 0]
    latitudes = points[:, 1]
    return bool(
        np.all(longitudes >= bounds.longitude_min - tolerance)
        and np.all(longitudes <= bounds.longitude_max + tolerance)
        and np.all(latitudes >= bounds.latitude_min - tolerance)
        and np.all(latitudes <= bounds.latitude_max + tolerance)
    )
