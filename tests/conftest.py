"""Shared pytest fixtures for the map subset test suite."""

from __future__ import annotations

import pytest

from map_subset.models.bounds import Bounds
from map_subset.models.polylines import PolylineCollection

# ---------------------------------------------------------------------------
# Clip windows
# ---------------------------------------------------------------------------


@pytest.fixture()
def window() -> Bounds:
    """The ``[0, 10] x [0, 10]`` window used by most clipping scenarios."""
    return Bounds(longitude_min=0.0, longitude_max=10.0, latitude_min=0.0, latitude_max=10.0)


@pytest.fixture()
def centred_window() -> Bounds:
    """The ``[-10, 10] x [-10, 10]`` window around the origin."""
    return Bounds(longitude_min=-10.0, longitude_max=10.0, latitude_min=-10.0, latitude_max=10.0)


# ---------------------------------------------------------------------------
# Polyline collections
# ---------------------------------------------------------------------------


@pytest.fixture()
def coastline() -> PolylineCollection:
    """Two polylines: one inside ``window``, one crossing its right edge."""
    return PolylineCollection.from_polylines(
        [
            [(1.0, 1.0), (2.0, 2.0), (3.0, 1.5)],
            [(8.0, 5.0), (12.0, 5.0), (12.0, 7.0), (8.0, 7.0)],
        ]
    )
