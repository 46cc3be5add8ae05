"""Unit tests for the Bounds model and its validation.

Covers:
- Construction helpers and serialisation
- is_valid_bounds / validate_bounds across the WGS 84 domain
- bounds_overlap and bounds_subsumes, edges included
"""

from __future__ import annotations

import math

import pytest

from map_subset.core.exceptions import ValidationError
from map_subset.models.bounds import (
    Bounds,
    BoundsValidationError,
    bounds_overlap,
    bounds_subsumes,
    is_valid_bounds,
    validate_bounds,
)


def _bounds(lon_min: float, lon_max: float, lat_min: float, lat_max: float) -> Bounds:
    return Bounds(
        longitude_min=lon_min,
        longitude_max=lon_max,
        latitude_min=lat_min,
        latitude_max=lat_max,
    )


class TestBoundsConstruction:
    """Alternate constructors and serialisation."""

    def test_from_array(self) -> None:
        bounds = Bounds.from_array([[-10, 20], [30, 40]])
        assert bounds == _bounds(-10.0, 20.0, 30.0, 40.0)
        assert isinstance(bounds.longitude_min, float)

    def test_to_array_round_trip(self) -> None:
        bounds = _bounds(-10.0, 20.0, 30.0, 40.0)
        assert bounds.to_array() == [[-10.0, 20.0], [30.0, 40.0]]
        assert Bounds.from_array(bounds.to_array()) == bounds

    def test_from_bbox_order(self) -> None:
        bounds = Bounds.from_bbox((1.0, 2.0, 3.0, 4.0))
        assert bounds == _bounds(1.0, 3.0, 2.0, 4.0)
        assert bounds.bbox == (1.0, 2.0, 3.0, 4.0)

    def test_from_vertices(self) -> None:
        bounds = Bounds.from_vertices([(3.0, -1.0), (-2.0, 5.0), (1.0, 2.0)])
        assert bounds == _bounds(-2.0, 3.0, -1.0, 5.0)

    def test_from_vertices_empty(self) -> None:
        with pytest.raises(ValidationError, match="empty"):
            Bounds.from_vertices([])

    def test_dict_round_trip(self) -> None:
        bounds = _bounds(-1.5, 2.5, -3.5, 4.5)
        data = bounds.to_dict()
        assert data == {
            "longitude_min": -1.5,
            "longitude_max": 2.5,
            "latitude_min": -3.5,
            "latitude_max": 4.5,
        }
        assert Bounds.from_dict(data) == bounds

    def test_from_dict_missing_edge(self) -> None:
        with pytest.raises(KeyError):
            Bounds.from_dict({"longitude_min": 0.0})

    def test_contains_edges_inclusive(self, window: Bounds) -> None:
        assert window.contains(0.0, 10.0)
        assert window.contains(5.0, 5.0)
        assert not window.contains(10.0001, 5.0)
        assert window.contains(10.0001, 5.0, tolerance=1e-3)

    def test_to_shapely(self, window: Bounds) -> None:
        polygon = window.to_shapely()
        assert polygon.bounds == (0.0, 0.0, 10.0, 10.0)
        assert polygon.area == pytest.approx(100.0)


class TestBoundsValidation:
    """Well-formedness across the longitude-latitude domain."""

    @pytest.mark.parametrize(
        "bounds",
        [
            _bounds(-180.0, 180.0, -90.0, 90.0),
            _bounds(0.0, 0.0, 0.0, 0.0),
            _bounds(-10.0, 10.0, -10.0, 10.0),
        ],
    )
    def test_valid(self, bounds: Bounds) -> None:
        assert is_valid_bounds(bounds)
        validate_bounds(bounds)

    @pytest.mark.parametrize(
        "bounds",
        [
            _bounds(10.0, 0.0, 0.0, 10.0),
            _bounds(0.0, 10.0, 10.0, 0.0),
            _bounds(-181.0, 0.0, 0.0, 10.0),
            _bounds(0.0, 180.5, 0.0, 10.0),
            _bounds(0.0, 10.0, -91.0, 0.0),
            _bounds(0.0, 10.0, 0.0, 90.5),
            _bounds(math.nan, 10.0, 0.0, 10.0),
            _bounds(0.0, 10.0, 0.0, math.nan),
        ],
    )
    def test_invalid(self, bounds: Bounds) -> None:
        assert not is_valid_bounds(bounds)
        with pytest.raises(BoundsValidationError):
            validate_bounds(bounds)

    def test_none_is_invalid(self) -> None:
        assert not is_valid_bounds(None)
        with pytest.raises(BoundsValidationError, match="required"):
            validate_bounds(None)

    def test_nan_message(self) -> None:
        with pytest.raises(BoundsValidationError, match="NaN"):
            validate_bounds(_bounds(math.nan, 10.0, 0.0, 10.0))

    def test_inverted_message(self) -> None:
        with pytest.raises(BoundsValidationError, match="minimum exceeds maximum"):
            validate_bounds(_bounds(0.0, 10.0, 10.0, 0.0))

    def test_stage_recorded(self) -> None:
        with pytest.raises(BoundsValidationError) as exc_info:
            validate_bounds(_bounds(10.0, 0.0, 0.0, 10.0), stage="subset")
        assert exc_info.value.stage == "subset"
        assert exc_info.value.code == "BOUNDS_INVALID"


class TestBoundsRelations:
    """Overlap and containment between rectangles."""

    def test_overlap(self, window: Bounds) -> None:
        assert bounds_overlap(window, _bounds(5.0, 15.0, 5.0, 15.0))

    def test_overlap_shared_edge(self, window: Bounds) -> None:
        assert bounds_overlap(window, _bounds(10.0, 20.0, 0.0, 10.0))

    def test_no_overlap(self, window: Bounds) -> None:
        assert not bounds_overlap(window, _bounds(11.0, 20.0, 0.0, 10.0))
        assert not bounds_overlap(window, _bounds(0.0, 10.0, -5.0, -1.0))

    def test_overlap_symmetric(self, window: Bounds) -> None:
        other = _bounds(-5.0, 2.0, 8.0, 12.0)
        assert bounds_overlap(window, other) == bounds_overlap(other, window)

    def test_subsumes(self, window: Bounds) -> None:
        assert bounds_subsumes(window, _bounds(1.0, 9.0, 1.0, 9.0))
        assert bounds_subsumes(window, window)

    def test_does_not_subsume_partial(self, window: Bounds) -> None:
        assert not bounds_subsumes(window, _bounds(5.0, 15.0, 1.0, 9.0))
        assert not bounds_subsumes(_bounds(1.0, 9.0, 1.0, 9.0), window)

    def test_relations_validate_arguments(self, window: Bounds) -> None:
        with pytest.raises(BoundsValidationError):
            bounds_overlap(window, _bounds(10.0, 0.0, 0.0, 10.0))
        with pytest.raises(BoundsValidationError):
            bounds_subsumes(_bounds(0.0, 200.0, 0.0, 10.0), window)
