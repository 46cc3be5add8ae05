"""Pydantic audit record for one subset run.

Records what was requested (bounds, resolution, vertex width) and what
came out (polyline/vertex counts, discontinuities), so a subset can be
logged or persisted by the calling layer as a single JSON document.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

SCHEMA_VERSION = "map-subset-summary-v1"


class SubsetSummary(BaseModel):
    """Input/output accounting for a single ``subset`` call.

    Attributes:
        schema_version: Schema identifier for forward compatibility.
        bounds: ``[[lon_min, lon_max], [lat_min, lat_max]]`` in degrees.
        resolution: Uniqueness threshold in degrees (``0`` = disabled).
        vertex_dtype: Storage width of the output vertices.
        input_polyline_count: Polylines supplied.
        input_vertex_count: Vertices supplied.
        output_polyline_count: Polylines produced.
        output_vertex_count: Vertices produced.
        discontinuities: Breaks between kept points; equals
            ``output_polyline_count - 1`` when anything was kept.
    """

    schema_version: str = SCHEMA_VERSION
    bounds: list[list[float]] = Field(default_factory=list)
    resolution: float = Field(default=0.0, ge=0.0)
    vertex_dtype: str = "float32"
    input_polyline_count: int = Field(default=0, ge=0)
    input_vertex_count: int = Field(default=0, ge=0)
    output_polyline_count: int = Field(default=0, ge=0)
    output_vertex_count: int = Field(default=0, ge=0)
    discontinuities: int = Field(default=0, ge=0)

    @property
    def vertex_reduction(self) -> float:
        """Fraction of input vertices removed (``0`` for empty input)."""
        if self.input_vertex_count == 0:
            return 0.0
        return 1.0 - self.output_vertex_count / self.input_vertex_count
