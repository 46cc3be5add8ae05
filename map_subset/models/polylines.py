"""Data model for an ordered collection of polylines.

Polylines are stored the way map files store them: one flat ``(V, 2)``
array of ``(lon, lat)`` vertices plus a parallel array with the vertex
count of each polyline.  Insertion order is the iteration order of the
source dataset and is preserved by every operation.

Vertices may be 32-bit or 64-bit floats; the dtype is carried through
clipping unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from map_subset.core.constants import MIN_POLYLINE_VERTICES
from map_subset.core.exceptions import ContractError, ValidationError

if TYPE_CHECKING:
    from numpy.typing import DTypeLike
    from shapely.geometry import MultiLineString


@dataclass(frozen=True, slots=True, eq=False)
class PolylineCollection:
    """An ordered sequence of polylines in flat-array form.

    Attributes:
        counts: 1-D ``int64`` array, vertex count of each polyline.
        vertices: ``(V, 2)`` float array of ``(lon, lat)`` rows where
            ``V == counts.sum()``.
    """

    counts: np.ndarray
    vertices: np.ndarray

    @classmethod
    def empty(cls, dtype: DTypeLike = np.float64) -> PolylineCollection:
        """Return a collection with no polylines."""
        return cls(
            counts=np.zeros(0, dtype=np.int64),
            vertices=np.zeros((0, 2), dtype=dtype),
        )

    @classmethod
    def from_arrays(
        cls,
        counts: Sequence[int] | np.ndarray,
        vertices: Sequence[Sequence[float]] | np.ndarray,
        dtype: DTypeLike | None = None,
    ) -> PolylineCollection:
        """Build from a counts array and a flat vertex array.

        The vertex array may be ``(V, 2)`` or interleaved ``(2V,)``.
        """
        vertex_array = np.asarray(vertices, dtype=dtype)
        if vertex_array.dtype.kind not in "fiu":
            msg = f"Vertices must be numeric, got dtype {vertex_array.dtype}"
            raise ContractError(msg, stage="polylines")
        if vertex_array.dtype.kind != "f":
            vertex_array = vertex_array.astype(np.float64)
        if vertex_array.ndim == 1:
            if vertex_array.size % 2:
                msg = f"Interleaved vertex array has odd length {vertex_array.size}"
                raise ContractError(msg, stage="polylines")
            vertex_array = vertex_array.reshape(-1, 2)
        return cls(
            counts=np.asarray(counts, dtype=np.int64).reshape(-1),
            vertices=vertex_array,
        )

    @classmethod
    def from_polylines(
        cls,
        polylines: Iterable[Sequence[Sequence[float]]],
        dtype: DTypeLike = np.float64,
    ) -> PolylineCollection:
        """Build from an iterable of ``[(lon, lat), ...]`` polylines."""
        counts: list[int] = []
        rows: list[Sequence[float]] = []
        for polyline in polylines:
            points = list(polyline)
            counts.append(len(points))
            rows.extend(points)
        vertices = np.asarray(rows, dtype=dtype).reshape(-1, 2) if rows else np.zeros((0, 2), dtype=dtype)
        return cls(counts=np.asarray(counts, dtype=np.int64), vertices=vertices)

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> PolylineCollection:
        """Deserialise from a ``to_dict`` payload.

        Raises:
            TypeError: If field values have unexpected types.
        """
        counts_raw = data.get("counts", [])
        if not isinstance(counts_raw, list):
            msg = f"counts must be a list, got {type(counts_raw).__name__}"
            raise TypeError(msg)
        vertices_raw = data.get("vertices", [])
        if not isinstance(vertices_raw, list):
            msg = f"vertices must be a list, got {type(vertices_raw).__name__}"
            raise TypeError(msg)
        dtype = str(data.get("dtype", "float64"))
        if not vertices_raw:
            return cls(
                counts=np.asarray(counts_raw, dtype=np.int64),
                vertices=np.zeros((0, 2), dtype=dtype),
            )
        return cls.from_arrays(counts_raw, vertices_raw, dtype=dtype)

    def to_dict(self) -> dict[str, object]:
        return {
            "counts": self.counts.tolist(),
            "vertices": self.vertices.tolist(),
            "dtype": self.vertices.dtype.name,
        }

    @property
    def polyline_count(self) -> int:
        return int(self.counts.size)

    @property
    def vertex_count(self) -> int:
        return int(self.vertices.shape[0])

    @property
    def dtype(self) -> np.dtype:
        return self.vertices.dtype

    @property
    def is_empty(self) -> bool:
        return self.polyline_count == 0

    def __len__(self) -> int:
        return self.polyline_count

    def __iter__(self) -> Iterator[np.ndarray]:
        """Yield each polyline as an ``(n, 2)`` view into ``vertices``."""
        start = 0
        for count in self.counts.tolist():
            yield self.vertices[start : start + count]
            start += count

    def validate(self, *, stage: str = "polylines") -> None:
        """Check the counts and vertex arrays agree.

        Raises:
            ContractError: If array shapes or totals disagree.
            ValidationError: If a vertex is not finite or a polyline has
                fewer than two vertices.
        """
        if self.counts.ndim != 1:
            msg = f"counts must be 1-D, got shape {self.counts.shape}"
            raise ContractError(msg, stage=stage)
        if self.vertices.ndim != 2 or self.vertices.shape[1] != 2:
            msg = f"vertices must have shape (V, 2), got {self.vertices.shape}"
            raise ContractError(msg, stage=stage)
        if self.vertices.dtype.kind != "f":
            msg = f"vertices must be floating point, got dtype {self.vertices.dtype}"
            raise ContractError(msg, stage=stage)
        finite = np.isfinite(self.vertices).all(axis=1)
        if not finite.all():
            index = int(np.argmin(finite))
            msg = f"Vertex {index} is not finite: {self.vertices[index].tolist()}"
            raise ValidationError(msg, stage=stage, code="COORDINATE_INVALID")
        total = int(self.counts.sum()) if self.counts.size else 0
        if total != self.vertex_count:
            msg = (
                f"Vertex counts sum to {total} but {self.vertex_count} vertices were supplied"
            )
            raise ContractError(msg, stage=stage)
        if self.counts.size and int(self.counts.min()) < MIN_POLYLINE_VERTICES:
            index = int(np.argmin(self.counts))
            msg = (
                f"Polyline {index} has {int(self.counts[index])} vertices, "
                f"need at least {MIN_POLYLINE_VERTICES}"
            )
            raise ValidationError(msg, stage=stage)

    def to_shapely(self) -> MultiLineString:
        """Return the collection as a Shapely ``MultiLineString``."""
        from shapely.geometry import MultiLineString

        return MultiLineString([polyline.tolist() for polyline in self])
