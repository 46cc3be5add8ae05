"""Shared engine constants: single source of truth.

Coordinate ranges, tolerances and minimum vertex counts shared by the
bounds, clipping and subset modules.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Longitude-latitude domain (degrees)
# ---------------------------------------------------------------------------

MIN_LONGITUDE: float = -180.0
MAX_LONGITUDE: float = 180.0
MIN_LATITUDE: float = -90.0
MAX_LATITUDE: float = 90.0

# ---------------------------------------------------------------------------
# Vertex counts
# ---------------------------------------------------------------------------

MIN_POLYLINE_VERTICES: int = 2
"""A polyline needs at least one edge."""

MIN_POLYGON_VERTICES: int = 3
"""Smallest representable polygon (triangle)."""

HAT_VERTEX_COUNT: int = 5
"""Clipped polygons of exactly this size may carry a collinear 'hat' tail."""

DEGENERATE_TRIM_PASSES: int = 2
"""Trim passes over a 5-vertex result (a 'line' needs two)."""

# ---------------------------------------------------------------------------
# Tolerances
# ---------------------------------------------------------------------------

IN_BOUNDS_TOLERANCE: float = 1e-3
"""Slack (degrees) allowed when asserting clipped output lies in bounds."""

TRIM_AREA_REL_TOLERANCE: float = 1e-9
"""Relative area change allowed when trimming a zero-area polygon tail."""

# ---------------------------------------------------------------------------
# Vertex storage widths
# ---------------------------------------------------------------------------

SUPPORTED_VERTEX_DTYPES: tuple[str, ...] = ("float32", "float64")
DEFAULT_VERTEX_DTYPE: str = "float32"
"""Map files store 32-bit vertices."""
