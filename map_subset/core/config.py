"""Subsetting configuration loaded from environment variables.

All configuration values have defaults matching the map-file subsetter:
no resolution filtering, degenerate cleanup on, 32-bit vertices.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is out
    of its valid range, so bad configuration surfaces at startup rather
    than in the middle of a subset.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass

from map_subset.core.constants import DEFAULT_VERTEX_DTYPE, SUPPORTED_VERTEX_DTYPES
from map_subset.core.exceptions import ValidationError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class ConfigValidationError(ValidationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        message: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}")


@dataclass(frozen=True, slots=True)
class SubsetConfig:
    """Immutable subsetting configuration.

    Attributes:
        resolution: Minimum per-axis separation (degrees) between
            consecutive input vertices; ``0`` disables the filter.
        discard_degenerates: Whether polygon clipping removes duplicate
            vertices and collinear 'hat' tails.
        vertex_dtype: Storage width of subset output (``float32`` or ``float64``).
        log_level: Level applied to the ``map_subset`` logger.
    """

    resolution: float = 0.0
    discard_degenerates: bool = True
    vertex_dtype: str = DEFAULT_VERTEX_DTYPE
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> SubsetConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or unparseable.
            ValueError: If ``MAP_SUBSET_RESOLUTION`` is not a number.
        """
        config = cls(
            resolution=float(os.getenv("MAP_SUBSET_RESOLUTION", "0")),
            discard_degenerates=_parse_bool(
                "MAP_SUBSET_DISCARD_DEGENERATES",
                os.getenv("MAP_SUBSET_DISCARD_DEGENERATES", "true"),
            ),
            vertex_dtype=os.getenv("MAP_SUBSET_VERTEX_DTYPE", DEFAULT_VERTEX_DTYPE),
            log_level=os.getenv("MAP_SUBSET_LOG_LEVEL", "INFO").upper(),
        )
        _validate(config)
        return config


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be a boolean (true/false)")


def _validate(config: SubsetConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if not math.isfinite(config.resolution) or config.resolution < 0:
        raise ConfigValidationError(
            "MAP_SUBSET_RESOLUTION",
            config.resolution,
            "must be a finite number >= 0 (degrees)",
        )

    if config.vertex_dtype not in SUPPORTED_VERTEX_DTYPES:
        raise ConfigValidationError(
            "MAP_SUBSET_VERTEX_DTYPE",
            config.vertex_dtype,
            f"must be one of {', '.join(SUPPORTED_VERTEX_DTYPES)}",
        )

    if not isinstance(logging.getLevelName(config.log_level), int):
        raise ConfigValidationError(
            "MAP_SUBSET_LOG_LEVEL",
            config.log_level,
            "must be a standard logging level name",
        )
