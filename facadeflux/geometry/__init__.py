"""Surface geometry: orientation buckets and correction factors."""

from .orientation import (
    Orientation,
    classify_orientation,
    orientation_from_key,
    correction_factor,
    normalize_orientation_key,
    azimuth_of,
    azimuth_to_compass,
    CORRECTION_FACTORS,
    COMPASS_SECTORS,
)

__all__ = [
    "Orientation",
    "classify_orientation",
    "orientation_from_key",
    "correction_factor",
    "normalize_orientation_key",
    "azimuth_of",
    "azimuth_to_compass",
    "CORRECTION_FACTORS",
    "COMPASS_SECTORS",
]
