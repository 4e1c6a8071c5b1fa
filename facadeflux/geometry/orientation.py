"""
Facade Orientation Classifier

Classifies an outward-facing surface normal into one of ten buckets:
- Eight 45° compass sectors centred on N, NE, E, SE, S, SW, W, NW
- Roof (normal mostly +Z) and Floor (normal mostly -Z)
- Unknown for degenerate normals

Each bucket carries the solar correction factor (CF) applied to the
solar gain term of the ETTV/RETV formula.

Model coordinates: +Y is north and +X is east unless an angle-to-north
offset is supplied.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

Vector3 = Tuple[float, float, float]

UNKNOWN_ID = "Unknown"
ROOF_ID = "R"
FLOOR_ID = "F"

# Compass sectors in clockwise order starting at north: (id, name)
COMPASS_SECTORS: Tuple[Tuple[str, str], ...] = (
    ("N", "North"),
    ("NE", "NorthEast"),
    ("E", "East"),
    ("SE", "SouthEast"),
    ("S", "South"),
    ("SW", "SouthWest"),
    ("W", "West"),
    ("NW", "NorthWest"),
)
SECTOR_WIDTH_DEG = 45.0

ORIENTATION_NAMES = {
    **dict(COMPASS_SECTORS),
    ROOF_ID: "Roof",
    FLOOR_ID: "Floor",
    UNKNOWN_ID: UNKNOWN_ID,
}

# Solar correction factors for walls (BCA ETTV guideline)
CORRECTION_FACTORS = {
    "N": 0.80,
    "NE": 0.97,
    "E": 1.13,
    "SE": 0.98,
    "S": 0.83,
    "SW": 1.06,
    "W": 1.23,
    "NW": 1.03,
}
DEFAULT_CORRECTION_FACTOR = 1.00

# Accepted spellings -> canonical id
_KEY_ALIASES = {
    **{sector_id: sector_id for sector_id, _ in COMPASS_SECTORS},
    **{name.upper(): sector_id for sector_id, name in COMPASS_SECTORS},
    "R": ROOF_ID,
    "ROOF": ROOF_ID,
    "F": FLOOR_ID,
    "FLOOR": FLOOR_ID,
}


@dataclass(frozen=True)
class Orientation:
    """Orientation bucket of an envelope surface."""
    id: str
    name: str
    normal: Vector3 = (0.0, 0.0, 1.0)
    angle_to_north: Optional[float] = None  # degrees, offset of true north
    cf: float = DEFAULT_CORRECTION_FACTOR

    @classmethod
    def unknown(cls) -> "Orientation":
        return cls(id=UNKNOWN_ID, name=UNKNOWN_ID, normal=(0.0, 0.0, 0.0))

    @property
    def is_compass(self) -> bool:
        return self.id in CORRECTION_FACTORS

    @property
    def label(self) -> str:
        """Display label, e.g. 'NorthEast (NE)'."""
        if self.id and self.name and self.id.lower() != self.name.lower():
            return f"{self.name} ({self.id})"
        return self.name or self.id or UNKNOWN_ID

    def with_cf(self, cf: float) -> "Orientation":
        """Copy with an explicitly overridden correction factor."""
        return replace(self, cf=cf)


def normalize_orientation_key(value: Optional[str]) -> Optional[str]:
    """
    Canonical orientation id for an id or name.

    'north east', 'North-East', 'northeast' and 'NE' all map to 'NE'.
    Returns None for blank or unrecognised values.
    """
    if value is None:
        return None
    key = str(value).strip().upper()
    for separator in (" ", "-", "_"):
        key = key.replace(separator, "")
    if not key:
        return None
    return _KEY_ALIASES.get(key)


def correction_factor(key: Optional[str]) -> float:
    """Correction factor for an orientation id or name (1.00 if not a compass bucket)."""
    canonical = normalize_orientation_key(key)
    return CORRECTION_FACTORS.get(canonical, DEFAULT_CORRECTION_FACTOR)


def normalize_angle(angle: float) -> float:
    """Normalize an angle in degrees to [0, 360)."""
    normalized = angle % 360.0
    if normalized >= 360.0:
        normalized = 0.0
    return normalized


def azimuth_of(normal: Sequence[float]) -> float:
    """Azimuth of a normal in degrees clockwise from +Y, in [0, 360)."""
    x, y = float(normal[0]), float(normal[1])
    return normalize_angle(math.degrees(math.atan2(x, y)))


def azimuth_to_compass(azimuth: float) -> str:
    """Compass sector id for an azimuth in degrees (0 = north, 90 = east)."""
    shifted = normalize_angle(azimuth + SECTOR_WIDTH_DEG / 2)
    index = int(shifted // SECTOR_WIDTH_DEG) % len(COMPASS_SECTORS)
    return COMPASS_SECTORS[index][0]


def _as_vector(normal) -> Optional[np.ndarray]:
    try:
        vector = np.asarray(normal, dtype=float).reshape(-1)
    except (TypeError, ValueError):
        return None
    if vector.shape != (3,) or not np.all(np.isfinite(vector)):
        return None
    return vector


def classify_orientation(normal, angle_to_north: Optional[float] = None) -> Orientation:
    """
    Classify a surface normal into an orientation bucket.

    Args:
        normal: Outward normal (x, y, z); need not be unit length
        angle_to_north: Angle of true north in model coordinates (degrees).
            When finite, it is subtracted from the computed azimuth.

    Returns:
        Orientation with id, name, unit normal and correction factor.
        Degenerate input yields the Unknown orientation; this never raises.
    """
    if angle_to_north is not None:
        try:
            angle_to_north = float(angle_to_north)
        except (TypeError, ValueError):
            angle_to_north = None
        else:
            if not math.isfinite(angle_to_north):
                angle_to_north = None

    vector = _as_vector(normal)
    length = float(np.linalg.norm(vector)) if vector is not None else 0.0
    if vector is None or length <= 0.0:
        logger.debug(f"Degenerate normal {normal!r}, classified as Unknown")
        return replace(Orientation.unknown(), angle_to_north=angle_to_north)

    unit = vector / length
    unit_normal: Vector3 = (float(unit[0]), float(unit[1]), float(unit[2]))
    abs_x, abs_y, abs_z = np.abs(unit)

    if abs_z > abs_x and abs_z > abs_y:
        orientation_id = ROOF_ID if unit[2] > 0 else FLOOR_ID
        return Orientation(
            id=orientation_id,
            name=ORIENTATION_NAMES[orientation_id],
            normal=unit_normal,
            angle_to_north=angle_to_north,
            cf=DEFAULT_CORRECTION_FACTOR,
        )

    azimuth = azimuth_of(unit)
    if angle_to_north is not None:
        azimuth = normalize_angle(azimuth - angle_to_north)

    orientation_id = azimuth_to_compass(azimuth)
    return Orientation(
        id=orientation_id,
        name=ORIENTATION_NAMES[orientation_id],
        normal=unit_normal,
        angle_to_north=angle_to_north,
        cf=CORRECTION_FACTORS[orientation_id],
    )


def orientation_from_key(key: Optional[str]) -> Orientation:
    """
    Canonical orientation for an id or name such as 'NE' or 'South West'.

    Compass buckets get the unit normal pointing at the sector centre.
    Unrecognised keys yield the Unknown orientation.
    """
    canonical = normalize_orientation_key(key)
    if canonical is None:
        return Orientation.unknown()

    if canonical == ROOF_ID:
        return Orientation(id=ROOF_ID, name="Roof", normal=(0.0, 0.0, 1.0))
    if canonical == FLOOR_ID:
        return Orientation(id=FLOOR_ID, name="Floor", normal=(0.0, 0.0, -1.0))

    index = [sector_id for sector_id, _ in COMPASS_SECTORS].index(canonical)
    azimuth = math.radians(index * SECTOR_WIDTH_DEG)
    return Orientation(
        id=canonical,
        name=ORIENTATION_NAMES[canonical],
        normal=(math.sin(azimuth), math.cos(azimuth), 0.0),
        cf=CORRECTION_FACTORS[canonical],
    )
