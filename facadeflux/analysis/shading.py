"""
External Shading Coefficient (SC2) for Horizontal Projections.

Looks up the SC2 of a horizontal overhang from tabulated curves:
- R1 = projection / glazing height
- One 30-point curve per orientation family, R1 from 0.1 to 3.0 in 0.1 steps
- Linear interpolation between tabulated points, R1 clamped to the table

Also applies a shading result to a surface. Constructions are shared by
reference, so the surface gets a new FenestrationConstruction instead of an
in-place update.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Union

import numpy as np

from ..core.constructions import FenestrationConstruction, OpaqueConstruction
from ..core.models import Surface
from ..geometry.orientation import Orientation, normalize_orientation_key
from ..utils.validation import validate_ratio

logger = logging.getLogger(__name__)

MIN_R1 = 0.1
MAX_R1 = 3.0
R1_POINTS = np.linspace(MIN_R1, MAX_R1, 30)


class OrientationFamily(str, Enum):
    NORTH_SOUTH = "north_south"
    EAST_WEST = "east_west"
    NORTHEAST_NORTHWEST = "northeast_northwest"
    SOUTHEAST_SOUTHWEST = "southeast_southwest"


SC2_TABLES: dict[OrientationFamily, np.ndarray] = {
    OrientationFamily.NORTH_SOUTH: np.array([
        0.9380, 0.8773, 0.8167, 0.7560, 0.7210, 0.7041, 0.6923, 0.6871, 0.6819, 0.6767,
        0.6731, 0.6713, 0.6705, 0.6698, 0.6690, 0.6683, 0.6675, 0.6667, 0.6660, 0.6652,
        0.6645, 0.6637, 0.6630, 0.6622, 0.6614, 0.6607, 0.6604, 0.6601, 0.6599, 0.6596,
    ]),
    OrientationFamily.EAST_WEST: np.array([
        0.9363, 0.8752, 0.8228, 0.7703, 0.7248, 0.6911, 0.6574, 0.6237, 0.5998, 0.5827,
        0.5656, 0.5485, 0.5314, 0.5156, 0.5051, 0.4995, 0.4939, 0.4882, 0.4826, 0.4770,
        0.4713, 0.4657, 0.4601, 0.4544, 0.4488, 0.4432, 0.4400, 0.4369, 0.4339, 0.4333,
    ]),
    OrientationFamily.NORTHEAST_NORTHWEST: np.array([
        0.9273, 0.8630, 0.8054, 0.7563, 0.7171, 0.6787, 0.6549, 0.6327, 0.6105, 0.5922,
        0.5809, 0.5722, 0.5634, 0.5547, 0.5466, 0.5413, 0.5359, 0.5306, 0.5253, 0.5200,
        0.5162, 0.5141, 0.5119, 0.5097, 0.5075, 0.5053, 0.5047, 0.5042, 0.5036, 0.5031,
    ]),
    OrientationFamily.SOUTHEAST_SOUTHWEST: np.array([
        0.9253, 0.8574, 0.7964, 0.7413, 0.6981, 0.6578, 0.6289, 0.6059, 0.5828, 0.5619,
        0.5502, 0.5413, 0.5323, 0.5234, 0.5150, 0.5096, 0.5042, 0.4988, 0.4933, 0.4879,
        0.4841, 0.4820, 0.4798, 0.4777, 0.4755, 0.4734, 0.4712, 0.4699, 0.4694, 0.4688,
    ]),
}

_FAMILY_BY_ID = {
    "N": OrientationFamily.NORTH_SOUTH,
    "S": OrientationFamily.NORTH_SOUTH,
    "E": OrientationFamily.EAST_WEST,
    "W": OrientationFamily.EAST_WEST,
    "NE": OrientationFamily.NORTHEAST_NORTHWEST,
    "NW": OrientationFamily.NORTHEAST_NORTHWEST,
    "SE": OrientationFamily.SOUTHEAST_SOUTHWEST,
    "SW": OrientationFamily.SOUTHEAST_SOUTHWEST,
}

OrientationLike = Union[Orientation, OrientationFamily, str, None]


def orientation_family(orientation: OrientationLike) -> OrientationFamily:
    """
    Shading table family for an orientation, id or name.

    Roof, floor, unknown and unrecognised orientations use the
    north/south curve.
    """
    if isinstance(orientation, OrientationFamily):
        return orientation

    if isinstance(orientation, Orientation):
        key = normalize_orientation_key(orientation.id) or normalize_orientation_key(orientation.name)
    else:
        key = normalize_orientation_key(orientation)

    return _FAMILY_BY_ID.get(key, OrientationFamily.NORTH_SOUTH)


def lookup_sc2(projection: float, height: float, orientation: OrientationLike = None) -> float:
    """
    SC2 of a horizontal shading projection.

    Args:
        projection: Horizontal projection depth (m)
        height: Glazing/opening height (m)
        orientation: Orientation, id/name or family selecting the table

    Returns:
        SC2 in (0, 1]; 1.0 (no shading) for a missing device or height.
        A zero projection is clamped to the first tabulated R1.
    """
    if not height or height <= 0 or projection is None or projection < 0:
        return 1.0

    r1 = projection / height
    if not np.isfinite(r1):
        return 1.0

    table = SC2_TABLES[orientation_family(orientation)]
    # np.interp clamps R1 to the tabulated domain
    return float(np.interp(r1, R1_POINTS, table))


def apply_external_shading(surface: Surface, sc2: float) -> Surface:
    """
    Surface copy whose fenestration construction carries a new SC2.

    Opaque surfaces, and surfaces without construction, are returned unchanged.
    """
    match surface.construction:
        case FenestrationConstruction() as fenestration:
            sc2 = validate_ratio(sc2, field="sc2")
            return surface.with_construction(fenestration.with_sc2(sc2))
        case OpaqueConstruction():
            logger.warning(
                "External shading applies to fenestration only; surface left unchanged",
                extra={"surface_id": surface.id},
            )
            return surface
        case _:
            logger.warning(
                "Surface has no construction; shading not applied",
                extra={"surface_id": surface.id},
            )
            return surface


def apply_horizontal_shading(
    surface: Surface,
    projection: float,
    height: float,
    orientation: OrientationLike = None,
) -> Surface:
    """
    Look up SC2 for a horizontal projection over the surface and apply it.

    The surface's own orientation selects the table unless one is given.
    """
    sc2 = lookup_sc2(projection, height, orientation or surface.orientation)
    logger.debug(
        f"Horizontal shading R1={projection}/{height} -> SC2={sc2:.4f}",
        extra={"surface_id": surface.id},
    )
    return apply_external_shading(surface, sc2)
