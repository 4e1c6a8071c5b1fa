"""
Per-orientation envelope aggregation.

For the surfaces of one orientation:
1. Partition into walls (opaque) and windows (fenestration)
2. Sum areas, derive gross area and WWR
3. Area-weight wall U, fenestration U and fenestration SC
4. Evaluate the index formula with the orientation's correction factor
5. Total contribution = index value × gross area

The per-surface heat gains and per-construction contributions reported
alongside always sum to the orientation's total contribution.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Sequence

from .formulas import IndexCoefficients, IndexTerms, index_terms
from ..core.constructions import (
    Construction,
    ConstructionKind,
    FenestrationConstruction,
    OpaqueConstruction,
    construction_key,
)
from ..core.models import Surface
from ..geometry.orientation import DEFAULT_CORRECTION_FACTOR, Orientation, UNKNOWN_ID

logger = logging.getLogger(__name__)


@dataclass
class SurfaceContribution:
    """Heat gain of one surface within its orientation."""
    surface_id: int
    name: str
    type: str  # Wall, Fenestration or Unknown
    area: float  # m²
    construction_id: Optional[str]
    heat_gain: float  # W

    def to_dict(self) -> dict:
        return {
            "surface_id": self.surface_id,
            "name": self.name,
            "type": self.type,
            "area_m2": self.area,
            "construction_id": self.construction_id,
            "heat_gain_w": self.heat_gain,
        }


@dataclass
class ConstructionContribution:
    """Contribution of one construction within an orientation."""
    construction: Construction
    area: float  # m²
    conduction_gain: float  # W, coefficient × area × U
    solar_gain: float = 0.0  # W, coefficient × area × SC × CF (fenestration only)

    @property
    def total(self) -> float:
        return self.conduction_gain + self.solar_gain

    @property
    def sc(self) -> Optional[float]:
        match self.construction:
            case FenestrationConstruction() as fenestration:
                return fenestration.sc_total
            case _:
                return None

    def to_dict(self) -> dict:
        return {
            "id": self.construction.id,
            "name": self.construction.name,
            "kind": self.construction.kind.value,
            "area_m2": self.area,
            "u_value_w_m2k": self.construction.effective_u_value,
            "sc": self.sc,
            "conduction_gain_w": self.conduction_gain,
            "solar_gain_w": self.solar_gain,
        }


@dataclass
class OrientationResult:
    """Aggregated values of one orientation."""
    orientation: Orientation
    wall_area: float = 0.0
    window_area: float = 0.0
    area_weighted_wall_u: float = 0.0
    area_weighted_fenestration_u: float = 0.0
    area_weighted_sc: float = 0.0
    average_index_value: float = 0.0  # W/m²
    total_contribution: float = 0.0  # W
    terms: IndexTerms = field(default_factory=IndexTerms)
    surfaces: list[SurfaceContribution] = field(default_factory=list)
    constructions: list[ConstructionContribution] = field(default_factory=list)
    surface_count: int = 0
    skipped_surface_count: int = 0  # surfaces without a usable construction

    @property
    def gross_area(self) -> float:
        return self.wall_area + self.window_area

    @property
    def wwr(self) -> float:
        gross = self.gross_area
        return self.window_area / gross if gross > 0 else 0.0

    @property
    def cf(self) -> float:
        return effective_cf(self.orientation)

    def to_dict(self) -> dict:
        return {
            "orientation": {
                "id": self.orientation.id,
                "name": self.orientation.name,
                "cf": self.cf,
            },
            "wall_area_m2": self.wall_area,
            "window_area_m2": self.window_area,
            "gross_area_m2": self.gross_area,
            "wwr": self.wwr,
            "area_weighted_wall_u": self.area_weighted_wall_u,
            "area_weighted_fenestration_u": self.area_weighted_fenestration_u,
            "area_weighted_sc": self.area_weighted_sc,
            "average_index_value_w_m2": self.average_index_value,
            "total_contribution_w": self.total_contribution,
            "terms_w_m2": self.terms.to_dict(),
            "surface_count": self.surface_count,
            "skipped_surface_count": self.skipped_surface_count,
            "constructions": [c.to_dict() for c in self.constructions],
            "surfaces": [s.to_dict() for s in self.surfaces],
        }


def effective_cf(orientation: Optional[Orientation]) -> float:
    """Correction factor used in the formula; missing or non-positive counts as 1.0."""
    if orientation is None or not orientation.cf or orientation.cf <= 0:
        return DEFAULT_CORRECTION_FACTOR
    return orientation.cf


def orientation_key(surface: Surface) -> str:
    if surface.orientation is None or not surface.orientation.id:
        return UNKNOWN_ID
    return surface.orientation.id


def group_by_orientation(
    surfaces: Iterable[Optional[Surface]],
) -> list[tuple[Orientation, list[Surface]]]:
    """
    Group surfaces by orientation id, in order of first appearance.

    None entries are dropped; surfaces without orientation share the
    Unknown group. Each group takes the orientation of its first surface.
    """
    groups: dict[str, tuple[Orientation, list[Surface]]] = {}
    for surface in surfaces:
        if surface is None:
            continue
        key = orientation_key(surface)
        if key not in groups:
            orientation = surface.orientation if key != UNKNOWN_ID else None
            groups[key] = (orientation or Orientation.unknown(), [])
        groups[key][1].append(surface)
    return list(groups.values())


def area_weighted_average(
    surfaces: Iterable[Surface],
    selector: Callable[[Surface], float],
) -> float:
    """Σ(area × value) / Σ area over surfaces with positive area; 0 without area."""
    numerator = 0.0
    area_sum = 0.0
    for surface in surfaces:
        area = surface.effective_area
        if area <= 0:
            continue
        numerator += selector(surface) * area
        area_sum += area
    return numerator / area_sum if area_sum > 0 else 0.0


def surface_heat_gain(
    surface: Surface,
    coefficients: IndexCoefficients,
    cf: Optional[float] = None,
) -> float:
    """
    Heat gain of one surface (W).

    Walls: Cw × A × U. Windows: Cf1 × A × U + Cf2 × A × SC × CF.
    """
    area = surface.effective_area
    match surface.construction:
        case OpaqueConstruction() as opaque:
            return coefficients.wall_conductance * area * opaque.effective_u_value
        case FenestrationConstruction() as fenestration:
            factor = effective_cf(surface.orientation) if cf is None else cf
            return (
                coefficients.fenestration_conductance * area * fenestration.effective_u_value
                + coefficients.solar_gain * area * fenestration.sc_total * factor
            )
        case _:
            return 0.0


def _construction_contributions(
    walls: Sequence[Surface],
    windows: Sequence[Surface],
    coefficients: IndexCoefficients,
    cf: float,
) -> list[ConstructionContribution]:
    by_key: dict[str, ConstructionContribution] = {}

    for surface in list(walls) + list(windows):
        construction = surface.construction
        key = construction_key(construction)
        entry = by_key.get(key)
        if entry is None:
            entry = ConstructionContribution(construction=construction, area=0.0, conduction_gain=0.0)
            by_key[key] = entry
        entry.area += surface.effective_area

    for entry in by_key.values():
        match entry.construction:
            case OpaqueConstruction() as opaque:
                entry.conduction_gain = coefficients.wall_conductance * entry.area * opaque.effective_u_value
            case FenestrationConstruction() as fenestration:
                entry.conduction_gain = (
                    coefficients.fenestration_conductance * entry.area * fenestration.effective_u_value
                )
                entry.solar_gain = coefficients.solar_gain * entry.area * fenestration.sc_total * cf

    # Opaque first, then by name
    return sorted(
        (entry for entry in by_key.values() if entry.area > 0),
        key=lambda e: (
            e.construction.kind is ConstructionKind.FENESTRATION,
            (e.construction.name or "").lower(),
        ),
    )


def aggregate_orientation(
    surfaces: Sequence[Surface],
    coefficients: IndexCoefficients,
    orientation: Optional[Orientation] = None,
) -> OrientationResult:
    """
    Aggregate the surfaces of one orientation.

    Args:
        surfaces: Surfaces sharing one orientation
        coefficients: Index coefficients
        orientation: Orientation of the group (defaults to the first surface's)

    Returns:
        OrientationResult. An orientation without area still gets a result,
        with zero index value and zero contribution.
    """
    surfaces = [s for s in surfaces if s is not None]
    if orientation is None:
        orientation = next((s.orientation for s in surfaces if s.orientation), None) or Orientation.unknown()

    walls: list[Surface] = []
    windows: list[Surface] = []
    skipped = 0

    for surface in surfaces:
        match surface.construction:
            case OpaqueConstruction():
                walls.append(surface)
            case FenestrationConstruction():
                windows.append(surface)
            case None:
                skipped += 1
                logger.debug(
                    "Surface has no construction, excluded from averages",
                    extra={"surface_id": surface.id, "orientation": orientation.id},
                )
            case other:
                skipped += 1
                logger.warning(
                    f"Unsupported construction type {type(other).__name__}, excluded from averages",
                    extra={"surface_id": surface.id, "orientation": orientation.id},
                )

    cf = effective_cf(orientation)
    result = OrientationResult(
        orientation=orientation,
        wall_area=sum(s.effective_area for s in walls),
        window_area=sum(s.effective_area for s in windows),
        surface_count=len(surfaces),
        skipped_surface_count=skipped,
    )

    result.area_weighted_wall_u = area_weighted_average(walls, lambda s: s.construction.effective_u_value)
    result.area_weighted_fenestration_u = area_weighted_average(windows, lambda s: s.construction.effective_u_value)
    result.area_weighted_sc = area_weighted_average(windows, lambda s: s.construction.sc_total)

    if result.gross_area > 0:
        result.terms = index_terms(
            coefficients,
            wwr=result.wwr,
            wall_u=result.area_weighted_wall_u,
            fenestration_u=result.area_weighted_fenestration_u,
            sc=result.area_weighted_sc,
            cf=cf,
        )
        result.average_index_value = result.terms.total
        result.total_contribution = result.average_index_value * result.gross_area

    result.surfaces = [
        SurfaceContribution(
            surface_id=s.id,
            name=s.name,
            type=s.type,
            area=s.effective_area,
            construction_id=s.construction.id if s.construction is not None else None,
            heat_gain=surface_heat_gain(s, coefficients, cf),
        )
        for s in surfaces
    ]
    result.constructions = _construction_contributions(walls, windows, coefficients, cf)

    logger.debug(
        f"WWR={result.wwr:.3f} index={result.average_index_value:.3f} W/m²",
        extra={"orientation": orientation.id},
    )
    return result
