"""
Envelope construction assemblies.

A construction is one of two variants:
- OpaqueConstruction: walls, roofs, floors (conduction only)
- FenestrationConstruction: glazing, adds shading coefficients SC1/SC2

Both are frozen value objects shared by reference across surfaces. Overrides
(e.g. an SC2 from a shading calculation) always produce a new record.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import ClassVar, Iterable, Optional, Tuple, Union


class ConstructionKind(str, Enum):
    OPAQUE = "opaque"
    FENESTRATION = "fenestration"


@dataclass(frozen=True)
class Material:
    """One layer of a construction."""
    name: str
    thickness: float  # m
    conductivity: float  # W/m·K

    @property
    def is_valid(self) -> bool:
        return _positive(self.thickness) and _positive(self.conductivity)

    @property
    def resistance(self) -> float:
        """Layer thermal resistance (m²K/W); 0 for incomplete layers."""
        if not self.is_valid:
            return 0.0
        return self.thickness / self.conductivity


def _positive(value: Optional[float]) -> bool:
    return value is not None and math.isfinite(value) and value > 0


def _as_material_tuple(materials: Optional[Iterable[Material]]) -> Tuple[Material, ...]:
    if materials is None:
        return ()
    return tuple(m for m in materials if m is not None)


def compose_sc(sc1: Optional[float], sc2: Optional[float]) -> float:
    """
    Total shading coefficient SC = SC1 × SC2.

    A factor that is unset, non-finite or ≤ 0 counts as 1.0 so an
    uninitialised coefficient never silently zeroes the solar gain.
    """
    factor1 = sc1 if _positive(sc1) else 1.0
    factor2 = sc2 if _positive(sc2) else 1.0
    return factor1 * factor2


@dataclass(frozen=True)
class OpaqueConstruction:
    """Opaque assembly (wall, roof, floor)."""
    id: str
    name: str
    materials: Tuple[Material, ...] = field(default_factory=tuple)
    u_value: float = 0.0  # W/m²K

    kind: ClassVar[ConstructionKind] = ConstructionKind.OPAQUE

    def __post_init__(self):
        object.__setattr__(self, "materials", _as_material_tuple(self.materials))

    @property
    def effective_u_value(self) -> float:
        """U-value used in calculations; unset or invalid values count as 0."""
        return self.u_value if _positive(self.u_value) else 0.0


@dataclass(frozen=True)
class FenestrationConstruction:
    """Glazed assembly with intrinsic (SC1) and external (SC2) shading."""
    id: str
    name: str
    materials: Tuple[Material, ...] = field(default_factory=tuple)
    u_value: float = 0.0  # W/m²K
    sc1: float = 1.0  # Glass shading coefficient
    sc2: float = 1.0  # External shading device coefficient

    kind: ClassVar[ConstructionKind] = ConstructionKind.FENESTRATION

    def __post_init__(self):
        object.__setattr__(self, "materials", _as_material_tuple(self.materials))

    @property
    def effective_u_value(self) -> float:
        return self.u_value if _positive(self.u_value) else 0.0

    @property
    def sc_total(self) -> float:
        return compose_sc(self.sc1, self.sc2)

    def with_sc1(self, sc1: float) -> "FenestrationConstruction":
        return replace(self, sc1=sc1)

    def with_sc2(self, sc2: float) -> "FenestrationConstruction":
        return replace(self, sc2=sc2)


Construction = Union[OpaqueConstruction, FenestrationConstruction]


def construction_key(construction: Construction) -> str:
    """Identity used to de-duplicate constructions in reports."""
    id_part = (construction.id or "").strip()
    name_part = (construction.name or "").strip()
    if not id_part and not name_part:
        return f"{construction.kind.value}::{id(construction)}"
    return f"{id_part.lower()}::{name_part.lower()}"
