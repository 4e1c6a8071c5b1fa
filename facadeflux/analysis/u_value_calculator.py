"""
U-value derivation from material layers.

Series thermal resistance of a layered assembly:
    U = 1 / (Rsi + Σ(thickness / conductivity) + Rse)

Layers missing a positive thickness or conductivity contribute nothing.
Surface film resistances are calibration constants, not structure: the
defaults below are used unless a caller or the settings override them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..core.config import settings
from ..core.constructions import FenestrationConstruction, Material, OpaqueConstruction

# Surface air films (m²K/W)
RSI = 0.12  # Internal surface film
RSE = 0.04  # External surface film
RSE_BCA_TABLE = 0.044  # External film as tabulated in the BCA guideline examples


def compute_u_value(
    materials: Optional[Iterable[Optional[Material]]],
    rsi: float = RSI,
    rse: float = RSE,
) -> float:
    """
    Calculate the U-value (W/m²K) of a layered construction.

    Args:
        materials: Layers from outside to inside (order does not matter)
        rsi: Internal surface film resistance
        rse: External surface film resistance

    Returns:
        U-value, or 0.0 when the total resistance is not positive
    """
    if materials is None:
        return 0.0

    layer_resistance = sum(m.resistance for m in materials if m is not None)
    total_resistance = rsi + layer_resistance + rse
    if total_resistance <= 0:
        return 0.0
    return 1.0 / total_resistance


@dataclass
class LayerResistance:
    """Resistance of one layer in a breakdown."""
    name: str
    thickness: Optional[float]  # m, None if not usable
    conductivity: Optional[float]  # W/m·K, None if not usable
    resistance: Optional[float]  # m²K/W, None if the layer was skipped


@dataclass
class ResistanceBreakdown:
    """Layer-by-layer resistance table for one construction."""
    layers: list[LayerResistance] = field(default_factory=list)
    inside_film: float = RSI
    outside_film: float = RSE
    total_resistance: float = 0.0
    u_value: float = 0.0

    def to_dict(self) -> dict:
        return {
            "layers": [
                {
                    "name": layer.name,
                    "thickness_m": layer.thickness,
                    "conductivity_w_mk": layer.conductivity,
                    "resistance_m2k_w": layer.resistance,
                }
                for layer in self.layers
            ],
            "inside_film_m2k_w": self.inside_film,
            "outside_film_m2k_w": self.outside_film,
            "total_resistance_m2k_w": self.total_resistance,
            "u_value_w_m2k": self.u_value,
        }


def _shown(value: Optional[float]) -> Optional[float]:
    if value is None or not math.isfinite(value) or value <= 0:
        return None
    return value


def describe_layers(
    materials: Optional[Iterable[Optional[Material]]],
    rsi: float = RSI,
    rse: float = RSE,
) -> ResistanceBreakdown:
    """Resistance breakdown used by the construction report."""
    breakdown = ResistanceBreakdown(inside_film=rsi, outside_film=rse)
    total = rsi + rse

    for material in materials or ():
        if material is None:
            continue
        breakdown.layers.append(
            LayerResistance(
                name=material.name,
                thickness=_shown(material.thickness),
                conductivity=_shown(material.conductivity),
                resistance=material.resistance if material.is_valid else None,
            )
        )
        total += material.resistance

    breakdown.total_resistance = total
    breakdown.u_value = 1.0 / total if total > 0 else 0.0
    return breakdown


def opaque_from_layers(
    id: str,
    name: str,
    materials: Iterable[Material],
    rsi: Optional[float] = None,
    rse: Optional[float] = None,
) -> OpaqueConstruction:
    """Opaque construction whose U-value is derived from its layers."""
    layers = tuple(materials)
    return OpaqueConstruction(
        id=id,
        name=name,
        materials=layers,
        u_value=compute_u_value(
            layers,
            rsi=settings.inside_film_resistance if rsi is None else rsi,
            rse=settings.outside_film_resistance if rse is None else rse,
        ),
    )


def fenestration_from_layers(
    id: str,
    name: str,
    materials: Iterable[Material],
    sc1: float = 1.0,
    sc2: float = 1.0,
    rsi: Optional[float] = None,
    rse: Optional[float] = None,
) -> FenestrationConstruction:
    """Fenestration construction whose U-value is derived from its layers."""
    layers = tuple(materials)
    return FenestrationConstruction(
        id=id,
        name=name,
        materials=layers,
        u_value=compute_u_value(
            layers,
            rsi=settings.inside_film_resistance if rsi is None else rsi,
            rse=settings.outside_film_resistance if rse is None else rse,
        ),
        sc1=sc1,
        sc2=sc2,
    )
