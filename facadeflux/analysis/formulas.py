"""
ETTV / RETV index formulas.

Both indices share one form, per orientation:

    index = Cw·(1 − WWR)·Uw + Cf1·WWR·Uf + Cf2·WWR·SC·CF

    Cw   wall conduction coefficient
    Cf1  fenestration conduction coefficient
    Cf2  solar gain coefficient
    CF   orientation correction factor

The coefficients are revised by the standard from time to time, so they are
data (IndexCoefficients) rather than literals in the formula.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..core.config import CalculationOptions, IndexType, Settings


@dataclass(frozen=True)
class IndexCoefficients:
    """Empirical coefficients of one index."""
    wall_conductance: float
    fenestration_conductance: float
    solar_gain: float

    def to_dict(self) -> dict:
        return {
            "wall_conductance": self.wall_conductance,
            "fenestration_conductance": self.fenestration_conductance,
            "solar_gain": self.solar_gain,
        }


ETTV_COEFFICIENTS = IndexCoefficients(
    wall_conductance=12.0,
    fenestration_conductance=3.4,
    solar_gain=211.0,
)

RETV_COEFFICIENTS = IndexCoefficients(
    wall_conductance=3.4,
    fenestration_conductance=1.3,
    solar_gain=58.6,
)

DEFAULT_COEFFICIENTS = {
    IndexType.ETTV: ETTV_COEFFICIENTS,
    IndexType.RETV: RETV_COEFFICIENTS,
}


@dataclass(frozen=True)
class IndexTerms:
    """The three physical terms of an index value (W/m²)."""
    opaque_conduction: float = 0.0
    fenestration_conduction: float = 0.0
    solar_gain: float = 0.0

    @property
    def total(self) -> float:
        return self.opaque_conduction + self.fenestration_conduction + self.solar_gain

    def to_dict(self) -> dict:
        return {
            "opaque_conduction": self.opaque_conduction,
            "fenestration_conduction": self.fenestration_conduction,
            "solar_gain": self.solar_gain,
        }


def resolve_coefficients(
    options: CalculationOptions | None = None,
    config: Settings | None = None,
) -> IndexCoefficients:
    """Standard coefficients of the requested index with any overrides applied."""
    options = options or CalculationOptions()
    base = DEFAULT_COEFFICIENTS[options.resolved_index(config)]

    overrides = {
        name: value
        for name, value in (
            ("wall_conductance", options.wall_conductance_coefficient),
            ("fenestration_conductance", options.fenestration_conductance_coefficient),
            ("solar_gain", options.solar_gain_coefficient),
        )
        if value is not None
    }
    return replace(base, **overrides) if overrides else base


def index_terms(
    coefficients: IndexCoefficients,
    wwr: float,
    wall_u: float,
    fenestration_u: float,
    sc: float,
    cf: float,
) -> IndexTerms:
    """Evaluate the three terms of the index for one orientation."""
    return IndexTerms(
        opaque_conduction=coefficients.wall_conductance * (1.0 - wwr) * wall_u,
        fenestration_conduction=coefficients.fenestration_conductance * wwr * fenestration_u,
        solar_gain=coefficients.solar_gain * wwr * sc * cf,
    )


def evaluate_index(
    coefficients: IndexCoefficients,
    wwr: float,
    wall_u: float,
    fenestration_u: float,
    sc: float,
    cf: float,
) -> float:
    """Index value (W/m²) for one orientation."""
    return index_terms(coefficients, wwr, wall_u, fenestration_u, sc, cf).total
