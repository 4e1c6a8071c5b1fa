"""
Envelope Thermal Transfer Calculator.

Computes ETTV or RETV for a whole envelope model:
- Groups surfaces by orientation
- Aggregates each orientation (see aggregation.py)
- Combines orientations into an area-weighted model value
- Compares against the regulatory limit

An empty or zero-area model is a normal outcome: the result carries no
index value, no verdict and a note explaining why.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .aggregation import OrientationResult, aggregate_orientation, group_by_orientation
from .formulas import IndexCoefficients, resolve_coefficients, DEFAULT_COEFFICIENTS
from ..core.config import CalculationOptions, IndexType, Settings, settings
from ..core.constructions import Construction, ConstructionKind, construction_key
from ..core.models import EnvelopeModel, Surface
from ..utils.validation import validate_model

logger = logging.getLogger(__name__)


@dataclass
class ModelResult:
    """Whole-model index result with its per-orientation breakdown."""
    project_name: str = ""
    version: str = ""
    index: IndexType = IndexType.ETTV
    limit: float = 0.0  # W/m²
    climate: str = ""
    coefficients: IndexCoefficients = field(default_factory=lambda: DEFAULT_COEFFICIENTS[IndexType.ETTV])

    per_orientation_results: list[OrientationResult] = field(default_factory=list)
    constructions: list[Construction] = field(default_factory=list)

    wall_area: float = 0.0  # m²
    window_area: float = 0.0  # m²
    total_contribution: float = 0.0  # W
    overall_average_index: Optional[float] = None  # W/m², None without envelope area
    passed: Optional[bool] = None  # None when there is nothing to assess

    surface_count: int = 0
    skipped_surface_count: int = 0
    notes: str = ""
    summary: str = ""

    @property
    def gross_area(self) -> float:
        return self.wall_area + self.window_area

    @property
    def wwr(self) -> float:
        gross = self.gross_area
        return self.window_area / gross if gross > 0 else 0.0

    @property
    def average_heat_gain(self) -> float:
        """Total contribution per m² of gross envelope area."""
        gross = self.gross_area
        return self.total_contribution / gross if gross > 0 else 0.0

    @property
    def is_empty(self) -> bool:
        return self.overall_average_index is None

    def orientation(self, orientation_id: str) -> Optional[OrientationResult]:
        """Result of one orientation by id (e.g. 'NE'), if present."""
        for result in self.per_orientation_results:
            if result.orientation.id.lower() == orientation_id.lower():
                return result
        return None

    def build_summary(self) -> str:
        """Render and store the human-readable summary."""
        from ..reporting.summary import build_summary

        self.summary = build_summary(self)
        return self.summary

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "project_name": self.project_name,
            "version": self.version,
            "index": self.index.value,
            "climate": self.climate,
            "limit_w_m2": self.limit,
            "coefficients": self.coefficients.to_dict(),
            "overall_average_index_w_m2": self.overall_average_index,
            "passed": self.passed,
            "areas_m2": {
                "wall": self.wall_area,
                "window": self.window_area,
                "gross": self.gross_area,
            },
            "wwr": self.wwr,
            "total_contribution_w": self.total_contribution,
            "surface_count": self.surface_count,
            "skipped_surface_count": self.skipped_surface_count,
            "notes": self.notes,
            "by_orientation": [r.to_dict() for r in self.per_orientation_results],
        }


def unique_constructions(surfaces: Sequence[Optional[Surface]]) -> list[Construction]:
    """Distinct constructions of a model, opaque first, then by name."""
    seen: dict[str, Construction] = {}
    for surface in surfaces:
        if surface is None or surface.construction is None:
            continue
        seen.setdefault(construction_key(surface.construction), surface.construction)
    return sorted(
        seen.values(),
        key=lambda c: (c.kind is ConstructionKind.FENESTRATION, (c.name or "").lower()),
    )


def aggregate_model(
    results: Sequence[OrientationResult],
    limit: float,
    index: IndexType = IndexType.ETTV,
) -> ModelResult:
    """
    Combine orientation results into a model result.

    overall = Σ(index value × gross area) / Σ gross area, and the model
    passes when overall ≤ limit. Without any gross area there is no overall
    value and no verdict.
    """
    result = ModelResult(index=index, limit=limit, per_orientation_results=list(results))

    for orientation_result in result.per_orientation_results:
        result.wall_area += orientation_result.wall_area
        result.window_area += orientation_result.window_area
        result.total_contribution += orientation_result.total_contribution
        result.surface_count += orientation_result.surface_count
        result.skipped_surface_count += orientation_result.skipped_surface_count

    gross = result.gross_area
    label = index.value.upper()

    if not result.per_orientation_results:
        result.notes = "No surfaces supplied; nothing to assess."
        return result

    if gross <= 0:
        result.notes = f"Surface areas are zero; no envelope area to assess for {label}."
        return result

    result.overall_average_index = sum(
        r.average_index_value * r.gross_area for r in result.per_orientation_results
    ) / gross
    result.passed = result.overall_average_index <= limit

    if result.passed:
        result.notes = f"{label} calculation passed."
    else:
        result.notes = f"{label} exceeds limit by {result.overall_average_index - limit:.2f} W/m²"
    return result


class EnvelopeCalculator:
    """
    Calculate ETTV/RETV for envelope models.

    Usage:
        calculator = EnvelopeCalculator()
        result = calculator.calculate(model, CalculationOptions(index=IndexType.RETV))

        print(f"RETV: {result.overall_average_index:.2f} W/m²")
    """

    def __init__(self, parallel: Optional[int] = None, config: Optional[Settings] = None):
        self.config = config or settings
        self.parallel = parallel or self.config.parallel_workers

    def calculate(
        self,
        model: EnvelopeModel,
        options: Optional[CalculationOptions] = None,
    ) -> ModelResult:
        """
        Calculate the index of a model.

        Args:
            model: Envelope model with surfaces
            options: Index selection and coefficient/limit overrides

        Returns:
            ModelResult, including its summary

        Raises:
            ValidationError: If the model or its surface list is missing
        """
        validate_model(model)
        options = options or CalculationOptions()

        index = options.resolved_index(self.config)
        coefficients = resolve_coefficients(options, self.config)
        limit = options.resolved_limit(self.config)
        project_name = getattr(model, "project_name", "")
        context = {"project": project_name or "-"}

        supplied = list(model.surfaces)
        surfaces = [s for s in supplied if s is not None]
        groups = group_by_orientation(surfaces)
        logger.info(
            f"Calculating {index.value.upper()} for {len(surfaces)} surfaces in {len(groups)} orientations",
            extra=context,
        )

        orientation_results = self._aggregate_groups(groups, coefficients)

        result = aggregate_model(orientation_results, limit=limit, index=index)
        result.project_name = project_name
        result.version = getattr(model, "version", "")
        result.climate = options.resolved_climate(self.config)
        result.coefficients = coefficients
        result.constructions = unique_constructions(surfaces)
        # None entries still count as supplied surfaces
        result.surface_count = len(supplied)
        result.skipped_surface_count += len(supplied) - len(surfaces)
        result.build_summary()

        if result.is_empty:
            logger.warning(result.notes, extra=context)
        else:
            logger.info(
                f"{index.value.upper()} = {result.overall_average_index:.2f} W/m² "
                f"(limit {limit:.2f}, {'pass' if result.passed else 'fail'})",
                extra=context,
            )
        return result

    def _aggregate_groups(self, groups, coefficients: IndexCoefficients) -> list[OrientationResult]:
        if self.parallel <= 1 or len(groups) <= 1:
            return [
                aggregate_orientation(group_surfaces, coefficients, orientation)
                for orientation, group_surfaces in groups
            ]

        results: list[Optional[OrientationResult]] = [None] * len(groups)
        with ProcessPoolExecutor(max_workers=min(self.parallel, len(groups))) as executor:
            futures = {
                executor.submit(aggregate_orientation, group_surfaces, coefficients, orientation): i
                for i, (orientation, group_surfaces) in enumerate(groups)
            }
            for future in as_completed(futures):
                results[futures[future]] = future.result()
        return results


def calculate_ettv(model: EnvelopeModel, **overrides) -> ModelResult:
    """
    Convenience function for ETTV.

    Keyword overrides are CalculationOptions fields, e.g. regulatory_limit=45.
    """
    options = CalculationOptions(index=IndexType.ETTV, **overrides)
    return EnvelopeCalculator().calculate(model, options)


def calculate_retv(model: EnvelopeModel, **overrides) -> ModelResult:
    """Convenience function for RETV."""
    options = CalculationOptions(index=IndexType.RETV, **overrides)
    return EnvelopeCalculator().calculate(model, options)
