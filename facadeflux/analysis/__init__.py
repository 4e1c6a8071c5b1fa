"""Envelope analysis modules."""

from .u_value_calculator import (
    RSI,
    RSE,
    RSE_BCA_TABLE,
    LayerResistance,
    ResistanceBreakdown,
    compute_u_value,
    describe_layers,
    opaque_from_layers,
    fenestration_from_layers,
)
from .material_library import (
    MATERIAL_CONDUCTIVITY,
    lookup_conductivity,
    make_material,
    list_materials,
)
from .shading import (
    OrientationFamily,
    SC2_TABLES,
    orientation_family,
    lookup_sc2,
    apply_external_shading,
    apply_horizontal_shading,
)
from .formulas import (
    IndexCoefficients,
    IndexTerms,
    ETTV_COEFFICIENTS,
    RETV_COEFFICIENTS,
    DEFAULT_COEFFICIENTS,
    resolve_coefficients,
    index_terms,
    evaluate_index,
)
from .aggregation import (
    OrientationResult,
    SurfaceContribution,
    ConstructionContribution,
    group_by_orientation,
    aggregate_orientation,
    area_weighted_average,
    surface_heat_gain,
)
from .envelope_calculator import (
    EnvelopeCalculator,
    ModelResult,
    aggregate_model,
    unique_constructions,
    calculate_ettv,
    calculate_retv,
)

__all__ = [
    # U-value calculations
    "RSI",
    "RSE",
    "RSE_BCA_TABLE",
    "LayerResistance",
    "ResistanceBreakdown",
    "compute_u_value",
    "describe_layers",
    "opaque_from_layers",
    "fenestration_from_layers",
    # Material library
    "MATERIAL_CONDUCTIVITY",
    "lookup_conductivity",
    "make_material",
    "list_materials",
    # External shading
    "OrientationFamily",
    "SC2_TABLES",
    "orientation_family",
    "lookup_sc2",
    "apply_external_shading",
    "apply_horizontal_shading",
    # Index formulas
    "IndexCoefficients",
    "IndexTerms",
    "ETTV_COEFFICIENTS",
    "RETV_COEFFICIENTS",
    "DEFAULT_COEFFICIENTS",
    "resolve_coefficients",
    "index_terms",
    "evaluate_index",
    # Orientation aggregation
    "OrientationResult",
    "SurfaceContribution",
    "ConstructionContribution",
    "group_by_orientation",
    "aggregate_orientation",
    "area_weighted_average",
    "surface_heat_gain",
    # Whole-model calculation
    "EnvelopeCalculator",
    "ModelResult",
    "aggregate_model",
    "unique_constructions",
    "calculate_ettv",
    "calculate_retv",
]
