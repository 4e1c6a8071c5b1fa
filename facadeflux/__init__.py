"""
FacadeFlux - envelope thermal transfer calculations.

Computes the ETTV (Envelope Thermal Transfer Value) and RETV (Residential
Envelope Transmittance Value) of a building envelope from its surfaces,
constructions and orientations.
"""

__version__ = "0.1.0"

from .core.config import CalculationOptions, IndexType, Settings, settings
from .core.constructions import FenestrationConstruction, Material, OpaqueConstruction
from .core.models import EnvelopeModel, ProjectSequence, Surface
from .geometry.orientation import Orientation, classify_orientation
from .analysis.envelope_calculator import (
    EnvelopeCalculator,
    ModelResult,
    calculate_ettv,
    calculate_retv,
)
from .utils.validation import ValidationError

__all__ = [
    "__version__",
    "CalculationOptions",
    "IndexType",
    "Settings",
    "settings",
    "Material",
    "OpaqueConstruction",
    "FenestrationConstruction",
    "Surface",
    "EnvelopeModel",
    "ProjectSequence",
    "Orientation",
    "classify_orientation",
    "EnvelopeCalculator",
    "ModelResult",
    "calculate_ettv",
    "calculate_retv",
    "ValidationError",
]
