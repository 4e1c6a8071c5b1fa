"""Core models and configuration."""

from .config import Settings, settings, CalculationOptions, IndexType
from .constructions import (
    Material,
    OpaqueConstruction,
    FenestrationConstruction,
    Construction,
    ConstructionKind,
    compose_sc,
)
from .models import Surface, EnvelopeModel, ProjectSequence

__all__ = [
    "Settings",
    "settings",
    "CalculationOptions",
    "IndexType",
    "Material",
    "OpaqueConstruction",
    "FenestrationConstruction",
    "Construction",
    "ConstructionKind",
    "compose_sc",
    "Surface",
    "EnvelopeModel",
    "ProjectSequence",
]
