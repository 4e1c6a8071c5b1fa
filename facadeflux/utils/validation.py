"""
Input validation utilities for FacadeFlux.

Structural problems with what a caller hands the engine (a missing model,
a missing surface list, unusable shading ratios) are rejected
here with a ValidationError naming the offending field. Data-quality issues
inside an otherwise valid model are not validated away; the calculator
degrades them to zero or neutral contributions instead.

Usage:
    from facadeflux.utils.validation import validate_model, ValidationError

    model = validate_model(model)
"""

import logging
import math
from typing import Any, List, Optional

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str = "", suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field = field
        self.suggestions = suggestions or []


def validate_model(model: Any) -> Any:
    """
    Validate that an envelope model was supplied.

    Args:
        model: EnvelopeModel (or any object exposing ``surfaces``)

    Returns:
        The same model

    Raises:
        ValidationError: If the model or its surface list is missing
    """
    if model is None:
        raise ValidationError(
            "Envelope model cannot be None",
            field="model",
            suggestions=["Build an EnvelopeModel from your surfaces before calculating"],
        )

    validate_surfaces(getattr(model, "surfaces", None))
    return model


def validate_surfaces(surfaces: Any) -> Any:
    """
    Validate that a surface collection was supplied.

    An empty collection is valid; it produces an empty result downstream.

    Raises:
        ValidationError: If surfaces is None or not iterable
    """
    if surfaces is None:
        raise ValidationError(
            "Surface list cannot be None",
            field="surfaces",
            suggestions=["Pass an empty list to calculate an empty model"],
        )

    if isinstance(surfaces, (str, bytes)):
        raise ValidationError(
            "Surface list must be a sequence of surfaces, not a string",
            field="surfaces",
        )

    try:
        iter(surfaces)
    except TypeError:
        raise ValidationError(
            f"Surface list must be iterable: got {type(surfaces).__name__}",
            field="surfaces",
        )

    return surfaces


def validate_ratio(value: Any, field: str, warn_above_one: bool = True) -> float:
    """
    Validate a shading coefficient style ratio.

    Values above 1.0 are accepted with a warning; a shading coefficient above
    unity is unusual but not impossible for custom inputs.

    Raises:
        ValidationError: If value is not a finite, non-negative number
    """
    try:
        value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(f"{field} must be a number: got '{value}'", field=field)

    if not math.isfinite(value) or value < 0:
        raise ValidationError(
            f"{field} must be a finite, non-negative number: got {value}",
            field=field,
            suggestions=["Shading coefficients typically lie between 0.0 and 1.0"],
        )

    if warn_above_one and value > 1.0:
        logger.warning(f"{field} value {value:.3f} is outside typical range [0.0, 1.0]")

    return value
