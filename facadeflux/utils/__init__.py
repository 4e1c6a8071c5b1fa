"""Utility modules."""

from .logging_config import (
    get_logger,
    setup_logging,
    FacadeFluxFormatter,
    FileFormatter,
)
from .validation import (
    validate_model,
    validate_surfaces,
    validate_ratio,
    ValidationError,
)

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    "FacadeFluxFormatter",
    "FileFormatter",
    # Validation
    "validate_model",
    "validate_surfaces",
    "validate_ratio",
    "ValidationError",
]
