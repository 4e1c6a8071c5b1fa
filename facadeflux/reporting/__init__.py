"""Report generation module."""

from .summary import (
    ConstructionSummaryRow,
    build_construction_summary,
    build_orientation_summary,
    build_summary,
    construction_layer_table,
    construction_summary_rows,
)

__all__ = [
    "ConstructionSummaryRow",
    "build_construction_summary",
    "build_orientation_summary",
    "build_summary",
    "construction_layer_table",
    "construction_summary_rows",
]
