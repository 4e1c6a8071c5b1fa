"""
Text summaries of envelope results.

Plain-text report blocks for a calculated model:
- Model totals (index value, verdict, WWR, areas, total heat gain)
- Envelope construction summary (U-value and SC per construction)
- Layer resistance tables per construction
- One block per orientation with its construction contribution tables

Numbers are printed with up to three decimals, percentages with two.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

from ..analysis.formulas import IndexCoefficients
from ..analysis.u_value_calculator import ResistanceBreakdown, describe_layers
from ..core.config import IndexType, settings
from ..core.constructions import Construction, FenestrationConstruction, OpaqueConstruction

if TYPE_CHECKING:
    from ..analysis.aggregation import OrientationResult
    from ..analysis.envelope_calculator import ModelResult


def fmt(value: Optional[float]) -> str:
    """Format a number with at most three decimals, e.g. 40.0 -> '40', 3.8462 -> '3.846'."""
    if value is None:
        return "N/A"
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _index_label(index: IndexType) -> str:
    return index.value.upper()


@dataclass
class ConstructionSummaryRow:
    """One line of the envelope construction summary."""
    id: str
    name: str
    kind: str
    u_value: float  # W/m²K
    sc: Optional[float]  # None for opaque constructions


def construction_summary_rows(constructions: Iterable[Construction]) -> list[ConstructionSummaryRow]:
    rows = []
    for construction in constructions:
        match construction:
            case FenestrationConstruction() as fenestration:
                sc = fenestration.sc_total
            case OpaqueConstruction():
                sc = None
            case _:
                continue
        rows.append(
            ConstructionSummaryRow(
                id=construction.id or "",
                name=construction.name or "Unnamed",
                kind=construction.kind.value,
                u_value=construction.effective_u_value,
                sc=sc,
            )
        )
    return rows


def construction_layer_table(
    construction: Construction,
    rsi: Optional[float] = None,
    rse: Optional[float] = None,
) -> ResistanceBreakdown:
    """Layer resistance table of a construction; films default to the configured ones."""
    rsi = settings.inside_film_resistance if rsi is None else rsi
    rse = settings.outside_film_resistance if rse is None else rse
    return describe_layers(construction.materials, rsi=rsi, rse=rse)


def build_construction_summary(constructions: Iterable[Construction]) -> str:
    """Envelope construction summary followed by one layer table per layered construction."""
    constructions = list(constructions)
    rows = construction_summary_rows(constructions)
    if not rows:
        return ""

    lines = [
        "Envelope Construction Summary",
        "ID, Description, U-Value (W/m²K), SC",
    ]
    for row in rows:
        lines.append(f"{row.id}, {row.name}, {fmt(row.u_value)}, {fmt(row.sc)}")

    for construction in constructions:
        if not construction.materials:
            continue
        table = construction_layer_table(construction)
        lines.append("")
        lines.append(construction.name or "Unnamed Construction")
        lines.append("Material Description, Thickness (m), Thermal Conductivity (W/mK), Thermal Resistance (m²K/W)")
        for layer in table.layers:
            lines.append(
                f"{layer.name}, {fmt(layer.thickness)}, {fmt(layer.conductivity)}, {fmt(layer.resistance)}"
            )
        lines.append(f"Outside film, , , {fmt(table.outside_film)}")
        lines.append(f"Inside film, , , {fmt(table.inside_film)}")
        lines.append(f"Total thermal resistance: {fmt(table.total_resistance)} m²K/W")
        lines.append(f"U-Value: {fmt(construction.effective_u_value)} W/m²K")
        # Explicit U-values win over the layers
        if fmt(table.u_value) != fmt(construction.effective_u_value):
            lines.append(f"Layer-derived U-Value: {fmt(table.u_value)} W/m²K (not used)")

    return "\n".join(lines)


def build_orientation_summary(
    result: "OrientationResult",
    coefficients: IndexCoefficients,
    index: IndexType = IndexType.ETTV,
) -> str:
    """Summary block of one orientation."""
    label = _index_label(index)
    lines = [
        f"Orientation: {result.orientation.label}",
        f"Average {label}: {fmt(result.average_index_value)} W/m²",
        f"WWR: {result.wwr:.2%}",
        f"Window area: {fmt(result.window_area)} m²",
        f"Wall area: {fmt(result.wall_area)} m²",
        f"Gross area: {fmt(result.gross_area)} m²",
        f"Total gross heat gain: {fmt(result.total_contribution)} W",
        f"Correction Factor (CF): {fmt(result.cf)}",
    ]

    opaque = [c for c in result.constructions if isinstance(c.construction, OpaqueConstruction)]
    fenestration = [c for c in result.constructions if isinstance(c.construction, FenestrationConstruction)]

    if opaque:
        lines.append("Opaque Construction")
        lines.append(
            f"ID, Description, Area, U-Value (W/m²K), {fmt(coefficients.wall_conductance)} x Area x U-Value"
        )
        for entry in opaque:
            construction = entry.construction
            lines.append(
                f"{construction.id or ''}, {construction.name or 'Unnamed'}, {fmt(entry.area)} m², "
                f"{fmt(construction.effective_u_value)}, {fmt(entry.conduction_gain)}"
            )

    if fenestration:
        lines.append("Fenestration Construction")
        lines.append(
            f"ID, Description, Area, U-Value (W/m²K), SC, "
            f"{fmt(coefficients.fenestration_conductance)} x Area x U-Value, "
            f"{fmt(coefficients.solar_gain)} x Area x SC x CF"
        )
        for entry in fenestration:
            construction = entry.construction
            lines.append(
                f"{construction.id or ''}, {construction.name or 'Unnamed'}, {fmt(entry.area)} m², "
                f"{fmt(construction.effective_u_value)}, {fmt(entry.sc)}, "
                f"{fmt(entry.conduction_gain)}, {fmt(entry.solar_gain)}"
            )

    return "\n".join(lines)


def build_summary(result: "ModelResult") -> str:
    """
    Human-readable summary of a model result.

    Empty results (no surfaces or no area) render the totals block and the
    note explaining why there is no index value.
    """
    label = _index_label(result.index)
    lines = []

    if result.project_name:
        version = f" (version {result.version})" if result.version else ""
        lines.append(f"Project: {result.project_name}{version}")
    if result.climate:
        lines.append(f"Climate: {result.climate}")

    if result.overall_average_index is None:
        lines.append(f"Average {label}: N/A")
    else:
        verdict = "PASS" if result.passed else "FAIL"
        lines.append(f"Average {label}: {fmt(result.overall_average_index)} W/m²")
        lines.append(f"Limit: {fmt(result.limit)} W/m² ({verdict})")

    lines.extend([
        f"WWR: {result.wwr:.2%}",
        f"Window area: {fmt(result.window_area)} m²",
        f"Wall area: {fmt(result.wall_area)} m²",
        f"Gross area: {fmt(result.gross_area)} m²",
        f"Total gross heat gain: {fmt(result.total_contribution)} W",
    ])
    if result.notes:
        lines.append(f"Notes: {result.notes}")

    construction_block = build_construction_summary(result.constructions)
    if construction_block:
        lines.append("")
        lines.append(construction_block)

    if result.per_orientation_results:
        lines.append("")
        lines.append("Breakdown by orientation:")
        for orientation_result in result.per_orientation_results:
            block = build_orientation_summary(orientation_result, result.coefficients, result.index)
            lines.extend(f"- {line}" for line in block.splitlines())
            lines.append("")

    return "\n".join(lines).rstrip()
