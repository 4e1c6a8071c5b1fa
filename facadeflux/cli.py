"""
FacadeFlux CLI.

Command-line interface for ETTV/RETV envelope calculations.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn, Optional

import pydantic
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .analysis.envelope_calculator import EnvelopeCalculator, ModelResult
from .analysis.material_library import MATERIAL_CONDUCTIVITY, make_material
from .analysis.shading import lookup_sc2, orientation_family
from .analysis.u_value_calculator import describe_layers
from .core.config import CalculationOptions, IndexType, settings
from .core.schemas import load_model
from .reporting.summary import construction_summary_rows, fmt
from .utils.logging_config import setup_logging
from .utils.validation import ValidationError

app = typer.Typer(
    name="facadeflux",
    help="FacadeFlux - ETTV/RETV envelope thermal transfer calculations",
    add_completion=False,
)
console = Console()


@app.callback()
def main_options(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level (default: FACADEFLUX_LOG_LEVEL or WARNING)"
    ),
):
    """Configure logging for every command."""
    setup_logging(log_level or settings.log_level)


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(code=1)


def _print_result(result: ModelResult, show_summary: bool) -> None:
    label = result.index.value.upper()
    title = result.project_name or "Envelope model"
    console.print(Panel.fit(f"[bold]{escape(title)}[/bold]", border_style="blue"))

    table = Table(title=f"{label} Result")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")

    if result.overall_average_index is None:
        table.add_row(f"Average {label}", "N/A")
    else:
        verdict = "[green]PASS[/green]" if result.passed else "[red]FAIL[/red]"
        table.add_row(f"Average {label}", f"{result.overall_average_index:.2f} W/m²")
        table.add_row("Limit", f"{result.limit:.2f} W/m²")
        table.add_row("Verdict", verdict)
    table.add_row("WWR", f"{result.wwr:.2%}")
    table.add_row("Wall area", f"{result.wall_area:,.2f} m²")
    table.add_row("Window area", f"{result.window_area:,.2f} m²")
    table.add_row("Total heat gain", f"{result.total_contribution:,.1f} W")
    console.print(table)

    if result.per_orientation_results:
        by_orientation = Table(title="By Orientation")
        by_orientation.add_column("Orientation", style="cyan")
        by_orientation.add_column("CF", justify="right")
        by_orientation.add_column("WWR", justify="right")
        by_orientation.add_column("Gross m²", justify="right")
        by_orientation.add_column(f"{label} W/m²", justify="right")
        for r in result.per_orientation_results:
            by_orientation.add_row(
                r.orientation.id,
                f"{r.cf:.2f}",
                f"{r.wwr:.1%}",
                f"{r.gross_area:,.1f}",
                f"{r.average_index_value:.2f}",
            )
        console.print(by_orientation)

    rows = construction_summary_rows(result.constructions)
    if rows:
        constructions = Table(title="Envelope Constructions")
        constructions.add_column("ID", style="cyan")
        constructions.add_column("Description")
        constructions.add_column("U (W/m²K)", justify="right")
        constructions.add_column("SC", justify="right")
        for row in rows:
            constructions.add_row(row.id, row.name, fmt(row.u_value), fmt(row.sc))
        console.print(constructions)

    if result.notes:
        console.print(f"[dim]{result.notes}[/dim]")

    if show_summary:
        console.print()
        console.print(result.summary, markup=False, highlight=False)


@app.command()
def compute(
    model_file: Path = typer.Argument(..., help="Envelope model JSON file"),
    index: Optional[IndexType] = typer.Option(None, "--index", "-i", help="Index to compute"),
    limit: Optional[float] = typer.Option(None, "--limit", help="Regulatory limit override (W/m²)"),
    wall_coefficient: Optional[float] = typer.Option(None, "--wall-coefficient", help="Wall conduction coefficient"),
    fenestration_coefficient: Optional[float] = typer.Option(
        None, "--fenestration-coefficient", help="Fenestration conduction coefficient"
    ),
    solar_coefficient: Optional[float] = typer.Option(None, "--solar-coefficient", help="Solar gain coefficient"),
    climate: Optional[str] = typer.Option(None, "--climate", help="Climate label"),
    parallel: int = typer.Option(1, "--parallel", "-p", min=1, help="Worker processes for orientations"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    show_summary: bool = typer.Option(False, "--summary/--no-summary", help="Print the full text summary"),
):
    """
    Compute ETTV or RETV for an envelope model file.
    """
    try:
        model = load_model(model_file)
        options = CalculationOptions(
            index=index,
            regulatory_limit=limit,
            wall_conductance_coefficient=wall_coefficient,
            fenestration_conductance_coefficient=fenestration_coefficient,
            solar_gain_coefficient=solar_coefficient,
            climate_label=climate,
        )
    except FileNotFoundError as e:
        _fail(str(e))
    except json.JSONDecodeError as e:
        _fail(f"{model_file} is not valid JSON: {e}")
    except pydantic.ValidationError as e:
        _fail(f"Invalid model document:\n{e}")

    try:
        result = EnvelopeCalculator(parallel=parallel).calculate(model, options)
    except ValidationError as e:
        _fail(f"{e} (field: {e.field})")

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    _print_result(result, show_summary)


def _parse_layer(value: str):
    """Parse 'name:thickness' or 'name:thickness:conductivity'."""
    head, _, last = value.rpartition(":")
    if not head:
        raise ValueError(f"Layer '{value}' must be name:thickness[:conductivity]")
    last_value = float(last)

    name, _, middle = head.rpartition(":")
    if name:
        try:
            return make_material(name.strip(), float(middle), last_value)
        except ValueError:
            pass  # colon is part of the material name
    return make_material(head.strip(), last_value)


@app.command()
def uvalue(
    layers: list[str] = typer.Option(
        ..., "--layer", "-l", help="Layer as name:thickness[:conductivity], outside to inside"
    ),
    rsi: float = typer.Option(settings.inside_film_resistance, "--rsi", help="Internal film resistance (m²K/W)"),
    rse: float = typer.Option(settings.outside_film_resistance, "--rse", help="External film resistance (m²K/W)"),
):
    """
    Calculate the U-value of a layered construction.
    """
    try:
        materials = [_parse_layer(layer) for layer in layers]
    except ValueError as e:
        _fail(f"Invalid layer: {e}")
    except KeyError as e:
        _fail(str(e.args[0]))

    breakdown = describe_layers(materials, rsi=rsi, rse=rse)

    table = Table(title="Layer Resistances")
    table.add_column("Material", style="cyan")
    table.add_column("Thickness (m)", justify="right")
    table.add_column("k (W/m·K)", justify="right")
    table.add_column("R (m²K/W)", justify="right")
    for layer in breakdown.layers:
        table.add_row(layer.name, fmt(layer.thickness), fmt(layer.conductivity), fmt(layer.resistance))
    table.add_row("Outside film", "", "", fmt(breakdown.outside_film))
    table.add_row("Inside film", "", "", fmt(breakdown.inside_film))
    console.print(table)

    console.print(f"Total resistance: {breakdown.total_resistance:.3f} m²K/W")
    console.print(f"[bold]U-value: {breakdown.u_value:.3f} W/m²K[/bold]")


@app.command()
def sc2(
    projection: float = typer.Option(..., "--projection", help="Horizontal projection depth (m)"),
    height: float = typer.Option(..., "--height", help="Glazing height (m)"),
    orientation: str = typer.Option("N", "--orientation", "-o", help="Orientation id, e.g. N, NE, SW"),
):
    """
    Look up the external shading coefficient of a horizontal projection.
    """
    value = lookup_sc2(projection, height, orientation)
    family = orientation_family(orientation)
    r1 = projection / height if height > 0 else 0.0

    console.print(f"R1 = {r1:.3f} ({family.value.replace('_', '/')} table)")
    console.print(f"[bold]SC2 = {value:.4f}[/bold]")


@app.command()
def materials(
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Filter by name"),
):
    """
    List the material library.
    """
    table = Table(title="Material Library")
    table.add_column("Material", style="cyan")
    table.add_column("k (W/m·K)", justify="right")

    for name, conductivity in MATERIAL_CONDUCTIVITY.items():
        if search and search.lower() not in name.lower():
            continue
        table.add_row(name, f"{conductivity:g}")

    console.print(table)


@app.command()
def version():
    """Show version information."""
    from . import __version__
    console.print(f"FacadeFlux v{__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
