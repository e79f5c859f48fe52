"""
sapengine CLI.

Command-line interface for dwelling energy simulation, certificate
inference and upgrade recommendations.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .core.config import settings
from .ingest.epc_mapper import ParameterInferenceMapper
from .roi.calculator import RecommendationRanker
from .roi.costs_uk import calculate_heating_cost
from .simulation.engine import EnergySimulationEngine
from .utils.logging_config import ensure_logging
from .utils.validation import InvalidInputError

app = typer.Typer(
    name="sapengine",
    help="SAP-style dwelling energy engine - demand, inference and upgrade payback",
    add_completion=False,
)
console = Console()


def _load_json(path: Path) -> Dict[str, Any]:
    if not path.exists():
        console.print(f"[red]File not found:[/red] {path}")
        raise typer.Exit(1)
    try:
        with open(path) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON in {path}:[/red] {e}")
        raise typer.Exit(1)


def _invalid(e: InvalidInputError) -> None:
    console.print(f"[red]Invalid building description:[/red] {e}")
    if e.field:
        console.print(f"  Field: {e.field}")
    if e.suggestions:
        console.print(f"  Known values: {', '.join(e.suggestions)}")
    raise typer.Exit(1)


@app.command()
def simulate(
    input_file: Path = typer.Argument(..., help="Building description JSON file"),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
):
    """
    Calculate space and water heating demand for a building description.
    """
    ensure_logging(settings.log_level)
    data = _load_json(input_file)

    try:
        result = EnergySimulationEngine().run(data)
    except InvalidInputError as e:
        _invalid(e)

    if as_json:
        console.print_json(json.dumps(result.to_dict()))
        return

    console.print(Panel.fit(
        f"[bold]{result.name or input_file.stem}[/bold]",
        border_style="green"
    ))

    table = Table(title="Energy Demand")
    table.add_column("Quantity", style="cyan")
    table.add_column("Value", style="white", justify="right")

    table.add_row("Floor area", f"{result.total_floor_area:,.1f} m²")
    table.add_row("Occupancy", f"{result.occupancy:.2f}")
    table.add_row("Fabric heat loss", f"{result.fabric_heat_loss:,.1f} W/K")
    table.add_row("Ventilation heat loss (avg)", f"{result.average_ventilation_heat_loss:,.1f} W/K")
    table.add_row("Mean internal temperature", f"{result.temperature.annual_internal:.1f} °C")
    table.add_row("Space heating", f"{result.annual_space_heating_kwh:,.0f} kWh/yr")
    table.add_row("Space heating intensity", f"{result.space_heating.annual_demand_kwh_per_m2:,.0f} kWh/m²/yr")
    table.add_row("Water heating", f"{result.energy_requirements.water_heating:,.0f} kWh/yr")
    table.add_row(
        "Estimated heating cost",
        f"£{calculate_heating_cost(result.annual_space_heating_kwh + result.energy_requirements.water_heating):,.0f}/yr",
    )
    console.print(table)

    breakdown = Table(title="Fabric Heat Loss")
    breakdown.add_column("Element", style="cyan")
    breakdown.add_column("W/K", justify="right")
    for element_type, loss in result.fabric.by_type().items():
        breakdown.add_row(element_type, f"{loss:,.1f}")
    console.print(breakdown)


@app.command()
def infer(
    input_file: Path = typer.Argument(..., help="Certificate record JSON file"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the description JSON here"),
):
    """
    Infer a building description from a certificate record.

    The result is an approximation for an unsurveyed dwelling.
    """
    ensure_logging(settings.log_level)
    record = _load_json(input_file)

    description, report = ParameterInferenceMapper().map_with_report(record)

    table = Table(title="Inferred Parameters")
    table.add_column("Parameter", style="cyan")
    table.add_column("Source", style="white")
    table.add_column("Detail", style="dim")
    for name, source in report.sources.items():
        table.add_row(name, source, report.details.get(name, ""))
    console.print(table)

    for note in report.notes:
        console.print(f"[yellow]Note:[/yellow] {note}")

    if output:
        with open(output, "w") as f:
            f.write(description.model_dump_json(indent=2))
        console.print(f"\n[green]Saved to {output}[/green]")
    else:
        console.print_json(description.model_dump_json())


@app.command()
def recommend(
    input_file: Path = typer.Argument(..., help="Certificate record JSON file"),
    fuel_price: Optional[float] = typer.Option(None, "--fuel-price", help="Fuel price (GBP/kWh)"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Parallel workers"),
):
    """
    Rank fabric upgrades for a certificate record by payback.
    """
    ensure_logging(settings.log_level)
    record = _load_json(input_file)

    description = ParameterInferenceMapper().map(record)
    ranker = RecommendationRanker(fuel_price=fuel_price)

    try:
        recommendations = ranker.recommend(description, max_workers=workers)
    except InvalidInputError as e:
        _invalid(e)

    console.print(Panel.fit(
        f"[bold]{description.name or input_file.stem}[/bold]\n"
        f"Fuel price: £{ranker.fuel_price:.3f}/kWh",
        border_style="blue"
    ))

    if not recommendations:
        console.print("[green]No fabric upgrades apply to this dwelling.[/green]")
        return

    table = Table(title="Recommended Upgrades")
    table.add_column("#", justify="right")
    table.add_column("Measure", style="cyan")
    table.add_column("Cost", justify="right")
    table.add_column("Saving", justify="right")
    table.add_column("Payback", justify="right")
    table.add_column("NPV", justify="right")

    for i, r in enumerate(recommendations, 1):
        payback = f"{r.payback_years:.1f} yr" if math.isfinite(r.payback_years) else "never"
        table.add_row(
            str(i),
            r.description,
            f"£{r.cost_estimate:,.0f}",
            f"{r.annual_kwh_savings:,.0f} kWh",
            payback,
            f"£{r.npv:,.0f}",
        )
    console.print(table)


@app.command()
def version():
    """Show version information."""
    from . import __version__
    console.print(f"sapengine v{__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
