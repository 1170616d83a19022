"""
cli.py – Command-line front end for the emission estimator.

Usage
─────
    co2-estimate estimate --energy 1200 --sector Retail --transport train
    co2-estimate estimate --json                     # raw API payload
    co2-estimate export --out report.json            # same shape as POST /api/export
    co2-estimate sectors                             # list sectors and transport modes
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .emission_factors import (
    DEFAULT_SECTOR,
    DEFAULT_TRANSPORT,
    SECTOR_WEIGHTS,
    TRANSPORT_KG_PER_KM,
)
from .schemas import EstimateRequest, EstimateResponse
from .service import EstimationError, build_export_report, export_filename, run_estimate

console = Console()
log = logging.getLogger(__name__)

_NUMERIC_INPUTS = (
    ("hours", "Operating hours"),
    ("energy", "Energy use in kWh"),
    ("material", "Material use in kg"),
    ("waste", "Material waste in kg"),
    ("output", "Units produced"),
    ("distance", "Transport distance in km"),
)


def _request_from_args(args: argparse.Namespace) -> EstimateRequest:
    """Only flags the user actually passed are sent; the rest take model defaults."""
    fields = {name: getattr(args, name) for name, _ in _NUMERIC_INPUTS}
    fields["sector"] = args.sector
    fields["transport"] = args.transport
    return EstimateRequest(**{k: v for k, v in fields.items() if v is not None})


def _print_estimate(result: EstimateResponse) -> None:
    console.print(f"[bold]Estimated emissions:[/] {result.prediction:.2f} kg CO₂")
    console.print()

    breakdown = Table(title="Breakdown (before efficiency discount)")
    breakdown.add_column("Component", style="cyan")
    breakdown.add_column("kg CO₂", justify="right")
    for s in result.pie_data:
        breakdown.add_row(s.name, f"{s.value:.2f}")
    console.print(breakdown)

    projection = Table(title="Monthly projection")
    projection.add_column("Month", style="cyan")
    projection.add_column("kg CO₂", justify="right")
    for p in result.bar_data:
        projection.add_row(p.name, str(p.emissions))
    console.print(projection)

    metrics = Table(title="Efficiency metrics")
    metrics.add_column("Metric", style="cyan")
    metrics.add_column("%", justify="right")
    metrics.add_row("Energy efficiency", str(result.metrics.energy_efficiency))
    metrics.add_row("Material efficiency", str(result.metrics.material_efficiency))
    metrics.add_row("Transport efficiency", str(result.metrics.transport_efficiency))
    metrics.add_row("Overall score", str(result.metrics.overall_score))
    console.print(metrics)

    recs = Table(title="Recommendations", show_lines=True)
    recs.add_column("Category", style="bold")
    recs.add_column("Title")
    recs.add_column("Impact")
    recs.add_column("Saving (kg)", justify="right")
    recs.add_column("Details")
    for r in result.recommendations:
        impact = "[red]high[/]" if r.impact == "high" else f"[yellow]{r.impact}[/]"
        recs.add_row(r.category, r.title, impact, str(r.saving_potential), r.description)
    console.print(recs)


def cmd_estimate(args: argparse.Namespace) -> int:
    """Handle: co2-estimate estimate."""
    try:
        request = _request_from_args(args)
        result = run_estimate(request)
    except (ValidationError, EstimationError) as exc:
        console.print(f"[red]Error:[/] {escape(str(exc))}")
        return 1

    if args.json:
        console.print_json(result.model_dump_json(by_alias=True))
    else:
        _print_estimate(result)
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Handle: co2-estimate export.  Writes the report JSON to --out."""
    try:
        request = _request_from_args(args)
        report = build_export_report(request)
    except (ValidationError, EstimationError) as exc:
        console.print(f"[red]Error:[/] {escape(str(exc))}")
        return 1

    out = Path(args.out) if args.out else Path(export_filename())
    try:
        out.write_text(json.dumps(report.model_dump(by_alias=True), indent=2), encoding="utf-8")
    except OSError as exc:
        console.print(f"[red]Error:[/] Could not write {out}: {escape(str(exc))}")
        return 1
    log.info("Report written to %s", out)
    console.print(f"[green]✓[/] Report written to [bold]{out}[/]")
    return 0


def cmd_sectors(_args: argparse.Namespace) -> int:
    """Handle: co2-estimate sectors."""
    sectors = Table(title="Sectors (energy / material / operation weights)")
    sectors.add_column("Sector", style="cyan")
    sectors.add_column("Energy", justify="right")
    sectors.add_column("Material", justify="right")
    sectors.add_column("Operation", justify="right")
    for name, w in SECTOR_WEIGHTS.items():
        sectors.add_row(name, f"{w.energy:.1f}", f"{w.material:.1f}", f"{w.operation:.1f}")
    console.print(sectors)

    modes = Table(title="Transport modes")
    modes.add_column("Mode", style="cyan")
    modes.add_column("kg CO₂ / km", justify="right")
    for name, factor in TRANSPORT_KG_PER_KM.items():
        modes.add_row(name, f"{factor:.2f}")
    console.print(modes)
    return 0


# ─────────────────────────────────────────────────────────────
# Argument parsing
# ─────────────────────────────────────────────────────────────

def _build_input_args(parser: argparse.ArgumentParser) -> None:
    """Add the estimator input flags shared by estimate and export."""
    for name, help_text in _NUMERIC_INPUTS:
        default = EstimateRequest.model_fields[name].default
        parser.add_argument(
            f"--{name}",
            type=float,
            default=None,
            help=f"{help_text} (default: {default})",
        )
    parser.add_argument(
        "--sector",
        default=None,
        help=f"Business sector (default: {DEFAULT_SECTOR})",
    )
    parser.add_argument(
        "--transport",
        default=None,
        help=f"Transport mode (default: {DEFAULT_TRANSPORT})",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Log calculation details",
    )


def build_parser() -> argparse.ArgumentParser:
    """Construct and return the top-level argument parser."""
    root = argparse.ArgumentParser(
        prog="co2-estimate",
        description="Estimate business CO₂ emissions from operational inputs.",
    )
    sub = root.add_subparsers(dest="command", required=True)

    p_estimate = sub.add_parser("estimate", help="Print an estimate with breakdown and recommendations.")
    _build_input_args(p_estimate)
    p_estimate.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print the raw JSON payload instead of tables",
    )

    p_export = sub.add_parser("export", help="Write an emissions report JSON file.")
    _build_input_args(p_export)
    p_export.add_argument(
        "--out",
        default=None,
        help="Output path (default: co2-emissions-report-<date>.json)",
    )

    sub.add_parser("sectors", help="List sectors and transport modes with their factors.")

    return root


# ─────────────────────────────────────────────────────────────
# Entry point
# ─────────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> int:
    """Parse arguments and dispatch to the correct sub-command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        datefmt="%H:%M:%S",
    )

    dispatch = {
        "estimate": cmd_estimate,
        "export": cmd_export,
        "sectors": cmd_sectors,
    }
    return dispatch[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
