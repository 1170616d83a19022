"""
service.py – Callable estimate / export logic behind the API and the CLI.

Flow: request → EstimationInput → estimate() → {project, calc_metrics, advise}
→ EstimateResponse.  The three derivations only read the estimate, so their
order does not matter.
"""
from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime, timezone

from .calculations import (
    EstimationError,
    EstimationInput,
    calc_metrics,
    estimate,
    project,
)
from .emission_factors import SECTORS, TRANSPORT_MODES, resolve_sector, resolve_transport
from .recommendations import advise
from .schemas import (
    BarPoint,
    EstimateRequest,
    EstimateResponse,
    ExportReport,
    ExportResults,
    Metrics,
    PieSlice,
    ReferenceData,
)

log = logging.getLogger(__name__)

__all__ = [
    "EstimationError",
    "build_export_report",
    "export_filename",
    "reference_data",
    "run_estimate",
    "to_input",
]


def to_input(request: EstimateRequest) -> EstimationInput:
    """Build the calculation input, swapping unknown sector / transport for the defaults."""
    sector = resolve_sector(request.sector)
    if sector != request.sector:
        log.info("Unrecognised sector %r; using %s", request.sector, sector)
    transport = resolve_transport(request.transport)
    if transport != request.transport:
        log.info("Unrecognised transport mode %r; using %s", request.transport, transport)

    return EstimationInput(
        hours=request.hours,
        energy=request.energy,
        material=request.material,
        waste=request.waste,
        output=request.output,
        distance=request.distance,
        sector=sector,
        transport=transport,
    )


def run_estimate(request: EstimateRequest) -> EstimateResponse:
    """
    Compute the full estimate payload for one request.

    Raises
    ------
    EstimationError
        If the inputs drive any figure to infinity or NaN.
    """
    inp = to_input(request)
    result = estimate(inp)

    response = EstimateResponse(
        prediction=result.total,
        pie_data=[PieSlice(name=name, value=value) for name, value in result.breakdown.labelled()],
        bar_data=[BarPoint(name=month, emissions=value) for month, value in project(result.total, inp.sector)],
        recommendations=advise(inp, result.total),
        metrics=Metrics(**asdict(calc_metrics(inp, result.total))),
    )
    log.debug(
        "Estimated %.4f kg CO2 for sector=%s transport=%s (%d recommendations)",
        result.total, inp.sector, inp.transport, len(response.recommendations),
    )
    return response


def build_export_report(request: EstimateRequest, now: datetime | None = None) -> ExportReport:
    """Recompute the estimate and wrap it with the inputs and a UTC timestamp."""
    now = now or datetime.now(timezone.utc)
    response = run_estimate(request)
    return ExportReport(
        inputs=request,
        results=ExportResults(**response.model_dump(), timestamp=now.isoformat()),
    )


def export_filename(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"co2-emissions-report-{now.date().isoformat()}.json"


def reference_data() -> ReferenceData:
    return ReferenceData(
        sectors=list(SECTORS),
        transport_modes=list(TRANSPORT_MODES),
        defaults=EstimateRequest(),
    )
