"""
main.py – FastAPI service for the CO2 emission estimator.

Start:
    cd /path/to/repo
    uvicorn estimator_api.main:app --reload --port 8000

Routes
------
POST /api/estimate    → prediction, pieData, barData, recommendations, metrics
POST /api/export      → same result wrapped with inputs + timestamp, as a download
GET  /api/reference   → sector / transport lists and form defaults
GET  /health          → liveness
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware

from .config import get_config
from .schemas import EstimateRequest, EstimateResponse, ExportReport, ReferenceData
from .service import (
    EstimationError,
    build_export_report,
    export_filename,
    reference_data,
    run_estimate,
)

config = get_config()

logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s  %(levelname)-8s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger(__name__)

app = FastAPI(
    title="CO2 Emission Estimator API",
    version="1.0.0",
    description="Estimates business carbon emissions from operational inputs.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.post("/api/estimate", response_model=EstimateResponse, summary="Estimate emissions")
async def api_estimate(body: EstimateRequest | None = None):
    """
    Compute total emissions, the component breakdown, a six-month projection,
    efficiency metrics and recommendations.  Every field is optional.
    """
    body = body or EstimateRequest()
    try:
        result = run_estimate(body)
    except EstimationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except Exception as exc:
        log.exception("Estimate failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    if config.response_delay_ms:
        await asyncio.sleep(config.response_delay_seconds)
    return result


@app.post("/api/export", response_model=ExportReport, summary="Download an emissions report")
def api_export(response: Response, body: EstimateRequest | None = None):
    """
    Recompute the estimate and return it with the inputs and a UTC timestamp,
    served as a JSON attachment.
    """
    body = body or EstimateRequest()
    now = datetime.now(timezone.utc)
    try:
        report = build_export_report(body, now=now)
    except EstimationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except Exception as exc:
        log.exception("Export failed")
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    response.headers["Content-Disposition"] = f'attachment; filename="{export_filename(now)}"'
    return report


@app.get("/api/reference", response_model=ReferenceData, summary="Sectors, transport modes and defaults")
def api_reference():
    return reference_data()


@app.get("/health")
def health():
    return {"status": "ok"}
