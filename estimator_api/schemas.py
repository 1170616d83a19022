"""
schemas.py – Pydantic models for the estimate API request and response.

Request fields are all optional; an absent (or null) field takes the same
default as the input form.  Numeric fields accept JSON numbers and numeric
strings; anything else, and NaN / Infinity, is rejected with a 422.

Response keys are camelCase to match the dashboard client.
"""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .emission_factors import DEFAULT_SECTOR, DEFAULT_TRANSPORT


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ─────────────────────────────────────────────────────────────
# Request
# ─────────────────────────────────────────────────────────────

class EstimateRequest(BaseModel):
    """Operational inputs posted by the estimator form."""

    model_config = ConfigDict(allow_inf_nan=False)

    hours: float = Field(40, description="Operating hours")
    energy: float = Field(1000, description="Energy use in kWh")
    material: float = Field(500, description="Material use in kg")
    waste: float = Field(50, description="Material waste in kg")
    output: float = Field(100, description="Units produced")
    distance: float = Field(200, description="Transport distance in km")
    sector: str = Field(DEFAULT_SECTOR, description="Business sector; unknown values fall back to Manufacturing")
    transport: str = Field(DEFAULT_TRANSPORT, description="Transport mode; unknown values fall back to truck")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # null behaves like an absent field
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator("sector", mode="before")
    @classmethod
    def _sector_text(cls, value: Any) -> Any:
        # non-text sectors are unrecognised, not invalid
        return value if isinstance(value, str) else DEFAULT_SECTOR

    @field_validator("transport", mode="before")
    @classmethod
    def _transport_text(cls, value: Any) -> Any:
        return value if isinstance(value, str) else DEFAULT_TRANSPORT


# ─────────────────────────────────────────────────────────────
# Response
# ─────────────────────────────────────────────────────────────

class PieSlice(_CamelModel):
    """One emission component, pre-efficiency, rounded to 2 decimals."""

    name: Literal["Energy", "Materials", "Operations", "Transport", "Waste"]
    value: float


class BarPoint(_CamelModel):
    """One projected month."""

    name: str
    emissions: int


class Recommendation(_CamelModel):
    category: Literal["energy", "waste", "transport", "operations"]
    title: str
    description: str
    impact: Literal["low", "medium", "high"]
    saving_potential: int = Field(..., description="Estimated saving in kg CO2")


class Metrics(_CamelModel):
    """Integer percentages; not clamped to 0-100."""

    energy_efficiency: int
    material_efficiency: int
    transport_efficiency: int
    overall_score: int


class EstimateResponse(_CamelModel):
    prediction: float = Field(..., description="Total emission in kg CO2 after the efficiency discount")
    pie_data: list[PieSlice]
    bar_data: list[BarPoint]
    recommendations: list[Recommendation]
    metrics: Metrics


# ─────────────────────────────────────────────────────────────
# Export / reference
# ─────────────────────────────────────────────────────────────

class ExportResults(EstimateResponse):
    timestamp: str = Field(..., description="ISO 8601 UTC time the report was generated")


class ExportReport(_CamelModel):
    """Downloadable report: the inputs used plus the computed results."""

    inputs: EstimateRequest
    results: ExportResults


class ReferenceData(_CamelModel):
    """Selection lists and form defaults."""

    sectors: list[str]
    transport_modes: list[str]
    defaults: EstimateRequest
