"""
calculations.py – Emission estimate, monthly projection and efficiency metrics.

Emission formula
────────────────
 Component    Formula
 ─────────────────────────────────────────────────────────────
 Energy       kWh      × 0.82 × sector.energy
 Materials    kg       × 0.01 × sector.material
 Operations   hours    × 0.05 × sector.operation
 Transport    km       × transport_factor(mode)
 Waste        kg       × 0.01 × 1.5

 total = (sum of components) × efficiency_factor(output)

The efficiency discount is applied once, to the sum.  Breakdown slices are
reported *before* the discount, so they add up to ``total / efficiency``
rather than to ``total``.  Display code relies on this; keep it.

Everything here is pure: no I/O, no shared state.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .emission_factors import (
    DEFAULT_SECTOR,
    DEFAULT_TRANSPORT,
    EFFICIENCY_FLOOR,
    EFFICIENCY_OUTPUT_SCALE,
    EFFICIENCY_SLOPE,
    ENERGY_KG_PER_KWH,
    MACHINE_KG_PER_HOUR,
    MATERIAL_KG_PER_KG,
    PROJECTION_MONTHS,
    TRANSPORT_KG_PER_KM,
    WASTE_KG_PER_KG,
    get_seasonal_pattern,
    get_sector_weights,
    get_transport_factor,
)

logger = logging.getLogger(__name__)

# Metric baselines
TRANSPORT_BASELINE_KG_PER_KM: float = TRANSPORT_KG_PER_KM[DEFAULT_TRANSPORT]
OVERALL_BASELINE_KG: float = 2000.0


class EstimationError(ValueError):
    """Inputs led to a non-finite or undefined result."""


# ─────────────────────────────────────────────────────────────────────────────
# Value records
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class EstimationInput:
    """Operational inputs for one estimate.  Defaults mirror the input form."""
    hours: float = 40.0
    energy: float = 1000.0       # kWh
    material: float = 500.0      # kg
    waste: float = 50.0          # kg
    output: float = 100.0        # units
    distance: float = 200.0      # km
    sector: str = DEFAULT_SECTOR
    transport: str = DEFAULT_TRANSPORT


@dataclass(frozen=True)
class EmissionBreakdown:
    """Five emission components in kg CO2."""
    energy: float
    materials: float
    operations: float
    transport: float
    waste: float

    @property
    def subtotal(self) -> float:
        return self.energy + self.materials + self.operations + self.transport + self.waste

    def rounded(self) -> EmissionBreakdown:
        return EmissionBreakdown(
            energy=round_half_up(self.energy, 2),
            materials=round_half_up(self.materials, 2),
            operations=round_half_up(self.operations, 2),
            transport=round_half_up(self.transport, 2),
            waste=round_half_up(self.waste, 2),
        )

    def labelled(self) -> list[tuple[str, float]]:
        """(display name, value) pairs in chart order."""
        return [
            ("Energy", self.energy),
            ("Materials", self.materials),
            ("Operations", self.operations),
            ("Transport", self.transport),
            ("Waste", self.waste),
        ]


@dataclass(frozen=True)
class Estimate:
    total: float
    components: EmissionBreakdown    # pre-efficiency, unrounded
    efficiency: float

    @property
    def breakdown(self) -> EmissionBreakdown:
        """Pre-efficiency components rounded to 2 decimals for display."""
        return self.components.rounded()


@dataclass(frozen=True)
class EfficiencyMetrics:
    """Integer percentages; not clamped, may be negative or above 100."""
    energy_efficiency: int
    material_efficiency: int
    transport_efficiency: int
    overall_score: int


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────

def round_half_up(value: float, ndigits: int = 0):
    """
    Round with ties toward +infinity (2.5 → 3, -2.5 → -2).

    Returns an int when *ndigits* is 0, otherwise a float.  Python's
    built-in round() uses banker's rounding, which would disagree with the
    published figures on exact halves.
    """
    if ndigits == 0:
        return int(math.floor(value + 0.5))
    scale = 10 ** ndigits
    return math.floor(value * scale + 0.5) / scale


def _check_finite(label: str, value: float) -> float:
    if not math.isfinite(value):
        raise EstimationError(f"{label} is not a finite number ({value}); check the inputs.")
    return value


# ─────────────────────────────────────────────────────────────────────────────
# Emission estimator
# ─────────────────────────────────────────────────────────────────────────────

def efficiency_factor(output: float) -> float:
    """Economies-of-scale discount: 1 - 0.3 × output/1000, floored at 0.7."""
    return max(EFFICIENCY_FLOOR, 1 - (output / EFFICIENCY_OUTPUT_SCALE) * EFFICIENCY_SLOPE)


def calc_components(inp: EstimationInput) -> EmissionBreakdown:
    weights = get_sector_weights(inp.sector)
    return EmissionBreakdown(
        energy=inp.energy * ENERGY_KG_PER_KWH * weights.energy,
        materials=inp.material * MATERIAL_KG_PER_KG * weights.material,
        operations=inp.hours * MACHINE_KG_PER_HOUR * weights.operation,
        transport=inp.distance * get_transport_factor(inp.transport),
        waste=inp.waste * WASTE_KG_PER_KG,
    )


def estimate(inp: EstimationInput) -> Estimate:
    """
    Compute the total emission and its component breakdown.

    Negative inputs are not clamped; they propagate through the arithmetic.

    Raises
    ------
    EstimationError
        If any component or the total overflows to a non-finite value.
    """
    components = calc_components(inp)
    for name, value in components.labelled():
        _check_finite(f"{name} emission", value)

    factor = efficiency_factor(inp.output)
    total = _check_finite("Total emission", components.subtotal * factor)

    logger.debug(
        "Estimate sector=%s transport=%s subtotal=%.4f efficiency=%.4f total=%.4f",
        inp.sector, inp.transport, components.subtotal, factor, total,
    )
    return Estimate(total=total, components=components, efficiency=factor)


# ─────────────────────────────────────────────────────────────────────────────
# Projection generator
# ─────────────────────────────────────────────────────────────────────────────

def project(total: float, sector: str) -> list[tuple[str, int]]:
    """Six monthly values: total × seasonal multiplier, rounded to whole kg."""
    _check_finite("Total emission", total)
    pattern = get_seasonal_pattern(sector)
    return [
        (month, round_half_up(_check_finite(f"{month} projection", total * multiplier)))
        for month, multiplier in zip(PROJECTION_MONTHS, pattern)
    ]


# ─────────────────────────────────────────────────────────────────────────────
# Metrics generator
# ─────────────────────────────────────────────────────────────────────────────

def _ratio(label: str, numerator: float, denominator: float) -> float:
    try:
        return _check_finite(label, numerator / denominator)
    except ZeroDivisionError as exc:
        raise EstimationError(f"{label} is undefined (division by zero); check the inputs.") from exc


def _percent(label: str, share: float) -> int:
    return round_half_up(_check_finite(label, (1 - share) * 100))


def calc_metrics(inp: EstimationInput, total: float) -> EfficiencyMetrics:
    """
    Four percentage scores derived from simple ratios.

    The ``+ 1`` in the energy and material denominators keeps zero output or
    zero material from dividing by zero.
    """
    energy_per_unit = _ratio("Energy per output unit", inp.energy, inp.output + 1)
    waste_share = _ratio("Waste to material ratio", inp.waste, inp.material + 1)
    transport_share = get_transport_factor(inp.transport) / TRANSPORT_BASELINE_KG_PER_KM
    overall_share = _check_finite("Total emission", total) / OVERALL_BASELINE_KG

    return EfficiencyMetrics(
        energy_efficiency=_percent("Energy efficiency", energy_per_unit / 10),
        material_efficiency=_percent("Material efficiency", waste_share),
        transport_efficiency=_percent("Transport efficiency", transport_share),
        overall_score=_percent("Overall score", overall_share),
    )
