"""
recommendations.py – Rule-based reduction advice.

Five independent rules, evaluated in a fixed order.  Every rule that fires
appends exactly one recommendation; the renewable-energy rule always fires.
The output order is part of the API contract.

 Rule                    Trigger                                   Impact
 ─────────────────────────────────────────────────────────────────────────
 Reduce Energy           energy > 800                              high
 Optimize Material       waste > 40                                medium
 Alternative Transport   distance > 150 and mode not train/bike    high
 Optimize Hours          hours > 40 and sector != IT/Software      medium
 Renewable Energy        always                                    high
"""
from __future__ import annotations

import logging

from .calculations import EstimationInput, round_half_up
from .emission_factors import (
    ENERGY_KG_PER_KWH,
    MACHINE_KG_PER_HOUR,
    WASTE_KG_PER_KG,
    get_transport_factor,
    resolve_transport,
)
from .schemas import Recommendation

logger = logging.getLogger(__name__)

ENERGY_THRESHOLD_KWH = 800
WASTE_THRESHOLD_KG = 40
DISTANCE_THRESHOLD_KM = 150
HOURS_THRESHOLD = 40

ENERGY_REDUCTION_SHARE = 0.3
WASTE_REDUCTION_SHARE = 0.4
HOURS_REDUCTION_SHARE = 0.1
RENEWABLE_SHARE = 0.7

LOW_CARBON_MODES = frozenset({"train", "bike"})
TRAIN = "train"
HOURS_EXEMPT_SECTOR = "IT/Software"


def _num(value: float) -> str:
    """Render a number the way a form shows it: 1000, not 1000.0."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return str(value)


def _reduce_energy(inp: EstimationInput) -> Recommendation | None:
    if not inp.energy > ENERGY_THRESHOLD_KWH:
        return None
    saved_kwh = round_half_up(inp.energy * ENERGY_REDUCTION_SHARE)
    return Recommendation(
        category="energy",
        title="Reduce Energy Consumption",
        description=(
            f"Your energy usage of {_num(inp.energy)} kWh is high. Consider energy-efficient "
            f"equipment to save up to {saved_kwh} kWh."
        ),
        impact="high",
        saving_potential=round_half_up(inp.energy * ENERGY_REDUCTION_SHARE * ENERGY_KG_PER_KWH),
    )


def _optimize_material(inp: EstimationInput) -> Recommendation | None:
    if not inp.waste > WASTE_THRESHOLD_KG:
        return None
    return Recommendation(
        category="waste",
        title="Optimize Material Usage",
        description=(
            f"Material waste of {_num(inp.waste)} kg can be reduced by implementing "
            "lean manufacturing principles."
        ),
        impact="medium",
        saving_potential=round_half_up(inp.waste * WASTE_REDUCTION_SHARE * WASTE_KG_PER_KG),
    )


def _alternative_transport(inp: EstimationInput) -> Recommendation | None:
    mode = resolve_transport(inp.transport)
    if not (inp.distance > DISTANCE_THRESHOLD_KM and mode not in LOW_CARBON_MODES):
        return None
    saving = round_half_up(
        inp.distance * (get_transport_factor(mode) - get_transport_factor(TRAIN))
    )
    return Recommendation(
        category="transport",
        title="Consider Alternative Transport",
        description=(
            f"Switching from {mode} to train could reduce emissions by up to "
            f"{saving} kg CO₂."
        ),
        impact="high",
        saving_potential=saving,
    )


def _optimize_hours(inp: EstimationInput) -> Recommendation | None:
    if not (inp.hours > HOURS_THRESHOLD and inp.sector != HOURS_EXEMPT_SECTOR):
        return None
    return Recommendation(
        category="operations",
        title="Optimize Operational Hours",
        description="Consider process optimization to reduce operational hours while maintaining output.",
        impact="medium",
        saving_potential=round_half_up(inp.hours * HOURS_REDUCTION_SHARE * MACHINE_KG_PER_HOUR),
    )


def _renewable_energy(inp: EstimationInput) -> Recommendation:
    saving = round_half_up(inp.energy * ENERGY_KG_PER_KWH * RENEWABLE_SHARE)
    return Recommendation(
        category="energy",
        title="Switch to Renewable Energy",
        description=(
            "Switching to renewable energy sources could reduce emissions by up to "
            f"{saving} kg CO₂."
        ),
        impact="high",
        saving_potential=saving,
    )


RULES = (
    _reduce_energy,
    _optimize_material,
    _alternative_transport,
    _optimize_hours,
    _renewable_energy,
)


def advise(inp: EstimationInput, total: float) -> list[Recommendation]:
    """Evaluate every rule in order and return the recommendations that fired."""
    recommendations = []
    for rule in RULES:
        rec = rule(inp)
        if rec is not None:
            recommendations.append(rec)
    logger.debug(
        "advise total=%.4f fired=%s", total, [r.title for r in recommendations]
    )
    return recommendations
