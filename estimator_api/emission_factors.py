"""
emission_factors.py – Fixed emission factors and sector profiles.

All factor values are kg CO2 per unit.  Tables are wrapped in
MappingProxyType so they stay read-only for the life of the process.

Lookups go through the helpers at the bottom of the module; each one
substitutes the Manufacturing / truck default explicitly when the key is
not recognised.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, NamedTuple

# ─── Per-unit factors ──────────────────────────────────────────────────────
ENERGY_KG_PER_KWH: float = 0.82
MATERIAL_KG_PER_KG: float = 0.01
MACHINE_KG_PER_HOUR: float = 0.05
WASTE_MULTIPLIER: float = 1.5          # waste is weighted above raw material
WASTE_KG_PER_KG: float = MATERIAL_KG_PER_KG * WASTE_MULTIPLIER

# Efficiency discount: 30% per 1000 output units, never below 0.7
EFFICIENCY_SLOPE: float = 0.3
EFFICIENCY_OUTPUT_SCALE: float = 1000.0
EFFICIENCY_FLOOR: float = 0.7

# ─── Transport (kg CO2 / km) ───────────────────────────────────────────────
DEFAULT_TRANSPORT = "truck"

TRANSPORT_KG_PER_KM: Mapping[str, float] = MappingProxyType({
    "truck":    0.21,
    "car":      0.18,
    "train":    0.04,
    "airplane": 0.15,
    "bike":     0.0,
    "ship":     0.09,
})

# ─── Sector profiles ───────────────────────────────────────────────────────
DEFAULT_SECTOR = "Manufacturing"


class SectorWeights(NamedTuple):
    energy: float
    material: float
    operation: float


SECTOR_WEIGHTS: Mapping[str, SectorWeights] = MappingProxyType({
    "Manufacturing":   SectorWeights(energy=1.0, material=1.0, operation=1.0),
    "Retail":          SectorWeights(energy=0.6, material=0.4, operation=0.5),
    "Logistics":       SectorWeights(energy=0.9, material=0.7, operation=1.2),
    "IT/Software":     SectorWeights(energy=0.4, material=0.2, operation=0.5),
    "Healthcare":      SectorWeights(energy=0.8, material=0.7, operation=0.9),
    "Hospitality":     SectorWeights(energy=0.7, material=0.6, operation=0.8),
    "Food & Beverage": SectorWeights(energy=0.9, material=1.1, operation=1.0),
})

# ─── Six-month seasonal multipliers ────────────────────────────────────────
PROJECTION_MONTHS: tuple[str, ...] = ("Jan", "Feb", "Mar", "Apr", "May", "Jun")

_STEADY_GROWTH = (1.0, 1.05, 1.1, 1.15, 1.2, 1.25)

SEASONAL_PATTERNS: Mapping[str, tuple[float, ...]] = MappingProxyType({
    "Manufacturing":   _STEADY_GROWTH,
    "Retail":          (1.2, 1.0, 0.9, 0.95, 1.0, 1.1),
    "Logistics":       _STEADY_GROWTH,
    "IT/Software":     (1.0, 1.0, 1.0, 1.05, 1.05, 1.1),
    "Healthcare":      (1.1, 1.05, 1.0, 1.0, 1.05, 1.1),
    "Hospitality":     (0.9, 0.95, 1.0, 1.1, 1.2, 1.3),
    "Food & Beverage": _STEADY_GROWTH,
})

# Selection lists in display order
SECTORS: tuple[str, ...] = tuple(SECTOR_WEIGHTS)
TRANSPORT_MODES: tuple[str, ...] = tuple(TRANSPORT_KG_PER_KM)


# ─── Lookups ───────────────────────────────────────────────────────────────

def resolve_sector(sector: str | None) -> str:
    """Return *sector* if it is a known sector, else the default sector."""
    if sector in SECTOR_WEIGHTS:
        return sector
    return DEFAULT_SECTOR


def resolve_transport(mode: str | None) -> str:
    """Return *mode* if it is a known transport mode, else ``"truck"``."""
    if mode in TRANSPORT_KG_PER_KM:
        return mode
    return DEFAULT_TRANSPORT


def get_sector_weights(sector: str | None) -> SectorWeights:
    return SECTOR_WEIGHTS[resolve_sector(sector)]


def get_transport_factor(mode: str | None) -> float:
    """kg CO2 per km for *mode*; bike's 0.0 is a real value, not a miss."""
    return TRANSPORT_KG_PER_KM[resolve_transport(mode)]


def get_seasonal_pattern(sector: str | None) -> tuple[float, ...]:
    return SEASONAL_PATTERNS[resolve_sector(sector)]
