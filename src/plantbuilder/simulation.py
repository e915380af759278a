"""Discrete growth simulation for plant parts."""

from __future__ import annotations

import logging
from dataclasses import replace

from .errors import OutOfRange
from .models import DEFAULT_SIZE_CEILING, GrowthRate, PartType, PlantData, PlantPart

logger = logging.getLogger(__name__)

GROWTH_MULTIPLIERS: dict[GrowthRate, float] = {
    GrowthRate.SLOW: 1.1,
    GrowthRate.NORMAL: 1.2,
    GrowthRate.FAST: 1.4,
    GrowthRate.RAPID: 1.8,
}
DEFAULT_MULTIPLIER = GROWTH_MULTIPLIERS[GrowthRate.NORMAL]

# Climbing structures get an extra boost per tick.
CLIMBER_TYPES = frozenset({PartType.VINE, PartType.TENDRIL})
CLIMBER_BONUS = 1.3


def growth_multiplier(part: PlantPart) -> float:
    multiplier = GROWTH_MULTIPLIERS.get(part.growth_rate, DEFAULT_MULTIPLIER)
    if part.type in CLIMBER_TYPES:
        multiplier *= CLIMBER_BONUS
    return multiplier


def _check_ceiling(ceiling: float) -> None:
    if ceiling <= 0:
        raise OutOfRange(f"size ceiling must be positive, got {ceiling}", "ceiling")


def _grow_part(part: PlantPart, ceiling: float) -> PlantPart:
    grown = min(part.size * growth_multiplier(part), ceiling)
    # A part that already sits above the ceiling keeps its size.
    return replace(part, size=max(part.size, grown))


def advance(plant: PlantData, *, ceiling: float = DEFAULT_SIZE_CEILING) -> PlantData:
    """Run a single tick: every part grows by its multiplier, capped at ``ceiling``."""

    _check_ceiling(ceiling)
    parts = tuple(_grow_part(part, ceiling) for part in plant.parts)
    logger.debug(
        "Advanced plant %s: %d parts, %d saturated",
        plant.id,
        len(parts),
        sum(1 for part in parts if part.size >= ceiling),
    )
    return replace(plant, parts=parts)


def simulate(plant: PlantData, ticks: int, *, ceiling: float = DEFAULT_SIZE_CEILING) -> PlantData:
    if ticks < 1:
        raise OutOfRange(f"ticks must be at least 1, got {ticks}", "ticks")
    _check_ceiling(ceiling)
    for _ in range(ticks):
        plant = advance(plant, ceiling=ceiling)
    return plant


def is_saturated(plant: PlantData, *, ceiling: float = DEFAULT_SIZE_CEILING) -> bool:
    return all(part.size >= ceiling for part in plant.parts)
