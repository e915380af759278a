"""Part factory: id assignment and default placement."""

from __future__ import annotations

import logging
import random
import time
from itertools import count
from typing import Optional, Union

from .errors import MissingField
from .models import (
    DEFAULT_PART_SIZE,
    GrowthRate,
    PartType,
    PlantPart,
    Position,
    SpecialBehavior,
    coerce_enum,
    finite_float,
)

logger = logging.getLogger(__name__)

# Default placement region, in canvas pixels.
PLACEMENT_MIN = 100.0
PLACEMENT_SPAN = 200.0

PALETTE = (
    "#22c55e",
    "#10b981",
    "#84cc16",
    "#eab308",
    "#f97316",
    "#ef4444",
    "#8b5cf6",
    "#06b6d4",
)

DEFAULT_SELECTION = {
    "type": PartType.TRUNK,
    "color": PALETTE[0],
    "growth_rate": GrowthRate.NORMAL,
    "special": SpecialBehavior.UPRIGHT,
}

_id_counter = count(1)


def _next_id(prefix: str) -> str:
    return f"{prefix}-{int(time.time() * 1000)}-{next(_id_counter)}"


def next_part_id() -> str:
    return _next_id("part")


def next_plant_id() -> str:
    return _next_id("plant")


def random_position(rng: Optional[random.Random] = None) -> Position:
    """Pick a position inside the visible canvas region."""

    rng = rng or random
    return Position(
        x=PLACEMENT_MIN + rng.random() * PLACEMENT_SPAN,
        y=PLACEMENT_MIN + rng.random() * PLACEMENT_SPAN,
    )


def _coerce_position(position: object) -> Position:
    if isinstance(position, Position):
        x, y = position.x, position.y
    elif isinstance(position, dict):
        x, y = position.get("x"), position.get("y")
    elif isinstance(position, (tuple, list)) and len(position) == 2:
        x, y = position
    else:
        raise MissingField("expected an {x, y} coordinate pair", "position")
    fx, fy = finite_float(x), finite_float(y)
    if fx is None or fy is None:
        raise MissingField("coordinates must be finite numbers", "position")
    return Position(x=fx, y=fy)


def create_part(
    type: Union[PartType, str],
    color: str,
    growth_rate: Union[GrowthRate, str, None] = None,
    special: Union[SpecialBehavior, str, None] = None,
    position: object = None,
    *,
    rng: Optional[random.Random] = None,
) -> PlantPart:
    """Build a new part with a fresh id and the default size.

    Raw strings are coerced into the closed vocabularies, so values coming from
    a UI are re-validated here. When ``position`` is omitted a random position
    inside the default placement region is used.
    """

    part_type = coerce_enum(PartType, type, "type")
    if not isinstance(color, str) or not color.strip():
        raise MissingField("color is required", "color")
    rate = GrowthRate.NORMAL if growth_rate is None else coerce_enum(GrowthRate, growth_rate, "growthRate")
    behavior = None if special is None else coerce_enum(SpecialBehavior, special, "special")
    placed = random_position(rng) if position is None else _coerce_position(position)

    part = PlantPart(
        id=next_part_id(),
        type=part_type,
        color=color.strip(),
        size=DEFAULT_PART_SIZE,
        position=placed,
        growth_rate=rate,
        special=behavior,
    )
    logger.debug("Created %s part %s at (%.1f, %.1f)", part.type.value, part.id, placed.x, placed.y)
    return part
