"""Decode and validate untrusted plant structures from the generator.

Nothing produced by the structured generator is trusted: field presence, field
types and enumeration membership are all checked here before any value is
turned into a ``PlantPart``. Source ids are discarded and replaced with locally
assigned ones so that the no-duplicate-id invariant always holds.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from .errors import MissingField, OutOfRange
from .models import (
    DEFAULT_SIZE_CEILING,
    Environment,
    GrowthRate,
    PartType,
    PlantData,
    PlantPart,
    Position,
    SpecialBehavior,
    coerce_enum,
    finite_float,
    is_number,
)
from .parts import next_part_id, next_plant_id


def _require(raw: Mapping[str, Any], key: str, location: str) -> Any:
    value = raw.get(key)
    if value is None:
        raise MissingField("field is required", f"{location}.{key}" if location else key)
    return value


def _require_string(raw: Mapping[str, Any], key: str, location: str) -> str:
    value = _require(raw, key, location)
    if not isinstance(value, str):
        raise MissingField(f"expected a string, got {type(value).__name__}", f"{location}.{key}" if location else key)
    return value


def _decode_position(raw: Any, location: str) -> Position:
    if not isinstance(raw, Mapping):
        raise MissingField("expected an object with x and y", location)
    x, y = raw.get("x"), raw.get("y")
    fx, fy = finite_float(x), finite_float(y)
    if fx is None or fy is None:
        raise MissingField("both x and y must be finite numbers", location)
    return Position(x=fx, y=fy)


def _decode_size(raw: Any, location: str, ceiling: float) -> float:
    if not is_number(raw):
        raise MissingField(f"expected a number, got {type(raw).__name__}", location)
    size = finite_float(raw)
    if size is None or size <= 0:
        raise OutOfRange("size must be a positive finite number", location)
    return min(size, ceiling)


def validate_part(raw: Any, location: str = "part", *, size_ceiling: float = DEFAULT_SIZE_CEILING) -> PlantPart:
    if not isinstance(raw, Mapping):
        raise MissingField("expected an object", location)

    part_type = coerce_enum(PartType, _require_string(raw, "type", location), f"{location}.type")
    color = _require_string(raw, "color", location)
    if not color.strip():
        raise MissingField("color must not be empty", f"{location}.color")
    size = _decode_size(_require(raw, "size", location), f"{location}.size", size_ceiling)
    position = _decode_position(_require(raw, "position", location), f"{location}.position")

    raw_rate = raw.get("growthRate")
    growth_rate = GrowthRate.NORMAL if raw_rate is None else coerce_enum(GrowthRate, raw_rate, f"{location}.growthRate")
    raw_special = raw.get("special")
    special = None if raw_special is None else coerce_enum(SpecialBehavior, raw_special, f"{location}.special")

    return PlantPart(
        id=next_part_id(),
        type=part_type,
        color=color.strip(),
        size=size,
        position=position,
        growth_rate=growth_rate,
        special=special,
    )


def validate_plant(
    raw: Any,
    environment: Optional[Environment] = None,
    *,
    size_ceiling: float = DEFAULT_SIZE_CEILING,
) -> PlantData:
    """Turn an untrusted plant-shaped mapping into a normalized ``PlantData``."""

    if not isinstance(raw, Mapping):
        raise MissingField("expected a plant object", "plant")
    name = _require_string(raw, "name", "plant")
    description = _require_string(raw, "description", "plant")
    raw_parts = _require(raw, "parts", "plant")
    if not isinstance(raw_parts, list):
        raise MissingField("expected a list of parts", "plant.parts")

    parts = tuple(
        validate_part(item, f"plant.parts[{index}]", size_ceiling=size_ceiling)
        for index, item in enumerate(raw_parts)
    )
    return PlantData(
        id=next_plant_id(),
        name=name,
        description=description,
        parts=parts,
        environment=environment or Environment(),
    )


def decode_generation_response(response: Any) -> Mapping[str, Any]:
    """Unwrap ``{"object": {"plant": {...}}}`` as returned by the generator."""

    if not isinstance(response, Mapping):
        raise MissingField("expected a response object", "response")
    payload = response.get("object")
    if not isinstance(payload, Mapping):
        raise MissingField("response carries no object", "object")
    plant = payload.get("plant")
    if not isinstance(plant, Mapping):
        raise MissingField("object carries no plant", "object.plant")
    return plant
