"""Serialization helpers for API and rendering clients."""

from __future__ import annotations

from typing import Optional

from .models import Environment, PlantData, PlantPart


def part_to_dict(part: PlantPart) -> dict[str, object]:
    return {
        "id": part.id,
        "type": part.type.value,
        "color": part.color,
        "size": part.size,
        "position": {"x": part.position.x, "y": part.position.y},
        "growthRate": part.growth_rate.value,
        "special": part.special.value if part.special else None,
    }


def environment_to_dict(environment: Environment) -> dict[str, float]:
    return {
        "sunlight": environment.sunlight,
        "water": environment.water,
        "temperature": environment.temperature,
    }


def plant_to_dict(plant: Optional[PlantData]) -> Optional[dict[str, object]]:
    if plant is None:
        return None
    return {
        "id": plant.id,
        "name": plant.name,
        "description": plant.description,
        "parts": [part_to_dict(part) for part in plant.parts],
        "environment": environment_to_dict(plant.environment),
    }
