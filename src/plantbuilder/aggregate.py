"""Value-returning operations on the plant aggregate.

None of these functions mutate their input; each returns a new ``PlantData``
so that previously handed-out references remain consistent snapshots.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from .errors import DuplicateId
from .models import Environment, PlantData, PlantPart
from .parts import next_plant_id

logger = logging.getLogger(__name__)

CUSTOM_PLANT_NAME = "Custom Plant"
CUSTOM_PLANT_DESCRIPTION = "A manually built plant"


def create_empty(
    name: str = CUSTOM_PLANT_NAME,
    description: str = CUSTOM_PLANT_DESCRIPTION,
    environment: Optional[Environment] = None,
) -> PlantData:
    return PlantData(
        id=next_plant_id(),
        name=name,
        description=description,
        parts=(),
        environment=environment or Environment(),
    )


def replace_with(validated: PlantData) -> PlantData:
    """Return a fresh aggregate carrying the validated content, discarding any prior one."""

    plant = replace(validated, id=next_plant_id(), parts=tuple(validated.parts))
    logger.info("Replaced plant with %r (%d parts)", plant.name, len(plant.parts))
    return plant


def append_part(plant: PlantData, part: PlantPart) -> PlantData:
    if part.id in plant.part_ids():
        raise DuplicateId(f"part {part.id!r} already exists in plant {plant.id!r}")
    logger.debug("Appending %s part %s to plant %s", part.type.value, part.id, plant.id)
    return replace(plant, parts=plant.parts + (part,))


def set_environment(plant: PlantData, field: str, value: float) -> PlantData:
    environment = plant.environment.with_value(field, value)
    return replace(plant, environment=environment)


def find_part(plant: PlantData, part_id: str) -> Optional[PlantPart]:
    return next((part for part in plant.parts if part.id == part_id), None)
