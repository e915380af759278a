"""Caller-side state around the plant aggregate.

``PlantWorkspace`` holds the current plant, the environment selected for new
plants, and the bookkeeping for the single in-flight generation request.
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Optional

from . import aggregate
from .config import Settings
from .errors import GenerationFailed, GenerationInProgress
from .generation import StructuredGenerator, generate_plant
from .models import Environment, PlantData, PlantPart
from .parts import create_part
from .simulation import simulate

logger = logging.getLogger(__name__)


class PlantWorkspace:
    def __init__(
        self,
        generator: Optional[StructuredGenerator] = None,
        *,
        size_ceiling: Optional[float] = None,
        environment: Optional[Environment] = None,
        rng: Optional[random.Random] = None,
    ):
        self.generator = generator
        self.size_ceiling = size_ceiling if size_ceiling is not None else Settings().size_ceiling
        self.environment = environment or Environment()
        self.plant: Optional[PlantData] = None
        self._rng = rng
        self._generating = False
        self._sequence = 0

    @property
    def is_generating(self) -> bool:
        return self._generating

    def reset(self) -> None:
        self.plant = None
        # Invalidates any response still in flight.
        self._sequence += 1
        logger.info("Workspace reset")

    def add_part(
        self,
        type,
        color: str,
        growth_rate=None,
        special=None,
        position=None,
    ) -> PlantPart:
        """Create a part and append it, creating an empty plant on first use."""

        part = create_part(type, color, growth_rate, special, position, rng=self._rng)
        plant = self.plant or aggregate.create_empty(environment=self.environment)
        self.plant = aggregate.append_part(plant, part)
        return part

    def set_environment(self, field: str, value: float) -> Environment:
        environment = self.environment.with_value(field, value)
        if self.plant is not None:
            self.plant = aggregate.set_environment(self.plant, field, value)
        self.environment = environment
        return environment

    def simulate(self, ticks: int = 1) -> Optional[PlantData]:
        if self.plant is not None:
            self.plant = simulate(self.plant, ticks, ceiling=self.size_ceiling)
        return self.plant

    async def generate(self, description: str) -> PlantData:
        if self._generating:
            raise GenerationInProgress("a plant is already being generated")

        self._sequence += 1
        sequence = self._sequence
        self._generating = True
        try:
            plant = await generate_plant(
                description,
                self.generator,
                environment=self.environment,
                size_ceiling=self.size_ceiling,
            )
        finally:
            self._generating = False

        if sequence != self._sequence:
            logger.warning("Discarding superseded generation response #%d", sequence)
            raise GenerationFailed("generation superseded by a newer request")
        # The environment may have changed while the request was in flight.
        plant = replace(plant, environment=self.environment)
        self.plant = plant
        return plant
