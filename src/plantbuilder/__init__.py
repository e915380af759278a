"""Plant builder: composite plant model, part placement and growth simulation."""

from .aggregate import append_part, create_empty, find_part, replace_with, set_environment
from .errors import (
    DuplicateId,
    EmptyDescription,
    GenerationFailed,
    GenerationInProgress,
    GeneratorError,
    InvalidEnumValue,
    MissingField,
    OutOfRange,
    PlantError,
    PlantValidationError,
)
from .generation import PLANT_SCHEMA, HttpStructuredGenerator, build_generation_prompt, generate_plant
from .models import (
    DEFAULT_PART_SIZE,
    DEFAULT_SIZE_CEILING,
    EXTENDED_SIZE_CEILING,
    MINIMAL_SIZE_CEILING,
    Environment,
    GrowthRate,
    PartType,
    PlantData,
    PlantPart,
    Position,
    SpecialBehavior,
)
from .parts import DEFAULT_SELECTION, PALETTE, create_part, next_part_id, next_plant_id
from .serialization import part_to_dict, plant_to_dict
from .simulation import advance, growth_multiplier, is_saturated, simulate
from .validation import decode_generation_response, validate_plant
from .workspace import PlantWorkspace

__all__ = [
    "DEFAULT_PART_SIZE",
    "DEFAULT_SELECTION",
    "DEFAULT_SIZE_CEILING",
    "DuplicateId",
    "EXTENDED_SIZE_CEILING",
    "EmptyDescription",
    "Environment",
    "GenerationFailed",
    "GenerationInProgress",
    "GeneratorError",
    "GrowthRate",
    "HttpStructuredGenerator",
    "InvalidEnumValue",
    "MINIMAL_SIZE_CEILING",
    "MissingField",
    "OutOfRange",
    "PALETTE",
    "PLANT_SCHEMA",
    "PartType",
    "PlantData",
    "PlantError",
    "PlantPart",
    "PlantValidationError",
    "PlantWorkspace",
    "Position",
    "SpecialBehavior",
    "advance",
    "append_part",
    "build_generation_prompt",
    "create_empty",
    "create_part",
    "decode_generation_response",
    "find_part",
    "generate_plant",
    "growth_multiplier",
    "is_saturated",
    "next_part_id",
    "next_plant_id",
    "part_to_dict",
    "plant_to_dict",
    "replace_with",
    "set_environment",
    "simulate",
    "validate_plant",
]
