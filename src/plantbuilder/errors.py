"""Error taxonomy for the plant model, validator and generation pipeline."""

from __future__ import annotations

from typing import Optional


class PlantError(Exception):
    """Base class for every recoverable plant-builder error."""

    kind = "PlantError"


class PlantValidationError(PlantError):
    """Raised when externally sourced plant data fails validation."""

    kind = "ValidationError"

    def __init__(self, message: str, location: Optional[str] = None):
        self.location = location
        if location:
            message = f"{location}: {message}"
        super().__init__(message)


class InvalidEnumValue(PlantValidationError):
    kind = "InvalidEnumValue"


class MissingField(PlantValidationError):
    kind = "MissingField"


class OutOfRange(PlantValidationError):
    """A numeric value lies outside its allowed interval."""

    kind = "OutOfRange"


class DuplicateId(PlantError):
    kind = "DuplicateId"


class EmptyDescription(PlantError):
    kind = "EmptyDescription"


class GenerationFailed(PlantError):
    kind = "GenerationFailed"


class GenerationInProgress(PlantError):
    kind = "GenerationInProgress"


class GeneratorError(Exception):
    """Transport-level failure talking to the structured generator."""
