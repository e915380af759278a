"""Core structural primitives for the plant builder."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from math import isfinite
from numbers import Real
from typing import Optional, Type, TypeVar

from .errors import InvalidEnumValue, OutOfRange

DEFAULT_PART_SIZE = 20.0
MINIMAL_SIZE_CEILING = 50.0
EXTENDED_SIZE_CEILING = 80.0
DEFAULT_SIZE_CEILING = EXTENDED_SIZE_CEILING

ENVIRONMENT_FIELDS = ("sunlight", "water", "temperature")
ENVIRONMENT_MIN = 0.0
ENVIRONMENT_MAX = 100.0

E = TypeVar("E", bound=Enum)


class PartType(str, Enum):
    TRUNK = "trunk"
    BRANCH = "branch"
    LEAF = "leaf"
    FLOWER = "flower"
    ROOT = "root"
    VINE = "vine"
    FRUIT = "fruit"
    SEED = "seed"
    THORN = "thorn"
    MOSS = "moss"
    FUNGUS = "fungus"
    BUD = "bud"
    STEM = "stem"
    BULB = "bulb"
    TENDRIL = "tendril"


class GrowthRate(str, Enum):
    SLOW = "slow"
    NORMAL = "normal"
    FAST = "fast"
    RAPID = "rapid"


class SpecialBehavior(str, Enum):
    CLIMBING = "climbing"
    SPREADING = "spreading"
    DROOPING = "drooping"
    UPRIGHT = "upright"
    SPIRAL = "spiral"


def vocabulary(enum_type: Type[Enum]) -> list[str]:
    return [member.value for member in enum_type]


def coerce_enum(enum_type: Type[E], value: object, location: Optional[str] = None) -> E:
    """Map a raw value onto a closed enumeration or raise ``InvalidEnumValue``."""

    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        allowed = ", ".join(vocabulary(enum_type))
        raise InvalidEnumValue(f"{value!r} is not one of: {allowed}", location) from None


def is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def finite_float(value: object) -> Optional[float]:
    """Return ``value`` as a finite float, or None if it is not one."""

    if not is_number(value):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if isfinite(number) else None


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class Environment:
    """Growing conditions, each expressed as a percentage."""

    sunlight: float = 50.0
    water: float = 50.0
    temperature: float = 50.0

    def __post_init__(self) -> None:
        for name in ENVIRONMENT_FIELDS:
            check_percentage(name, getattr(self, name))

    def with_value(self, name: str, value: float) -> "Environment":
        if name not in ENVIRONMENT_FIELDS:
            allowed = ", ".join(ENVIRONMENT_FIELDS)
            raise InvalidEnumValue(f"{name!r} is not one of: {allowed}", "environment")
        return replace(self, **{name: value})


def check_percentage(name: str, value: object) -> None:
    number = finite_float(value)
    if number is None:
        raise OutOfRange(f"{value!r} is not a finite number", f"environment.{name}")
    if not ENVIRONMENT_MIN <= number <= ENVIRONMENT_MAX:
        raise OutOfRange(
            f"{value} is outside [{ENVIRONMENT_MIN:g}, {ENVIRONMENT_MAX:g}]",
            f"environment.{name}",
        )


@dataclass(frozen=True)
class PlantPart:
    """One structural unit of a plant."""

    id: str
    type: PartType
    color: str
    size: float
    position: Position
    growth_rate: GrowthRate = GrowthRate.NORMAL
    special: Optional[SpecialBehavior] = None


@dataclass(frozen=True)
class PlantData:
    """The composite plant: ordered parts plus growing conditions."""

    id: str
    name: str
    description: str
    parts: tuple[PlantPart, ...] = ()
    environment: Environment = field(default_factory=Environment)

    def part_ids(self) -> set[str]:
        return {part.id for part in self.parts}
