"""Domain models for cooking-context adjustments."""

from dataclasses import dataclass
from enum import StrEnum


class Scenario(StrEnum):
    """Where the meal was prepared."""

    HOME = "home"
    RESTAURANT = "restaurant"
    CANTEEN = "canteen"


class Taste(StrEnum):
    """How heavily the meal was seasoned."""

    LIGHT = "light"
    NORMAL = "normal"
    HEAVY = "heavy"


class Portion(StrEnum):
    """Relative portion size."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


@dataclass(frozen=True)
class AdjustmentSettings:
    """User-selected cooking context for a meal."""

    scenario: Scenario = Scenario.HOME
    taste: Taste = Taste.NORMAL
    portion: Portion = Portion.MEDIUM


@dataclass(frozen=True)
class AdjustmentCoefficients:
    """Multipliers derived from adjustment settings."""

    scenario: float
    taste: float
    portion: float


DEFAULT_ADJUSTMENT_SETTINGS = AdjustmentSettings()
