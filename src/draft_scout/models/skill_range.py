"""Bounded estimates of hidden values."""

from dataclasses import dataclass
from enum import Enum


class ConfidenceLevel(str, Enum):
    """Qualitative confidence attached to ranges and reports."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class SkillRange:
    """An estimate of a hidden value, never the value itself.

    Used on the 1-100 attribute scale and on the 1-7 draft round scale.
    """

    min: int
    max: int
    confidence: ConfidenceLevel = ConfidenceLevel.LOW

    @property
    def width(self) -> int:
        return self.max - self.min

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def is_within(self, low: int, high: int) -> bool:
        """True when the range is well formed and lies inside [low, high]."""
        return low <= self.min <= self.max <= high

    def __str__(self) -> str:
        if self.min == self.max:
            return str(self.min)
        return f"{self.min}-{self.max}"
