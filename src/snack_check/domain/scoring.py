"""Health scoring domain models."""

from dataclasses import dataclass, field
from enum import StrEnum


class ScoreColor(StrEnum):
    """Traffic-light band for an overall score."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


@dataclass(frozen=True)
class ScoreFactor:
    """Single signed contribution to the health score."""

    ingredient: str
    impact: int
    reason: str


@dataclass(frozen=True)
class HealthScore:
    """Clamped overall score with the factors that produced it."""

    overall: int
    color: ScoreColor
    factors: list[ScoreFactor] = field(default_factory=list)
