"""Scan pipeline domain models."""

from dataclasses import dataclass

from snack_check.domain.ingredients import IngredientRecord
from snack_check.domain.scoring import HealthScore


@dataclass(frozen=True)
class ScanResult:
    """Outcome of scoring one recognized label."""

    text: str
    confidence: float | None
    ingredient_names: list[str]
    ingredients: list[IngredientRecord]
    health_score: HealthScore
