"""Ingredient domain models."""

from dataclasses import dataclass
from enum import StrEnum


class IngredientSource(StrEnum):
    """Tier that produced an ingredient record."""

    CACHE = "cache"
    CURATED = "curated"
    EXTERNAL = "external"
    AI = "ai"
    HEURISTIC = "heuristic"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class IngredientRecord:
    """Resolved nutritional and safety metadata for one ingredient."""

    name: str
    source: IngredientSource
    nutrition_score: int | None = None
    additive_class: str | None = None
    explanation: str | None = None

    def __post_init__(self) -> None:
        if self.nutrition_score is not None and not 0 <= self.nutrition_score <= 100:
            raise ValueError(
                f"nutrition_score must be within 0-100, got {self.nutrition_score}"
            )

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-ready representation."""
        return {
            "name": self.name,
            "source": self.source.value,
            "nutrition_score": self.nutrition_score,
            "additive_class": self.additive_class,
            "explanation": self.explanation,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, object]) -> "IngredientRecord":
        """Build a record from its JSON representation."""
        score = payload.get("nutrition_score")
        return cls(
            name=str(payload["name"]),
            source=IngredientSource(payload.get("source", IngredientSource.CACHE)),
            nutrition_score=int(score) if score is not None else None,
            additive_class=payload.get("additive_class"),
            explanation=payload.get("explanation"),
        )


def normalize_ingredient_name(name: str) -> str:
    """Trim and lowercase an ingredient name."""
    return name.strip().lower()
