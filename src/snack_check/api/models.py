"""Request and response models for the HTTP API."""

from pydantic import BaseModel, Field

from snack_check.domain.ingredients import IngredientRecord
from snack_check.domain.scan import ScanResult
from snack_check.domain.scoring import HealthScore


class ScanRequest(BaseModel):
    """Recognized label text submitted for scoring."""

    text: str
    confidence: float | None = Field(default=None, ge=0.0, le=100.0)


class ResolveRequest(BaseModel):
    """Single ingredient name to resolve."""

    name: str


class IngredientModel(BaseModel):
    """Resolved ingredient as returned by the API."""

    name: str
    source: str
    nutrition_score: int | None = None
    additive_class: str | None = None
    explanation: str | None = None

    @classmethod
    def from_record(cls, record: IngredientRecord) -> "IngredientModel":
        return cls.model_validate(record.to_dict())


class ScoreFactorModel(BaseModel):
    """Single scoring factor."""

    ingredient: str
    impact: int
    reason: str


class HealthScoreModel(BaseModel):
    """Overall health score."""

    overall: int = Field(ge=0, le=100)
    color: str
    factors: list[ScoreFactorModel]

    @classmethod
    def from_score(cls, score: HealthScore) -> "HealthScoreModel":
        return cls(
            overall=score.overall,
            color=score.color.value,
            factors=[
                ScoreFactorModel(
                    ingredient=factor.ingredient,
                    impact=factor.impact,
                    reason=factor.reason,
                )
                for factor in score.factors
            ],
        )


class ScanResponse(BaseModel):
    """Scored scan with the resolved ingredients."""

    confidence: float | None
    ingredient_names: list[str]
    ingredients: list[IngredientModel]
    health_score: HealthScoreModel

    @classmethod
    def from_result(cls, result: ScanResult) -> "ScanResponse":
        return cls(
            confidence=result.confidence,
            ingredient_names=result.ingredient_names,
            ingredients=[IngredientModel.from_record(r) for r in result.ingredients],
            health_score=HealthScoreModel.from_score(result.health_score),
        )
