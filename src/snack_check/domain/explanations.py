"""Models for AI ingredient explanations."""

from typing import Literal

from pydantic import BaseModel


class IngredientExplanation(BaseModel):
    """Structured output for an ingredient explanation."""

    explanation: str
    health_impact: Literal["positive", "neutral", "negative"]
    common_uses: list[str]
