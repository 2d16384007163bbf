"""Plain-English ingredient explanations from an LLM."""

import re
from dataclasses import dataclass
from typing import Protocol

from snack_check.domain.explanations import IngredientExplanation
from snack_check.domain.ingredients import IngredientRecord, IngredientSource

EXPLANATION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "explanation": {"type": "string"},
        "health_impact": {
            "type": "string",
            "enum": ["positive", "neutral", "negative"],
        },
        "common_uses": {"type": "array", "items": {"type": "string"}},
    },
    "required": ["explanation", "health_impact", "common_uses"],
    "additionalProperties": False,
}

IMPACT_SCORES = {"positive": 85, "neutral": 55, "negative": 35}

_ADDITIVE_HINT = re.compile(
    r"acid|preservative|colou?r|dye|emulsifier|stabilizer|artificial", re.IGNORECASE
)


class ExplanationClient(Protocol):
    """Interface for LLM explanation requests."""

    async def explain(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured explanation data."""


@dataclass
class IngredientExplanationService:
    """Builds explanation prompts and converts results into records."""

    client: ExplanationClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def explain(self, name: str) -> IngredientRecord:
        """Explain a normalized ingredient name via the configured client."""
        raw = await self.client.explain(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            schema=EXPLANATION_SCHEMA,
            prompt=build_prompt(name),
        )
        result = IngredientExplanation.model_validate(raw)
        return IngredientRecord(
            name=name,
            source=IngredientSource.AI,
            nutrition_score=IMPACT_SCORES[result.health_impact],
            explanation=result.explanation,
        )


def build_prompt(name: str) -> str:
    """Build the explanation prompt for an ingredient."""
    if _ADDITIVE_HINT.search(name):
        context = "This appears to be a food additive or preservative."
    else:
        context = "This appears to be a natural food ingredient."
    return (
        f'Explain the food ingredient "{name}" in plain English. {context} '
        "Describe what it is and its purpose in food, whether it is generally "
        "considered safe, any health benefits or concerns, and common uses. "
        "Keep it short, factual and accessible to consumers. Rate its overall "
        "health impact as positive, neutral or negative."
    )
