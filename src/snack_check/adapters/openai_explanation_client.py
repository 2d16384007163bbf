"""OpenAI Responses API client for ingredient explanations."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from snack_check.services.explanations import ExplanationClient

EXPLANATION_INSTRUCTIONS = (
    "You are a nutrition expert who explains food label ingredients to "
    "shoppers. Answer in plain English, avoid jargon, and do not give medical "
    "advice. When evidence about an ingredient is mixed, rate it neutral."
)
EXPLANATION_FORMAT_NAME = "ingredient_explanation"
MAX_OUTPUT_TOKENS = 800


@dataclass
class OpenAIExplanationClient(ExplanationClient):
    """Explains ingredients with a structured-output Responses API call."""

    client: AsyncOpenAI
    instructions: str = EXPLANATION_INSTRUCTIONS
    max_output_tokens: int = MAX_OUTPUT_TOKENS

    @classmethod
    def create(cls, api_key: str) -> "OpenAIExplanationClient":
        """Create an OpenAI explanation client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def explain(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Ask the model for one ingredient explanation matching ``schema``."""
        request_payload: dict[str, object] = {
            "model": model,
            "instructions": self.instructions,
            "input": prompt,
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": EXPLANATION_FORMAT_NAME,
                    "strict": True,
                    "schema": schema,
                }
            },
            "max_output_tokens": self.max_output_tokens,
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        return _parse_explanation(response.output_text)

    async def close(self) -> None:
        """Close the underlying OpenAI client."""
        await self.client.close()


def _parse_explanation(output_text: str | None) -> dict[str, object]:
    if not output_text:
        raise RuntimeError("OpenAI returned an empty explanation")
    try:
        parsed = json.loads(output_text)
    except json.JSONDecodeError as exc:
        # Truncated output when max_output_tokens is hit.
        raise RuntimeError("OpenAI returned an unparseable explanation") from exc
    if not isinstance(parsed, dict):
        raise RuntimeError("OpenAI explanation is not a JSON object")
    return parsed
