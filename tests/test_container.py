"""Tests for container wiring."""

import asyncio

from snack_check.config import Settings
from snack_check.containers import build_container
from snack_check.domain.ingredients import IngredientSource


def test_build_container_creates_services(settings: Settings) -> None:
    container = build_container(settings)

    assert container.scan_service.resolver is container.resolver
    assert container.resolver.cache is container.cache
    assert container.resolver.explanation_service is None
    sources = [tier.source for tier in container.resolver.tiers()]
    assert sources == [
        IngredientSource.CACHE,
        IngredientSource.CURATED,
        IngredientSource.EXTERNAL,
        IngredientSource.HEURISTIC,
    ]
    asyncio.run(container.close_resources())


def test_build_container_enables_ai_tier_with_key(settings: Settings) -> None:
    container = build_container(settings.model_copy(update={"openai_api_key": "sk"}))

    assert container.resolver.explanation_service is not None
    assert IngredientSource.AI in [t.source for t in container.resolver.tiers()]
    asyncio.run(container.close_resources())
