"""Tests for the end-to-end scan pipeline."""

import asyncio

from snack_check.domain.ingredients import IngredientSource
from snack_check.domain.scoring import ScoreColor
from snack_check.services.cache import ResolutionCache
from snack_check.services.resolver import TieredIngredientResolver
from snack_check.services.scan import ScanService
from tests.conftest import FailingOpenFoodFactsClient, InMemoryCacheMirror


def test_scan_scores_label_text(offline_resolver: TieredIngredientResolver) -> None:
    service = ScanService(resolver=offline_resolver)

    result = asyncio.run(
        service.scan(
            "INGREDIENTS: Whole Grain Oats, Sugar, Salt, Natural Flavor.", 91.5
        )
    )

    assert result.ingredient_names == [
        "whole grain oats",
        "sugar",
        "salt",
        "natural flavor",
    ]
    assert [record.name for record in result.ingredients] == result.ingredient_names
    assert result.confidence == 91.5
    # whole grain oats: natural +2, whole grain +5; salt -10; natural flavor +2
    assert result.health_score.overall == 99
    assert result.health_score.color == ScoreColor.GREEN


def test_scan_without_ingredients_is_neutral(
    offline_resolver: TieredIngredientResolver,
) -> None:
    service = ScanService(resolver=offline_resolver)

    result = asyncio.run(service.scan("Keep refrigerated"))

    assert result.ingredients == []
    assert result.health_score.overall == 50
    assert result.health_score.color == ScoreColor.YELLOW


def test_scan_completes_with_every_network_tier_down() -> None:
    mirror = InMemoryCacheMirror()
    cache = ResolutionCache(mirror=mirror)
    resolver = TieredIngredientResolver(
        cache=cache,
        external_client=FailingOpenFoodFactsClient(),
        retry_base_delay_seconds=0.0,
    )
    service = ScanService(resolver=resolver)

    result = asyncio.run(
        service.scan("Contains: red 40, sodium nitrite, mystery powder.")
    )

    assert len(result.ingredients) == 3
    assert all(
        record.source == IngredientSource.HEURISTIC for record in result.ingredients
    )
    assert 0 <= result.health_score.overall <= 100
    assert mirror.snapshots[cache.namespace]
