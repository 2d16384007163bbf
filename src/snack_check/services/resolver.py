"""Tiered ingredient resolution with caching and fallbacks."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import NamedTuple

from snack_check.adapters.openfoodfacts_client import OpenFoodFactsClient
from snack_check.domain.errors import ExternalSourceError, InvalidIngredientError
from snack_check.domain.ingredients import (
    IngredientRecord,
    IngredientSource,
    normalize_ingredient_name,
)
from snack_check.services.cache import ResolutionCache
from snack_check.services.curated import CURATED_INGREDIENTS
from snack_check.services.explanations import IngredientExplanationService
from snack_check.services.heuristics import HeuristicClassifier
from snack_check.services.resilience import (
    is_retryable_http_error,
    safe_async,
    with_retry,
    with_timeout,
)

GRADE_SCORES = {"a": 90, "b": 75, "c": 60, "d": 45, "e": 30}
UNGRADED_SCORE = 50
ADDITIVE_SCORE_CAP = 60
FALLBACK_SCORE = 50
FALLBACK_EXPLANATION = "Unknown ingredient - unable to provide detailed information"

_logger = logging.getLogger(__name__)


class Tier(NamedTuple):
    """One stage of the resolution chain."""

    source: IngredientSource
    lookup: Callable[[str], Awaitable[IngredientRecord | None]]
    write_back: bool


@dataclass
class TieredIngredientResolver:
    """Resolves ingredient names through cache, curated, remote and local tiers.

    Tiers run in order and the first one that yields a record wins. A tier
    that raises or times out is treated as a miss, so ``resolve`` always
    returns a record for a non-empty name.
    """

    cache: ResolutionCache
    external_client: OpenFoodFactsClient | None = None
    explanation_service: IngredientExplanationService | None = None
    heuristic: HeuristicClassifier = field(default_factory=HeuristicClassifier)
    curated: Mapping[str, IngredientRecord] = field(
        default_factory=lambda: CURATED_INGREDIENTS
    )
    external_timeout_seconds: float = 8.0
    external_retry_attempts: int = 3
    ai_timeout_seconds: float = 10.0
    ai_retry_attempts: int = 2
    retry_base_delay_seconds: float = 1.0
    retry_backoff_multiplier: float = 2.0
    cache_ttl_seconds: int | None = None

    def tiers(self) -> list[Tier]:
        """Return the resolution tiers in evaluation order."""
        tiers = [
            Tier(IngredientSource.CACHE, self._lookup_cache, write_back=False),
            Tier(IngredientSource.CURATED, self._lookup_curated, write_back=False),
        ]
        if self.external_client is not None:
            tiers.append(
                Tier(IngredientSource.EXTERNAL, self._lookup_external, write_back=True)
            )
        if self.explanation_service is not None:
            tiers.append(Tier(IngredientSource.AI, self._lookup_ai, write_back=True))
        tiers.append(
            Tier(IngredientSource.HEURISTIC, self._lookup_heuristic, write_back=True)
        )
        return tiers

    async def resolve(self, name: str) -> IngredientRecord:
        """Resolve one ingredient name to a record."""
        normalized = normalize_ingredient_name(name)
        if not normalized:
            raise InvalidIngredientError

        for tier in self.tiers():
            try:
                record = await tier.lookup(normalized)
            except Exception as exc:
                _logger.warning(
                    "Ingredient tier %s failed for %r: %s",
                    tier.source.value,
                    normalized,
                    exc,
                )
                continue
            if record is None:
                continue
            if tier.write_back:
                self.cache.set(_cache_key(normalized), record, self.cache_ttl_seconds)
            return record

        record = fallback_record(normalized)
        self.cache.set(_cache_key(normalized), record, self.cache_ttl_seconds)
        return record

    async def resolve_many(self, names: list[str]) -> list[IngredientRecord]:
        """Resolve names concurrently, returning one record per input name."""
        distinct = list(dict.fromkeys(normalize_ingredient_name(n) for n in names))
        records = await asyncio.gather(*(self._resolve_contained(n) for n in distinct))
        by_name = dict(zip(distinct, records, strict=True))
        return [by_name[normalize_ingredient_name(name)] for name in names]

    def clear_cache(self) -> None:
        """Drop every cached resolution."""
        self.cache.clear()

    def cache_stats(self) -> dict[str, int]:
        """Return cache and curated table sizes."""
        return {
            "total_entries": len(self.cache),
            "curated_ingredients": len(self.curated),
        }

    async def _resolve_contained(self, name: str) -> IngredientRecord:
        return await safe_async(
            lambda: self.resolve(name),
            fallback_record(name),
            action=f"resolve:{name}",
        )

    async def _lookup_cache(self, name: str) -> IngredientRecord | None:
        return self.cache.get(_cache_key(name))

    async def _lookup_curated(self, name: str) -> IngredientRecord | None:
        return self.curated.get(name)

    async def _lookup_external(self, name: str) -> IngredientRecord | None:
        client = self.external_client
        if client is None:
            return None
        action = f"OpenFoodFacts search:{name}"
        payload = await with_retry(
            lambda: with_timeout(
                client.search_products(name, self.external_timeout_seconds),
                self.external_timeout_seconds,
                action=action,
            ),
            attempts=self.external_retry_attempts,
            base_delay_seconds=self.retry_base_delay_seconds,
            multiplier=self.retry_backoff_multiplier,
            should_retry=is_retryable_http_error,
            action=action,
        )
        return record_from_openfoodfacts(name, payload)

    async def _lookup_ai(self, name: str) -> IngredientRecord | None:
        service = self.explanation_service
        if service is None:
            return None
        action = f"AI explanation:{name}"
        return await with_retry(
            lambda: with_timeout(
                service.explain(name), self.ai_timeout_seconds, action=action
            ),
            attempts=self.ai_retry_attempts,
            base_delay_seconds=self.retry_base_delay_seconds,
            multiplier=self.retry_backoff_multiplier,
            action=action,
        )

    async def _lookup_heuristic(self, name: str) -> IngredientRecord | None:
        return self.heuristic.classify(name)


def record_from_openfoodfacts(
    name: str, payload: object
) -> IngredientRecord | None:
    """Map the first product of a search response to a record.

    An empty product list is a miss; a payload of the wrong shape raises
    ExternalSourceError.
    """
    if not isinstance(payload, dict):
        raise ExternalSourceError("OpenFoodFacts returned a non-object body")
    products = payload.get("products", [])
    if not isinstance(products, list):
        raise ExternalSourceError("OpenFoodFacts products is not a list")
    if not products:
        return None
    product = products[0]
    if not isinstance(product, dict):
        raise ExternalSourceError("OpenFoodFacts product is not an object")

    grade = product.get("nutrition_grades")
    score = UNGRADED_SCORE
    if isinstance(grade, str):
        score = GRADE_SCORES.get(grade.strip().lower(), UNGRADED_SCORE)

    additive_class = None
    additives = product.get("additives_tags")
    if isinstance(additives, list) and additives:
        additive_class = "additive"
        score = min(score, ADDITIVE_SCORE_CAP)

    return IngredientRecord(
        name=name,
        source=IngredientSource.EXTERNAL,
        nutrition_score=score,
        additive_class=additive_class,
        explanation=(
            "Information from OpenFoodFacts database based on products "
            f"containing {name}"
        ),
    )


def fallback_record(name: str) -> IngredientRecord:
    """Return the neutral last-resort record."""
    return IngredientRecord(
        name=name,
        source=IngredientSource.FALLBACK,
        nutrition_score=FALLBACK_SCORE,
        explanation=FALLBACK_EXPLANATION,
    )


def _cache_key(name: str) -> str:
    return f"ingredient:{name}"
