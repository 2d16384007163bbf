"""Shared test fixtures."""

from dataclasses import dataclass, field

import httpx
import pytest

from snack_check.adapters.openfoodfacts_client import OpenFoodFactsClient
from snack_check.config import Settings
from snack_check.containers import AppContainer
from snack_check.services.cache import CacheMirror, ResolutionCache
from snack_check.services.explanations import ExplanationClient
from snack_check.services.resolver import TieredIngredientResolver
from snack_check.services.scan import ScanService


def http_status_error(status_code: int) -> httpx.HTTPStatusError:
    """Build an HTTPStatusError like the one raise_for_status produces."""
    request = httpx.Request("GET", "https://world.openfoodfacts.org/cgi/search.pl")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError(
        f"status {status_code}", request=request, response=response
    )


@dataclass
class FakeOpenFoodFactsClient(OpenFoodFactsClient):
    """Fake OpenFoodFacts client with a fixed payload or queued errors."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "products": [
                {
                    "product_name": "Granola",
                    "nutrition_grades": "b",
                    "additives_tags": [],
                }
            ]
        }
    )
    errors: list[Exception] = field(default_factory=list)
    calls: list[str] = field(default_factory=list)

    async def search_products(
        self, term: str, timeout_seconds: float
    ) -> dict[str, object]:
        self.calls.append(term)
        if self.errors:
            raise self.errors.pop(0)
        return self.payload


@dataclass
class FailingOpenFoodFactsClient(OpenFoodFactsClient):
    """OpenFoodFacts client that always fails with a server error."""

    calls: int = 0

    async def search_products(
        self, term: str, timeout_seconds: float
    ) -> dict[str, object]:
        self.calls += 1
        raise http_status_error(503)


@dataclass
class FakeExplanationClient(ExplanationClient):
    """Fake explanation client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "explanation": "A fermented seasoning made from soybeans.",
            "health_impact": "neutral",
            "common_uses": ["Sauces", "Marinades"],
        }
    )
    prompts: list[str] = field(default_factory=list)

    async def explain(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        return self.payload


@dataclass
class InMemoryCacheMirror(CacheMirror):
    """In-memory cache mirror for tests."""

    snapshots: dict[str, list[dict[str, object]]] = field(default_factory=dict)

    def load(self, namespace: str) -> list[dict[str, object]] | None:
        return self.snapshots.get(namespace)

    def save(self, namespace: str, entries: list[dict[str, object]]) -> None:
        self.snapshots[namespace] = entries


@dataclass
class FailingCacheMirror(CacheMirror):
    """Cache mirror whose storage is unavailable."""

    def load(self, namespace: str) -> list[dict[str, object]] | None:
        raise ConnectionError("storage offline")

    def save(self, namespace: str, entries: list[dict[str, object]]) -> None:
        raise ConnectionError("storage offline")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        retry_base_delay_seconds=0.0,
        openai_api_key=None,
        supabase_url=None,
        supabase_service_key=None,
    )


@pytest.fixture
def cache() -> ResolutionCache:
    return ResolutionCache()


@pytest.fixture
def openfoodfacts_client() -> FakeOpenFoodFactsClient:
    return FakeOpenFoodFactsClient()


@pytest.fixture
def resolver(
    cache: ResolutionCache, openfoodfacts_client: FakeOpenFoodFactsClient
) -> TieredIngredientResolver:
    return TieredIngredientResolver(
        cache=cache,
        external_client=openfoodfacts_client,
        retry_base_delay_seconds=0.0,
    )


@pytest.fixture
def offline_resolver(cache: ResolutionCache) -> TieredIngredientResolver:
    return TieredIngredientResolver(
        cache=cache,
        external_client=FailingOpenFoodFactsClient(),
        retry_base_delay_seconds=0.0,
    )


@pytest.fixture
def container(
    settings: Settings,
    cache: ResolutionCache,
    offline_resolver: TieredIngredientResolver,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        cache=cache,
        resolver=offline_resolver,
        scan_service=ScanService(resolver=offline_resolver),
        close_resources=close_resources,
    )
