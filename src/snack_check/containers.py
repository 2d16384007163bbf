"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from snack_check.adapters.openai_explanation_client import OpenAIExplanationClient
from snack_check.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from snack_check.adapters.supabase_cache_mirror import SupabaseCacheMirror
from snack_check.config import Settings
from snack_check.services.cache import CacheMirror, ResolutionCache
from snack_check.services.explanations import IngredientExplanationService
from snack_check.services.resolver import TieredIngredientResolver
from snack_check.services.scan import ScanService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    cache: ResolutionCache
    resolver: TieredIngredientResolver
    scan_service: ScanService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()

    mirror: CacheMirror | None = None
    if resolved_settings.cache_mirror_enabled:
        supabase_client = create_client(
            resolved_settings.supabase_url, resolved_settings.supabase_service_key
        )
        mirror = SupabaseCacheMirror(supabase_client)
    cache = ResolutionCache(
        default_ttl_seconds=resolved_settings.cache_ttl_seconds,
        max_entries=resolved_settings.cache_max_entries,
        mirror=mirror,
        namespace=resolved_settings.cache_namespace,
    )
    cache.load()

    openfoodfacts_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.openfoodfacts_base_url,
        user_agent=resolved_settings.openfoodfacts_user_agent,
    )
    openai_client: OpenAIExplanationClient | None = None
    explanation_service: IngredientExplanationService | None = None
    if resolved_settings.ai_enabled:
        openai_client = OpenAIExplanationClient.create(resolved_settings.openai_api_key)
        explanation_service = IngredientExplanationService(
            client=openai_client,
            model=resolved_settings.openai_model,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
            store=resolved_settings.openai_store,
        )

    resolver = TieredIngredientResolver(
        cache=cache,
        external_client=openfoodfacts_client,
        explanation_service=explanation_service,
        external_timeout_seconds=resolved_settings.external_timeout_seconds,
        external_retry_attempts=resolved_settings.external_retry_attempts,
        ai_timeout_seconds=resolved_settings.ai_timeout_seconds,
        ai_retry_attempts=resolved_settings.ai_retry_attempts,
        retry_base_delay_seconds=resolved_settings.retry_base_delay_seconds,
        retry_backoff_multiplier=resolved_settings.retry_backoff_multiplier,
        cache_ttl_seconds=resolved_settings.cache_ttl_seconds,
    )
    scan_service = ScanService(resolver=resolver)

    async def close_resources() -> None:
        cache.persist()
        await openfoodfacts_client.close()
        if openai_client is not None:
            await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        cache=cache,
        resolver=resolver,
        scan_service=scan_service,
        close_resources=close_resources,
    )
