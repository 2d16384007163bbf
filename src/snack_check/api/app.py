"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request

from snack_check.api.models import (
    IngredientModel,
    ResolveRequest,
    ScanRequest,
    ScanResponse,
)
from snack_check.app_logging import configure_logging
from snack_check.containers import AppContainer
from snack_check.domain.errors import InvalidIngredientError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to close application resources")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/scan")
    async def scan(payload: ScanRequest, request: Request) -> ScanResponse:
        """Score the ingredients found in recognized label text."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.scan_service.scan(
            payload.text, confidence=payload.confidence
        )
        logger.info(
            "Scan scored %s ingredients: overall=%s color=%s",
            len(result.ingredients),
            result.health_score.overall,
            result.health_score.color.value,
        )
        return ScanResponse.from_result(result)

    @app.post("/ingredients/resolve")
    async def resolve_ingredient(
        payload: ResolveRequest, request: Request
    ) -> IngredientModel:
        """Resolve a single ingredient name."""
        state_container: AppContainer = request.app.state.container
        try:
            record = await state_container.resolver.resolve(payload.name)
        except InvalidIngredientError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return IngredientModel.from_record(record)

    @app.get("/cache/stats")
    async def cache_stats(request: Request) -> dict[str, int]:
        """Return ingredient cache statistics."""
        state_container: AppContainer = request.app.state.container
        return state_container.resolver.cache_stats()

    @app.delete("/cache")
    async def clear_cache(request: Request) -> dict[str, str]:
        """Drop all cached ingredient resolutions."""
        state_container: AppContainer = request.app.state.container
        state_container.resolver.clear_cache()
        state_container.cache.persist()
        return {"status": "cleared"}

    return app
