"""End-to-end scan pipeline from label text to health score."""

import logging
from dataclasses import dataclass, field

from snack_check.domain.scan import ScanResult
from snack_check.services.extraction import TextIngredientExtractor
from snack_check.services.resolver import TieredIngredientResolver
from snack_check.services.scoring import HealthScoreCalculator

_logger = logging.getLogger(__name__)


@dataclass
class ScanService:
    """Service that scores recognized label text."""

    resolver: TieredIngredientResolver
    extractor: TextIngredientExtractor = field(default_factory=TextIngredientExtractor)
    calculator: HealthScoreCalculator = field(default_factory=HealthScoreCalculator)

    async def scan(self, text: str, confidence: float | None = None) -> ScanResult:
        """Extract, resolve and score the ingredients in the text."""
        names = self.extractor.extract(text)
        if not names:
            _logger.info("No ingredients found in %s characters of text", len(text))
        records = await self.resolver.resolve_many(names)
        health_score = self.calculator.calculate(records)
        self.resolver.cache.persist()
        return ScanResult(
            text=text,
            confidence=confidence,
            ingredient_names=names,
            ingredients=records,
            health_score=health_score,
        )
