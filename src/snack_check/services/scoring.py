"""Rule-based health scoring for resolved ingredients.

Every ingredient starts from a shared base of 100 points and each matching
rule adds a signed factor:

- Artificial additives: -5 to -15 depending on severity
- High sodium: -10
- Trans fats: -20
- Artificial sweeteners: -8
- Preservatives: -5
- Organic indicators: +10 (suppresses the natural bonus)
- Natural ingredients: +2
- Whole grains: +5

The total is clamped to 0-100 and banded green (>= 70), yellow (>= 40) or red.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import StrEnum

from snack_check.domain.ingredients import IngredientRecord
from snack_check.domain.scoring import HealthScore, ScoreColor, ScoreFactor

BASE_SCORE = 100
MIN_SCORE = 0
MAX_SCORE = 100
GREEN_THRESHOLD = 70
YELLOW_THRESHOLD = 40
EMPTY_SCAN_SCORE = 50
EMPTY_SCAN_INGREDIENT = "no ingredients detected"

ADDITIVE_MILD = -5
ADDITIVE_MODERATE = -10
ADDITIVE_SEVERE = -15

_logger = logging.getLogger(__name__)


class Category(StrEnum):
    """Scoring categories in evaluation order."""

    ARTIFICIAL_ADDITIVE = "artificial_additive"
    HIGH_SODIUM = "high_sodium"
    TRANS_FAT = "trans_fat"
    ARTIFICIAL_SWEETENER = "artificial_sweetener"
    PRESERVATIVE = "preservative"
    ORGANIC = "organic"
    NATURAL = "natural"
    WHOLE_GRAIN = "whole_grain"


@dataclass(frozen=True)
class ScoringRule:
    """Category matcher with a fixed impact.

    A rule with ``impact=None`` takes its impact from the additive severity
    of the record. Rules listed in ``suppresses`` are skipped for the same
    ingredient once this rule matches.
    """

    category: Category
    patterns: tuple[re.Pattern[str], ...]
    impact: int | None
    reason: str
    suppresses: frozenset[Category] = frozenset()

    def matches(self, name: str) -> bool:
        return any(pattern.search(name) for pattern in self.patterns)


def _patterns(*expressions: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(expression, re.IGNORECASE) for expression in expressions)


SCORING_RULES: tuple[ScoringRule, ...] = (
    ScoringRule(
        category=Category.ARTIFICIAL_ADDITIVE,
        patterns=_patterns(
            r"artificial",
            r"synthetic",
            r"fd&c",
            r"yellow \d+",
            r"red \d+",
            r"blue \d+",
            r"tartrazine",
            r"sunset yellow",
            r"allura red",
            r"red dye",
            r"food coloring",
            r"color added",
        ),
        impact=None,
        reason="Artificial additive with potential health concerns",
    ),
    ScoringRule(
        category=Category.HIGH_SODIUM,
        patterns=_patterns(
            r"sodium", r"\bsalt\b", r"monosodium glutamate", r"\bmsg\b"
        ),
        impact=-10,
        reason="High sodium content may contribute to hypertension",
    ),
    ScoringRule(
        category=Category.TRANS_FAT,
        patterns=_patterns(
            r"partially hydrogenated", r"trans fat", r"hydrogenated.*oil"
        ),
        impact=-20,
        reason="Trans fats increase risk of heart disease",
    ),
    ScoringRule(
        category=Category.ARTIFICIAL_SWEETENER,
        patterns=_patterns(
            r"aspartame", r"sucralose", r"acesulfame", r"saccharin", r"neotame"
        ),
        impact=-8,
        reason="Artificial sweetener with potential digestive effects",
    ),
    ScoringRule(
        category=Category.PRESERVATIVE,
        patterns=_patterns(
            r"\bbht\b",
            r"\bbha\b",
            r"sodium nitrite",
            r"sodium nitrate",
            r"sodium benzoate",
            r"potassium sorbate",
            r"calcium propionate",
        ),
        impact=-5,
        reason="Chemical preservative may cause sensitivities",
    ),
    ScoringRule(
        category=Category.ORGANIC,
        patterns=_patterns(r"organic"),
        impact=10,
        reason="Organic ingredient with reduced chemical exposure",
        suppresses=frozenset({Category.NATURAL}),
    ),
    ScoringRule(
        category=Category.NATURAL,
        patterns=_patterns(
            r"natural", r"\bwhole\b", r"fresh", r"\bpure\b", r"extract"
        ),
        impact=2,
        reason="Natural ingredient with minimal processing",
    ),
    ScoringRule(
        category=Category.WHOLE_GRAIN,
        patterns=_patterns(
            r"whole grain",
            r"whole wheat",
            r"brown rice",
            r"quinoa",
            r"\boats\b",
            r"barley",
        ),
        impact=5,
        reason="Whole grain provides fiber and nutrients",
    ),
)

GENERIC_ADDITIVE_REASON = "Food additive with potential health concerns"


@dataclass
class PatternScoringEngine:
    """Matches a record against every scoring rule in order."""

    rules: tuple[ScoringRule, ...] = SCORING_RULES

    def analyze(self, record: IngredientRecord) -> list[ScoreFactor]:
        """Return the factors a single ingredient contributes."""
        name = record.name.lower()
        factors: list[ScoreFactor] = []
        suppressed: set[Category] = set()

        for rule in self.rules:
            if rule.category in suppressed or not rule.matches(name):
                continue
            impact = rule.impact
            if impact is None:
                impact = additive_severity(record)
            factors.append(
                ScoreFactor(ingredient=record.name, impact=impact, reason=rule.reason)
            )
            suppressed.update(rule.suppresses)

        if record.additive_class and not factors:
            factors.append(
                ScoreFactor(
                    ingredient=record.name,
                    impact=additive_severity(record),
                    reason=GENERIC_ADDITIVE_REASON,
                )
            )
        return factors


def additive_severity(record: IngredientRecord) -> int:
    """Return the penalty for an additive, using its class or score."""
    if record.additive_class:
        additive_class = record.additive_class.lower()
        if additive_class == "high_risk":
            return ADDITIVE_SEVERE
        if additive_class == "moderate_risk":
            return ADDITIVE_MODERATE
        return ADDITIVE_MILD
    if record.nutrition_score is not None:
        if record.nutrition_score <= 2:
            return ADDITIVE_SEVERE
        if record.nutrition_score <= 4:
            return ADDITIVE_MODERATE
    return ADDITIVE_MILD


@dataclass
class HealthScoreAggregator:
    """Combines factors into a clamped overall score."""

    def aggregate(
        self, factors: list[ScoreFactor], ingredient_count: int | None = None
    ) -> HealthScore:
        """Sum factor impacts onto the base score.

        ``ingredient_count=0`` marks a scan with no detected ingredients and
        yields a neutral yellow score with a single placeholder factor.
        """
        if ingredient_count == 0:
            return HealthScore(
                overall=EMPTY_SCAN_SCORE,
                color=ScoreColor.YELLOW,
                factors=[
                    ScoreFactor(
                        ingredient=EMPTY_SCAN_INGREDIENT,
                        impact=0,
                        reason="No ingredients could be read from the label",
                    )
                ],
            )

        total = BASE_SCORE + sum(factor.impact for factor in factors)
        overall = max(MIN_SCORE, min(MAX_SCORE, round(total)))
        return HealthScore(
            overall=overall, color=score_color(overall), factors=list(factors)
        )


def score_color(score: int) -> ScoreColor:
    """Return the color band for a score."""
    if score >= GREEN_THRESHOLD:
        return ScoreColor.GREEN
    if score >= YELLOW_THRESHOLD:
        return ScoreColor.YELLOW
    return ScoreColor.RED


@dataclass
class HealthScoreCalculator:
    """Scores a list of resolved ingredients."""

    engine: PatternScoringEngine = field(default_factory=PatternScoringEngine)
    aggregator: HealthScoreAggregator = field(default_factory=HealthScoreAggregator)

    def calculate(self, records: list[IngredientRecord]) -> HealthScore:
        """Analyze every record and aggregate the resulting factors."""
        factors: list[ScoreFactor] = []
        for record in records:
            try:
                factors.extend(self.engine.analyze(record))
            except Exception:
                _logger.exception("Scoring failed for ingredient %r", record.name)
        return self.aggregator.aggregate(factors, ingredient_count=len(records))
