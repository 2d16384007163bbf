"""Keyword-based ingredient classification.

Each family carries a fixed score and an explanation template. Additive
families tag a record with their ``additive_class`` only when the name also
matches one of the family's unambiguous additive markers, so whole foods
such as "green beans" or "corn starch" are described without being treated
as additives.
"""

import re
from dataclasses import dataclass

from snack_check.domain.ingredients import IngredientRecord, IngredientSource

POSITIVE_SCORE = 85
NEUTRAL_SCORE = 55
NEGATIVE_SCORE = 35


@dataclass(frozen=True)
class KeywordFamily:
    """Group of keywords sharing an explanation and score."""

    name: str
    pattern: re.Pattern[str]
    score: int
    explanation: str
    additive_class: str | None = None
    additive_markers: re.Pattern[str] | None = None

    def additive_class_for(self, name: str) -> str | None:
        if self.additive_class is None or self.additive_markers is None:
            return None
        if self.additive_markers.search(name):
            return self.additive_class
        return None


def _keywords(*words: str) -> re.Pattern[str]:
    return re.compile("|".join(words), re.IGNORECASE)


KEYWORD_FAMILIES: tuple[KeywordFamily, ...] = (
    KeywordFamily(
        name="preservative",
        pattern=_keywords(
            r"preservative",
            r"benzoate",
            r"sorbate",
            r"propionate",
            r"sulfite",
            r"nitrite",
            r"nitrate",
            r"\bbht\b",
            r"\bbha\b",
            r"\btbhq\b",
            r"\b(?:sorbic|benzoic|propionic|acetic|lactic|malic|fumaric) acid\b",
        ),
        score=NEUTRAL_SCORE,
        explanation=(
            "{name} is a preservative used to prevent spoilage and extend shelf "
            "life. Generally recognized as safe when used in approved amounts."
        ),
        additive_class="preservative",
        additive_markers=_keywords(
            r"preservative",
            r"benzoate",
            r"sorbate",
            r"propionate",
            r"sulfite",
            r"nitrite",
            r"nitrate",
            r"\bbht\b",
            r"\bbha\b",
            r"\btbhq\b",
            r"\b(?:sorbic|benzoic|propionic) acid\b",
        ),
    ),
    KeywordFamily(
        name="coloring",
        pattern=_keywords(
            r"colou?r",
            r"\bdye\b",
            r"\bred\b",
            r"\bblue\b",
            r"\byellow\b",
            r"\bgreen\b",
            r"annatto",
            r"carmine",
        ),
        score=NEUTRAL_SCORE,
        explanation=(
            "{name} is a coloring agent that changes the appearance of food. "
            "It provides color but no nutritional value."
        ),
        additive_class="coloring",
        additive_markers=_keywords(
            r"colou?r",
            r"\bdye\b",
            r"\blake\b",
            r"fd&c",
            r"\b(?:red|yellow|blue|green) \d+\b",
            r"carmine",
            r"tartrazine",
        ),
    ),
    KeywordFamily(
        name="emulsifier",
        pattern=_keywords(
            r"lecithin", r"\bmono", r"diglyceride", r"polysorbate", r"emulsifier"
        ),
        score=NEUTRAL_SCORE,
        explanation=(
            "{name} is an emulsifier that helps oil and water based ingredients "
            "mix, improving texture and consistency."
        ),
        additive_class="emulsifier",
        additive_markers=_keywords(
            r"lecithin", r"diglyceride", r"polysorbate", r"emulsifier"
        ),
    ),
    KeywordFamily(
        name="vitamin_mineral",
        pattern=_keywords(
            r"vitamin",
            r"mineral",
            r"\biron\b",
            r"calcium",
            r"\bzinc\b",
            r"folate",
            r"folic",
            r"ascorbic",
            r"thiamine",
            r"riboflavin",
            r"niacin",
        ),
        score=POSITIVE_SCORE,
        explanation=(
            "{name} is a vitamin or mineral added to improve the nutritional "
            "value of the product."
        ),
    ),
    KeywordFamily(
        name="artificial_sweetener",
        pattern=_keywords(r"artificial sweetener", r"aspartame", r"sucralose"),
        score=NEUTRAL_SCORE,
        explanation=(
            "{name} is a low-calorie sweetening agent. The health impact depends "
            "on the amount consumed."
        ),
    ),
    KeywordFamily(
        name="sweetener",
        pattern=_keywords(
            r"sweetener",
            r"syrup",
            r"sugar",
            r"fructose",
            r"glucose",
            r"sucrose",
            r"dextrose",
            r"stevia",
        ),
        score=NEGATIVE_SCORE,
        explanation=(
            "{name} is a sweetening agent. Frequent intake of added sugars is "
            "linked to weight gain and blood sugar spikes."
        ),
    ),
    KeywordFamily(
        name="natural_extract",
        pattern=_keywords(r"extract", r"natural flavou?r", r"essence", r"\boil\b"),
        score=NEUTRAL_SCORE,
        explanation=(
            "{name} is derived from natural sources and used mainly for flavor, "
            "with little nutritional impact."
        ),
    ),
    KeywordFamily(
        name="thickener",
        pattern=_keywords(
            r"\bgum\b",
            r"starch",
            r"cellulose",
            r"pectin",
            r"\bagar\b",
            r"carrageenan",
            r"xanthan",
        ),
        score=NEUTRAL_SCORE,
        explanation=(
            "{name} is a thickening agent used to improve texture. It is "
            "typically derived from natural sources and generally safe."
        ),
        additive_class="thickener",
        additive_markers=_keywords(
            r"carrageenan",
            r"xanthan",
            r"\bguar\b",
            r"cellulose",
            r"modified (?:\w+ )?starch",
        ),
    ),
)

GENERIC_EXPLANATION = (
    "{name} is a food ingredient whose function varies by product. Not enough "
    "is known to describe its purpose or health effects."
)


@dataclass
class HeuristicClassifier:
    """Classifies ingredients by keyword family; first matching family wins."""

    families: tuple[KeywordFamily, ...] = KEYWORD_FAMILIES

    def classify(self, name: str) -> IngredientRecord:
        """Return a heuristic record for a normalized ingredient name."""
        for family in self.families:
            if family.pattern.search(name):
                return IngredientRecord(
                    name=name,
                    source=IngredientSource.HEURISTIC,
                    nutrition_score=family.score,
                    additive_class=family.additive_class_for(name),
                    explanation=family.explanation.format(name=name),
                )
        return IngredientRecord(
            name=name,
            source=IngredientSource.HEURISTIC,
            nutrition_score=NEUTRAL_SCORE,
            explanation=GENERIC_EXPLANATION.format(name=name),
        )
