"""Curated scores for common ingredients."""

from types import MappingProxyType

from snack_check.domain.ingredients import IngredientRecord, IngredientSource

# name -> (nutrition score, additive class, explanation)
_CURATED_DATA: dict[str, tuple[int, str | None, str]] = {
    "water": (100, None, "Essential for hydration"),
    "sugar": (30, None, "Added sweetener, high in calories"),
    "salt": (40, None, "Sodium chloride, essential in moderation"),
    "wheat flour": (60, None, "Refined grain, source of carbohydrates"),
    "vegetable oil": (50, None, "Source of fats, varies by type"),
    "milk": (75, None, "Dairy product, source of protein and calcium"),
    "eggs": (85, None, "High-quality protein source"),
    "natural flavor": (70, None, "Flavoring derived from natural sources"),
    "citric acid": (80, "preservative", "Natural preservative and flavor enhancer"),
    "vitamin c": (95, None, "Essential vitamin, antioxidant"),
    "corn syrup": (25, None, "High-fructose sweetener"),
    "soy lecithin": (65, "emulsifier", "Emulsifier derived from soybeans"),
    "baking soda": (80, None, "Leavening agent, sodium bicarbonate"),
    "vanilla extract": (85, None, "Natural flavoring from vanilla beans"),
    "cocoa powder": (80, None, "Processed cocoa beans, source of antioxidants"),
    "almonds": (90, None, "Tree nuts, high in healthy fats and protein"),
    "oats": (85, None, "Whole grain, high in fiber"),
    "rice": (70, None, "Grain, source of carbohydrates"),
    "tomatoes": (90, None, "Vegetable, high in lycopene and vitamins"),
    "onions": (85, None, "Vegetable, source of antioxidants"),
    "garlic": (90, None, "Aromatic vegetable with health benefits"),
    "olive oil": (85, None, "Healthy monounsaturated fat source"),
    "cheese": (65, None, "Dairy product, source of protein and calcium"),
    "chicken": (85, None, "Lean protein source"),
    "beef": (70, None, "Red meat, source of protein and iron"),
    "carrots": (90, None, "Root vegetable, high in beta-carotene"),
    "potatoes": (75, None, "Starchy vegetable, source of potassium"),
    "lemon juice": (85, None, "Citrus juice, source of vitamin C"),
    "honey": (60, None, "Natural sweetener with trace nutrients"),
    "yeast": (80, None, "Leavening agent, source of B vitamins"),
    "vinegar": (75, None, "Acidic condiment, may aid digestion"),
    "paprika": (85, None, "Spice from peppers, source of antioxidants"),
    "black pepper": (85, None, "Spice with potential health benefits"),
    "cinnamon": (90, None, "Spice with antioxidant properties"),
    "ginger": (90, None, "Root spice with anti-inflammatory properties"),
    "turmeric": (95, None, "Spice with strong anti-inflammatory compounds"),
    "basil": (90, None, "Herb with antioxidant properties"),
    "oregano": (90, None, "Herb with antimicrobial properties"),
    "thyme": (90, None, "Herb with antioxidant compounds"),
    "rosemary": (90, None, "Herb with aromatic antioxidant compounds"),
    "spinach": (95, None, "Leafy green, high in iron and vitamins"),
    "broccoli": (95, None, "Cruciferous vegetable, high in nutrients"),
    "apple": (85, None, "Fruit, source of fiber and antioxidants"),
    "banana": (80, None, "Fruit, source of potassium and energy"),
    "orange": (85, None, "Citrus fruit, high in vitamin C"),
    "strawberry": (90, None, "Berry, high in vitamin C and antioxidants"),
    "blueberry": (95, None, "Berry, extremely high in antioxidants"),
    "avocado": (90, None, "Fruit, high in healthy monounsaturated fats"),
    "salmon": (95, None, "Fish, high in omega-3 fatty acids"),
    "tuna": (85, None, "Fish, lean protein source"),
    "quinoa": (90, None, "Seed grain, complete protein source"),
    "artificial flavor": (
        45,
        "artificial",
        "Synthetic compounds that mimic natural flavors, less desirable than "
        "natural alternatives",
    ),
    "high fructose corn syrup": (
        20,
        "sweetener",
        "Highly processed sweetener linked to obesity and metabolic issues",
    ),
    "monosodium glutamate": (
        35,
        "flavor enhancer",
        "Umami flavor enhancer, some people report sensitivity",
    ),
}

CURATED_INGREDIENTS: MappingProxyType[str, IngredientRecord] = MappingProxyType(
    {
        name: IngredientRecord(
            name=name,
            source=IngredientSource.CURATED,
            nutrition_score=score,
            additive_class=additive_class,
            explanation=explanation,
        )
        for name, (score, additive_class, explanation) in _CURATED_DATA.items()
    }
)
