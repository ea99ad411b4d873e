"""
Attribute taxonomy for taste parsing.

Each category maps a canonical tag to the lower-cased phrases that trigger it.
Matching is plain substring containment on the lower-cased query, so
"thailand" triggers "thai" and "not spicy" triggers "spicy".
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

TagTable = Mapping[str, tuple[str, ...]]

_CUISINE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "italian": ("pizza", "pasta", "risotto", "gelato", "italian"),
    "mexican": ("tacos", "burrito", "enchilada", "mexican", "salsa", "quesadilla"),
    "asian": ("noodle", "ramen", "pho", "pad thai", "curry", "stir fry", "sushi", "asian"),
    "indian": ("curry", "tikka", "naan", "biryani", "indian", "dosa"),
    "japanese": ("sushi", "ramen", "tempura", "teriyaki", "japanese"),
    "thai": ("pad thai", "thai", "curry", "coconut", "lemongrass"),
    "american": ("burger", "bbq", "fried", "steak", "wings", "american"),
    "mediterranean": ("greek", "falafel", "hummus", "olive", "mediterranean"),
    "french": ("french", "coq au vin", "duck", "bourguignon"),
}

# Declaration order is the test order; the first level that matches wins.
_HEAT_KEYWORDS: dict[str, tuple[str, ...]] = {
    "spicy": ("spicy", "hot", "fiery", "jalapeño", "habanero", "sriracha", "chili"),
    "mild": ("mild", "light", "gentle", "not spicy", "family friendly"),
    "medium": ("medium", "some heat", "moderately spicy"),
}

_DIETARY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "vegan": ("vegan", "no meat", "no animal", "plant based"),
    "vegetarian": ("vegetarian", "no meat", "meatless"),
    "pescetarian": ("pescetarian", "fish ok", "seafood ok"),
    "keto": ("keto", "low carb", "protein heavy"),
    "paleo": ("paleo", "primal"),
    "glutenfree": ("gluten free", "gluten-free", "gf", "celiac"),
    "halal": ("halal",),
    "kosher": ("kosher",),
}

_HEALTH_GOAL_KEYWORDS: dict[str, tuple[str, ...]] = {
    "heart-healthy": ("heart healthy", "low sodium", "low fat", "cardiac", "healthy heart"),
    "low-sodium": ("low sodium", "no salt", "salt free"),
    "weight-loss": ("light", "healthy", "low calorie", "diet", "weight loss"),
    "muscle-building": ("protein", "high protein", "muscle", "strength", "bodybuilding"),
    "diabetes-friendly": ("diabetes", "low sugar", "no sugar", "sugar free"),
}

_FOOD_TYPE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "tacos": ("tacos", "taco"),
    "noodles": ("noodle", "noodles", "ramen", "pho", "pad thai"),
    "pizza": ("pizza", "pie"),
    "burger": ("burger", "burgers", "beef"),
    "fish": ("fish", "seafood", "salmon", "tuna", "halibut"),
    "chicken": ("chicken", "poultry"),
    "steak": ("steak", "beef", "meat"),
    "salad": ("salad", "greens", "vegetables"),
    "soup": ("soup", "broth", "chowder"),
    "sandwich": ("sandwich", "sub", "wrap"),
}

_PREP_KEYWORDS: dict[str, tuple[str, ...]] = {
    "grilled": ("grilled", "charred"),
    "fried": ("fried", "deep fried", "crispy"),
    "baked": ("baked", "roasted"),
    "raw": ("raw", "fresh"),
    "steamed": ("steamed", "boiled"),
}


def _freeze(table: dict[str, tuple[str, ...]]) -> TagTable:
    return MappingProxyType(dict(table))


@dataclass(frozen=True)
class Taxonomy:
    """Read-only keyword tables shared by the parser and ingredient extraction."""

    cuisines: TagTable = field(default_factory=lambda: _freeze(_CUISINE_KEYWORDS))
    heat: TagTable = field(default_factory=lambda: _freeze(_HEAT_KEYWORDS))
    dietary: TagTable = field(default_factory=lambda: _freeze(_DIETARY_KEYWORDS))
    health_goals: TagTable = field(default_factory=lambda: _freeze(_HEALTH_GOAL_KEYWORDS))
    food_types: TagTable = field(default_factory=lambda: _freeze(_FOOD_TYPE_KEYWORDS))
    prep_methods: TagTable = field(default_factory=lambda: _freeze(_PREP_KEYWORDS))

    def tables(self) -> dict[str, TagTable]:
        """Return every category table keyed by its TasteAttributes field name."""
        return {
            "cuisines": self.cuisines,
            "heat": self.heat,
            "dietary": self.dietary,
            "health_goals": self.health_goals,
            "food_types": self.food_types,
            "prep_methods": self.prep_methods,
        }

    def all_triggers(self) -> frozenset[str]:
        """Flattened set of every trigger phrase across all categories."""
        return frozenset(
            phrase
            for table in self.tables().values()
            for phrases in table.values()
            for phrase in phrases
        )

    def tags(self) -> dict[str, list[str]]:
        """Canonical tags per category, in declaration order."""
        return {name: list(table) for name, table in self.tables().items()}


def match_tags(query_lower: str, table: TagTable) -> list[str]:
    """Return every tag in ``table`` with at least one trigger inside ``query_lower``."""
    return [
        tag for tag, phrases in table.items()
        if any(phrase in query_lower for phrase in phrases)
    ]


DEFAULT_TAXONOMY = Taxonomy()
