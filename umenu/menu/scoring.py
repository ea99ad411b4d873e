from __future__ import annotations

import math
from typing import Sequence

from ..taste.models import TasteAttributes
from .models import MenuItem, RestaurantSummary, ScoredMenuItem, UserPreferences

CUISINE_POINTS = 30
FOOD_TYPE_POINTS = 25
PREP_METHOD_POINTS = 15
INGREDIENT_POINTS = 10
HEALTH_SIGNAL_POINTS = 5
ALLERGEN_PENALTY = 1000
DIETARY_PENALTY = 100

RESTAURANT_CUISINE_POINTS = 30
RESTAURANT_DIETARY_POINTS = 20
RESTAURANT_TOP_MEAL_CAP = 40
RESTAURANT_RATING_BONUS = 10
MAX_MATCH_REASONS = 3

# Each group scores once when any of its phrases appears in the item text
_HEALTH_SIGNALS: tuple[tuple[str, ...], ...] = (
    ("low fat", "healthy"),
    ("high protein",),
    ("low sodium",),
)


def _item_text(item: MenuItem, with_ingredients: bool = True) -> str:
    parts = [item.name, item.description]
    if with_ingredients:
        parts.append(" ".join(item.ingredients))
    return " ".join(parts).lower()


def _count_hits(text: str, needles: Sequence[str]) -> int:
    return sum(1 for needle in needles if needle in text)


def score_item(
    item: MenuItem,
    attrs: TasteAttributes,
    prefs: UserPreferences | None = None,
) -> int:
    """
    Additive relevance score of one menu item, floored at 0.

    Positive signals are substring hits of the requested tags in
    ``name + description + ingredients``. Allergens found in that text cost
    1000 each; stated dietary restrictions that appear nowhere in it cost 100.
    """
    prefs = prefs or UserPreferences()
    text = _item_text(item)

    score = 0
    score += CUISINE_POINTS * _count_hits(text, attrs.cuisines)
    score += FOOD_TYPE_POINTS * _count_hits(text, attrs.food_types)
    score += PREP_METHOD_POINTS * _count_hits(text, attrs.prep_methods)
    score += INGREDIENT_POINTS * _count_hits(text, attrs.ingredients)

    if attrs.health_goals:
        for phrases in _HEALTH_SIGNALS:
            if any(p in text for p in phrases):
                score += HEALTH_SIGNAL_POINTS

    allergens = [a.lower() for a in prefs.allergens if a.strip()]
    score -= ALLERGEN_PENALTY * _count_hits(text, allergens)

    restrictions = [d.lower() for d in prefs.dietary_restrictions if d.strip()]
    if restrictions and not any(d in text for d in restrictions):
        score -= DIETARY_PENALTY

    return max(0, score)


def match_reasons(item: MenuItem, attrs: TasteAttributes) -> list[str]:
    """Up to three human-readable reasons, in a fixed priority order."""
    text = _item_text(item, with_ingredients=False)
    reasons: list[str] = []

    if any(c in text for c in attrs.cuisines):
        reasons.append("Matches cuisine preference")
    if any(t in text for t in attrs.food_types):
        reasons.append("Matches food type")
    if any(i in text for i in attrs.ingredients):
        reasons.append("Contains requested ingredients")
    if any(p in text for p in attrs.prep_methods):
        reasons.append(f"Prepared as requested ({attrs.prep_methods[0]})")
    if item.dietary_labels:
        reasons.append(f"{', '.join(item.dietary_labels)} option")

    return reasons[:MAX_MATCH_REASONS]


def match_score_for_restaurant(
    restaurant: RestaurantSummary,
    attrs: TasteAttributes,
    scored_meals: Sequence[ScoredMenuItem],
) -> int:
    """Restaurant-level match: name/option hits, best meal, and a rating bonus."""
    text = f"{restaurant.name} {' '.join(restaurant.dietary_options)}".lower()

    score = 0.0
    score += RESTAURANT_CUISINE_POINTS * _count_hits(text, attrs.cuisines)
    score += RESTAURANT_DIETARY_POINTS * _count_hits(text, attrs.dietary)

    if scored_meals:
        top_meal_score = max(m.score for m in scored_meals)
        score += min(top_meal_score / 10, RESTAURANT_TOP_MEAL_CAP)

    if restaurant.rating is not None and restaurant.rating > 4:
        score += RESTAURANT_RATING_BONUS

    # Round half up
    return int(math.floor(score + 0.5))
