from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

from ..taste.models import TasteAttributes
from ..taste.parser import TasteParser, parse_taste_query
from .config import DEFAULT_SEARCH_CONFIG, SearchConfig
from .data_store import MenuSource, RestaurantSource
from .filters import filter_by_preferences
from .models import (
    MenuItem,
    RestaurantMatch,
    RestaurantSummary,
    ScoredMenuItem,
    TasteSearchResponse,
    UserPreferences,
)
from .scoring import match_reasons, match_score_for_restaurant, score_item

logger = logging.getLogger(__name__)


def curate_meals(
    items: Sequence[MenuItem],
    attrs: TasteAttributes,
    prefs: UserPreferences,
    limit: int = DEFAULT_SEARCH_CONFIG.meals_per_restaurant,
) -> list[ScoredMenuItem]:
    """Filter, score and rank one restaurant's menu, keeping the top ``limit`` meals."""
    eligible = filter_by_preferences(items, prefs.allergens, prefs.dietary_restrictions)

    scored = [
        ScoredMenuItem(
            **item.model_dump(),
            score=score_item(item, attrs, prefs),
            match_reasons=match_reasons(item, attrs),
        )
        for item in eligible
    ]
    # sorted() is stable, so equal scores keep menu order
    scored = sorted(scored, key=lambda m: m.score, reverse=True)
    return scored[:limit]


def _match_restaurant(
    restaurant: RestaurantSummary,
    attrs: TasteAttributes,
    prefs: UserPreferences,
    menu_source: MenuSource,
    config: SearchConfig,
) -> RestaurantMatch:
    meals: list[ScoredMenuItem] = []
    try:
        items = menu_source.get_menu_items(restaurant.id)
        meals = curate_meals(items, attrs, prefs, config.meals_per_restaurant)
    except Exception:
        logger.warning("Failed to get menu for %s, continuing without meals", restaurant.name, exc_info=True)

    return RestaurantMatch(
        restaurant=restaurant,
        match_score=match_score_for_restaurant(restaurant, attrs, meals),
        meals=meals,
    )


def rank_restaurants(
    matches: Sequence[RestaurantMatch],
    limit: int = DEFAULT_SEARCH_CONFIG.max_restaurants,
) -> list[RestaurantMatch]:
    """Drop restaurants with no score and no meals, then sort by match score."""
    kept = [m for m in matches if m.match_score > 0 or m.meals]
    return sorted(kept, key=lambda m: m.match_score, reverse=True)[:limit]


def search_by_taste(
    taste_query: str,
    prefs: UserPreferences,
    restaurants: Sequence[RestaurantSummary],
    menu_source: MenuSource,
    parser: TasteParser | None = None,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> TasteSearchResponse:
    start_time = time.time()

    attrs = parse_taste_query(taste_query, parser)
    logger.info("Parsed taste query %r: %s", taste_query, attrs.model_dump(mode="json"))

    candidates = list(restaurants)[: config.max_restaurants]
    if candidates:
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            matches = list(pool.map(
                lambda r: _match_restaurant(r, attrs, prefs, menu_source, config),
                candidates,
            ))
    else:
        matches = []

    ranked = rank_restaurants(matches, config.max_restaurants)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.info(
        "Taste search matched %d of %d restaurants in %.1f ms",
        len(ranked), len(candidates), elapsed_ms,
    )

    return TasteSearchResponse(
        count=len(ranked),
        taste_attributes=attrs,
        restaurants=ranked,
    )


def search_source_by_taste(
    taste_query: str,
    prefs: UserPreferences,
    restaurant_source: RestaurantSource,
    menu_source: MenuSource,
    city: str | None = None,
    parser: TasteParser | None = None,
    config: SearchConfig = DEFAULT_SEARCH_CONFIG,
) -> TasteSearchResponse:
    """Look up candidate restaurants (optionally by city), then run ``search_by_taste``."""
    restaurants = restaurant_source.search_restaurants(city)
    return search_by_taste(taste_query, prefs, restaurants, menu_source, parser, config)
