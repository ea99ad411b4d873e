from __future__ import annotations

from umenu.menu.config import SearchConfig
from umenu.menu.models import MenuItem, RestaurantMatch, RestaurantSummary, UserPreferences
from umenu.menu.search import curate_meals, rank_restaurants, search_by_taste, search_source_by_taste
from umenu.taste.parser import KeywordTasteParser

parser = KeywordTasteParser()
TACO_ATTRS = parser.parse("spicy vegetarian tacos")


class FakeMenuSource:
    def __init__(self, menus: dict[str, list[MenuItem]]):
        self.menus = menus
        self.calls: list[str] = []

    def get_menu_items(self, restaurant_id: str) -> list[MenuItem]:
        self.calls.append(restaurant_id)
        if restaurant_id == "boom":
            raise RuntimeError("menu provider down")
        return self.menus.get(restaurant_id, [])


def _item(item_id, name, allergens=(), labels=(), available=True):
    return MenuItem(
        id=item_id,
        name=name,
        allergens=list(allergens),
        dietary_labels=list(labels),
        available=available,
    )


TACO_MENU = [
    _item("a", "Plain Rice"),
    _item("b", "Mexican Bean Tacos", labels=["vegan"]),
    _item("c", "Fish Tacos", allergens=["fish"]),
    _item("d", "Mexican Cheese Tacos", labels=["vegetarian"], available=False),
    _item("e", "Mexican Salad"),
]


# ── curate_meals ─────────────────────────────────────────────────────────


def test_curate_meals_sorted_by_score():
    meals = curate_meals(TACO_MENU, TACO_ATTRS, UserPreferences())
    assert [m.id for m in meals] == ["b", "e", "c", "a"]
    assert [m.score for m in meals] == [55, 30, 25, 0]


def test_curate_meals_applies_filter():
    prefs = UserPreferences(allergens=["FISH"])
    meals = curate_meals(TACO_MENU, TACO_ATTRS, prefs)
    assert "c" not in [m.id for m in meals]
    assert "d" not in [m.id for m in meals]


def test_curate_meals_attaches_reasons():
    meals = curate_meals(TACO_MENU, TACO_ATTRS, UserPreferences())
    assert meals[0].match_reasons == [
        "Matches cuisine preference",
        "Matches food type",
        "vegan option",
    ]


def test_curate_meals_limit():
    assert len(curate_meals(TACO_MENU, TACO_ATTRS, UserPreferences(), limit=2)) == 2


def test_curate_meals_empty_menu():
    assert curate_meals([], TACO_ATTRS, UserPreferences()) == []


# ── rank_restaurants ─────────────────────────────────────────────────────


def test_rank_drops_empty_zero_score_restaurants():
    empty = RestaurantMatch(restaurant=RestaurantSummary(id="x", name="X"), match_score=0)
    scored = RestaurantMatch(restaurant=RestaurantSummary(id="y", name="Y"), match_score=12)
    assert rank_restaurants([empty, scored]) == [scored]


def test_rank_is_stable_for_ties():
    matches = [
        RestaurantMatch(restaurant=RestaurantSummary(id=str(i), name=f"R{i}"), match_score=score)
        for i, score in enumerate([10, 30, 10, 30])
    ]
    assert [m.restaurant.id for m in rank_restaurants(matches)] == ["1", "3", "0", "2"]


# ── search_by_taste ──────────────────────────────────────────────────────


RESTAURANTS = [
    RestaurantSummary(id="r1", name="Casa Mexicana", rating=4.5, dietary_options=["Vegetarian Friendly"]),
    RestaurantSummary(id="r2", name="Quiet Cafe", rating=3.0),
    RestaurantSummary(id="boom", name="Broken Bistro", rating=4.8),
    RestaurantSummary(id="r3", name="Noodle Hut", rating=3.2),
]


def test_search_ranks_restaurants():
    source = FakeMenuSource({"r1": TACO_MENU, "r3": [_item("n", "Soba")]})

    response = search_by_taste("spicy vegetarian tacos", UserPreferences(), RESTAURANTS, source, parser)

    assert response.taste_attributes == TACO_ATTRS
    ids = [r.restaurant.id for r in response.restaurants]
    # r2 has no score and no meals; "boom" keeps its rating bonus without meals
    assert ids == ["r1", "boom", "r3"]
    assert response.count == 3
    top = response.restaurants[0]
    assert top.match_score == 66
    assert top.meals[0].id == "b"


def test_search_survives_menu_source_failure():
    source = FakeMenuSource({})

    response = search_by_taste("tacos", UserPreferences(), RESTAURANTS, source, parser)

    broken = [r for r in response.restaurants if r.restaurant.id == "boom"]
    assert broken and broken[0].meals == []
    assert sorted(source.calls) == sorted(r.id for r in RESTAURANTS)


def test_search_respects_max_restaurants():
    source = FakeMenuSource({"r1": TACO_MENU})
    config = SearchConfig(max_restaurants=1, max_workers=2)

    response = search_by_taste("tacos", UserPreferences(), RESTAURANTS, source, parser, config)

    assert source.calls == ["r1"]
    assert [r.restaurant.id for r in response.restaurants] == ["r1"]


def test_search_meals_per_restaurant():
    source = FakeMenuSource({"r1": TACO_MENU})
    config = SearchConfig(meals_per_restaurant=1)

    response = search_by_taste("tacos", UserPreferences(), RESTAURANTS[:1], source, parser, config)

    assert len(response.restaurants[0].meals) == 1


def test_search_empty_query_and_no_restaurants():
    response = search_by_taste("", UserPreferences(), [], FakeMenuSource({}), parser)
    assert response.count == 0
    assert response.restaurants == []
    assert response.taste_attributes.confidence == 0.0


class FakeRestaurantSource:
    def __init__(self, restaurants: list[RestaurantSummary]):
        self.restaurants = restaurants
        self.cities: list[str | None] = []

    def search_restaurants(self, city: str | None = None) -> list[RestaurantSummary]:
        self.cities.append(city)
        return self.restaurants


def test_search_source_looks_up_restaurants_by_city():
    restaurant_source = FakeRestaurantSource(RESTAURANTS[:1])
    menu_source = FakeMenuSource({"r1": TACO_MENU})

    response = search_source_by_taste(
        "spicy vegetarian tacos", UserPreferences(), restaurant_source, menu_source,
        city="Oakland", parser=parser,
    )

    assert restaurant_source.cities == ["Oakland"]
    assert menu_source.calls == ["r1"]
    assert [r.restaurant.id for r in response.restaurants] == ["r1"]
