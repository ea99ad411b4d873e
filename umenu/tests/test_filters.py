from umenu.menu.filters import filter_by_preferences, satisfies_dietary
from umenu.menu.models import MenuItem


def _item(item_id, allergens=(), labels=(), available=True):
    return MenuItem(
        id=item_id,
        name=f"Dish {item_id}",
        allergens=list(allergens),
        dietary_labels=list(labels),
        available=available,
    )


ITEMS = [
    _item("1", allergens=["soy"], labels=["vegetarian"]),
    _item("2", labels=["vegan"]),
    _item("3", allergens=["Peanuts"], labels=["vegan"]),
    _item("4", labels=["vegetarian"], available=False),
    _item("5", labels=["pescetarian"]),
    _item("6"),
]


def test_no_constraints_only_drops_unavailable():
    result = filter_by_preferences(ITEMS, [], [])
    assert [i.id for i in result] == ["1", "2", "3", "5", "6"]


def test_result_is_ordered_subset():
    result = filter_by_preferences(ITEMS, ["peanuts"], ["vegetarian"])
    ids = [i.id for i in ITEMS]
    positions = [ids.index(i.id) for i in result]
    assert positions == sorted(positions)
    assert all(i in ITEMS for i in result)


def test_allergen_excluded_case_insensitive():
    result = filter_by_preferences(ITEMS, ["PEANUTS"], [])
    assert "3" not in [i.id for i in result]


def test_allergen_excluded_regardless_of_dietary_match():
    result = filter_by_preferences(ITEMS, ["soy"], ["vegetarian"])
    assert "1" not in [i.id for i in result]


def test_allergen_is_exact_tag_match():
    # "soy" must not match a declared "soybean oil"-style tag by substring
    item = _item("x", allergens=["soybean"])
    assert filter_by_preferences([item], ["soy"], []) == [item]


def test_vegan_satisfies_vegetarian():
    result = filter_by_preferences(ITEMS, [], ["vegetarian"])
    assert [i.id for i in result] == ["1", "2", "3"]


def test_vegetarian_does_not_satisfy_vegan():
    result = filter_by_preferences(ITEMS, [], ["vegan"])
    assert [i.id for i in result] == ["2", "3"]


def test_pescetarian_implications():
    assert satisfies_dietary(_item("a", labels=["vegan"]), "pescetarian")
    assert satisfies_dietary(_item("b", labels=["vegetarian"]), "pescetarian")
    assert satisfies_dietary(_item("c", labels=["pescetarian"]), "pescetarian")
    assert not satisfies_dietary(_item("d", labels=["keto"]), "pescetarian")


def test_every_restriction_required():
    keto_vegan = _item("kv", labels=["vegan", "keto"])
    vegan_only = _item("v", labels=["vegan"])
    result = filter_by_preferences([keto_vegan, vegan_only], [], ["vegetarian", "keto"])
    assert result == [keto_vegan]


def test_unknown_restriction_needs_direct_label():
    halal = _item("h", labels=["Halal"])
    assert filter_by_preferences([halal, _item("n")], [], ["halal"]) == [halal]


def test_unavailable_never_returned():
    result = filter_by_preferences(ITEMS, [], ["vegetarian"])
    assert all(i.available for i in result)


def test_empty_items():
    assert filter_by_preferences([], ["soy"], ["vegan"]) == []
