from __future__ import annotations

from typing import Iterable, Sequence

from .models import MenuItem

# Required label -> item labels that also satisfy it
DIETARY_IMPLICATIONS: dict[str, frozenset[str]] = {
    "vegetarian": frozenset({"vegan"}),
    "pescetarian": frozenset({"vegan", "vegetarian"}),
}


def _lowered(values: Iterable[str]) -> set[str]:
    return {v.strip().lower() for v in values if v}


def has_declared_allergen(item: MenuItem, allergens: Iterable[str]) -> bool:
    """True when the item declares any of ``allergens`` (case-insensitive tag match)."""
    declared = _lowered(item.allergens)
    return any(a.strip().lower() in declared for a in allergens if a)


def satisfies_dietary(item: MenuItem, restriction: str) -> bool:
    """Check one required label against the item's labels and the implication rules."""
    labels = _lowered(item.dietary_labels)
    required = restriction.strip().lower()
    if required in labels:
        return True
    return bool(DIETARY_IMPLICATIONS.get(required, frozenset()) & labels)


def filter_by_preferences(
    items: Sequence[MenuItem],
    allergens: Sequence[str] = (),
    dietary_restrictions: Sequence[str] = (),
) -> list[MenuItem]:
    """
    Drop items the user must not be offered.

    An item is excluded when it declares a configured allergen, misses any
    required dietary label (after implication rules), or is unavailable.
    Surviving items keep their input order.
    """
    kept: list[MenuItem] = []
    for item in items:
        if allergens and has_declared_allergen(item, allergens):
            continue
        if dietary_restrictions and not all(
            satisfies_dietary(item, d) for d in dietary_restrictions
        ):
            continue
        if not item.available:
            continue
        kept.append(item)
    return kept
