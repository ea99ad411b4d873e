from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Protocol

import pandas as pd

from .config import DEFAULT_SEARCH_CONFIG
from .models import MenuItem, RestaurantSummary

logger = logging.getLogger(__name__)

_LIST_COLUMNS_RESTAURANTS = ["dietary_options"]
_LIST_COLUMNS_MENU = ["allergens", "dietary_labels", "ingredients"]


class RestaurantSource(Protocol):
    def search_restaurants(self, city: str | None = None) -> list[RestaurantSummary]: ...


class MenuSource(Protocol):
    def get_menu_items(self, restaurant_id: str) -> list[MenuItem]: ...


def _split_list(value: object) -> list[str]:
    if not isinstance(value, str):
        return []
    return [v.strip() for v in value.split(",") if v.strip()]


def _optional(value: object) -> object | None:
    return None if pd.isna(value) else value


def _parse_flag(value: object) -> bool:
    # Missing means available
    if isinstance(value, str):
        return value.strip().lower() not in ("false", "0", "no")
    return True if pd.isna(value) else bool(value)


def _load_restaurants(path: Path) -> pd.DataFrame:
    df = pd.read_csv(path, dtype={"id": str})
    for col in _LIST_COLUMNS_RESTAURANTS:
        if col not in df.columns:
            df[col] = ""
        df[col] = df[col].apply(_split_list)
    df["city_lower"] = df["city"].fillna("").str.lower()
    return df


def _load_menu_items(path: Path) -> pd.DataFrame:
    df = pd.read_csv(path, dtype={"id": str, "restaurant_id": str})
    for col in _LIST_COLUMNS_MENU:
        if col not in df.columns:
            df[col] = ""
        df[col] = df[col].apply(_split_list)
    df["description"] = df["description"].fillna("")
    df["category"] = df["category"].fillna("")
    df["price"] = pd.to_numeric(df["price"], errors="coerce").fillna(0.0)
    if "available" in df.columns:
        df["available"] = df["available"].apply(_parse_flag)
    else:
        df["available"] = True
    return df


class CatalogStore:
    """
    Local restaurant and menu catalog backed by two CSV files.

    Implements both ``RestaurantSource`` and ``MenuSource``. Files are read on
    first use and kept in memory for the life of the process. Loading is
    guarded by a lock since menus are fetched from search worker threads.
    """

    def __init__(self, catalog_dir: Path = DEFAULT_SEARCH_CONFIG.catalog_dir):
        self.catalog_dir = Path(catalog_dir)
        self._restaurants: pd.DataFrame | None = None
        self._menu: pd.DataFrame | None = None
        self._lock = threading.Lock()

    @property
    def restaurants(self) -> pd.DataFrame:
        if self._restaurants is None:
            with self._lock:
                if self._restaurants is None:
                    self._restaurants = _load_restaurants(self.catalog_dir / "restaurants.csv")
                    logger.info("Loaded %d restaurants from %s", len(self._restaurants), self.catalog_dir)
        return self._restaurants

    @property
    def menu(self) -> pd.DataFrame:
        if self._menu is None:
            with self._lock:
                if self._menu is None:
                    self._menu = _load_menu_items(self.catalog_dir / "menu_items.csv")
                    logger.info("Loaded %d menu items from %s", len(self._menu), self.catalog_dir)
        return self._menu

    def cities(self) -> list[str]:
        return sorted(self.restaurants["city"].dropna().unique().tolist())

    def search_restaurants(self, city: str | None = None) -> list[RestaurantSummary]:
        df = self.restaurants
        if city and city.strip():
            df = df[df["city_lower"].str.contains(city.strip().lower(), regex=False, na=False)]

        results: list[RestaurantSummary] = []
        for _, row in df.iterrows():
            rating = _optional(row.get("rating"))
            review_count = _optional(row.get("review_count"))
            results.append(RestaurantSummary(
                id=str(row["id"]),
                name=row["name"],
                address=_optional(row.get("address")) or "",
                city=_optional(row.get("city")) or "",
                rating=float(rating) if rating is not None else None,
                review_count=int(review_count) if review_count is not None else 0,
                source=_optional(row.get("source")) or "catalog",
                dietary_options=row["dietary_options"],
                phone=_optional(row.get("phone")),
                website=_optional(row.get("website")),
            ))
        return results

    def get_menu_items(self, restaurant_id: str) -> list[MenuItem]:
        df = self.menu
        rows = df[df["restaurant_id"] == str(restaurant_id)]
        if rows.empty:
            logger.debug("No menu items for restaurant %s", restaurant_id)
            return []

        items: list[MenuItem] = []
        for _, row in rows.iterrows():
            calories = _optional(row.get("calories"))
            items.append(MenuItem(
                id=str(row["id"]),
                name=row["name"],
                description=row["description"],
                category=row["category"],
                price=float(row["price"]),
                allergens=row["allergens"],
                dietary_labels=row["dietary_labels"],
                ingredients=row["ingredients"],
                available=bool(row["available"]),
                image=_optional(row.get("image")),
                calories=float(calories) if calories is not None else None,
            ))
        return items


_store: CatalogStore | None = None


def get_catalog() -> CatalogStore:
    """Return the process-wide catalog, creating it on first call."""
    global _store
    if _store is None:
        _store = CatalogStore()
    return _store
