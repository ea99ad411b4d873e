from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_DEFAULT_CATALOG_DIR = Path(__file__).resolve().parent.parent / "data" / "catalog"


@dataclass(frozen=True)
class SearchConfig:
    max_restaurants: int = 10
    meals_per_restaurant: int = 5
    max_workers: int = 4
    catalog_dir: Path = Path(os.getenv("UMENU_CATALOG_DIR", str(_DEFAULT_CATALOG_DIR)))


DEFAULT_SEARCH_CONFIG = SearchConfig()
