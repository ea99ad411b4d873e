from __future__ import annotations

from fastapi import FastAPI

from .llm.config import DEFAULT_LLM_CONFIG
from .menu.data_store import get_catalog
from .menu.models import TasteSearchRequest, TasteSearchResponse, UserPreferences
from .menu.search import search_source_by_taste
from .taste.models import TasteAttributes, TasteParseRequest
from .taste.parser import build_taste_parser, parse_taste_query
from .taste.taxonomy import DEFAULT_TAXONOMY

app = FastAPI(title="UMenu Taste Search API", version="2.0.0")

_parser = build_taste_parser(DEFAULT_LLM_CONFIG, DEFAULT_TAXONOMY)


@app.get("/health")
def health() -> dict[str, str]:
    model_parser = "enabled" if DEFAULT_LLM_CONFIG.enabled and DEFAULT_LLM_CONFIG.api_key else "disabled"
    return {"status": "ok", "model_parser": model_parser}


@app.get("/metadata")
def metadata() -> dict:
    return {
        "cities": get_catalog().cities(),
        "taxonomy": DEFAULT_TAXONOMY.tags(),
    }


@app.post("/taste/parse", response_model=TasteAttributes)
def parse_taste(body: TasteParseRequest) -> TasteAttributes:
    return parse_taste_query(body.query, _parser)


@app.post("/restaurants/search-by-taste", response_model=TasteSearchResponse)
def search_restaurants_by_taste(body: TasteSearchRequest) -> TasteSearchResponse:
    catalog = get_catalog()
    prefs = UserPreferences(
        allergens=body.allergies,
        dietary_restrictions=body.dietary_restrictions,
    )
    return search_source_by_taste(
        body.taste_query,
        prefs,
        catalog,
        catalog,
        city=body.city,
        parser=_parser,
    )
