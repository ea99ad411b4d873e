from __future__ import annotations

from pydantic import BaseModel, Field

from ..taste.models import TasteAttributes


class MenuItem(BaseModel):
    id: str
    name: str
    description: str = ""
    category: str = ""
    price: float = 0.0
    allergens: list[str] = Field(default_factory=list)
    dietary_labels: list[str] = Field(default_factory=list)
    ingredients: list[str] = Field(default_factory=list)
    available: bool = True
    image: str | None = None
    calories: float | None = None


class ScoredMenuItem(MenuItem):
    score: int = Field(default=0, ge=0)
    match_reasons: list[str] = Field(default_factory=list, max_length=3)


class UserPreferences(BaseModel):
    allergens: list[str] = Field(default_factory=list)
    dietary_restrictions: list[str] = Field(default_factory=list)


class RestaurantSummary(BaseModel):
    id: str
    name: str
    address: str = ""
    city: str = ""
    rating: float | None = None
    review_count: int = 0
    source: str = "catalog"
    dietary_options: list[str] = Field(default_factory=list)
    phone: str | None = None
    website: str | None = None


class RestaurantMatch(BaseModel):
    restaurant: RestaurantSummary
    match_score: int
    meals: list[ScoredMenuItem] = Field(default_factory=list)


class TasteSearchRequest(BaseModel):
    taste_query: str = Field(..., min_length=1, max_length=1000)
    city: str | None = Field(default=None, description="Restrict the catalog to one city")
    allergies: list[str] = Field(default_factory=list)
    dietary_restrictions: list[str] = Field(default_factory=list)


class TasteSearchResponse(BaseModel):
    count: int
    taste_attributes: TasteAttributes
    restaurants: list[RestaurantMatch]
