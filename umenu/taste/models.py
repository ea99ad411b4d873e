from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class HeatLevel(str, Enum):
    none = "none"
    mild = "mild"
    medium = "medium"
    spicy = "spicy"


class TasteAttributes(BaseModel):
    cuisines: list[str] = Field(default_factory=list)
    heat: HeatLevel = HeatLevel.none
    dietary: list[str] = Field(default_factory=list)
    health_goals: list[str] = Field(default_factory=list)
    food_types: list[str] = Field(default_factory=list)
    prep_methods: list[str] = Field(default_factory=list)
    ingredients: list[str] = Field(default_factory=list)
    restrictions: list[str] = Field(default_factory=list)
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


class TasteParseRequest(BaseModel):
    query: str = Field(default="", max_length=1000)
