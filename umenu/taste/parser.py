from __future__ import annotations

import logging
import math
from typing import Any

from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from ..llm.groq_client import request_taste_attributes
from .models import HeatLevel, TasteAttributes
from .taxonomy import DEFAULT_TAXONOMY, Taxonomy, match_tags

logger = logging.getLogger(__name__)

KEYWORD_CONFIDENCE = 0.5
_MIN_INGREDIENT_LENGTH = 3
_STOP_WORDS = frozenset({"and", "with"})

# Model output field -> TasteAttributes field. Both camelCase and snake_case
# spellings are accepted.
_MODEL_FIELDS: dict[str, str] = {
    "cuisines": "cuisines",
    "dietary": "dietary",
    "healthGoals": "health_goals",
    "health_goals": "health_goals",
    "foodTypes": "food_types",
    "food_types": "food_types",
    "prepMethods": "prep_methods",
    "prep_methods": "prep_methods",
}


def _is_blank(text: str | None) -> bool:
    return not isinstance(text, str) or not text.strip()


def is_loose_ingredient(token: str, triggers: frozenset[str]) -> bool:
    """True for tokens long enough, not a stop word, and not a taxonomy trigger."""
    return (
        len(token) >= _MIN_INGREDIENT_LENGTH
        and token not in triggers
        and token not in _STOP_WORDS
    )


class KeywordTasteParser:
    """Classify a taste query by substring matching against the taxonomy."""

    def __init__(self, taxonomy: Taxonomy = DEFAULT_TAXONOMY):
        self.taxonomy = taxonomy
        self._triggers = taxonomy.all_triggers()

    def parse(self, text: str | None) -> TasteAttributes:
        if _is_blank(text):
            return TasteAttributes()

        query = text.lower()
        heat_levels = match_tags(query, self.taxonomy.heat)

        return TasteAttributes(
            cuisines=match_tags(query, self.taxonomy.cuisines),
            heat=HeatLevel(heat_levels[0]) if heat_levels else HeatLevel.none,
            dietary=match_tags(query, self.taxonomy.dietary),
            health_goals=match_tags(query, self.taxonomy.health_goals),
            food_types=match_tags(query, self.taxonomy.food_types),
            prep_methods=match_tags(query, self.taxonomy.prep_methods),
            ingredients=self.extract_ingredients(query),
            confidence=KEYWORD_CONFIDENCE,
        )

    def extract_ingredients(self, query_lower: str) -> list[str]:
        """Whitespace tokens that are not trigger phrases, stop words or too short."""
        return [
            word for word in query_lower.split()
            if is_loose_ingredient(word, self._triggers)
        ]


class ModelAssistedTasteParser:
    """
    Parse with the Groq model, falling back to keyword parsing.

    The fallback covers every failure: disabled config, API errors, timeouts,
    output without a JSON object, and objects with no recognised fields.
    """

    def __init__(
        self,
        fallback: KeywordTasteParser,
        config: LLMConfig = DEFAULT_LLM_CONFIG,
    ):
        self.fallback = fallback
        self.config = config

    def parse(self, text: str | None) -> TasteAttributes:
        if _is_blank(text):
            return TasteAttributes()

        raw = request_taste_attributes(text, self.config)
        if raw is not None:
            try:
                attrs = self._from_model_output(raw)
            except (ValueError, TypeError):
                logger.warning("Model output failed validation, using keyword parser", exc_info=True)
                attrs = None
            else:
                if attrs is None:
                    logger.warning("Model output had no usable taste fields, using keyword parser")
            if attrs is not None:
                return attrs

        return self.fallback.parse(text)

    def _from_model_output(self, raw: dict[str, Any]) -> TasteAttributes | None:
        """Keep only taxonomy tags from the model output; ``None`` if nothing is recognised."""
        known_keys = set(_MODEL_FIELDS) | {"heat", "ingredients", "restrictions"}
        if not known_keys & set(raw):
            return None

        tables = self.fallback.taxonomy.tables()
        values: dict[str, Any] = {}
        for key, field_name in _MODEL_FIELDS.items():
            if key not in raw:
                continue
            allowed = tables[field_name]
            tags = values.setdefault(field_name, [])
            for tag in _as_strings(raw[key]):
                if tag in allowed and tag not in tags:
                    tags.append(tag)

        heat = str(raw.get("heat") or "none").strip().lower()
        values["heat"] = HeatLevel(heat) if heat in HeatLevel.__members__ else HeatLevel.none
        values["ingredients"] = [
            i for i in _as_strings(raw.get("ingredients"))
            if is_loose_ingredient(i, self.fallback._triggers)
        ]
        values["restrictions"] = _as_strings(raw.get("restrictions"))
        values["confidence"] = _model_confidence(raw.get("confidence"))

        return TasteAttributes(**values)


def _as_strings(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v).strip().lower() for v in value if isinstance(v, str) and v.strip()]


def _model_confidence(value: Any) -> float:
    # Non-empty queries always report a positive confidence
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return KEYWORD_CONFIDENCE
    if not math.isfinite(value) or value <= 0:
        return KEYWORD_CONFIDENCE
    return min(float(value), 1.0)


TasteParser = KeywordTasteParser | ModelAssistedTasteParser


def build_taste_parser(
    config: LLMConfig = DEFAULT_LLM_CONFIG,
    taxonomy: Taxonomy = DEFAULT_TAXONOMY,
) -> TasteParser:
    """Select the parsing strategy once, from configuration."""
    keyword = KeywordTasteParser(taxonomy)
    if config.enabled and config.api_key:
        logger.info("Model-assisted taste parsing enabled (model=%s)", config.model)
        return ModelAssistedTasteParser(keyword, config)
    return keyword


_default_parser: TasteParser | None = None


def parse_taste_query(text: str | None, parser: TasteParser | None = None) -> TasteAttributes:
    """Parse a free-text taste query. Never raises; blank input gives zero attributes."""
    global _default_parser
    if _is_blank(text):
        return TasteAttributes()
    if parser is None:
        if _default_parser is None:
            _default_parser = build_taste_parser()
        parser = _default_parser
    return parser.parse(text)
