from __future__ import annotations

import json
import logging
from typing import Any

from groq import Groq

from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

TASTE_PARSE_PROMPT = """\
Parse this food taste preference into structured attributes. Return JSON only, no explanations.

Input: "{query}"

Return ONLY a JSON object (no markdown, no backticks) with these fields:
{{
  "cuisines": ["italian", "mexican", "asian", "indian", "japanese", "thai", "american", "mediterranean", "french"],
  "heat": "mild|medium|spicy|none",
  "dietary": ["vegan", "vegetarian", "pescetarian", "keto", "paleo", "glutenfree", "halal", "kosher"],
  "healthGoals": ["heart-healthy", "low-sodium", "weight-loss", "muscle-building", "diabetes-friendly"],
  "foodTypes": ["tacos", "noodles", "pizza", "burger", "fish", "chicken", "steak", "salad", "soup", "sandwich"],
  "prepMethods": ["grilled", "fried", "baked", "raw", "steamed"],
  "ingredients": ["ingredient1", "ingredient2"],
  "restrictions": ["no dairy", "no gluten", "no nuts"],
  "confidence": 0.95
}}
Only include values that the input actually asks for."""


def extract_json_object(text: str) -> dict[str, Any] | None:
    """
    Decode the first balanced ``{...}`` block found in free model output.

    Braces inside JSON strings are ignored while balancing. Returns ``None``
    when no balanced block exists or the block is not valid JSON.
    """
    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for pos in range(start, len(text)):
            ch = text[pos]
            if in_string:
                if escaped:
                    escaped = False
                elif ch == "\\":
                    escaped = True
                elif ch == '"':
                    in_string = False
                continue
            if ch == '"':
                in_string = True
            elif ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    try:
                        parsed = json.loads(text[start : pos + 1])
                    except json.JSONDecodeError:
                        return None
                    return parsed if isinstance(parsed, dict) else None
        # Unbalanced from this brace; try the next opening brace
        start = text.find("{", start + 1)
    return None


def request_taste_attributes(
    query: str,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> dict[str, Any] | None:
    """
    Ask the Groq model to parse a taste query.

    Makes a single attempt bounded by ``config.timeout``. Returns the decoded
    JSON object, or ``None`` on any failure (timeout, API error, no JSON).
    """
    if not config.enabled or not config.api_key:
        return None

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout, max_retries=0)
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "user", "content": TASTE_PARSE_PROMPT.format(query=query)},
            ],
            max_tokens=config.max_tokens,
            temperature=0.1,
        )

        content = response.choices[0].message.content or ""
        parsed = extract_json_object(content)
        if parsed is None:
            logger.warning("Groq response contained no JSON object, falling back to keyword parsing")
        return parsed

    except Exception:
        logger.warning("Groq taste parsing failed, falling back to keyword parsing", exc_info=True)
        return None
