"""
Model parser configuration.

The model-assisted taste parser is opt-in: it is selected only when
``USE_MODEL_PARSER=true`` and ``GROQ_API_KEY`` is set, otherwise keyword
parsing is used. Values come from the environment or the project .env file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class LLMConfig:
    api_key: str = os.getenv("GROQ_API_KEY", "")
    model: str = os.getenv("GROQ_MODEL", "llama-3.1-8b-instant")
    timeout: float = 10.0
    max_tokens: int = 512
    enabled: bool = os.getenv("USE_MODEL_PARSER", "false").lower() == "true"


DEFAULT_LLM_CONFIG = LLMConfig()
