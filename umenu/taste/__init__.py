"""
Taste query parsing.

Responsibilities:
- Hold the attribute taxonomy (cuisine, heat, dietary, health goal, food type,
  preparation method).
- Turn a free-text taste query into structured TasteAttributes.
- Optionally ask a Groq model first, always falling back to keyword matching.
"""
