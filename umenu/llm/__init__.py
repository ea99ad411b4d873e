"""
Text-generation integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Send a taste query to the model and recover the JSON object it returns.
- Graceful fallback when the model is unavailable or returns invalid output.
"""
