"""
MuseMind poem backend.

Provides:
- Theme prompt templates and poem cleanup helpers
- Async Gemini client with error classification
- FastAPI app serving the JSON API and the static frontend
"""
