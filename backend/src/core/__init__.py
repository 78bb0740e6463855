# backend/src/core/__init__.py
"""
Core package for the quiz explanation service.
Exposes the request/response schemas, settings and the Gemini requester.
"""

from .schemas import ExplainRequest, ExplainResponse
from .settings import GeminiSettings, load_settings
from .gemini_explainer import request_explanation

__all__ = [
    "ExplainRequest",
    "ExplainResponse",
    "GeminiSettings",
    "load_settings",
    "request_explanation",
]
