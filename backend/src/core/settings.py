# backend/src/core/settings.py

import os, logging
from typing import Tuple, Optional
from pydantic import BaseModel
from dotenv import load_dotenv

logger = logging.getLogger("quiz.settings")

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
# Primary first, then fallback
DEFAULT_MODELS: Tuple[str, ...] = ("gemini-3-flash-preview", "gemini-2.5-flash")


class GeminiSettings(BaseModel):
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    models: Tuple[str, ...] = DEFAULT_MODELS
    timeout: Optional[float] = None  # None = wait as long as the API takes


# ------------------------------------------------------------
# Environment loading
# ------------------------------------------------------------
def load_settings(api_key: str | None = None) -> GeminiSettings:
    """Build settings from env (.env supported). An explicit key wins."""
    load_dotenv()

    key = api_key or os.getenv("GEMINI_API_KEY", "")
    if not key:
        logger.warning("GEMINI_API_KEY is not set; explanations will be disabled.")

    models_env = os.getenv("GEMINI_MODELS", "")
    models = tuple(m.strip() for m in models_env.split(",") if m.strip()) or DEFAULT_MODELS

    timeout_env = os.getenv("GEMINI_TIMEOUT", "").strip()
    timeout = float(timeout_env) if timeout_env else None

    return GeminiSettings(
        api_key=key,
        base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        models=models,
        timeout=timeout,
    )
