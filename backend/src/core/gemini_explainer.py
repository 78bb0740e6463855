# backend/src/core/gemini_explainer.py

import logging
from typing import Any, Dict, Sequence
import httpx

from .settings import GeminiSettings

logger = logging.getLogger("quiz.explain")

# ------------------------------------------------------------
# Fixed user-facing messages
# ------------------------------------------------------------
MISSING_KEY_MESSAGE = "API key not configured. Please add GEMINI_API_KEY to your .env file."
UNEXPECTED_RESPONSE_MESSAGE = "Received unexpected response from API."
ALL_UNAVAILABLE_MESSAGE = "All models are currently unavailable. Please try again later."

OVERLOADED_STATUS = 503

# ------------------------------------------------------------
# Prompt template
# ------------------------------------------------------------
EXPLAIN_TEMPLATE = (
    "Question: {question}\n\n"
    "Available answers:\n"
    "{options}\n\n"
    "User selected: {user_answer}\n"
    "Correct answer: {correct_answer}\n\n"
    "Please explain why the user's answer was incorrect and why the correct answer is right. "
    "Reference the specific options in your explanation."
)

# ------------------------------------------------------------
# Helpers
# ------------------------------------------------------------
def format_answer_options(all_answers: Sequence[str]) -> str:
    """Lettered list: a) first\\nb) second ..."""
    return "\n".join(f"{chr(ord('a') + i)}) {answer}" for i, answer in enumerate(all_answers))


def build_prompt(
    question: str,
    user_answer: str,
    correct_answer: str,
    all_answers: Sequence[str] = (),
) -> str:
    return EXPLAIN_TEMPLATE.format(
        question=question,
        options=format_answer_options(all_answers),
        user_answer=user_answer,
        correct_answer=correct_answer,
    )


def extract_text(data: Any) -> str | None:
    """Pull candidates[0].content.parts[0].text out of a response body, if present."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(text, str) or not text:
        return None
    return text


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = {}
    error = body.get("error") if isinstance(body, dict) else None
    message = error.get("message") if isinstance(error, dict) else None
    return message or "Unknown error"


def _endpoint(settings: GeminiSettings, model: str) -> str:
    return f"{settings.base_url.rstrip('/')}/v1beta/models/{model}:generateContent"


# ------------------------------------------------------------
# Main requester
# ------------------------------------------------------------
async def request_explanation(
    question: str,
    user_answer: str,
    correct_answer: str,
    all_answers: Sequence[str] | None = None,
    *,
    settings: GeminiSettings,
    client: httpx.AsyncClient | None = None,
) -> str:
    """
    Ask Gemini why the user's answer was right or wrong.

    Models in ``settings.models`` are tried in order. Only an overloaded
    model (HTTP 503) or a transport failure moves on to the next one; any
    other API error is returned straight away. Failures come back as
    readable strings, so the result can always be shown to the user.
    """
    if not settings.api_key:
        logger.error("GEMINI_API_KEY is not set")
        return MISSING_KEY_MESSAGE

    prompt = build_prompt(question, user_answer, correct_answer, all_answers or ())
    headers = {
        "Content-Type": "application/json",
        "x-goog-api-key": settings.api_key,
    }
    payload: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}

    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=settings.timeout)

    try:
        models = list(settings.models)
        for i, model in enumerate(models):
            is_last = i == len(models) - 1
            try:
                logger.info(f"Trying model: {model}")
                resp = await client.post(_endpoint(settings, model), json=payload, headers=headers)

                if resp.status_code == OVERLOADED_STATUS:
                    logger.warning(f"Model {model} is overloaded, trying fallback...")
                    continue

                if not resp.is_success:
                    message = _error_message(resp)
                    logger.error(f"API Error: {resp.status_code} {message}")
                    return f"API Error: {resp.status_code} - {message}"

                data = resp.json()
                if data is None:
                    raise ValueError("Response body is null")
                text = extract_text(data)
                if text is None:
                    logger.error(f"Unexpected API response: {data}")
                    return UNEXPECTED_RESPONSE_MESSAGE

                logger.info(f"Success with model: {model}")
                return text
            except (httpx.HTTPError, ValueError) as e:
                logger.error(f"Error with model {model}: {e}")
                if is_last:
                    return f"Unable to generate explanation: {str(e) or 'Unknown error'}"
                continue
    finally:
        if owns_client:
            await client.aclose()

    return ALL_UNAVAILABLE_MESSAGE
