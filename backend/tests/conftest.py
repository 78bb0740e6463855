# backend/tests/conftest.py

import sys
from pathlib import Path

# Make `src` importable without installing the package
backend_root = Path(__file__).parent.parent
sys.path.insert(0, str(backend_root))

import json
import httpx
import pytest

from src.core.settings import GeminiSettings


@pytest.fixture
def settings():
    """Settings with a dummy key and the default model order"""
    return GeminiSettings(api_key="test-key")


@pytest.fixture
def calls():
    """Requests seen by the stub transport, in order"""
    return []


@pytest.fixture
def gemini_stub(calls):
    """
    Build an AsyncClient whose transport answers per model.

    `responses` maps a model id to either an httpx.Response or an exception
    instance to raise for that model.
    """
    def _make(responses):
        def handler(request: httpx.Request) -> httpx.Response:
            model = request.url.path.rsplit("/", 1)[-1].split(":")[0]
            calls.append({
                "model": model,
                "headers": request.headers,
                "body": json.loads(request.content),
            })
            outcome = responses[model]
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make
