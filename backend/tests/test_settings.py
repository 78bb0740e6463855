from src.core.settings import DEFAULT_BASE_URL, DEFAULT_MODELS, load_settings


def test_defaults_when_env_empty(monkeypatch):
    for var in ("GEMINI_API_KEY", "GEMINI_BASE_URL", "GEMINI_MODELS", "GEMINI_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)
    s = load_settings()
    assert s.api_key == ""
    assert s.base_url == DEFAULT_BASE_URL
    assert s.models == DEFAULT_MODELS
    assert s.timeout is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    monkeypatch.setenv("GEMINI_BASE_URL", "https://example.test/")
    monkeypatch.setenv("GEMINI_MODELS", "m1, m2")
    monkeypatch.setenv("GEMINI_TIMEOUT", "12.5")
    s = load_settings()
    assert s.api_key == "env-key"
    assert s.base_url == "https://example.test"
    assert s.models == ("m1", "m2")
    assert s.timeout == 12.5


def test_explicit_key_wins(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    assert load_settings(api_key="param-key").api_key == "param-key"
