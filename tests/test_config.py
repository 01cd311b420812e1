import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from eureka import config


def test_model_chain_default(monkeypatch):
    monkeypatch.delenv("GEMINI_MODEL", raising=False)
    assert config.model_chain() == ["gemini-2.0-flash", "gemini-1.5-flash"]


def test_model_chain_deduplicates(monkeypatch):
    monkeypatch.setenv("GEMINI_MODEL", "gemini-1.5-flash")
    assert config.model_chain() == ["gemini-1.5-flash"]


def test_api_key_lookup(monkeypatch):
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    assert config.get_api_key() is None

    monkeypatch.setenv("GEMINI_API_KEY", "gemini")
    assert config.get_api_key() == "gemini"

    monkeypatch.setenv("GOOGLE_API_KEY", "google")
    assert config.get_api_key() == "google"


def test_presenton_url(monkeypatch):
    monkeypatch.setenv("PRESENTON_URL", "  http://deck.local/  ")
    assert config.get_presenton_url() == "http://deck.local"
    monkeypatch.setenv("PRESENTON_URL", "")
    assert config.get_presenton_url() is None
