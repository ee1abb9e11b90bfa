from ddclient.client import DEFAULT_BASE_URL
from ddclient.config import Settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.api_key == ""
    assert s.base_url == DEFAULT_BASE_URL
    assert s.timeout == 30.0
    assert s.log_format == "text"


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("DIRECTDECISIONS_API_KEY", "secret")
    monkeypatch.setenv("DIRECTDECISIONS_BASE_URL", "https://api-demo.directdecisions.com/")
    monkeypatch.setenv("DIRECTDECISIONS_TIMEOUT", "5")
    s = Settings(_env_file=None)
    assert s.api_key == "secret"
    assert s.base_url == "https://api-demo.directdecisions.com/"
    assert s.timeout == 5.0
