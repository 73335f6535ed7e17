import pytest

from app.core.config import Settings
from app.core.errors import MissingCredential
from app.services.credentials import default_key_for_origin, resolve_api_key


def test_user_key_wins():
    assert resolve_api_key("k1", "k2") == "k1"


def test_default_key_used_when_user_key_missing():
    assert resolve_api_key(None, "k2") == "k2"
    assert resolve_api_key("", "k2") == "k2"


def test_missing_keys_fail():
    with pytest.raises(MissingCredential, match="API key is required"):
        resolve_api_key(None, None)
    with pytest.raises(MissingCredential):
        resolve_api_key("", "")


def test_default_key_available_to_everyone_without_allowed_origin():
    settings = Settings(openai_api_key="sk-default")
    assert default_key_for_origin(settings, None) == "sk-default"
    assert default_key_for_origin(settings, "https://anywhere.example") == "sk-default"


def test_default_key_restricted_to_allowed_origin():
    settings = Settings(openai_api_key="sk-default", allowed_origin="https://app.example.com")
    assert default_key_for_origin(settings, "https://app.example.com") == "sk-default"
    assert default_key_for_origin(settings, "https://app.example.com/") == "sk-default"
    assert default_key_for_origin(settings, "https://evil.example.com") is None
    assert default_key_for_origin(settings, None) is None
