import pytest
import requests

from app.core.config import Settings
from app.services import youtube
from tests.fakes import FakeDownloader, FakeOpenAI, FakeTranscriptFetcher


@pytest.fixture
def settings(tmp_path):
    return Settings(openai_api_key="sk-default", download_dir=tmp_path / "downloads")


@pytest.fixture
def fake_openai():
    return FakeOpenAI()


@pytest.fixture
def downloader():
    return FakeDownloader()


@pytest.fixture
def fetcher():
    return FakeTranscriptFetcher()


@pytest.fixture(autouse=True)
def no_network(monkeypatch):
    def refuse(*args, **kwargs):
        raise requests.ConnectionError("network disabled in tests")

    monkeypatch.setattr(youtube.requests, "get", refuse)
