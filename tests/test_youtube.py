from types import SimpleNamespace

import pytest

from app.services import youtube
from app.services.youtube import extract_video_id, fetch_video_metadata, is_valid_youtube_url

VIDEO_ID = "dQw4w9WgXcQ"


@pytest.mark.parametrize("url", [
    f"https://www.youtube.com/watch?v={VIDEO_ID}",
    f"https://youtube.com/watch?v={VIDEO_ID}",
    f"www.youtube.com/watch?v={VIDEO_ID}",
    f"youtube.com/watch?v={VIDEO_ID}",
    f"https://www.youtube.com/watch?v={VIDEO_ID}&t=42s",
    f"https://youtu.be/{VIDEO_ID}",
    f"youtu.be/{VIDEO_ID}?t=10",
    f"https://www.youtu.be/{VIDEO_ID}",
    f"https://youtube.com/shorts/{VIDEO_ID}",
    f"https://www.youtube.com/shorts/{VIDEO_ID}?feature=share",
])
def test_extract_video_id_from_accepted_shapes(url):
    assert extract_video_id(url) == VIDEO_ID


@pytest.mark.parametrize("url", [
    "",
    "not a url",
    "https://www.youtube.com/watch?v=short",
    "https://www.youtube.com/playlist?list=abc",
    "https://youtu.be/",
])
def test_extract_video_id_returns_none(url):
    assert extract_video_id(url) is None


def test_canonical_pattern_wins():
    url = "https://www.youtube.com/shorts/AAAAAAAAAAA?v=BBBBBBBBBBB"
    assert extract_video_id(url) == "AAAAAAAAAAA"
    assert extract_video_id("https://youtube.com/watch?v=BBBBBBBBBBB&list=x") == "BBBBBBBBBBB"


@pytest.mark.parametrize("url", [
    f"https://www.youtube.com/watch?v={VIDEO_ID}",
    f"https://youtube.com/watch?v={VIDEO_ID}",
    f"https://youtu.be/{VIDEO_ID}",
    f"https://www.youtu.be/{VIDEO_ID}",
    f"youtube.com/watch?v={VIDEO_ID}",
    "http://www.youtube.com/@somechannel",
])
def test_is_valid_youtube_url_accepts_youtube_hosts(url):
    assert is_valid_youtube_url(url)


@pytest.mark.parametrize("url", [
    "https://vimeo.com/123",
    "https://example.com/watch?v=dQw4w9WgXcQ",
    "ftp://youtube.com/watch?v=dQw4w9WgXcQ",
    "https://youtube.com",
    "",
])
def test_is_valid_youtube_url_rejects_other_hosts(url):
    assert not is_valid_youtube_url(url)


def test_fetch_video_metadata(monkeypatch):
    requested = {}

    def fake_get(url, params=None, timeout=None):
        requested.update(url=url, params=params, timeout=timeout)
        return SimpleNamespace(
            raise_for_status=lambda: None,
            json=lambda: {"title": "Never Gonna Give You Up", "author_name": "Rick Astley"},
        )

    monkeypatch.setattr(youtube.requests, "get", fake_get)
    metadata = fetch_video_metadata(f"https://youtu.be/{VIDEO_ID}", timeout=3)

    assert metadata.title == "Never Gonna Give You Up"
    assert metadata.channel_name == "Rick Astley"
    assert metadata.thumbnail == f"https://img.youtube.com/vi/{VIDEO_ID}/hqdefault.jpg"
    assert requested["params"]["url"] == f"https://www.youtube.com/watch?v={VIDEO_ID}"
    assert requested["timeout"] == 3


def test_fetch_video_metadata_is_empty_on_failure():
    # no_network fixture makes requests.get raise
    metadata = fetch_video_metadata(f"https://youtu.be/{VIDEO_ID}")
    assert metadata.model_dump() == {"thumbnail": None, "title": None, "channel_name": None}


def test_fetch_video_metadata_without_id_skips_request(monkeypatch):
    monkeypatch.setattr(youtube.requests, "get", lambda *a, **k: pytest.fail("should not be called"))
    assert fetch_video_metadata("https://youtube.com/playlist?list=x").title is None
