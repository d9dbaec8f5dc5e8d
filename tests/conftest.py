"""Shared pytest fixtures for snadmin tests."""

import logging
from collections.abc import Callable
from typing import Any

import pytest

from snadmin.config.settings import AdminSettings
from snadmin.episodes.models import Episode

BASE_URL = "https://snapcast.test/api/podcasts"
FEED_ID = "feed-123"
TOKEN = "secret-token"


@pytest.fixture
def make_episode_payload() -> Callable[..., dict[str, Any]]:
    """Factory for API episode JSON objects."""

    def _make(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": 5,
            "title": "Episode five",
            "subtitle": None,
            "description": "All about five",
            "media_url": "https://cdn.test/media/episode-5.mp3",
            "media_size": 12_345_678,
            "media_type": "audio/mpeg",
            "media_duration": 3661,
            "pub_date": "2024-03-01T10:00:00+00:00",
            "link": None,
            "image": None,
            "episode_type": "full",
            "season": "1",
            "episode": "5",
            "uuid": "ep-uuid-5",
            "podcast_uuid": "pod-uuid",
        }
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture
def make_episode(make_episode_payload) -> Callable[..., Episode]:
    """Factory for Episode models."""

    def _make(**overrides: Any) -> Episode:
        return Episode.model_validate(make_episode_payload(**overrides))

    return _make


@pytest.fixture
def settings() -> AdminSettings:
    """Settings pointing at a fake API."""
    return AdminSettings(feed_id=FEED_ID, token=TOKEN, base_url=BASE_URL)


@pytest.fixture
def admin_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set the required environment variables."""
    monkeypatch.setenv("SNADMIN_FEED_ID", FEED_ID)
    monkeypatch.setenv("SNADMIN_TOKEN", TOKEN)
    monkeypatch.setenv("SNADMIN_BASE_URL", BASE_URL)
    monkeypatch.delenv("SNADMIN_TIMEOUT", raising=False)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo setup_logging() changes made by a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
