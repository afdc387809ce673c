"""
Root pytest fixtures for curator tests.
"""

from datetime import datetime, timezone

import pytest

import utils
from config import Config
from utils import WatermarkStore


@pytest.fixture(autouse=True)
def added_videos_log(tmp_path, monkeypatch):
    """Keep the added-videos log out of the real config directory."""
    path = tmp_path / "added_videos.log"
    monkeypatch.setattr(utils, "ADDED_VIDEOS_FILE", str(path))
    return path


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def now():
    return datetime(2024, 5, 2, 9, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def store(tmp_path):
    return WatermarkStore(tmp_path / "latest_video_timestamp.txt")
