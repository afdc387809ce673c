#!/usr/bin/env python3
"""
Utilities Module
Data models, duration/timestamp parsing, watermark storage and logging
"""

import re
import sys
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, List, Dict, Any
from config import ADDED_VIDEOS_FILE, LOG_FILE

logger = logging.getLogger(__name__)

# =====================================
# DATA MODELS
# =====================================

@dataclass(frozen=True)
class Subscription:
    """A channel the user is subscribed to"""
    channel_id: str
    channel_title: str


@dataclass(frozen=True)
class Video:
    """A video found in a channel's uploads playlist, enriched later with video details"""
    video_id: str
    channel_title: str
    title: str
    published_at: datetime
    resource_id: Dict[str, Any]
    duration_minutes: Optional[float] = None
    tags: Optional[List[str]] = None
    privacy_status: Optional[str] = None
    live_broadcast_content: Optional[str] = None
    live_streaming_details: Optional[Dict[str, Any]] = None

    @property
    def is_enriched(self) -> bool:
        """Check if video details have been attached"""
        return (self.duration_minutes is not None and
                self.privacy_status is not None and
                self.live_broadcast_content is not None)

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"


@dataclass
class RunSummary:
    """Counters for a single curation run"""
    watermark: datetime
    subscriptions: int = 0
    candidates: int = 0
    in_window: int = 0
    enriched: int = 0
    visible: int = 0
    kept: int = 0
    added: Dict[str, int] = field(default_factory=dict)
    saved_watermark: Optional[datetime] = None
    quota_used: int = 0
    dry_run: bool = False

    @property
    def total_added(self) -> int:
        return sum(self.added.values())

# =====================================
# PARSING
# =====================================

DURATION_PATTERN = re.compile(
    r'^P(?:(\d+)W)?(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$'
)

# Fractional seconds of any length (fromisoformat before 3.11 takes only 3 or 6 digits)
FRACTION_PATTERN = re.compile(r'\.(\d+)')

def parse_duration(duration_str):
    """Parse ISO 8601 duration string to seconds (e.g., PT1M30S -> 90.0, P1DT2H -> 93600.0)"""
    match = DURATION_PATTERN.match(duration_str or "")
    if not match:
        raise ValueError(f"Invalid ISO 8601 duration: {duration_str!r}")

    weeks, days, hours, minutes, seconds = match.groups()
    return (int(weeks or 0) * 604800 +
            int(days or 0) * 86400 +
            int(hours or 0) * 3600 +
            int(minutes or 0) * 60 +
            float(seconds or 0))

def duration_to_minutes(duration_str):
    """Convert an ISO 8601 duration to fractional minutes"""
    return parse_duration(duration_str) / 60

def _normalize_fraction(match):
    """Pad or cut fractional seconds to the six digits fromisoformat accepts"""
    return "." + match.group(1)[:6].ljust(6, "0")

def parse_timestamp(value):
    """Parse an ISO 8601 timestamp into a timezone-aware UTC datetime"""
    value = FRACTION_PATTERN.sub(_normalize_fraction, value.strip().replace('Z', '+00:00'))
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)

# =====================================
# WATERMARK STORAGE
# =====================================

class WatermarkStore:
    """Persists the publish time of the latest video added to a playlist"""

    def __init__(self, path):
        self.path = Path(path)

    def load(self, default):
        """Load saved timestamp, or return default if missing or unreadable"""
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info(f"[Watermark] No saved timestamp, starting from {default.isoformat()}")
            return default
        except OSError as e:
            logger.warning(f"[Watermark] Could not read {self.path}: {e}")
            return default

        try:
            return parse_timestamp(content)
        except ValueError:
            logger.warning(f"[Watermark] Corrupt timestamp in {self.path}: {content!r}")
            return default

    def save(self, timestamp):
        """Overwrite saved timestamp"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(timestamp.isoformat(), encoding="utf-8")
        logger.info(f"[Watermark] Last timestamp saved to {self.path}")

# =====================================
# LOGGING UTILITIES
# =====================================

def setup_logging(level=logging.INFO, log_file=LOG_FILE):
    """Log to stdout and to the run log file"""
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=level,
        format='%(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file, encoding='utf-8')
        ]
    )
    # Discovery cache warnings are noise for a desktop script
    logging.getLogger('googleapiclient.discovery_cache').setLevel(logging.ERROR)

def log_added_video(video, playlist_title, log_file=None):
    """Append added video to the log file and print compact one-line format"""
    log_file = log_file or ADDED_VIDEOS_FILE
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    log_entry = f"[{timestamp}] [{playlist_title}] {video.channel_title} - {video.title} - {video.url}\n"

    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    with open(log_file, "a", encoding="utf-8") as f:
        f.write(log_entry)

    logger.info(f"[Router]   ✓ {video.title} → {playlist_title}")
