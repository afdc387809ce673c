#!/usr/bin/env python3
"""
Curator Module
Collects today's uploads from all subscriptions, filters them and files
them into the short/long playlists
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from channel_filters import apply_channel_rules
from utils import Video, RunSummary, duration_to_minutes, parse_timestamp, log_added_video
from youtube_client import MAX_IDS_PER_REQUEST

logger = logging.getLogger(__name__)

HIDDEN_BROADCAST_STATES = {"live", "upcoming"}


class PlaylistNotFoundError(LookupError):
    """Raised when a destination playlist is missing from the user's playlists"""


# =====================================
# UPLOAD RESOLVER
# =====================================

def video_from_playlist_item(item):
    """Build a candidate video from an uploads playlist item (None if it has no publish time)"""
    snippet = item["snippet"]
    published = item.get("contentDetails", {}).get("videoPublishedAt")
    if not published:
        return None

    return Video(
        video_id=snippet["resourceId"]["videoId"],
        channel_title=snippet["channelTitle"],
        title=snippet["title"],
        published_at=parse_timestamp(published),
        resource_id=snippet["resourceId"]
    )

def get_channel_uploads(client, subscription, max_results=50):
    """Get the most recent uploads of a subscribed channel"""
    uploads_playlist_id = client.get_uploads_playlist_id(subscription.channel_id)
    if not uploads_playlist_id:
        logger.warning(f"[Uploads] Channel not found: {subscription.channel_title}")
        return []

    videos = []
    for item in client.list_playlist_items(uploads_playlist_id, max_results=max_results):
        video = video_from_playlist_item(item)
        if video is None:
            logger.debug(f"[Uploads] Skipped unavailable item in {subscription.channel_title}")
            continue
        videos.append(video)
    return videos

def resolve_uploads(client, subscriptions, max_workers=8, max_results=50):
    """Get recent uploads of every subscription, concatenated in subscription order"""
    if not subscriptions:
        return []

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        per_channel = list(executor.map(
            lambda sub: get_channel_uploads(client, sub, max_results),
            subscriptions
        ))

    return [video for uploads in per_channel for video in uploads]

# =====================================
# TIME WINDOW FILTER
# =====================================

def filter_time_window(videos, watermark, now):
    """Keep videos published strictly after the watermark and strictly before now"""
    return [video for video in videos if watermark < video.published_at < now]

# =====================================
# METADATA ENRICHER
# =====================================

def enrich_video(video, details):
    """Attach duration, tags and visibility from a video resource"""
    snippet = details.get("snippet", {})
    return replace(
        video,
        duration_minutes=duration_to_minutes(details["contentDetails"]["duration"]),
        tags=snippet.get("tags"),
        privacy_status=details.get("status", {}).get("privacyStatus"),
        live_broadcast_content=snippet.get("liveBroadcastContent", "none"),
        live_streaming_details=details.get("liveStreamingDetails")
    )

def enrich_videos(client, videos, max_workers=8):
    """Fetch video details in batches and return enriched videos in input order"""
    if not videos:
        return []

    batches = [videos[i:i + MAX_IDS_PER_REQUEST] for i in range(0, len(videos), MAX_IDS_PER_REQUEST)]
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        results = list(executor.map(
            lambda batch: client.get_video_details([video.video_id for video in batch]),
            batches
        ))

    details_by_id = {}
    for details in results:
        details_by_id.update(details)

    enriched = []
    for video in videos:
        details = details_by_id.get(video.video_id)
        if details is None:
            logger.warning(f"[Enrich] No details returned, skipping: {video.channel_title} - {video.title}")
            continue
        if not details.get("contentDetails", {}).get("duration"):
            # Still processing
            logger.warning(f"[Enrich] No duration yet, skipping: {video.channel_title} - {video.title}")
            continue
        enriched.append(enrich_video(video, details))
    return enriched

# =====================================
# VISIBILITY FILTER
# =====================================

def is_visible(video):
    """Public, already-finished videos only"""
    return (video.privacy_status == "public" and
            video.live_broadcast_content not in HIDDEN_BROADCAST_STATES)

def filter_visibility(videos):
    """Drop non-public videos and live or scheduled broadcasts"""
    visible = []
    for video in videos:
        if not video.is_enriched:
            raise ValueError(f"Video {video.video_id} reached the visibility filter without details")
        if is_visible(video):
            visible.append(video)
        else:
            logger.debug(f"[Filter] Skipped ({video.privacy_status}/{video.live_broadcast_content}): "
                         f"{video.channel_title} - {video.title}")
    return visible

# =====================================
# PLAYLIST ROUTER
# =====================================

def sort_chronologically(videos):
    """Least recent first (stable for equal timestamps)"""
    return sorted(videos, key=lambda video: video.published_at)

def partition_by_duration(videos, threshold_minutes):
    """Split into (short, long) where short means duration <= threshold"""
    short = [video for video in videos if video.duration_minutes <= threshold_minutes]
    long = [video for video in videos if video.duration_minutes > threshold_minutes]
    return short, long

def find_playlist_ids(client, titles):
    """Map each wanted title to the ID of the user's playlist with that title"""
    found = {}
    for playlist in client.list_my_playlists():
        title = playlist["snippet"]["title"]
        if title in titles and title not in found:
            found[title] = playlist["id"]
    return found

def route_to_playlists(client, videos, config, dry_run=False):
    """Insert videos one at a time into the short or long playlist, in the given order"""
    short, long = partition_by_duration(videos, config.duration_threshold_minutes)
    routes = [(config.short_playlist_title, short), (config.long_playlist_title, long)]
    added = {title: 0 for title, _ in routes}

    if not videos:
        return added

    if dry_run:
        for title, playlist_videos in routes:
            for video in playlist_videos:
                logger.info(f"[Router]   (dry run) {video.title} → {title}")
        return added

    playlist_ids = find_playlist_ids(client, [title for title, _ in routes])
    for title, playlist_videos in routes:
        if playlist_videos and title not in playlist_ids:
            raise PlaylistNotFoundError(f"Playlist '{title}' not found among your playlists")

    for title, playlist_videos in routes:
        for video in playlist_videos:
            client.insert_playlist_item(playlist_ids[title], video.resource_id)
            log_added_video(video, title)
            added[title] += 1

    return added

# =====================================
# PIPELINE
# =====================================

def run_curation(client, store, config, now=None, dry_run=False):
    """Run the whole pipeline once and return its summary"""
    now = now or datetime.now(timezone.utc)
    watermark = store.load(default=now - timedelta(days=config.lookback_days))
    summary = RunSummary(watermark=watermark, dry_run=dry_run)

    logger.info(f"[Curator] Checking for new videos since: {watermark.strftime('%Y-%m-%d %H:%M:%S UTC')}")

    subscriptions = client.list_subscriptions()
    summary.subscriptions = len(subscriptions)
    logger.info(f"[Curator] Found {len(subscriptions)} subscriptions")

    candidates = resolve_uploads(client, subscriptions, config.max_workers, config.uploads_per_channel)
    summary.candidates = len(candidates)

    videos = filter_time_window(candidates, watermark, now)
    summary.in_window = len(videos)
    logger.info(f"[Curator] {len(videos)} of {len(candidates)} recent uploads are new")

    videos = enrich_videos(client, videos, config.max_workers)
    summary.enriched = len(videos)

    videos = filter_visibility(videos)
    summary.visible = len(videos)

    videos = apply_channel_rules(videos)
    summary.kept = len(videos)
    logger.info(f"[Curator] {len(videos)} videos passed all filters")

    videos = sort_chronologically(videos)
    summary.added = route_to_playlists(client, videos, config, dry_run=dry_run)

    # Save timestamp of most recent video so next time we know the starting point
    if videos and not dry_run:
        latest = videos[-1].published_at
        if latest > watermark:
            store.save(latest)
            summary.saved_watermark = latest

    summary.quota_used = client.get_quota_usage()
    return summary
