#!/usr/bin/env python3
"""
YouTube Subscription Curator - Main Entry Point
Adds today's videos from your subscriptions to your playlists, skipping the
ones you never watch
"""

import sys
import logging
import argparse
from googleapiclient.errors import HttpError
from config import Config, first_run_setup, TIMESTAMP_FILE, LOG_LEVEL
from curator import run_curation, PlaylistNotFoundError
from utils import WatermarkStore, setup_logging
from youtube_client import YouTubeClient, QUOTA_DAILY_LIMIT, NETWORK_ERRORS

logger = logging.getLogger(__name__)


def print_summary(summary):
    """Print end-of-run banner"""
    print(f"\n{'='*60}")
    if summary.dry_run:
        print("DRY RUN - no videos were added and the timestamp was not saved")
    print(f"Run complete! Added {summary.total_added} new video(s)")
    for title, count in summary.added.items():
        print(f"  • {title}: {count}")
    print(f"\nPipeline:")
    print(f"  • Subscriptions: {summary.subscriptions}")
    print(f"  • Recent uploads checked: {summary.candidates}")
    print(f"  • New since last run: {summary.in_window}")
    print(f"  • Public, not live: {summary.visible}")
    print(f"  • Passed channel rules: {summary.kept}")
    if summary.saved_watermark:
        print(f"\nNext run will look for videos after: {summary.saved_watermark.strftime('%Y-%m-%d %H:%M:%S UTC')}")
    else:
        print(f"\nNext run will look for videos after: {summary.watermark.strftime('%Y-%m-%d %H:%M:%S UTC')}")
    print(f"API quota used this run: {summary.quota_used} / {QUOTA_DAILY_LIMIT:,} units")
    print(f"{'='*60}\n")

def main(argv=None):
    """Main execution function"""
    parser = argparse.ArgumentParser(
        description="Add new videos from your YouTube subscriptions to your playlists"
    )
    parser.add_argument("--dry-run", action="store_true",
                        help="Show what would be added without touching playlists or the saved timestamp")
    parser.add_argument("--verbose", action="store_true",
                        help="Log every skipped video")
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else LOG_LEVEL)

    if not first_run_setup():
        return 1

    config = Config.load()
    dry_run = args.dry_run or config.dry_run

    youtube = YouTubeClient()
    logger.info("[Auth] Authenticating...")
    youtube.authenticate()
    logger.info("[Auth] Authentication completed")

    try:
        summary = run_curation(youtube, WatermarkStore(TIMESTAMP_FILE), config, dry_run=dry_run)
    except HttpError as e:
        if "quotaExceeded" in str(e) or b"quotaExceeded" in (e.content or b""):
            print(f"\n⚠️ QUOTA EXCEEDED!")
            print(f"   YouTube API daily limit of {QUOTA_DAILY_LIMIT:,} units reached.")
            print(f"   Quota resets at midnight Pacific Time (PT/PDT).")
        logger.error("[Curator] Run aborted, timestamp NOT updated - videos will be rechecked next run")
        return 1
    except NETWORK_ERRORS as e:
        print(f"\n⚠️ Could not reach YouTube: {e}")
        logger.error("[Curator] Run aborted, timestamp NOT updated - videos will be rechecked next run")
        return 1
    except PlaylistNotFoundError as e:
        logger.error(f"[Router] {e} - create it on YouTube or change config.yaml")
        return 1

    print_summary(summary)
    return 0

if __name__ == '__main__':
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\n👋 Operation interrupted by user.")
        sys.exit(0)
    except Exception as e:
        print(f"\n❌ Critical error: {e}")
        sys.exit(1)
