#!/usr/bin/env python3
"""
Configuration and Setup Module
Handles all configuration settings and first-run setup wizard
"""

import os
import logging
import yaml

# =====================================
# GENERAL CONFIGURATION - EDIT THESE VALUES
# =====================================

# Script Behavior
DRY_RUN = False                                         # Set to True to simulate without adding videos or saving the timestamp
LOOKBACK_DAYS = 1                                       # How far back to look when no timestamp has been saved yet
UPLOADS_PER_CHANNEL = 50                                # Most recent uploads checked per channel (API maximum is 50)
MAX_WORKERS = 8                                         # Parallel API requests for channel lookups and video details
LOG_LEVEL = logging.INFO                                # logging.DEBUG shows every skipped video

# Playlist Defaults (override in config.yaml)
DEFAULT_SHORT_PLAYLIST = "Subscriptions"                # Videos up to the threshold go here
DEFAULT_LONG_PLAYLIST = "Car"                           # Videos longer than the threshold go here
DEFAULT_DURATION_THRESHOLD_MINUTES = 30

# =====================================
# TECHNICAL CONFIGURATION (DO NOT EDIT)
# =====================================

# OAuth Scopes
SCOPES = ["https://www.googleapis.com/auth/youtube"]

# Get the directory where this script is located
SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))

# Configuration subdirectory for all generated files
CONFIG_DIR = os.path.join(SCRIPT_DIR, "config")

# File Paths
CONFIG_FILE = os.path.join(CONFIG_DIR, "config.yaml")                       # User-specific settings (not in repository)
CLIENT_SECRET_FILE = os.path.join(CONFIG_DIR, "client_secret.json")         # OAuth credentials file (not in repository)
TOKEN_FILE = os.path.join(CONFIG_DIR, "token.json")                         # OAuth token cache (auto-generated)
TIMESTAMP_FILE = os.path.join(CONFIG_DIR, "latest_video_timestamp.txt")     # Publish time of the last added video (auto-generated)
LOG_FILE = os.path.join(CONFIG_DIR, "curator.log")                          # Run log (auto-generated)
ADDED_VIDEOS_FILE = os.path.join(CONFIG_DIR, "added_videos.log")            # Log of added videos (auto-generated)

# =====================================
# CONFIG CLASS
# =====================================

class Config:
    """Configuration manager"""

    def __init__(self, data=None):
        data = data or {}
        playlists = data.get("playlists") or {}
        self.short_playlist_title = playlists.get("short", DEFAULT_SHORT_PLAYLIST)
        self.long_playlist_title = playlists.get("long", DEFAULT_LONG_PLAYLIST)
        self.duration_threshold_minutes = float(
            data.get("duration_threshold_minutes", DEFAULT_DURATION_THRESHOLD_MINUTES)
        )
        self.dry_run = DRY_RUN
        self.lookback_days = LOOKBACK_DAYS
        self.uploads_per_channel = UPLOADS_PER_CHANNEL
        self.max_workers = MAX_WORKERS

    @classmethod
    def load(cls, path=CONFIG_FILE):
        """Load configuration from file, falling back to defaults for missing keys"""
        if not os.path.exists(path):
            return cls()
        with open(path, "r", encoding="utf-8") as f:
            return cls(yaml.safe_load(f))

# =====================================
# SETUP WIZARD
# =====================================

def create_default_config(path=CONFIG_FILE):
    """Create default config.yaml file"""
    default_config = {
        "playlists": {
            "short": DEFAULT_SHORT_PLAYLIST,
            "long": DEFAULT_LONG_PLAYLIST
        },
        "duration_threshold_minutes": DEFAULT_DURATION_THRESHOLD_MINUTES
    }

    with open(path, "w", encoding="utf-8") as file:
        yaml.dump(default_config, file, default_flow_style=False, sort_keys=False)

    print(f"✓ Created {path}")
    return default_config

def check_client_secret():
    """Check if client_secret.json exists"""
    return os.path.exists(CLIENT_SECRET_FILE)

def first_run_setup():
    """Check that everything needed for an unattended run is in place"""
    # Create config directory if it doesn't exist
    if not os.path.exists(CONFIG_DIR):
        os.makedirs(CONFIG_DIR)
        print(f"✓ Created configuration directory: {CONFIG_DIR}\n")

    # Check for client_secret.json first
    if not check_client_secret():
        print(f"⚠️  Missing {CLIENT_SECRET_FILE}!\n")
        print(f"┌────────────────────────────────────────────────────┐")
        print(f"│ STEP-BY-STEP: Get OAuth 2.0 Credentials            │")
        print(f"└────────────────────────────────────────────────────┘\n")

        print(f"📋 STEP 1: Create/Select Google Cloud Project")
        print(f"   → Go to: https://console.cloud.google.com/")
        print(f"   → Click 'Select a project' → 'NEW PROJECT'\n")

        print(f"📋 STEP 2: Enable YouTube Data API v3")
        print(f"   → Go to: https://console.cloud.google.com/apis/library")
        print(f"   → Search for 'YouTube Data API v3' → Click 'ENABLE'\n")

        print(f"📋 STEP 3: Configure OAuth Consent Screen")
        print(f"   → Go to: https://console.cloud.google.com/apis/credentials/consent")
        print(f"   → Select 'External' and add your email under 'Test users'\n")

        print(f"📋 STEP 4: Create OAuth 2.0 Client ID")
        print(f"   → Go to: https://console.cloud.google.com/apis/credentials")
        print(f"   → 'CREATE CREDENTIALS' → 'OAuth client ID' → 'Desktop app'\n")

        print(f"📋 STEP 5: Download Credentials")
        print(f"   → Click 'DOWNLOAD JSON'")
        print(f"   → Rename the file to: {os.path.basename(CLIENT_SECRET_FILE)}")
        print(f"   → Move it to: {CONFIG_DIR}\n")

        print(f"┌────────────────────────────────────────────────────┐")
        print(f"│ After completing these steps, run the script again.│")
        print(f"└────────────────────────────────────────────────────┘")
        return False

    if not os.path.exists(CONFIG_FILE):
        create_default_config(CONFIG_FILE)

    return True
