#!/usr/bin/env python3
"""
YouTube Client Module
Handles all YouTube API interactions, OAuth authentication, and quota tracking
"""

import os
import sys
import logging
import threading
from typing import List, Dict, Optional, Any
import httplib2
import google_auth_httplib2
from googleapiclient.discovery import build, Resource
from googleapiclient.errors import HttpError
from google_auth_oauthlib.flow import InstalledAppFlow
from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from config import SCOPES, CLIENT_SECRET_FILE, TOKEN_FILE
from utils import Subscription

logger = logging.getLogger(__name__)

# YouTube API Quota Costs (as per YouTube Data API v3 documentation)
QUOTA_LIST = 1
QUOTA_PLAYLIST_INSERT = 50
QUOTA_DAILY_LIMIT = 10000

# API page size limits
SUBSCRIPTIONS_PAGE_SIZE = 50
MAX_IDS_PER_REQUEST = 50
MY_PLAYLISTS_PAGE_SIZE = 20

# Transport failures (socket errors, timeouts, DNS) raised below HttpError
NETWORK_ERRORS = (OSError, httplib2.HttpLib2Error)


class YouTubeClient:
    """Manages YouTube API interactions and authentication"""

    def __init__(self, service: Optional[Resource] = None, credentials: Optional[Credentials] = None):
        self.service = service
        self.credentials = credentials
        self.quota_used_this_run = 0
        self._quota_lock = threading.Lock()
        self._local = threading.local()

    def authenticate(self):
        """Authenticate user via OAuth2 and build the YouTube service"""
        credentials = None

        if os.path.exists(TOKEN_FILE):
            credentials = Credentials.from_authorized_user_file(TOKEN_FILE, SCOPES)

        if not credentials or not credentials.valid:
            if credentials and credentials.expired and credentials.refresh_token:
                try:
                    credentials.refresh(Request())
                    logger.info("[Auth] Access token refreshed")
                except RefreshError as e:
                    logger.warning(f"[Auth] Token refresh failed, re-authorizing: {e}")
                    credentials = self._authorize_interactively()
            else:
                credentials = self._authorize_interactively()

            with open(TOKEN_FILE, "w", encoding="utf-8") as token_file:
                token_file.write(credentials.to_json())
            logger.info(f"[Auth] Token stored to {TOKEN_FILE}")

        self.credentials = credentials
        self.service = build("youtube", "v3", credentials=credentials)
        return self.service

    @staticmethod
    def _authorize_interactively():
        """Run the installed-app consent flow in the browser"""
        try:
            flow = InstalledAppFlow.from_client_secrets_file(CLIENT_SECRET_FILE, SCOPES)
            return flow.run_local_server(port=0)
        except KeyboardInterrupt:
            print("\n\nAuthentication cancelled by user")
            sys.exit(0)

    # =====================================
    # QUOTA TRACKING
    # =====================================

    def add_quota_cost(self, cost):
        """Track API quota usage"""
        with self._quota_lock:
            self.quota_used_this_run += cost

    def get_quota_usage(self):
        """Get current quota usage for this run"""
        return self.quota_used_this_run

    # =====================================
    # REQUEST EXECUTION
    # =====================================

    def _thread_http(self):
        """Per-thread authorized transport (httplib2.Http is not thread-safe)"""
        if self.credentials is None:
            return None
        http = getattr(self._local, "http", None)
        if http is None:
            http = google_auth_httplib2.AuthorizedHttp(self.credentials, http=httplib2.Http())
            self._local.http = http
        return http

    def _execute(self, request, operation, cost=QUOTA_LIST):
        """Execute an API request, logging response details on failure"""
        try:
            response = request.execute(http=self._thread_http())
        except HttpError as e:
            logger.error(f"[API] {operation} failed (HTTP {e.resp.status}): {e}")
            raise
        except NETWORK_ERRORS as e:
            logger.error(f"[API] {operation} failed (network): {e!r}")
            raise
        self.add_quota_cost(cost)
        return response

    # =====================================
    # API CALLS
    # =====================================

    def list_subscriptions(self) -> List[Subscription]:
        """Get all of the user's subscriptions, following page tokens until exhausted"""
        subscriptions = []
        next_page_token = None

        while True:
            request = self.service.subscriptions().list(
                part="snippet",
                mine=True,
                maxResults=SUBSCRIPTIONS_PAGE_SIZE,
                order="alphabetical",
                pageToken=next_page_token,
                fields="nextPageToken,items(snippet(resourceId/channelId,title))"
            )
            response = self._execute(request, "subscriptions.list")

            for item in response.get("items", []):
                subscriptions.append(Subscription(
                    channel_id=item["snippet"]["resourceId"]["channelId"],
                    channel_title=item["snippet"]["title"]
                ))

            next_page_token = response.get("nextPageToken")
            if not next_page_token:
                break

        return subscriptions

    def get_uploads_playlist_id(self, channel_id) -> Optional[str]:
        """Get the channel's 'uploads' playlist ID"""
        request = self.service.channels().list(
            part="contentDetails",
            id=channel_id,
            fields="items(contentDetails/relatedPlaylists/uploads)"
        )
        response = self._execute(request, "channels.list")

        if not response.get("items"):
            return None
        return response["items"][0]["contentDetails"]["relatedPlaylists"]["uploads"]

    def list_playlist_items(self, playlist_id, max_results=50) -> List[Dict[str, Any]]:
        """Get the most recent items of a playlist (uploads playlists come newest first)"""
        request = self.service.playlistItems().list(
            part="snippet,contentDetails",
            playlistId=playlist_id,
            maxResults=max_results
        )
        response = self._execute(request, "playlistItems.list")
        return response.get("items", [])

    def get_video_details(self, video_ids) -> Dict[str, Dict[str, Any]]:
        """Get video resources keyed by ID (at most 50 IDs per call)"""
        if len(video_ids) > MAX_IDS_PER_REQUEST:
            raise ValueError(f"At most {MAX_IDS_PER_REQUEST} video IDs per request, got {len(video_ids)}")

        request = self.service.videos().list(
            part="contentDetails,snippet,status,liveStreamingDetails",
            id=",".join(video_ids)
        )
        response = self._execute(request, "videos.list")
        return {item["id"]: item for item in response.get("items", [])}

    def list_my_playlists(self) -> List[Dict[str, Any]]:
        """Get the user's own playlists (first page only)"""
        request = self.service.playlists().list(
            part="id,snippet",
            mine=True,
            maxResults=MY_PLAYLISTS_PAGE_SIZE
        )
        response = self._execute(request, "playlists.list")
        return response.get("items", [])

    def insert_playlist_item(self, playlist_id, resource_id):
        """Add a video to a playlist"""
        request = self.service.playlistItems().insert(
            part="snippet",
            body={
                "snippet": {
                    "playlistId": playlist_id,
                    "resourceId": resource_id
                }
            }
        )
        return self._execute(request, "playlistItems.insert", cost=QUOTA_PLAYLIST_INSERT)
