#!/usr/bin/env python3
"""
Channel Filters Module
Per-channel rules for the kinds of videos I never watch

Titles are matched case-insensitively. Tags are matched exactly, so when a
channel tags inconsistently both spellings are listed. A video without tags
passes every "no tag" check and fails every "has tag" check.
"""

import re
import logging

logger = logging.getLogger(__name__)

YEAR_PATTERN = re.compile(r'20\d\d')

SHORT_CIRCUIT_HARDWARE_TAGS = [
    "keyboard", "mouse", "headphones", "headset", "microphone", "monitor",
    "webcam", "speakers", "controller", "router", "power bank"
]

OTHER_FIGHTING_GAMES = [
    "tekken", "mortal kombat", "guilty gear", "dragon ball fighterz", "dbfz",
    "granblue", "king of fighters", "kof", "soulcalibur", "under night",
    "melty blood", "skullgirls", "killer instinct"
]

DAVID_PAKMAN_SKIP_TERMS = [
    "caller", "call-in", "bonus", "interview", "livestream",
    "q&a", "debate", "reaction", "highlights"
]

# =====================================
# MATCH HELPERS
# =====================================

def title_has_any(video, terms):
    """Check if lower-cased title contains any of the terms"""
    title = video.title.lower()
    return any(term in title for term in terms)

def tags_have_any(video, tags):
    """Check tag membership (no tags never matches)"""
    if not video.tags:
        return False
    video_tags = set(video.tags)
    return any(tag in video_tags for tag in tags)

def title_starts_with_any(video, prefixes):
    title = video.title.lower()
    return any(title.startswith(prefix) for prefix in prefixes)

def is_not_stream(video):
    """Videos without a live streaming block were uploaded, not streamed"""
    return video.live_streaming_details is None

# =====================================
# RULE TABLE
# =====================================

CHANNEL_RULES = {
    # Only hip-hop and rap reviews
    "theneedledrop": lambda v: (title_has_any(v, ["review"]) and
                                tags_have_any(v, ["rap", "hip hop"])),

    # Memes and rap, but no yearly lists
    "fantano": lambda v: ((title_has_any(v, ["memes"]) or tags_have_any(v, ["rap", "hip hop"])) and
                          not YEAR_PATTERN.search(v.title)),

    "NFL": lambda v: title_has_any(v, ["mic'd up"]),

    # No news roundups, predictions or wishlists
    "Arlo": lambda v: not title_has_any(v, ["news roundup", "predict", "wishlist", "splatoon"]),

    "Linus Tech Tips": lambda v: (not title_has_any(v, ["tech upgrade", "tech makeover"]) and
                                  not tags_have_any(v, ["tech upgrade", "Tech Upgrade",
                                                        "tech makeover", "Tech Makeover"])),

    # Skip peripheral unboxings
    "ShortCircuit": lambda v: not tags_have_any(v, SHORT_CIRCUIT_HARDWARE_TAGS),

    "First We Feast": lambda v: title_has_any(v, ["hot ones"]),

    # Only Smash and Street Fighter
    "Maximilian Dood": lambda v: (not title_has_any(v, OTHER_FIGHTING_GAMES + ["matches"]) and
                                  not tags_have_any(v, OTHER_FIGHTING_GAMES + ["matches"])),

    "Simply": lambda v: title_has_any(v, ["sm64", "mario 64"]),

    "StylesX2": lambda v: title_has_any(v, ["ultimate salt is real"]),

    "DotaCinema": lambda v: title_has_any(v, ["fails of the week"]),

    # Press conferences
    "Pittsburgh Steelers": lambda v: title_has_any(v, ["conference"]),

    "Dota Shaman": lambda v: title_starts_with_any(v, ["arteezy", "mason"]),

    # Short segments only
    "David Pakman Show": lambda v: (v.duration_minutes < 11 and
                                    not title_has_any(v, DAVID_PAKMAN_SKIP_TERMS) and
                                    not tags_have_any(v, DAVID_PAKMAN_SKIP_TERMS)),

    "Werster": lambda v: not title_has_any(v, ["sonic"]),

    "Brett Kollman": lambda v: not title_has_any(v, ["nfl draft"]),

    "Kurzgesagt – In a Nutshell": lambda v: not title_has_any(v, ["virus", "body", "space"]),

    "Dorkly": lambda v: not title_has_any(v, ["compilation"]),

    "GeoWizard": lambda v: (tags_have_any(v, ["geoguessr"]) and
                            not title_has_any(v, ["play along"])),

    "ProJared": lambda v: not title_has_any(v, ["now in the 90s"]),

    # Uploads only, no VODs
    "Ludwig": is_not_stream,
    "Destiny": is_not_stream,

    "Atrioc": lambda v: True,

    "Lythero": lambda v: not title_has_any(v, ["half-life", "half life", "shadow the hedgehog", "l4d2"]),
}

# =====================================
# FILTER
# =====================================

def keeps_video(video):
    """Check a video against its channel's rule (channels without a rule always pass)"""
    rule = CHANNEL_RULES.get(video.channel_title)
    if rule is None:
        return True
    return bool(rule(video))

def apply_channel_rules(videos):
    """Drop videos rejected by their channel's rule"""
    kept = []
    for video in videos:
        if keeps_video(video):
            kept.append(video)
        else:
            logger.debug(f"[Filter] Skipped by channel rule: {video.channel_title} - {video.title}")
    return kept
