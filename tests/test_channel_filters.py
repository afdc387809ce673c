"""Tests for the per-channel rule table."""

import pytest

from channel_filters import (
    CHANNEL_RULES, apply_channel_rules, keeps_video, tags_have_any, title_has_any,
)
from fakes import make_video


class TestChannelRules:
    """Keep/drop decisions for each ruled channel."""

    @pytest.mark.parametrize("channel, title, tags, duration, expected", [
        ("theneedledrop", "Kendrick Lamar - GNX ALBUM REVIEW", ["rap"], 20, True),
        ("theneedledrop", "Kendrick Lamar - GNX ALBUM REVIEW", ["hip hop", "music"], 20, True),
        ("theneedledrop", "Taylor Swift ALBUM REVIEW", ["pop"], 20, False),
        ("theneedledrop", "Weekly Track Roundup", ["rap"], 20, False),
        ("fantano", "Rap memes are back", None, 10, True),
        ("fantano", "Talking about Drake", ["hip hop"], 10, True),
        ("fantano", "Best rap of 2023", ["rap"], 10, False),
        ("fantano", "Reacting to country", ["country"], 10, False),
        ("NFL", "Mic'd Up: Best Moments", None, 8, True),
        ("NFL", "Full Game Highlights", None, 40, False),
        ("Arlo", "Nintendo News Roundup", None, 20, False),
        ("Arlo", "I Predict the Next Direct", None, 20, False),
        ("Arlo", "My Switch 2 Wishlist", None, 20, False),
        ("Arlo", "Splatoon 3 Thoughts", None, 20, False),
        ("Arlo", "Reviewing Metroid Prime 4", None, 20, True),
        ("Linus Tech Tips", "Tech Upgrade for a Viewer", None, 15, False),
        ("Linus Tech Tips", "Extreme Tech Makeover", None, 15, False),
        ("Linus Tech Tips", "Building a Home Server", ["Tech Upgrade"], 15, False),
        ("Linus Tech Tips", "Building a Home Server", ["tech makeover"], 15, False),
        ("Linus Tech Tips", "Building a Home Server", ["server", "nas"], 15, True),
        ("ShortCircuit", "This Keyboard is Wild", ["keyboard"], 12, False),
        ("ShortCircuit", "Weird Gadget Unboxing", ["gadget"], 12, True),
        ("First We Feast", "Hot Ones: Season Finale", None, 25, True),
        ("First We Feast", "Truth or Dab", None, 25, False),
        ("Maximilian Dood", "Street Fighter 6 is Back", ["street fighter"], 20, True),
        ("Maximilian Dood", "Tekken 8 Ranked", None, 20, False),
        ("Maximilian Dood", "Ranked Climb", ["guilty gear"], 20, False),
        ("Maximilian Dood", "Evo Top 8 Matches", None, 20, False),
        ("Simply", "SM64 120 Star World Record", None, 100, True),
        ("Simply", "Super Mario 64 Race", None, 100, True),
        ("Simply", "Mario Kart 8", None, 100, False),
        ("StylesX2", "Ultimate Salt Is Real #250", None, 10, True),
        ("StylesX2", "Smash Tier List", None, 10, False),
        ("DotaCinema", "Dota 2 Fails of the Week - Ep. 300", None, 9, True),
        ("DotaCinema", "Dota 2 WTF Moments", None, 9, False),
        ("Pittsburgh Steelers", "Coach Tomlin Press Conference", None, 20, True),
        ("Pittsburgh Steelers", "Training Camp Highlights", None, 20, False),
        ("Dota Shaman", "Arteezy plays Anti-Mage", None, 40, True),
        ("Dota Shaman", "MASON Pudge Hooks", None, 40, True),
        ("Dota Shaman", "Watch Arteezy play Invoker", None, 40, False),
        ("David Pakman Show", "Senate passes new bill", None, 8.5, True),
        ("David Pakman Show", "Senate passes new bill", None, 11, False),
        ("David Pakman Show", "Heated Caller Argues", None, 6, False),
        ("David Pakman Show", "Senate passes new bill", ["interview"], 6, False),
        ("Werster", "Sonic Adventure Randomizer", None, 60, False),
        ("Werster", "Pokemon Randomizer", None, 60, True),
        ("Brett Kollman", "My 2025 NFL Draft Big Board", None, 30, False),
        ("Brett Kollman", "Why the Steelers Defense Works", None, 30, True),
        ("Kurzgesagt – In a Nutshell", "What if a Virus Wins", None, 12, False),
        ("Kurzgesagt – In a Nutshell", "Your Body Fights Back", None, 12, False),
        ("Kurzgesagt – In a Nutshell", "Space Elevators", None, 12, False),
        ("Kurzgesagt – In a Nutshell", "The Egg", None, 12, True),
        ("Dorkly", "Sonic Compilation", None, 10, False),
        ("Dorkly", "If Zelda Was Realistic", None, 10, True),
        ("GeoWizard", "Perfect Score Run", ["geoguessr"], 25, True),
        ("GeoWizard", "Play Along Challenge", ["geoguessr"], 25, False),
        ("GeoWizard", "Walking Across Wales", ["travel"], 25, False),
        ("ProJared", "Zelda Now in the 90s", None, 30, False),
        ("ProJared", "Star Fox Retrospective", None, 30, True),
        ("Atrioc", "Anything at all", None, 15, True),
        ("Lythero", "Half-Life 2 Speedrun", None, 20, False),
        ("Lythero", "Half Life Alyx", None, 20, False),
        ("Lythero", "Shadow the Hedgehog Reviewed", None, 20, False),
        ("Lythero", "L4D2 Versus", None, 20, False),
        ("Lythero", "Portal 2 Co-op", None, 20, True),
    ])
    def test_rule(self, channel, title, tags, duration, expected):
        video = make_video(title=title, channel_title=channel, tags=tags, duration_minutes=duration)
        assert keeps_video(video) is expected

    @pytest.mark.parametrize("channel", ["Ludwig", "Destiny"])
    def test_streamers_keep_uploads_only(self, channel):
        upload = make_video(channel_title=channel, live_streaming_details=None)
        vod = make_video(channel_title=channel,
                         live_streaming_details={"actualStartTime": "2024-05-01T20:00:00Z"})
        assert keeps_video(upload) is True
        assert keeps_video(vod) is False

    def test_unruled_channel_always_kept(self):
        video = make_video(title="Mic'd Up", channel_title="Somebody Else", duration_minutes=500)
        assert "Somebody Else" not in CHANNEL_RULES
        assert keeps_video(video) is True

    def test_channel_title_match_is_exact(self):
        video = make_video(title="Full Game Highlights", channel_title="nfl")
        assert keeps_video(video) is True


class TestNullTagSafety:
    """Videos without tags."""

    @pytest.mark.parametrize("channel, title", [
        ("Linus Tech Tips", "Building a Home Server"),
        ("ShortCircuit", "This Keyboard is Wild"),
        ("Maximilian Dood", "Street Fighter 6 is Back"),
    ])
    def test_missing_tags_pass_tag_exclusions(self, channel, title):
        assert keeps_video(make_video(title=title, channel_title=channel, tags=None)) is True

    @pytest.mark.parametrize("channel, title", [
        ("theneedledrop", "Some Album REVIEW"),
        ("GeoWizard", "Perfect Score Run"),
    ])
    def test_missing_tags_fail_tag_requirements(self, channel, title):
        assert keeps_video(make_video(title=title, channel_title=channel, tags=None)) is False

    def test_empty_tag_list_behaves_like_missing(self):
        assert tags_have_any(make_video(tags=[]), ["rap"]) is False


class TestMatching:

    def test_title_match_ignores_case(self):
        assert title_has_any(make_video(title="HOT ONES"), ["hot ones"])

    def test_tag_match_is_case_sensitive(self):
        assert not tags_have_any(make_video(tags=["Rap"]), ["rap"])


class TestApplyChannelRules:

    def _videos(self):
        return [
            make_video(video_id="a", title="Mic'd Up", channel_title="NFL"),
            make_video(video_id="b", title="Highlights", channel_title="NFL"),
            make_video(video_id="c", title="Weekly Update", channel_title="Channel A"),
            make_video(video_id="d", title="Half Life 3", channel_title="Lythero"),
        ]

    def test_keeps_order_of_survivors(self):
        kept = apply_channel_rules(self._videos())
        assert [v.video_id for v in kept] == ["a", "c"]

    def test_filter_is_idempotent(self):
        once = apply_channel_rules(self._videos())
        assert apply_channel_rules(once) == once

    def test_same_input_same_decision(self):
        video = make_video(title="Album REVIEW", channel_title="theneedledrop", tags=["rap"])
        assert [keeps_video(video) for _ in range(3)] == [True, True, True]
