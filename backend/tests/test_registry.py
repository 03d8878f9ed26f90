"""Tests for field rules and the resource table."""

import pytest
from django.contrib.auth.hashers import check_password

from api.errors import ValidationFailed
from api.registry import (
    GENRES,
    SOUND_KIT_CATEGORIES,
    SOUND_KITS,
    TRACKS,
    USERS,
    Color,
    Flag,
    Number,
    Password,
    StringList,
    Text,
    get_resource,
)


class TestRules:
    def test_text_trims(self):
        assert Text().clean("name", "  Trap  ") == "Trap"

    def test_required_text_rejects_blank(self):
        with pytest.raises(ValidationFailed, match="Genre name is required"):
            Text(required=True, label="Genre name").clean("name", "   ")

    def test_nullable_text_blank_is_none(self):
        assert Text(nullable=True).clean("track_id", "") is None

    def test_bpm_range(self):
        bpm = Number(minimum=1, maximum=300, integer=True, label="BPM")
        assert bpm.clean("bpm", "120") == 120
        for bad in (0, 301, 1.5, "fast", True):
            with pytest.raises(ValidationFailed):
                bpm.clean("bpm", bad)

    def test_price_must_not_be_negative(self):
        with pytest.raises(ValidationFailed, match="at least 0"):
            Number(minimum=0, label="Price").clean("track_price", -1)
        assert Number(minimum=0).clean("track_price", 0) == 0

    def test_publish_choice(self):
        publish = TRACKS.fields["publish"]
        assert publish.clean("publish", "Public") == "Public"
        with pytest.raises(ValidationFailed):
            publish.clean("publish", "Draft")

    def test_color(self):
        assert Color().clean("color", "#7ED7FF") == "#7ED7FF"
        with pytest.raises(ValidationFailed):
            Color().clean("color", "blue")

    def test_flag_accepts_form_strings(self):
        assert Flag().clean("is_active", "false") is False
        assert Flag().clean("is_active", True) is True
        with pytest.raises(ValidationFailed):
            Flag().clean("is_active", "maybe")

    def test_string_list_coerces_scalar(self):
        rule = StringList()
        assert rule.clean("genre_category", "Trap") == ["Trap"]
        assert rule.clean("genre_category", "") == []
        assert rule.clean("genre_category", [" Trap ", "", "Drill"]) == ["Trap", "Drill"]
        with pytest.raises(ValidationFailed):
            rule.clean("genre_category", [1, 2])

    def test_social_links_values_are_text(self):
        links = USERS.fields["social_links"]
        cleaned = links.clean("social_links", {"website": 5, "twitter": " @amy "})
        assert cleaned["website"] == "5"
        assert cleaned["twitter"] == "@amy"
        assert cleaned["youtube"] == ""
        with pytest.raises(ValidationFailed, match="social_links.website"):
            links.clean("social_links", {"website": {"url": "x"}})
        with pytest.raises(ValidationFailed):
            links.clean("social_links", {"myspace": "x"})

    def test_password_is_hashed(self):
        hashed = Password().clean("password", "s3cret")
        assert hashed != "s3cret"
        assert check_password("s3cret", hashed)


class TestResources:
    def test_conflict_messages(self):
        assert GENRES.conflict_message == "Genre with this name already exists"
        assert TRACKS.conflict_message == "Track with this ID already exists"
        assert USERS.conflict_message == "User with this email already exists"

    def test_sound_kit_taxonomies_have_no_unique_key(self):
        assert SOUND_KIT_CATEGORIES.unique is None
        assert get_resource("sound-kit-tags").unique is None

    def test_category_name_label(self):
        with pytest.raises(ValidationFailed, match="Category name is required"):
            SOUND_KIT_CATEGORIES.fields["name"].clean("name", "")

    def test_only_sound_kits_soft_delete(self):
        soft = [name for name in ("users", "tracks", "genres", "beats", "tags", "sound-kits",
                                  "sound-kit-categories", "sound-kit-tags")
                if get_resource(name).soft_delete]
        assert soft == ["sound-kits"]
        assert SOUND_KITS.soft_delete

    def test_user_display_name_default(self):
        data = {"first_name": "Amy", "last_name": "Winehouse"}
        assert USERS.default_for("display_name", data) == "Amy Winehouse"
