"""Tests for camelCase ↔ snake_case key translation."""

import pytest

from api.naming import camelize_key, snakify_key, to_external, to_internal

SNAKE_KEYS = [
    "id",
    "first_name",
    "musician_profile_picture",
    "generated_track_platform",
    "is_active",
    "meta_keyword",
    "file_2x",
]


@pytest.mark.parametrize("key", SNAKE_KEYS)
def test_snake_round_trip(key):
    assert snakify_key(camelize_key(key)) == key


@pytest.mark.parametrize("key", ["id", "firstName", "musicianProfilePicture", "seoTitle", "imageURL"])
def test_camel_round_trip(key):
    assert camelize_key(snakify_key(key)) == key


def test_keys_already_in_target_convention_are_unchanged():
    assert to_external({"trackName": 1}) == {"trackName": 1}
    assert to_internal({"track_name": 1}) == {"track_name": 1}
    once = to_external({"seo_title": "x"})
    assert to_external(once) == once


def test_nested_mappings_are_translated():
    record = {"social_links": {"you_tube": ""}, "first_name": "Amy"}
    assert to_external(record) == {"socialLinks": {"youTube": ""}, "firstName": "Amy"}


def test_list_of_records_is_translated_element_wise():
    assert to_external([{"track_count": 2}, {"track_count": 1}]) == [
        {"trackCount": 2},
        {"trackCount": 1},
    ]


def test_list_values_are_not_rewritten():
    assert to_internal({"genreCategory": ["hipHop", "trap_soul"]}) == {
        "genre_category": ["hipHop", "trap_soul"]
    }


def test_scalars_pass_through():
    assert to_external(5) == 5
    assert to_external("first_name") == "first_name"
    assert to_internal(None) is None
