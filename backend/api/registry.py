"""Declarative table of resource kinds.

One `Resource` per entity kind states which fields a payload may carry, how
each is cleaned and validated, what defaults fill missing fields, which field
is unique, how deletes behave and how listings are ordered. The CRUD engine
reads nothing else.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from django.contrib.auth.hashers import make_password
from django.core.exceptions import ValidationError
from django.core.validators import validate_email

from api import models
from api.errors import ValidationFailed


# ── Field rules ───────────────────────────────────────────────────────────────

class Rule:
    """Clean one incoming value. Raise ValidationFailed on bad input."""

    def __init__(self, required=False, label=None):
        self.required = required
        self.label = label

    def is_blank(self, value):
        return value is None or (isinstance(value, str) and not value.strip())

    def fail(self, name, problem):
        raise ValidationFailed(f"{self.label or name} {problem}")

    def clean(self, name, value):
        if self.is_blank(value):
            if self.required:
                self.fail(name, "is required")
            return self.empty()
        return self.convert(name, value)

    def empty(self):
        return None

    def convert(self, name, value):
        return value


class Text(Rule):
    def __init__(self, required=False, label=None, nullable=False, max_length=None):
        super().__init__(required, label)
        self.nullable = nullable
        self.max_length = max_length

    def empty(self):
        return None if self.nullable else ""

    def convert(self, name, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str):
            self.fail(name, "must be a string")
        value = value.strip()
        if self.max_length and len(value) > self.max_length:
            self.fail(name, f"must be at most {self.max_length} characters")
        return value


class Email(Text):
    def convert(self, name, value):
        value = super().convert(name, value).lower()
        try:
            validate_email(value)
        except ValidationError:
            self.fail(name, "must be a valid email address")
        return value


class Password(Rule):
    """Stored as a salted one-way hash; the plaintext never reaches the gateway."""

    def convert(self, name, value):
        if not isinstance(value, str):
            self.fail(name, "must be a string")
        return make_password(value)


class Number(Rule):
    def __init__(self, required=False, label=None, minimum=None, maximum=None, integer=False):
        super().__init__(required, label)
        self.minimum = minimum
        self.maximum = maximum
        self.integer = integer

    def convert(self, name, value):
        if isinstance(value, bool):
            self.fail(name, "must be a number")
        try:
            number = float(value)
        except (TypeError, ValueError):
            self.fail(name, "must be a number")
        if not math.isfinite(number):
            self.fail(name, "must be a finite number")
        if self.integer:
            if number != int(number):
                self.fail(name, "must be a whole number")
            number = int(number)
        if self.minimum is not None and number < self.minimum:
            self.fail(name, f"must be at least {self.minimum}")
        if self.maximum is not None and number > self.maximum:
            self.fail(name, f"must be at most {self.maximum}")
        return number


class Choice(Rule):
    def __init__(self, options, required=False, label=None):
        super().__init__(required, label)
        self.options = tuple(options)

    def convert(self, name, value):
        if value not in self.options:
            self.fail(name, f"must be one of: {', '.join(self.options)}")
        return value


class Color(Text):
    _HEX = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")

    def convert(self, name, value):
        value = super().convert(name, value)
        if not self._HEX.match(value):
            self.fail(name, "must be a hex color like #7ED7FF")
        return value


class Flag(Rule):
    _TRUE = {"true", "1", "yes", "on"}
    _FALSE = {"false", "0", "no", "off"}

    def convert(self, name, value):
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in self._TRUE | self._FALSE:
            return value.strip().lower() in self._TRUE
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        self.fail(name, "must be true or false")


class StringList(Rule):
    """Association names. A bare string becomes a one-item list."""

    def empty(self):
        return []

    def convert(self, name, value):
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            self.fail(name, "must be a list of strings")
        cleaned = []
        for item in value:
            if not isinstance(item, str):
                self.fail(name, "must be a list of strings")
            item = item.strip()
            if item:
                cleaned.append(item)
        return cleaned


class Mapping(Rule):
    def __init__(self, required=False, label=None, keys=None):
        super().__init__(required, label)
        self.keys = keys

    def convert(self, name, value):
        if not isinstance(value, dict):
            self.fail(name, "must be an object")
        if self.keys is not None:
            unknown = set(value) - set(self.keys)
            if unknown:
                self.fail(name, f"has unknown keys: {', '.join(sorted(unknown))}")
            text = Text(max_length=500)
            return {key: text.clean(f"{name}.{key}", value.get(key)) for key in self.keys}
        return value


# ── Resource table ────────────────────────────────────────────────────────────

@dataclass
class Resource:
    name: str                      # route segment, e.g. "sound-kits"
    label: str                     # human label used in messages
    model: type
    item_key: str                  # envelope key for one record
    list_key: str                  # envelope key for a listing
    fields: dict
    unique: Optional[str] = None
    unique_label: Optional[str] = None
    defaults: dict = field(default_factory=dict)
    soft_delete: bool = False
    ordering: tuple = ("-created_at",)
    prepare: Optional[Callable[[dict], dict]] = None

    @property
    def conflict_message(self):
        return f"{self.label} with this {self.unique_label or self.unique} already exists"

    def default_for(self, field_name, data):
        value = self.defaults[field_name]
        return value(data) if callable(value) else value


def _taxonomy_fields(label):
    return {
        "name": Text(required=True, label=f"{label} name", max_length=100),
        "description": Text(),
        "color": Color(),
        "is_active": Flag(),
    }


def _taxonomy(name, label, model, item_key, list_key, color, unique):
    return Resource(
        name=name,
        label=label,
        model=model,
        item_key=item_key,
        list_key=list_key,
        fields=_taxonomy_fields(label.split()[-1].capitalize()),
        unique="name" if unique else None,
        defaults={"description": "", "color": color, "is_active": True},
        ordering=("name",) if unique else ("-created_at",),
    )


def _user_aliases(data):
    # Admin create takes "username" as the display name
    data = dict(data)
    username = data.pop("username", None)
    if username and not data.get("display_name"):
        data["display_name"] = username
    return data


PUBLISH_STATES = [choice for choice, _ in models.PublishState.choices]

SOCIAL_LINK_KEYS = list(models.default_social_links())

USERS = Resource(
    name="users",
    label="User",
    model=models.User,
    item_key="user",
    list_key="users",
    fields={
        "first_name": Text(required=True, label="First name", max_length=100),
        "last_name": Text(required=True, label="Last name", max_length=100),
        "email": Email(required=True, label="Email"),
        "password": Password(required=True, label="Password"),
        "display_name": Text(max_length=200),
        "location": Text(max_length=200),
        "country": Text(max_length=100),
        "biography": Text(),
        "social_links": Mapping(keys=SOCIAL_LINK_KEYS),
        "profile_picture": Text(max_length=500),
    },
    unique="email",
    defaults={
        "social_links": lambda data: models.default_social_links(),
        "display_name": lambda data: f"{data.get('first_name', '')} {data.get('last_name', '')}".strip(),
    },
    prepare=_user_aliases,
)

TRACKS = Resource(
    name="tracks",
    label="Track",
    model=models.Track,
    item_key="track",
    list_key="tracks",
    fields={
        "track_name": Text(required=True, label="Track name", max_length=300),
        "track_id": Text(nullable=True, max_length=200),
        "bpm": Number(minimum=1, maximum=300, integer=True, label="BPM"),
        "track_key": Text(max_length=20),
        "track_price": Number(minimum=0, label="Price"),
        "musician": Text(max_length=200),
        "musician_profile_picture": Text(max_length=500),
        "track_type": Text(required=True, label="Track type", max_length=100),
        "mood_type": Text(max_length=100),
        "energy_type": Text(max_length=100),
        "instrument": Text(max_length=100),
        "generated_track_platform": Text(max_length=100),
        "track_image": Text(max_length=500),
        "track_file": Text(max_length=500),
        "about": Text(),
        "publish": Choice(PUBLISH_STATES, label="Publish state"),
        "genre_category": StringList(),
        "beat_category": StringList(),
        "track_tags": StringList(),
        "seo_title": Text(max_length=300),
        "meta_keyword": Text(max_length=500),
        "meta_description": Text(),
    },
    unique="track_id",
    unique_label="ID",
    defaults={
        "publish": models.PublishState.PRIVATE.value,
        "genre_category": lambda data: [],
        "beat_category": lambda data: [],
        "track_tags": lambda data: [],
    },
)

GENRES = _taxonomy("genres", "Genre", models.Genre, "genre", "genres", "#7ED7FF", unique=True)
BEATS = _taxonomy("beats", "Beat", models.Beat, "beat", "beats", "#E100FF", unique=True)
TAGS = _taxonomy("tags", "Tag", models.Tag, "tag", "tags", "#FF6B35", unique=True)

SOUND_KITS = Resource(
    name="sound-kits",
    label="Sound kit",
    model=models.SoundKit,
    item_key="sound_kit",
    list_key="sound_kits",
    fields={
        "kit_name": Text(required=True, label="Kit name", max_length=300),
        "kit_id": Text(nullable=True, max_length=200),
        "description": Text(),
        "category": StringList(),
        "price": Number(minimum=0, label="Price"),
        "producer": Text(max_length=200),
        "producer_profile_picture": Text(max_length=500),
        "kit_type": Text(max_length=100),
        "bpm": Number(minimum=1, maximum=300, integer=True, label="BPM"),
        "kit_key": Text(max_length=20),
        "kit_image": Text(max_length=500),
        "kit_file": Text(max_length=500),
        "tags": StringList(),
        "publish": Choice(PUBLISH_STATES, label="Publish state"),
        "seo_title": Text(max_length=300),
        "meta_keyword": Text(max_length=500),
        "meta_description": Text(),
        "is_active": Flag(),
    },
    unique="kit_id",
    unique_label="ID",
    defaults={
        "publish": models.PublishState.PRIVATE.value,
        "category": lambda data: [],
        "tags": lambda data: [],
        "is_active": True,
    },
    soft_delete=True,
)

SOUND_KIT_CATEGORIES = _taxonomy(
    "sound-kit-categories", "Sound kit category", models.SoundKitCategory,
    "category", "categories", "#00D4FF", unique=False,
)
SOUND_KIT_TAGS = _taxonomy(
    "sound-kit-tags", "Sound kit tag", models.SoundKitTag,
    "tag", "tags", "#FF6B35", unique=False,
)

RESOURCES = {
    r.name: r
    for r in (USERS, TRACKS, GENRES, BEATS, TAGS, SOUND_KITS,
              SOUND_KIT_CATEGORIES, SOUND_KIT_TAGS)
}


def get_resource(name: str) -> Resource:
    return RESOURCES[name]
