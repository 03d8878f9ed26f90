from django.db import models


def default_social_links():
    return {
        "facebook": "",
        "twitter": "",
        "instagram": "",
        "youtube": "",
        "linkedin": "",
        "website": "",
    }


class RecordMixin:
    """Serialise concrete fields to a plain dict with storage (snake_case) keys."""

    hidden_fields: tuple = ()

    def to_dict(self):
        data = {}
        for field in self._meta.concrete_fields:
            if field.name in self.hidden_fields:
                continue
            value = getattr(self, field.attname)
            if hasattr(value, "isoformat"):
                value = value.isoformat()
            data[field.name] = value
        return data


class PublishState(models.TextChoices):
    PRIVATE = "Private", "Private"
    PUBLIC = "Public", "Public"


class User(RecordMixin, models.Model):
    """A marketplace account. `password` holds a salted hash, never plaintext."""

    hidden_fields = ("password",)

    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    email = models.EmailField(max_length=254, unique=True)
    password = models.CharField(max_length=256)
    display_name = models.CharField(max_length=200, blank=True, db_index=True)
    location = models.CharField(max_length=200, blank=True)
    country = models.CharField(max_length=100, blank=True)
    biography = models.TextField(blank=True)
    social_links = models.JSONField(default=default_social_links)
    profile_picture = models.CharField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "users"
        ordering = ["-created_at"]


class Track(RecordMixin, models.Model):
    """A track offered on the marketplace.

    `track_id` is the externally visible catalogue identifier (unique when set).
    `musician` is free text; musicians are derived by grouping on it.
    Association fields hold lists of names, never a bare string.
    """

    track_name = models.CharField(max_length=300)
    track_id = models.CharField(max_length=200, unique=True, null=True, blank=True)
    bpm = models.PositiveSmallIntegerField(null=True, blank=True)
    track_key = models.CharField(max_length=20, blank=True)
    track_price = models.FloatField(null=True, blank=True)
    musician = models.CharField(max_length=200, blank=True, db_index=True)
    musician_profile_picture = models.CharField(max_length=500, blank=True)
    track_type = models.CharField(max_length=100)
    mood_type = models.CharField(max_length=100, blank=True)
    energy_type = models.CharField(max_length=100, blank=True)
    instrument = models.CharField(max_length=100, blank=True)
    generated_track_platform = models.CharField(max_length=100, blank=True)
    track_image = models.CharField(max_length=500, blank=True)
    track_file = models.CharField(max_length=500, blank=True)
    about = models.TextField(blank=True)
    publish = models.CharField(max_length=10, choices=PublishState.choices,
                               default=PublishState.PRIVATE)
    genre_category = models.JSONField(default=list)
    beat_category = models.JSONField(default=list)
    track_tags = models.JSONField(default=list)
    seo_title = models.CharField(max_length=300, blank=True)
    meta_keyword = models.CharField(max_length=500, blank=True)
    meta_description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "tracks"
        ordering = ["-created_at"]


class TaxonomyTerm(RecordMixin, models.Model):
    """Shared shape of genres, beats, tags and the sound-kit taxonomies."""

    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    color = models.CharField(max_length=9, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Genre(TaxonomyTerm):
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        db_table = "genres"
        ordering = ["name"]


class Beat(TaxonomyTerm):
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        db_table = "beats"
        ordering = ["name"]


class Tag(TaxonomyTerm):
    name = models.CharField(max_length=100, unique=True)

    class Meta:
        db_table = "tags"
        ordering = ["name"]


class SoundKitCategory(TaxonomyTerm):
    class Meta:
        db_table = "sound_kit_categories"
        ordering = ["-created_at"]


class SoundKitTag(TaxonomyTerm):
    class Meta:
        db_table = "sound_kit_tags"
        ordering = ["-created_at"]


class SoundKit(RecordMixin, models.Model):
    """A downloadable sample pack. Deleting one only clears `is_active`."""

    kit_name = models.CharField(max_length=300)
    kit_id = models.CharField(max_length=200, unique=True, null=True, blank=True)
    description = models.TextField(blank=True)
    category = models.JSONField(default=list)
    price = models.FloatField(null=True, blank=True)
    producer = models.CharField(max_length=200, blank=True)
    producer_profile_picture = models.CharField(max_length=500, blank=True)
    kit_type = models.CharField(max_length=100, blank=True)
    bpm = models.PositiveSmallIntegerField(null=True, blank=True)
    kit_key = models.CharField(max_length=20, blank=True)
    kit_image = models.CharField(max_length=500, blank=True)
    kit_file = models.CharField(max_length=500, blank=True)
    tags = models.JSONField(default=list)
    publish = models.CharField(max_length=10, choices=PublishState.choices,
                               default=PublishState.PRIVATE)
    seo_title = models.CharField(max_length=300, blank=True)
    meta_keyword = models.CharField(max_length=500, blank=True)
    meta_description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "sound_kits"
        ordering = ["-created_at"]


class StoredFile(RecordMixin, models.Model):
    """Metadata for one object written to storage by the upload gateway.

    path: storage key, `<folder>/<name>`.
    name: generated `<uuid4 hex>.<original extension>`.
    """

    name = models.CharField(max_length=100, unique=True)
    original_name = models.CharField(max_length=300, blank=True)
    content_type = models.CharField(max_length=100)
    size = models.BigIntegerField()
    path = models.CharField(max_length=300, unique=True)
    folder = models.CharField(max_length=50)
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "stored_files"
        ordering = ["-uploaded_at"]
