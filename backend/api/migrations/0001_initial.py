import api.models
from django.db import migrations, models


def _taxonomy_fields(unique_name):
    return [
        ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
        ("name", models.CharField(max_length=100, unique=unique_name)),
        ("description", models.TextField(blank=True)),
        ("color", models.CharField(blank=True, max_length=9)),
        ("is_active", models.BooleanField(default=True)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("updated_at", models.DateTimeField(auto_now=True)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("first_name", models.CharField(max_length=100)),
                ("last_name", models.CharField(max_length=100)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("password", models.CharField(max_length=256)),
                ("display_name", models.CharField(blank=True, db_index=True, max_length=200)),
                ("location", models.CharField(blank=True, max_length=200)),
                ("country", models.CharField(blank=True, max_length=100)),
                ("biography", models.TextField(blank=True)),
                ("social_links", models.JSONField(default=api.models.default_social_links)),
                ("profile_picture", models.CharField(blank=True, max_length=500)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"db_table": "users", "ordering": ["-created_at"]},
        ),
        migrations.CreateModel(
            name="Track",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("track_name", models.CharField(max_length=300)),
                ("track_id", models.CharField(blank=True, max_length=200, null=True, unique=True)),
                ("bpm", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("track_key", models.CharField(blank=True, max_length=20)),
                ("track_price", models.FloatField(blank=True, null=True)),
                ("musician", models.CharField(blank=True, db_index=True, max_length=200)),
                ("musician_profile_picture", models.CharField(blank=True, max_length=500)),
                ("track_type", models.CharField(max_length=100)),
                ("mood_type", models.CharField(blank=True, max_length=100)),
                ("energy_type", models.CharField(blank=True, max_length=100)),
                ("instrument", models.CharField(blank=True, max_length=100)),
                ("generated_track_platform", models.CharField(blank=True, max_length=100)),
                ("track_image", models.CharField(blank=True, max_length=500)),
                ("track_file", models.CharField(blank=True, max_length=500)),
                ("about", models.TextField(blank=True)),
                ("publish", models.CharField(choices=[("Private", "Private"), ("Public", "Public")], default="Private", max_length=10)),
                ("genre_category", models.JSONField(default=list)),
                ("beat_category", models.JSONField(default=list)),
                ("track_tags", models.JSONField(default=list)),
                ("seo_title", models.CharField(blank=True, max_length=300)),
                ("meta_keyword", models.CharField(blank=True, max_length=500)),
                ("meta_description", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"db_table": "tracks", "ordering": ["-created_at"]},
        ),
        migrations.CreateModel(
            name="Genre",
            fields=_taxonomy_fields(unique_name=True),
            options={"db_table": "genres", "ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="Beat",
            fields=_taxonomy_fields(unique_name=True),
            options={"db_table": "beats", "ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="Tag",
            fields=_taxonomy_fields(unique_name=True),
            options={"db_table": "tags", "ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="SoundKitCategory",
            fields=_taxonomy_fields(unique_name=False),
            options={"db_table": "sound_kit_categories", "ordering": ["-created_at"]},
        ),
        migrations.CreateModel(
            name="SoundKitTag",
            fields=_taxonomy_fields(unique_name=False),
            options={"db_table": "sound_kit_tags", "ordering": ["-created_at"]},
        ),
        migrations.CreateModel(
            name="SoundKit",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("kit_name", models.CharField(max_length=300)),
                ("kit_id", models.CharField(blank=True, max_length=200, null=True, unique=True)),
                ("description", models.TextField(blank=True)),
                ("category", models.JSONField(default=list)),
                ("price", models.FloatField(blank=True, null=True)),
                ("producer", models.CharField(blank=True, max_length=200)),
                ("producer_profile_picture", models.CharField(blank=True, max_length=500)),
                ("kit_type", models.CharField(blank=True, max_length=100)),
                ("bpm", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("kit_key", models.CharField(blank=True, max_length=20)),
                ("kit_image", models.CharField(blank=True, max_length=500)),
                ("kit_file", models.CharField(blank=True, max_length=500)),
                ("tags", models.JSONField(default=list)),
                ("publish", models.CharField(choices=[("Private", "Private"), ("Public", "Public")], default="Private", max_length=10)),
                ("seo_title", models.CharField(blank=True, max_length=300)),
                ("meta_keyword", models.CharField(blank=True, max_length=500)),
                ("meta_description", models.TextField(blank=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"db_table": "sound_kits", "ordering": ["-created_at"]},
        ),
        migrations.CreateModel(
            name="StoredFile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, unique=True)),
                ("original_name", models.CharField(blank=True, max_length=300)),
                ("content_type", models.CharField(max_length=100)),
                ("size", models.BigIntegerField()),
                ("path", models.CharField(max_length=300, unique=True)),
                ("folder", models.CharField(max_length=50)),
                ("uploaded_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={"db_table": "stored_files", "ordering": ["-uploaded_at"]},
        ),
    ]
