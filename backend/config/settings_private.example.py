# ── Private / local settings: EXAMPLE ────────────────────────────────────────
# Copy this file to settings_private.py and fill in your values.
# settings_private.py is gitignored and must never be committed.

# Django
SECRET_KEY = "replace-with-a-long-random-string"

# PostgreSQL database
# Create with:
#   createdb beatmarket
#   createuser beatmarket
#   psql -c "ALTER USER beatmarket WITH PASSWORD 'yourpassword';"
#   psql -c "GRANT ALL PRIVILEGES ON DATABASE beatmarket TO beatmarket;"
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": "beatmarket",
        "USER": "beatmarket",
        "PASSWORD": "yourpassword",
        "HOST": "localhost",
        "PORT": "5432",
    }
}

# Public origin the uploaded files are served from (CDN or this server)
PUBLIC_BASE_URL = "http://localhost:8000"

# Where uploaded files land when FileSystemStorage is used
# MEDIA_ROOT = "/var/lib/beatmarket/uploads"

# Per-kind upload limits (bytes)
# UPLOAD_POLICIES = {
#     "image": {"folder": "images", "mime_classes": ["image"], "max_bytes": 10 * 1024 * 1024},
#     "audio": {"folder": "audio", "mime_classes": ["audio"], "max_bytes": 50 * 1024 * 1024},
# }
