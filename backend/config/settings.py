import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

DEBUG = os.environ.get("DEBUG", "1") == "1"

ALLOWED_HOSTS = os.environ.get("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "corsheaders",
    "api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "config.urls"

WSGI_APPLICATION = "config.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.environ.get("DB_NAME", "beatmarket"),
        "USER": os.environ.get("DB_USER", "beatmarket"),
        "PASSWORD": os.environ.get("DB_PASSWORD", ""),
        "HOST": os.environ.get("DB_HOST", "localhost"),
        "PORT": os.environ.get("DB_PORT", "5432"),
    }
}

# CORS – allow the React dev server, or whatever ALLOWED_ORIGINS lists
_allowed_origins = os.environ.get("ALLOWED_ORIGINS", "")
CORS_ALLOWED_ORIGINS = (
    _allowed_origins.split(",")
    if _allowed_origins
    else [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
)

TEMPLATES = []

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

USE_TZ = True
TIME_ZONE = "UTC"

# ── Object storage ────────────────────────────────────────────────────────────

MEDIA_ROOT = Path(os.environ.get("MEDIA_ROOT", BASE_DIR / "uploads"))
MEDIA_URL = "/media/"

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}

# Logical bucket label reported by /api/health and /api/storage/config
STORAGE_BUCKET_NAME = os.environ.get("STORAGE_BUCKET_NAME", "uploads")

# Absolute origin used for public file URLs. Empty → derived from the request.
PUBLIC_BASE_URL = os.environ.get("PUBLIC_BASE_URL", "")

MB = 1024 * 1024

UPLOAD_POLICIES = {
    "image": {"folder": "images", "mime_classes": ["image"], "max_bytes": 10 * MB},
    "audio": {"folder": "audio", "mime_classes": ["audio"], "max_bytes": 50 * MB},
}

# Django refuses request bodies above this before our own size checks run
DATA_UPLOAD_MAX_MEMORY_SIZE = 60 * MB
FILE_UPLOAD_MAX_MEMORY_SIZE = 5 * MB

FILE_LISTING_LIMIT = 100

# ── Logging ───────────────────────────────────────────────────────────────────

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "plain"},
    },
    "root": {"handlers": ["console"], "level": LOG_LEVEL},
    "loggers": {
        "django.db.backends": {"level": "WARNING"},
    },
}

# ── Private setting defaults (overridden by settings_private.py) ──────────────

SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-change-in-production-abc123xyz")

# Load local private overrides: copy settings_private.example.py to
# settings_private.py and fill in your values (file is gitignored)
try:
    from config.settings_private import *  # noqa: F401,F403
except ImportError:
    pass
