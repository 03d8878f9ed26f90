import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class ApiConfig(AppConfig):
    name = "api"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        from django.conf import settings

        logger.info(
            "[startup] storage backend=%s bucket=%s",
            settings.STORAGES["default"]["BACKEND"],
            settings.STORAGE_BUCKET_NAME,
        )
