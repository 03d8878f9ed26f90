"""Upload gateway: validated writes to object storage plus file metadata rows.

Works against any Django storage backend (local disk by default, an
S3-compatible bucket if STORAGES says so). Every stored object gets a fresh
random name, so uploading the same bytes twice yields two objects.

Validation (MIME class and size) always happens before the storage write.
Reads and deletes go through the StoredFile row, so only objects this gateway
wrote are addressable.
"""

import logging
import os
import posixpath
import uuid
from urllib.parse import urljoin

from django.conf import settings
from django.core.exceptions import SuspiciousFileOperation
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

from api.errors import NotFound, StorageFailure, ValidationFailed
from api.gateway import ModelGateway
from api.models import StoredFile
from api.naming import to_external

logger = logging.getLogger(__name__)

MB = 1024 * 1024

# Column limits on StoredFile
MAX_EXTENSION = 16
MAX_ORIGINAL_NAME = 300
MAX_CONTENT_TYPE = 100


def _human_size(n: int) -> str:
    return f"{n // MB}MB" if n % MB == 0 else f"{n} bytes"


class UploadGateway:
    def __init__(self, storage=None, policies=None, public_base_url=None):
        self.storage = storage or default_storage
        self.policies = policies or settings.UPLOAD_POLICIES
        self.public_base_url = (
            public_base_url if public_base_url is not None
            else getattr(settings, "PUBLIC_BASE_URL", "")
        )
        self.files = ModelGateway(StoredFile, "File")

    # ── Paths and URLs ────────────────────────────────────────────────────────

    @staticmethod
    def normalize_path(path: str) -> str:
        """Reject empty, absolute and parent-relative storage keys."""
        path = (path or "").strip().lstrip("/")
        if not path:
            raise ValidationFailed("File path is required")
        normalized = posixpath.normpath(path)
        if normalized.startswith("..") or normalized in (".", ""):
            raise ValidationFailed("Invalid file path")
        return normalized

    def public_url(self, path: str, request=None) -> str:
        url = self.storage.url(path)
        if url.startswith(("http://", "https://")):
            return url
        if self.public_base_url:
            return urljoin(self.public_base_url.rstrip("/") + "/", url.lstrip("/"))
        if request is not None:
            return request.build_absolute_uri(url)
        return url

    # ── Store / retrieve / remove ─────────────────────────────────────────────

    @staticmethod
    def validate(content_type, size, mime_classes, max_bytes) -> None:
        content_type = content_type or ""
        mime_class = content_type.split("/", 1)[0].lower()
        if mime_class not in mime_classes or len(content_type) > MAX_CONTENT_TYPE:
            allowed = ", ".join(f"{c}/*" for c in mime_classes)
            raise ValidationFailed(f"Invalid file type {content_type or 'unknown'!r}. Allowed: {allowed}")
        if size is None or size > max_bytes:
            raise ValidationFailed(f"File too large. Maximum size is {_human_size(max_bytes)}.")

    def check_upload(self, upload, kind: str) -> None:
        policy = self.policies[kind]
        self.validate(upload.content_type, upload.size, policy["mime_classes"], policy["max_bytes"])

    def store(self, blob, original_name, content_type, size, mime_classes, max_bytes,
              folder, request=None) -> dict:
        """Validate and write one blob. Returns the file record with its public URL."""
        self.validate(content_type, size, mime_classes, max_bytes)

        original_name = (original_name or "")[:MAX_ORIGINAL_NAME]
        ext = os.path.splitext(original_name)[1].lower()
        if len(ext) > MAX_EXTENSION:
            ext = ""
        name = f"{uuid.uuid4().hex}{ext}"
        try:
            path = self.storage.save(f"{folder}/{name}", blob)
        except Exception as e:
            logger.error("[storage] write %s/%s failed: %s", folder, name, e, exc_info=True)
            raise StorageFailure(f"Failed to store file: {e}") from e

        try:
            record = self.files.insert({
                "name": name,
                "original_name": original_name,
                "content_type": content_type,
                "size": size,
                "path": path,
                "folder": folder,
            })
        except Exception:
            self.storage.delete(path)
            raise
        record["url"] = self.public_url(path, request)
        logger.info("[storage] stored %s (%s, %d bytes)", path, content_type, size)
        return record

    def store_upload(self, upload, kind: str, request=None) -> dict:
        """Store a Django UploadedFile under the named upload policy ("image", "audio")."""
        policy = self.policies[kind]
        return self.store(
            upload,
            original_name=upload.name,
            content_type=upload.content_type,
            size=upload.size,
            mime_classes=policy["mime_classes"],
            max_bytes=policy["max_bytes"],
            folder=policy["folder"],
            request=request,
        )

    def _exists(self, path: str) -> bool:
        try:
            return self.storage.exists(path)
        except SuspiciousFileOperation as e:
            raise ValidationFailed("Invalid file path") from e

    def _lookup(self, path: str) -> dict:
        """The StoredFile row for `path`. Folders and unknown keys are NotFound."""
        path = self.normalize_path(path)
        if not self.files.exists({"path": path}):
            raise NotFound("File not found")
        return self.files.find_one({"path": path})

    def retrieve(self, path: str):
        """Open a stored object for streaming. Returns (file, content_type)."""
        record = self._lookup(path)
        if not self._exists(record["path"]):
            raise NotFound("File not found")
        try:
            return self.storage.open(record["path"], "rb"), record["content_type"]
        except OSError as e:
            raise StorageFailure(f"Failed to read file: {e}") from e

    def remove(self, path: str) -> None:
        record = self._lookup(path)
        path = record["path"]
        if not self._exists(path):
            # Object already gone: the row is stale
            StoredFile.objects.filter(path=path).delete()
            raise NotFound("File not found")
        try:
            self.storage.delete(path)
        except OSError as e:
            raise StorageFailure(f"Failed to delete file: {e}") from e
        StoredFile.objects.filter(path=path).delete()
        logger.info("[storage] removed %s", path)

    def discard(self, paths) -> None:
        """Best-effort removal of objects written for a write that later failed."""
        for path in paths:
            try:
                self.remove(path)
                logger.warning("[storage] removed orphaned upload %s", path)
            except (NotFound, StorageFailure, ValidationFailed) as e:
                logger.error("[storage] could not remove orphaned upload %s: %s", path, e)

    # ── Listing / diagnostics ─────────────────────────────────────────────────

    def list_files(self, limit=None, request=None) -> list:
        limit = limit or getattr(settings, "FILE_LISTING_LIMIT", 100)
        files = []
        for record in self.files.find_many(order_by=("-uploaded_at", "-id"), limit=limit):
            files.append({
                "name": record["name"],
                "original_name": record["original_name"],
                "path": record["path"],
                "size": record["size"],
                "content_type": record["content_type"],
                "last_modified": record["uploaded_at"],
                "public_url": self.public_url(record["path"], request),
            })
        return to_external(files)

    def describe(self) -> dict:
        return {
            "bucket": getattr(settings, "STORAGE_BUCKET_NAME", "uploads"),
            "backend": settings.STORAGES["default"]["BACKEND"],
            "policies": {
                kind: {
                    "folder": p["folder"],
                    "allowed_types": [f"{c}/*" for c in p["mime_classes"]],
                    "max_file_size": _human_size(p["max_bytes"]),
                }
                for kind, p in self.policies.items()
            },
        }

    def probe(self) -> dict:
        """Write and delete a throwaway object to prove the backend is reachable."""
        path = f"_probe/{uuid.uuid4().hex}.txt"
        try:
            saved = self.storage.save(path, ContentFile(b"ok"))
            exists = self.storage.exists(saved)
            self.storage.delete(saved)
        except Exception as e:
            logger.error("[storage] probe failed: %s", e, exc_info=True)
            raise StorageFailure(f"Storage connection failed: {e}") from e
        return {"writable": exists}


def get_upload_gateway() -> UploadGateway:
    return UploadGateway()
