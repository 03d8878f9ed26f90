"""File upload, download and storage diagnostics.

Create-with-files flow (tracks and sound kits):
  1. clean the form payload and check the uniqueness key
  2. validate every attached file against its upload policy
  3. write the files, put their public URLs on the record
  4. insert the record; if that fails, the files written in step 3 are removed
"""

import logging
import re

from django.http import FileResponse
from django.views.decorators.csrf import csrf_exempt

from api.crud import CrudEngine
from api.errors import ValidationFailed, api_view
from api.naming import to_external
from api.registry import SOUND_KITS, TRACKS
from api.views import ok
from storage_service import get_upload_gateway

logger = logging.getLogger(__name__)

_INDEXED_FIELD = re.compile(r"^(?P<name>[A-Za-z_]\w*)\[(?P<index>\d+)\]$")


def form_payload(post) -> dict:
    """Flatten a multipart QueryDict; `tags[0]`, `tags[1]`… and repeated keys become lists."""
    payload = {}
    indexed = {}
    for key in post.keys():
        m = _INDEXED_FIELD.match(key)
        if m:
            indexed.setdefault(m.group("name"), []).append((int(m.group("index")), post.get(key)))
            continue
        values = post.getlist(key)
        payload[key] = values if len(values) > 1 else values[0]
    for name, items in indexed.items():
        payload[name] = [value for _, value in sorted(items)]
    return payload


def _single_upload(request, form_field, kind, url_key, message):
    upload = request.FILES.get(form_field)
    if upload is None:
        raise ValidationFailed(f"No {form_field} file provided")
    record = get_upload_gateway().store_upload(upload, kind, request=request)
    return ok(
        200,
        message,
        file_id=record["name"],
        file_path=record["path"],
        filename=record["original_name"],
        content_type=record["content_type"],
        size=record["size"],
        **{url_key: record["url"]},
    )


@csrf_exempt
@api_view("POST")
def upload_image(request):
    return _single_upload(request, "image", "image", "image_url", "Image uploaded successfully")


@csrf_exempt
@api_view("POST")
def upload_audio(request):
    return _single_upload(request, "audio", "audio", "audio_url", "Audio uploaded successfully")


def _create_with_files(request, resource, attachments):
    """attachments: [(form field, upload policy, record field, response url key), ...]"""
    engine = CrudEngine(resource)
    data = engine.clean(form_payload(request.POST), partial=False)
    engine.check_unique(data)

    uploads = get_upload_gateway()
    present = [(a, request.FILES[a[0]]) for a in attachments if a[0] in request.FILES]
    for (form_field, kind, _, _), upload in present:
        uploads.check_upload(upload, kind)

    written = []
    urls = {url_key: "" for _, _, _, url_key in attachments}
    try:
        for (form_field, kind, record_field, url_key), upload in present:
            stored = uploads.store_upload(upload, kind, request=request)
            written.append(stored["path"])
            data[record_field] = stored["url"]
            urls[url_key] = stored["url"]
        record = engine.insert_clean(data)
    except Exception:
        if written:
            logger.warning("[upload] %s insert failed after storing %d file(s); removing them",
                           resource.item_key, len(written))
            uploads.discard(written)
        raise

    return ok(
        201,
        f"{resource.label} created successfully with files uploaded",
        **{resource.item_key: record},
        **urls,
    )


@csrf_exempt
@api_view("POST")
def track_with_files(request):
    """POST /api/tracks/upload: multipart track fields plus `audio` and `image` files."""
    return _create_with_files(request, TRACKS, [
        ("audio", "audio", "track_file", "audio_url"),
        ("image", "image", "track_image", "image_url"),
    ])


@csrf_exempt
@api_view("POST")
def sound_kit_with_files(request):
    """POST /api/sound-kits/upload: multipart kit fields plus `kitFile` and `image` files."""
    return _create_with_files(request, SOUND_KITS, [
        ("kitFile", "audio", "kit_file", "kit_file_url"),
        ("image", "image", "kit_image", "image_url"),
    ])


# ── Stored files ──────────────────────────────────────────────────────────────

@csrf_exempt
@api_view("GET", "DELETE")
def file_detail(request, file_path=None):
    """GET/DELETE /api/file/<path> or /api/file?path=<path>."""
    path = file_path or request.GET.get("path", "")
    uploads = get_upload_gateway()
    if request.method == "DELETE":
        uploads.remove(path)
        return ok(200, "File deleted successfully")

    fileobj, content_type = uploads.retrieve(path)
    response = FileResponse(fileobj, filename=path.rsplit("/", 1)[-1])
    if content_type:
        response["Content-Type"] = content_type
    return response


@api_view("GET")
def files_list(request):
    return ok(files=get_upload_gateway().list_files(request=request))


@api_view("GET")
def storage_config(request):
    return ok(config=to_external(get_upload_gateway().describe()))


@api_view("GET")
def storage_test(request):
    uploads = get_upload_gateway()
    result = uploads.probe()
    return ok(200, "Storage connection successful", bucket=uploads.describe()["bucket"], **result)
