import logging

from django.conf import settings
from django.contrib.auth.hashers import check_password
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt

from api.crud import CrudEngine
from api.errors import Unauthorized, ValidationFailed, api_view, parse_json_body
from api.gateway import ModelGateway
from api.models import User
from api.musicians import MusicianAggregator
from api.naming import camelize_key, to_external
from api.registry import USERS

logger = logging.getLogger(__name__)


# ── Helpers ───────────────────────────────────────────────────────────────────

def ok(status=200, message=None, **payload):
    """Success envelope: {"success": true, "message"?, <camelCased payload keys>}."""
    body = {"success": True}
    if message:
        body["message"] = message
    for key, value in payload.items():
        body[camelize_key(key)] = value
    return JsonResponse(body, status=status)


def _users():
    return CrudEngine(USERS)


# ── Authentication ────────────────────────────────────────────────────────────

@csrf_exempt
@api_view("POST")
def signup(request):
    """POST /api/signup: create an account from name, email and password."""
    data = parse_json_body(request)
    payload = {
        "firstName": data.get("firstName"),
        "lastName": data.get("lastName"),
        "email": data.get("email"),
        "password": data.get("password"),
    }
    user = _users().create(payload)
    logger.info("[auth] signup user=%s", user["id"])
    return ok(201, "User created successfully", user=user)


@csrf_exempt
@api_view("POST")
def signin(request):
    """POST /api/signin: `email` may hold either the email or the display name."""
    data = parse_json_body(request)
    identifier = (data.get("email") or data.get("username") or "").strip()
    password = data.get("password") or ""
    if not identifier or not password:
        raise ValidationFailed("Email and password are required")

    # Emails are unique; display names are not, so every candidate is tried
    gateway = ModelGateway(User, "User")
    candidates = gateway.find_many({"email__iexact": identifier})
    if not candidates:
        candidates = gateway.find_many({"display_name": identifier})
    hashes = dict(User.objects.filter(pk__in=[c["id"] for c in candidates])
                  .values_list("id", "password"))
    matches = [c for c in candidates if check_password(password, hashes[c["id"]])]
    if len(matches) != 1:
        raise Unauthorized("Invalid email or password")
    record = matches[0]

    logger.info("[auth] signin user=%s", record["id"])
    return ok(200, "Login successful", user=to_external(record))


@csrf_exempt
@api_view("PUT")
def update_profile(request, user_id):
    """PUT /api/profile/<id>: partial profile update."""
    user = _users().update(user_id, parse_json_body(request))
    return ok(200, "Profile updated successfully", user=user)


# ── Musicians ─────────────────────────────────────────────────────────────────

@api_view("GET")
def musicians_list(request):
    return ok(musicians=MusicianAggregator().list_musicians())


@api_view("GET")
def musician_detail(request, name):
    return ok(musician=MusicianAggregator().get_musician(name))


# ── Health ────────────────────────────────────────────────────────────────────

@api_view("GET")
def health(request):
    return JsonResponse({
        "status": "OK",
        "message": "Server is running",
        "storage": {
            "bucket": settings.STORAGE_BUCKET_NAME,
            "backend": settings.STORAGES["default"]["BACKEND"],
        },
    })
