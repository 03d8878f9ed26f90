"""HTTP-level tests: routes, envelopes and status codes."""

import pytest
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile

from api.models import SoundKit, StoredFile, Track

pytestmark = pytest.mark.django_db


def png(name="cover.png"):
    return SimpleUploadedFile(name, b"\x89PNG\r\n\x1a\n", content_type="image/png")


def mp3(name="beat.mp3", data=b"ID3 audio"):
    return SimpleUploadedFile(name, data, content_type="audio/mpeg")


# ── Health / routing ──────────────────────────────────────────────────────────

def test_health(api):
    r = api.get("/api/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "OK"
    assert body["storage"]["backend"].endswith("InMemoryStorage")


def test_unknown_route_is_json_404(api):
    r = api.get("/api/does-not-exist/really")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Route not found"}


def test_wrong_method(client):
    r = client.delete("/api/health")
    assert r.status_code == 405
    assert r.json()["success"] is False


def test_malformed_json(client):
    r = client.post("/api/genres", data="{not json", content_type="application/json")
    assert r.status_code == 400
    assert r.json()["message"].startswith("Malformed JSON body")


# ── Accounts ──────────────────────────────────────────────────────────────────

SIGNUP = {"firstName": "Amy", "lastName": "Winehouse", "email": "amy@example.com", "password": "rehab"}


def test_signup_and_signin(api):
    r = api.post("/api/signup", SIGNUP)
    assert r.status_code == 201
    user = r.json()["user"]
    assert user["displayName"] == "Amy Winehouse"
    assert "password" not in user

    r = api.post("/api/signin", {"email": "AMY@example.com", "password": "rehab"})
    assert r.status_code == 200
    assert r.json()["message"] == "Login successful"
    assert r.json()["user"]["id"] == user["id"]

    r = api.post("/api/signin", {"email": "Amy Winehouse", "password": "rehab"})
    assert r.status_code == 200


def test_signup_duplicate_email(api):
    api.post("/api/signup", SIGNUP)
    r = api.post("/api/signup", SIGNUP)
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "User with this email already exists"}


def test_signup_missing_field(api):
    r = api.post("/api/signup", {**SIGNUP, "password": ""})
    assert r.status_code == 400
    assert "Password" in r.json()["message"]


def test_signin_rejects_bad_credentials(api):
    api.post("/api/signup", SIGNUP)
    assert api.post("/api/signin", {"email": "amy@example.com", "password": "nope"}).status_code == 401
    assert api.post("/api/signin", {"email": "bo@example.com", "password": "rehab"}).status_code == 401
    assert api.post("/api/signin", {"email": "amy@example.com"}).status_code == 400


def test_signin_by_shared_display_name(api):
    api.post("/api/signup", SIGNUP)
    api.post("/api/signup", {**SIGNUP, "email": "other@example.com", "password": "valerie"})

    r = api.post("/api/signin", {"email": "Amy Winehouse", "password": "valerie"})
    assert r.status_code == 200
    assert r.json()["user"]["email"] == "other@example.com"

    r = api.post("/api/signin", {"email": "Amy Winehouse", "password": "rehab"})
    assert r.json()["user"]["email"] == "amy@example.com"

    assert api.post("/api/signin", {"email": "Amy Winehouse", "password": "x"}).status_code == 401


def test_update_profile(api):
    user = api.post("/api/signup", SIGNUP).json()["user"]
    r = api.put(f"/api/profile/{user['id']}", {"location": "London", "socialLinks": {"website": "amy.com"}})
    assert r.status_code == 200
    updated = r.json()["user"]
    assert updated["location"] == "London"
    assert updated["socialLinks"]["website"] == "amy.com"
    assert updated["email"] == "amy@example.com"

    assert api.put("/api/profile/99999", {"location": "x"}).status_code == 404


# ── Generic resources ─────────────────────────────────────────────────────────

def test_genre_lifecycle(api):
    r = api.post("/api/genres", {"name": "Trap"})
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "Genre created successfully"
    genre = body["genre"]

    r = api.get("/api/genres")
    assert [g["name"] for g in r.json()["genres"]] == ["Trap"]

    r = api.put(f"/api/genres/{genre['id']}", {"color": "#000"})
    assert r.json()["genre"]["color"] == "#000"
    assert r.json()["message"] == "Genre updated successfully"

    r = api.delete(f"/api/genres/{genre['id']}")
    assert r.json() == {"success": True, "message": "Genre deleted successfully"}
    assert api.get(f"/api/genres/{genre['id']}").status_code == 404


def test_missing_record_is_404(api):
    r = api.get("/api/tracks/12345")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Track not found"}
    assert api.get("/api/tracks/not-an-id").status_code == 404
    assert api.delete("/api/beats/12345").status_code == 404


def test_track_duplicate_id(api):
    payload = {"trackName": "A", "trackType": "Beat", "trackId": "TRK-1"}
    assert api.post("/api/tracks", payload).status_code == 201
    r = api.post("/api/tracks", payload)
    assert r.status_code == 400
    assert r.json()["message"] == "Track with this ID already exists"


def test_sound_kit_category_envelope(api):
    r = api.post("/api/sound-kit-categories", {"name": "Drums"})
    assert r.status_code == 201
    assert r.json()["category"]["color"] == "#00D4FF"
    assert [c["name"] for c in api.get("/api/sound-kit-categories").json()["categories"]] == ["Drums"]


def test_sound_kit_soft_delete(api):
    kit = api.post("/api/sound-kits", {"kitName": "Drums", "kitId": "KIT-1"}).json()["soundKit"]
    api.delete(f"/api/sound-kits/{kit['id']}")
    assert api.get("/api/sound-kits").json()["soundKits"] == []
    listed = api.get("/api/sound-kits", includeInactive="true").json()["soundKits"]
    assert [k["id"] for k in listed] == [kit["id"]]
    assert SoundKit.objects.filter(pk=kit["id"], is_active=False).exists()


def test_list_filter_by_query(api):
    api.post("/api/tracks", {"trackName": "A", "trackType": "Beat", "musician": "Amy"})
    api.post("/api/tracks", {"trackName": "B", "trackType": "Beat", "musician": "Bo"})
    tracks = api.get("/api/tracks", musician="Bo").json()["tracks"]
    assert [t["trackName"] for t in tracks] == ["B"]


# ── Musicians ─────────────────────────────────────────────────────────────────

def test_musicians(api, make_track):
    make_track(musician="Amy")
    make_track(musician="Amy")
    r = api.get("/api/musicians")
    assert r.json()["musicians"][0]["trackCount"] == 2
    assert api.get("/api/musicians/amy").json()["musician"]["name"] == "Amy"
    r = api.get("/api/musicians/Nobody")
    assert r.status_code == 404
    assert r.json()["message"] == "Musician not found"


# ── Uploads ───────────────────────────────────────────────────────────────────

def test_upload_image(client):
    r = client.post("/api/upload-image", {"image": png()})
    assert r.status_code == 200
    body = r.json()
    assert body["imageUrl"].startswith("http://testserver/media/images/")
    assert body["filename"] == "cover.png"
    assert body["contentType"] == "image/png"
    assert default_storage.exists(body["filePath"])


def test_upload_image_wrong_type(client):
    r = client.post("/api/upload-image", {"image": mp3()})
    assert r.status_code == 400
    assert "Invalid file type" in r.json()["message"]
    assert StoredFile.objects.count() == 0


def test_upload_without_file(client):
    r = client.post("/api/upload-audio", {})
    assert r.status_code == 400
    assert r.json()["message"] == "No audio file provided"


def test_upload_audio_too_large(client, settings):
    settings.UPLOAD_POLICIES = {
        **settings.UPLOAD_POLICIES,
        "audio": {"folder": "audio", "mime_classes": ["audio"], "max_bytes": 4},
    }
    r = client.post("/api/upload-audio", {"audio": mp3(data=b"12345")})
    assert r.status_code == 400
    assert "too large" in r.json()["message"]
    assert StoredFile.objects.count() == 0


def test_track_with_files(client):
    r = client.post("/api/tracks/upload", {
        "trackName": "Night Drive",
        "trackType": "Beat",
        "bpm": "140",
        "genreCategory[1]": "Drill",
        "genreCategory[0]": "Trap",
        "audio": mp3(),
        "image": png(),
    })
    assert r.status_code == 201
    body = r.json()
    track = body["track"]
    assert body["message"] == "Track created successfully with files uploaded"
    assert track["genreCategory"] == ["Trap", "Drill"]
    assert track["bpm"] == 140
    assert track["trackFile"] == body["audioUrl"]
    assert track["trackImage"] == body["imageUrl"]
    assert StoredFile.objects.count() == 2


def test_track_with_files_duplicate_id_writes_nothing(client):
    Track.objects.create(track_name="A", track_type="Beat", track_id="TRK-1")
    r = client.post("/api/tracks/upload", {
        "trackName": "B", "trackType": "Beat", "trackId": "TRK-1", "audio": mp3(),
    })
    assert r.status_code == 400
    assert r.json()["message"] == "Track with this ID already exists"
    assert StoredFile.objects.count() == 0


def test_track_with_files_bad_image_writes_nothing(client):
    r = client.post("/api/tracks/upload", {
        "trackName": "B", "trackType": "Beat", "audio": mp3(), "image": mp3("cover.mp3"),
    })
    assert r.status_code == 400
    assert StoredFile.objects.count() == 0
    assert Track.objects.count() == 0


def test_track_with_files_removes_uploads_when_insert_fails(client, monkeypatch):
    from api.crud import CrudEngine

    Track.objects.create(track_name="A", track_type="Beat", track_id="TRK-1")
    monkeypatch.setattr(CrudEngine, "check_unique", lambda self, data, exclude_pk=None: None)
    r = client.post("/api/tracks/upload", {
        "trackName": "B", "trackType": "Beat", "trackId": "TRK-1", "audio": mp3(),
    })
    assert r.status_code == 400
    assert StoredFile.objects.count() == 0
    assert Track.objects.count() == 1


def test_sound_kit_with_files(client):
    r = client.post("/api/sound-kits/upload", {
        "kitName": "Drums", "tags": ["dusty", "vinyl"], "kitFile": mp3("kit.wav"), "image": png(),
    })
    assert r.status_code == 201
    body = r.json()
    assert body["soundKit"]["tags"] == ["dusty", "vinyl"]
    assert body["soundKit"]["kitFile"] == body["kitFileUrl"]
    assert body["imageUrl"]


# ── Stored files ──────────────────────────────────────────────────────────────

def test_file_download_and_delete(client):
    path = client.post("/api/upload-audio", {"audio": mp3(data=b"abc")}).json()["filePath"]

    r = client.get(f"/api/file/{path}")
    assert r.status_code == 200
    assert b"".join(r.streaming_content) == b"abc"
    assert r["Content-Type"] == "audio/mpeg"

    assert client.get("/api/file", {"path": path}).status_code == 200

    r = client.delete(f"/api/file/{path}")
    assert r.json() == {"success": True, "message": "File deleted successfully"}
    assert client.get(f"/api/file/{path}").status_code == 404


def test_folder_path_is_not_found(client):
    client.post("/api/upload-image", {"image": png()})
    assert client.get("/api/file/images").status_code == 404
    r = client.delete("/api/file/images")
    assert r.status_code == 404
    assert r.json()["message"] == "File not found"
    assert StoredFile.objects.count() == 1


def test_file_without_path(client):
    assert client.get("/api/file").status_code == 400


def test_files_list(client):
    client.post("/api/upload-image", {"image": png()})
    files = client.get("/api/files").json()["files"]
    assert len(files) == 1
    assert files[0]["originalName"] == "cover.png"


def test_storage_endpoints(client):
    config = client.get("/api/storage/config").json()["config"]
    assert config["policies"]["audio"]["maxFileSize"] == "50MB"
    r = client.get("/api/storage/test")
    assert r.status_code == 200
    assert r.json()["writable"] is True
