"""Shared fixtures for backend tests.

Settings come from config.settings_test: in-memory SQLite, in-memory storage.
"""

import json

import pytest
from django.core.files.storage import InMemoryStorage

from api.crud import CrudEngine
from api.models import Track
from api.registry import get_resource
from storage_service import UploadGateway


@pytest.fixture
def engine():
    """engine("genres") → CrudEngine for that registry entry."""
    return lambda name: CrudEngine(get_resource(name))


@pytest.fixture
def storage():
    return InMemoryStorage(base_url="/media/")


@pytest.fixture
def uploads(storage):
    return UploadGateway(storage=storage, public_base_url="http://testserver")


@pytest.fixture
def make_track(db):
    counter = iter(range(1, 10_000))

    def _make(**fields):
        n = next(counter)
        fields.setdefault("track_name", f"Track {n}")
        fields.setdefault("track_type", "Beat")
        return Track.objects.create(**fields)

    return _make


@pytest.fixture
def api(client):
    """JSON helpers around the Django test client."""

    class Api:
        def get(self, url, **params):
            return client.get(url, params)

        def post(self, url, body):
            return client.post(url, data=json.dumps(body), content_type="application/json")

        def put(self, url, body):
            return client.put(url, data=json.dumps(body), content_type="application/json")

        def delete(self, url):
            return client.delete(url)

    return Api()
