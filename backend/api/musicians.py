"""Musicians are not stored: they are tracks grouped by their `musician` text."""

import logging

from api.errors import NotFound
from api.gateway import ModelGateway
from api.models import Track
from api.naming import to_external

logger = logging.getLogger(__name__)

NO_BIO = "No bio available"


class MusicianAggregator:
    def __init__(self, gateway=None):
        self.gateway = gateway or ModelGateway(Track, "Track")

    def list_musicians(self) -> list:
        """One entry per distinct musician name, A→Z, with its track count.

        Names are grouped case-sensitively; the picture comes from the first
        track seen for that name.
        """
        tracks = self.gateway.find_many(
            exclude={"musician": ""},
            order_by=("created_at", "id"),
        )
        groups = {}
        for track in tracks:
            name = track["musician"]
            if not name:
                continue
            if name not in groups:
                groups[name] = {
                    "id": name,
                    "name": name,
                    "profile_picture": track["musician_profile_picture"],
                    "track_count": 0,
                }
            groups[name]["track_count"] += 1
        return to_external(sorted(groups.values(), key=lambda m: m["name"]))

    def get_musician(self, name: str) -> dict:
        """Exact name match first, then case-insensitive. NotFound if no track matches."""
        name = (name or "").strip()
        if not name:
            raise NotFound("Musician not found")

        order = ("created_at", "id")
        tracks = self.gateway.find_many({"musician": name}, order_by=order)
        if not tracks:
            tracks = self.gateway.find_many({"musician__iexact": name}, order_by=order)
        if not tracks:
            raise NotFound("Musician not found")

        first = tracks[0]
        logger.debug("[musicians] %r → %d track(s)", name, len(tracks))
        return to_external({
            "id": first["musician"],
            "name": first["musician"],
            "profile_picture": first["musician_profile_picture"],
            "bio": first["about"] or NO_BIO,
            "track_count": len(tracks),
        })
