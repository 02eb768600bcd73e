"""Parsed reference to a track, artist, album or playlist."""

from __future__ import annotations

from urllib.parse import quote

from pydantic import BaseModel, ConfigDict

from spotmeta.models.enums import EntityKind


class Reference(BaseModel):
    """What an input string addresses.

    Attributes:
        kind: Entity kind.
        id: Public (Base62) ID of the entity.
        user: Owner ID, set for playlists only.
        service: Service name used when rendering URIs and URLs.
    """

    model_config = ConfigDict(frozen=True)

    kind: EntityKind
    id: str
    user: str | None = None
    service: str = "spotify"

    @property
    def uri(self) -> str:
        """Canonical URI, e.g. ``spotify:track:<id>``."""
        if self.kind == EntityKind.PLAYLIST:
            return f"{self.service}:user:{self.user}:playlist:{self.id}"
        return f"{self.service}:{self.kind}:{self.id}"

    @property
    def url(self) -> str:
        """Web URL on the open.<service>.com host."""
        base = f"https://open.{self.service}.com"
        if self.kind == EntityKind.PLAYLIST:
            return f"{base}/user/{quote(self.user or '', safe='')}/playlist/{self.id}"
        return f"{base}/{self.kind}/{self.id}"
