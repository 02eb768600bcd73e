"""Domain models for spotmeta.

These are the public models returned by MetadataResolver. They are mutable
because a failed resolution still hands back the partially filled object.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date

from pydantic import BaseModel, Field

from spotmeta.codec import classify_uri
from spotmeta.models.enums import EntityKind
from spotmeta.models.reference import Reference


class Track(BaseModel):
    """Track metadata.

    A stub track only carries ``track_id`` and ``uri``. Every resolved
    track, artist or album has ``art_url`` set, so its absence marks a stub.
    """

    track_id: str
    uri: str = ""
    title: str = ""
    duration: int = 0  # milliseconds
    artist: str = ""
    artists: list[Artist] = Field(default_factory=list)
    album_id: str | None = None
    album_title: str | None = None
    number: int | None = None
    disc_number: int | None = None
    art_url: str = ""
    stream_url: str = ""
    omitted: list[str] = Field(default_factory=list)

    @property
    def is_stub(self) -> bool:
        """Whether the track was never resolved."""
        return not self.art_url


class Artist(BaseModel):
    """Artist metadata."""

    artist_id: str
    uri: str = ""
    name: str = ""
    art_url: str = ""
    top_tracks: list[Track] = Field(default_factory=list)
    albums: list[Album] = Field(default_factory=list)
    singles: list[Album] = Field(default_factory=list)
    omitted: list[str] = Field(default_factory=list)

    @property
    def is_stub(self) -> bool:
        """Whether the artist was never resolved."""
        return not self.art_url


class Disc(BaseModel):
    """Disc of an album.

    Attributes:
        number: Zero-based position of the disc in the album record.
        tracks: Tracks in backend order.
    """

    number: int
    tracks: list[Track] = Field(default_factory=list)


class Album(BaseModel):
    """Album metadata."""

    album_id: str
    uri: str = ""
    title: str = ""
    artist: str = ""
    artists: list[Artist] = Field(default_factory=list)
    discs: list[Disc] = Field(default_factory=list)
    release_date: date | None = None
    art_url: str = ""
    omitted: list[str] = Field(default_factory=list)

    @property
    def is_stub(self) -> bool:
        """Whether the album was never resolved."""
        return not self.art_url

    @property
    def tracks(self) -> list[Track]:
        """All tracks across discs, in order."""
        return [track for disc in self.discs for track in disc.tracks]


class PlaylistItem(BaseModel):
    """Entry of a playlist."""

    track_uri: str
    added_by: str = ""
    timestamp: int = 0
    service: str = Field(default="spotify", exclude=True)

    @property
    def reference(self) -> Reference | None:
        """Parsed track URI, or None if unrecognized."""
        return classify_uri(self.track_uri, self.service)


class Playlist(BaseModel):
    """Playlist metadata."""

    user_id: str
    playlist_id: str
    uri: str = ""
    name: str = ""
    description: str = ""
    length: int = 0
    truncated: bool = False
    items: list[PlaylistItem] = Field(default_factory=list)
    image_url: str | None = None


class SearchHitRef(BaseModel):
    """Album or artist summary in a search hit."""

    name: str = ""
    uri: str = ""
    image: str = ""


class SearchHit(BaseModel):
    """Search hit of any kind.

    The kind is not given by the backend; it is derived from the URI,
    classified for ``service``.
    """

    name: str = ""
    uri: str = ""
    image: str = ""
    album: SearchHitRef | None = None
    artists: list[SearchHitRef] = Field(default_factory=list)
    duration: int = 0
    followers_count: int = 0
    author: str = ""
    service: str = Field(default="spotify", exclude=True)

    @property
    def reference(self) -> Reference | None:
        """Parsed hit URI, or None if unrecognized."""
        return classify_uri(self.uri, self.service)

    @property
    def kind(self) -> EntityKind | None:
        reference = self.reference
        return reference.kind if reference else None

    @property
    def ids(self) -> list[str]:
        """Public ID, preceded by the owner for playlists."""
        reference = self.reference
        if reference is None:
            return []
        if reference.kind == EntityKind.PLAYLIST:
            return [reference.user or "", reference.id]
        return [reference.id]


class SearchResults(BaseModel):
    """Search results grouped by section."""

    query: str = ""
    tracks: list[SearchHit] = Field(default_factory=list)
    albums: list[SearchHit] = Field(default_factory=list)
    artists: list[SearchHit] = Field(default_factory=list)
    playlists: list[SearchHit] = Field(default_factory=list)

    def hits(self) -> Iterator[SearchHit]:
        """Iterate over all hits, tracks first."""
        yield from self.tracks
        yield from self.albums
        yield from self.artists
        yield from self.playlists


Track.model_rebuild()
Artist.model_rebuild()
Album.model_rebuild()
