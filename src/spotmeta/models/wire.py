"""Models for parsing backend responses.

These are internal models used to parse and validate JSON records from
the metadata backend. Missing fields fall back to empty values so that a
record without a name still validates and can be reported as not found.
"""

from pydantic import BaseModel, ConfigDict, Field

from spotmeta.codec import gid_to_id

__all__ = [
    "GidRef",
    "OEmbed",
    "WireAlbum",
    "WireAlbumGroup",
    "WireArtist",
    "WireDate",
    "WireDisc",
    "WirePlaylist",
    "WireSearch",
    "WireSearchHit",
    "WireTopTracks",
    "WireTrack",
]


class WireModel(BaseModel):
    """Base model for backend responses."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class GidRef(WireModel):
    """Entry carrying only a Gid."""

    gid: str = ""

    def public_id(self) -> str:
        """Decode the Gid into a public ID."""
        return gid_to_id(self.gid)


class WireTopTracks(WireModel):
    """Group of top tracks."""

    track: list[GidRef] = Field(default_factory=list)


class WireAlbumGroup(WireModel):
    """Group of albums or singles."""

    album: list[GidRef] = Field(default_factory=list)


class WireArtist(GidRef):
    """Artist record (also embedded in tracks and albums)."""

    name: str = ""
    top_track: list[WireTopTracks] = Field(default_factory=list)
    album_group: list[WireAlbumGroup] = Field(default_factory=list)
    single_group: list[WireAlbumGroup] = Field(default_factory=list)


class WireDisc(WireModel):
    """Disc within an album."""

    number: int = 0
    track: list[GidRef] = Field(default_factory=list)


class WireDate(WireModel):
    """Release date, any part may be missing."""

    year: int = 0
    month: int = 0
    day: int = 0


class WireAlbum(GidRef):
    """Album record (also embedded in tracks)."""

    name: str = ""
    artist: list[WireArtist] = Field(default_factory=list)
    disc: list[WireDisc] = Field(default_factory=list)
    date: WireDate | None = None


class WireTrack(GidRef):
    """Track record."""

    name: str = ""
    number: int = 0
    disc_number: int = 0
    duration: int = 0  # milliseconds
    album: WireAlbum | None = None
    artist: list[WireArtist] = Field(default_factory=list)


class OEmbed(WireModel):
    """oEmbed response from the thumbnail service."""

    thumbnail_url: str = ""


class WirePlaylistAttributes(WireModel):
    name: str = ""
    description: str = ""


class WirePlaylistItemAttributes(WireModel):
    added_by: str = ""
    timestamp: int = 0


class WirePlaylistItem(WireModel):
    uri: str = ""
    attributes: WirePlaylistItemAttributes = Field(
        default_factory=WirePlaylistItemAttributes
    )


class WirePlaylistContents(WireModel):
    pos: int = 0
    truncated: bool = False
    items: list[WirePlaylistItem] = Field(default_factory=list)


class WirePlaylist(WireModel):
    """Playlist record."""

    gid: str = ""
    length: int = 0
    attributes: WirePlaylistAttributes = Field(default_factory=WirePlaylistAttributes)
    contents: WirePlaylistContents = Field(default_factory=WirePlaylistContents)


class WireSearchHitRef(WireModel):
    """Album or artist summary inside a search hit."""

    image: str = ""
    name: str = ""
    uri: str = ""


class WireSearchHit(WireModel):
    """Single search hit. Tracks, albums, artists and playlists share it."""

    album: WireSearchHitRef | None = None
    artists: list[WireSearchHitRef] = Field(default_factory=list)
    image: str = ""
    name: str = ""
    uri: str = ""
    duration: int = 0
    followers_count: int = Field(default=0, alias="followersCount")
    author: str = ""


class WireSearchHits(WireModel):
    hits: list[WireSearchHit] = Field(default_factory=list)


class WireSearchResults(WireModel):
    tracks: WireSearchHits = Field(default_factory=WireSearchHits)
    albums: WireSearchHits = Field(default_factory=WireSearchHits)
    artists: WireSearchHits = Field(default_factory=WireSearchHits)
    playlists: WireSearchHits = Field(default_factory=WireSearchHits)


class WireSearch(WireModel):
    """Search response."""

    results: WireSearchResults = Field(default_factory=WireSearchResults)
