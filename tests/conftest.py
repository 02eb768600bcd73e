"""Test fixtures and configuration."""

import base64
from typing import Any

import pytest
from spotmeta.codec import to_base62
from spotmeta.exceptions import APIError
from spotmeta.models.enums import EntityKind
from spotmeta.models.wire import (
    OEmbed,
    WireAlbum,
    WireArtist,
    WirePlaylist,
    WireSearch,
    WireTrack,
)


def gid(n: int) -> str:
    """Base64 Gid for the 16-byte big-endian encoding of n."""
    return base64.b64encode(n.to_bytes(16, "big")).decode()


def pid(n: int) -> str:
    """Public ID matching gid(n)."""
    return to_base62(n.to_bytes(16, "big"))


# Numeric seeds for sample entities
TRACK_1, TRACK_2, TRACK_3, TRACK_4 = 1, 2, 3, 4
ARTIST_A, ARTIST_B, ARTIST_C = 101, 102, 103
ALBUM_1, ALBUM_2, SINGLE_1 = 201, 202, 301


class MockBackend:
    """Mock metadata backend for testing.

    Records are keyed by public ID. Unknown IDs return empty records, which
    the resolver reports as not found. IDs in ``failing`` raise APIError.
    """

    def __init__(
        self,
        tracks: dict[str, WireTrack] | None = None,
        artists: dict[str, WireArtist] | None = None,
        albums: dict[str, WireAlbum] | None = None,
        playlist: WirePlaylist | None = None,
        search_result: WireSearch | None = None,
        thumbnails: dict[str, str] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self.tracks = tracks or {}
        self.artists = artists or {}
        self.albums = albums or {}
        self.playlist = playlist
        self.search_result = search_result
        self.thumbnails = thumbnails or {}
        self.failing = failing or set()
        self.calls: list[tuple[str, str]] = []
        self.closed = False

    def __enter__(self) -> "MockBackend":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.closed = True

    def _check(self, kind: str, ident: str) -> None:
        self.calls.append((kind, ident))
        if ident in self.failing:
            raise APIError(f"Failed to fetch {kind} {ident}: connection refused")

    def get_track(self, track_id: str) -> WireTrack:
        self._check("track", track_id)
        return self.tracks.get(track_id, WireTrack())

    def get_artist(self, artist_id: str) -> WireArtist:
        self._check("artist", artist_id)
        return self.artists.get(artist_id, WireArtist())

    def get_album(self, album_id: str) -> WireAlbum:
        self._check("album", album_id)
        return self.albums.get(album_id, WireAlbum())

    def get_playlist(self, user_id: str, playlist_id: str) -> WirePlaylist:
        self._check("playlist", f"{user_id}/{playlist_id}")
        if self.playlist is None:
            raise APIError("No playlist configured")
        return self.playlist

    def search(self, query: str) -> WireSearch:
        self._check("search", query)
        return self.search_result or WireSearch()

    def get_thumbnail(self, kind: EntityKind, public_id: str) -> OEmbed:
        self.calls.append(("thumbnail", public_id))
        url = self.thumbnails.get(public_id, f"https://i.scdn.test/{public_id}.jpg")
        return OEmbed(thumbnail_url=url)

    def download_url(self, track_id: str) -> str:
        return f"http://backend.test/download/{track_id}?pass=secret"

    def fetches(self, kind: str) -> list[str]:
        """IDs fetched for a record kind, in call order."""
        return [ident for k, ident in self.calls if k == kind]


def artist_record(n: int, name: str, top_tracks: list[int] | None = None) -> dict:
    return {
        "gid": gid(n),
        "name": name,
        "top_track": [
            {"track": [{"gid": gid(t)} for t in top_tracks or []]},
            # Second group is ignored by the resolver
            {"track": [{"gid": gid(999)}]},
        ],
        "album_group": [{"album": [{"gid": gid(ALBUM_1)}, {"gid": gid(ALBUM_2)}]}],
        "single_group": [{"album": [{"gid": gid(SINGLE_1)}]}],
    }


def track_record(n: int, name: str, artists: list[tuple[int, str]]) -> dict:
    return {
        "gid": gid(n),
        "name": name,
        "number": n,
        "disc_number": 1,
        "duration": 215_000,
        "album": {"gid": gid(ALBUM_1), "name": "Sample Album"},
        "artist": [{"gid": gid(a), "name": artist_name} for a, artist_name in artists],
    }


@pytest.fixture
def sample_track() -> WireTrack:
    """Track credited to A, B and C."""
    return WireTrack.model_validate(
        track_record(
            TRACK_1,
            "Sample Song",
            [(ARTIST_A, "A"), (ARTIST_B, "B"), (ARTIST_C, "C")],
        )
    )


@pytest.fixture
def sample_artists() -> dict[str, WireArtist]:
    """Artists A, B and C keyed by public ID."""
    return {
        pid(ARTIST_A): WireArtist.model_validate(
            artist_record(ARTIST_A, "A", top_tracks=[TRACK_1, TRACK_4])
        ),
        pid(ARTIST_B): WireArtist.model_validate(
            artist_record(ARTIST_B, "B", top_tracks=[TRACK_2])
        ),
        pid(ARTIST_C): WireArtist.model_validate(
            artist_record(ARTIST_C, "C", top_tracks=[TRACK_3])
        ),
    }


@pytest.fixture
def sample_album() -> WireAlbum:
    """Album by A and B with two discs."""
    return WireAlbum.model_validate(
        {
            "gid": gid(ALBUM_1),
            "name": "Sample Album",
            "artist": [
                {"gid": gid(ARTIST_A), "name": "A"},
                {"gid": gid(ARTIST_B), "name": "B"},
            ],
            "disc": [
                {"number": 1, "track": [{"gid": gid(TRACK_1)}, {"gid": gid(TRACK_2)}]},
                {"number": 2, "track": [{"gid": gid(TRACK_4)}, {"gid": gid(TRACK_3)}]},
            ],
            "date": {"year": 2019, "month": 6},
        }
    )


@pytest.fixture
def sample_playlist() -> WirePlaylist:
    return WirePlaylist.model_validate(
        {
            "gid": "cGxheWxpc3Q=",
            "length": 3,
            "attributes": {"name": "Road Trip", "description": "Songs for the car"},
            "contents": {
                "pos": 0,
                "truncated": True,
                "items": [
                    {
                        "uri": f"spotify:track:{pid(TRACK_1)}",
                        "attributes": {"added_by": "alice", "timestamp": 1500000000},
                    },
                    {
                        "uri": f"spotify:track:{pid(TRACK_2)}",
                        "attributes": {"added_by": "bob", "timestamp": 1500000100},
                    },
                ],
            },
        }
    )


@pytest.fixture
def sample_search() -> WireSearch:
    hit: dict[str, Any] = {"image": "https://i.scdn.test/x.jpg"}
    return WireSearch.model_validate(
        {
            "results": {
                "tracks": {
                    "hits": [
                        {
                            **hit,
                            "name": "Sample Song",
                            "uri": f"spotify:track:{pid(TRACK_1)}",
                            "duration": 215000,
                            "album": {"name": "Sample Album", "uri": "spotify:album:x"},
                            "artists": [{"name": "A", "uri": "spotify:artist:y"}],
                        }
                    ]
                },
                "albums": {
                    "hits": [
                        {**hit, "name": "Sample Album", "uri": "spotify:album:abc"}
                    ]
                },
                "artists": {
                    "hits": [
                        {
                            **hit,
                            "name": "A",
                            "uri": "spotify:artist:def",
                            "followersCount": 42,
                        }
                    ]
                },
                "playlists": {
                    "hits": [
                        {
                            **hit,
                            "name": "Road Trip",
                            "uri": "spotify:user:alice%40home:playlist:xyz",
                            "author": "alice",
                        },
                        {**hit, "name": "Broken", "uri": "spotify:episode:123"},
                    ]
                },
            }
        }
    )


@pytest.fixture
def mock_backend(
    sample_track: WireTrack,
    sample_artists: dict[str, WireArtist],
    sample_album: WireAlbum,
    sample_playlist: WirePlaylist,
    sample_search: WireSearch,
) -> MockBackend:
    """Create a mock backend with sample data."""
    return MockBackend(
        tracks={pid(TRACK_1): sample_track},
        artists=sample_artists,
        albums={pid(ALBUM_1): sample_album},
        playlist=sample_playlist,
        search_result=sample_search,
    )
