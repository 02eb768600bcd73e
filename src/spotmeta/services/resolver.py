"""Metadata resolution service."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date
from typing import TypeVar

from spotmeta.client import BackendProtocol
from spotmeta.codec import make_reference, parse_reference
from spotmeta.config import ResolutionDepth, ResolverConfig
from spotmeta.exceptions import InvalidGidError, NotFoundError, SpotMetaError
from spotmeta.models.domain import (
    Album,
    Artist,
    Disc,
    Playlist,
    PlaylistItem,
    SearchHit,
    SearchHitRef,
    SearchResults,
    Track,
)
from spotmeta.models.enums import EntityKind
from spotmeta.models.reference import Reference
from spotmeta.models.results import Outcome, collect
from spotmeta.models.wire import (
    GidRef,
    WireArtist,
    WireDate,
    WireSearchHitRef,
    WireSearchHits,
)
from spotmeta.utils.artists import format_artist_credit

logger = logging.getLogger(__name__)

T = TypeVar("T")
EntryT = TypeVar("EntryT", bound=GidRef)


@dataclass(frozen=True)
class _Walk:
    """State of a single resolve_* call.

    Attributes:
        path: URIs of the entities being resolved above the current one.
        visited: Every nested entity resolved so far in this call, by URI,
            mapped to the resolved object or the error it raised. Shared by
            all branches and discarded when the call returns.
    """

    path: frozenset[str] = frozenset()
    visited: dict[str, object] = field(default_factory=dict)

    def enter(self, uri: str) -> _Walk:
        return _Walk(self.path | {uri}, self.visited)


class MetadataResolver:
    """Service for resolving references into nested metadata.

    This service orchestrates the resolution process:
    1. Parse the reference
    2. Fetch the root record and its thumbnail
    3. Resolve nested artists, tracks and albums per the depth policy

    Failures of the root lookup are raised with the partially built object
    attached. Failures of nested lookups are logged and the entry omitted.
    """

    def __init__(
        self,
        client: BackendProtocol,
        config: ResolverConfig | None = None,
        service: str = "spotify",
    ) -> None:
        """Initialize the service.

        Args:
            client: Metadata backend client.
            config: Optional resolver configuration. Uses defaults if not provided.
            service: Service name expected in references.
        """
        self._client = client
        self._config = config or ResolverConfig()
        self._service = service

    @property
    def config(self) -> ResolverConfig:
        return self._config

    def resolve(
        self, text: str, depth: ResolutionDepth | None = None
    ) -> Track | Artist | Album | Playlist:
        """Resolve any supported reference.

        Args:
            text: Track, artist, album or playlist URL or URI.
            depth: Optional depth override for this call.

        Returns:
            The resolved object, typed after the reference kind.

        Raises:
            ReferenceParseError: If the reference is not recognized.
            SpotMetaError: If the root lookup fails (with ``partial`` set).
        """
        reference = parse_reference(text, service=self._service)
        match reference.kind:
            case EntityKind.TRACK:
                return self.resolve_track(text, depth)
            case EntityKind.ARTIST:
                return self.resolve_artist(text, depth)
            case EntityKind.ALBUM:
                return self.resolve_album(text, depth)
            case EntityKind.PLAYLIST:
                return self.resolve_playlist(text)

    def resolve_track(self, text: str, depth: ResolutionDepth | None = None) -> Track:
        """Resolve a track with its credited artists.

        Args:
            text: Track URL or URI.
            depth: Optional depth override for this call.

        Returns:
            Resolved track.

        Raises:
            ReferenceParseError: If the text is not a track reference.
            NotFoundError: If the track or its thumbnail is empty.
            APIError: If the track or thumbnail request fails.
            DecodeError: If a response has an unexpected shape.
        """
        reference = parse_reference(text, EntityKind.TRACK, self._service)
        logger.info("Resolving track: %s", reference.id)
        return self._track(reference, depth or self._config.depth, _Walk())

    def resolve_artist(
        self, text: str, depth: ResolutionDepth | None = None
    ) -> Artist:
        """Resolve an artist with its top tracks, albums and singles.

        Raises:
            ReferenceParseError: If the text is not an artist reference.
            NotFoundError: If the artist or its thumbnail is empty.
            APIError: If the artist or thumbnail request fails.
            DecodeError: If a response has an unexpected shape.
        """
        reference = parse_reference(text, EntityKind.ARTIST, self._service)
        logger.info("Resolving artist: %s", reference.id)
        return self._artist(reference, depth or self._config.depth, _Walk())

    def resolve_album(self, text: str, depth: ResolutionDepth | None = None) -> Album:
        """Resolve an album with its credited artists and discs.

        Raises:
            ReferenceParseError: If the text is not an album reference.
            NotFoundError: If the album or its thumbnail is empty.
            APIError: If the album or thumbnail request fails.
            DecodeError: If a response has an unexpected shape.
        """
        reference = parse_reference(text, EntityKind.ALBUM, self._service)
        logger.info("Resolving album: %s", reference.id)
        return self._album(reference, depth or self._config.depth, _Walk())

    def resolve_playlist(self, text: str) -> Playlist:
        """Resolve a playlist.

        Makes a single request. Items are returned as URIs and not resolved.

        Raises:
            ReferenceParseError: If the text is not a playlist reference.
            APIError: If the request fails.
            DecodeError: If the response has an unexpected shape.
        """
        reference = parse_reference(text, EntityKind.PLAYLIST, self._service)
        user_id = reference.user or ""
        logger.info("Resolving playlist: %s (owner %s)", reference.id, user_id)

        playlist = Playlist(
            user_id=user_id, playlist_id=reference.id, uri=reference.uri
        )
        try:
            info = self._client.get_playlist(user_id, reference.id)
        except SpotMetaError as e:
            e.partial = playlist
            raise

        playlist.name = info.attributes.name
        playlist.description = info.attributes.description
        playlist.length = info.length
        playlist.truncated = info.contents.truncated
        playlist.items = [
            PlaylistItem(
                track_uri=item.uri,
                added_by=item.attributes.added_by,
                timestamp=item.attributes.timestamp,
                service=self._service,
            )
            for item in info.contents.items
        ]
        logger.info(
            "Resolved playlist '%s' (%d items)", playlist.name, len(playlist.items)
        )
        return playlist

    def search(self, query: str) -> SearchResults:
        """Search the backend.

        Hits are not resolved; use ``SearchHit.reference`` to find out what
        each one addresses.

        Raises:
            APIError: If the request fails.
            DecodeError: If the response has an unexpected shape.
        """
        logger.info("Searching: %s", query)
        results = self._client.search(query).results
        return SearchResults(
            query=query,
            tracks=_search_hits(results.tracks, self._service),
            albums=_search_hits(results.albums, self._service),
            artists=_search_hits(results.artists, self._service),
            playlists=_search_hits(results.playlists, self._service),
        )

    def _track(
        self, reference: Reference, depth: ResolutionDepth, walk: _Walk
    ) -> Track:
        track = Track(track_id=reference.id)
        try:
            info = self._client.get_track(reference.id)
            if not info.name:
                raise NotFoundError(f"Track not found: {reference.id}")
            art_url = self._thumbnail(reference)
        except SpotMetaError as e:
            e.partial = track
            raise

        track.uri = reference.uri
        track.title = info.name
        track.duration = info.duration
        track.number = info.number or None
        track.disc_number = info.disc_number or None
        track.artist = format_artist_credit([a.name for a in info.artist])
        if info.album is not None:
            track.album_title = info.album.name or None
            track.album_id = self._public_id(info.album)
        track.artists = self._credited_artists(
            info.artist, depth, walk.enter(reference.uri), track.omitted
        )
        track.art_url = art_url
        track.stream_url = self._client.download_url(reference.id)
        return track

    def _artist(
        self, reference: Reference, depth: ResolutionDepth, walk: _Walk
    ) -> Artist:
        artist = Artist(artist_id=reference.id)
        try:
            info = self._client.get_artist(reference.id)
            if not info.name:
                raise NotFoundError(f"Artist not found: {reference.id}")
            art_url = self._thumbnail(reference)
        except SpotMetaError as e:
            e.partial = artist
            raise

        artist.uri = reference.uri
        artist.name = info.name
        walk = walk.enter(reference.uri)

        # Only the first group holds the artist's own top tracks
        top_tracks = info.top_track[0].track if info.top_track else []
        artist.top_tracks = self._listed_tracks(top_tracks, depth, walk, artist.omitted)

        albums = [entry for group in info.album_group for entry in group.album]
        singles = [entry for group in info.single_group for entry in group.album]
        artist.albums = self._listed_albums(albums, depth, walk, artist.omitted)
        artist.singles = self._listed_albums(singles, depth, walk, artist.omitted)

        artist.art_url = art_url
        return artist

    def _album(
        self, reference: Reference, depth: ResolutionDepth, walk: _Walk
    ) -> Album:
        album = Album(album_id=reference.id)
        try:
            info = self._client.get_album(reference.id)
            if not info.name:
                raise NotFoundError(f"Album not found: {reference.id}")
            art_url = self._thumbnail(reference)
        except SpotMetaError as e:
            e.partial = album
            raise

        album.uri = reference.uri
        album.title = info.name
        album.artist = format_artist_credit([a.name for a in info.artist])
        album.release_date = _release_date(info.date)
        walk = walk.enter(reference.uri)
        album.artists = self._credited_artists(info.artist, depth, walk, album.omitted)
        album.discs = [
            Disc(
                number=index,
                tracks=self._listed_tracks(disc.track, depth, walk, album.omitted),
            )
            for index, disc in enumerate(info.disc)
        ]
        album.art_url = art_url
        return album

    def _thumbnail(self, reference: Reference) -> str:
        embed = self._client.get_thumbnail(reference.kind, reference.id)
        if not embed.thumbnail_url:
            raise NotFoundError(f"Thumbnail not found: {reference.uri}")
        return embed.thumbnail_url

    def _credited_artists(
        self,
        entries: Sequence[WireArtist],
        depth: ResolutionDepth,
        walk: _Walk,
        omitted: list[str],
    ) -> list[Artist]:
        """Artists credited on a track or album.

        Resolved unless depth is STUB. Below the root, only FULL keeps
        resolving listings.
        """
        references = self._references(entries, EntityKind.ARTIST, omitted)
        if depth == ResolutionDepth.STUB:
            return [
                Artist(artist_id=ref.id, uri=ref.uri, name=entry.name)
                for ref, entry in references
            ]

        child_depth = (
            ResolutionDepth.FULL
            if depth == ResolutionDepth.FULL
            else ResolutionDepth.STUB
        )

        def resolve_one(ref: Reference) -> Artist:
            return self._visit(
                ref,
                walk,
                Artist(artist_id=ref.id, uri=ref.uri),
                lambda r: self._artist(r, child_depth, walk),
            )

        outcomes = self._resolve_all([ref for ref, _ in references], resolve_one)
        return collect(outcomes, omitted)

    def _listed_tracks(
        self,
        entries: Sequence[GidRef],
        depth: ResolutionDepth,
        walk: _Walk,
        omitted: list[str],
    ) -> list[Track]:
        """Tracks listed on a disc or as top tracks. Stubs unless depth is FULL."""
        references = [
            ref for ref, _ in self._references(entries, EntityKind.TRACK, omitted)
        ]
        if depth != ResolutionDepth.FULL:
            return [Track(track_id=ref.id, uri=ref.uri) for ref in references]

        def resolve_one(ref: Reference) -> Track:
            return self._visit(
                ref,
                walk,
                Track(track_id=ref.id, uri=ref.uri),
                lambda r: self._track(r, depth, walk),
            )

        return collect(self._resolve_all(references, resolve_one), omitted)

    def _listed_albums(
        self,
        entries: Sequence[GidRef],
        depth: ResolutionDepth,
        walk: _Walk,
        omitted: list[str],
    ) -> list[Album]:
        """Albums or singles of an artist. Stubs unless depth is FULL."""
        references = [
            ref for ref, _ in self._references(entries, EntityKind.ALBUM, omitted)
        ]
        if depth != ResolutionDepth.FULL:
            return [Album(album_id=ref.id, uri=ref.uri) for ref in references]

        def resolve_one(ref: Reference) -> Album:
            return self._visit(
                ref,
                walk,
                Album(album_id=ref.id, uri=ref.uri),
                lambda r: self._album(r, depth, walk),
            )

        return collect(self._resolve_all(references, resolve_one), omitted)

    def _visit(
        self,
        reference: Reference,
        walk: _Walk,
        stub: T,
        resolve: Callable[[Reference], T],
    ) -> T:
        """Resolve a nested entity at most once per call.

        Ancestors on the path become ``stub``. An entity seen earlier in
        the call yields the same object, or raises the same error again.
        """
        if reference.uri in walk.path:
            return stub
        if reference.uri in walk.visited:
            seen = walk.visited[reference.uri]
            if isinstance(seen, SpotMetaError):
                raise seen
            return seen  # type: ignore[return-value]

        try:
            value = resolve(reference)
        except SpotMetaError as e:
            walk.visited[reference.uri] = e
            raise
        walk.visited[reference.uri] = value
        return value

    def _references(
        self, entries: Sequence[EntryT], kind: EntityKind, omitted: list[str]
    ) -> list[tuple[Reference, EntryT]]:
        """Decode Gids of nested entries.

        Entries with an invalid Gid are dropped and a marker naming the Gid
        is recorded in ``omitted``.
        """
        references: list[tuple[Reference, EntryT]] = []
        for entry in entries:
            public_id = self._public_id(entry)
            if public_id is None:
                omitted.append(f"{self._service}:{kind}:<invalid gid {entry.gid!r}>")
                continue
            references.append((make_reference(kind, public_id, self._service), entry))
        return references

    def _public_id(self, entry: GidRef) -> str | None:
        try:
            return entry.public_id()
        except InvalidGidError as e:
            logger.warning("Skipping entry with invalid gid: %s", e)
            return None

    def _resolve_all(
        self,
        references: list[Reference],
        resolve_one: Callable[[Reference], T],
    ) -> list[Outcome[T]]:
        """Resolve sibling references, keeping input order.

        Runs on a thread pool when max_workers > 1.
        """

        def attempt(reference: Reference) -> Outcome[T]:
            try:
                return Outcome(reference, value=resolve_one(reference))
            except SpotMetaError as e:
                logger.warning("Omitting %s: %s", reference.uri, e)
                return Outcome(reference, error=e)

        if self._config.max_workers <= 1 or len(references) <= 1:
            return [attempt(reference) for reference in references]

        with ThreadPoolExecutor(max_workers=self._config.max_workers) as executor:
            return list(executor.map(attempt, references))


def _release_date(value: WireDate | None) -> date | None:
    """Build a release date, defaulting missing month/day to 1."""
    if value is None or not value.year:
        return None
    try:
        return date(value.year, value.month or 1, value.day or 1)
    except ValueError:
        logger.debug("Invalid release date: %s", value)
        return None


def _search_hits(section: WireSearchHits, service: str) -> list[SearchHit]:
    return [
        SearchHit(
            name=hit.name,
            uri=hit.uri,
            image=hit.image,
            album=_search_hit_ref(hit.album) if hit.album else None,
            artists=[_search_hit_ref(artist) for artist in hit.artists],
            duration=hit.duration,
            followers_count=hit.followers_count,
            author=hit.author,
            service=service,
        )
        for hit in section.hits
    ]


def _search_hit_ref(ref: WireSearchHitRef) -> SearchHitRef:
    return SearchHitRef(name=ref.name, uri=ref.uri, image=ref.image)
