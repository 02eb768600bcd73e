"""spotmeta - Resolve music service references into nested metadata.

This library turns track, artist, album and playlist URLs or URIs into
fully populated metadata objects by combining calls to a metadata backend
and the public oEmbed thumbnail service.

Designed for use as a library in applications with a CLI for debugging
and development.

Examples:
    Resolve a track with its credited artists:
    ```python
    from spotmeta import BackendConfig, create_resolver

    resolver = create_resolver(BackendConfig(host="localhost:8080", password="s3cret"))
    track = resolver.resolve_track("https://open.spotify.com/track/...")
    print(f"{track.artist} - {track.title}")
    ```

    Inspect what a failed lookup still produced:
    ```python
    try:
        album = resolver.resolve_album("spotify:album:...")
    except SpotMetaError as e:
        print(e.partial)
    ```
"""

from spotmeta.client import BackendClient, BackendProtocol
from spotmeta.codec import (
    classify_uri,
    gid_to_id,
    parse_reference,
    to_base62,
)
from spotmeta.config import BackendConfig, ResolutionDepth, ResolverConfig
from spotmeta.exceptions import (
    APIError,
    DecodeError,
    InvalidGidError,
    NotFoundError,
    ReferenceParseError,
    SpotMetaError,
)
from spotmeta.models.domain import (
    Album,
    Artist,
    Disc,
    Playlist,
    PlaylistItem,
    SearchHit,
    SearchResults,
    Track,
)
from spotmeta.models.enums import EntityKind
from spotmeta.models.reference import Reference
from spotmeta.models.results import Outcome
from spotmeta.services import MetadataResolver

__version__ = "0.1.0"


def create_resolver(
    backend: BackendConfig,
    config: ResolverConfig | None = None,
) -> MetadataResolver:
    """Create a configured metadata resolver.

    This is the recommended way to create a resolver for library usage.
    It handles client instantiation internally.

    Args:
        backend: Backend host, credential and service settings.
        config: Optional resolver configuration. Uses defaults if not provided.

    Returns:
        A configured MetadataResolver instance.

    Examples:
        >>> resolver = create_resolver(BackendConfig(host="h", password="p"))

        # Resolve listings recursively, four fetches at a time
        >>> config = ResolverConfig(depth=ResolutionDepth.FULL, max_workers=4)
        >>> resolver = create_resolver(BackendConfig(host="h", password="p"), config)
    """
    client = BackendClient(backend)
    return MetadataResolver(client, config, service=backend.service)


__all__ = [
    "APIError",
    "Album",
    "Artist",
    "BackendClient",
    "BackendConfig",
    "BackendProtocol",
    "DecodeError",
    "Disc",
    "EntityKind",
    "InvalidGidError",
    "MetadataResolver",
    "NotFoundError",
    "Outcome",
    "Playlist",
    "PlaylistItem",
    "Reference",
    "ReferenceParseError",
    "ResolutionDepth",
    "ResolverConfig",
    "SearchHit",
    "SearchResults",
    "SpotMetaError",
    "Track",
    "classify_uri",
    "create_resolver",
    "gid_to_id",
    "parse_reference",
    "to_base62",
]
