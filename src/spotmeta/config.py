"""Configuration for spotmeta."""

from dataclasses import dataclass
from enum import StrEnum


class ResolutionDepth(StrEnum):
    """How far nested references are resolved.

    - STUB: no secondary fetches, every nested entity is a stub.
    - ONE_LEVEL: credited artists of the root are resolved; listings
      (top tracks, discs, albums, singles) stay stubs.
    - FULL: credits and listings are resolved recursively. Entities already
      on the resolution path are emitted as stubs.
    """

    STUB = "stub"
    ONE_LEVEL = "one-level"
    FULL = "full"


@dataclass(frozen=True)
class BackendConfig:
    """Metadata backend configuration.

    Attributes:
        host: Backend host (and optional port), e.g. "localhost:8080".
        password: Shared access credential sent as the `pass` parameter.
        service: Service name used in URIs ("spotify:track:...").
        scheme: URL scheme for backend requests.
        embed_url: oEmbed endpoint used for thumbnails.
        timeout: Request timeout in seconds.
    """

    host: str
    password: str
    service: str = "spotify"
    scheme: str = "http"
    embed_url: str = "https://embed.spotify.com/oembed"
    timeout: float = 30.0


@dataclass(frozen=True)
class ResolverConfig:
    """Metadata resolver configuration.

    Attributes:
        depth: Resolution depth for nested references.
        max_workers: Number of threads for sibling fetches (1 = sequential).
    """

    depth: ResolutionDepth = ResolutionDepth.ONE_LEVEL
    max_workers: int = 1
