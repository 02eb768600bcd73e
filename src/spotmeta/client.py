"""Metadata backend client."""

from __future__ import annotations

import logging
from typing import Any, Protocol, TypeVar
from urllib.parse import quote

import requests
from pydantic import BaseModel, ValidationError

from spotmeta.config import BackendConfig
from spotmeta.exceptions import APIError, DecodeError
from spotmeta.models.enums import EntityKind
from spotmeta.models.wire import (
    OEmbed,
    WireAlbum,
    WireArtist,
    WirePlaylist,
    WireSearch,
    WireTrack,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class BackendProtocol(Protocol):
    """Protocol for metadata backend clients.

    This protocol enables dependency injection and testing.
    Implement this protocol to create mock clients for testing.
    """

    def get_track(self, track_id: str) -> WireTrack:
        """Fetch a track record by public ID."""
        ...

    def get_artist(self, artist_id: str) -> WireArtist:
        """Fetch an artist record by public ID."""
        ...

    def get_album(self, album_id: str) -> WireAlbum:
        """Fetch an album record by public ID."""
        ...

    def get_playlist(self, user_id: str, playlist_id: str) -> WirePlaylist:
        """Fetch a playlist record by owner and playlist ID."""
        ...

    def search(self, query: str) -> WireSearch:
        """Run a free-text search."""
        ...

    def get_thumbnail(self, kind: EntityKind, public_id: str) -> OEmbed:
        """Fetch the oEmbed thumbnail record of an entity."""
        ...

    def download_url(self, track_id: str) -> str:
        """Build the stream URL of a track without fetching it."""
        ...


class BackendClient:
    """Production metadata backend client.

    Wraps a requests session with consistent error handling and response
    parsing. Implements BackendProtocol for type safety.
    """

    def __init__(
        self,
        config: BackendConfig,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Backend host, credential and service settings.
            session: Optional requests session. Creates one if not provided.
        """
        self._config = config
        self._session = session or requests.Session()
        self._base_url = f"{config.scheme}://{config.host}"

    def __enter__(self) -> BackendClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying session."""
        self._session.close()

    def get_track(self, track_id: str) -> WireTrack:
        return self._get_record(f"/track/{track_id}", WireTrack, "track", track_id)

    def get_artist(self, artist_id: str) -> WireArtist:
        return self._get_record(
            f"/artist/{artist_id}", WireArtist, "artist", artist_id
        )

    def get_album(self, album_id: str) -> WireAlbum:
        return self._get_record(f"/album/{album_id}", WireAlbum, "album", album_id)

    def get_playlist(self, user_id: str, playlist_id: str) -> WirePlaylist:
        """Fetch a playlist record.

        Args:
            user_id: Owner ID, already percent-decoded.
            playlist_id: Playlist public ID.

        Raises:
            ValueError: If either ID is empty.
            APIError: If the request fails.
            DecodeError: If the response is not a playlist record.
        """
        if not user_id or not playlist_id:
            raise ValueError("user_id and playlist_id cannot be empty")

        uri = (
            f"{self._config.service}:user:{quote(user_id, safe='')}"
            f":playlist:{playlist_id}"
        )
        return self._get_record(f"/playlist/{uri}", WirePlaylist, "playlist", uri)

    def search(self, query: str) -> WireSearch:
        """Run a free-text search.

        Raises:
            APIError: If the request fails.
            DecodeError: If the response is not a search record.
        """
        logger.debug("Searching: %s", query)
        data = self._get_json(
            f"{self._base_url}/search/",
            {"query": query, "pass": self._config.password},
            f"search '{query}'",
        )
        return self._validate(WireSearch, data, f"search '{query}'")

    def get_thumbnail(self, kind: EntityKind, public_id: str) -> OEmbed:
        """Fetch the oEmbed record of an entity from the thumbnail service.

        Raises:
            APIError: If the request fails.
            DecodeError: If the response is not an oEmbed record.
        """
        uri = f"{self._config.service}:{kind}:{public_id}"
        logger.debug("Fetching thumbnail: %s", uri)
        data = self._get_json(self._config.embed_url, {"url": uri}, f"thumbnail {uri}")
        return self._validate(OEmbed, data, f"thumbnail {uri}")

    def download_url(self, track_id: str) -> str:
        query = quote(self._config.password, safe="")
        return f"{self._base_url}/download/{track_id}?pass={query}"

    def _get_record(
        self, path: str, model: type[ModelT], kind: str, ident: str
    ) -> ModelT:
        label = f"{kind} {ident}"
        logger.debug("Fetching %s", label)
        data = self._get_json(
            f"{self._base_url}{path}", {"pass": self._config.password}, label
        )
        return self._validate(model, data, label)

    def _get_json(self, url: str, params: dict[str, str], label: str) -> Any:
        try:
            response = self._session.get(
                url, params=params, timeout=self._config.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning("Request failed for %s: %s", label, e)
            raise APIError(f"Failed to fetch {label}: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            logger.warning("Invalid JSON for %s: %s", label, e)
            raise DecodeError(f"Invalid JSON for {label}: {e}") from e

    def _validate(self, model: type[ModelT], data: Any, label: str) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning("Unexpected response shape for %s: %s", label, e)
            raise DecodeError(f"Unexpected response for {label}: {e}") from e
