"""Enumerations for spotmeta domain models."""

from enum import StrEnum


class EntityKind(StrEnum):
    """Kind of entity a reference addresses."""

    TRACK = "track"
    ARTIST = "artist"
    ALBUM = "album"
    PLAYLIST = "playlist"
