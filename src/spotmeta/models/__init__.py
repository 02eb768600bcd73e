"""Data models for spotmeta.

Public API:
    EntityKind - Kind of entity a reference addresses
    Reference - Parsed (kind, id[, user]) reference

Other modules (imported directly):
    domain.py - Track, Artist, Album, Disc, Playlist and search results
    wire.py - Models for parsing backend responses (internal)
"""

from spotmeta.models.enums import EntityKind
from spotmeta.models.reference import Reference

__all__ = [
    "EntityKind",
    "Reference",
]
