"""Business logic services for spotmeta."""

from spotmeta.services.resolver import MetadataResolver

__all__ = [
    "MetadataResolver",
]
