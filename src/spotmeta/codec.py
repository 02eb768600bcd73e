"""Identifier codec.

Converts backend Gids into public Base62 IDs and classifies the textual
reference shapes accepted by the resolver and returned in search hits.
"""

import base64
import binascii
import re
from functools import lru_cache
from urllib.parse import unquote_plus

from spotmeta.exceptions import InvalidGidError, ReferenceParseError
from spotmeta.models.enums import EntityKind
from spotmeta.models.reference import Reference

ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
PUBLIC_ID_LENGTH = 22
PAD = "0"

_ID = r"([A-Za-z0-9]+)"
_SINGLE_KINDS = r"(track|artist|album)"


def to_base62(raw: bytes) -> str:
    """Encode bytes as a fixed-width Base62 public ID.

    The bytes are read as a big-endian unsigned integer. Digits are produced
    least-significant first, padded with '0' up to 22 characters and then
    reversed, so the padding ends up on the left.

    Args:
        raw: Decoded Gid bytes.

    Returns:
        Base62 string of at least 22 characters.
    """
    value = int.from_bytes(raw, "big")
    digits: list[str] = []
    while value > 0:
        value, rem = divmod(value, 62)
        digits.append(ALPHABET[rem])
    while len(digits) < PUBLIC_ID_LENGTH:
        digits.append(PAD)
    return "".join(reversed(digits))


def gid_to_id(gid: str) -> str:
    """Convert a base64 Gid from a wire record into a public ID.

    Raises:
        InvalidGidError: If the Gid is empty or not valid base64.
    """
    if not gid:
        raise InvalidGidError("Empty gid")
    try:
        raw = base64.b64decode(gid, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidGidError(f"Invalid gid {gid!r}: {e}") from e
    return to_base62(raw)


@lru_cache(maxsize=8)
def _patterns(service: str) -> tuple[re.Pattern[str], ...]:
    svc = re.escape(service)
    return (
        re.compile(rf"^https://open\.{svc}\.com/{_SINGLE_KINDS}/{_ID}"),
        re.compile(rf"^{svc}:{_SINGLE_KINDS}:{_ID}"),
        re.compile(rf"^https://open\.{svc}\.com/user/([^/\s?#]+)/playlist/{_ID}"),
        re.compile(rf"^{svc}:user:([^:\s]+):playlist:{_ID}"),
    )


def classify_uri(text: str, service: str = "spotify") -> Reference | None:
    """Determine what a URL or URI addresses.

    Shared by inbound reference parsing and search hit classification.
    Trailing query strings, fragments or path segments are ignored.

    Args:
        text: Web URL or URI.
        service: Service name expected in the host and URI prefix.

    Returns:
        The parsed reference, or None if the text is not recognized.
    """
    if not text:
        return None
    text = text.strip()
    url_entity, uri_entity, url_playlist, uri_playlist = _patterns(service)

    for pattern in (url_entity, uri_entity):
        if match := pattern.match(text):
            return Reference(
                kind=EntityKind(match.group(1)), id=match.group(2), service=service
            )

    for pattern in (url_playlist, uri_playlist):
        if match := pattern.match(text):
            return Reference(
                kind=EntityKind.PLAYLIST,
                id=match.group(2),
                user=unquote_plus(match.group(1)),
                service=service,
            )

    return None


def parse_reference(
    text: str,
    kind: EntityKind | None = None,
    service: str = "spotify",
) -> Reference:
    """Parse a reference, optionally requiring a specific kind.

    Raises:
        ReferenceParseError: If the text is not recognized or addresses
            another kind of entity.
    """
    reference = classify_uri(text, service)
    if reference is None:
        raise ReferenceParseError(f"Reference not recognized: {text}")
    if kind is not None and reference.kind != kind:
        raise ReferenceParseError(
            f"Expected a {kind} reference, got {reference.kind}: {text}"
        )
    return reference


def make_reference(
    kind: EntityKind, public_id: str, service: str = "spotify"
) -> Reference:
    """Build a reference for a nested track, artist or album."""
    return Reference(kind=kind, id=public_id, service=service)
