"""Artist formatting utilities."""

from collections.abc import Sequence


def format_artist_credit(names: Sequence[str]) -> str:
    """Format artist names as a display credit.

    The first name is the main artist, the second is appended as a
    featured artist and the rest follow comma-separated:
    ``["A", "B", "C"]`` becomes ``"A ft. B, C"``.

    Args:
        names: Artist names in credit order.

    Returns:
        Display credit, or an empty string if there are no names.
    """
    if not names:
        return ""
    credit = names[0]
    if len(names) > 1:
        credit += f" ft. {names[1]}"
    for name in names[2:]:
        credit += f", {name}"
    return credit
