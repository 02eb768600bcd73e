"""Utility functions for spotmeta.

Available via `from spotmeta.utils import ...` for power users.
Not re-exported at the top-level `spotmeta` package.
"""

from spotmeta.utils.artists import format_artist_credit

__all__ = [
    "format_artist_credit",
]
