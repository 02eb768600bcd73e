"""Tests for artist formatting utilities."""

import pytest
from spotmeta.utils import format_artist_credit


class TestFormatArtistCredit:
    """Tests for format_artist_credit function."""

    @pytest.mark.parametrize(
        "names,expected",
        [
            ([], ""),
            (["A"], "A"),
            (["A", "B"], "A ft. B"),
            (["A", "B", "C"], "A ft. B, C"),
            (["A", "B", "C", "D"], "A ft. B, C, D"),
        ],
    )
    def test_credit(self, names: list[str], expected: str) -> None:
        assert format_artist_credit(names) == expected

    def test_keeps_duplicates_and_order(self) -> None:
        """Names are credited as given by the backend."""
        assert format_artist_credit(["B", "A", "B"]) == "B ft. A, B"
