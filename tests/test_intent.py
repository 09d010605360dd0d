"""
Tests for free-text preference parsing.

Covers:
- Token normalization
- Mood / genre parsing (permissive, never raises)
- Genre group resolution
- Minutes/seconds duration input
"""
import pytest

from setlist_core.intent import (
    duration_from_parts,
    normalize_token,
    parse_genre,
    parse_mood,
    resolve_genre,
)
from setlist_core.models import GENRE_GROUP_MEMBERS, Genre, GenreGroup, Mood


class TestNormalizeToken:
    """Tests for normalize_token."""

    @pytest.mark.parametrize("raw,expected", [
        ("rock", "ROCK"),
        ("  hard rock  ", "HARD_ROCK"),
        ("hip-hop", "HIP_HOP"),
        ("heavy - \t metal", "HEAVY_METAL"),
        ("rock_group", "ROCK_GROUP"),
    ])
    def test_normalizes(self, raw, expected):
        assert normalize_token(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_blank_is_none(self, raw):
        assert normalize_token(raw) is None


class TestParseMood:
    """Tests for parse_mood."""

    def test_known_mood_any_case(self):
        assert parse_mood("energetic") == Mood.ENERGETIC
        assert parse_mood(" Melancholic ") == Mood.MELANCHOLIC

    def test_unknown_mood_is_none(self):
        assert parse_mood("bouncy") is None

    def test_blank_is_none(self):
        assert parse_mood("") is None
        assert parse_mood(None) is None


class TestResolveGenre:
    """Tests for resolve_genre."""

    def test_rock_group(self):
        assert resolve_genre("rock_group") == frozenset({
            Genre.ROCK, Genre.HARD_ROCK, Genre.INDIE, Genre.ALTERNATIVE, Genre.POP,
        })

    def test_group_with_spaces(self):
        assert resolve_genre("latin world group") == GENRE_GROUP_MEMBERS[GenreGroup.LATIN_WORLD_GROUP]

    def test_single_genre(self):
        assert resolve_genre("hip hop") == frozenset({Genre.HIP_HOP})

    def test_group_name_wins_over_genre(self):
        # HARD_ROCK_GROUP is a group; HARD_ROCK alone is a genre
        assert resolve_genre("hard rock group") == GenreGroup.HARD_ROCK_GROUP.members
        assert resolve_genre("hard rock") == frozenset({Genre.HARD_ROCK})

    def test_unknown_is_none(self):
        assert resolve_genre("polka") is None
        assert resolve_genre("   ") is None
        assert resolve_genre(None) is None

    def test_parse_genre_single(self):
        assert parse_genre("r&b") is None
        assert parse_genre("rnb") == Genre.RNB


class TestDurationFromParts:
    """Tests for duration_from_parts."""

    def test_combines_parts(self):
        assert duration_from_parts(3, 25) == 205

    def test_clamps_each_part(self):
        assert duration_from_parts(75, 90) == 59 * 60 + 59
        assert duration_from_parts(-4, 10) == 10

    def test_missing_parts_are_zero(self):
        assert duration_from_parts(None, None) == 0
