"""
Shared parsing utilities for free-text setlist preferences.

Turns caller-supplied mood / genre text into attribute values.  Parsing is
permissive: anything unrecognised resolves to ``None`` ("no preference"),
never an exception, so a bad preference degrades to neutral scoring instead
of failing the whole request.
"""

import re
from typing import FrozenSet, Optional

from .models import GENRE_GROUP_MEMBERS, Genre, GenreGroup, Mood

_SEPARATORS = re.compile(r"[\s\-]+")

_MOODS_BY_NAME = {m.name: m for m in Mood}
_GENRES_BY_NAME = {g.name: g for g in Genre}
_GROUPS_BY_NAME = {g.name: g for g in GenreGroup}


# ---------------------------------------------------------------------------
# normalize_token
# ---------------------------------------------------------------------------

def normalize_token(raw: Optional[str]) -> Optional[str]:
    """
    Normalize free text to an enum-style name.

    Trims, collapses runs of whitespace / hyphens into a single underscore
    and uppercases.  ``"  hard - rock "`` becomes ``"HARD_ROCK"``.  Blank or
    missing input returns None.
    """
    if raw is None:
        return None
    text = raw.strip()
    if not text:
        return None
    return _SEPARATORS.sub("_", text).upper()


# ---------------------------------------------------------------------------
# Mood / genre parsing
# ---------------------------------------------------------------------------

def parse_mood(raw: Optional[str]) -> Optional[Mood]:
    """Parse a mood name; unknown names return None."""
    norm = normalize_token(raw)
    if norm is None:
        return None
    return _MOODS_BY_NAME.get(norm)


def parse_genre(raw: Optional[str]) -> Optional[Genre]:
    """Parse a single genre name; unknown names return None."""
    norm = normalize_token(raw)
    if norm is None:
        return None
    return _GENRES_BY_NAME.get(norm)


def resolve_genre(raw: Optional[str]) -> Optional[FrozenSet[Genre]]:
    """
    Resolve a genre or genre-group name to the set of genres it allows.

    Group names are checked first (``"rock group"`` → ROCK_GROUP members),
    then single genres (``"hip-hop"`` → {HIP_HOP}).

    Returns:
        A frozenset of genres, or None when the text matches nothing.  None
        means "no genre constraint", not "match nothing".
    """
    norm = normalize_token(raw)
    if norm is None:
        return None

    group = _GROUPS_BY_NAME.get(norm)
    if group is not None:
        return GENRE_GROUP_MEMBERS[group]

    genre = _GENRES_BY_NAME.get(norm)
    if genre is not None:
        return frozenset({genre})
    return None


# ---------------------------------------------------------------------------
# Duration input
# ---------------------------------------------------------------------------

def duration_from_parts(minutes: Optional[int], seconds: Optional[int]) -> int:
    """Total seconds from a minutes/seconds pair, each part clamped to 0..59."""
    m = max(0, min(59, minutes or 0))
    s = max(0, min(59, seconds or 0))
    return m * 60 + s
