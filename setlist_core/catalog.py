"""
Catalog — in-memory song snapshot handed to the setlist engine.

The engine never talks to storage; whatever owns the songs (a database, a
JSON export, a test fixture) hands over a ``CatalogProvider``.  ``Catalog``
is the in-process implementation, and ``create_entry`` is the validated
path for accepting a new song.

Usage:
    catalog = Catalog.from_records(rows)
    entry   = catalog.create(id=7, title="Intro", minutes=3, seconds=5)
    results = catalog.search(genre="rock group", mood="happy")
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Protocol, Union, runtime_checkable

from loguru import logger

from .intent import parse_genre, parse_mood
from .models import (
    MAX_DURATION_SECONDS,
    MIN_DURATION_SECONDS,
    CatalogEntry,
    Genre,
    Mood,
)
from .setlist_engine import filter_entries


class CatalogValidationError(ValueError):
    """Raised when a song is rejected on the creation path."""


@runtime_checkable
class CatalogProvider(Protocol):
    def all_entries(self) -> List[CatalogEntry]:
        ...


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------

def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _as_genre(value: Union[Genre, str, None]) -> Optional[Genre]:
    if value is None or isinstance(value, Genre):
        return value
    return parse_genre(value)


def _as_mood(value: Union[Mood, str, None]) -> Optional[Mood]:
    if value is None or isinstance(value, Mood):
        return value
    return parse_mood(value)


def _duration(
    duration_seconds: Optional[int],
    minutes: Optional[int],
    seconds: Optional[int],
) -> int:
    if duration_seconds is not None:
        return int(duration_seconds)
    m = int(minutes or 0)
    s = int(seconds or 0)
    if not 0 <= m <= 59:
        raise CatalogValidationError("Minutes must be between 0 and 59")
    if not 0 <= s <= 59:
        raise CatalogValidationError("Seconds must be between 0 and 59")
    return m * 60 + s


def create_entry(
    id: Union[int, str],
    title: Optional[str] = None,
    artist: Optional[str] = None,
    genre: Union[Genre, str, None] = None,
    tempo: Optional[int] = None,
    mood: Union[Mood, str, None] = None,
    duration_seconds: Optional[int] = None,
    minutes: Optional[int] = None,
    seconds: Optional[int] = None,
) -> CatalogEntry:
    """
    Build a validated CatalogEntry.

    Duration is either ``duration_seconds`` or a ``minutes`` / ``seconds``
    pair.  Genre and mood may be enum values or free text; unknown text is
    stored as "not set".

    Raises:
        CatalogValidationError: neither title nor artist given, or duration
            outside 00:01..59:59.
    """
    if _blank(title) and _blank(artist):
        raise CatalogValidationError("enter at least title or artist")

    total = _duration(duration_seconds, minutes, seconds)
    if not MIN_DURATION_SECONDS <= total <= MAX_DURATION_SECONDS:
        raise CatalogValidationError("invalid duration")

    return CatalogEntry(
        id=id,
        title=None if _blank(title) else title.strip(),
        artist=None if _blank(artist) else artist.strip(),
        genre=_as_genre(genre),
        tempo=tempo,
        mood=_as_mood(mood),
        duration_seconds=total,
    )


class Catalog:
    """In-memory catalog keyed by entry id (insertion order preserved)."""

    def __init__(self, entries: Optional[Iterable[CatalogEntry]] = None):
        self._entries: Dict[Union[int, str], CatalogEntry] = {}
        for e in entries or []:
            self.add(e)

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "Catalog":
        """
        Load plain dict records, skipping any that fail validation.

        Recognised keys: id, title, artist, genre, tempo (or bpm), mood,
        duration_seconds, minutes, seconds.  Records without an id get their
        1-based position.
        """
        catalog = cls()
        skipped = 0
        for pos, rec in enumerate(records, start=1):
            try:
                entry = create_entry(
                    id=rec.get("id") if rec.get("id") is not None else pos,
                    title=rec.get("title"),
                    artist=rec.get("artist"),
                    genre=rec.get("genre"),
                    tempo=rec.get("tempo", rec.get("bpm")),
                    mood=rec.get("mood"),
                    duration_seconds=rec.get("duration_seconds"),
                    minutes=rec.get("minutes"),
                    seconds=rec.get("seconds"),
                )
            except (ValueError, TypeError) as e:
                skipped += 1
                logger.warning(f"Skipping catalog record #{pos}: {e}")
                continue
            catalog.add(entry)

        logger.info(f"Catalog loaded: {len(catalog)} entries ({skipped} skipped)")
        return catalog

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._entries

    def add(self, entry: CatalogEntry) -> CatalogEntry:
        """Insert or replace an entry by id."""
        self._entries[entry.id] = entry
        return entry

    def create(self, **fields: Any) -> CatalogEntry:
        """Validate via ``create_entry`` and add."""
        return self.add(create_entry(**fields))

    def get(self, entry_id: Union[int, str]) -> Optional[CatalogEntry]:
        return self._entries.get(entry_id)

    def all_entries(self) -> List[CatalogEntry]:
        return list(self._entries.values())

    def search(
        self,
        title: Optional[str] = None,
        artist: Optional[str] = None,
        genre: Optional[str] = None,
        mood: Optional[str] = None,
    ) -> List[CatalogEntry]:
        """Entries passing the genre / title / artist / mood filters."""
        return filter_entries(
            self._entries.values(), genre=genre, title=title, artist=artist, mood=mood
        )

    def summary(self) -> Dict[str, Any]:
        """Counts and ranges over the catalog."""
        if not self._entries:
            return {"total": 0}

        tempos = [e.tempo for e in self._entries.values() if e.tempo is not None]
        genre_counts: Dict[str, int] = {}
        mood_counts: Dict[str, int] = {}
        total_seconds = 0
        for e in self._entries.values():
            total_seconds += e.duration_seconds
            if e.genre:
                genre_counts[e.genre.value] = genre_counts.get(e.genre.value, 0) + 1
            if e.mood:
                mood_counts[e.mood.value] = mood_counts.get(e.mood.value, 0) + 1

        return {
            "total": len(self._entries),
            "total_duration_seconds": total_seconds,
            "tempo_min": min(tempos) if tempos else 0,
            "tempo_max": max(tempos) if tempos else 0,
            "genres": dict(sorted(genre_counts.items(), key=lambda x: x[1], reverse=True)),
            "moods": dict(sorted(mood_counts.items(), key=lambda x: x[1], reverse=True)),
        }
