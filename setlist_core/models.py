"""
Data models for setlist building.

Attribute enums (mood, genre, genre group), catalog entries, selection
requests and the resulting setlist.  All catalog-facing models are frozen:
the engine reads entries, it never mutates them.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, FrozenSet, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

MIN_DURATION_SECONDS = 1
MAX_DURATION_SECONDS = 59 * 60 + 59


class Mood(str, Enum):
    HAPPY = "HAPPY"
    SAD = "SAD"
    ENERGETIC = "ENERGETIC"
    CALM = "CALM"
    ANGRY = "ANGRY"
    ROMANTIC = "ROMANTIC"
    MELANCHOLIC = "MELANCHOLIC"
    UPLIFTING = "UPLIFTING"
    DARK = "DARK"
    CHILL = "CHILL"
    PARTY = "PARTY"
    DRIVING = "DRIVING"
    MELLOW = "MELLOW"
    INTENSE = "INTENSE"
    DREAMY = "DREAMY"
    NOSTALGIC = "NOSTALGIC"
    GROOVY = "GROOVY"


class Genre(str, Enum):
    POP = "POP"
    ROCK = "ROCK"
    ALTERNATIVE = "ALTERNATIVE"
    INDIE = "INDIE"
    METAL = "METAL"
    PUNK = "PUNK"
    HARD_ROCK = "HARD_ROCK"
    HEAVY_METAL = "HEAVY_METAL"
    HIP_HOP = "HIP_HOP"
    RAP = "RAP"
    RNB = "RNB"
    SOUL = "SOUL"
    FUNK = "FUNK"
    BLUES = "BLUES"
    JAZZ = "JAZZ"
    CLASSICAL = "CLASSICAL"
    AMBIENT = "AMBIENT"
    ELECTRONIC = "ELECTRONIC"
    DANCE = "DANCE"
    HOUSE = "HOUSE"
    TRANCE = "TRANCE"
    TECHNO = "TECHNO"
    REGGAE = "REGGAE"
    LATIN = "LATIN"
    FOLK = "FOLK"
    COUNTRY = "COUNTRY"
    WORLD = "WORLD"
    DISCO = "DISCO"


class GenreGroup(str, Enum):
    POP_GROUP = "POP_GROUP"
    ROCK_GROUP = "ROCK_GROUP"
    HARD_ROCK_GROUP = "HARD_ROCK_GROUP"
    METAL_GROUP = "METAL_GROUP"
    ELECTRONIC_GROUP = "ELECTRONIC_GROUP"
    URBAN_GROUP = "URBAN_GROUP"
    ACOUSTIC_GROUP = "ACOUSTIC_GROUP"
    LATIN_WORLD_GROUP = "LATIN_WORLD_GROUP"

    @property
    def members(self) -> FrozenSet[Genre]:
        return GENRE_GROUP_MEMBERS[self]


# ---------------------------------------------------------------------------
# Genre group membership (groups overlap on purpose)
# ---------------------------------------------------------------------------
GENRE_GROUP_MEMBERS: Mapping[GenreGroup, FrozenSet[Genre]] = MappingProxyType({
    GenreGroup.POP_GROUP: frozenset({
        Genre.POP, Genre.RNB, Genre.ALTERNATIVE, Genre.ROCK,
    }),
    GenreGroup.ROCK_GROUP: frozenset({
        Genre.ROCK, Genre.HARD_ROCK, Genre.INDIE, Genre.ALTERNATIVE, Genre.POP,
    }),
    GenreGroup.HARD_ROCK_GROUP: frozenset({
        Genre.HARD_ROCK, Genre.METAL, Genre.HEAVY_METAL, Genre.PUNK,
        Genre.ALTERNATIVE, Genre.ROCK,
    }),
    GenreGroup.METAL_GROUP: frozenset({
        Genre.METAL, Genre.HEAVY_METAL, Genre.PUNK, Genre.HARD_ROCK,
    }),
    GenreGroup.ELECTRONIC_GROUP: frozenset({
        Genre.ELECTRONIC, Genre.DANCE, Genre.HOUSE, Genre.TRANCE, Genre.TECHNO,
    }),
    GenreGroup.URBAN_GROUP: frozenset({
        Genre.HIP_HOP, Genre.RAP, Genre.RNB, Genre.SOUL, Genre.FUNK,
    }),
    GenreGroup.ACOUSTIC_GROUP: frozenset({
        Genre.FOLK, Genre.COUNTRY, Genre.BLUES, Genre.JAZZ,
    }),
    GenreGroup.LATIN_WORLD_GROUP: frozenset({
        Genre.LATIN, Genre.REGGAE, Genre.WORLD,
    }),
})


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class CatalogEntry(BaseModel):
    """A single schedulable song.

    The model accepts any integer duration so that the engine can see (and
    skip) bad rows coming from a catalog snapshot.  Use
    ``catalog.create_entry`` for the validated creation path.
    """

    model_config = ConfigDict(frozen=True)

    id: Union[int, str]
    title: Optional[str] = None
    artist: Optional[str] = None
    genre: Optional[Genre] = None
    tempo: Optional[int] = None
    mood: Optional[Mood] = None
    duration_seconds: int = 0

    @property
    def is_duration_valid(self) -> bool:
        return MIN_DURATION_SECONDS <= self.duration_seconds <= MAX_DURATION_SECONDS

    def duration_formatted(self) -> str:
        """Duration as 'M:SS'."""
        if self.duration_seconds <= 0:
            return "0:00"
        m, s = divmod(self.duration_seconds, 60)
        return f"{m}:{s:02d}"

    def display_name(self) -> str:
        if self.artist and self.title:
            return f"{self.artist} - {self.title}"
        return self.title or self.artist or str(self.id)


# ---------------------------------------------------------------------------
# Requests / results
# ---------------------------------------------------------------------------

class SelectionRequest(BaseModel):
    """Caller-supplied preferences for one setlist build.

    Free-text ``mood`` and ``genre`` are parsed permissively: unknown values
    mean "no preference", never an error.  Mood only ranks candidates unless
    ``strict_mood`` is set, in which case incompatible moods are dropped.

    The target may be given as ``target_seconds`` or as a ``minutes`` /
    ``seconds`` pair (each part clamped to 0..59).
    """

    target_seconds: int
    minutes: Optional[int] = None
    seconds: Optional[int] = None
    mood: Optional[str] = None
    tempo: Optional[int] = None
    genre: Optional[str] = None
    title: Optional[str] = None
    artist: Optional[str] = None
    allow_reuse: bool = False
    allow_overflow: bool = False
    strict_mood: bool = False
    name: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _target_from_parts(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("target_seconds") is not None:
            return data
        if data.get("minutes") is None and data.get("seconds") is None:
            return data
        from .intent import duration_from_parts

        return {
            **data,
            "target_seconds": duration_from_parts(data.get("minutes"), data.get("seconds")),
        }


class SetlistItem(BaseModel):
    position: int
    entry: CatalogEntry
    reused: bool = False


class SetlistSummary(BaseModel):
    """Lightweight projection for listing stored setlists."""

    id: str
    name: str
    created_at: str
    total_duration_seconds: int
    items: int


class Setlist(BaseModel):
    id: str
    name: str
    created_at: str
    items: List[SetlistItem] = Field(default_factory=list)
    total_duration_seconds: int = 0
    track_count: int = 0
    reused_count: int = 0
    fallback: bool = False

    @property
    def entries(self) -> List[CatalogEntry]:
        return [item.entry for item in self.items]

    def summary(self) -> SetlistSummary:
        return SetlistSummary(
            id=self.id,
            name=self.name,
            created_at=self.created_at,
            total_duration_seconds=self.total_duration_seconds,
            items=len(self.items),
        )
