"""Setlist building: fill a time budget from a song catalog."""

from .catalog import Catalog, CatalogProvider, CatalogValidationError, create_entry
from .config import Settings, configure_logging
from .intent import normalize_token, parse_genre, parse_mood, resolve_genre
from .models import (
    CatalogEntry,
    Genre,
    GenreGroup,
    Mood,
    SelectionRequest,
    Setlist,
    SetlistItem,
    SetlistSummary,
)
from .mood_graph import MOOD_GRAPH, MoodGraph
from .scoring import reuse_score, score
from .setlist_engine import SetlistEngine, filter_entries

__all__ = [
    "Catalog",
    "CatalogEntry",
    "CatalogProvider",
    "CatalogValidationError",
    "Genre",
    "GenreGroup",
    "MOOD_GRAPH",
    "Mood",
    "MoodGraph",
    "SelectionRequest",
    "Settings",
    "Setlist",
    "SetlistEngine",
    "SetlistItem",
    "SetlistSummary",
    "configure_logging",
    "create_entry",
    "filter_entries",
    "normalize_token",
    "parse_genre",
    "parse_mood",
    "resolve_genre",
    "reuse_score",
    "score",
]
