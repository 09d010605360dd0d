"""Test configuration and fixtures."""

import itertools
import sys
from pathlib import Path

import pytest
from loguru import logger

# Add repo root to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from setlist_core.catalog import Catalog
from setlist_core.models import CatalogEntry, Genre, Mood
from setlist_core.setlist_engine import SetlistEngine


@pytest.fixture
def make_entry():
    """Factory for CatalogEntry with sequential ids."""
    counter = itertools.count(1)

    def _make(duration=180, title=None, artist="Artist", genre=None, tempo=None, mood=None, id=None):
        return CatalogEntry(
            id=id if id is not None else next(counter),
            title=title,
            artist=artist,
            genre=genre,
            tempo=tempo,
            mood=mood,
            duration_seconds=duration,
        )

    return _make


@pytest.fixture
def engine():
    return SetlistEngine()


@pytest.fixture
def band_catalog():
    """Small mixed-genre catalog."""
    return Catalog([
        CatalogEntry(id=1, title="Open Road", artist="The Wheels", genre=Genre.ROCK,
                     tempo=128, mood=Mood.DRIVING, duration_seconds=210),
        CatalogEntry(id=2, title="Iron Hymn", artist="Forge", genre=Genre.METAL,
                     tempo=160, mood=Mood.INTENSE, duration_seconds=300),
        CatalogEntry(id=3, title="Paper Moon", artist="Lanterns", genre=Genre.INDIE,
                     tempo=96, mood=Mood.DREAMY, duration_seconds=185),
        CatalogEntry(id=4, title="Sunday Best", artist="The Wheels", genre=Genre.POP,
                     tempo=118, mood=Mood.HAPPY, duration_seconds=200),
        CatalogEntry(id=5, title="Low Tide", artist="Lanterns", genre=Genre.ALTERNATIVE,
                     tempo=80, mood=Mood.SAD, duration_seconds=240),
        CatalogEntry(id=6, title="Night Shift", artist="Circuit", genre=Genre.TECHNO,
                     tempo=132, mood=Mood.ENERGETIC, duration_seconds=360),
        CatalogEntry(id=7, title="Wildfire", artist="Forge", genre=Genre.HARD_ROCK,
                     tempo=140, mood=Mood.ENERGETIC, duration_seconds=230),
    ])


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages = []
    sink_id = logger.add(lambda m: messages.append(m.record), level="DEBUG")
    yield messages
    logger.remove(sink_id)
