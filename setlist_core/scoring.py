"""
Mood / tempo compatibility scoring.

Two formulas live here and are intentionally kept apart:

* ``score`` ranks candidates while building a setlist (result in [0, 1]).
* ``reuse_score`` ranks already-chosen songs for the repeat pass.

They weight mood and tempo differently, so ranking changes if one is
swapped for the other.
"""

from typing import Optional

from .models import CatalogEntry, Mood
from .mood_graph import MOOD_GRAPH, MoodGraph

NEUTRAL_SCORE = 0.5
MISSING_DATA_SCORE = 0.2

MOOD_EXACT_SCORE = 1.0
MOOD_RELATED_SCORE = 0.8
MOOD_UNRELATED_SCORE = 0.1

TEMPO_FALLOFF_BPM = 60.0
TEMPO_FLOOR = 0.1

MOOD_WEIGHT = 0.7
TEMPO_WEIGHT = 0.3

# Repeat-pass constants
REUSE_BASE = 1.0
REUSE_MOOD_BONUS = 0.5
REUSE_TEMPO_BONUS = 0.5
REUSE_TEMPO_FALLOFF_BPM = 100.0


def tempo_score(entry: CatalogEntry, desired_tempo: Optional[int]) -> float:
    """Linear falloff over 60 BPM with a 0.1 floor."""
    if desired_tempo is None:
        return NEUTRAL_SCORE
    if entry.tempo is None:
        return MISSING_DATA_SCORE
    diff = abs(entry.tempo - desired_tempo)
    raw = 1.0 - (diff / TEMPO_FALLOFF_BPM)
    return max(TEMPO_FLOOR, raw)


def mood_score(
    entry: CatalogEntry,
    desired_mood: Optional[Mood],
    graph: MoodGraph = MOOD_GRAPH,
) -> float:
    """1.0 exact, 0.8 related, 0.1 otherwise."""
    if desired_mood is None:
        return NEUTRAL_SCORE
    if entry.mood is None:
        return MISSING_DATA_SCORE
    if entry.mood == desired_mood:
        return MOOD_EXACT_SCORE
    if entry.mood in graph.related(desired_mood):
        return MOOD_RELATED_SCORE
    return MOOD_UNRELATED_SCORE


def score(
    entry: CatalogEntry,
    desired_mood: Optional[Mood],
    desired_tempo: Optional[int],
    graph: MoodGraph = MOOD_GRAPH,
) -> float:
    """
    Combined mood + tempo compatibility in [0, 1].

    Only the preferences the caller actually gave take part: mood alone
    returns the mood sub-score, tempo alone the tempo sub-score, neither a
    flat 0.5.  With both, mood weighs 70% and tempo 30%.
    """
    if desired_mood is None and desired_tempo is None:
        return NEUTRAL_SCORE
    if desired_tempo is None:
        return mood_score(entry, desired_mood, graph)
    if desired_mood is None:
        return tempo_score(entry, desired_tempo)

    combined = (
        MOOD_WEIGHT * mood_score(entry, desired_mood, graph)
        + TEMPO_WEIGHT * tempo_score(entry, desired_tempo)
    )
    # Result must stay within [0, 1] whatever the weights.
    return min(1.0, max(0.0, combined))


def reuse_score(
    entry: CatalogEntry,
    desired_mood: Optional[Mood],
    desired_tempo: Optional[int],
    graph: MoodGraph = MOOD_GRAPH,
) -> float:
    """Repeat-pass ranking: base 1.0, +0.5 compatible mood, tempo bonus over 100 BPM."""
    total = REUSE_BASE
    if desired_mood is not None and graph.compatible(entry.mood, desired_mood):
        total += REUSE_MOOD_BONUS
    if desired_tempo is not None and entry.tempo is not None:
        diff = abs(desired_tempo - entry.tempo)
        total += max(0.0, REUSE_TEMPO_BONUS - (diff / REUSE_TEMPO_FALLOFF_BPM))
    return total
