"""
Mood compatibility graph.

A symmetric, non-transitive "related" relation over moods.  Built once at
import from ``MOOD_GROUPS`` and exposed read-only; lookups are a single
mapping access.
"""

from collections import defaultdict
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Set, Tuple

from .models import Mood

# ---------------------------------------------------------------------------
# Related-mood groups: (key, related moods).  Each pair is inserted in both
# directions when the graph is built.
# ---------------------------------------------------------------------------
MOOD_GROUPS: Tuple[Tuple[Mood, Tuple[Mood, ...]], ...] = (
    (Mood.ENERGETIC,   (Mood.DRIVING, Mood.PARTY, Mood.GROOVY)),
    (Mood.MELLOW,      (Mood.CALM, Mood.DREAMY, Mood.NOSTALGIC)),
    (Mood.HAPPY,       (Mood.UPLIFTING, Mood.PARTY, Mood.DRIVING)),
    (Mood.SAD,         (Mood.MELANCHOLIC, Mood.DARK)),
    (Mood.INTENSE,     (Mood.ANGRY, Mood.DRIVING)),
    (Mood.ROMANTIC,    (Mood.MELLOW, Mood.DREAMY, Mood.NOSTALGIC, Mood.UPLIFTING)),
    (Mood.CHILL,       (Mood.CALM, Mood.MELLOW, Mood.DREAMY)),
    (Mood.UPLIFTING,   (Mood.HAPPY, Mood.PARTY, Mood.GROOVY)),
    (Mood.DARK,        (Mood.SAD, Mood.INTENSE, Mood.MELANCHOLIC)),
    (Mood.PARTY,       (Mood.ENERGETIC, Mood.UPLIFTING, Mood.GROOVY)),
    (Mood.DRIVING,     (Mood.ENERGETIC, Mood.INTENSE, Mood.GROOVY)),
    (Mood.GROOVY,      (Mood.PARTY, Mood.ENERGETIC, Mood.DRIVING)),
    (Mood.MELANCHOLIC, (Mood.SAD, Mood.DARK, Mood.NOSTALGIC)),
    (Mood.DREAMY,      (Mood.MELLOW, Mood.ROMANTIC, Mood.CHILL)),
    (Mood.NOSTALGIC,   (Mood.MELLOW, Mood.DREAMY, Mood.MELANCHOLIC)),
    (Mood.CALM,        (Mood.CHILL, Mood.MELLOW, Mood.DREAMY)),
    (Mood.ANGRY,       (Mood.INTENSE, Mood.DRIVING, Mood.DARK)),
)

_EMPTY: FrozenSet[Mood] = frozenset()


def build_relations(
    groups: Iterable[Tuple[Mood, Iterable[Mood]]],
) -> Mapping[Mood, FrozenSet[Mood]]:
    """Symmetric closure of the group table as a read-only mapping."""
    builder: Dict[Mood, Set[Mood]] = defaultdict(set)
    for key, others in groups:
        for other in others:
            builder[key].add(other)
            builder[other].add(key)
    return MappingProxyType({m: frozenset(rel) for m, rel in builder.items()})


class MoodGraph:
    """Read-only mood relation lookup."""

    def __init__(self, groups: Iterable[Tuple[Mood, Iterable[Mood]]] = MOOD_GROUPS):
        self._relations = build_relations(groups)

    @property
    def relations(self) -> Mapping[Mood, FrozenSet[Mood]]:
        return self._relations

    def related(self, mood: Optional[Mood]) -> FrozenSet[Mood]:
        """Moods directly related to ``mood`` (empty for unknown or None)."""
        if mood is None:
            return _EMPTY
        return self._relations.get(mood, _EMPTY)

    def are_related(self, a: Optional[Mood], b: Optional[Mood]) -> bool:
        if a is None or b is None:
            return False
        return b in self.related(a)

    def compatible(self, a: Optional[Mood], b: Optional[Mood]) -> bool:
        """Exact match or direct relation."""
        if a is None or b is None:
            return False
        return a == b or self.are_related(a, b)


# Built once at import; never mutated afterwards.
MOOD_GRAPH = MoodGraph()
