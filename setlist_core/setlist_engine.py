"""
Core Setlist Generation Engine

Fills a time budget from a catalog snapshot: filter by genre / text / mood,
score every candidate against the desired mood and tempo, sort with a
deterministic tie-break, pack greedily, and optionally repeat chosen songs
to get closer to the target.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from loguru import logger

from .config import Settings
from .intent import parse_mood, resolve_genre
from .models import (
    CatalogEntry,
    Mood,
    SelectionRequest,
    Setlist,
    SetlistItem,
    SetlistSummary,
)
from .mood_graph import MOOD_GRAPH, MoodGraph
from .scoring import reuse_score, score

MoodLike = Union[Mood, str, None]


# ---------------------------------------------------------------------------
# Candidate filtering
# ---------------------------------------------------------------------------

def _contains(haystack: Optional[str], needle: str) -> bool:
    return haystack is not None and needle in haystack.lower()


def filter_entries(
    entries: Iterable[CatalogEntry],
    genre: Optional[str] = None,
    title: Optional[str] = None,
    artist: Optional[str] = None,
    mood: MoodLike = None,
    graph: MoodGraph = MOOD_GRAPH,
) -> List[CatalogEntry]:
    """
    Hard-filter catalog entries before scoring.

    - genre:  genre or group name; unknown text applies no genre filter
    - title / artist: case-insensitive substring; entries missing the field
      are dropped when a filter is given
    - mood:   entries whose mood is set but neither equal nor related to the
      desired mood are dropped; entries without a mood are kept
    """
    allowed_genres = resolve_genre(genre)
    title_q = title.strip().lower() if title and title.strip() else None
    artist_q = artist.strip().lower() if artist and artist.strip() else None
    desired_mood = _coerce_mood(mood)

    result: List[CatalogEntry] = []
    for e in entries:
        if allowed_genres is not None and (e.genre is None or e.genre not in allowed_genres):
            continue
        if title_q is not None and not _contains(e.title, title_q):
            continue
        if artist_q is not None and not _contains(e.artist, artist_q):
            continue
        if (
            desired_mood is not None
            and e.mood is not None
            and not graph.compatible(e.mood, desired_mood)
        ):
            continue
        result.append(e)
    return result


def _coerce_mood(mood: MoodLike) -> Optional[Mood]:
    if mood is None or isinstance(mood, Mood):
        return mood
    return parse_mood(mood)


class SetlistEngine:
    """
    Builds setlists from catalog snapshots.

    Stateless apart from a bounded in-memory registry of generated setlists;
    the mood graph is shared read-only configuration.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        graph: MoodGraph = MOOD_GRAPH,
    ):
        self.settings = settings or Settings()
        self.graph = graph

        # Stored setlists, oldest first
        self._setlists: Dict[str, Setlist] = {}

    # ------------------------------------------------------------------
    # Setlist generation
    # ------------------------------------------------------------------

    def generate_setlist(self, request: SelectionRequest, catalog: Any) -> Setlist:
        """
        Generate and store a setlist for a request.

        ``catalog`` is anything with an ``all_entries()`` method or a plain
        iterable of entries.

        Algorithm:
        1. Filter candidates by genre / title / artist / mood
        2. Greedy build (with shortest-song fallback)
        3. If reuse is allowed, repeat chosen songs toward the target
        """
        all_entries = getattr(catalog, "all_entries", None)
        entries = list(all_entries() if callable(all_entries) else catalog)

        desired_mood = parse_mood(request.mood)
        candidates = self.filter_candidates(entries, request)

        chosen, fallback = self._pack(
            candidates, request.target_seconds, desired_mood, request.tempo
        )

        final = chosen
        if request.allow_reuse:
            final = self.fill(
                chosen,
                request.target_seconds,
                request.allow_overflow,
                desired_mood,
                request.tempo,
            )

        setlist = self._build_setlist(final, len(chosen), fallback, request)
        self._store(setlist)
        logger.info(
            f"Setlist {setlist.id} generated: {setlist.track_count} tracks "
            f"({setlist.reused_count} reused), {setlist.total_duration_seconds}s "
            f"of {request.target_seconds}s from {len(candidates)}/{len(entries)} candidates"
        )
        return setlist

    def get_setlist(self, setlist_id: str) -> Optional[Setlist]:
        return self._setlists.get(setlist_id)

    def list_setlists(self) -> List[SetlistSummary]:
        """Summaries of stored setlists, newest first."""
        return [s.summary() for s in reversed(list(self._setlists.values()))]

    def filter_candidates(
        self, entries: Iterable[CatalogEntry], request: SelectionRequest
    ) -> List[CatalogEntry]:
        return filter_entries(
            entries,
            genre=request.genre,
            title=request.title,
            artist=request.artist,
            mood=request.mood if request.strict_mood else None,
            graph=self.graph,
        )

    # ------------------------------------------------------------------
    # Greedy build
    # ------------------------------------------------------------------

    def build(
        self,
        candidates: List[CatalogEntry],
        target_seconds: int,
        desired_mood: MoodLike = None,
        desired_tempo: Optional[int] = None,
    ) -> List[CatalogEntry]:
        """
        Pick songs that fit ``target_seconds``, best matches first.

        Returns an empty list for an empty candidate set or a non-positive
        target.  When no song fits on its own, the shortest valid song is
        returned alone.
        """
        chosen, _ = self._pack(
            candidates, target_seconds, _coerce_mood(desired_mood), desired_tempo
        )
        return chosen

    def _pack(
        self,
        candidates: List[CatalogEntry],
        target_seconds: int,
        desired_mood: Optional[Mood],
        desired_tempo: Optional[int],
    ) -> Tuple[List[CatalogEntry], bool]:
        """Greedy pack; returns (chosen, used_fallback)."""
        if not candidates or target_seconds <= 0:
            return [], False

        ranked = self.rank(candidates, desired_mood, desired_tempo)

        chosen: List[CatalogEntry] = []
        total = 0
        for entry in ranked:
            if not entry.is_duration_valid:
                continue
            if total + entry.duration_seconds > target_seconds:
                continue
            chosen.append(entry)
            total += entry.duration_seconds
            if total >= target_seconds:
                break

        if chosen:
            return chosen, False

        # Fallback: nothing fits on its own, take the shortest valid song
        valid = [e for e in ranked if e.is_duration_valid]
        if not valid:
            logger.debug("No candidate has a valid duration; empty setlist")
            return [], False
        shortest = min(valid, key=lambda e: e.duration_seconds)
        logger.debug(
            f"No candidate fits {target_seconds}s; falling back to shortest "
            f"'{shortest.display_name()}' ({shortest.duration_seconds}s)"
        )
        return [shortest], True

    def rank(
        self,
        candidates: List[CatalogEntry],
        desired_mood: Optional[Mood],
        desired_tempo: Optional[int],
    ) -> List[CatalogEntry]:
        """
        Sort candidates by score descending.

        Ties go to the shorter song, then the title (case-insensitive), then
        the original position, so equal inputs always give the same order.
        """
        keyed = [
            (
                -score(e, desired_mood, desired_tempo, self.graph),
                e.duration_seconds,
                (e.title or "").lower(),
                idx,
                e,
            )
            for idx, e in enumerate(candidates)
        ]
        keyed.sort(key=lambda k: k[:4])
        return [k[4] for k in keyed]

    # ------------------------------------------------------------------
    # Reuse fill
    # ------------------------------------------------------------------

    def fill(
        self,
        chosen: List[CatalogEntry],
        target_seconds: int,
        allow_overflow: bool,
        desired_mood: MoodLike = None,
        desired_tempo: Optional[int] = None,
    ) -> List[CatalogEntry]:
        """
        Repeat already-chosen songs until the target is reached.

        Songs are cycled round-robin in ``reuse_score`` order.  The pass stops
        at the first append that crosses the target: with ``allow_overflow``
        that song is kept, otherwise it is dropped again.
        """
        if not chosen or target_seconds <= 0:
            return chosen

        mood = _coerce_mood(desired_mood)
        ranked = self._rank_for_reuse(chosen, mood, desired_tempo)

        out = list(chosen)
        total = sum(e.duration_seconds for e in chosen if e.is_duration_valid)
        idx = 0
        while total < target_seconds and ranked:
            pick = ranked[idx % len(ranked)]
            out.append(pick)
            total += pick.duration_seconds
            idx += 1
            if total > target_seconds:
                if not allow_overflow:
                    out.pop()
                    total -= pick.duration_seconds
                    logger.debug(
                        f"Fill stopped before overflow: '{pick.display_name()}' "
                        f"would exceed {target_seconds}s"
                    )
                break

        logger.debug(f"Fill appended {len(out) - len(chosen)} repeats ({total}s)")
        return out

    def _rank_for_reuse(
        self,
        chosen: List[CatalogEntry],
        desired_mood: Optional[Mood],
        desired_tempo: Optional[int],
    ) -> List[CatalogEntry]:
        seen = set()
        distinct: List[CatalogEntry] = []
        for e in chosen:
            if e.id in seen or not e.is_duration_valid:
                continue
            seen.add(e.id)
            distinct.append(e)
        # sorted() is stable: equal scores keep first-occurrence order
        return sorted(
            distinct,
            key=lambda e: reuse_score(e, desired_mood, desired_tempo, self.graph),
            reverse=True,
        )

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------

    def _build_setlist(
        self,
        entries: List[CatalogEntry],
        built_count: int,
        fallback: bool,
        request: SelectionRequest,
    ) -> Setlist:
        """Assemble a Setlist model; entries past ``built_count`` are repeats."""
        items = [
            SetlistItem(position=i, entry=e, reused=i >= built_count)
            for i, e in enumerate(entries)
        ]
        name = (request.name or "").strip() or self.settings.default_name
        return Setlist(
            id=str(uuid.uuid4())[:8],
            name=name,
            created_at=datetime.now().isoformat(),
            items=items,
            total_duration_seconds=sum(e.duration_seconds for e in entries),
            track_count=len(items),
            reused_count=max(0, len(items) - built_count),
            fallback=fallback,
        )

    def _store(self, setlist: Setlist) -> None:
        self._setlists[setlist.id] = setlist
        while len(self._setlists) > self.settings.max_stored:
            oldest = next(iter(self._setlists))
            del self._setlists[oldest]
