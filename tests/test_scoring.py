"""
Tests for build-phase and reuse-phase scoring.
"""
import pytest

from setlist_core.models import Mood
from setlist_core.scoring import mood_score, reuse_score, score, tempo_score


class TestTempoScore:
    """Tests for tempo_score."""

    def test_no_desired_tempo_is_neutral(self, make_entry):
        assert tempo_score(make_entry(tempo=120), None) == 0.5

    def test_missing_entry_tempo_is_penalized(self, make_entry):
        assert tempo_score(make_entry(tempo=None), 120) == 0.2

    def test_exact_tempo(self, make_entry):
        assert tempo_score(make_entry(tempo=120), 120) == 1.0

    def test_linear_falloff(self, make_entry):
        assert tempo_score(make_entry(tempo=150), 120) == pytest.approx(0.5)
        assert tempo_score(make_entry(tempo=90), 120) == pytest.approx(0.5)

    def test_floor(self, make_entry):
        assert tempo_score(make_entry(tempo=200), 120) == 0.1
        assert tempo_score(make_entry(tempo=174), 120) == 0.1


class TestMoodScore:
    """Tests for mood_score."""

    def test_no_desired_mood_is_neutral(self, make_entry):
        assert mood_score(make_entry(mood=Mood.SAD), None) == 0.5

    def test_missing_entry_mood(self, make_entry):
        assert mood_score(make_entry(mood=None), Mood.SAD) == 0.2

    def test_energetic_scenario(self, make_entry):
        moods = [Mood.ENERGETIC, Mood.GROOVY, Mood.SAD]
        scores = [mood_score(make_entry(mood=m), Mood.ENERGETIC) for m in moods]
        assert scores == [1.0, 0.8, 0.1]

    def test_exact_match_is_one_for_every_mood(self, make_entry):
        for m in Mood:
            assert mood_score(make_entry(mood=m), m) == 1.0


class TestScore:
    """Tests for the combined build-phase score."""

    def test_no_preferences_is_flat_half(self, make_entry):
        for entry in [make_entry(), make_entry(mood=Mood.SAD, tempo=60), make_entry(duration=-1)]:
            assert score(entry, None, None) == 0.5

    def test_mood_only_returns_mood_subscore(self, make_entry):
        assert score(make_entry(mood=Mood.GROOVY, tempo=60), Mood.ENERGETIC, None) == 0.8

    def test_tempo_only_returns_tempo_subscore(self, make_entry):
        assert score(make_entry(mood=Mood.SAD, tempo=150), None, 120) == pytest.approx(0.5)

    def test_weighted_combination(self, make_entry):
        entry = make_entry(mood=Mood.ENERGETIC, tempo=150)
        assert score(entry, Mood.ENERGETIC, 120) == pytest.approx(0.7 * 1.0 + 0.3 * 0.5)

    def test_combination_with_missing_data(self, make_entry):
        entry = make_entry(mood=None, tempo=None)
        assert score(entry, Mood.HAPPY, 120) == pytest.approx(0.7 * 0.2 + 0.3 * 0.2)

    def test_bounds(self, make_entry):
        for m in list(Mood) + [None]:
            for t in (None, 40, 120, 300):
                s = score(make_entry(mood=m, tempo=t), Mood.PARTY, 120)
                assert 0.0 <= s <= 1.0

    def test_pure(self, make_entry):
        entry = make_entry(mood=Mood.DARK, tempo=100)
        assert score(entry, Mood.SAD, 110) == score(entry, Mood.SAD, 110)


class TestReuseScore:
    """Tests for the repeat-pass score."""

    def test_base(self, make_entry):
        assert reuse_score(make_entry(mood=Mood.SAD, tempo=90), None, None) == 1.0

    def test_mood_bonus_for_exact_and_related(self, make_entry):
        assert reuse_score(make_entry(mood=Mood.ENERGETIC), Mood.ENERGETIC, None) == 1.5
        assert reuse_score(make_entry(mood=Mood.GROOVY), Mood.ENERGETIC, None) == 1.5
        assert reuse_score(make_entry(mood=Mood.SAD), Mood.ENERGETIC, None) == 1.0

    def test_tempo_bonus_scaled_by_hundred(self, make_entry):
        entry = make_entry(mood=Mood.GROOVY, tempo=120)
        assert reuse_score(entry, Mood.ENERGETIC, 130) == pytest.approx(1.5 + 0.4)

    def test_tempo_bonus_never_negative(self, make_entry):
        assert reuse_score(make_entry(tempo=60), None, 180) == 1.0

    def test_differs_from_build_score(self, make_entry):
        # same tempo gap, different falloff: 1 - 30/60 vs 0.5 - 30/100
        entry = make_entry(tempo=150)
        assert score(entry, None, 120) == pytest.approx(0.5)
        assert reuse_score(entry, None, 120) == pytest.approx(1.2)
