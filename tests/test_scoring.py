"""
ScoreEngine Tests

Score clamping and best-score commits, including store failures.

Run with: pytest tests/test_scoring.py -v
"""

from unittest.mock import Mock

import pytest

from expohub.games.scoring import ScoreEngine
from expohub.games.session import Session


class TestScoreMutation:
    """Tests for award() and penalize()."""

    def test_award(self, playing_session):
        assert ScoreEngine.award(playing_session, 10) == 10
        assert ScoreEngine.award(playing_session, 1) == 11

    def test_award_rejects_negative(self, playing_session):
        with pytest.raises(ValueError):
            ScoreEngine.award(playing_session, -5)

    def test_penalty_clamps_at_zero(self, playing_session):
        ScoreEngine.award(playing_session, 30)
        assert ScoreEngine.penalize(playing_session, 50) == 0

    def test_penalty_partial(self, playing_session):
        ScoreEngine.award(playing_session, 80)
        assert ScoreEngine.penalize(playing_session, 50) == 30

    def test_score_never_negative(self, playing_session):
        """Any interleaving of awards and penalties keeps score >= 0."""
        for points in [10, -50, 10, 10, -50, -50, 10]:
            if points > 0:
                ScoreEngine.award(playing_session, points)
            else:
                ScoreEngine.penalize(playing_session, -points)
            assert playing_session.score >= 0


class TestBestScores:
    """Tests for best() and commit()."""

    def test_first_score_is_best(self, scores):
        assert scores.commit('flappydrone', 5) is True
        assert scores.best('flappydrone') == 5

    def test_updated_only_when_strictly_greater(self, scores):
        scores.commit('flappydrone', 5)
        assert scores.commit('flappydrone', 5) is False
        assert scores.commit('flappydrone', 3) is False
        assert scores.best('flappydrone') == 5
        assert scores.commit('flappydrone', 6) is True
        assert scores.best('flappydrone') == 6

    def test_zero_never_recorded(self, scores, score_store):
        assert scores.commit('starcatcher', 0) is False
        assert not score_store.path.exists()

    def test_games_are_independent(self, scores):
        scores.commit('flappydrone', 12)
        assert scores.best('starcatcher') == 0

    def test_persisted_through_store(self, scores, score_store):
        scores.commit('starcatcher', 120)
        assert score_store.get_best('starcatcher') == 120

    def test_memory_only_without_store(self):
        engine = ScoreEngine()
        engine.commit('flappydrone', 4)
        assert engine.best('flappydrone') == 4

    def test_write_failure_keeps_best_in_memory(self):
        store = Mock()
        store.get_best.return_value = 0
        store.set_best.side_effect = OSError("disk full")
        engine = ScoreEngine(store)

        assert engine.commit('flappydrone', 9) is True
        assert engine.best('flappydrone') == 9

    def test_read_failure_falls_back_to_memory(self):
        store = Mock()
        store.get_best.side_effect = OSError("unreadable")
        engine = ScoreEngine(store)

        assert engine.best('flappydrone') == 0
        assert engine.commit('flappydrone', 3) is True
        assert engine.best('flappydrone') == 3
