"""Tests for coaching assessment scoring."""

import random
from datetime import date, datetime

import pytest

from tradecoach.coaching import ADVICE_KEYWORDS, assess_coaching, score_behaviors
from tradecoach.errors import ValidationError
from tradecoach.generator.scenario import ScenarioOrchestrator
from tradecoach.models import EMOTION_TYPES, TRADING_BEHAVIORS


@pytest.fixture
def result():
    return ScenarioOrchestrator(random.Random(21), trade_date=date(2024, 2, 1)).generate_random()


def _truth(result):
    return result.trader_state.current_emotional_state


def _relevant_advice(emotion):
    return f"Next time, {ADVICE_KEYWORDS[emotion][0]} before you click."


class TestScoring:
    def test_perfect_assessment(self, result):
        truth = _truth(result)
        session = assess_coaching(result, truth.primary, list(truth.behaviors), _relevant_advice(truth.primary))
        assert session.score == 100
        assert session.emotion_correct
        assert session.missed_behaviors == []
        assert sorted(session.matched_behaviors) == sorted(truth.behaviors)

    def test_wrong_emotion_below_half(self, result):
        truth = _truth(result)
        wrong = next(e for e in EMOTION_TYPES if e != truth.primary)
        session = assess_coaching(result, wrong, list(truth.behaviors), _relevant_advice(truth.primary))
        assert session.score < 50
        assert not session.emotion_correct
        assert truth.primary in session.feedback

    def test_false_positive_penalty(self, result):
        truth = _truth(result)
        extra = next(b for b in TRADING_BEHAVIORS if b not in truth.behaviors)
        session = assess_coaching(result, truth.primary, [*truth.behaviors, extra],
                                  _relevant_advice(truth.primary))
        assert session.score == 95
        assert extra.replace("_", " ") in session.feedback

    def test_empty_advice(self, result):
        truth = _truth(result)
        session = assess_coaching(result, truth.primary, list(truth.behaviors), "")
        assert session.score == 80

    def test_vague_advice_partial_credit(self, result):
        truth = _truth(result)
        session = assess_coaching(result, truth.primary, list(truth.behaviors), "zzz")
        assert session.score == 85

    def test_missed_behaviors_listed(self, result):
        truth = _truth(result)
        session = assess_coaching(result, truth.primary, [truth.behaviors[0]], "")
        assert session.score == 50 + 10
        assert set(session.missed_behaviors) == set(truth.behaviors[1:])

    def test_score_never_negative(self, result):
        truth = _truth(result)
        wrong = next(e for e in EMOTION_TYPES if e != truth.primary)
        others = [b for b in TRADING_BEHAVIORS if b not in truth.behaviors]
        session = assess_coaching(result, wrong, others, "")
        assert session.score == 0


class TestBehaviorScore:
    def test_duplicates_count_once(self):
        points, matched, missed, fps = score_behaviors(["hesitation", "hesitation"],
                                                       ("hesitation", "overtrading"))
        assert points == 15
        assert matched == ["hesitation"]
        assert missed == ["overtrading"]
        assert fps == []

    def test_no_ground_truth(self):
        assert score_behaviors([], ())[0] == 30
        assert score_behaviors(["oversizing"], ())[0] == 25


class TestSessionRecord:
    def test_ids_and_issue(self, result):
        truth = _truth(result)
        now = datetime(2024, 2, 1, 18, 0)
        session = assess_coaching(result.trader_state, truth.primary, [], "breathe",
                                  rng=random.Random(3), now=now)
        assert session.scenario_id == result.scenario.id
        assert session.trader_id == result.trader.id
        assert session.timestamp == now
        issue = session.user_identified_issues[0]
        assert issue.emotional_state == truth.primary
        assert issue.advice == "breathe"
        assert session.to_dict()["timestamp"] == "2024-02-01T18:00:00"

    def test_id_overrides(self, result):
        truth = _truth(result)
        session = assess_coaching(result, truth.primary, [], "", scenario_id="s-1", trader_id="t-1")
        assert (session.scenario_id, session.trader_id) == ("s-1", "t-1")

    def test_seeded_session_id(self, result):
        truth = _truth(result)
        a = assess_coaching(result, truth.primary, [], "", rng=random.Random(8))
        b = assess_coaching(result, truth.primary, [], "", rng=random.Random(8))
        assert a.id == b.id


class TestValidation:
    def test_unknown_emotion(self, result):
        with pytest.raises(ValidationError):
            assess_coaching(result, "joy", [], "")

    def test_unknown_behavior(self, result):
        truth = _truth(result)
        with pytest.raises(ValidationError):
            assess_coaching(result, truth.primary, ["panic_selling"], "")
