"""Tests for the scenario orchestrator (random and custom runs)."""

import random
import uuid
from datetime import date

import pytest

from tradecoach.data import EMOTION_TO_BEHAVIORS, TRADING_SCENARIOS
from tradecoach.errors import GenerationError, ValidationError
from tradecoach.generator.pnl import fold_decisions
from tradecoach.generator.scenario import (
    ScenarioOrchestrator,
    generate_custom_scenario,
    generate_random_scenario,
)
from tradecoach.models import SESSIONS

TRADE_DATE = date(2024, 5, 6)
SEEDS = range(60)


def _orch(seed):
    return ScenarioOrchestrator(random.Random(seed), trade_date=TRADE_DATE)


def _check_run(result, lo, hi):
    state = result.trader_state
    decisions = state.decisions
    perf = state.performance

    assert lo <= len(decisions) <= hi
    assert state.trader_id == result.trader.id
    assert state.scenario_id == result.scenario.id
    assert state.current_emotional_state.behaviors == EMOTION_TO_BEHAVIORS[state.current_emotional_state.primary]
    assert 1 <= state.current_emotional_state.intensity <= 10

    for d in decisions:
        assert (d.emotional_influence is not None) == d.violates_strategy
        assert 0 <= (d.timestamp.date() - TRADE_DATE).days <= 2
    stamps = [d.timestamp for d in decisions]
    assert stamps == sorted(stamps)

    assert perf.correct_decisions == sum(d.outcome == "positive" for d in decisions)
    assert perf.emotional_mistakes == sum(d.emotional_influence is not None for d in decisions)
    assert perf.emotional_mistakes >= 1
    assert abs(perf.profit_loss) >= 0.01

    refold = fold_decisions(decisions)
    assert refold.total_trades == perf.total_trades
    if abs(refold.profit_loss) >= 0.01:
        assert perf.profit_loss == round(refold.profit_loss, 2)
    else:
        assert -3.0 <= perf.profit_loss <= 3.0


class TestRandomRun:
    def test_invariants(self):
        for seed in SEEDS:
            _check_run(_orch(seed).generate_random(), 3, 6)

    def test_uses_template_scenario(self):
        ids = {s.id for s in TRADING_SCENARIOS}
        for seed in range(20):
            assert _orch(seed).generate_random().scenario.id in ids

    def test_seeded_runs_repeat(self):
        assert _orch(3).generate_random().to_dict() == _orch(3).generate_random().to_dict()

    def test_module_level_helper(self):
        result = generate_random_scenario(random.Random(9))
        assert 3 <= len(result.trader_state.decisions) <= 6

    def test_no_scenarios(self):
        orch = ScenarioOrchestrator(random.Random(1), scenarios=())
        with pytest.raises(GenerationError):
            orch.generate_random()

    def test_no_traders(self):
        orch = ScenarioOrchestrator(random.Random(1), traders=())
        with pytest.raises(GenerationError):
            orch.generate_random()


class TestCustomRun:
    def test_invariants(self):
        for seed in SEEDS:
            result = _orch(seed).generate_custom("volatile", "scalping", "crypto", "hard", ["fear", "revenge"])
            _check_run(result, 3, 5)
            assert result.trader_state.current_emotional_state.primary in ("fear", "revenge")

    def test_single_forced_emotion(self):
        for seed in SEEDS:
            result = _orch(seed).generate_custom("bullish", "swing", "etfs", "easy", ["fear"])
            emo = result.trader_state.current_emotional_state
            assert emo.primary == "fear"
            assert 6 <= emo.intensity <= 10

    def test_scenario_overrides(self):
        result = _orch(2).generate_custom("bearish", "position", "bonds", "medium", ["hope"])
        s = result.scenario
        assert (s.market_condition, s.time_frame, s.asset_class, s.difficulty) == \
               ("bearish", "position", "bonds", "medium")
        assert s.id not in {t.id for t in TRADING_SCENARIOS}
        assert uuid.UUID(s.id).version == 4
        # template itself is untouched
        assert all(t.market_condition != "bearish" for t in TRADING_SCENARIOS)

    def test_empty_emotions_rejected(self):
        with pytest.raises(ValidationError):
            generate_custom_scenario("volatile", "intraday", "stocks", "hard", [], rng=random.Random(1))

    @pytest.mark.parametrize("args", [
        ("sideways", "intraday", "stocks", "hard", ["fear"]),
        ("volatile", "weekly", "stocks", "hard", ["fear"]),
        ("volatile", "intraday", "art", "hard", ["fear"]),
        ("volatile", "intraday", "stocks", "insane", ["fear"]),
        ("volatile", "intraday", "stocks", "hard", ["fear", "joy"]),
    ])
    def test_unknown_values_rejected(self, args):
        with pytest.raises(ValidationError):
            generate_custom_scenario(*args, rng=random.Random(1))

    def test_validation_before_any_draw(self):
        rng = random.Random(5)
        before = rng.getstate()
        with pytest.raises(ValidationError):
            ScenarioOrchestrator(rng).generate_custom("volatile", "intraday", "stocks", "hard", [])
        assert rng.getstate() == before


class TestSessions:
    def test_labels_and_split(self):
        for seed in range(100):
            orch = _orch(seed)
            n = orch.rng.randint(3, 6)
            sessions = orch.pick_sessions(n)
            assert len(sessions) == n
            assert set(sessions) <= set(SESSIONS)
            first_half = sessions[:(n + 1) // 2]
            second_half = sessions[(n + 1) // 2:]
            assert len(set(first_half)) == 1
            assert len(set(second_half)) == 1
            assert len(set(sessions)) <= 2

    def test_secondary_session_sometimes_used(self):
        switched = sum(len(set(_orch(seed).pick_sessions(6))) == 2 for seed in range(300))
        assert 60 < switched < 180

    def test_decisions_carry_sessions(self):
        for seed in range(20):
            for d in _orch(seed).generate_random().trader_state.decisions:
                assert d.session in SESSIONS


class TestTimestamps:
    def test_random_runs_in_decision_order(self):
        for seed in range(200):
            stamps = [d.timestamp for d in _orch(seed).generate_random().trader_state.decisions]
            assert all(a <= b for a, b in zip(stamps, stamps[1:])), seed

    def test_custom_runs_in_decision_order(self):
        for seed in range(100):
            result = _orch(seed).generate_custom("choppy", "intraday", "forex", "hard", ["boredom"])
            stamps = [d.timestamp for d in result.trader_state.decisions]
            assert all(a <= b for a, b in zip(stamps, stamps[1:])), seed
