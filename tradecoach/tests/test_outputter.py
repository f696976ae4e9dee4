"""Tests for frames, chart markers and file writers."""

import json
import math
import random
from datetime import date, datetime, timedelta

import pandas as pd

from tradecoach.generator.pnl import fold_decisions
from tradecoach.generator.scenario import ScenarioOrchestrator
from tradecoach.models import TraderDecision
from tradecoach.outputter import (
    DECISION_COLUMNS,
    decisions_frame,
    runs_frame,
    trade_markers,
    write_decisions_csv,
    write_run_json,
    write_summary,
)

START = datetime(2024, 3, 14, 9, 30)


def _d(minutes, action, outcome="positive"):
    return TraderDecision(
        timestamp=START + timedelta(minutes=minutes), action=action, reasoning="",
        emotional_influence=None, violates_strategy=False, outcome=outcome,
        direction=None if action == "hold" else "long",
    )


def _results(n=3):
    orch = ScenarioOrchestrator(random.Random(17), trade_date=date(2024, 3, 14))
    return [orch.generate_random() for _ in range(n)]


class TestTradeMarkers:
    def test_skips_holds_and_sorts(self):
        # out of order on purpose
        decisions = fold_decisions([_d(5, "buy"), _d(1, "hold"), _d(9, "exit")]).decisions
        decisions = (decisions[2], decisions[1], decisions[0])
        markers = trade_markers(decisions)
        assert list(markers["action"]) == ["buy", "exit"]
        assert list(markers["side"]) == ["entry", "exit"]
        assert list(markers["price"]) == [100.0, 103.0]

    def test_unfilled_exit_has_nan_price(self):
        markers = trade_markers([_d(0, "exit")])
        assert len(markers) == 1
        assert math.isnan(markers["price"][0])

    def test_empty(self):
        markers = trade_markers([_d(0, "hold")])
        assert markers.empty
        assert "side" in markers.columns

    def test_generated_runs_keep_decision_order(self):
        orch = ScenarioOrchestrator(random.Random(41), trade_date=date(2024, 3, 14))
        for _ in range(100):
            decisions = orch.generate_random().trader_state.decisions
            traded = [d.action for d in decisions if d.action != "hold"]
            assert list(trade_markers(decisions)["action"]) == traded


class TestFrames:
    def test_decisions_frame(self):
        result = _results(1)[0]
        df = decisions_frame(result.trader_state.decisions)
        assert list(df.columns) == DECISION_COLUMNS
        assert len(df) == len(result.trader_state.decisions)
        assert pd.api.types.is_datetime64_any_dtype(df["timestamp"])

    def test_runs_frame(self):
        results = _results(4)
        df = runs_frame(results)
        assert len(df) == 4
        assert list(df["profit_loss"]) == [r.trader_state.performance.profit_loss for r in results]


class TestWriters:
    def test_run_json(self, tmp_path):
        result = _results(1)[0]
        path = tmp_path / "runs" / "run_001.json"
        write_run_json(result, str(path))
        data = json.loads(path.read_text())
        assert data["scenario"]["id"] == result.scenario.id
        assert len(data["trader_state"]["decisions"]) == len(result.trader_state.decisions)

    def test_decisions_csv(self, tmp_path):
        result = _results(1)[0]
        path = tmp_path / "decisions" / "run_001.csv"
        write_decisions_csv(result, str(path))
        df = pd.read_csv(path)
        assert list(df.columns) == DECISION_COLUMNS
        assert len(df) == len(result.trader_state.decisions)

    def test_summary(self, tmp_path):
        path = write_summary(_results(3), str(tmp_path))
        text = open(path).read()
        assert "Runs: 3" in text
        assert "=== Emotion Breakdown ===" in text

    def test_summary_no_runs(self, tmp_path):
        text = open(write_summary([], str(tmp_path / "empty"))).read()
        assert "No runs generated." in text
