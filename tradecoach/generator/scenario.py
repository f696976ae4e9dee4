"""Compose emotional state, decisions and performance into a full run.

Random and custom runs share one path (``run_scenario``); they differ only
in how the base scenario is prepared, whether the emotion pool is forced
and how many decisions are drawn.
"""

from __future__ import annotations

import logging
import random
import uuid
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional, Sequence

from tradecoach.data.profiles import TRADER_PROFILES, get_random_trader_profile
from tradecoach.data.scenarios import TRADING_SCENARIOS, get_random_scenario
from tradecoach.errors import GenerationError, ValidationError
from tradecoach.generator.decisions import DecisionGenerator
from tradecoach.generator.display import apply_display_adjustments
from tradecoach.generator.emotions import EmotionalStateGenerator
from tradecoach.generator.pnl import fold_decisions
from tradecoach.generator.positions import PositionBook
from tradecoach.models import (
    ASSET_CLASSES,
    DIFFICULTIES,
    EMOTION_TYPES,
    MARKET_CONDITIONS,
    SESSIONS,
    TIME_FRAMES,
    Performance,
    ScenarioResult,
    TraderDecision,
    TraderProfile,
    TraderState,
    TradingScenario,
)

logger = logging.getLogger(__name__)

RANDOM_DECISION_RANGE = (3, 6)
CUSTOM_DECISION_RANGE = (3, 5)
SECONDARY_SESSION_PROB = 0.4


def validate_custom_inputs(market_condition: str, time_frame: str, asset_class: str,
                           difficulty: str, emotion_types: Iterable[str]) -> list[str]:
    """Check custom-run parameters; returns the emotion list.

    Raises:
        ValidationError: on an empty emotion list or any unknown value.
    """
    checks = (
        ("market condition", market_condition, MARKET_CONDITIONS),
        ("time frame", time_frame, TIME_FRAMES),
        ("asset class", asset_class, ASSET_CLASSES),
        ("difficulty", difficulty, DIFFICULTIES),
    )
    for label, value, allowed in checks:
        if value not in allowed:
            raise ValidationError(f"Unknown {label} {value!r}; expected one of {', '.join(allowed)}")

    emotions = list(emotion_types or [])
    if not emotions:
        raise ValidationError("Select at least one emotion type")
    unknown = [e for e in emotions if e not in EMOTION_TYPES]
    if unknown:
        raise ValidationError(f"Unknown emotion type(s): {', '.join(map(str, unknown))}")
    return emotions


class ScenarioOrchestrator:
    """Runs the generators for one scenario at a time.

    Every random draw goes through ``rng``; pass a seeded
    ``random.Random`` for reproducible runs.
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 scenarios: Sequence[TradingScenario] = TRADING_SCENARIOS,
                 traders: Sequence[TraderProfile] = TRADER_PROFILES,
                 sessions: Sequence[str] = SESSIONS,
                 emotion_generator: Optional[EmotionalStateGenerator] = None,
                 decision_generator: Optional[DecisionGenerator] = None,
                 trade_date: Optional[date] = None):
        self.rng = rng or random.Random()
        self.scenarios = scenarios
        self.traders = traders
        self.sessions = sessions
        self.emotion_generator = emotion_generator or EmotionalStateGenerator(self.rng)
        self.decision_generator = decision_generator or DecisionGenerator(self.rng)
        self.trade_date = trade_date

    # ----- selection -----

    def pick_base(self) -> tuple[TradingScenario, TraderProfile]:
        scenario = get_random_scenario(self.rng, self.scenarios)
        if scenario is None:
            raise GenerationError("Failed to load a trading scenario: no scenarios available")
        trader = get_random_trader_profile(self.rng, self.traders)
        if trader is None:
            raise GenerationError("Failed to load a trader profile: no trader profiles available")
        return scenario, trader

    def pick_sessions(self, n_decisions: int) -> list[str]:
        """Session label per decision; an optional second session takes
        over for the second half of the run."""
        primary = self.rng.choice(self.sessions)
        secondary = None
        others = [s for s in self.sessions if s != primary]
        if others and self.rng.random() < SECONDARY_SESSION_PROB:
            secondary = self.rng.choice(others)

        switch_at = (n_decisions + 1) // 2
        return [secondary if secondary and i >= switch_at else primary
                for i in range(n_decisions)]

    # ----- run -----

    def run_scenario(self, scenario: TradingScenario, trader: TraderProfile,
                     forced_emotions: Optional[Sequence[str]] = None,
                     decision_range: tuple[int, int] = RANDOM_DECISION_RANGE) -> ScenarioResult:
        n_decisions = self.rng.randint(*decision_range)
        sessions = self.pick_sessions(n_decisions)
        emotional_state = self.emotion_generator.generate(
            scenario.market_condition, trader, forced_emotions)
        timestamps = self.decision_generator.session_times(sessions, self.trade_date or date.today())

        # Sequential on purpose: each decision sees the position left by
        # the ones before it
        book = PositionBook()
        decisions: list[TraderDecision] = []
        for session, timestamp in zip(sessions, timestamps):
            decision = self.decision_generator.generate(
                emotional_state, trader, scenario, session,
                prior_decisions=decisions, position=book, timestamp=timestamp,
            )
            book.apply(decision)
            decisions.append(decision)

        fold = fold_decisions(decisions)

        final_decisions, profit_loss = apply_display_adjustments(
            fold, emotional_state, self.rng, trader.strategy)

        performance = Performance(
            profit_loss=round(profit_loss, 2),
            correct_decisions=sum(1 for d in final_decisions if d.outcome == "positive"),
            emotional_mistakes=sum(1 for d in final_decisions if d.emotional_influence is not None),
            total_trades=fold.total_trades,
        )
        trader_state = TraderState(
            trader_id=trader.id,
            scenario_id=scenario.id,
            current_emotional_state=emotional_state,
            decisions=final_decisions,
            performance=performance,
        )
        logger.info("[GENERATE] scenario=%s trader=%s emotion=%s/%d decisions=%d "
                    "mistakes=%d trades=%d pnl=%.2f",
                    scenario.id, trader.id, emotional_state.primary, emotional_state.intensity,
                    len(final_decisions), performance.emotional_mistakes,
                    performance.total_trades, performance.profit_loss)
        return ScenarioResult(scenario=scenario, trader=trader, trader_state=trader_state)

    def generate_random(self) -> ScenarioResult:
        scenario, trader = self.pick_base()
        return self.run_scenario(scenario, trader, decision_range=RANDOM_DECISION_RANGE)

    def generate_custom(self, market_condition: str, time_frame: str, asset_class: str,
                        difficulty: str, emotion_types: Iterable[str]) -> ScenarioResult:
        emotions = validate_custom_inputs(market_condition, time_frame, asset_class,
                                          difficulty, emotion_types)
        base, trader = self.pick_base()
        scenario = replace(
            base,
            id=str(uuid.UUID(int=self.rng.getrandbits(128), version=4)),
            market_condition=market_condition,
            time_frame=time_frame,
            asset_class=asset_class,
            difficulty=difficulty,
        )
        return self.run_scenario(scenario, trader, forced_emotions=emotions,
                                 decision_range=CUSTOM_DECISION_RANGE)


def generate_random_scenario(rng: Optional[random.Random] = None) -> ScenarioResult:
    """Generate a run from a random scenario template and trader.

    Raises:
        GenerationError: if no scenario or trader could be selected.
    """
    return ScenarioOrchestrator(rng).generate_random()


def generate_custom_scenario(market_condition: str, time_frame: str, asset_class: str,
                             difficulty: str, emotion_types: Iterable[str],
                             rng: Optional[random.Random] = None) -> ScenarioResult:
    """Generate a harder run with caller-chosen market parameters and emotions.

    Raises:
        ValidationError: if ``emotion_types`` is empty or a value is unknown.
    """
    return ScenarioOrchestrator(rng).generate_custom(
        market_condition, time_frame, asset_class, difficulty, emotion_types)
