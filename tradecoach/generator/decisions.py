"""Generate single trading decisions from an emotional state.

The central rule: the chance that the simulated trader acts against their
own plan grows with emotional intensity and with a mismatch between the
trader's strategy and the market condition. Plan violations are driven by
the primary emotion and are biased toward losing outcomes; plan-following
decisions pick the textbook action for the market and usually win.
"""

from __future__ import annotations

import logging
import random
from datetime import date, datetime, time, timedelta
from itertools import groupby
from typing import Mapping, Optional, Sequence

from tradecoach.data.tables import (
    ACTION_REASONING,
    EMOTION_REASONING,
    SESSION_SUFFIXES,
    SESSION_WINDOWS,
)
from tradecoach.generator.positions import PositionBook
from tradecoach.models import (
    EmotionalState,
    TraderDecision,
    TraderProfile,
    TradingScenario,
    TradingStrategy,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Model constants
# ---------------------------------------------------------------------------

EMOTION_WEIGHT = 0.7          # intensity/10 scaled into [0, 0.7]
STRATEGY_FIT_SHIFT = 0.2      # +misfit / -fit
SUCCESS_PROB_PLANNED = 0.7
SUCCESS_PROB_VIOLATION = 0.3
DIRECTIONAL_BIAS = 0.7        # long in bullish, short in bearish
TEXTBOOK_PROB = 0.65          # weight of the market's textbook action
DECREASE_OVER_EXIT = 0.7      # fear/anxiety: trim rather than dump

# Internal actions are "<verb>_<side>" (or "hold"); the verb maps onto the
# public action vocabulary and the side becomes ``direction``.
_PUBLIC_VERBS = {
    "buy": "buy",
    "increase": "increase_position",
    "decrease": "decrease_position",
    "exit": "exit",
    "sell": "sell",
}

_REASONING_CLASS = {
    "buy": "entry",
    "increase": "increase",
    "decrease": "exit",
    "exit": "exit",
    "sell": "exit",
    "hold": "hold",
}

_ADD_OR_OPEN = ("greed", "overconfidence", "revenge", "frustration")
_REDUCE_OR_WAIT = ("fear", "anxiety")
_OPEN_OR_EXIT = ("boredom", "impatience")


def normalize_action(internal: str) -> tuple[str, Optional[str]]:
    """Split an internal action such as ``increase_short`` into
    ``("increase_position", "short")``. ``hold`` has no direction."""
    if internal == "hold":
        return "hold", None
    verb, _, side = internal.partition("_")
    if verb not in _PUBLIC_VERBS or side not in ("long", "short"):
        raise ValueError(f"Unknown internal action: {internal!r}")
    return _PUBLIC_VERBS[verb], side


def append_session_suffix(text: str, session: Optional[str], strategy: Optional[TradingStrategy],
                          rng: random.Random,
                          session_suffixes: Mapping[str, Sequence[str]] = SESSION_SUFFIXES) -> str:
    """Add a session note (Asian/Overnight) unless the strategy already
    talks about that session."""
    suffixes = session_suffixes.get(session or "")
    if suffixes and not (strategy is not None and strategy.mentions(session)):
        return f"{text} {rng.choice(suffixes)}"
    return text


def _clamp01(v: float) -> float:
    return max(0.0, min(1.0, v))


class DecisionGenerator:
    """Produces one :class:`TraderDecision` at a time."""

    def __init__(self, rng: random.Random,
                 emotion_reasoning: Mapping[str, Sequence[str]] = EMOTION_REASONING,
                 action_reasoning: Mapping[str, Sequence[str]] = ACTION_REASONING,
                 session_suffixes: Mapping[str, Sequence[str]] = SESSION_SUFFIXES,
                 session_windows: Mapping[str, Sequence[tuple[int, int]]] = SESSION_WINDOWS):
        self.rng = rng
        self.emotion_reasoning = emotion_reasoning
        self.action_reasoning = action_reasoning
        self.session_suffixes = session_suffixes
        self.session_windows = session_windows

    # ----- probability model -----

    @staticmethod
    def violation_probability(emotional_state: EmotionalState, trader: TraderProfile,
                              scenario: TradingScenario) -> float:
        market = scenario.market_condition
        p = emotional_state.intensity / 10 * EMOTION_WEIGHT
        if trader.strategy.misfits(market):
            p += STRATEGY_FIT_SHIFT
        if trader.strategy.fits(market):
            p -= STRATEGY_FIT_SHIFT
        return _clamp01(p)

    def pick_direction(self, market_condition: str, book: PositionBook) -> str:
        if book.is_open:
            return book.direction
        if market_condition == "bearish":
            return "short" if self.rng.random() < DIRECTIONAL_BIAS else "long"
        if market_condition == "bullish":
            return "long" if self.rng.random() < DIRECTIONAL_BIAS else "short"
        return "long" if self.rng.random() < 0.5 else "short"

    # ----- action selection -----

    def _context_action(self, book: PositionBook, side: str) -> str:
        """Uniform pick from whatever is possible in the current position state."""
        if book.is_open:
            return self.rng.choice([f"increase_{side}", f"decrease_{side}", f"exit_{side}", "hold"])
        return self.rng.choice([f"buy_{side}", "hold"])

    def emotional_action(self, emotion: str, book: PositionBook, side: str) -> str:
        if emotion in _ADD_OR_OPEN:
            return f"increase_{side}" if book.is_open else f"buy_{side}"
        if emotion in _REDUCE_OR_WAIT:
            if not book.is_open:
                return "hold"
            return f"decrease_{side}" if self.rng.random() < DECREASE_OVER_EXIT else f"exit_{side}"
        if emotion in _OPEN_OR_EXIT:
            return f"exit_{side}" if book.is_open else f"buy_{side}"
        return self._context_action(book, side)

    def planned_action(self, market_condition: str, book: PositionBook, side: str) -> str:
        textbook = self.rng.random() < TEXTBOOK_PROB
        if market_condition in ("trending", "bullish"):
            if not textbook:
                return "hold"
            return f"increase_{side}" if book.is_open else f"buy_{side}"
        if market_condition == "bearish":
            if not textbook:
                return "hold"
            if book.is_open:
                return self.rng.choice([f"decrease_{side}", f"exit_{side}", f"sell_{side}"])
            return f"buy_{side}"
        if market_condition in ("choppy", "ranging"):
            if textbook:
                return "hold"
            return f"exit_{side}" if book.is_open else f"buy_{side}"
        return self._context_action(book, side)

    # ----- text -----

    def reasoning(self, internal_action: str, side: str, violates: bool,
                  emotion: str, trader: TraderProfile, session: Optional[str]) -> str:
        if violates:
            text = self.rng.choice(self.emotion_reasoning[emotion])
        else:
            verb = internal_action.partition("_")[0]
            template = self.rng.choice(self.action_reasoning[_REASONING_CLASS[verb]])
            bias = "bullish" if side == "long" else "bearish"
            text = template.format(bias=bias, side=side, strategy=trader.strategy.name)
        return append_session_suffix(text, session, trader.strategy, self.rng, self.session_suffixes)

    # ----- time -----

    def session_time(self, session: Optional[str], trade_date: date) -> datetime:
        """Random clock time inside *session*'s window.

        The part of a window after midnight falls on the day after
        *trade_date*.
        """
        windows = self.session_windows.get(session or "", ((9 * 60 + 30, 16 * 60),))
        hours: list[tuple[int, int, int]] = []  # (day offset, hour, first valid minute)
        for i, (start, end) in enumerate(windows):
            day = 1 if i > 0 and start == 0 else 0
            for hour in range(start // 60, (end - 1) // 60 + 1):
                first_minute = start % 60 if hour == start // 60 else 0
                hours.append((day, hour, first_minute))
        day, hour, first_minute = self.rng.choice(hours)
        minute = self.rng.randint(first_minute, 59)
        return datetime.combine(trade_date + timedelta(days=day), time(hour, minute))

    def session_times(self, sessions: Sequence[Optional[str]], trade_date: date) -> list[datetime]:
        """One timestamp per decision, non-decreasing through the run.

        Times are sorted within each stretch of the same session; a stretch
        that would start before the previous one ended moves forward by
        whole days.
        """
        times: list[datetime] = []
        for session, stretch in groupby(sessions):
            drawn = sorted(self.session_time(session, trade_date) for _ in stretch)
            while times and drawn[0] < times[-1]:
                drawn = [t + timedelta(days=1) for t in drawn]
            times.extend(drawn)
        return times

    # ----- public API -----

    def generate(self, emotional_state: EmotionalState, trader: TraderProfile,
                 scenario: TradingScenario, session: Optional[str],
                 prior_decisions: Sequence[TraderDecision] = (),
                 position: Optional[PositionBook] = None,
                 trade_date: Optional[date] = None,
                 timestamp: Optional[datetime] = None) -> TraderDecision:
        """Generate the next decision in a run.

        Args:
            prior_decisions: Earlier decisions of this run, oldest first.
                Only used to rebuild the position when *position* is None.
            position: Position book already advanced past the prior
                decisions. The caller keeps ownership and must ``apply`` the
                returned decision itself.
            trade_date: Calendar date for a drawn timestamp (default: today).
            timestamp: Use this time instead of drawing one; callers
                generating a whole run pass times from ``session_times``.
        """
        book = position if position is not None else PositionBook.replay(prior_decisions)
        market = scenario.market_condition
        emotion = emotional_state.primary

        p_violate = self.violation_probability(emotional_state, trader, scenario)
        violates = self.rng.random() < p_violate

        side = self.pick_direction(market, book)
        if violates:
            internal = self.emotional_action(emotion, book, side)
        else:
            internal = self.planned_action(market, book, side)
        action, direction = normalize_action(internal)

        text = self.reasoning(internal, side, violates, emotion, trader, session)

        success_prob = SUCCESS_PROB_VIOLATION if violates else SUCCESS_PROB_PLANNED
        outcome = "positive" if self.rng.random() < success_prob else "negative"

        if timestamp is None:
            timestamp = self.session_time(session, trade_date or date.today())

        decision = TraderDecision(
            timestamp=timestamp,
            action=action,
            direction=direction,
            reasoning=text,
            emotional_influence=emotion if violates else None,
            violates_strategy=violates,
            outcome=outcome,
            session=session,
        )
        logger.debug("Decision %s/%s violates=%s (p=%.2f) outcome=%s",
                     action, direction, violates, p_violate, outcome)
        return decision
