"""Presentation-driven post-processing of a finished run.

These adjustments are not part of the behavioral model. They only make
sure every run has something to show a learner: a non-zero P&L figure and
at least one emotionally driven decision to coach on.
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Mapping, Optional, Sequence

from tradecoach.data.tables import EMOTION_REASONING
from tradecoach.generator.decisions import append_session_suffix
from tradecoach.generator.pnl import FoldResult
from tradecoach.models import EmotionalState, TraderDecision, TradingStrategy

logger = logging.getLogger(__name__)

MIN_DISPLAY_PNL = 0.01
FALLBACK_PNL_RANGE = (-3.0, 3.0)


def ensure_nonzero_pnl(profit_loss: float, rng: random.Random) -> float:
    """Replace a P&L too small to display with a random percentage in
    FALLBACK_PNL_RANGE, itself never below the display threshold."""
    if abs(profit_loss) < MIN_DISPLAY_PNL:
        lo, hi = FALLBACK_PNL_RANGE
        replacement = rng.uniform(MIN_DISPLAY_PNL, hi) if rng.random() < 0.5 else -rng.uniform(MIN_DISPLAY_PNL, -lo)
        logger.debug("P&L %.4f below display threshold, showing %.2f", profit_loss, replacement)
        return replacement
    return profit_loss


def ensure_emotional_mistake(decisions: Sequence[TraderDecision], emotional_state: EmotionalState,
                             rng: random.Random, strategy: Optional[TradingStrategy] = None,
                             emotion_reasoning: Mapping[str, Sequence[str]] = EMOTION_REASONING,
                             ) -> tuple[TraderDecision, ...]:
    """Guarantee at least one decision carries the run's primary emotion.

    When no decision violated the plan, one is picked at random and turned
    into a violation with matching emotional reasoning (plus the usual
    session note, see ``append_session_suffix``). Action and outcome are
    left alone so the P&L stays valid.
    """
    decisions = tuple(decisions)
    if not decisions or any(d.emotional_influence is not None for d in decisions):
        return decisions

    idx = rng.randrange(len(decisions))
    emotion = emotional_state.primary
    text = rng.choice(emotion_reasoning[emotion])
    converted = replace(
        decisions[idx],
        emotional_influence=emotion,
        violates_strategy=True,
        reasoning=append_session_suffix(text, decisions[idx].session, strategy, rng),
    )
    logger.debug("No emotional mistakes in run; converted decision %d to %s", idx, emotion)
    return decisions[:idx] + (converted,) + decisions[idx + 1:]


def apply_display_adjustments(fold: FoldResult, emotional_state: EmotionalState,
                              rng: random.Random, strategy: Optional[TradingStrategy] = None,
                              ) -> tuple[tuple[TraderDecision, ...], float]:
    """Run both adjustments on a folded run; returns (decisions, profit_loss)."""
    decisions = ensure_emotional_mistake(fold.decisions, emotional_state, rng, strategy)
    return decisions, ensure_nonzero_pnl(fold.profit_loss, rng)
