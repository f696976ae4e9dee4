"""Pick the emotional state that drives a scenario run."""

from __future__ import annotations

import logging
import random
from typing import Mapping, Optional, Sequence

from tradecoach.data.tables import (
    DEFAULT_INTENSITY_BASE,
    EMOTION_TO_BEHAVIORS,
    MARKET_EMOTION_POOL,
    MARKET_TRIGGER_PHRASES,
    PERSONALITY_INTENSITY_BASE,
)
from tradecoach.models import EmotionalState, TraderProfile

logger = logging.getLogger(__name__)

# Forced-emotion runs are deliberately harder to read
CUSTOM_INTENSITY_RANGE = (6, 10)


def _clamp(v: int, lo: int = 1, hi: int = 10) -> int:
    return max(lo, min(hi, v))


class EmotionalStateGenerator:
    """Builds one :class:`EmotionalState` from market condition and trader."""

    def __init__(self, rng: random.Random,
                 market_emotions: Mapping[str, Sequence[str]] = MARKET_EMOTION_POOL,
                 triggers: Mapping[str, Mapping[str, Sequence[str]]] = MARKET_TRIGGER_PHRASES,
                 behaviors: Mapping[str, Sequence[str]] = EMOTION_TO_BEHAVIORS,
                 intensity_base: Mapping[str, int] = PERSONALITY_INTENSITY_BASE):
        self.rng = rng
        self.market_emotions = market_emotions
        self.triggers = triggers
        self.behaviors = behaviors
        self.intensity_base = intensity_base

    def candidate_pool(self, market_condition: str, trader: TraderProfile,
                       forced_emotions: Optional[Sequence[str]] = None) -> list[str]:
        """Emotions the primary is drawn from.

        A forced list is used as-is. Otherwise the trader's tendencies that
        fit the market, falling back to the market pool when none do.
        """
        if forced_emotions:
            return list(forced_emotions)
        market_pool = self.market_emotions[market_condition]
        matching = [e for e in trader.emotional_tendencies if e in market_pool]
        return matching or list(market_pool)

    def pick_trigger(self, market_condition: str) -> str:
        categories = self.triggers[market_condition]
        category = self.rng.choice(list(categories))
        return self.rng.choice(categories[category])

    def pick_intensity(self, trader: TraderProfile, forced: bool = False) -> int:
        if forced:
            return self.rng.randint(*CUSTOM_INTENSITY_RANGE)
        base = self.intensity_base.get(trader.personality, DEFAULT_INTENSITY_BASE)
        return _clamp(base + self.rng.randint(-2, 1))

    def generate(self, market_condition: str, trader: TraderProfile,
                 forced_emotions: Optional[Sequence[str]] = None) -> EmotionalState:
        pool = self.candidate_pool(market_condition, trader, forced_emotions)
        primary = self.rng.choice(pool)
        trigger = self.pick_trigger(market_condition)
        intensity = self.pick_intensity(trader, forced=bool(forced_emotions))

        state = EmotionalState(
            primary=primary,
            intensity=intensity,
            trigger=trigger,
            behaviors=tuple(self.behaviors[primary]),
        )
        logger.debug("Emotional state for %s in %s market: %s (%d/10)",
                     trader.id, market_condition, primary, intensity)
        return state
