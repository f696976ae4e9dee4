"""Score a learner's read of a generated run.

Rules only, no model: the learner names the emotion they think drove the
trader, the behaviors they spotted and a piece of advice. Each part is
compared with the run's ground truth and turned into a 0-100 score plus a
short feedback message.
"""

from __future__ import annotations

import logging
import random
import uuid
from datetime import datetime
from types import MappingProxyType
from typing import Iterable, Optional, Union

from tradecoach.errors import ValidationError
from tradecoach.models import (
    EMOTION_TYPES,
    TRADING_BEHAVIORS,
    CoachingSession,
    IdentifiedIssue,
    ScenarioResult,
    TraderState,
)

logger = logging.getLogger(__name__)

EMOTION_POINTS = 50
BEHAVIOR_POINTS = 30
ADVICE_POINTS = 20
FALSE_POSITIVE_PENALTY = 5
PARTIAL_ADVICE_POINTS = 5

# Advice counts as relevant when it mentions any of these for the true emotion
ADVICE_KEYWORDS = MappingProxyType({
    "fear": ("stop loss", "plan", "position size", "smaller", "risk", "checklist"),
    "greed": ("take profit", "target", "position size", "discipline", "risk"),
    "revenge": ("break", "step away", "walk away", "pause", "daily loss limit"),
    "overconfidence": ("position size", "risk", "plan", "journal", "humble"),
    "anxiety": ("breathe", "plan", "smaller", "checklist", "position size"),
    "impatience": ("wait", "patience", "setup", "confirmation", "plan"),
    "frustration": ("break", "pause", "step away", "journal", "reset"),
    "excitement": ("calm", "plan", "wait", "confirmation", "position size"),
    "boredom": ("setup", "edge", "wait", "walk away", "plan"),
    "hope": ("stop loss", "cut", "accept", "plan", "exit"),
    "desperation": ("stop trading", "break", "risk", "daily loss limit", "position size"),
})


def _validate(emotion: str, behaviors: list[str]) -> None:
    if emotion not in EMOTION_TYPES:
        logger.warning("[ASSESS] rejected emotion %r", emotion)
        raise ValidationError(f"Unknown emotion type {emotion!r}")
    unknown = [b for b in behaviors if b not in TRADING_BEHAVIORS]
    if unknown:
        logger.warning("[ASSESS] rejected behaviors %s", unknown)
        raise ValidationError(f"Unknown trading behavior(s): {', '.join(unknown)}")


def score_behaviors(identified: Iterable[str], actual: Iterable[str]) -> tuple[int, list[str], list[str], list[str]]:
    """Returns (points, matched, missed, false_positives)."""
    identified = list(dict.fromkeys(identified))
    actual = list(actual)
    matched = [b for b in identified if b in actual]
    missed = [b for b in actual if b not in identified]
    false_positives = [b for b in identified if b not in actual]

    if actual:
        points = round(BEHAVIOR_POINTS * len(matched) / len(actual))
    else:
        points = BEHAVIOR_POINTS
    points -= FALSE_POSITIVE_PENALTY * len(false_positives)
    return max(0, points), matched, missed, false_positives


def score_advice(advice: str, true_emotion: str, emotion_correct: bool) -> int:
    """Full marks for advice that addresses the true emotion; advice aimed
    at the wrong emotion gets partial credit at most."""
    text = (advice or "").strip().lower()
    if not text:
        return 0
    if emotion_correct and any(k in text for k in ADVICE_KEYWORDS.get(true_emotion, ())):
        return ADVICE_POINTS
    return PARTIAL_ADVICE_POINTS


def feedback_message(score: int, true_emotion: str, emotion_correct: bool,
                     missed: list[str], false_positives: list[str]) -> str:
    if score >= 80:
        parts = [f"Strong read (score {score}). You spotted what was driving this trader."]
    elif score >= 50:
        parts = [f"Good start (score {score}). Part of the picture is there."]
    else:
        parts = [f"Keep practicing (score {score}). Re-read the decisions that broke the plan."]

    if not emotion_correct:
        parts.append(f"The trader was mainly driven by {true_emotion}.")
    if missed:
        parts.append(f"Missed behaviors: {', '.join(b.replace('_', ' ') for b in missed)}.")
    if false_positives:
        parts.append(f"Not present in this run: {', '.join(b.replace('_', ' ') for b in false_positives)}.")
    return " ".join(parts)


def assess_coaching(result: Union[ScenarioResult, TraderState], emotion: str,
                    behaviors: Iterable[str], advice: str,
                    scenario_id: Optional[str] = None, trader_id: Optional[str] = None,
                    rng: Optional[random.Random] = None,
                    now: Optional[datetime] = None) -> CoachingSession:
    """Compare a learner's assessment with a run's ground truth.

    Args:
        result: The generated run (or just its trader state).
        emotion: Emotion the learner believes drove the trader.
        behaviors: Behaviors the learner identified.
        advice: Free-text advice for the trader.
        scenario_id, trader_id: Override the ids taken from *result*.
        rng: Used for the session id; defaults to ``uuid4``.

    Raises:
        ValidationError: on an unknown emotion or behavior.
    """
    state = result.trader_state if isinstance(result, ScenarioResult) else result
    behaviors = list(behaviors or [])
    _validate(emotion, behaviors)

    truth = state.current_emotional_state
    emotion_correct = emotion == truth.primary
    behavior_points, matched, missed, false_positives = score_behaviors(behaviors, truth.behaviors)
    score = (
        (EMOTION_POINTS if emotion_correct else 0)
        + behavior_points
        + score_advice(advice, truth.primary, emotion_correct)
    )

    session_id = str(uuid.UUID(int=rng.getrandbits(128), version=4)) if rng else str(uuid.uuid4())
    session = CoachingSession(
        id=session_id,
        scenario_id=scenario_id or state.scenario_id,
        trader_id=trader_id or state.trader_id,
        user_identified_issues=[IdentifiedIssue(emotional_state=emotion, behaviors=behaviors, advice=advice)],
        score=score,
        feedback=feedback_message(score, truth.primary, emotion_correct, missed, false_positives),
        timestamp=now or datetime.now(),
        emotion_correct=emotion_correct,
        matched_behaviors=matched,
        missed_behaviors=missed,
    )
    logger.info("[ASSESS] scenario=%s trader=%s emotion=%s (truth %s) score=%d",
                session.scenario_id, session.trader_id, emotion, truth.primary, score)
    return session
