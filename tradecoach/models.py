"""
Core records for coaching scenarios.

Vocabularies are plain string tuples; records are dataclasses. Reference
entities (strategies, profiles, scenarios) and per-run results are frozen,
so a run can only be changed by building a new record with
``dataclasses.replace``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Optional

# ---------------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------------

MARKET_CONDITIONS = ("bullish", "bearish", "choppy", "trending", "volatile", "ranging")
TIME_FRAMES = ("scalping", "intraday", "swing", "position")
ASSET_CLASSES = ("stocks", "futures", "forex", "crypto", "options", "etfs", "bonds")
DIFFICULTIES = ("easy", "medium", "hard")

PERSONALITIES = ("impulsive", "analytical", "cautious", "aggressive", "patient")
EXPERIENCE_LEVELS = ("beginner", "intermediate", "advanced", "expert")

EMOTION_TYPES = (
    "fear", "greed", "revenge", "overconfidence", "anxiety", "impatience",
    "frustration", "excitement", "boredom", "hope", "desperation",
)

TRADING_BEHAVIORS = (
    "oversizing", "cutting_winners_early", "letting_losers_run",
    "averaging_down", "chasing_entries", "overtrading", "hesitation",
    "deviation_from_plan", "ignoring_risk_management", "moving_stop_loss",
    "trading_without_edge",
)

STRATEGY_TYPES = (
    "trend_following", "mean_reversion", "breakout", "momentum", "scalping",
    "swing", "position", "news_based", "technical", "fundamental",
)

ACTIONS = ("buy", "sell", "hold", "increase_position", "decrease_position", "exit")
ENTRY_ACTIONS = ("buy", "increase_position")
EXIT_ACTIONS = ("exit", "sell")
DIRECTIONS = ("long", "short")
OUTCOMES = ("positive", "negative", "neutral")
SESSIONS = ("Asian", "London", "New York", "Overnight")


# ---------------------------------------------------------------------------
# Reference entities
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TradingStrategy:
    name: str
    type: str  # one of STRATEGY_TYPES
    time_frames: tuple[str, ...]
    best_market_conditions: tuple[str, ...]
    worst_market_conditions: tuple[str, ...]
    description: str
    rules: tuple[str, ...]

    def fits(self, market_condition: str) -> bool:
        return market_condition in self.best_market_conditions

    def misfits(self, market_condition: str) -> bool:
        return market_condition in self.worst_market_conditions

    def mentions(self, text: str) -> bool:
        """True if the strategy name, description or any rule mentions *text*."""
        needle = text.lower()
        haystack = " ".join((self.name, self.description, *self.rules)).lower()
        return needle in haystack


@dataclass(frozen=True)
class TraderProfile:
    id: str
    name: str
    personality: str  # one of PERSONALITIES
    experience: str  # one of EXPERIENCE_LEVELS
    preferred_assets: tuple[str, ...]
    preferred_time_frames: tuple[str, ...]
    emotional_tendencies: tuple[str, ...]
    strategy: TradingStrategy
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    avatar: str = ""

    def to_dict(self) -> dict[str, Any]:
        return _plain(asdict(self))


@dataclass(frozen=True)
class PricePoint:
    timestamp: str
    price: float
    volume: int
    description: Optional[str] = None


@dataclass(frozen=True)
class NewsEvent:
    timestamp: str
    headline: str
    impact: str  # low | medium | high
    description: str


@dataclass(frozen=True)
class TradingScenario:
    id: str
    title: str
    description: str
    market_condition: str
    time_frame: str
    asset_class: str
    difficulty: str
    price_action: tuple[PricePoint, ...] = ()
    news_events: tuple[NewsEvent, ...] = ()
    ideal_behaviors: tuple[str, ...] = ()
    common_mistakes: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return _plain(asdict(self))


# ---------------------------------------------------------------------------
# Per-run records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EmotionalState:
    """The dominant feeling driving one run.

    ``behaviors`` is always the fixed set mapped from ``primary``; the
    generator never samples or edits it independently.
    """

    primary: str
    intensity: int  # 1-10
    trigger: str
    behaviors: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return _plain(asdict(self))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EmotionalState":
        _require_mapping(data, "current_emotional_state")
        return cls(
            primary=data["primary"],
            intensity=int(data["intensity"]),
            trigger=data.get("trigger", ""),
            behaviors=tuple(data.get("behaviors", ())),
        )


@dataclass(frozen=True)
class TraderDecision:
    """One simulated trading action.

    ``emotional_influence`` is set exactly when ``violates_strategy`` is.
    Price fields stay ``None`` until the P&L fold attaches them.
    """

    timestamp: datetime
    action: str  # one of ACTIONS
    reasoning: str
    emotional_influence: Optional[str]
    violates_strategy: bool
    outcome: str  # one of OUTCOMES
    direction: Optional[str] = None  # long | short
    session: Optional[str] = None
    entry_price: Optional[float] = None
    exit_price: Optional[float] = None
    trade_profit: Optional[float] = None

    @property
    def is_entry(self) -> bool:
        return self.action in ENTRY_ACTIONS

    @property
    def is_exit(self) -> bool:
        return self.action in EXIT_ACTIONS

    def to_dict(self) -> dict[str, Any]:
        return _plain(asdict(self))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TraderDecision":
        _require_mapping(data, "decision")
        ts = data["timestamp"]
        return cls(
            timestamp=ts if isinstance(ts, datetime) else datetime.fromisoformat(ts),
            action=data["action"],
            reasoning=data.get("reasoning", ""),
            emotional_influence=data.get("emotional_influence"),
            violates_strategy=bool(data.get("violates_strategy", False)),
            outcome=data.get("outcome", "neutral"),
            direction=data.get("direction"),
            session=data.get("session"),
            entry_price=data.get("entry_price"),
            exit_price=data.get("exit_price"),
            trade_profit=data.get("trade_profit"),
        )


@dataclass(frozen=True)
class Performance:
    profit_loss: float
    correct_decisions: int
    emotional_mistakes: int
    total_trades: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Performance":
        _require_mapping(data, "performance")
        return cls(
            profit_loss=float(data.get("profit_loss", 0.0)),
            correct_decisions=int(data.get("correct_decisions", 0)),
            emotional_mistakes=int(data.get("emotional_mistakes", 0)),
            total_trades=int(data.get("total_trades", 0)),
        )


@dataclass(frozen=True)
class TraderState:
    trader_id: str
    scenario_id: str
    current_emotional_state: EmotionalState
    decisions: tuple[TraderDecision, ...]
    performance: Performance

    def to_dict(self) -> dict[str, Any]:
        return _plain(asdict(self))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TraderState":
        """Rebuild a state from its ``to_dict`` form (e.g. a client payload)."""
        _require_mapping(data, "trader_state")
        return cls(
            trader_id=data["trader_id"],
            scenario_id=data["scenario_id"],
            current_emotional_state=EmotionalState.from_dict(data["current_emotional_state"]),
            decisions=tuple(TraderDecision.from_dict(d) for d in data.get("decisions", ())),
            performance=Performance.from_dict(data.get("performance", {})),
        )


@dataclass(frozen=True)
class ScenarioResult:
    scenario: TradingScenario
    trader: TraderProfile
    trader_state: TraderState

    def to_dict(self) -> dict[str, Any]:
        return {
            "scenario": self.scenario.to_dict(),
            "trader": self.trader.to_dict(),
            "trader_state": self.trader_state.to_dict(),
        }


@dataclass
class IdentifiedIssue:
    emotional_state: str
    behaviors: list[str] = field(default_factory=list)
    advice: str = ""


@dataclass
class CoachingSession:
    """A scored coaching assessment for one generated run."""

    id: str
    scenario_id: str
    trader_id: str
    user_identified_issues: list[IdentifiedIssue]
    score: int
    feedback: str
    timestamp: datetime
    emotion_correct: bool = False
    matched_behaviors: list[str] = field(default_factory=list)
    missed_behaviors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return _plain(asdict(self))


def _plain(value: Any) -> Any:
    """Convert asdict() output into JSON-friendly types."""
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _require_mapping(data: Any, name: str) -> None:
    if not isinstance(data, dict):
        raise TypeError(f"{name} must be an object, got {type(data).__name__}")
