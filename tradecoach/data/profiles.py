"""Reference trading strategies and trader profiles."""

from __future__ import annotations

import random
from typing import Optional, Sequence

from tradecoach.models import TraderProfile, TradingStrategy

BREAKOUT_MOMENTUM = TradingStrategy(
    name="Breakout Momentum",
    type="breakout",
    time_frames=("intraday", "swing"),
    best_market_conditions=("trending", "volatile"),
    worst_market_conditions=("choppy", "ranging"),
    description="Enters trades when price breaks through significant levels with increased volume",
    rules=(
        "Wait for price to break through resistance/support",
        "Confirm with volume increase",
        "Use 2:1 risk-reward ratio minimum",
        "Exit if price returns below breakout level",
        "Size position at 1% risk per trade",
    ),
)

MEAN_REVERSION = TradingStrategy(
    name="Mean Reversion",
    type="mean_reversion",
    time_frames=("intraday", "scalping"),
    best_market_conditions=("ranging", "choppy"),
    worst_market_conditions=("trending", "volatile"),
    description="Trades the return to average price after extreme moves",
    rules=(
        "Enter after 2 standard deviation move from mean",
        "Use technical indicators for confirmation (RSI, Bollinger)",
        "Take profit at mean/average price",
        "Cut losses if price continues in extreme direction",
        "Size position at 0.5% risk per trade",
    ),
)

TREND_FOLLOWING = TradingStrategy(
    name="Trend Following",
    type="trend_following",
    time_frames=("swing", "position"),
    best_market_conditions=("trending", "bullish", "bearish"),
    worst_market_conditions=("choppy", "ranging"),
    description="Identifies and follows established trends",
    rules=(
        "Only enter in direction of major trend",
        "Use moving averages for trend confirmation",
        "Trail stops to lock in profits",
        "Add to position on pullbacks",
        "Size position at 2% risk per trade",
    ),
)

NEWS_CATALYST = TradingStrategy(
    name="News Catalyst",
    type="news_based",
    time_frames=("intraday", "swing"),
    best_market_conditions=("volatile",),
    worst_market_conditions=("ranging",),
    description="Trades significant price movements following news events",
    rules=(
        "Wait for news release and initial volatility to settle",
        "Enter in direction of post-news trend",
        "Use tight stops due to unpredictability",
        "Take profits quickly",
        "Size position at 0.75% risk per trade",
    ),
)

TECHNICAL_SCALPING = TradingStrategy(
    name="Technical Scalping",
    type="scalping",
    time_frames=("scalping",),
    best_market_conditions=("ranging", "trending"),
    worst_market_conditions=("volatile", "choppy"),
    description="Makes many small trades based on short-term technical patterns",
    rules=(
        "Look for small price inefficiencies",
        "Use 1:1 risk-reward ratio",
        "Exit trades within minutes",
        "Trade high-liquidity assets only",
        "Trade the Asian session range only when liquidity allows",
        "Size position at 0.25% risk per trade",
    ),
)

STRATEGIES: tuple[TradingStrategy, ...] = (
    BREAKOUT_MOMENTUM, MEAN_REVERSION, TREND_FOLLOWING, NEWS_CATALYST, TECHNICAL_SCALPING,
)

TRADER_PROFILES: tuple[TraderProfile, ...] = (
    TraderProfile(
        id="trader1",
        name="Alex Thompson",
        personality="impulsive",
        experience="intermediate",
        preferred_assets=("stocks", "options"),
        preferred_time_frames=("intraday", "scalping"),
        emotional_tendencies=("impatience", "overconfidence", "excitement"),
        strategy=BREAKOUT_MOMENTUM,
        strengths=("Quick decision making", "Pattern recognition"),
        weaknesses=("Lacks discipline", "Overtrades", "Chases entries"),
        avatar="/avatars/trader1.png",
    ),
    TraderProfile(
        id="trader2",
        name="Sarah Chen",
        personality="analytical",
        experience="advanced",
        preferred_assets=("futures", "forex"),
        preferred_time_frames=("swing", "intraday"),
        emotional_tendencies=("anxiety", "fear", "frustration"),
        strategy=MEAN_REVERSION,
        strengths=("Thorough analysis", "Patient", "Good risk management"),
        weaknesses=("Analysis paralysis", "Cuts winners too early", "Hesitates on entries"),
        avatar="/avatars/trader2.png",
    ),
    TraderProfile(
        id="trader3",
        name="Marcus Johnson",
        personality="aggressive",
        experience="expert",
        preferred_assets=("stocks", "options", "futures"),
        preferred_time_frames=("intraday", "scalping"),
        emotional_tendencies=("greed", "overconfidence", "revenge"),
        strategy=TREND_FOLLOWING,
        strengths=("High conviction", "Maximizes winners", "Adapts quickly"),
        weaknesses=("Oversizes positions", "Ignores stop losses", "Takes excessive risk"),
        avatar="/avatars/trader3.png",
    ),
    TraderProfile(
        id="trader4",
        name="Emma Rodriguez",
        personality="cautious",
        experience="beginner",
        preferred_assets=("stocks", "crypto"),
        preferred_time_frames=("swing", "position"),
        emotional_tendencies=("fear", "anxiety", "hope"),
        strategy=NEWS_CATALYST,
        strengths=("Careful planning", "Follows rules", "Manages risk well"),
        weaknesses=("Misses opportunities", "Undersizes positions", "Lacks confidence"),
        avatar="/avatars/trader4.png",
    ),
    TraderProfile(
        id="trader5",
        name="David Kim",
        personality="patient",
        experience="advanced",
        preferred_assets=("futures", "forex", "stocks"),
        preferred_time_frames=("intraday", "swing"),
        emotional_tendencies=("boredom", "frustration", "impatience"),
        strategy=TECHNICAL_SCALPING,
        strengths=("Waits for setups", "Disciplined", "Consistent execution"),
        weaknesses=("Overtrading when bored", "Deviates from plan when frustrated", "Impatient with winners"),
        avatar="/avatars/trader5.png",
    ),
)


def get_random_trader_profile(rng: random.Random,
                              profiles: Sequence[TraderProfile] = TRADER_PROFILES) -> Optional[TraderProfile]:
    """Pick a profile uniformly; ``None`` when *profiles* is empty."""
    if not profiles:
        return None
    return rng.choice(profiles)


def get_trader_profile_by_id(trader_id: str,
                             profiles: Sequence[TraderProfile] = TRADER_PROFILES) -> Optional[TraderProfile]:
    for profile in profiles:
        if profile.id == trader_id:
            return profile
    return None
