"""Static lookup tables consumed by the emotion and decision generators.

All tables are read-only mappings; the generators take them as
constructor arguments so tests can substitute smaller ones.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

# ---------------------------------------------------------------------------
# Emotions
# ---------------------------------------------------------------------------

# Emotions that plausibly show up in each market condition
MARKET_EMOTION_POOL: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "bullish":  ("greed", "overconfidence", "excitement", "hope"),
    "bearish":  ("fear", "anxiety", "desperation", "hope"),
    "choppy":   ("frustration", "boredom", "impatience"),
    "ranging":  ("frustration", "boredom", "impatience"),
    "volatile": ("fear", "anxiety", "revenge", "excitement"),
    "trending": ("greed", "excitement", "overconfidence"),
})

# market condition -> trigger category -> phrases
MARKET_TRIGGER_PHRASES: Mapping[str, Mapping[str, tuple[str, ...]]] = MappingProxyType({
    "bullish": MappingProxyType({
        "missed_opportunity": (
            "Market rallying without your participation",
            "Watching others profit while sitting on sidelines",
            "Missing a breakout you identified earlier",
        ),
        "fomo": (
            "Continuous upward momentum",
            "Social media buzz about gains",
            "Multiple stocks making new highs",
        ),
    }),
    "bearish": MappingProxyType({
        "fear": (
            "Account drawdown exceeding comfort level",
            "Breaking major support levels",
            "Negative headlines dominating news",
        ),
        "opportunity": (
            "Oversold conditions",
            "Capitulation selling",
            "Stocks trading at significant discounts",
        ),
    }),
    "choppy": MappingProxyType({
        "frustration": (
            "Multiple false breakouts",
            "Getting stopped out repeatedly",
            "No clear direction to trade",
        ),
        "overtrading": (
            "Trying to recoup small losses",
            "Forcing trades in unclear conditions",
            "Boredom from lack of clear setups",
        ),
    }),
    "trending": MappingProxyType({
        "greed": (
            "Profits accumulating quickly",
            "Strong momentum in your direction",
            "Multiple winning trades in a row",
        ),
        "complacency": (
            "Extended trend making trading seem easy",
            "Relaxing risk management due to success",
            "Increasing position sizes after wins",
        ),
    }),
    "volatile": MappingProxyType({
        "anxiety": (
            "Large, rapid price swings",
            "Positions moving quickly against you",
            "Uncertainty about market direction",
        ),
        "revenge": (
            "Stopped out just before favorable move",
            "Missing profit target by small amount before reversal",
            "Series of small losses from whipsaw action",
        ),
    }),
    "ranging": MappingProxyType({
        "boredom": (
            "Price contained in tight range",
            "Low volatility and volume",
            "Lack of trading opportunities",
        ),
        "impatience": (
            "Waiting for breakout confirmation",
            "Anticipating range break too early",
            "Forcing trades within the range",
        ),
    }),
})

EMOTION_TO_BEHAVIORS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "fear":           ("hesitation", "cutting_winners_early", "deviation_from_plan"),
    "greed":          ("oversizing", "letting_losers_run", "ignoring_risk_management"),
    "revenge":        ("overtrading", "chasing_entries", "ignoring_risk_management"),
    "overconfidence": ("oversizing", "trading_without_edge", "deviation_from_plan"),
    "anxiety":        ("hesitation", "cutting_winners_early", "overtrading"),
    "impatience":     ("overtrading", "chasing_entries", "deviation_from_plan"),
    "frustration":    ("overtrading", "moving_stop_loss", "deviation_from_plan"),
    "excitement":     ("oversizing", "chasing_entries", "trading_without_edge"),
    "boredom":        ("overtrading", "trading_without_edge", "deviation_from_plan"),
    "hope":           ("averaging_down", "letting_losers_run", "moving_stop_loss"),
    "desperation":    ("oversizing", "ignoring_risk_management", "averaging_down"),
})

# Intensity base by personality; anything missing uses DEFAULT_INTENSITY_BASE
PERSONALITY_INTENSITY_BASE: Mapping[str, int] = MappingProxyType({
    "impulsive": 7,
    "aggressive": 7,
    "analytical": 3,
    "patient": 3,
})
DEFAULT_INTENSITY_BASE = 5

# ---------------------------------------------------------------------------
# Reasoning text
# ---------------------------------------------------------------------------

EMOTION_REASONING: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "fear": (
        "I need to protect my capital from further losses.",
        "This could turn against me any second, I can't take another hit.",
        "I'd rather be out than watch this go red again.",
    ),
    "greed": (
        "I see potential for much bigger gains here.",
        "This move has more room to run, I want a bigger piece of it.",
        "Why settle for my target when it could double from here?",
    ),
    "revenge": (
        "I need to make back my previous losses quickly.",
        "The market took my money, I'm taking it back on this one.",
        "One good trade and I'm back to even for the day.",
    ),
    "overconfidence": (
        "I have a strong feeling this will work out well.",
        "I've been right all week, I don't need confirmation on this one.",
        "My read on this market is better than any rule.",
    ),
    "anxiety": (
        "I can't stand watching every tick, I need to do something.",
        "Something feels off, I'm not sure I can sit through this.",
        "The swings are too much, I'll feel better with less exposure.",
    ),
    "impatience": (
        "Nothing is happening, I'm getting in before it moves without me.",
        "I've waited long enough for my setup, this is close enough.",
        "If I wait for confirmation I'll miss the whole move.",
    ),
    "frustration": (
        "I keep getting stopped out, I'm giving this one more room.",
        "This market is impossible, I'll just force the trade.",
        "I'm tired of sitting on my hands while it chops around.",
    ),
    "excitement": (
        "This is the move everyone has been talking about, I have to be in.",
        "Look at that momentum, this is going to be huge.",
        "I can feel a big day coming, time to get aggressive.",
    ),
    "boredom": (
        "I haven't traded all session, I need some action.",
        "Might as well take something, there's nothing else going on.",
        "Sitting here doing nothing feels like wasting the day.",
    ),
    "hope": (
        "It has to come back eventually, I'll give it more time.",
        "If I average in here I'll be fine when it turns around.",
        "I'm sure this is the bottom, it can't go much lower.",
    ),
    "desperation": (
        "I have to make this month green no matter what.",
        "I'm down too much to play it safe now.",
        "This is my last chance to fix the account, I'm going big.",
    ),
})

# Action-class pools used when the trader follows the plan.
# Placeholders: {bias} bullish/bearish, {side} long/short, {strategy} name.
ACTION_REASONING: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "entry": (
        "Price confirmed a {bias} setup, so I entered {side} per my {strategy} rules.",
        "My {strategy} criteria lined up for a {bias} trade; taking a planned {side} entry.",
        "Clean {bias} signal with defined risk, opening a {side} position as planned.",
    ),
    "increase": (
        "The {bias} thesis is playing out, adding to my {side} at a planned level.",
        "Pullback held inside my {strategy} rules, scaling into the {side} position.",
        "Trade is working in a {bias} direction, so I'm adding size within my risk limit.",
    ),
    "exit": (
        "The {bias} setup has played out, taking profits on the {side} as planned.",
        "My {strategy} exit condition triggered, reducing the {side} exposure.",
        "Price hit my planned level, managing the {side} position per the rules.",
    ),
    "hold": (
        "No {bias} confirmation yet, waiting for my {strategy} setup.",
        "Nothing meets my entry criteria, staying patient.",
        "The position is behaving as expected, no action needed per my {strategy} plan.",
    ),
})

SESSION_SUFFIXES: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "Asian": (
        "Liquidity is thin during the Asian session, so moves can be exaggerated.",
        "Asian session ranges tend to be tight before London opens.",
    ),
    "Overnight": (
        "Overnight trading means wider spreads and the risk of a gap at the open.",
        "Volume is light overnight, so fills may be worse than usual.",
    ),
})

# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------

# session -> ((start_minute, end_minute), ...) in minutes after midnight,
# end exclusive; windows that cross midnight are split in two
SESSION_WINDOWS: Mapping[str, tuple[tuple[int, int], ...]] = MappingProxyType({
    "Asian":     ((19 * 60, 24 * 60), (0, 2 * 60)),
    "London":    ((3 * 60, 11 * 60),),
    "New York":  ((9 * 60 + 30, 16 * 60),),
    "Overnight": ((16 * 60, 21 * 60), (0, 9 * 60)),
})
