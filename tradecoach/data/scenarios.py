"""Scenario templates with synthetic price action and news events."""

from __future__ import annotations

import logging
import random
from datetime import datetime, timedelta
from typing import Optional, Sequence

import numpy as np

from tradecoach.models import NewsEvent, PricePoint, TradingScenario

logger = logging.getLogger(__name__)

# Fixed seed so the template price paths are identical on every import
TEMPLATE_SEED = 2023

# First bar; each later bar is one day and fifteen minutes after the previous
PRICE_ACTION_START = datetime(2023, 9, 1, 9, 0)


def generate_price_action(base_price: float, volatility: float, trend: float,
                          points: int, rng: np.random.RandomState) -> list[PricePoint]:
    """Random-walk price path with a linearly growing drift term.

    Each step adds uniform noise in ``[-volatility/2, volatility/2)`` plus
    ``trend * i / points``. Prices are floored at 0.01.
    """
    if points <= 0:
        return []
    noise = (rng.random_sample(points) - 0.5) * volatility
    drift = trend * (np.arange(points) / points)
    prices = np.maximum(base_price + np.cumsum(noise + drift), 0.01)
    volumes = rng.randint(1000, 11000, size=points)

    path: list[PricePoint] = []
    for i in range(points):
        timestamp = (PRICE_ACTION_START + timedelta(days=i, minutes=15 * i)).isoformat()
        path.append(PricePoint(
            timestamp=timestamp,
            price=round(float(prices[i]), 4 if base_price < 10 else 2),
            volume=int(volumes[i]),
        ))
    return path


def _chain(rng: np.random.RandomState,
           legs: Sequence[tuple[float, float, int]], base_price: float) -> list[PricePoint]:
    """Concatenate price legs, each starting where the previous one ended."""
    path: list[PricePoint] = []
    price = base_price
    for volatility, trend, points in legs:
        leg = generate_price_action(price, volatility, trend, points, rng)
        if leg:
            price = leg[-1].price
        path.extend(leg)
    return path


def _build_scenarios() -> tuple[TradingScenario, ...]:
    rng = np.random.RandomState(TEMPLATE_SEED)
    return (
        TradingScenario(
            id="scenario1",
            title="Earnings Surprise Reaction",
            description=("A stock has just reported earnings that beat expectations, "
                         "causing a gap up and continued momentum."),
            market_condition="bullish",
            time_frame="intraday",
            asset_class="stocks",
            difficulty="medium",
            price_action=tuple(generate_price_action(100, 2, 15, 20, rng)),
            news_events=(
                NewsEvent(
                    timestamp="2023-09-01T09:00:00",
                    headline="XYZ Corp Beats Earnings Expectations by 20%",
                    impact="high",
                    description=("XYZ Corporation reported quarterly earnings of $1.20 per share, "
                                 "significantly above analyst estimates of $1.00."),
                ),
                NewsEvent(
                    timestamp="2023-09-01T10:30:00",
                    headline='Analysts Upgrade XYZ Corp to "Strong Buy"',
                    impact="medium",
                    description=("Multiple analysts have upgraded their outlook on XYZ "
                                 "following the strong earnings report."),
                ),
            ),
            ideal_behaviors=("trading_without_edge", "deviation_from_plan"),
            common_mistakes=("chasing_entries", "oversizing", "overtrading"),
        ),
        TradingScenario(
            id="scenario2",
            title="Failed Breakout Trap",
            description=("A stock appears to break out above resistance but quickly "
                         "reverses, trapping breakout traders."),
            market_condition="choppy",
            time_frame="intraday",
            asset_class="stocks",
            difficulty="hard",
            # run-up, brief breakout, sharp reversal
            price_action=tuple(_chain(rng, [(1, 5, 10), (2, 3, 3), (2, -10, 7)], 50)),
            news_events=(
                NewsEvent(
                    timestamp="2023-09-05T11:15:00",
                    headline="ABC Stock Testing Key Resistance Level",
                    impact="low",
                    description=("Technical analysts note ABC is approaching a significant "
                                 "resistance level at $55."),
                ),
            ),
            ideal_behaviors=("deviation_from_plan", "ignoring_risk_management"),
            common_mistakes=("letting_losers_run", "averaging_down", "moving_stop_loss"),
        ),
        TradingScenario(
            id="scenario3",
            title="Range-Bound Consolidation",
            description=("A market that has been trading in a tight range for several days, "
                         "causing frustration for trend traders."),
            market_condition="ranging",
            time_frame="swing",
            asset_class="futures",
            difficulty="medium",
            price_action=tuple(generate_price_action(1000, 15, 0, 30, rng)),
            news_events=(
                NewsEvent(
                    timestamp="2023-09-10T08:30:00",
                    headline="Fed Signals No Change in Interest Rate Policy",
                    impact="medium",
                    description=("Federal Reserve minutes indicate no change in monetary "
                                 "policy is expected in the near term."),
                ),
            ),
            ideal_behaviors=("hesitation", "deviation_from_plan"),
            common_mistakes=("overtrading", "trading_without_edge", "chasing_entries"),
        ),
        TradingScenario(
            id="scenario4",
            title="Flash Crash Recovery",
            description=("A sudden market-wide selloff occurs, followed by a rapid recovery, "
                         "testing traders' emotional control."),
            market_condition="volatile",
            time_frame="intraday",
            asset_class="stocks",
            difficulty="hard",
            # stable start, crash, recovery
            price_action=tuple(_chain(rng, [(2, 0, 5), (5, -40, 5), (4, 30, 10)], 200)),
            news_events=(
                NewsEvent(
                    timestamp="2023-09-15T13:45:00",
                    headline="Algorithmic Selling Triggers Market-Wide Circuit Breakers",
                    impact="high",
                    description=("Trading halted temporarily as circuit breakers triggered by "
                                 "massive algorithmic selling pressure."),
                ),
                NewsEvent(
                    timestamp="2023-09-15T14:15:00",
                    headline="Markets Recovering as Selling Pressure Subsides",
                    impact="medium",
                    description=("Buyers stepping in after the flash crash, pushing prices "
                                 "back toward previous levels."),
                ),
            ),
            ideal_behaviors=("hesitation", "deviation_from_plan"),
            common_mistakes=("cutting_winners_early", "overtrading", "deviation_from_plan"),
        ),
        TradingScenario(
            id="scenario5",
            title="Strong Trend Day",
            description=("A market that is trending strongly in one direction all day, "
                         "providing multiple entry opportunities."),
            market_condition="trending",
            time_frame="intraday",
            asset_class="forex",
            difficulty="easy",
            # EUR/USD style pricing
            price_action=tuple(generate_price_action(1.2000, 0.0020, 0.0150, 24, rng)),
            news_events=(
                NewsEvent(
                    timestamp="2023-09-20T08:30:00",
                    headline="Eurozone Economic Data Exceeds Expectations",
                    impact="high",
                    description=("Multiple economic indicators from the Eurozone came in "
                                 "stronger than expected, boosting the Euro."),
                ),
            ),
            ideal_behaviors=("hesitation", "deviation_from_plan"),
            common_mistakes=("cutting_winners_early", "hesitation", "deviation_from_plan"),
        ),
    )


TRADING_SCENARIOS: tuple[TradingScenario, ...] = _build_scenarios()


def get_random_scenario(rng: random.Random,
                        scenarios: Sequence[TradingScenario] = TRADING_SCENARIOS) -> Optional[TradingScenario]:
    """Pick a scenario uniformly; ``None`` when *scenarios* is empty."""
    if not scenarios:
        return None
    return rng.choice(scenarios)


def get_scenario_by_id(scenario_id: str,
                       scenarios: Sequence[TradingScenario] = TRADING_SCENARIOS) -> Optional[TradingScenario]:
    for scenario in scenarios:
        if scenario.id == scenario_id:
            return scenario
    return None


def get_filtered_scenarios(market_condition: Optional[str] = None,
                           time_frame: Optional[str] = None,
                           asset_class: Optional[str] = None,
                           difficulty: Optional[str] = None,
                           scenarios: Sequence[TradingScenario] = TRADING_SCENARIOS) -> list[TradingScenario]:
    """Scenarios matching every criterion that is given."""
    matches = []
    for s in scenarios:
        if market_condition and s.market_condition != market_condition:
            continue
        if time_frame and s.time_frame != time_frame:
            continue
        if asset_class and s.asset_class != asset_class:
            continue
        if difficulty and s.difficulty != difficulty:
            continue
        matches.append(s)
    logger.debug("Filtered scenarios: %d of %d match", len(matches), len(scenarios))
    return matches
