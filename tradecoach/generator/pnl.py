"""Fold a decision sequence into realized P&L.

Prices are not simulated. Every entry fills at a fixed reference price and
exits fill at a fixed premium or discount picked by the decision's outcome,
so the fold is a deterministic function of (action, outcome) pairs:
re-folding an already-priced run gives the same numbers.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

from tradecoach.models import TraderDecision

REFERENCE_PRICE = 100.0

ENTRY_SIZES = {
    "buy": 1.0,
    "increase_position": 0.5,
}

# outcome -> fill price
PARTIAL_EXIT_PRICES = {"positive": 102.0, "negative": 98.0}
FULL_EXIT_PRICES = {"positive": 103.0, "negative": 97.0}

PARTIAL_EXIT_FRACTION = 0.5


@dataclass(frozen=True)
class FoldResult:
    decisions: tuple[TraderDecision, ...]
    profit_loss: float
    total_trades: int
    open_position: float = 0.0


def _exit_price(table: dict[str, float], outcome: str) -> float:
    return table["positive"] if outcome == "positive" else table["negative"]


def fold_decisions(decisions: Sequence[TraderDecision]) -> FoldResult:
    """Walk *decisions* in order, pricing entries and exits.

    Returns new decision records with ``entry_price`` / ``exit_price`` /
    ``trade_profit`` attached where a fill happened (cleared elsewhere),
    the cumulative realized P&L and the number of fills.
    """
    position = 0.0
    entry_price = REFERENCE_PRICE
    profit_loss = 0.0
    total_trades = 0
    priced: list[TraderDecision] = []

    for d in decisions:
        if d.action in ENTRY_SIZES:
            size = ENTRY_SIZES[d.action]
            new_position = position + size
            entry_price = (entry_price * position + REFERENCE_PRICE * size) / new_position
            position = new_position
            total_trades += 1
            priced.append(replace(d, entry_price=REFERENCE_PRICE, exit_price=None, trade_profit=None))

        elif d.action == "decrease_position" and position > 0:
            size = position * PARTIAL_EXIT_FRACTION
            exit_price = _exit_price(PARTIAL_EXIT_PRICES, d.outcome)
            profit = (exit_price - entry_price) * size
            profit_loss += profit
            position -= size
            total_trades += 1
            priced.append(replace(d, entry_price=entry_price, exit_price=exit_price,
                                  trade_profit=round(profit, 4)))

        elif d.action in ("exit", "sell") and position > 0:
            exit_price = _exit_price(FULL_EXIT_PRICES, d.outcome)
            profit = (exit_price - entry_price) * position
            profit_loss += profit
            position = 0.0
            total_trades += 1
            priced.append(replace(d, entry_price=entry_price, exit_price=exit_price,
                                  trade_profit=round(profit, 4)))

        else:
            priced.append(replace(d, entry_price=None, exit_price=None, trade_profit=None))

    return FoldResult(
        decisions=tuple(priced),
        profit_loss=profit_loss,
        total_trades=total_trades,
        open_position=position,
    )
