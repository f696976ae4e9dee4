"""
Tabular views and file output for generated runs: a per-run JSON dump,
a decisions CSV and a summary.txt for a batch.
"""

import datetime
import json
import os
from typing import Any, Dict, List, Sequence

import pandas as pd

from tradecoach.models import ScenarioResult, TraderDecision

DECISION_COLUMNS = [
    "timestamp", "session", "action", "direction", "outcome", "violates_strategy",
    "emotional_influence", "entry_price", "exit_price", "trade_profit", "reasoning",
]

MARKER_COLUMNS = ["timestamp", "action", "direction", "side", "price", "outcome"]


# ---------------------------------------------------------------------------
# Frames
# ---------------------------------------------------------------------------

def decisions_frame(decisions: Sequence[TraderDecision]) -> pd.DataFrame:
    """One row per decision, in run order."""
    rows = [
        {
            "timestamp": pd.Timestamp(d.timestamp),
            "session": d.session,
            "action": d.action,
            "direction": d.direction,
            "outcome": d.outcome,
            "violates_strategy": d.violates_strategy,
            "emotional_influence": d.emotional_influence,
            "entry_price": d.entry_price,
            "exit_price": d.exit_price,
            "trade_profit": d.trade_profit,
            "reasoning": d.reasoning,
        }
        for d in decisions
    ]
    return pd.DataFrame(rows, columns=DECISION_COLUMNS)


def trade_markers(decisions: Sequence[TraderDecision]) -> pd.DataFrame:
    """Chart markers: every non-hold decision, oldest first.

    ``side`` is "entry" for buy/increase and "exit" otherwise; ``price`` is
    the fill price on that side (NaN when nothing was filled).
    """
    rows = []
    for d in decisions:
        if d.action == "hold":
            continue
        side = "entry" if d.is_entry else "exit"
        price = d.entry_price if side == "entry" else d.exit_price
        rows.append({
            "timestamp": pd.Timestamp(d.timestamp),
            "action": d.action,
            "direction": d.direction,
            "side": side,
            "price": float("nan") if price is None else price,
            "outcome": d.outcome,
        })
    df = pd.DataFrame(rows, columns=MARKER_COLUMNS)
    return df.sort_values("timestamp", kind="stable").reset_index(drop=True)


def runs_frame(results: Sequence[ScenarioResult]) -> pd.DataFrame:
    """One row per run with its headline numbers."""
    rows = []
    for r in results:
        state = r.trader_state
        rows.append({
            "scenario_id": r.scenario.id,
            "market_condition": r.scenario.market_condition,
            "trader_id": r.trader.id,
            "personality": r.trader.personality,
            "emotion": state.current_emotional_state.primary,
            "intensity": state.current_emotional_state.intensity,
            "decisions": len(state.decisions),
            "emotional_mistakes": state.performance.emotional_mistakes,
            "correct_decisions": state.performance.correct_decisions,
            "total_trades": state.performance.total_trades,
            "profit_loss": state.performance.profit_loss,
        })
    return pd.DataFrame(rows)


# ---------------------------------------------------------------------------
# File writers
# ---------------------------------------------------------------------------

def write_run_json(result: ScenarioResult, filepath: str):
    """Write a full run (scenario, trader, trader state) to JSON."""
    os.makedirs(os.path.dirname(filepath), exist_ok=True)
    with open(filepath, "w") as f:
        json.dump(result.to_dict(), f, indent=2)


def write_decisions_csv(result: ScenarioResult, filepath: str):
    os.makedirs(os.path.dirname(filepath), exist_ok=True)
    df = decisions_frame(result.trader_state.decisions)
    df.to_csv(filepath, index=False)


def write_summary(results: List[ScenarioResult], output_dir: str) -> str:
    """Write summary.txt with quick stats about the generation run."""
    filepath = os.path.join(output_dir, "summary.txt")
    df = runs_frame(results)

    lines = [
        "=== Scenario Generator Summary ===",
        f"Generated: {datetime.datetime.now().isoformat()}",
        f"Runs: {len(results)}",
    ]
    if df.empty:
        lines.append("No runs generated.")
    else:
        lines += [
            f"Total decisions: {int(df['decisions'].sum())}",
            f"Total trades: {int(df['total_trades'].sum())}",
            f"Avg decisions/run: {df['decisions'].mean():.1f}",
            f"Avg emotional mistakes/run: {df['emotional_mistakes'].mean():.1f}",
            "",
            "=== P&L (%) ===",
            f"  Min:    {df['profit_loss'].min():>8.2f}",
            f"  Median: {df['profit_loss'].median():>8.2f}",
            f"  Max:    {df['profit_loss'].max():>8.2f}",
            f"  Mean:   {df['profit_loss'].mean():>8.2f}",
        ]

        breakdowns: Dict[str, Any] = {
            "Emotion": "emotion",
            "Market Condition": "market_condition",
            "Personality": "personality",
        }
        for title, column in breakdowns.items():
            lines.append("")
            lines.append(f"=== {title} Breakdown ===")
            for value, count in df[column].value_counts().items():
                lines.append(f"  {value}: {count} runs")

    os.makedirs(output_dir, exist_ok=True)
    with open(filepath, "w") as f:
        f.write("\n".join(lines) + "\n")

    return filepath
