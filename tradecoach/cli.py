#!/usr/bin/env python3
"""
CLI entry point for the coaching scenario generator.

Usage:
  tradecoach-generate --count 10 --output ./output           # random batch
  tradecoach-generate --count 1 --seed 7 --verbose           # debug single run
  tradecoach-generate --custom --market volatile --emotions fear,revenge
"""

import argparse
import logging
import os
import random
import sys
import time

from tradecoach.config import Settings, configure_logging
from tradecoach.errors import GenerationError, ValidationError
from tradecoach.generator.scenario import ScenarioOrchestrator
from tradecoach.models import ASSET_CLASSES, DIFFICULTIES, MARKET_CONDITIONS, TIME_FRAMES
from tradecoach.outputter import write_decisions_csv, write_run_json, write_summary

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate trading-psychology coaching scenarios."
    )
    parser.add_argument(
        "--count", type=int, default=10,
        help="Number of runs to generate (default: 10)",
    )
    parser.add_argument(
        "--output", type=str, default=settings.output_dir,
        help=f"Output directory (default: {settings.output_dir})",
    )
    parser.add_argument(
        "--seed", type=int, default=settings.seed,
        help="Random seed for reproducibility (default: unseeded)",
    )
    parser.add_argument(
        "--custom", action="store_true",
        help="Generate custom runs from --market/--timeframe/--asset/--difficulty/--emotions",
    )
    parser.add_argument("--market", choices=MARKET_CONDITIONS, default="volatile")
    parser.add_argument("--timeframe", choices=TIME_FRAMES, default="intraday")
    parser.add_argument("--asset", choices=ASSET_CLASSES, default="stocks")
    parser.add_argument("--difficulty", choices=DIFFICULTIES, default="hard")
    parser.add_argument(
        "--emotions", type=str, default="",
        help="Comma-separated emotion types for --custom (e.g. fear,revenge)",
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Print every decision of each run",
    )
    return parser


def main(argv=None) -> int:
    settings = Settings.from_env()
    args = build_parser(settings).parse_args(argv)
    configure_logging("DEBUG" if args.verbose else settings.log_level)

    try:
        _run(args)
    except (GenerationError, ValidationError) as e:
        logger.error("Generation failed: %s", e)
        return 1
    return 0


def _run(args):
    t0 = time.time()
    orchestrator = ScenarioOrchestrator(random.Random(args.seed))
    emotions = [e.strip() for e in args.emotions.split(",") if e.strip()]

    mode = "custom" if args.custom else "random"
    print(f"[1/2] Generating {args.count} {mode} runs (seed={args.seed})...")
    runs_dir = os.path.join(args.output, "runs")
    csv_dir = os.path.join(args.output, "decisions")

    results = []
    for i in range(args.count):
        if args.custom:
            result = orchestrator.generate_custom(
                args.market, args.timeframe, args.asset, args.difficulty, emotions)
        else:
            result = orchestrator.generate_random()
        results.append(result)

        write_run_json(result, os.path.join(runs_dir, f"run_{i + 1:03d}.json"))
        write_decisions_csv(result, os.path.join(csv_dir, f"run_{i + 1:03d}.csv"))

        if args.verbose:
            _print_run(i + 1, result)
        else:
            pct = (i + 1) / args.count * 100
            bar_len = 40
            filled = int(bar_len * (i + 1) / args.count)
            bar = "=" * filled + "-" * (bar_len - filled)
            print(f"\r  [{bar}] {pct:5.1f}% ({i+1}/{args.count})", end="", flush=True)

    if not args.verbose and args.count:
        print()

    print("[2/2] Writing summary...")
    write_summary(results, args.output)

    elapsed = time.time() - t0
    print(f"\nDone! {len(results)} runs in {elapsed:.1f}s")
    print(f"Output: {os.path.abspath(args.output)}")


def _print_run(n, result):
    """Pretty-print one run for --verbose mode."""
    state = result.trader_state
    emo = state.current_emotional_state
    perf = state.performance
    print(f"\n  Run #{n}: {result.scenario.title} [{result.scenario.market_condition}]")
    print(f"    Trader: {result.trader.name} ({result.trader.personality}, "
          f"{result.trader.strategy.name})")
    print(f"    Emotion: {emo.primary} {emo.intensity}/10 | Trigger: {emo.trigger}")
    for d in state.decisions:
        flag = f" <{d.emotional_influence}>" if d.violates_strategy else ""
        side = f" {d.direction}" if d.direction else ""
        print(f"    {d.timestamp:%H:%M} {d.session or '-':<9} {d.action}{side} "
              f"-> {d.outcome}{flag}")
    print(f"    P&L={perf.profit_loss:+.2f}%  trades={perf.total_trades}  "
          f"correct={perf.correct_decisions}  mistakes={perf.emotional_mistakes}")


if __name__ == "__main__":
    sys.exit(main())
