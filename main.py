#!/usr/bin/env python3
"""
Portfolio Dashboard — Runner
============================
Seed holdings
  → Agent 1 (simulated batch price refresh)
  → Agent 2 (P/E + earnings refresh, with --financials)
  → Agent 3 (sector + portfolio metrics)
  → terminal dashboard

Usage:
  python3 main.py                        # one refresh, then exit
  python3 main.py --cycles 0             # refresh every 15s until Ctrl-C
  python3 main.py --cycles 3 --interval 5
  python3 main.py --expand Technology --expand Power
  python3 main.py --seed 42 --json       # reproducible prices, JSON output
  python3 main.py --failure-rate 0.2     # exercise the stale-price path
"""
import argparse
import asyncio
import random

from config import Settings, load_settings
from logging_config import get_logger, setup_logging
from mock_data import SEED_HOLDINGS
from orchestrator import RefreshOrchestrator
from report.dashboard import render
from tools.market_feed import MarketFeed

logger = get_logger(__name__)


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Portfolio Dashboard")
    parser.add_argument("--cycles",       type=int, default=1,
                        help="Refresh cycles to run (0 = keep refreshing until interrupted)")
    parser.add_argument("--interval",     type=float, default=None,
                        help="Seconds between refreshes (default: PORTFOLIO_REFRESH_INTERVAL or 15)")
    parser.add_argument("--financials",   action="store_true", default=None,
                        help="Also refresh P/E ratio and latest earnings")
    parser.add_argument("--failure-rate", type=float, default=None,
                        help="Chance that a simulated lookup fails (0..1)")
    parser.add_argument("--seed",         type=int, default=None,
                        help="Seed the simulated market for reproducible output")
    parser.add_argument("--expand",       action="append", default=[], metavar="SECTOR",
                        help="Show the holdings table for a sector (repeatable)")
    parser.add_argument("--expand-all",   action="store_true",
                        help="Expand every sector")
    parser.add_argument("--json",         action="store_true",
                        help="Print the portfolio aggregate as JSON instead of the dashboard")
    parser.add_argument("--log-level",    default=None)
    return parser.parse_args(argv)


def _printer(args: argparse.Namespace):
    def show(orchestrator: RefreshOrchestrator) -> None:
        portfolio = orchestrator.portfolio
        if args.json:
            print(portfolio.model_dump_json(indent=2), flush=True)
            return
        expanded = [s.sector for s in portfolio.sectors] if args.expand_all else args.expand
        print(render(
            portfolio,
            orchestrator.last_updated,
            error=orchestrator.error,
            expanded=expanded,
            data_warnings=orchestrator.data_warnings,
        ), flush=True)
        print()
    return show


async def _run(args: argparse.Namespace, settings: Settings) -> None:
    rng = random.Random(args.seed) if args.seed is not None else None
    feed = MarketFeed.from_settings(settings, rng=rng)
    show = _printer(args)

    orchestrator = RefreshOrchestrator(
        SEED_HOLDINGS,
        feed,
        refresh_financials=settings.refresh_financials,
        on_update=show,
    )

    if args.cycles <= 0:
        show(orchestrator)
        orchestrator.start(settings.refresh_interval)
        try:
            await asyncio.Event().wait()
        finally:
            await orchestrator.stop()
        return

    for i in range(args.cycles):
        if i > 0:
            await asyncio.sleep(settings.refresh_interval)
        await orchestrator.refresh()


def main(argv=None):
    args = _parse_args(argv)
    settings = load_settings(
        refresh_interval=args.interval,
        refresh_financials=args.financials,
        failure_rate=args.failure_rate,
        log_level=args.log_level,
    )
    setup_logging(level=settings.log_level)

    logger.info(
        "Starting portfolio dashboard",
        extra={'holdings': len(SEED_HOLDINGS), 'cycles': args.cycles,
               'interval_s': settings.refresh_interval},
    )
    try:
        asyncio.run(_run(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")


if __name__ == "__main__":
    main()
