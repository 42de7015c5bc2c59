"""
Command-line front end: load a snapshot and config (or the demo household),
print the planning tables and optionally write them out as CSV.
"""

import argparse
import logging
import os
import sys

import pandas as pd

from checks import validate_inputs
from config import APP_NAME
from exporters import (
    cashflow_frame, export_table, format_age, format_min_income, headline_frame, load_assumptions, load_config,
    load_scenarios, load_snapshot, minimum_income_frame, scenario_cost_frame,
)
from headline import calculate_headline_metrics
from models import default_config, demo_snapshot
from tables import calculate_cashflow_table, calculate_minimum_income_table, calculate_scenario_cost_table

logger = logging.getLogger(__name__)

TABLES = ("headline", "cashflow", "minimum-income", "costs")


def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="fortress", description=APP_NAME)
    p.add_argument("--snapshot", help="Snapshot JSON (default: built-in demo household)")
    p.add_argument("--config", help="Plan config JSON (default: built-in defaults)")
    p.add_argument("--previous", help="Previous snapshot JSON, for the net-worth change")
    p.add_argument("--scenarios", help="Scenario list JSON (default: generated from the config)")
    p.add_argument("--assumptions", help="Assumption set list JSON (default: the satisfiable presets)")
    p.add_argument("--table", choices=TABLES + ("all",), default="all")
    p.add_argument("--csv-dir", help="Also write each table as CSV into this directory")
    p.add_argument("--verbose", "-v", action="store_true")
    return p.parse_args(argv)


def _print(title: str, df: pd.DataFrame, out) -> None:
    print(f"\n== {title} ==", file=out)
    print(df.to_string(), file=out)


def build_tables(snapshot, previous, cfg, which: str, scenarios=None, assumptions=None) -> dict:
    """Name -> display DataFrame for each requested table."""
    wanted = TABLES if which == "all" else (which,)
    frames = {}

    if "headline" in wanted:
        frames["headline"] = headline_frame(calculate_headline_metrics(snapshot, previous, cfg))

    if "cashflow" in wanted:
        df = cashflow_frame(calculate_cashflow_table(snapshot, cfg, scenarios, assumptions))
        for col in df.columns.drop("scenario", errors="ignore"):
            df[col] = df[col].map(format_age)
        frames["cashflow"] = df

    if "minimum-income" in wanted:
        rows = calculate_minimum_income_table(snapshot, cfg)
        df = minimum_income_frame(rows)
        frames["minimum-income"] = df

    if "costs" in wanted:
        frames["costs"] = scenario_cost_frame(calculate_scenario_cost_table(cfg, scenarios, plan_year=snapshot.date.year))

    return frames


def _display_minimum_income(df: pd.DataFrame) -> pd.DataFrame:
    shown = df[["label", "description"]].copy()
    for col in [c for c in df.columns if c.startswith(("partner2_", "paye_")) and not c.endswith("_hits_cap")]:
        shown[col] = [format_min_income(v, cap) for v, cap in zip(df[col], df[col + "_hits_cap"])]
    return shown


def main(argv=None, out=None) -> int:
    args = parse_args(argv)
    out = out or sys.stdout
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        snapshot = load_snapshot(args.snapshot) if args.snapshot else demo_snapshot()
        previous = load_snapshot(args.previous) if args.previous else None
        cfg = load_config(args.config) if args.config else default_config(snapshot.date.year)
        scenarios = load_scenarios(args.scenarios) if args.scenarios else None
        assumptions = load_assumptions(args.assumptions) if args.assumptions else None
        validate_inputs(snapshot, cfg)
    except (OSError, ValueError) as exc:
        logger.error("Could not load inputs: %s", exc)
        return 2

    logger.info("planning from snapshot dated %s", snapshot.date.isoformat())
    frames = build_tables(snapshot, previous, cfg, args.table, scenarios, assumptions)

    for name, df in frames.items():
        shown = _display_minimum_income(df) if name == "minimum-income" else df
        _print(name, shown, out)

        if args.csv_dir:
            os.makedirs(args.csv_dir, exist_ok=True)
            filename, blob = export_table(df, name)
            with open(os.path.join(args.csv_dir, filename), "wb") as f:
                f.write(blob)
            logger.info("wrote %s", filename)

    return 0


if __name__ == "__main__":
    sys.exit(main())
