import argparse
import logging
import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from autarkyflow.config import load_settings
from autarkyflow.engine.aggregation import aggregate_by_month
from autarkyflow.engine.calculations import round_half_up
from autarkyflow.engine.totals import reduce_totals
from autarkyflow.errors import IngestError
from autarkyflow.ingest import load_records, merge_records
from autarkyflow.report import summaries_to_frame
from autarkyflow.rules.tariffs import apply_override


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Monthly autarky and grid cost report for SolarEdge CSV exports")
    parser.add_argument("files", nargs="+", help="CSV export(s) with daily readings")
    parser.add_argument("--revenue", type=float, default=None, help="Feed-in revenue per kWh")
    parser.add_argument("--override", action="append", default=[], metavar="YYYY-Mon=RATE",
                        help="Grid cost per kWh for one month, e.g. 2024-Mar=0.31")
    return parser.parse_args(argv)


def main(argv=None):
    settings = load_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)

    try:
        records = merge_records([], load_records(args.files, settings.date_format))
    except IngestError as e:
        print(e)
        return 1

    overrides = {}
    for item in args.override:
        key, _, rate = item.partition("=")
        overrides = apply_override(overrides, key.strip(), rate)

    revenue = args.revenue if args.revenue is not None else settings.grid_revenue_per_kwh
    summaries = aggregate_by_month(records, revenue, overrides, settings.default_grid_cost_per_kwh)
    totals = reduce_totals(summaries)

    if not summaries:
        print("No readings with a valid date found.")
        return 0

    frame = summaries_to_frame(summaries, totals).drop(columns=["period_start"])
    frame["average_autarky"] = frame["average_autarky"].map(lambda v: f"{round_half_up(v * 100)}%")
    print(frame.to_string(index=False, float_format=lambda v: f"{v:.2f}"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
