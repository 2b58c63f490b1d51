from dataclasses import asdict
from typing import Iterable, Optional

import pandas as pd

from .rules.tariffs import month_label
from .schemas import MonthlySummary

SUMMARY_COLUMNS = [
    "month",
    "period_start",
    "consumption",
    "from_grid",
    "to_grid",
    "average_autarky",
    "grid_cost_per_kwh",
    "cost_grid",
    "revenue_grid",
    "difference",
    "opportunity_cost",
    "total_days",
]


def summary_row(summary: MonthlySummary, label: Optional[str] = None) -> dict:
    row = asdict(summary)
    if label is None:
        label = month_label(summary.period_start) if summary.period_start else ""
    row["month"] = label
    return row


def summaries_to_frame(summaries: Iterable[MonthlySummary],
                       totals: Optional[MonthlySummary] = None) -> pd.DataFrame:
    """Tabulate monthly summaries, with an optional trailing "Total" row."""
    rows = [summary_row(s) for s in summaries]
    if totals is not None:
        rows.append(summary_row(totals, label="Total"))
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
