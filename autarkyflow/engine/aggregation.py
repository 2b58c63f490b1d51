import logging
from datetime import date
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..rules.tariffs import DEFAULT_GRID_COST_PER_KWH, get_grid_cost
from ..schemas import EnergyRecord, MonthlySummary
from .calculations import (
    grid_cost,
    grid_revenue,
    mean,
    opportunity_cost,
    round_half_up,
    wh_to_kwh,
)

logger = logging.getLogger(__name__)


def deduplicate_records(records: Iterable[EnergyRecord]) -> List[EnergyRecord]:
    """Drop undated records and keep the first record seen for each day."""
    seen = set()
    unique = []
    undated = 0
    duplicates = 0
    for record in records:
        if record.timestamp is None:
            undated += 1
            continue
        if record.timestamp in seen:
            duplicates += 1
            continue
        seen.add(record.timestamp)
        unique.append(record)
    if undated:
        logger.warning("Dropped %d records without a parseable date", undated)
    if duplicates:
        logger.warning("Collapsed %d duplicate records", duplicates)
    return unique


def group_by_month(records: Iterable[EnergyRecord]) -> Dict[Tuple[int, int], List[EnergyRecord]]:
    """Deduplicate, sort and bucket records by (year, month).

    Buckets are returned in ascending period order and keep records in
    chronological order, so the first entry of a bucket is its period start.
    """
    # sorted() is stable, equal timestamps keep input order
    ordered = sorted(deduplicate_records(records), key=lambda r: r.timestamp)
    groups: Dict[Tuple[int, int], List[EnergyRecord]] = {}
    for record in ordered:
        groups.setdefault((record.timestamp.year, record.timestamp.month), []).append(record)
    return groups


def summarize_month(month_records: List[EnergyRecord], grid_revenue_per_kwh: float,
                    overrides: Optional[Mapping[str, float]] = None,
                    default_grid_cost_per_kwh: float = DEFAULT_GRID_COST_PER_KWH) -> MonthlySummary:
    period_start = month_records[0].timestamp
    cost_per_kwh = get_grid_cost(overrides, period_start, default_grid_cost_per_kwh)

    # Round the Wh sums once; all money figures derive from the rounded kWh
    consumption = wh_to_kwh(sum(r.consumption for r in month_records))
    from_grid = wh_to_kwh(sum(r.grid_consumption for r in month_records))
    to_grid = wh_to_kwh(sum(r.exported for r in month_records))

    cost = grid_cost(from_grid, cost_per_kwh)
    revenue = grid_revenue(to_grid, grid_revenue_per_kwh)
    return MonthlySummary(
        period_start=period_start,
        consumption=consumption,
        from_grid=from_grid,
        to_grid=to_grid,
        grid_cost_per_kwh=cost_per_kwh,
        cost_grid=cost,
        revenue_grid=revenue,
        difference=revenue - cost,
        opportunity_cost=opportunity_cost(consumption, from_grid, cost_per_kwh),
        average_autarky=mean(r.autarky for r in month_records),
        total_days=len(month_records),
    )


def aggregate_by_month(records: Iterable[EnergyRecord], grid_revenue_per_kwh: float,
                       overrides: Optional[Mapping[str, float]] = None,
                       default_grid_cost_per_kwh: float = DEFAULT_GRID_COST_PER_KWH) -> List[MonthlySummary]:
    """Reduce energy records into monthly summaries, oldest month first.

    Overrides are keyed like ``"2024-Mar"``; months without one use
    ``default_grid_cost_per_kwh``. Neither ``records`` nor ``overrides`` is
    modified.
    """
    groups = group_by_month(records)
    summaries = [
        summarize_month(month_records, grid_revenue_per_kwh, overrides, default_grid_cost_per_kwh)
        for month_records in groups.values()
    ]
    if summaries:
        logger.info("Aggregated %d records into %d months",
                    sum(s.total_days for s in summaries), len(summaries))
    return summaries


def daily_autarky(records: Iterable[EnergyRecord], period_start: date) -> List[Tuple[date, int]]:
    """Per-day autarky percentages for the month containing ``period_start``."""
    groups = group_by_month(records)
    month_records = groups.get((period_start.year, period_start.month), [])
    return [(r.timestamp, round_half_up(r.autarky * 100)) for r in month_records]
