from datetime import date

import pytest

from autarkyflow.engine.aggregation import aggregate_by_month
from autarkyflow.engine.totals import reduce_totals
from autarkyflow.errors import EmptyInputError
from autarkyflow.schemas import MonthlySummary
from conftest import make_record


def summary(days, autarky, rate=0.28, consumption=0, from_grid=0, to_grid=0, cost=0.0, revenue=0.0):
    return MonthlySummary(
        period_start=date(2024, 1, 1),
        consumption=consumption,
        from_grid=from_grid,
        to_grid=to_grid,
        grid_cost_per_kwh=rate,
        cost_grid=cost,
        revenue_grid=revenue,
        difference=revenue - cost,
        opportunity_cost=(consumption - from_grid) * rate,
        average_autarky=autarky,
        total_days=days,
    )


def test_autarky_is_weighted_by_days():
    totals = reduce_totals([summary(10, 0.5), summary(30, 0.9)])
    assert totals.average_autarky == pytest.approx(0.8)
    assert totals.total_days == 40


def test_cost_rate_is_unweighted_mean():
    totals = reduce_totals([summary(1, 1.0, rate=0.2), summary(30, 1.0, rate=0.4)])
    assert totals.grid_cost_per_kwh == pytest.approx(0.3)


def test_energy_and_money_are_summed():
    months = [
        summary(31, 0.6, consumption=300, from_grid=120, to_grid=40, cost=33.6, revenue=3.28),
        summary(29, 0.7, rate=0.3, consumption=250, from_grid=75, to_grid=90, cost=22.5, revenue=7.38),
    ]
    totals = reduce_totals(months)
    assert (totals.consumption, totals.from_grid, totals.to_grid) == (550, 195, 130)
    assert totals.cost_grid == pytest.approx(56.1)
    assert totals.revenue_grid == pytest.approx(10.66)
    assert totals.difference == pytest.approx(10.66 - 56.1)
    assert totals.opportunity_cost == pytest.approx(180 * 0.28 + 175 * 0.3)
    assert totals.period_start is None


def test_inputs_are_left_untouched():
    months = [summary(10, 0.5), summary(30, 0.9)]
    snapshot = list(months)
    reduce_totals(months)
    assert months == snapshot


def test_empty_input_gives_zeroed_summary():
    totals = reduce_totals([])
    assert totals.total_days == 0
    assert totals.grid_cost_per_kwh == 0
    assert totals.average_autarky == 0
    assert totals.consumption == 0
    assert totals.cost_grid == 0


def test_strict_mode_rejects_empty_input():
    with pytest.raises(EmptyInputError):
        reduce_totals([], strict=True)
    assert reduce_totals([summary(1, 1.0)], strict=True).total_days == 1


def test_totals_over_aggregated_months():
    records = [make_record(f"{day:02d}.01.2024", consumption=1000) for day in range(1, 11)]
    records += [make_record(f"{day:02d}.02.2024", consumption=1000, grid=500) for day in range(1, 29)]
    months = aggregate_by_month(records, 0.082, {"2024-Feb": 0.32})
    totals = reduce_totals(months)
    assert totals.total_days == len(records)
    assert totals.average_autarky == pytest.approx((10 * 1.0 + 28 * 0.5) / 38)
    assert totals.grid_cost_per_kwh == pytest.approx((0.28 + 0.32) / 2)
