from typing import Iterable

from ..errors import EmptyInputError
from ..schemas import MonthlySummary


def reduce_totals(summaries: Iterable[MonthlySummary], strict: bool = False) -> MonthlySummary:
    """Fold monthly summaries into one all-time total.

    Energy and money figures are plain sums. ``average_autarky`` is weighted
    by each month's ``total_days``; ``grid_cost_per_kwh`` is the unweighted
    mean of the monthly rates (shown as an average, not billed).

    The total spans every month so ``period_start`` is None. An empty input
    yields a zeroed summary unless ``strict`` is set, in which
    case EmptyInputError is raised.
    """
    summaries = list(summaries)
    if not summaries and strict:
        raise EmptyInputError("Cannot compute totals without monthly summaries")

    consumption = from_grid = to_grid = total_days = 0
    cost_rates = cost_grid = revenue_grid = difference = opportunity_cost = 0.0
    weighted_autarky = 0.0
    for s in summaries:
        consumption += s.consumption
        from_grid += s.from_grid
        to_grid += s.to_grid
        cost_rates += s.grid_cost_per_kwh
        cost_grid += s.cost_grid
        revenue_grid += s.revenue_grid
        difference += s.difference
        opportunity_cost += s.opportunity_cost
        weighted_autarky += s.average_autarky * s.total_days
        total_days += s.total_days

    return MonthlySummary(
        period_start=None,
        consumption=consumption,
        from_grid=from_grid,
        to_grid=to_grid,
        grid_cost_per_kwh=cost_rates / len(summaries) if summaries else 0.0,
        cost_grid=cost_grid,
        revenue_grid=revenue_grid,
        difference=difference,
        opportunity_cost=opportunity_cost,
        average_autarky=weighted_autarky / total_days if total_days else 0.0,
        total_days=total_days,
    )
