import math
import re
from datetime import date, datetime
from typing import Optional

DATE_FORMAT = "%d.%m.%Y"
WH_PER_KWH = 1000.0

# Leading number of a cell: "12.5 Wh" -> 12.5, "1234,5" -> 1234
_NUMBER_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_float(value) -> Optional[float]:
    """Lenient numeric parse for a raw CSV cell.

    Reads the leading number of the cell and ignores whatever follows it.
    Returns None for missing, blank, non-numeric or non-finite input so the
    caller can decide on the substitute value.
    """
    if value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _NUMBER_PREFIX.match(str(value))
        if match is None:
            return None
        number = float(match.group(1))
    if not math.isfinite(number):
        return None
    return number


def parse_date(value, fmt: str = DATE_FORMAT) -> Optional[date]:
    """Parse a day.month.year cell; a trailing time-of-day part is ignored."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parts = str(value).split()
    if not parts:
        return None
    try:
        return datetime.strptime(parts[0], fmt).date()
    except ValueError:
        return None


def autarky_ratio(consumption_wh: float, grid_consumption_wh: float) -> float:
    # No demand counts as fully self-sufficient; negative ratios are kept as-is
    if consumption_wh != 0:
        return (consumption_wh - grid_consumption_wh) / consumption_wh
    return 1.0


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def wh_to_kwh(total_wh: float) -> int:
    """Convert a summed Wh total to whole kWh, rounding once."""
    return round_half_up(total_wh / WH_PER_KWH)


def grid_cost(from_grid_kwh: float, cost_per_kwh: float) -> float:
    return from_grid_kwh * cost_per_kwh


def grid_revenue(to_grid_kwh: float, revenue_per_kwh: float) -> float:
    return to_grid_kwh * revenue_per_kwh


def opportunity_cost(consumption_kwh: float, from_grid_kwh: float, cost_per_kwh: float) -> float:
    # Value of the self-supplied share at the grid rate
    return (consumption_kwh - from_grid_kwh) * cost_per_kwh


def mean(values) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)
