# Tariff rules: default rates and per-month grid cost overrides

import logging
import re
from datetime import date
from typing import Mapping, Optional

from ..engine.calculations import parse_float

logger = logging.getLogger(__name__)

DEFAULT_GRID_COST_PER_KWH = 0.28  # EUR/kWh bought from the grid
DEFAULT_GRID_REVENUE_PER_KWH = 0.082  # EUR/kWh fed into the grid

# Fixed English abbreviations so keys do not depend on the process locale
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_MONTH_KEY = re.compile(r"\d{4}-(" + "|".join(MONTH_ABBREVIATIONS) + r")")


def month_label(day: date) -> str:
    return MONTH_ABBREVIATIONS[day.month - 1]


def month_key(day: date) -> str:
    """Override map key for the month containing ``day``, e.g. ``"2024-Mar"``."""
    return f"{day.year:04d}-{month_label(day)}"


def is_month_key(key: str) -> bool:
    return bool(key) and _MONTH_KEY.fullmatch(key) is not None


def get_grid_cost(overrides: Optional[Mapping[str, float]], day: date,
                  default: float = DEFAULT_GRID_COST_PER_KWH) -> float:
    if not overrides:
        return default
    key = month_key(day)
    if key in overrides:
        return overrides[key]
    return default


def apply_override(overrides: Optional[Mapping[str, float]], key: str, new_rate) -> dict:
    """Return a copy of ``overrides`` with ``key`` set to ``new_rate``.

    ``new_rate`` may be a number or the text typed by a user. Keys that do
    not look like ``"2024-Mar"`` and rates that do not parse leave the copy
    unchanged.
    """
    updated = dict(overrides or {})
    if not is_month_key(key):
        logger.warning("Ignoring grid cost override for %r, expected a key like 2024-Mar", key)
        return updated
    rate = parse_float(new_rate)
    if rate is None:
        logger.warning("Ignoring grid cost override %r for %s", new_rate, key)
        return updated
    updated[key] = rate
    return updated
