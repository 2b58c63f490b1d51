import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .engine.calculations import DATE_FORMAT, parse_float
from .rules.tariffs import DEFAULT_GRID_COST_PER_KWH, DEFAULT_GRID_REVENUE_PER_KWH

load_dotenv()

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    grid_revenue_per_kwh: float = DEFAULT_GRID_REVENUE_PER_KWH
    default_grid_cost_per_kwh: float = DEFAULT_GRID_COST_PER_KWH
    date_format: str = DATE_FORMAT
    log_level: str = "INFO"


def _env_rate(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = parse_float(raw)
    if value is None:
        logger.warning("Invalid value %r for %s, using %s", raw, name, default)
        return default
    return value


def load_settings() -> Settings:
    return Settings(
        grid_revenue_per_kwh=_env_rate("AUTARKYFLOW_GRID_REVENUE_PER_KWH", DEFAULT_GRID_REVENUE_PER_KWH),
        default_grid_cost_per_kwh=_env_rate("AUTARKYFLOW_DEFAULT_GRID_COST_PER_KWH", DEFAULT_GRID_COST_PER_KWH),
        date_format=os.getenv("AUTARKYFLOW_DATE_FORMAT") or DATE_FORMAT,
        log_level=(os.getenv("AUTARKYFLOW_LOG_LEVEL") or "INFO").upper(),
    )
