from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional

# One decoded CSV row: column header -> raw cell text
RawFieldRecord = Mapping[str, str]

TIME_COLUMN = "Time"
GRID_CONSUMPTION_COLUMN = "Bezug (Wh)"
SELF_CONSUMPTION_COLUMN = "Energie - Eigenverbrauch (Wh)"
EXPORTED_COLUMN = "Exportieren (Wh)"
PRODUCTION_COLUMN = "Produktion (Wh)"
SOLAR_SELF_CONSUMPTION_COLUMN = "SolarSelfConsumption.Energy (Wh)"
CONSUMPTION_COLUMN = "Verbrauch (Wh)"
BATTERY_DISCHARGE_COLUMN = "Von der Batterie (Wh)"

# EnergyRecord field -> source column
ENERGY_COLUMNS = {
    "grid_consumption": GRID_CONSUMPTION_COLUMN,
    "self_consumption": SELF_CONSUMPTION_COLUMN,
    "exported": EXPORTED_COLUMN,
    "production": PRODUCTION_COLUMN,
    "solar_self_consumption": SOLAR_SELF_CONSUMPTION_COLUMN,
    "consumption": CONSUMPTION_COLUMN,
    "battery_discharge": BATTERY_DISCHARGE_COLUMN,
}


@dataclass(frozen=True)
class EnergyRecord:
    timestamp: Optional[date]  # None when the source date could not be parsed
    grid_consumption: float  # Wh
    self_consumption: float  # Wh
    exported: float  # Wh
    production: float  # Wh
    solar_self_consumption: float  # Wh
    consumption: float  # Wh
    battery_discharge: float  # Wh
    autarky: float  # fraction, may be negative on anomalous data


@dataclass(frozen=True)
class MonthlySummary:
    period_start: Optional[date]  # first record of the bucket; None for empty totals
    consumption: int  # kWh
    from_grid: int  # kWh
    to_grid: int  # kWh
    grid_cost_per_kwh: float
    cost_grid: float
    revenue_grid: float
    difference: float
    opportunity_cost: float
    average_autarky: float  # fraction
    total_days: int  # records folded in, not calendar days
