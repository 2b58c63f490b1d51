import pytest

from autarkyflow.ingest import map_record
from autarkyflow.schemas import (
    BATTERY_DISCHARGE_COLUMN,
    CONSUMPTION_COLUMN,
    EXPORTED_COLUMN,
    GRID_CONSUMPTION_COLUMN,
    PRODUCTION_COLUMN,
    SELF_CONSUMPTION_COLUMN,
    SOLAR_SELF_CONSUMPTION_COLUMN,
    TIME_COLUMN,
)


def make_row(time, consumption="0", grid="0", exported="0", production="0",
             self_consumption="0", solar_self="0", battery="0"):
    """Build a decoded CSV row the way the SolarEdge export names its columns."""
    return {
        TIME_COLUMN: time,
        GRID_CONSUMPTION_COLUMN: str(grid),
        SELF_CONSUMPTION_COLUMN: str(self_consumption),
        EXPORTED_COLUMN: str(exported),
        PRODUCTION_COLUMN: str(production),
        SOLAR_SELF_CONSUMPTION_COLUMN: str(solar_self),
        CONSUMPTION_COLUMN: str(consumption),
        BATTERY_DISCHARGE_COLUMN: str(battery),
    }


def make_record(time, **kwargs):
    return map_record(make_row(time, **kwargs))


@pytest.fixture
def january_records():
    return [
        make_record("01.01.2024", consumption=1000),
        make_record("02.01.2024", consumption=2000),
        make_record("03.01.2024", consumption=3000),
    ]
