# Field-record mapping and CSV decoding for SolarEdge-style energy exports

import logging
import os
from typing import Iterable, List

import pandas as pd

from .engine.aggregation import deduplicate_records
from .engine.calculations import DATE_FORMAT, autarky_ratio, parse_date, parse_float
from .errors import IngestError
from .schemas import ENERGY_COLUMNS, TIME_COLUMN, EnergyRecord, RawFieldRecord

logger = logging.getLogger(__name__)


def map_record(raw: RawFieldRecord, date_format: str = DATE_FORMAT) -> EnergyRecord:
    """Normalize one decoded row into an EnergyRecord.

    Never raises: unparseable or negative magnitudes become 0 and an
    unparseable date leaves ``timestamp`` as None so the aggregator can drop
    the record.
    """
    values = {}
    for field, column in ENERGY_COLUMNS.items():
        value = parse_float(raw.get(column))
        if value is None:
            if raw.get(column) not in (None, ""):
                logger.debug("Unparseable %s value %r, using 0", column, raw.get(column))
            value = 0.0
        elif value < 0:
            logger.debug("Negative %s value %r, using 0", column, raw.get(column))
            value = 0.0
        values[field] = value

    timestamp = parse_date(raw.get(TIME_COLUMN), date_format)
    if timestamp is None:
        logger.debug("Unparseable %s value %r", TIME_COLUMN, raw.get(TIME_COLUMN))

    return EnergyRecord(
        timestamp=timestamp,
        autarky=autarky_ratio(values["consumption"], values["grid_consumption"]),
        **values,
    )


def map_records(rows: Iterable[RawFieldRecord], date_format: str = DATE_FORMAT) -> List[EnergyRecord]:
    return [map_record(row, date_format) for row in rows]


def read_energy_csv(source) -> List[dict]:
    """Decode one CSV export (path or file-like) into raw string rows."""
    name = os.path.basename(source) if isinstance(source, (str, os.PathLike)) else getattr(source, "name", "<buffer>")
    try:
        df = pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
        )
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise IngestError(f"Error parsing file {name}: {e}") from e
    rows = df.to_dict(orient="records")
    logger.info("Decoded %d rows from %s", len(rows), name)
    return rows


def read_energy_csvs(sources: Iterable) -> List[dict]:
    # Files are decoded independently and concatenated in the order given
    rows = []
    for source in sources:
        rows.extend(read_energy_csv(source))
    return rows


def load_records(sources: Iterable, date_format: str = DATE_FORMAT) -> List[EnergyRecord]:
    return map_records(read_energy_csvs(sources), date_format)


def merge_records(existing: Iterable[EnergyRecord], new: Iterable[EnergyRecord]) -> List[EnergyRecord]:
    """Append a new upload to the loaded records; the first reading per day wins."""
    return deduplicate_records([*existing, *new])
