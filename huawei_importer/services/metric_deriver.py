# huawei_importer/services/metric_deriver.py

from __future__ import annotations

from datetime import date
from typing import Iterable, List

from huawei_importer.logging import get_logger
from huawei_importer.models.period import Period
from huawei_importer.models.readings import RawDayRecord
from huawei_importer.models.rows import DerivedRow, Measurement, Source

_log = get_logger("huawei_importer.derive")


def _calendar_day(period: Period, index: int) -> date | None:
    try:
        return date(period.year, period.month, index + 1)
    except (ValueError, OverflowError):
        return None


def derive_day(period: Period, index: int, record: RawDayRecord) -> List[DerivedRow]:
    """Rows for one day of a monthly export.

    Exports are always month-length, so indexes past the end of a short month
    produce nothing. Each formula fires only when its operands are present:

      accumulated_solar_energy = produced
      active_energy_exported   = produced - self_consumed
      active_energy_imported   = consumed - self_consumed
    """
    day = _calendar_day(period, index)
    if day is None:
        _log.debug("%s: day %s does not exist; skipped", period, index + 1)
        return []

    produced = record.produced.as_number()
    consumed = record.consumed.as_number()
    self_used = record.self_consumed.as_number()

    rows: List[DerivedRow] = []
    if produced is not None:
        rows.append(DerivedRow(day, Source.SOLAR_METER, Measurement.ACCUMULATED_SOLAR_ENERGY, produced))
    if produced is not None and self_used is not None:
        rows.append(DerivedRow(day, Source.ENERGY_METER, Measurement.ACTIVE_ENERGY_EXPORTED, produced - self_used))
    if consumed is not None and self_used is not None:
        rows.append(DerivedRow(day, Source.ENERGY_METER, Measurement.ACTIVE_ENERGY_IMPORTED, consumed - self_used))
    return rows


def derive_rows(period: Period, records: Iterable[RawDayRecord]) -> List[DerivedRow]:
    rows: List[DerivedRow] = []
    for index, record in enumerate(records):
        rows.extend(derive_day(period, index, record))
    return rows
