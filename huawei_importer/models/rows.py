# huawei_importer/models/rows.py
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from enum import Enum


class Source(str, Enum):
    SOLAR_METER = "solar_meter"
    ENERGY_METER = "energy_meter"


class Measurement(str, Enum):
    ACCUMULATED_SOLAR_ENERGY = "accumulated_solar_energy"
    ACTIVE_ENERGY_EXPORTED = "active_energy_exported"
    ACTIVE_ENERGY_IMPORTED = "active_energy_imported"


@dataclass(frozen=True)
class DerivedRow:
    day: date
    source: Source
    measurement: Measurement
    value: float

    @property
    def bucket(self) -> datetime:
        """UTC midnight of ``day``; the time column of the destination table."""
        return datetime.combine(self.day, time(0, 0), tzinfo=timezone.utc)

    def describe(self) -> str:
        return f"{self.day.isoformat()} {self.source.value} {self.measurement.value} {self.value}"
