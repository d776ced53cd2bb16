# huawei_importer/models/readings.py
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Union

PLACEHOLDER = "--"

_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


@dataclass(frozen=True)
class Measured:
    value: float

    @property
    def is_absent(self) -> bool:
        return False

    def as_number(self) -> float | None:
        return self.value


@dataclass(frozen=True)
class Absent:
    @property
    def is_absent(self) -> bool:
        return True

    def as_number(self) -> float | None:
        return None


PowerValue = Union[Measured, Absent]


def parse_token(token: str) -> PowerValue:
    """Decode one export cell.

    The placeholder ``"--"`` means no measurement for that day. Anything else
    must be a plain decimal number; ``ValueError`` otherwise.
    """
    if token == PLACEHOLDER:
        return Absent()
    if not _DECIMAL_RE.match(token):
        raise ValueError(f"not a decimal number: {token!r}")
    value = float(token)
    if not math.isfinite(value):
        raise ValueError(f"value out of range: {token!r}")
    return Measured(value)


@dataclass(frozen=True)
class RawDayRecord:
    produced: PowerValue
    consumed: PowerValue
    self_consumed: PowerValue
