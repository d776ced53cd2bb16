# huawei_importer/services/filename_resolver.py
from __future__ import annotations

import re
from pathlib import Path

from huawei_importer.errors import InvalidFilename
from huawei_importer.models.period import Period

_YEAR_RE = re.compile(r"^[+-]?\d+$")
_MONTH_RE = re.compile(r"^\+?\d+$")


def resolve_period(stem: str) -> Period:
    """Turn an export base name such as ``2023.7`` into a Period."""
    parts = stem.split(".")
    if len(parts) != 2:
        raise InvalidFilename(stem, f"expected <year>.<month>, got {len(parts)} part(s)")

    year_raw, month_raw = parts
    if not _YEAR_RE.match(year_raw):
        raise InvalidFilename(stem, f"year {year_raw!r} is not an integer")
    if not _MONTH_RE.match(month_raw):
        raise InvalidFilename(stem, f"month {month_raw!r} is not an integer")

    month = int(month_raw)
    if not 1 <= month <= 12:
        raise InvalidFilename(stem, f"month {month} outside 1..12")
    return Period(year=int(year_raw), month=month)


def period_for_path(path: Path | str) -> Period:
    return resolve_period(Path(path).stem)


def try_period(path: Path | str) -> Period | None:
    # Discovery filter: export directories routinely hold unrelated JSON.
    try:
        return period_for_path(path)
    except InvalidFilename:
        return None
