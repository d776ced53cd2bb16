# huawei_importer/services/record_parser.py

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Tuple

from huawei_importer.errors import InvalidPayload, UnreadableFile
from huawei_importer.models.period import Period
from huawei_importer.models.readings import PowerValue, RawDayRecord, parse_token
from huawei_importer.services.filename_resolver import period_for_path

PRODUCED_FIELD = "productPower"
CONSUMED_FIELD = "usePower"
SELF_CONSUMED_FIELD = "selfUsePower"


def _series(data: dict, field: str, path: Path | str) -> List[str]:
    if field not in data:
        raise InvalidPayload(path, f"missing data.{field}")
    values = data[field]
    if not isinstance(values, list):
        raise InvalidPayload(path, f"data.{field} is {type(values).__name__}, expected array")
    for idx, entry in enumerate(values):
        if not isinstance(entry, str):
            raise InvalidPayload(
                path,
                f"data.{field}[{idx}] is {type(entry).__name__}, expected string",
            )
    return values


def _value(token: str, field: str, idx: int, path: Path | str) -> PowerValue:
    try:
        return parse_token(token)
    except ValueError as exc:
        raise InvalidPayload(path, f"data.{field}[{idx}]: {exc}") from exc


def parse_payload(content: str | bytes, path: Path | str) -> List[RawDayRecord]:
    """Decode one FusionSolar monthly export into per-day records.

    Only the positions covered by all three series are returned; surplus
    entries in the longer arrays are ignored. Any bad entry rejects the whole
    file so a month is never half imported.
    """
    try:
        doc: Any = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise InvalidPayload(path, f"invalid JSON: {exc}") from exc

    if not isinstance(doc, dict) or "data" not in doc:
        raise InvalidPayload(path, "missing top-level 'data' object")
    data = doc["data"]
    if not isinstance(data, dict):
        raise InvalidPayload(path, f"'data' is {type(data).__name__}, expected object")

    produced = _series(data, PRODUCED_FIELD, path)
    consumed = _series(data, CONSUMED_FIELD, path)
    self_consumed = _series(data, SELF_CONSUMED_FIELD, path)

    length = min(len(produced), len(consumed), len(self_consumed))
    records = []
    for idx in range(length):
        records.append(
            RawDayRecord(
                produced=_value(produced[idx], PRODUCED_FIELD, idx, path),
                consumed=_value(consumed[idx], CONSUMED_FIELD, idx, path),
                self_consumed=_value(self_consumed[idx], SELF_CONSUMED_FIELD, idx, path),
            )
        )
    return records


def read_records(path: Path | str) -> Tuple[Period, List[RawDayRecord]]:
    path = Path(path)
    period = period_for_path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise UnreadableFile(path, f"cannot read file: {exc}") from exc
    return period, parse_payload(content, path)
