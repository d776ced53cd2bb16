# huawei_importer/services/report_formatter.py

from __future__ import annotations

import json
from typing import Iterable, List, TextIO

from huawei_importer.models.rows import DerivedRow

HEADER = f"{'bucket':<12} {'source':<15} {'measurement':<30} {'value':>10}"
RULE = "-" * 70


def format_row(row: DerivedRow) -> str:
    return (
        f"{row.day.isoformat():<12} {row.source.value:<15} "
        f"{row.measurement.value:<30} {row.value:>10.2f}"
    )


def format_table(rows: Iterable[DerivedRow]) -> List[str]:
    lines = [HEADER, RULE]
    lines.extend(format_row(row) for row in rows)
    return lines


def emit_human(rows: Iterable[DerivedRow], sink: TextIO) -> None:
    for line in format_table(rows):
        print(line, file=sink)


def emit_json(rows: Iterable[DerivedRow], sink: TextIO) -> None:
    payload = [
        {
            "bucket": row.day.isoformat(),
            "source": row.source.value,
            "measurement": row.measurement.value,
            "value": row.value,
        }
        for row in rows
    ]
    print(json.dumps(payload, indent=2), file=sink)
