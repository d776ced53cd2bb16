# huawei_importer/services/batch_loader.py

from __future__ import annotations

import sys
from typing import Sequence, TextIO

from huawei_importer.models.rows import DerivedRow
from huawei_importer.services.report_formatter import emit_human, emit_json
from huawei_importer.services.timeseries_store import TimeseriesStore


class BatchLoader:
    """Final stage: either print the rows or load them in one transaction."""

    def __init__(self, log):
        self.log = log

    def report(self, rows: Sequence[DerivedRow], sink: TextIO | None = None, *, fmt: str = "table") -> None:
        sink = sink or sys.stdout
        self.log.info("Dry run: %s row(s) would be inserted", len(rows))
        if fmt == "json":
            emit_json(rows, sink)
        elif fmt == "table":
            emit_human(rows, sink)
        else:
            raise ValueError(f"Unsupported report format: {fmt}")

    def persist(self, rows: Sequence[DerivedRow], store: TimeseriesStore) -> int:
        if not rows:
            self.log.info("Nothing to insert")
            return 0
        self.log.info("Inserting %s row(s) into %s", len(rows), store.table)
        submitted = store.insert_rows(rows)
        self.log.info("%s row(s) submitted (existing rows skipped by the database)", submitted)
        return submitted
