# huawei_importer/services/pipeline.py

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from huawei_importer.errors import DataDirectoryError, SourceFileError
from huawei_importer.models.period import Period
from huawei_importer.models.rows import DerivedRow
from huawei_importer.services.filename_resolver import try_period
from huawei_importer.services.metric_deriver import derive_rows
from huawei_importer.services.record_parser import read_records


@dataclass
class FileOutcome:
    path: Path
    period: Period | None = None
    rows: List[DerivedRow] = field(default_factory=list)
    error: SourceFileError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def as_dict(self) -> dict:
        return {
            "file": self.path.name,
            "period": str(self.period) if self.period else None,
            "rows": len(self.rows),
            "error": self.error.reason if self.error else None,
        }


@dataclass
class ImportResult:
    data_dir: Path
    outcomes: List[FileOutcome] = field(default_factory=list)

    @property
    def failures(self) -> List[FileOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def rows(self) -> List[DerivedRow]:
        rows: List[DerivedRow] = []
        for outcome in self.outcomes:
            rows.extend(outcome.rows)
        return rows

    @property
    def total_rows(self) -> int:
        return sum(len(o.rows) for o in self.outcomes)


class PipelineDriver:
    """Find the monthly exports in a directory and turn them into rows."""

    def __init__(self, data_dir: Path | str, log):
        self.data_dir = Path(data_dir)
        self.log = log

    def discover(self) -> List[Path]:
        if not self.data_dir.is_dir():
            raise DataDirectoryError(f"Data directory not found: {self.data_dir}")
        candidates = [
            p for p in self.data_dir.glob("*.json")
            if p.is_file() and try_period(p) is not None
        ]
        return sorted(candidates, key=lambda p: p.name)

    def process_file(self, path: Path) -> FileOutcome:
        try:
            period, records = read_records(path)
        except SourceFileError as exc:
            return FileOutcome(path=path, error=exc)
        return FileOutcome(path=path, period=period, rows=derive_rows(period, records))

    def run(self) -> ImportResult:
        result = ImportResult(data_dir=self.data_dir)
        files = self.discover()
        if not files:
            self.log.warning("No YYYY.MM.json file found in %s", self.data_dir)
            return result

        self.log.info("Found %s JSON file(s) to process", len(files))
        for path in files:
            outcome = self.process_file(path)
            if outcome.ok:
                self.log.info("  %s: %s row(s) extracted", path.name, len(outcome.rows))
            else:
                self.log.error("  %s: ERROR - %s", path.name, outcome.error.reason)
            result.outcomes.append(outcome)

        self.log.info(
            "Total: %s row(s) from %s file(s), %s failed",
            result.total_rows,
            len(result.outcomes),
            len(result.failures),
        )
        return result
