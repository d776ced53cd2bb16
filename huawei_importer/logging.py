from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Iterable, TextIO


ROOT_LOGGER = "huawei_importer"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class ConsoleLog:
    """Configure console logging for the importer.

    Progress goes to stderr; stdout is kept for the dry-run report.
    """

    def __init__(
        self,
        level: str = "INFO",
        quiet: bool = False,
        debug_modules: Iterable[str] | None = None,
        stream: TextIO | None = None,
    ):
        self.level = level.upper()
        self.quiet = quiet
        self.debug_modules = list(debug_modules or [])
        self.stream = stream

    def setup(self) -> logging.Logger:
        # Only the importer's own namespace is configured; psycopg2 and any
        # embedding application keep their root logging untouched.
        log = logging.getLogger(ROOT_LOGGER)
        for handler in list(log.handlers):
            log.removeHandler(handler)
        log.setLevel(logging.DEBUG)
        log.propagate = False

        if self.quiet:
            log.addHandler(logging.NullHandler())
        else:
            handler = logging.StreamHandler(self.stream or sys.stderr)
            handler.setLevel(getattr(logging, self.level, logging.INFO))
            handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
            log.addHandler(handler)

        for name in self.debug_modules:
            if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
                logging.getLogger(name).setLevel(logging.DEBUG)

        return log


@dataclass
class ImportLogEntry:
    timestamp: str
    data_dir: str
    dry_run: bool
    files: list[dict]
    failures: int
    total_rows: int
    submitted: int | None


class StructuredLog:
    """One JSON line per import run, for auditing what was loaded when."""

    def __init__(self, path: str | None, enabled: bool = False):
        self.enabled = enabled and bool(path)
        self.path = Path(path).expanduser() if path else None
        if self.enabled and self.path:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                logging.getLogger(__name__).warning("Structured log disabled: %s", exc)
                self.enabled = False

    def write(self, entry: ImportLogEntry) -> None:
        if not self.enabled or not self.path:
            return
        try:
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(json.dumps(asdict(entry), default=str) + "\n")
        except OSError as exc:  # pragma: no cover - best-effort logging
            logging.getLogger(__name__).warning("Structured log write skipped: %s", exc)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
