# huawei_importer/main.py

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Mapping, Sequence, TextIO

from .cli import build_parser
from .config import AppConfig, Config, validate_table_name
from .errors import ConfigurationError, DataDirectoryError, StoreError
from .logging import ConsoleLog, ImportLogEntry, StructuredLog

from .services.batch_loader import BatchLoader
from .services.pipeline import ImportResult, PipelineDriver
from .services.timeseries_store import TimeseriesStore

EXIT_OK = 0
EXIT_FATAL = 1


@dataclass
class ImportSettings:
    data_dir: str
    dry_run: bool
    db_url: str | None
    table: str
    report_format: str = "table"


def resolve_settings(args, app_cfg: AppConfig, environ: Mapping[str, str]) -> ImportSettings:
    """Merge CLI flags, environment and config file, in that order of precedence."""
    db_url = args.db_url or environ.get("DATABASE_URL") or app_cfg.database.url
    table = validate_table_name(args.table) if args.table else app_cfg.database.table
    dry_run = args.dry_run or app_cfg.importer.dry_run
    if not dry_run and not db_url:
        raise ConfigurationError("--db-url is required (unless --dry-run is given)")
    return ImportSettings(
        data_dir=args.data_dir or app_cfg.importer.data_dir,
        dry_run=dry_run,
        db_url=db_url,
        table=table,
        report_format="json" if args.json else "table",
    )


def run_import(
    settings: ImportSettings,
    log: logging.Logger,
    *,
    store_factory: Callable[[str, str], TimeseriesStore] = TimeseriesStore.connect,
    stdout: TextIO | None = None,
) -> tuple[ImportResult, int | None]:
    """Extract every export, then report or persist the rows once.

    Returns the pipeline result and the number of rows submitted to the store
    (None in dry-run mode). Store errors propagate to the caller.
    """
    result = PipelineDriver(settings.data_dir, log).run()
    loader = BatchLoader(log)

    if settings.dry_run:
        loader.report(result.rows, stdout or sys.stdout, fmt=settings.report_format)
        return result, None

    if not result.rows:
        log.info("Nothing to insert; database not contacted")
        return result, 0

    with store_factory(settings.db_url, settings.table) as store:
        submitted = loader.persist(result.rows, store)
    return result, submitted


def main(argv: Sequence[str] | None = None, *, environ: Mapping[str, str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    environ = os.environ if environ is None else environ

    try:
        app_cfg = Config.load(args.config)
    except (FileNotFoundError, ConfigurationError) as exc:
        ConsoleLog(quiet=args.quiet).setup().error("%s", exc)
        return EXIT_FATAL

    console_logger = ConsoleLog(
        level="DEBUG" if args.debug else app_cfg.logging.console_level,
        quiet=args.quiet or app_cfg.logging.console_quiet,
        debug_modules=app_cfg.logging.debug_modules,
    )
    log = console_logger.setup()
    structured_logger = StructuredLog(
        app_cfg.logging.structured_path,
        app_cfg.logging.structured_enabled,
    )

    try:
        settings = resolve_settings(args, app_cfg, environ)
        result, submitted = run_import(settings, log)
    except (ConfigurationError, DataDirectoryError, StoreError) as exc:
        log.error("%s", exc)
        return EXIT_FATAL

    if structured_logger.enabled:
        structured_logger.write(
            ImportLogEntry(
                timestamp=datetime.now(timezone.utc).isoformat(),
                data_dir=str(result.data_dir),
                dry_run=settings.dry_run,
                files=[o.as_dict() for o in result.outcomes],
                failures=len(result.failures),
                total_rows=result.total_rows,
                submitted=submitted,
            )
        )
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
