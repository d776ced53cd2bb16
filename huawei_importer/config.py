# huawei_importer/config.py
from dataclasses import dataclass, field
from pathlib import Path
import configparser
import re

from huawei_importer.errors import ConfigurationError

DEFAULT_TABLE = "_timescaledb_internal._materialized_hypertable_3"

_TABLE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


def validate_table_name(name: str) -> str:
    """Table names are interpolated into SQL, so only plain identifiers pass."""
    if not _TABLE_RE.match(name or ""):
        raise ConfigurationError(f"Invalid table name: {name!r}")
    return name


@dataclass
class DatabaseConfig:
    url: str | None = None
    table: str = DEFAULT_TABLE


@dataclass
class ImportConfig:
    data_dir: str = "."
    dry_run: bool = False


@dataclass
class LoggingConfig:
    console_level: str = "INFO"
    console_quiet: bool = False
    debug_modules: list[str] = field(default_factory=list)
    structured_enabled: bool = False
    structured_path: str | None = None


@dataclass
class AppConfig:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    importer: ImportConfig = field(default_factory=ImportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class Config:
    def __init__(self, path: str):
        self.path = Path(path)
        self.parser = configparser.ConfigParser(inline_comment_prefixes=("#",))
        read = self.parser.read(self.path)
        if not read:
            raise FileNotFoundError(f"Config file not found: {self.path}")

    @classmethod
    def load(cls, path: str | None) -> AppConfig:
        if path is None:
            return AppConfig()

        cfg = cls(path)
        p = cfg.parser

        def _as_bool(value: str) -> bool:
            return value.strip().lower() == "true"

        # --- Database ---
        database_kwargs = {}
        if "database" in p:
            db_sec = p["database"]
            url = (db_sec.get("url") or "").strip()
            if url:
                database_kwargs["url"] = url
            if "table" in db_sec:
                database_kwargs["table"] = validate_table_name(db_sec["table"].strip())
        database_cfg = DatabaseConfig(**database_kwargs)

        # --- Import ---
        import_kwargs = {}
        if "import" in p:
            import_sec = p["import"]
            if "data_dir" in import_sec:
                import_kwargs["data_dir"] = import_sec["data_dir"].strip() or "."
            if "dry_run" in import_sec:
                import_kwargs["dry_run"] = _as_bool(import_sec["dry_run"])
        import_cfg = ImportConfig(**import_kwargs)

        # --- Logging ---
        logging_kwargs = {}
        if "logging" in p:
            logging_sec = p["logging"]
            if "console_level" in logging_sec:
                logging_kwargs["console_level"] = logging_sec["console_level"]
            if "console_quiet" in logging_sec:
                logging_kwargs["console_quiet"] = _as_bool(logging_sec["console_quiet"])
            if "debug_modules" in logging_sec:
                raw = logging_sec["debug_modules"]
                logging_kwargs["debug_modules"] = [x.strip() for x in raw.split(",") if x.strip()]
            if "structured_enabled" in logging_sec:
                logging_kwargs["structured_enabled"] = _as_bool(logging_sec["structured_enabled"])
            if "structured_path" in logging_sec:
                logging_kwargs["structured_path"] = logging_sec["structured_path"]
        logging_cfg = LoggingConfig(**logging_kwargs)

        return AppConfig(
            database=database_cfg,
            importer=import_cfg,
            logging=logging_cfg,
        )
