# huawei_importer/errors.py
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from huawei_importer.models.rows import DerivedRow


class ImporterError(Exception):
    """Base class for everything the importer raises on purpose."""


class ConfigurationError(ImporterError):
    pass


class DataDirectoryError(ImporterError):
    pass


class InvalidFilename(ImporterError):
    """Base name does not look like ``<year>.<month>``."""

    def __init__(self, name: str, reason: str):
        super().__init__(f"Invalid filename {name!r}: {reason}")
        self.name = name
        self.reason = reason


class SourceFileError(ImporterError):
    """A single export file could not be turned into rows.

    Fatal for that file only; the pipeline records it and moves on.
    """

    def __init__(self, path: Path | str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = Path(path)
        self.reason = reason


class InvalidPayload(SourceFileError):
    pass


class UnreadableFile(SourceFileError):
    pass


class StoreError(ImporterError):
    pass


class StoreConnectionError(StoreError):
    pass


class StoreWriteError(StoreError):
    def __init__(self, message: str, row: "DerivedRow | None" = None):
        super().__init__(message)
        self.row = row
