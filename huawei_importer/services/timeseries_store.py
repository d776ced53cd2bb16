# huawei_importer/services/timeseries_store.py

from __future__ import annotations

import logging
from typing import Any, Iterable

import psycopg2

from huawei_importer.config import DEFAULT_TABLE, validate_table_name
from huawei_importer.errors import StoreConnectionError, StoreWriteError
from huawei_importer.models.rows import DerivedRow


class TimeseriesStore:
    """Write access to the daily energy hypertable.

    Wraps any DB-API connection; production uses psycopg2, tests use sqlite3
    with ``placeholder="?"``. The table needs a unique constraint over
    (bucket, source, measurement) for the conflict-skip to take effect.
    """

    def __init__(self, conn: Any, table: str = DEFAULT_TABLE, *, placeholder: str = "%s"):
        self._conn = conn
        self.table = validate_table_name(table)
        self._placeholder = placeholder
        self._log = logging.getLogger("huawei_importer.store")

    @classmethod
    def connect(cls, dsn: str, table: str = DEFAULT_TABLE) -> "TimeseriesStore":
        try:
            conn = psycopg2.connect(dsn)
        except psycopg2.Error as exc:
            raise StoreConnectionError(f"Cannot connect to PostgreSQL: {exc}") from exc
        return cls(conn, table)

    # ------------------------------------------------------------------
    @property
    def insert_sql(self) -> str:
        marks = ", ".join([self._placeholder] * 4)
        return (
            f"INSERT INTO {self.table} (bucket, source, measurement, value) "
            f"VALUES ({marks}) "
            "ON CONFLICT DO NOTHING"
        )

    def insert_rows(self, rows: Iterable[DerivedRow]) -> int:
        """Insert every row in one transaction; return how many were submitted.

        Rows that already exist are skipped by the database, so the return
        value is not the number of rows actually written. The first failure
        rolls back the whole batch.
        """
        sql = self.insert_sql
        submitted = 0
        try:
            cur = self._conn.cursor()
        except Exception as exc:
            raise StoreWriteError(f"Cannot open cursor: {exc}") from exc
        try:
            for row in rows:
                params = (row.bucket, row.source.value, row.measurement.value, row.value)
                try:
                    cur.execute(sql, params)
                except Exception as exc:
                    raise StoreWriteError(
                        f"Insert failed for {row.describe()}: {exc}", row=row
                    ) from exc
                submitted += 1

            try:
                self._conn.commit()
            except Exception as exc:
                raise StoreWriteError(f"Cannot commit transaction: {exc}") from exc
        except BaseException:
            self._rollback()
            raise
        finally:
            cur.close()

        self._log.debug("Committed %s row(s) into %s", submitted, self.table)
        return submitted

    def _rollback(self) -> None:
        try:
            self._conn.rollback()
        except Exception as exc:
            self._log.warning("Rollback failed: %s", exc)

    # ------------------------------------------------------------------
    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "TimeseriesStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
