import io
import json
import logging

import pytest

from huawei_importer.logging import ROOT_LOGGER, ConsoleLog, ImportLogEntry, StructuredLog


@pytest.fixture
def importer_logger():
    log = logging.getLogger(ROOT_LOGGER)
    handlers = list(log.handlers)
    level = log.level
    propagate = log.propagate
    yield log
    log.handlers.clear()
    log.handlers.extend(handlers)
    log.setLevel(level)
    log.propagate = propagate


def _entry():
    return ImportLogEntry(
        timestamp="2024-01-01T00:00:00+00:00",
        data_dir="/data",
        dry_run=False,
        files=[{"file": "2023.01.json", "period": "2023-01", "rows": 7, "error": None}],
        failures=0,
        total_rows=7,
        submitted=7,
    )


def test_structured_log_appends_json_lines(tmp_path):
    log_path = tmp_path / "logs" / "imports.jsonl"
    writer = StructuredLog(str(log_path), enabled=True)
    writer.write(_entry())
    writer.write(_entry())

    lines = log_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    payload = json.loads(lines[0])
    assert payload["files"][0]["rows"] == 7
    assert payload["submitted"] == 7


def test_structured_log_disabled_without_path():
    assert StructuredLog(None, enabled=True).enabled is False


def test_structured_log_disabled_when_directory_cannot_be_created(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    writer = StructuredLog(str(blocker / "logs" / "imports.jsonl"), enabled=True)

    assert writer.enabled is False
    writer.write(_entry())
    assert blocker.read_text(encoding="utf-8") == "not a directory"


def test_console_log_quiet_emits_nothing(importer_logger):
    stream = io.StringIO()
    log = ConsoleLog(level="INFO", quiet=True, stream=stream).setup()
    log.error("silenced")

    assert log is importer_logger
    assert stream.getvalue() == ""
    assert all(isinstance(h, logging.NullHandler) for h in log.handlers)


def test_console_log_level_filters_stream(importer_logger):
    stream = io.StringIO()
    log = ConsoleLog(level="WARNING", stream=stream).setup()
    log.info("hidden")
    log.warning("shown")
    logging.getLogger(ROOT_LOGGER + ".store").error("child")

    assert "hidden" not in stream.getvalue()
    assert "WARNING [huawei_importer] shown" in stream.getvalue()
    assert "ERROR [huawei_importer.store] child" in stream.getvalue()


def test_console_log_leaves_root_logger_alone(importer_logger):
    root = logging.getLogger()
    before = list(root.handlers)

    ConsoleLog(stream=io.StringIO()).setup()

    assert root.handlers == before
    assert importer_logger.propagate is False


def test_repeated_setup_replaces_handler(importer_logger):
    first = io.StringIO()
    second = io.StringIO()
    ConsoleLog(stream=first).setup()
    log = ConsoleLog(stream=second).setup()
    log.info("once")

    assert len(log.handlers) == 1
    assert first.getvalue() == ""
    assert "once" in second.getvalue()
