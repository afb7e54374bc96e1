"""
Pytest fixtures for the master-data exporter test suite.

Provides:
- Structured logging configuration and log capture
- SQLite in-memory database sessions
- Sample schemas, sheet sources and record stores
"""

import json
import logging
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy.orm import Session

from masterdata_export.coordinator import ExportCoordinator
from masterdata_export.stores import InMemoryRecordStore
from masterdata_ingestion.sheets.memory_source import InMemorySheetSource
from masterdata_kernel.db.engine import (
    create_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from masterdata_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

from masterdata_samples import ITEM_ROWS, make_registry

# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture masterdata logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, coordinator):
            coordinator.export_one(...)
            logs = captured_logs()
            assert any(r["message"] == "export_completed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("masterdata")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """Session on a fresh SQLite in-memory database with every table created."""
    init_engine_from_url("sqlite:///:memory:")
    create_tables()
    s = get_session()
    try:
        yield s
    finally:
        s.rollback()
        s.close()
        reset_engine()


# =============================================================================
# Export fixtures
# =============================================================================


@pytest.fixture
def schemas():
    return make_registry()


@pytest.fixture
def sheet_source() -> InMemorySheetSource:
    """In-memory source holding the sample Items workbook ("Items.xlsx" / "Weapons")."""
    source = InMemorySheetSource()
    source.add_sheet("Items.xlsx", "Weapons", ITEM_ROWS)
    return source


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def coordinator(sheet_source, record_store) -> ExportCoordinator:
    return ExportCoordinator(sheet_source, record_store)
