"""
masterdata_export -- export jobs, record stores and the export coordinator.

Depends on masterdata_ingestion for the binding engine and on
masterdata_kernel for schemas, records and logging.
"""

from masterdata_export.coordinator import ExportCoordinator
from masterdata_export.jobs import (
    ExportJob,
    ExportJobRegistry,
    SheetExportJob,
    build_job_registry,
)
from masterdata_export.stores import InMemoryRecordStore, RecordStore, SqlRecordStore
from masterdata_export.types import (
    DestinationLocator,
    ExportReport,
    ExportResult,
    ExportStatus,
)

__all__ = [
    "ExportCoordinator",
    "ExportJob",
    "ExportJobRegistry",
    "SheetExportJob",
    "build_job_registry",
    "RecordStore",
    "InMemoryRecordStore",
    "SqlRecordStore",
    "DestinationLocator",
    "ExportReport",
    "ExportResult",
    "ExportStatus",
]
