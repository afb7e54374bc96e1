"""
masterdata_export.types -- frozen DTOs for export runs. ZERO I/O.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath

from masterdata_kernel.domain.dtos import FieldIssue


class ExportStatus(str, Enum):
    """Outcome of one export job."""

    EXPORTED = "exported"  # Destination refreshed from the sheet
    SOURCE_UNAVAILABLE = "source_unavailable"  # Sheet unreadable; destination untouched
    FAILED = "failed"  # Job stopped by an error; destination untouched


@dataclass(frozen=True)
class DestinationLocator:
    """Identity of a persisted record collection: ``root/group_name/sheet_name``."""

    root: str
    group_name: str
    sheet_name: str

    @property
    def path(self) -> str:
        return PurePosixPath(self.root, self.group_name, self.sheet_name).as_posix()

    @property
    def label(self) -> str:
        return f"{self.group_name}.{self.sheet_name}"

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True)
class ExportResult:
    """Result of exporting one sheet into one destination."""

    job_id: str
    status: ExportStatus
    destination_path: str
    record_count: int = 0
    issues: tuple[FieldIssue, ...] = ()
    error_code: str | None = None
    error_message: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == ExportStatus.EXPORTED


@dataclass(frozen=True)
class ExportReport:
    """Results of one ``export_all`` pass, in job order."""

    results: tuple[ExportResult, ...] = ()

    def _count(self, status: ExportStatus) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def exported(self) -> int:
        return self._count(ExportStatus.EXPORTED)

    @property
    def unavailable(self) -> int:
        return self._count(ExportStatus.SOURCE_UNAVAILABLE)

    @property
    def failed(self) -> int:
        return self._count(ExportStatus.FAILED)

    @property
    def issue_count(self) -> int:
        return sum(len(r.issues) for r in self.results)

    def get(self, job_id: str) -> ExportResult | None:
        for r in self.results:
            if r.job_id == job_id:
                return r
        return None
