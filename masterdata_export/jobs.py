"""
Export jobs and the job registry.

Contract:
    ``ExportJob`` is the single capability the coordinator needs from a job:
    export itself through a coordinator. ``ExportJobRegistry`` stores jobs by
    ``job_id`` in registration order; jobs are registered explicitly (by the
    host or from configuration), never discovered by scanning.

Invariants enforced:
    One job per ``job_id``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, Protocol, runtime_checkable

from masterdata_export.types import DestinationLocator, ExportResult
from masterdata_ingestion.sheets.model import SheetLayout
from masterdata_kernel.domain.schema import RecordSchema, SchemaRegistry
from masterdata_kernel.exceptions import JobAlreadyRegisteredError, JobNotFoundError

if TYPE_CHECKING:
    from masterdata_config.schema import ExportConfig
    from masterdata_export.coordinator import ExportCoordinator


@runtime_checkable
class ExportJob(Protocol):
    """Anything that can export itself through a coordinator."""

    @property
    def job_id(self) -> str: ...

    def export(self, coordinator: ExportCoordinator) -> ExportResult: ...


@dataclass(frozen=True)
class SheetExportJob:
    """Export one sheet of one source file into ``root/group/sheet``."""

    schema: RecordSchema
    source_path: Path
    destination: DestinationLocator
    layout: SheetLayout = field(default_factory=SheetLayout)
    name: str | None = None

    @property
    def job_id(self) -> str:
        return self.name or self.destination.label

    @property
    def sheet_name(self) -> str:
        return self.destination.sheet_name

    def export(self, coordinator: ExportCoordinator) -> ExportResult:
        return coordinator.export_one(
            self.schema,
            self.source_path,
            self.destination,
            layout=self.layout,
            job_id=self.job_id,
        )


class ExportJobRegistry:
    """Registry mapping job ids to export jobs.

    Contract:
        - ``register()`` adds a job; raises JobAlreadyRegisteredError on duplicate.
        - ``get()`` retrieves by id; raises JobNotFoundError if missing.
        - Iteration yields jobs in registration order.
    """

    def __init__(self) -> None:
        self._jobs: dict[str, ExportJob] = {}

    def register(self, job: ExportJob) -> None:
        if job.job_id in self._jobs:
            raise JobAlreadyRegisteredError(job.job_id)
        self._jobs[job.job_id] = job

    def get(self, job_id: str) -> ExportJob:
        try:
            return self._jobs[job_id]
        except KeyError:
            raise JobNotFoundError(job_id, self.list_jobs()) from None

    def list_jobs(self) -> tuple[str, ...]:
        """All registered job ids, in registration order."""
        return tuple(self._jobs)

    def jobs(self) -> tuple[ExportJob, ...]:
        return tuple(self._jobs.values())

    def __iter__(self) -> Iterator[ExportJob]:
        return iter(self.jobs())

    def __len__(self) -> int:
        return len(self._jobs)

    def __contains__(self, job_id: str) -> bool:
        return job_id in self._jobs


def build_job_registry(config: ExportConfig, schemas: SchemaRegistry) -> ExportJobRegistry:
    """
    Build a registry of SheetExportJobs from an export configuration.

    Raises:
        SchemaNotFoundError: a job names a schema missing from ``schemas``.
        JobAlreadyRegisteredError: two jobs share an id.
    """
    registry = ExportJobRegistry()
    for job_def in config.jobs:
        registry.register(
            SheetExportJob(
                schema=schemas.get(job_def.schema),
                source_path=Path(job_def.source),
                destination=DestinationLocator(
                    root=config.destination_root,
                    group_name=job_def.group,
                    sheet_name=job_def.sheet,
                ),
                layout=SheetLayout(
                    header_row=job_def.layout.header_row,
                    first_data_row=job_def.layout.first_data_row,
                    key_column=job_def.layout.key_column,
                ),
                name=job_def.job_id,
            )
        )
    return registry
