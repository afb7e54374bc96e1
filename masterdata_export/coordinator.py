"""
ExportCoordinator -- runs export jobs and refreshes their destinations.

Contract:
    ``export_all()`` runs every registered job once, sequentially, in
    registration order. Each job is isolated: whatever happens to one job is
    recorded in its ExportResult and the pass moves on to the next.

    ``export_one()`` refreshes a single destination from a single sheet:
        1. load the sheet -- if the source is unavailable, log and return
           without touching the destination;
        2. map every data row into records;
        3. load (or create and register) the destination collection and
           replace its content in place (full refresh, never a merge); a
           collection held under another schema counts as absent and is
           replaced by a new one;
        4. mark the destination dirty for the store to save later.

Invariants enforced:
    - A destination's prior content survives any export that fails before
      replacement data has been read and mapped in full.
    - Exporting unchanged data twice leaves the same content, in the same
      order, as exporting it once.

Non-goals:
    - Does NOT detect records that disappeared from the sheet.
    - Does NOT persist; the store's owner decides when to save.
"""

from __future__ import annotations

from pathlib import Path

from masterdata_export.jobs import ExportJobRegistry
from masterdata_export.stores import RecordStore
from masterdata_export.types import (
    DestinationLocator,
    ExportReport,
    ExportResult,
    ExportStatus,
)
from masterdata_ingestion.mapping.row_mapper import RowMapper
from masterdata_ingestion.sheets.base import SheetSource
from masterdata_ingestion.sheets.model import SheetLayout
from masterdata_kernel.domain.schema import RecordSchema
from masterdata_kernel.exceptions import SourceUnavailableError
from masterdata_kernel.logging_config import LogContext, get_logger

logger = get_logger("export.coordinator")


class ExportCoordinator:
    """Composes a sheet source, a record store and the row mapper."""

    def __init__(
        self,
        source: SheetSource,
        store: RecordStore,
        mapper: RowMapper | None = None,
    ) -> None:
        self._source = source
        self._store = store
        self._mapper = mapper or RowMapper()

    @property
    def store(self) -> RecordStore:
        return self._store

    def export_all(self, registry: ExportJobRegistry) -> ExportReport:
        """Run every registered job once; one job's failure never stops the others."""
        jobs = registry.jobs()
        logger.info("export_all_started", extra={"job_count": len(jobs)})

        results: list[ExportResult] = []
        for job in jobs:
            with LogContext.bind(job_id=job.job_id):
                try:
                    result = job.export(self)
                except Exception as exc:
                    logger.error(
                        "export_job_failed",
                        extra={"error_code": getattr(exc, "code", type(exc).__name__)},
                        exc_info=True,
                    )
                    result = ExportResult(
                        job_id=job.job_id,
                        status=ExportStatus.FAILED,
                        destination_path=_destination_path(job),
                        error_code=getattr(exc, "code", type(exc).__name__),
                        error_message=str(exc),
                    )
            results.append(result)

        report = ExportReport(results=tuple(results))
        logger.info(
            "export_all_completed",
            extra={
                "exported": report.exported,
                "source_unavailable": report.unavailable,
                "failed": report.failed,
                "issue_count": report.issue_count,
            },
        )
        return report

    def export_one(
        self,
        schema: RecordSchema,
        source_path: Path | str,
        destination: DestinationLocator,
        layout: SheetLayout | None = None,
        job_id: str | None = None,
    ) -> ExportResult:
        """
        Refresh ``destination`` from sheet ``destination.sheet_name`` of ``source_path``.

        Returns:
            ExportResult with EXPORTED or SOURCE_UNAVAILABLE status.

        Raises:
            UnsupportedFieldTypeError: the schema declares a field type with
                no coercion rule. The destination is left untouched.
        """
        job_id = job_id or destination.label
        with LogContext.bind(
            schema=schema.name, source=str(source_path), destination=destination.path
        ):
            try:
                sheet = self._source.load_sheet(source_path, destination.sheet_name)
            except SourceUnavailableError as exc:
                logger.warning(
                    "export_source_unavailable",
                    extra={"sheet": destination.sheet_name, "reason": exc.reason},
                )
                return ExportResult(
                    job_id=job_id,
                    status=ExportStatus.SOURCE_UNAVAILABLE,
                    destination_path=destination.path,
                    error_code=exc.code,
                    error_message=str(exc),
                )

            logger.info("export_started", extra={"export": destination.label})
            mapped = self._mapper.map_rows(schema, sheet, layout)

            collection = self._store.load(destination)
            if collection is not None and collection.schema.name != schema.name:
                logger.warning(
                    "destination_schema_changed",
                    extra={"previous_schema": collection.schema.name},
                )
                collection = None
            if collection is None:
                collection = self._store.create(destination, schema)
            collection.replace(mapped.records)
            self._store.mark_dirty(destination)

            logger.info(
                "export_completed",
                extra={
                    "export": destination.label,
                    "record_count": len(collection),
                    "issue_count": len(mapped.issues),
                },
            )
            return ExportResult(
                job_id=job_id,
                status=ExportStatus.EXPORTED,
                destination_path=destination.path,
                record_count=len(collection),
                issues=mapped.issues,
            )


def _destination_path(job: object) -> str:
    destination = getattr(job, "destination", None)
    return destination.path if isinstance(destination, DestinationLocator) else ""
