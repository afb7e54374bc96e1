"""
Export configuration schema.

The human-authored, reviewable description of which sheets get exported
where. YAML files are parsed into these frozen types by the loader; the
export package turns them into registered jobs.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SheetLayoutDef:
    """Metadata rows and key column of the sheets a job reads."""

    header_row: int = 0  # Field names
    first_data_row: int = 2  # First row after the type-annotation row
    key_column: int = 0  # Its extent bounds the data rows


@dataclass(frozen=True)
class ExportJobDef:
    """One sheet exported into ``destination_root/group/sheet``."""

    job_id: str
    schema: str  # Name registered in the SchemaRegistry
    source: str  # Workbook path, CSV file, or directory of CSV files
    group: str
    sheet: str
    layout: SheetLayoutDef = field(default_factory=SheetLayoutDef)


@dataclass(frozen=True)
class ExportConfig:
    """Complete export configuration."""

    version: int
    destination_root: str
    jobs: tuple[ExportJobDef, ...] = ()
    checksum: str = ""

    def get_job(self, job_id: str) -> ExportJobDef | None:
        for job in self.jobs:
            if job.job_id == job_id:
                return job
        return None
