"""
masterdata_config -- YAML export configuration.

Sits beside masterdata_kernel; the export package turns a loaded
``ExportConfig`` into registered jobs (``build_job_registry``).
"""

from masterdata_config.loader import (
    compute_checksum,
    load_export_config,
    load_yaml_file,
    parse_export_config,
)
from masterdata_config.schema import ExportConfig, ExportJobDef, SheetLayoutDef

__all__ = [
    "ExportConfig",
    "ExportJobDef",
    "SheetLayoutDef",
    "compute_checksum",
    "load_export_config",
    "load_yaml_file",
    "parse_export_config",
]
