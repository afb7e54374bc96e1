"""
Command-line entry point: run every configured export once.

Usage:
    masterdata-export --config exports.yaml --schemas mygame.masterdata.schemas

    # Persist the refreshed collections
    masterdata-export --config exports.yaml --schemas mygame.masterdata.schemas \\
        --db-url sqlite:///masterdata.db

``--schemas`` names an importable module exposing ``SCHEMAS``, a
``SchemaRegistry`` holding every schema the configuration refers to.

Exit codes: 0 when every job exported or was skipped for an unavailable
source, 1 when any job failed or the setup is invalid.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from typing import Sequence

from masterdata_kernel.domain.schema import SchemaRegistry
from masterdata_kernel.logging_config import configure_logging, get_logger

logger = get_logger("export.cli")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Export spreadsheet master data into typed record collections.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        required=True,
        help="Path to the export configuration YAML file.",
    )
    parser.add_argument(
        "--schemas",
        required=True,
        help="Importable module exposing SCHEMAS (a SchemaRegistry).",
    )
    parser.add_argument(
        "--db-url",
        default=None,
        help="Database URL to save exported collections to (default: keep in memory).",
    )
    parser.add_argument(
        "--job",
        action="append",
        default=None,
        help="Only run this job id (repeatable). Default: all configured jobs.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Structured log level written to stderr (default: WARNING).",
    )
    return parser.parse_args(argv)


def load_schema_registry(module_name: str) -> SchemaRegistry:
    """Import ``module_name`` and return its ``SCHEMAS`` registry."""
    module = importlib.import_module(module_name)
    schemas = getattr(module, "SCHEMAS", None)
    if not isinstance(schemas, SchemaRegistry):
        raise TypeError(f"{module_name}.SCHEMAS must be a SchemaRegistry, got {type(schemas).__name__}")
    return schemas


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(level=getattr(logging, args.log_level))

    # Lazy imports so we fail fast on args first
    from masterdata_config import load_export_config
    from masterdata_export.coordinator import ExportCoordinator
    from masterdata_export.jobs import ExportJobRegistry, build_job_registry
    from masterdata_export.stores import InMemoryRecordStore, SqlRecordStore
    from masterdata_export.types import ExportStatus
    from masterdata_ingestion.sheets import SuffixSheetSource
    from masterdata_kernel.exceptions import MasterDataError

    try:
        schemas = load_schema_registry(args.schemas)
        config = load_export_config(args.config)
        registry = build_job_registry(config, schemas)
    except (ImportError, TypeError, OSError, KeyError, ValueError, MasterDataError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.job:
        selected = ExportJobRegistry()
        try:
            for job_id in args.job:
                selected.register(registry.get(job_id))
        except MasterDataError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 1
        registry = selected

    session = None
    if args.db_url:
        from masterdata_kernel.db.engine import create_tables, get_session, init_engine_from_url

        init_engine_from_url(args.db_url)
        create_tables()
        session = get_session()
        store = SqlRecordStore(session, schemas)
    else:
        store = InMemoryRecordStore()

    try:
        coordinator = ExportCoordinator(SuffixSheetSource(), store)
        report = coordinator.export_all(registry)

        for result in report.results:
            line = f"  {result.status.value:<18} {result.job_id} -> {result.destination_path}"
            if result.status == ExportStatus.EXPORTED:
                line += f" ({result.record_count} records, {len(result.issues)} issues)"
            elif result.error_message:
                line += f" ({result.error_message})"
            print(line)
            for issue in result.issues[:10]:
                print(f"      row {issue.row}: {issue.message}")
            if len(result.issues) > 10:
                print(f"      ... and {len(result.issues) - 10} more issues.")

        saved = store.save()
        if session is not None:
            session.commit()
        print(
            f"Exported {report.exported}, unavailable {report.unavailable}, "
            f"failed {report.failed}; saved {len(saved)} collection(s)."
        )
    except Exception:
        if session is not None:
            session.rollback()
        raise
    finally:
        if session is not None:
            session.close()

    return 1 if report.failed else 0


if __name__ == "__main__":
    sys.exit(main())
