"""
Export configuration loader (``masterdata_config.loader``).

Loads an export configuration YAML file and parses it into the frozen
``masterdata_config.schema`` types::

    version: 1
    destination_root: Assets/MasterData
    defaults:
      layout: {header_row: 0, first_data_row: 2, key_column: 0}
    jobs:
      - schema: items
        source: sheets/Items.xlsx
        sheet: Weapons
        group: Items          # optional, defaults to the source file stem
        id: Items.Weapons     # optional, defaults to "<group>.<sheet>"
        layout: {first_data_row: 3}   # optional, merged over defaults

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Duplicate job ids, unknown layout keys, negative or misordered layout
  rows  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from masterdata_config.schema import ExportConfig, ExportJobDef, SheetLayoutDef

_LAYOUT_KEYS = frozenset({"header_row", "first_data_row", "key_column"})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_layout(data: dict[str, Any] | None, base: SheetLayoutDef | None = None) -> SheetLayoutDef:
    """Parse a SheetLayoutDef, filling unspecified keys from ``base``."""
    base = base or SheetLayoutDef()
    data = data or {}
    unknown = set(data) - _LAYOUT_KEYS
    if unknown:
        raise ValueError(f"Unknown layout keys: {sorted(unknown)}")
    layout = SheetLayoutDef(
        header_row=int(data.get("header_row", base.header_row)),
        first_data_row=int(data.get("first_data_row", base.first_data_row)),
        key_column=int(data.get("key_column", base.key_column)),
    )
    if min(layout.header_row, layout.first_data_row, layout.key_column) < 0:
        raise ValueError(f"Layout indexes must be non-negative: {layout}")
    if layout.first_data_row <= layout.header_row:
        raise ValueError(
            f"first_data_row ({layout.first_data_row}) must come after "
            f"header_row ({layout.header_row})"
        )
    return layout


def parse_job(
    data: dict[str, Any],
    default_layout: SheetLayoutDef | None = None,
    base_dir: Path | None = None,
) -> ExportJobDef:
    """
    Parse an ExportJobDef from a dict.

    Relative ``source`` paths are resolved against ``base_dir`` when given.
    """
    source = Path(str(data["source"]))
    if base_dir is not None and not source.is_absolute():
        source = base_dir / source
    sheet = str(data["sheet"])
    group = str(data.get("group") or source.stem)
    return ExportJobDef(
        job_id=str(data.get("id") or f"{group}.{sheet}"),
        schema=str(data["schema"]),
        source=str(source),
        group=group,
        sheet=sheet,
        layout=parse_layout(data.get("layout"), default_layout),
    )


def parse_export_config(data: dict[str, Any], base_dir: Path | None = None) -> ExportConfig:
    """Parse a complete ExportConfig from a dict."""
    defaults = data.get("defaults") or {}
    default_layout = parse_layout(defaults.get("layout"))

    jobs = tuple(
        parse_job(job, default_layout, base_dir) for job in data.get("jobs") or ()
    )
    seen: set[str] = set()
    for job in jobs:
        if job.job_id in seen:
            raise ValueError(f"Duplicate export job id: {job.job_id}")
        seen.add(job.job_id)

    return ExportConfig(
        version=int(data.get("version", 1)),
        destination_root=str(data["destination_root"]),
        jobs=jobs,
        checksum=compute_checksum(data),
    )


def load_export_config(path: Path | str) -> ExportConfig:
    """Load and parse an export configuration file."""
    path = Path(path)
    return parse_export_config(load_yaml_file(path), base_dir=path.parent)


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization; identical data, identical checksum."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
