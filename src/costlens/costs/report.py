"""Cost report adapter.

Converts the static cost analyzer's JSON report into CostEntry objects:
- constructor-equivalent procedures (``<init>``, ``<clinit>``) are dropped
- ids are structural (``{source_file}:{procedure_id}``), so the same method
  keeps its id across runs and overloads stay distinct
- parameter types come from the procedure id, package qualifiers removed
- multiplication in polynomials is normalized to ``*``

Public API:
    parse_cost_report: Convert already-decoded report records
    load_cost_report: Read a report file and convert it
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from costlens.core.exceptions import ReportError
from costlens.costs.types import CostEntry, CostFacet, SourceLocation, TraceStep
from costlens.java.types import simple_type_name

logger = logging.getLogger(__name__)

CONSTRUCTOR_NAMES: frozenset[str] = frozenset({"<init>", "<clinit>"})

_PARAMETER_LIST = re.compile(r"\(([^)]*)\)")
_MULTIPLY = re.compile(r"[⋅·]|(?<=\s)\.(?=\s)")


def parse_cost_report(records: Any, source_file: str) -> list[CostEntry]:
    """Convert raw report records into cost entries.

    Args:
        records: Decoded JSON report (a list of procedure records).
        source_file: Path of the analyzed source file, used in entry ids.

    Returns:
        Entries sorted by source line.

    Raises:
        ReportError: If the report is not a list or a record is malformed.

    """
    if not isinstance(records, list):
        raise ReportError(
            f"Cost report must be a JSON list, got {type(records).__name__}"
        )

    entries: list[CostEntry] = []
    skipped = 0
    for index, record in enumerate(records):
        try:
            entry = _parse_record(record, source_file)
        except (KeyError, TypeError, ValidationError) as e:
            raise ReportError(f"Malformed cost record #{index}: {e}") from e
        if entry is None:
            skipped += 1
            continue
        entries.append(entry)

    if skipped:
        logger.debug("Skipped %d constructor records", skipped)
    entries.sort(key=lambda e: e.loc.line)
    return entries


def load_cost_report(path: Path, source_file: str | None = None) -> list[CostEntry]:
    """Read and convert a cost report file.

    Args:
        path: Path to the JSON report.
        source_file: Analyzed source path for entry ids; defaults to each
            record's own ``loc.file``.

    Returns:
        Entries sorted by source line.

    Raises:
        ReportError: If the file cannot be read or parsed.

    """
    try:
        with path.open("r", encoding="utf-8") as f:
            records = json.load(f)
    except FileNotFoundError as e:
        raise ReportError(f"Cost report not found: {path}", path) from e
    except OSError as e:
        raise ReportError(f"Cannot read cost report {path}: {e}", path) from e
    except json.JSONDecodeError as e:
        raise ReportError(f"Invalid JSON in cost report {path}: {e}", path) from e

    try:
        return parse_cost_report(records, source_file or "")
    except ReportError as e:
        raise ReportError(f"{path}: {e}", path) from e


def normalize_polynomial(polynomial: str) -> str:
    """Write every multiplication operator as ``*``."""
    return _MULTIPLY.sub("*", polynomial)


def parameter_types_from_procedure_id(procedure_id: str) -> list[str]:
    """Simple parameter type names from ``Foo.bar(int,java.lang.String):void``."""
    match = _PARAMETER_LIST.search(procedure_id)
    if match is None or not match.group(1).strip():
        return []
    return [simple_type_name(t) for t in match.group(1).split(",")]


def _parse_record(record: dict[str, Any], source_file: str) -> CostEntry | None:
    procedure_name = record["procedure_name"]
    method_name = procedure_name.rsplit(".", 1)[-1]
    if method_name in CONSTRUCTOR_NAMES:
        return None

    procedure_id = record.get("procedure_id") or ""
    loc = record["loc"]
    file = source_file or loc["file"]
    exec_cost = record["exec_cost"]

    return CostEntry(
        id=f"{file}:{procedure_id or procedure_name}",
        method_name=method_name,
        parameter_types=parameter_types_from_procedure_id(procedure_id),
        loc=SourceLocation(file=loc["file"], line=loc["lnum"]),
        alloc_cost=_parse_facet(record["alloc_cost"]),
        exec_cost=_parse_facet(exec_cost),
        trace=[_parse_trace_step(step) for step in exec_cost.get("trace", [])],
    )


def _parse_facet(facet: dict[str, Any]) -> CostFacet:
    hum = facet["hum"]
    return CostFacet(
        polynomial=normalize_polynomial(str(hum["hum_polynomial"])),
        degree=_parse_degree(hum.get("hum_degree")),
        big_o=hum.get("big_o", ""),
    )


def _parse_degree(value: Any) -> int | None:
    """Degree as int; non-numeric values (unbounded cost) become None."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_trace_step(step: dict[str, Any]) -> TraceStep:
    return TraceStep(
        level=step.get("level", 0),
        file=step.get("filename"),
        line=step.get("line_number"),
        column=step.get("column_number"),
        description=step.get("description", ""),
    )
