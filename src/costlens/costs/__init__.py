"""Cost entries, analyzer report conversion and per-method history."""

from costlens.costs.history import CostHistoryTracker
from costlens.costs.report import load_cost_report, parse_cost_report
from costlens.costs.types import CostEntry, CostFacet, SourceLocation, TraceStep

__all__ = [
    "CostEntry",
    "CostFacet",
    "CostHistoryTracker",
    "SourceLocation",
    "TraceStep",
    "load_cost_report",
    "parse_cost_report",
]
