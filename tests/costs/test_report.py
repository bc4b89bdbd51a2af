"""Tests for the cost report adapter."""

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from costlens.core.exceptions import ReportError
from costlens.costs.report import (
    load_cost_report,
    normalize_polynomial,
    parameter_types_from_procedure_id,
    parse_cost_report,
)


def _hum(polynomial: str, degree: str | None, big_o: str) -> dict[str, Any]:
    hum: dict[str, Any] = {"hum_polynomial": polynomial, "big_o": big_o}
    if degree is not None:
        hum["hum_degree"] = degree
    return {"hum": hum}


RECORDS: list[dict[str, Any]] = [
    {
        "procedure_name": "<init>",
        "procedure_id": "Foo.<init>():void",
        "loc": {"file": "Foo.java", "lnum": 1},
        "exec_cost": _hum("3", "0", "O(1)"),
        "alloc_cost": _hum("0", "0", "O(1)"),
    },
    {
        "procedure_name": "sum",
        "procedure_id": "Foo.sum(int[],java.lang.String):int",
        "loc": {"file": "Foo.java", "lnum": 12},
        "exec_cost": {
            **_hum("5 + 3 ⋅ a.length", "1", "O(a.length)"),
            "trace": [
                {
                    "level": 0,
                    "filename": "Foo.java",
                    "line_number": 13,
                    "column_number": -1,
                    "description": "Loop",
                }
            ],
        },
        "alloc_cost": _hum("0", "0", "O(1)"),
    },
    {
        "procedure_name": "get",
        "procedure_id": "Foo.get():int",
        "loc": {"file": "Foo.java", "lnum": 5},
        "exec_cost": _hum("4", "0", "O(1)"),
        "alloc_cost": _hum("0", "0", "O(1)"),
    },
    {
        "procedure_name": "spin",
        "procedure_id": "Foo.spin(java.util.Map$Entry):void",
        "loc": {"file": "Foo.java", "lnum": 20},
        "exec_cost": _hum("Top", None, "O(⊤)"),
        "alloc_cost": _hum("0", "0", "O(1)"),
    },
]


class TestParseCostReport:
    """Tests for parse_cost_report()."""

    def test_constructors_dropped_and_sorted(self) -> None:
        entries = parse_cost_report(RECORDS, "src/Foo.java")
        assert [e.method_name for e in entries] == ["get", "sum", "spin"]

    def test_entry_fields(self) -> None:
        entry = parse_cost_report(RECORDS, "src/Foo.java")[1]
        assert entry.id == "src/Foo.java:Foo.sum(int[],java.lang.String):int"
        assert entry.parameter_types == ["int[]", "String"]
        assert entry.identity == "sum(int[],String)"
        assert entry.loc.line == 12
        assert entry.exec_cost.polynomial == "5 + 3 * a.length"
        assert entry.exec_cost.degree == 1
        assert entry.exec_cost.big_o == "O(a.length)"
        assert entry.alloc_cost.is_constant
        assert entry.trace[0].line == 13
        assert entry.trace[0].description == "Loop"
        assert entry.timestamp is None
        assert entry.change_cause_methods is None

    def test_unbounded_degree(self) -> None:
        entry = parse_cost_report(RECORDS, "src/Foo.java")[2]
        assert entry.exec_cost.degree is None
        assert not entry.exec_cost.is_constant
        assert entry.parameter_types == ["Entry"]

    def test_ids_stable_across_runs(self) -> None:
        first = parse_cost_report(RECORDS, "Foo.java")
        second = parse_cost_report(copy.deepcopy(RECORDS), "Foo.java")
        assert [e.id for e in first] == [e.id for e in second]

    def test_source_file_defaults_to_record_location(self) -> None:
        entry = parse_cost_report(RECORDS, "")[0]
        assert entry.id == "Foo.java:Foo.get():int"

    def test_missing_procedure_id(self) -> None:
        record = {k: v for k, v in RECORDS[2].items() if k != "procedure_id"}
        entry = parse_cost_report([record], "Foo.java")[0]
        assert entry.id == "Foo.java:get"
        assert entry.parameter_types == []

    def test_not_a_list(self) -> None:
        with pytest.raises(ReportError, match="JSON list"):
            parse_cost_report({"procedure_name": "x"}, "Foo.java")

    def test_malformed_record(self) -> None:
        with pytest.raises(ReportError, match="Malformed cost record #0"):
            parse_cost_report([{"procedure_name": "x"}], "Foo.java")


class TestNormalization:
    """Tests for polynomial and type normalization."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("3 ⋅ n", "3 * n"),
            ("2 . n + 1", "2 * n + 1"),
            ("n · m", "n * m"),
            ("this.size", "this.size"),
        ],
    )
    def test_normalize_polynomial(self, raw: str, expected: str) -> None:
        assert normalize_polynomial(raw) == expected

    def test_parameter_types(self) -> None:
        assert parameter_types_from_procedure_id("A.f(long,java.util.List):void") == [
            "long",
            "List",
        ]
        assert parameter_types_from_procedure_id("A.f():void") == []
        assert parameter_types_from_procedure_id("") == []


class TestLoadCostReport:
    """Tests for load_cost_report()."""

    def test_load(self, tmp_path: Path) -> None:
        path = tmp_path / "costs-report.json"
        path.write_text(json.dumps(RECORDS), encoding="utf-8")
        entries = load_cost_report(path, "Foo.java")
        assert len(entries) == 3

    def test_missing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "missing.json"
        with pytest.raises(ReportError, match="not found") as exc_info:
            load_cost_report(path)
        assert exc_info.value.path == path

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("[{", encoding="utf-8")
        with pytest.raises(ReportError, match="Invalid JSON"):
            load_cost_report(path)

    def test_malformed_record_mentions_path(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"procedure_name": "x"}]), encoding="utf-8")
        with pytest.raises(ReportError, match="bad.json"):
            load_cost_report(path)
