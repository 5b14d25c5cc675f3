"""Tests for registry_access.report."""

import json

from registry_access.report import build_report
from registry_access.table_loader import load_table


def test_scenario_report(scenario_table):
    report = build_report(scenario_table)
    assert report.groups == ["Default", "Sales"]
    assert report.modules == ["Orders"]
    assert report.matrix[("Orders", "Sales")] is True
    assert report.explanations["Sales"] == []


def test_to_dict(sample_csv_path):
    report = build_report(load_table(sample_csv_path))
    data = report.to_dict()

    assert data["source"] == "registry_sample.csv"
    assert data["rows"] == 9
    assert data["columns"] == 14
    assert data["group_count"] == 4
    assert data["groups"] == ["Default", "Admin", "Sales", "Warehouse Staff"]
    assert data["matrix"]["Stock"]["Warehouse Staff"] is True
    assert data["explanations"]["Default"] == ["Invoices", "Orders"]
    assert data["fallback_groups"] == ["Sales"]
    # Must survive a JSON round trip unchanged
    assert json.loads(json.dumps(data)) == data


def test_empty_table_report(make_table):
    report = build_report(make_table())
    data = report.to_dict()
    assert data["groups"] == []
    assert data["modules"] == []
    assert data["matrix"] == {}
    assert data["explanations"] == {}
    assert data["fallback_groups"] == []
