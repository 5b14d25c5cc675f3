"""Tests for registry_access.permission_matrix."""

import pytest

from registry_access.group_extractor import extract_groups
from registry_access.permission_matrix import build_permission_matrix
from registry_access.table_loader import Record, load_table


def group_row(group, key3, key4="", value=""):
    return Record(key1="Group", key2=group, key3=key3, key4=key4, value=value)


def test_scenario_matrix(scenario_table):
    modules, matrix = build_permission_matrix(scenario_table, ["Default", "Sales"])
    assert modules == ["Orders"]
    assert matrix.to_dict() == {"Orders": {"Default": True, "Sales": True}}


def test_fixture_matrix(sample_csv_path):
    table = load_table(sample_csv_path)
    groups = extract_groups(table)
    modules, matrix = build_permission_matrix(table, groups)

    assert modules == ["Orders", "Stock", "Invoices"]
    assert matrix[("Orders", "Default")] is True
    assert matrix[("Orders", "Sales")] is True
    assert matrix[("Orders", "Admin")] is False
    assert matrix[("Stock", "Warehouse Staff")] is True
    assert matrix[("Stock", "Default")] is False
    # Invoices only appears on a non-group "Table" row
    assert not any(matrix[("Invoices", g)] for g in groups)


def test_matrix_is_dense(sample_csv_path):
    table = load_table(sample_csv_path)
    groups = extract_groups(table)
    modules, matrix = build_permission_matrix(table, groups)

    assert len(matrix) == len(modules) * len(groups)
    for module in modules:
        for group in groups:
            assert (module, group) in matrix
            assert isinstance(matrix[(module, group)], bool)


def test_cell_true_iff_matching_record(make_table):
    records = [
        group_row("A", "Table", key4="M1"),
        group_row("B", "Table Access", value="M1"),
        Record(key1="User", key2="B", key3="Table", key4="M2"),
        group_row("B", "Table", key4="M2"),
    ]
    table = make_table(*records)
    groups = ["A", "B"]
    modules, matrix = build_permission_matrix(table, groups)

    for module in modules:
        for group in groups:
            expected = any(
                r.key1 == "Group" and r.key2 == group and r.key3 == "Table" and r.key4 == module
                for r in records
            )
            assert matrix[(module, group)] == expected


def test_modules_keep_first_seen_order(make_table):
    table = make_table(
        group_row("A", "Table", key4="Zebra"),
        group_row("A", "Table", key4="Apple"),
        group_row("B", "Table", key4="Zebra"),
        group_row("B", "Table", key4="Mango"),
    )
    modules, _ = build_permission_matrix(table, ["A", "B"])
    assert modules == ["Zebra", "Apple", "Mango"]


def test_rows_follow_group_order(make_table):
    table = make_table(group_row("B", "Table", key4="M"))
    _, matrix = build_permission_matrix(table, ["A", "B"])
    assert list(matrix.rows()) == [("M", [False, True])]
    assert matrix.has_access("M", "B")


def test_no_groups_gives_empty_matrix(make_table):
    table = make_table(group_row("A", "Table", key4="M"))
    modules, matrix = build_permission_matrix(table, [])
    assert modules == ["M"]
    assert len(matrix) == 0
    assert list(matrix.rows()) == [("M", [])]


def test_no_modules_gives_empty_matrix(make_table):
    table = make_table(group_row("A", "Setting"))
    modules, matrix = build_permission_matrix(table, ["A"])
    assert modules == []
    assert matrix.to_dict() == {}


def test_unknown_pair_raises_key_error(scenario_table):
    _, matrix = build_permission_matrix(scenario_table, ["Default"])
    with pytest.raises(KeyError):
        matrix[("Orders", "Sales")]


def test_table_not_mutated(scenario_table):
    before = list(scenario_table.records)
    build_permission_matrix(scenario_table, ["Default", "Sales"])
    assert list(scenario_table.records) == before
