import os

import pytest

from registry_access.table_loader import Record, Table

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


def group_row(group, key3, key4="", value=""):
    return Record(key1="Group", key2=group, key3=key3, key4=key4, value=value)


@pytest.fixture
def sample_csv_path():
    return os.path.join(FIXTURES_DIR, "registry_sample.csv")


@pytest.fixture
def make_table():
    def _make(*records):
        return Table(records, source="test.csv")
    return _make


@pytest.fixture
def scenario_table(make_table):
    """Three-row registry: Default grants Orders and Invoices, Sales grants nothing."""
    return make_table(
        group_row("Default", "Table", key4="Orders"),
        group_row("Default", "Table Access", value="Orders;Invoices"),
        group_row("Sales", "Table", key4="Orders"),
    )
