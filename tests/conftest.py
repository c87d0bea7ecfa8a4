"""Shared fixtures."""

import pytest

from ddbmigrate import MemoryStore, SingleTable, load_csv

TABLE = "CustomersOrdersProducts"


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def table(store):
    """An empty shared table."""
    st = SingleTable(store, TABLE)
    st.create_table()
    return st


@pytest.fixture
def loaded(table):
    """The shared table with the sample data loaded and every index active."""
    load_csv(table.store, table.table)
    table.create_indexes(poll_interval=0)
    return table


@pytest.fixture
def aws_credentials(monkeypatch):
    """Mocked AWS Credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
