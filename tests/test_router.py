"""Unit tests for QueryRouter against the sample data."""

from itertools import islice

import pytest

from ddbmigrate import MemoryStore, QueryRouter, SingleTable, load_csv
from ddbmigrate.errors import IndexNotReady
from ddbmigrate.indexes import INDEXES, ORDERS_BY_DATE
from ddbmigrate.store import IndexStatus


def order_ids(items):
    return [item["order_id"] for item in items]


def test_lookup_by_id(loaded):
    item = loaded.router.lookup_by_id("PRODUCT#4")

    assert item["product_description"] == "Gizmo"
    assert item["product_quantity"] == 45


def test_lookup_missing_key_is_none(loaded):
    assert loaded.router.lookup_by_id("ORDER#999") is None
    assert loaded.router.lookup_by_id("4") is None


def test_range_by_date_sample(loaded):
    """Test the documented date range returns orders 1, 11 and 12, oldest first."""
    items = loaded.router.range_by_date("2020-05-04 05:00:00", "2020-08-13 09:00:00").all()

    assert order_ids(items) == ["1", "11", "12"]
    assert all(item["type"] == "ORDER" for item in items)


def test_range_by_date_single_instant(loaded):
    items = loaded.router.range_by_date("2020-08-13 09:00:00", "2020-08-13 09:00:00").all()

    assert order_ids(items) == ["12"]


def test_range_by_date_sorted_ascending(loaded):
    items = loaded.router.range_by_date("2020-01-01 00:00:00", "2020-12-31 23:59:59").all()

    dates = [item["order_date"] for item in items]
    assert len(items) == 12
    assert dates == sorted(dates)


def test_range_by_date_empty(loaded):
    assert loaded.router.range_by_date("2019-01-01 00:00:00", "2019-12-31 23:59:59").all() == []


def test_equality_by_product(loaded):
    items = loaded.router.equality_by_product("3").all()

    assert sorted(order_ids(items)) == ["4", "8"]


def test_equality_by_product_accepts_int(loaded):
    assert sorted(order_ids(loaded.router.equality_by_product(3))) == ["4", "8"]


def test_equality_by_product_no_orders(loaded):
    assert loaded.router.equality_by_product("99").all() == []


def test_range_by_quantity_sample(loaded):
    items = loaded.router.range_by_quantity(100).all()

    assert [item["product_id"] for item in items] == ["4"]
    assert items[0]["product_quantity"] == 45


@pytest.mark.parametrize(
    "threshold, expected",
    [(45, []), (46, ["4"]), (100, ["4"]), (101, ["4", "5"])],
)
def test_range_by_quantity_is_strict(loaded, threshold, expected):
    items = loaded.router.range_by_quantity(threshold).all()

    assert [item["product_id"] for item in items] == expected


def test_query_follows_pages(loaded):
    """Test a small page size still yields every item, over several pages."""
    result = loaded.router.range_by_date("2020-01-01 00:00:00", "2020-12-31 23:59:59", page_size=5)

    items = list(result)

    assert len(items) == 12
    assert result.pages_fetched == 3
    assert result.last_evaluated_key is None


def test_query_resumes_from_continuation_key(loaded):
    # GIVEN a query read up to the end of its first page
    first = loaded.router.range_by_date("2020-01-01 00:00:00", "2020-12-31 23:59:59", page_size=5)
    head = list(islice(first, 5))
    assert first.last_evaluated_key is not None

    # WHEN the query is issued again from the continuation key
    rest = loaded.router.range_by_date(
        "2020-01-01 00:00:00", "2020-12-31 23:59:59", page_size=5, start_key=first.last_evaluated_key
    ).all()

    # THEN the two parts make up the whole result
    assert len(head) + len(rest) == 12
    assert not set(order_ids(head)) & set(order_ids(rest))


def test_query_result_is_single_pass(loaded):
    result = loaded.router.equality_by_product("3")
    list(result)

    with pytest.raises(RuntimeError, match="only be iterated once"):
        list(result)


def test_query_against_creating_index():
    """Test querying a provisioning index raises instead of returning nothing."""
    # GIVEN an index that is still being created
    store = MemoryStore(activation_polls=5)
    st = SingleTable(store, "t")
    st.create_table()
    load_csv(store, "t")
    store.create_index("t", INDEXES[ORDERS_BY_DATE])
    router = QueryRouter(store, "t")

    # WHEN / THEN
    with pytest.raises(IndexNotReady) as exc:
        router.range_by_date("2020-05-04 05:00:00", "2020-08-13 09:00:00")
    assert exc.value.status is IndexStatus.CREATING


def test_query_against_missing_index(table):
    with pytest.raises(IndexNotReady, match="missing"):
        table.router.range_by_quantity(100)


def test_query_against_failed_index(table):
    table.store.create_index(table.table, INDEXES[ORDERS_BY_DATE])
    table.store.fail_index(table.table, "GSI1_OrderDate")

    with pytest.raises(IndexNotReady):
        table.router.range_by_date("2020-01-01 00:00:00", "2020-12-31 23:59:59")
