"""Global secondary indexes, one per non-key access pattern.

Each index answers exactly one query shape:

    orders_by_date        type = ORDER     AND order_date BETWEEN start AND end
    orders_by_product     order_product = :product_id
    products_by_quantity  type = PRODUCT   AND product_quantity < :threshold

The indexes are sparse: an item only shows up when it carries both key
attributes, so customers never land in any of them.
"""

import time
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from .errors import IndexNotReady
from .store.base import IndexStatus


@dataclass(frozen=True)
class SecondaryIndex:
    name: str
    partition_attribute: str
    partition_type: str
    sort_attribute: Optional[str] = None
    sort_type: Optional[str] = None


ORDERS_BY_DATE = "orders_by_date"
ORDERS_BY_PRODUCT = "orders_by_product"
PRODUCTS_BY_QUANTITY = "products_by_quantity"

INDEXES = {
    ORDERS_BY_DATE: SecondaryIndex("GSI1_OrderDate", "type", "S", "order_date", "S"),
    ORDERS_BY_PRODUCT: SecondaryIndex("GSI2_OrderProduct", "order_product", "S"),
    PRODUCTS_BY_QUANTITY: SecondaryIndex("GSI3_ProductQuantity", "type", "S", "product_quantity", "N"),
}


def wait_for_index(store, table, index, poll_interval=3.0, timeout=600.0):
    """Poll until ``index`` is ACTIVE. Raises ``IndexNotReady`` on failure or timeout."""
    deadline = time.monotonic() + timeout
    while True:
        status = store.index_status(table, index.name)
        if status is IndexStatus.ACTIVE:
            return
        if status is IndexStatus.FAILED or status is None:
            raise IndexNotReady(index.name, status)
        if time.monotonic() >= deadline:
            raise IndexNotReady(index.name, status)
        logger.debug(f"{index.name} is {status.value}; checking again in {poll_interval}s")
        time.sleep(poll_interval)


def create_indexes(store, table, patterns=None, poll_interval=3.0, timeout=600.0):
    """Create the indexes for ``patterns`` (all by default), one at a time.

    DynamoDB rejects a second index while another is still being built, so
    each request waits for the previous index to become ACTIVE. Indexes that
    already exist are left alone. Returns the names of the indexes created.
    """
    created = []
    for pattern in patterns or list(INDEXES):
        index = INDEXES[pattern]
        status = store.index_status(table, index.name)
        if status is not None:
            logger.info(f"Index {index.name} already exists ({status.value})")
            if status is IndexStatus.CREATING:
                wait_for_index(store, table, index, poll_interval, timeout)
            continue
        store.create_index(table, index)
        wait_for_index(store, table, index, poll_interval, timeout)
        logger.info(f"Index {index.name} is active")
        created.append(index.name)
    return created
