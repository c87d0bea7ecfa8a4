"""Send each access pattern to the primary key or to the index built for it."""

from decimal import Decimal

from loguru import logger

from .entities import EntityType
from .errors import IndexNotReady
from .indexes import INDEXES, ORDERS_BY_DATE, ORDERS_BY_PRODUCT, PRODUCTS_BY_QUANTITY
from .store.base import IndexStatus, KeyCondition


class QueryResult:
    """Lazy, single-pass sequence of items from one index query.

    Pages are fetched as iteration reaches them and the store's continuation
    key is followed until the store reports no more. ``last_evaluated_key``
    holds the continuation key of the last page fetched; pass it back as
    ``start_key`` to resume a query in a later call.
    """

    def __init__(self, store, table, index_name, condition, page_size=None, start_key=None):
        self._store = store
        self._table = table
        self._index_name = index_name
        self._condition = condition
        self._page_size = page_size
        self._start_key = start_key
        self._consumed = False
        self.last_evaluated_key = None
        self.pages_fetched = 0

    def __iter__(self):
        if self._consumed:
            raise RuntimeError("QueryResult can only be iterated once; issue the query again")
        self._consumed = True
        return self._items()

    def _items(self):
        start_key = self._start_key
        while True:
            page = self._store.query(
                self._table, self._index_name, self._condition, limit=self._page_size, start_key=start_key
            )
            self.pages_fetched += 1
            self.last_evaluated_key = page.last_evaluated_key
            yield from page.items
            if page.last_evaluated_key is None:
                return
            start_key = page.last_evaluated_key

    def all(self):
        return list(self)


class QueryRouter:
    def __init__(self, store, table):
        self.store = store
        self.table = table

    def lookup_by_id(self, key):
        """Primary key lookup. ``None`` when nothing is stored under ``key``."""
        return self.store.get(self.table, key)

    def _index_query(self, pattern, condition, page_size, start_key):
        index = INDEXES[pattern]
        status = self.store.index_status(self.table, index.name)
        if status is not IndexStatus.ACTIVE:
            raise IndexNotReady(index.name, status)
        logger.debug(f"Querying {index.name} on {self.table}: {condition}")
        return QueryResult(self.store, self.table, index.name, condition, page_size, start_key)

    def range_by_date(self, start, end, page_size=None, start_key=None):
        """Orders dated from ``start`` to ``end`` inclusive, oldest first."""
        index = INDEXES[ORDERS_BY_DATE]
        condition = KeyCondition(
            index.partition_attribute, EntityType.ORDER.value, index.sort_attribute, "between", (start, end)
        )
        return self._index_query(ORDERS_BY_DATE, condition, page_size, start_key)

    def equality_by_product(self, product_id, page_size=None, start_key=None):
        """Orders for one product, in no particular order."""
        index = INDEXES[ORDERS_BY_PRODUCT]
        condition = KeyCondition(index.partition_attribute, str(product_id))
        return self._index_query(ORDERS_BY_PRODUCT, condition, page_size, start_key)

    def range_by_quantity(self, threshold, page_size=None, start_key=None):
        """Products with quantity strictly below ``threshold``."""
        index = INDEXES[PRODUCTS_BY_QUANTITY]
        condition = KeyCondition(
            index.partition_attribute,
            EntityType.PRODUCT.value,
            index.sort_attribute,
            "lt",
            (Decimal(str(threshold)),),
        )
        return self._index_query(PRODUCTS_BY_QUANTITY, condition, page_size, start_key)
