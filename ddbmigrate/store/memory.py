"""In-process store used by the tests and for trying the samples offline."""

import copy

from loguru import logger

from ..errors import ConditionFailed, IndexAlreadyExists, IndexCreationInProgress, IndexNotReady, TableNotFound
from ..mapper import PARTITION_KEY, TYPE_ATTR
from .base import IndexStatus, Page, Store


class _IndexState:
    def __init__(self, index, activation_polls):
        self.index = index
        self.status = IndexStatus.CREATING
        self.polls_left = activation_polls


class MemoryStore(Store):
    """Dict-backed ``Store``.

    New indexes stay ``CREATING`` until their status has been polled
    ``activation_polls`` times; the next poll reports ``ACTIVE``.
    """

    def __init__(self, activation_polls=0):
        self.activation_polls = activation_polls
        self._items = {}
        self._indexes = {}

    def _table(self, table):
        if table not in self._items:
            raise TableNotFound(table)
        return self._items[table]

    def list_tables(self):
        return sorted(self._items)

    def create_table(self, table):
        if table in self._items:
            logger.debug(f"Table {table} already exists")
            return
        self._items[table] = {}
        self._indexes[table] = {}

    def delete_table(self, table):
        self._table(table)
        del self._items[table]
        del self._indexes[table]

    def put(self, table, record):
        # whole-item replace, whatever was stored under the key before
        self._table(table)[record[PARTITION_KEY]] = copy.deepcopy(record)

    def batch_put(self, table, records):
        count = 0
        for record in records:
            self.put(table, record)
            count += 1
        return count

    def get(self, table, key):
        item = self._table(table).get(key)
        return copy.deepcopy(item) if item is not None else None

    def _check(self, table, key, expected_type):
        item = self._table(table).get(key)
        if item is None or item.get(TYPE_ATTR) != expected_type:
            raise ConditionFailed(key, copy.deepcopy(item))
        return item

    def delete(self, table, key, expected_type):
        self._check(table, key, expected_type)
        del self._items[table][key]

    def update(self, table, key, values, expected_type):
        item = self._check(table, key, expected_type)
        item.update(copy.deepcopy(values))
        return copy.deepcopy(item)

    def query(self, table, index_name, condition, limit=None, start_key=None):
        items = self._table(table)
        state = self._indexes[table].get(index_name)
        if state is None:
            raise IndexNotReady(index_name, None)
        index = state.index

        matched = [
            item
            for item in items.values()
            if condition.matches(item) and (index.sort_attribute is None or index.sort_attribute in item)
        ]
        if index.sort_attribute is not None:
            matched.sort(key=lambda item: item[index.sort_attribute])

        if start_key is not None:
            keys = [item[PARTITION_KEY] for item in matched]
            try:
                matched = matched[keys.index(start_key[PARTITION_KEY]) + 1 :]
            except ValueError:
                matched = []

        last_key = None
        if limit is not None and len(matched) > limit:
            matched = matched[:limit]
            last_key = {PARTITION_KEY: matched[-1][PARTITION_KEY]}
        return Page(items=copy.deepcopy(matched), last_evaluated_key=last_key)

    def create_index(self, table, index):
        self._table(table)
        indexes = self._indexes[table]
        if index.name in indexes:
            raise IndexAlreadyExists(table, index.name)
        for name, state in indexes.items():
            if state.status is IndexStatus.CREATING:
                raise IndexCreationInProgress(table, name)
        indexes[index.name] = _IndexState(index, self.activation_polls)

    def index_status(self, table, index_name):
        self._table(table)
        state = self._indexes[table].get(index_name)
        if state is None:
            return None
        if state.status is IndexStatus.CREATING:
            if state.polls_left > 0:
                state.polls_left -= 1
            else:
                state.status = IndexStatus.ACTIVE
        return state.status

    def fail_index(self, table, index_name):
        self._indexes[table][index_name].status = IndexStatus.FAILED
