"""Customers, orders and products in one table: lifecycle and writes.

Two ways of changing an item are offered, and they disagree on purpose:

* ``update_order_status`` loads the item as an ``Order`` and writes it back.
  If the key holds something else (or nothing) it quietly does nothing.
* ``update_attributes`` issues a conditional update against the stored type
  and raises ``TypeMismatch`` or ``ItemNotFound`` when it cannot apply.

``delete_entity`` is quiet in the same way as the first: a type tag that does
not match the stored item leaves the item in place and returns normally.
With ``strict=True`` both quiet paths raise ``NotApplicable`` instead.
"""

from dataclasses import replace

from loguru import logger

from .entities import EntityType, coerce
from .errors import ConditionFailed, ItemNotFound, NotApplicable, TypeMismatch
from .indexes import create_indexes
from .mapper import PARTITION_KEY, TYPE_ATTR, attribute_name, from_physical, record_type, to_physical
from .router import QueryRouter


class SingleTable:
    def __init__(self, store, table, strict=False):
        self.store = store
        self.table = table
        self.strict = strict
        self.router = QueryRouter(store, table)

    def list_tables(self):
        return self.store.list_tables()

    def create_table(self):
        self.store.create_table(self.table)

    def delete_table(self):
        self.store.delete_table(self.table)

    def create_indexes(self, poll_interval=3.0, timeout=600.0):
        return create_indexes(self.store, self.table, poll_interval=poll_interval, timeout=timeout)

    def put_entity(self, entity, partition_key=None):
        """Write ``entity``, replacing whatever the key held. Returns the key."""
        item = to_physical(entity, partition_key)
        self.store.put(self.table, item)
        return item[PARTITION_KEY]

    def lookup_by_id(self, key):
        return self.router.lookup_by_id(key)

    def get_entity(self, key, expected=None):
        record = self.router.lookup_by_id(key)
        if record is None:
            return None
        return from_physical(record, expected)

    def update_order_status(self, key, status):
        """Object-mapping update of an order's status.

        Returns the updated ``Order``, or ``None`` when the key does not hold
        an order (nothing is written in that case).
        """
        record = self.store.get(self.table, key)
        if record is None or record_type(record) is not EntityType.ORDER:
            logger.info(f"{key} is not an order; status left unchanged")
            if self.strict:
                raise NotApplicable(key, EntityType.ORDER.value)
            return None
        order = replace(from_physical(record, EntityType.ORDER), status=status)
        self.store.put(self.table, to_physical(order, key))
        return order

    def update_attributes(self, key, entity_type, values):
        """Conditional update of logical fields (``status``, ``quantity``...)."""
        entity_type = EntityType.parse(entity_type)
        if not values:
            raise ValueError("Nothing to update")
        if "id" in values:
            raise ValueError("The id of a stored item cannot be changed")
        physical = {
            attribute_name(entity_type, name): coerce(entity_type, name, value) for name, value in values.items()
        }
        try:
            updated = self.store.update(self.table, key, physical, entity_type.value)
        except ConditionFailed as e:
            if e.existing is None:
                raise ItemNotFound(key) from e
            raise TypeMismatch(key, entity_type.value, e.existing.get(TYPE_ATTR)) from e
        return from_physical(updated, entity_type)

    def delete_entity(self, key, entity_type):
        """Delete ``key`` when it holds an item of ``entity_type``."""
        entity_type = EntityType.parse(entity_type)
        try:
            self.store.delete(self.table, key, entity_type.value)
        except ConditionFailed as e:
            logger.info(f"{key} is not a {entity_type.value}; nothing deleted")
            if self.strict:
                raise NotApplicable(key, entity_type.value) from e
