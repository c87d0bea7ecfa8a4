"""The three relational record kinds that share one DynamoDB table.

Each kind is a plain dataclass. ``Entity`` is the tagged union of the three;
the tag is ``EntityType`` and is stored on every item as ``type``.
"""

from dataclasses import astuple, dataclass, fields
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Union


class EntityType(str, Enum):
    CUSTOMER = "CUSTOMER"
    ORDER = "ORDER"
    PRODUCT = "PRODUCT"

    @classmethod
    def parse(cls, value):
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValueError(f"Unknown entity type: {value!r}") from None

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Customer:
    id: str
    name: str
    address: str
    email: str

    entity_type = EntityType.CUSTOMER


@dataclass(frozen=True)
class Order:
    id: str
    customer_id: str
    product_id: str
    order_date: str  # YYYY-MM-DD HH:MM:SS
    status: str

    entity_type = EntityType.ORDER


@dataclass(frozen=True)
class Product:
    id: str
    description: str
    quantity: int
    cost: Decimal

    entity_type = EntityType.PRODUCT


Entity = Union[Customer, Order, Product]

ENTITY_CLASSES = {
    EntityType.CUSTOMER: Customer,
    EntityType.ORDER: Order,
    EntityType.PRODUCT: Product,
}

# Bulk-load file per kind; the header row of each file is the field list.
CSV_FILES = {
    EntityType.CUSTOMER: "customers.csv",
    EntityType.ORDER: "orders.csv",
    EntityType.PRODUCT: "products.csv",
}


def field_names(entity_type):
    return [f.name for f in fields(ENTITY_CLASSES[entity_type])]


def coerce(entity_type, name, value):
    """Convert a raw string (CSV cell, CLI value) to the field's Python type."""
    if entity_type is EntityType.PRODUCT and name == "quantity":
        return int(value)
    if entity_type is EntityType.PRODUCT and name == "cost":
        try:
            cost = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"{name} must be a number, got {value!r}") from None
        # NaN and Infinity cannot be written to DynamoDB
        if not cost.is_finite():
            raise ValueError(f"{name} must be a number, got {value!r}")
        return cost
    return str(value)


def from_row(entity_type, row):
    """Build an entity from a parsed CSV row (a dict keyed by column name)."""
    names = field_names(entity_type)
    missing = [n for n in names if n not in row]
    if missing:
        raise ValueError(f"{entity_type} row is missing columns: {', '.join(missing)}")
    # DictReader fills short rows with None
    values = {n: coerce(entity_type, n, (row[n] or "").strip()) for n in names}
    return ENTITY_CLASSES[entity_type](**values)


def to_row(entity):
    return dict(zip(field_names(entity.entity_type), (str(v) for v in astuple(entity))))
