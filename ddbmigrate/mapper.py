"""Map entities to and from the flat items stored in the shared table.

Item layout::

    {"PK": "ORDER#1", "type": "ORDER", "order_id": "1", "order_customer": "2", ...}

Every attribute carries its kind as a prefix, so the union of the three kinds
never collides and items only hold their own attributes.
"""

from decimal import Decimal

from .entities import ENTITY_CLASSES, EntityType, field_names
from .errors import TypeMismatch

PARTITION_KEY = "PK"
TYPE_ATTR = "type"

# logical field name -> physical attribute name, per kind
ATTRIBUTE_NAMES = {
    EntityType.CUSTOMER: {
        "id": "customer_id",
        "name": "customer_name",
        "address": "customer_address",
        "email": "customer_email",
    },
    EntityType.ORDER: {
        "id": "order_id",
        "customer_id": "order_customer",
        "product_id": "order_product",
        "order_date": "order_date",
        "status": "order_status",
    },
    EntityType.PRODUCT: {
        "id": "product_id",
        "description": "product_description",
        "quantity": "product_quantity",
        "cost": "product_cost",
    },
}


def partition_key_for(entity_type, entity_id):
    return f"{EntityType.parse(entity_type).value}#{entity_id}"


def attribute_name(entity_type, field):
    names = ATTRIBUTE_NAMES[EntityType.parse(entity_type)]
    if field not in names:
        raise ValueError(f"{entity_type} has no field {field!r}")
    return names[field]


def to_physical(entity, partition_key=None):
    """Return the item for ``entity``.

    ``partition_key`` defaults to ``TYPE#id``. A caller-supplied key is used as
    is; keys share one namespace across all kinds.
    """
    entity_type = entity.entity_type
    item = {
        PARTITION_KEY: partition_key or partition_key_for(entity_type, entity.id),
        TYPE_ATTR: entity_type.value,
    }
    for field, attr in ATTRIBUTE_NAMES[entity_type].items():
        item[attr] = getattr(entity, field)
    return item


def record_type(record):
    raw = record.get(TYPE_ATTR)
    try:
        return EntityType(raw)
    except ValueError:
        return None


def from_physical(record, expected=None):
    """Rebuild the entity held in ``record``.

    ``expected`` is an ``EntityType`` (or a tuple of them) the caller is
    prepared to handle; anything else raises ``TypeMismatch``.
    """
    key = record.get(PARTITION_KEY)
    entity_type = record_type(record)
    if expected is not None:
        allowed = expected if isinstance(expected, tuple) else (expected,)
        allowed = tuple(EntityType.parse(t) for t in allowed)
        if entity_type not in allowed:
            expected_label = "/".join(t.value for t in allowed)
            raise TypeMismatch(key, expected_label, record.get(TYPE_ATTR))
    elif entity_type is None:
        raise TypeMismatch(key, "CUSTOMER/ORDER/PRODUCT", record.get(TYPE_ATTR))

    values = {}
    for field in field_names(entity_type):
        values[field] = _from_store(entity_type, field, record.get(ATTRIBUTE_NAMES[entity_type][field]))
    return ENTITY_CLASSES[entity_type](**values)


def _from_store(entity_type, field, value):
    # boto3 hands every number back as Decimal
    if entity_type is EntityType.PRODUCT and field == "quantity":
        return int(value)
    if entity_type is EntityType.PRODUCT and field == "cost":
        return value if isinstance(value, Decimal) else Decimal(str(value))
    return value
