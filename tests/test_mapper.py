"""Unit tests for mapping entities to items and back."""

from decimal import Decimal

import pytest

from ddbmigrate.entities import Customer, EntityType, Order, Product
from ddbmigrate.errors import TypeMismatch
from ddbmigrate.mapper import attribute_name, from_physical, partition_key_for, to_physical

CUSTOMER = Customer(id="1", name="Ada Lovelace", address="12 Analytical Row", email="ada@example.org")
ORDER = Order(id="1", customer_id="1", product_id="3", order_date="2020-05-04 05:00:00", status="pending")
PRODUCT = Product(id="4", description="Gizmo", quantity=45, cost=Decimal("15.00"))


@pytest.mark.parametrize("entity", [CUSTOMER, ORDER, PRODUCT])
def test_round_trip(entity):
    assert from_physical(to_physical(entity)) == entity


def test_order_item_layout():
    """Test an order maps to prefixed attributes with a typed key."""
    item = to_physical(ORDER)

    assert item == {
        "PK": "ORDER#1",
        "type": "ORDER",
        "order_id": "1",
        "order_customer": "1",
        "order_product": "3",
        "order_date": "2020-05-04 05:00:00",
        "order_status": "pending",
    }


def test_other_kinds_attributes_are_absent():
    item = to_physical(PRODUCT)

    assert not any(name.startswith(("order_", "customer_")) for name in item)
    assert None not in item.values()


def test_caller_supplied_key():
    item = to_physical(CUSTOMER, partition_key="c-0001")

    assert item["PK"] == "c-0001"
    assert from_physical(item) == CUSTOMER


def test_partition_key_for():
    assert partition_key_for("product", "4") == "PRODUCT#4"
    assert partition_key_for(EntityType.ORDER, 12) == "ORDER#12"


def test_from_physical_numbers_from_store():
    """Test Decimal quantities, as boto3 returns them, come back as int."""
    # GIVEN an item the way DynamoDB hands it back
    item = to_physical(PRODUCT)
    item["product_quantity"] = Decimal("45")

    # WHEN we map it
    product = from_physical(item, EntityType.PRODUCT)

    # THEN types match the entity model
    assert product.quantity == 45
    assert isinstance(product.quantity, int)


def test_from_physical_wrong_expected_type():
    with pytest.raises(TypeMismatch) as exc:
        from_physical(to_physical(PRODUCT), EntityType.ORDER)

    assert exc.value.key == "PRODUCT#4"
    assert exc.value.expected == "ORDER"
    assert exc.value.actual == "PRODUCT"


def test_from_physical_accepts_any_of_several_types():
    expected = (EntityType.ORDER, EntityType.PRODUCT)

    assert from_physical(to_physical(PRODUCT), expected) == PRODUCT


def test_from_physical_unknown_discriminator():
    with pytest.raises(TypeMismatch):
        from_physical({"PK": "X#1", "type": "INVOICE"})


def test_attribute_name():
    assert attribute_name("order", "status") == "order_status"
    assert attribute_name(EntityType.PRODUCT, "quantity") == "product_quantity"
    with pytest.raises(ValueError, match="has no field"):
        attribute_name("customer", "status")
