#!/usr/bin/env python3
import os
from dotenv import load_dotenv

from ddbmigrate import DynamoDBStore, NotApplicable, SingleTable, TypeMismatch

load_dotenv()

REGION = os.environ.get("AWS_REGION", "ap-southeast-1")
TABLE = os.environ.get("TABLE", "CustomersOrdersProducts")

store = DynamoDBStore(region=REGION, endpoint_url=os.environ.get("DYNAMODB_ENDPOINT"))
tbl = SingleTable(store, TABLE)

# Object-mapping update: load as an Order, change it, write it back
print("Order 12 ->", tbl.update_order_status("ORDER#12", "shipped"))

# ...which quietly does nothing when the key holds something else
print("Product 4 ->", tbl.update_order_status("PRODUCT#4", "shipped"))  # None

# Low-level conditional update: same mistake raises instead
try:
    tbl.update_attributes("PRODUCT#4", "order", {"status": "shipped"})
except TypeMismatch as e:
    print("Expected TypeMismatch ->", e)

print("Restock ->", tbl.update_attributes("PRODUCT#4", "product", {"quantity": 145}))

# Delete needs the type tag; a wrong tag is a no-op, not an error
tbl.delete_entity("ORDER#9", "product")
print("Order 9 still there:", tbl.lookup_by_id("ORDER#9") is not None)

# Strict mode surfaces the same no-op as NotApplicable
try:
    SingleTable(store, TABLE, strict=True).delete_entity("ORDER#9", "product")
except NotApplicable as e:
    print("Strict ->", e)

tbl.delete_entity("ORDER#9", "order")
print("Order 9 after delete:", tbl.lookup_by_id("ORDER#9"))
