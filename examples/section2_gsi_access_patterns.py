#!/usr/bin/env python3
import os
from dotenv import load_dotenv

from ddbmigrate import INDEXES, DynamoDBStore, IndexNotReady, SingleTable

load_dotenv()

REGION = os.environ.get("AWS_REGION", "ap-southeast-1")
TABLE = os.environ.get("TABLE", "CustomersOrdersProducts")
POLL = float(os.environ.get("INDEX_POLL_SECONDS", "3"))

store = DynamoDBStore(region=REGION, endpoint_url=os.environ.get("DYNAMODB_ENDPOINT"))
tbl = SingleTable(store, TABLE)

# One GSI per access pattern. DynamoDB builds one new GSI at a time,
# so each is created and polled until ACTIVE before the next is requested.
for pattern, index in INDEXES.items():
    print(f"{pattern:22} -> {index.name} ({index.partition_attribute}, {index.sort_attribute})")
print("Created:", tbl.create_indexes(poll_interval=POLL) or "nothing, all present")

try:
    # SQL: SELECT * FROM Orders WHERE order_date BETWEEN :start AND :end
    print("Orders 2020-05-04 05:00 .. 2020-08-13 09:00 (inclusive):")
    for item in tbl.router.range_by_date("2020-05-04 05:00:00", "2020-08-13 09:00:00"):
        print("  ", item["order_id"], item["order_date"], item["order_status"])

    # SQL: SELECT * FROM Orders WHERE product_id = 3  (sparse: only orders carry order_product)
    print("Orders for product 3:", [i["order_id"] for i in tbl.router.equality_by_product("3")])

    # SQL: SELECT * FROM Products WHERE quantity < 100  (strictly less: product 5 has exactly 100)
    print("Low stock:", [(i["product_id"], i["product_quantity"]) for i in tbl.router.range_by_quantity(100)])
except IndexNotReady as e:
    print("Try again in a moment ->", e)
