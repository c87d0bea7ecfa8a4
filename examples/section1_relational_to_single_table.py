#!/usr/bin/env python3
import os
from dotenv import load_dotenv

from ddbmigrate import DynamoDBStore, EntityType, SingleTable, load_csv

load_dotenv()

REGION = os.environ.get("AWS_REGION", "ap-southeast-1")
TABLE = os.environ.get("TABLE", "CustomersOrdersProducts")

store = DynamoDBStore(region=REGION, endpoint_url=os.environ.get("DYNAMODB_ENDPOINT"))
tbl = SingleTable(store, TABLE)

# Three relational tables become ONE DynamoDB table
if TABLE not in tbl.list_tables():
    tbl.create_table()

# Every row is one item; the key carries the kind: CUSTOMER#1, ORDER#1, PRODUCT#1
counts = load_csv(store, TABLE)
print("Loaded:", {t.value: n for t, n in counts.items()})

# Point lookups by partition key - one round trip each
print("Order 4:", tbl.lookup_by_id("ORDER#4"))
print("Product 4:", tbl.lookup_by_id("PRODUCT#4"))
print("Missing:", tbl.lookup_by_id("ORDER#404"))  # None, not an error

# Typed read: the `type` discriminator says which entity the item holds
print("As entity:", tbl.get_entity("CUSTOMER#1", EntityType.CUSTOMER))
