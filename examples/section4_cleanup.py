#!/usr/bin/env python3
import os
from botocore.exceptions import ClientError
from dotenv import load_dotenv

from ddbmigrate import DynamoDBStore, SingleTable

load_dotenv()

REGION = os.environ.get("AWS_REGION", "ap-southeast-1")
TABLE = os.environ.get("TABLE", "CustomersOrdersProducts")

tbl = SingleTable(DynamoDBStore(region=REGION, endpoint_url=os.environ.get("DYNAMODB_ENDPOINT")), TABLE)
try:
    tbl.delete_table()
    print("Deleted", TABLE)
except ClientError as e:
    print("Nothing deleted ->", e.response["Error"]["Code"], e.response["Error"].get("Message"))
print("Remaining tables:", tbl.list_tables())
