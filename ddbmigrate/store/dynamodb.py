"""``Store`` backed by Amazon DynamoDB through boto3."""

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError
from loguru import logger

from ..errors import ConditionFailed, IndexAlreadyExists, IndexCreationInProgress
from ..mapper import PARTITION_KEY, TYPE_ATTR
from .base import IndexStatus, Page, Store

THROUGHPUT = {"ReadCapacityUnits": 5, "WriteCapacityUnits": 5}

_STATUS = {
    "CREATING": IndexStatus.CREATING,
    "UPDATING": IndexStatus.ACTIVE,
    "ACTIVE": IndexStatus.ACTIVE,
}


def _condition_failed(error):
    return error.response["Error"]["Code"] == "ConditionalCheckFailedException"


class DynamoDBStore(Store):
    def __init__(self, region=None, endpoint_url=None, session=None):
        session = session or boto3.session.Session()
        self.client = session.client("dynamodb", region_name=region, endpoint_url=endpoint_url)
        self.resource = session.resource("dynamodb", region_name=region, endpoint_url=endpoint_url)

    def _tbl(self, table):
        return self.resource.Table(table)

    def list_tables(self):
        names = []
        for page in self.client.get_paginator("list_tables").paginate():
            names.extend(page["TableNames"])
        return names

    def create_table(self, table):
        logger.info(f"Creating table {table}")
        self.client.create_table(
            TableName=table,
            AttributeDefinitions=[{"AttributeName": PARTITION_KEY, "AttributeType": "S"}],
            KeySchema=[{"AttributeName": PARTITION_KEY, "KeyType": "HASH"}],
            ProvisionedThroughput=THROUGHPUT,
        )
        self.client.get_waiter("table_exists").wait(TableName=table)

    def delete_table(self, table):
        logger.info(f"Deleting table {table}")
        self.client.delete_table(TableName=table)
        self.client.get_waiter("table_not_exists").wait(TableName=table)

    def put(self, table, record):
        logger.debug(f"put_item {record[PARTITION_KEY]} into {table}")
        self._tbl(table).put_item(Item=record)

    def batch_put(self, table, records):
        count = 0
        with self._tbl(table).batch_writer() as bw:
            for record in records:
                bw.put_item(Item=record)
                count += 1
        logger.debug(f"batch wrote {count} items into {table}")
        return count

    def get(self, table, key):
        resp = self._tbl(table).get_item(Key={PARTITION_KEY: key})
        return resp.get("Item")

    def delete(self, table, key, expected_type):
        try:
            self._tbl(table).delete_item(
                Key={PARTITION_KEY: key},
                ConditionExpression="#type = :type",
                ExpressionAttributeNames={"#type": TYPE_ATTR},
                ExpressionAttributeValues={":type": expected_type},
            )
        except ClientError as e:
            if _condition_failed(e):
                raise ConditionFailed(key) from e
            raise

    def update(self, table, key, values, expected_type):
        names = {"#type": TYPE_ATTR}
        attr_values = {":type": expected_type}
        assignments = []
        for n, (attr, value) in enumerate(values.items()):
            names[f"#f{n}"] = attr
            attr_values[f":f{n}"] = value
            assignments.append(f"#f{n} = :f{n}")
        try:
            resp = self._tbl(table).update_item(
                Key={PARTITION_KEY: key},
                UpdateExpression="SET " + ", ".join(assignments),
                ConditionExpression=f"attribute_exists({PARTITION_KEY}) AND #type = :type",
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=attr_values,
                ReturnValues="ALL_NEW",
            )
        except ClientError as e:
            if _condition_failed(e):
                raise ConditionFailed(key, self.get(table, key)) from e
            raise
        return resp["Attributes"]

    def query(self, table, index_name, condition, limit=None, start_key=None):
        expr = Key(condition.partition_attribute).eq(condition.partition_value)
        if condition.sort_op == "between":
            expr = expr & Key(condition.sort_attribute).between(*condition.sort_values)
        elif condition.sort_op == "lt":
            expr = expr & Key(condition.sort_attribute).lt(condition.sort_values[0])

        kwargs = {"IndexName": index_name, "KeyConditionExpression": expr}
        if limit is not None:
            kwargs["Limit"] = limit
        if start_key is not None:
            kwargs["ExclusiveStartKey"] = start_key
        resp = self._tbl(table).query(**kwargs)
        return Page(items=resp["Items"], last_evaluated_key=resp.get("LastEvaluatedKey"))

    def _describe(self, table):
        return self.client.describe_table(TableName=table)["Table"]

    def _indexes(self, table):
        return self._describe(table).get("GlobalSecondaryIndexes", []) or []

    def create_index(self, table, index):
        desc = self._describe(table)
        for gsi in desc.get("GlobalSecondaryIndexes", []) or []:
            if gsi["IndexName"] == index.name:
                raise IndexAlreadyExists(table, index.name)
            if gsi["IndexStatus"] == "CREATING":
                raise IndexCreationInProgress(table, gsi["IndexName"])

        definitions = {d["AttributeName"]: d["AttributeType"] for d in desc["AttributeDefinitions"]}
        definitions[index.partition_attribute] = index.partition_type
        key_schema = [{"AttributeName": index.partition_attribute, "KeyType": "HASH"}]
        if index.sort_attribute is not None:
            definitions[index.sort_attribute] = index.sort_type
            key_schema.append({"AttributeName": index.sort_attribute, "KeyType": "RANGE"})

        logger.info(f"Requesting index {index.name} on {table}")
        self.client.update_table(
            TableName=table,
            AttributeDefinitions=[{"AttributeName": n, "AttributeType": t} for n, t in definitions.items()],
            GlobalSecondaryIndexUpdates=[
                {
                    "Create": {
                        "IndexName": index.name,
                        "KeySchema": key_schema,
                        "Projection": {"ProjectionType": "ALL"},
                        "ProvisionedThroughput": THROUGHPUT,
                    }
                }
            ],
        )

    def index_status(self, table, index_name):
        for gsi in self._indexes(table):
            if gsi["IndexName"] == index_name:
                return _STATUS.get(gsi["IndexStatus"], IndexStatus.FAILED)
        return None
