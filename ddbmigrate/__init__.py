"""Relational customers/orders/products data migrated into one DynamoDB table."""

from .bulk_load import load_csv
from .config import Settings
from .entities import Customer, Entity, EntityType, Order, Product
from .errors import (
    IndexAlreadyExists,
    IndexCreationInProgress,
    IndexNotReady,
    ItemNotFound,
    MigrationError,
    NotApplicable,
    TypeMismatch,
)
from .indexes import INDEXES, SecondaryIndex, create_indexes, wait_for_index
from .mapper import from_physical, partition_key_for, to_physical
from .router import QueryResult, QueryRouter
from .store import DynamoDBStore, IndexStatus, MemoryStore, Store
from .table import SingleTable

__all__ = [
    "Customer",
    "DynamoDBStore",
    "Entity",
    "EntityType",
    "INDEXES",
    "IndexAlreadyExists",
    "IndexCreationInProgress",
    "IndexNotReady",
    "IndexStatus",
    "ItemNotFound",
    "MemoryStore",
    "MigrationError",
    "NotApplicable",
    "Order",
    "Product",
    "QueryResult",
    "QueryRouter",
    "SecondaryIndex",
    "Settings",
    "SingleTable",
    "Store",
    "TypeMismatch",
    "create_indexes",
    "from_physical",
    "load_csv",
    "partition_key_for",
    "to_physical",
    "wait_for_index",
]
