from .base import IndexStatus, KeyCondition, Page, Store
from .dynamodb import DynamoDBStore
from .memory import MemoryStore

__all__ = ["DynamoDBStore", "IndexStatus", "KeyCondition", "MemoryStore", "Page", "Store"]
