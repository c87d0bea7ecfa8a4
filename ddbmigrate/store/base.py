"""The narrow set of store calls the rest of the package relies on."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional


class IndexStatus(str, Enum):
    CREATING = "CREATING"
    ACTIVE = "ACTIVE"
    FAILED = "FAILED"


@dataclass(frozen=True)
class KeyCondition:
    """Equality on the partition attribute, plus an optional sort key test.

    ``sort_op`` is one of ``"between"`` (inclusive, two values) or ``"lt"``.
    """

    partition_attribute: str
    partition_value: Any
    sort_attribute: Optional[str] = None
    sort_op: Optional[str] = None
    sort_values: tuple = ()

    def __post_init__(self):
        if self.sort_op not in (None, "between", "lt"):
            raise ValueError(f"Unsupported sort key operator: {self.sort_op}")
        if self.sort_op == "between" and len(self.sort_values) != 2:
            raise ValueError("between needs exactly two values")
        if self.sort_op == "lt" and len(self.sort_values) != 1:
            raise ValueError("lt needs exactly one value")

    def matches(self, item):
        if item.get(self.partition_attribute) != self.partition_value:
            return False
        if self.sort_op is None:
            return True
        value = item.get(self.sort_attribute)
        if value is None:
            return False
        if self.sort_op == "between":
            low, high = self.sort_values
            return low <= value <= high
        return value < self.sort_values[0]


@dataclass
class Page:
    items: list = field(default_factory=list)
    last_evaluated_key: Optional[dict] = None


class Store(ABC):
    @abstractmethod
    def list_tables(self) -> list:
        ...

    @abstractmethod
    def create_table(self, table: str) -> None:
        ...

    @abstractmethod
    def delete_table(self, table: str) -> None:
        ...

    @abstractmethod
    def put(self, table: str, record: dict) -> None:
        ...

    @abstractmethod
    def batch_put(self, table: str, records: Iterable[dict]) -> int:
        """Write every record; returns how many were written."""

    @abstractmethod
    def get(self, table: str, key: str) -> Optional[dict]:
        ...

    @abstractmethod
    def delete(self, table: str, key: str, expected_type: str) -> None:
        """Delete ``key`` if its stored type is ``expected_type``.

        Raises ``ConditionFailed`` otherwise (including when the key is absent).
        """

    @abstractmethod
    def update(self, table: str, key: str, values: dict, expected_type: str) -> dict:
        """Set ``values`` on an existing item of ``expected_type``.

        Returns the updated item. Raises ``ConditionFailed`` carrying the
        existing item (or ``None``) when the condition does not hold.
        """

    @abstractmethod
    def query(
        self,
        table: str,
        index_name: str,
        condition: KeyCondition,
        limit: Optional[int] = None,
        start_key: Optional[dict] = None,
    ) -> Page:
        ...

    @abstractmethod
    def create_index(self, table: str, index) -> None:
        """Request creation of a ``SecondaryIndex``; does not wait for it."""

    @abstractmethod
    def index_status(self, table: str, index_name: str) -> Optional[IndexStatus]:
        """Current status, or ``None`` when the table has no such index."""
