class MigrationError(Exception):
    """Base class for errors raised by ddbmigrate."""


class TableNotFound(MigrationError):
    def __init__(self, table):
        super().__init__(f"Table {table} does not exist")
        self.table = table


class ItemNotFound(MigrationError):
    def __init__(self, key):
        super().__init__(f"No item with key {key!r}")
        self.key = key


class TypeMismatch(MigrationError):
    def __init__(self, key, expected, actual):
        super().__init__(f"Item {key!r} is {actual}, expected {expected}")
        self.key = key
        self.expected = expected
        self.actual = actual


class IndexNotReady(MigrationError):
    def __init__(self, index_name, status):
        label = getattr(status, "value", None) or "missing"
        super().__init__(f"Index {index_name} is not active (status: {label})")
        self.index_name = index_name
        self.status = status


class IndexCreationInProgress(MigrationError):
    def __init__(self, table, index_name):
        super().__init__(
            f"Index {index_name} on {table} is still being created; "
            "wait for it before requesting another"
        )
        self.table = table
        self.index_name = index_name


class IndexAlreadyExists(MigrationError):
    def __init__(self, table, index_name):
        super().__init__(f"Index {index_name} already exists on {table}")
        self.table = table
        self.index_name = index_name


class NotApplicable(MigrationError):
    """Strict mode: the operation did not apply to the stored item."""

    def __init__(self, key, entity_type):
        super().__init__(f"Item {key!r} is not of type {entity_type}; nothing was changed")
        self.key = key
        self.entity_type = entity_type


class ConditionFailed(MigrationError):
    """A conditional write was rejected by the store."""

    def __init__(self, key, existing=None):
        super().__init__(f"Condition failed for {key!r}")
        self.key = key
        self.existing = existing
