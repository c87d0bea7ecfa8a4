"""Import the relational CSV exports into the shared table."""

import csv
from importlib import resources
from pathlib import Path

from loguru import logger

from .entities import CSV_FILES, EntityType, from_row
from .mapper import to_physical

SAMPLE_DATA = resources.files("ddbmigrate") / "data"


def read_entities(data_dir, entity_type):
    path = Path(data_dir) / CSV_FILES[entity_type]
    with open(path, newline="", encoding="utf-8") as fh:
        for row in csv.DictReader(fh):
            yield from_row(entity_type, row)


def load_csv(store, table, data_dir=None):
    """Write every row of customers.csv, orders.csv and products.csv.

    Each row becomes one item under its default ``TYPE#id`` key. Returns the
    number of items written per kind.
    """
    data_dir = data_dir or SAMPLE_DATA
    counts = {}
    for entity_type in EntityType:
        records = (to_physical(e) for e in read_entities(data_dir, entity_type))
        counts[entity_type] = store.batch_put(table, records)
        logger.info(f"Loaded {counts[entity_type]} {entity_type.value.lower()} items into {table}")
    return counts
