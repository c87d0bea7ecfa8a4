"""ddbmigrate command line: one subcommand per sample operation."""

import argparse
import sys

from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from .bulk_load import load_csv
from .config import Settings
from .entities import EntityType, from_row
from .errors import MigrationError
from .mapper import attribute_name
from .store import DynamoDBStore
from .table import SingleTable


def _pairs(values):
    pairs = {}
    for value in values:
        name, sep, raw = value.partition("=")
        if not sep or not name:
            raise ValueError(f"Expected name=value, got {value!r}")
        pairs[name] = raw
    return pairs


def _print_items(items):
    n = 0
    for item in items:
        print(item)
        n += 1
    print(f"{n} item(s)")


def cmd_list_tables(st, args):
    for name in st.list_tables():
        print(name)


def cmd_create_table(st, args):
    st.create_table()
    print("Created table", st.table)


def cmd_delete_table(st, args):
    st.delete_table()
    print("Deleted table", st.table)


def cmd_create_indexes(st, args):
    created = st.create_indexes(poll_interval=args.poll_interval)
    print("Created indexes:", ", ".join(created) if created else "none (all present)")


def cmd_load_data(st, args):
    counts = load_csv(st.store, st.table, args.data_dir)
    for entity_type, count in counts.items():
        print(f"Loaded {count} {entity_type.value.lower()} item(s)")


def cmd_add_item(st, args):
    entity_type = EntityType.parse(args.type)
    values = _pairs(args.values)
    if "id" in values:
        raise ValueError("Give the id with --id, not as id=value")
    for name in values:
        attribute_name(entity_type, name)
    entity = from_row(entity_type, {**values, "id": args.id})
    key = st.put_entity(entity, args.key)
    print("Added", key)


def cmd_get_item(st, args):
    item = st.lookup_by_id(args.key)
    if item is None:
        print("No item with key", args.key)
    else:
        print(item)


def cmd_query_by_date(st, args):
    _print_items(st.router.range_by_date(args.start, args.end))


def cmd_query_by_product(st, args):
    _print_items(st.router.equality_by_product(args.product_id))


def cmd_query_low_stock(st, args):
    _print_items(st.router.range_by_quantity(args.minimum))


def cmd_update_item(st, args):
    entity = st.update_attributes(args.key, args.type, _pairs(args.values))
    print("Updated", entity)


def cmd_update_status(st, args):
    order = st.update_order_status(args.key, args.status)
    if order is None:
        print(f"{args.key} is not an order; nothing updated")
    else:
        print("Updated", order)


def cmd_delete_item(st, args):
    st.delete_entity(args.key, args.type)
    print("Deleted", args.key)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="ddbmigrate", description="Relational-to-DynamoDB single-table samples"
    )
    parser.add_argument("--table", help="Table name (default: $TABLE)")
    parser.add_argument("--region", help="AWS region (default: $AWS_REGION)")
    parser.add_argument("--endpoint-url", help="DynamoDB endpoint, e.g. DynamoDB Local")
    parser.add_argument(
        "--strict", action="store_true", default=None, help="Raise instead of ignoring type-mismatched writes"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list-tables", help="List tables").set_defaults(func=cmd_list_tables)
    sub.add_parser("create-table", help="Create the shared table").set_defaults(func=cmd_create_table)
    sub.add_parser("delete-table", help="Delete the shared table").set_defaults(func=cmd_delete_table)

    p = sub.add_parser("create-indexes", help="Create the secondary indexes, one at a time")
    p.add_argument("--poll-interval", type=float, default=None)
    p.set_defaults(func=cmd_create_indexes)

    p = sub.add_parser("load-data", help="Bulk load customers, orders and products from CSV")
    p.add_argument("--data-dir", help="Directory with customers.csv, orders.csv, products.csv")
    p.set_defaults(func=cmd_load_data)

    p = sub.add_parser("add-item", help="Add one customer, order or product")
    p.add_argument("--type", required=True, choices=[t.value.lower() for t in EntityType], type=str.lower)
    p.add_argument("--id", required=True, help="Entity id")
    p.add_argument("--key", help="Partition key to use instead of TYPE#id")
    p.add_argument("values", nargs="*", metavar="name=value")
    p.set_defaults(func=cmd_add_item)

    p = sub.add_parser("get-item", help="Look up an item by partition key")
    p.add_argument("--key", required=True)
    p.set_defaults(func=cmd_get_item)

    p = sub.add_parser("query-by-date", help="Orders placed between two dates (inclusive)")
    p.add_argument("--start", required=True, help="YYYY-MM-DD HH:MM:SS")
    p.add_argument("--end", required=True, help="YYYY-MM-DD HH:MM:SS")
    p.set_defaults(func=cmd_query_by_date)

    p = sub.add_parser("query-by-product", help="Orders for one product")
    p.add_argument("--product-id", required=True)
    p.set_defaults(func=cmd_query_by_product)

    p = sub.add_parser("query-low-stock", help="Products with quantity below a minimum")
    p.add_argument("--minimum", required=True, type=int)
    p.set_defaults(func=cmd_query_low_stock)

    p = sub.add_parser("update-item", help="Conditional update of an item's fields")
    p.add_argument("--key", required=True)
    p.add_argument("--type", required=True, choices=[t.value.lower() for t in EntityType], type=str.lower)
    p.add_argument("values", nargs="+", metavar="name=value")
    p.set_defaults(func=cmd_update_item)

    p = sub.add_parser("update-status", help="Change an order's status (ignored for non-orders)")
    p.add_argument("--key", required=True)
    p.add_argument("--status", required=True)
    p.set_defaults(func=cmd_update_status)

    p = sub.add_parser("delete-item", help="Delete an item by key and type")
    p.add_argument("--key", required=True)
    p.add_argument("--type", required=True, choices=[t.value.lower() for t in EntityType], type=str.lower)
    p.set_defaults(func=cmd_delete_item)

    return parser


def main(argv=None, store=None, settings=None):
    args = build_parser().parse_args(argv)
    try:
        settings = (settings or Settings.from_env()).override(
            table=args.table,
            region=args.region,
            endpoint_url=args.endpoint_url,
            strict_type_checks=args.strict,
        )
        logger.remove()
        logger.add(sys.stderr, level=settings.log_level)
        if args.command == "create-indexes" and args.poll_interval is None:
            args.poll_interval = settings.index_poll_seconds

        store = store or DynamoDBStore(region=settings.region, endpoint_url=settings.endpoint_url)
        st = SingleTable(store, settings.table, strict=settings.strict_type_checks)
        args.func(st, args)
    except (MigrationError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ClientError as e:
        print("Error:", e.response["Error"]["Code"], e.response["Error"].get("Message"), file=sys.stderr)
        return 1
    except BotoCoreError as e:
        logger.debug(repr(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
