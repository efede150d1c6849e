"""Command-line interface for ordertrack."""

import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .codec import decode_status, encode_order
from .errors import IllegalValueError, OrdertrackError
from .models import CustomerOrder, Remark, SupplyOrder
from .parser import parse_add_customer_order
from .storage import OrderBookStore
from .utils import format_order


def get_store(args: argparse.Namespace) -> OrderBookStore:
    """Get the OrderBookStore selected by --data-file (or the default)."""
    path = Path(args.data_file) if args.data_file else None
    return OrderBookStore(path)


def cmd_init(args: argparse.Namespace) -> int:
    """Create an empty order book."""
    try:
        store = get_store(args)
        store.init(force=args.force)

        print(f"Initialized order book at {store.path}")
        return 0

    except OrdertrackError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_add_order(args: argparse.Namespace) -> int:
    """Add a customer order from '<phone> <id> [<id> ...]'."""
    try:
        store = get_store(args)
        model = store.load()

        command = parse_add_customer_order(" ".join(args.arguments))
        result = command.execute(model)
        store.save(model)

        print(result.feedback)
        print(f"  Order #{result.index}")
        return 0

    except OrdertrackError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_list(args: argparse.Namespace) -> int:
    """List orders."""
    try:
        store = get_store(args)
        model = store.load()

        orders = list(enumerate(model.orders, start=1))
        if args.type == "customer":
            orders = [(i, o) for i, o in orders if isinstance(o, CustomerOrder)]
        elif args.type == "supply":
            orders = [(i, o) for i, o in orders if isinstance(o, SupplyOrder)]

        if args.json:
            data = [
                {"index": i, "orderType": o.order_type, **encode_order(o)} for i, o in orders
            ]
            print(json.dumps(data, indent=2))
            return 0

        if not orders:
            print("No orders.")
            return 0

        print(f"Orders ({len(orders)}):")
        print()
        for i, order in orders:
            print(format_order(i, order, verbose=args.verbose_list))
        return 0

    except OrdertrackError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_show(args: argparse.Namespace) -> int:
    """Show a single order."""
    try:
        model = get_store(args).load()
        order = model.get_order(args.index)
        print(format_order(args.index, order, verbose=True))
        return 0

    except OrdertrackError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_status(args: argparse.Namespace) -> int:
    """Change the status of an order."""
    try:
        store = get_store(args)
        model = store.load()

        status = decode_status(args.status)
        order = model.set_order_status(args.index, status)
        store.save(model)

        print(f"Order #{args.index} ({order.order_type}) is now {status}")
        return 0

    except OrdertrackError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_remark(args: argparse.Namespace) -> int:
    """Replace the remark of an order."""
    try:
        store = get_store(args)
        model = store.load()

        try:
            remark = Remark(args.text)
        except ValueError as e:
            raise IllegalValueError(f"Invalid remark: {e}") from e
        model.set_order_remark(args.index, remark)
        store.save(model)

        print(f"Updated remark of order #{args.index}")
        return 0

    except OrdertrackError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_remove(args: argparse.Namespace) -> int:
    """Remove an order."""
    try:
        store = get_store(args)
        model = store.load()

        order = model.remove_order(args.index)
        store.save(model)

        print(f"Removed order #{args.index}: {order.order_type} for {order.person.name}")
        return 0

    except OrdertrackError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the API server."""
    try:
        import uvicorn

        store = get_store(args)
        if not store.exists():
            print("Warning: order book not initialized. Run 'ordertrack init' first.", file=sys.stderr)
            print("Starting server anyway...", file=sys.stderr)

        from .api import app, set_store

        set_store(store)

        print("Starting ordertrack API server...")
        print(f"Order book: {store.path}")
        print(f"API docs: http://{args.host}:{args.port}/docs")
        print()

        uvicorn.run(
            app,
            host=args.host,
            port=args.port,
            workers=1,  # Single worker; the order book file has no locking
        )
        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ordertrack",
        description="Track customer and supply orders",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--data-file", "-f", help="Order book JSON file (default: $ORDERTRACK_DATA_DIR/orderbook.json)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # init
    init_parser = subparsers.add_parser("init", help="Create an empty order book")
    init_parser.add_argument(
        "--force", action="store_true", help="Overwrite an existing order book"
    )

    # add-order
    add_parser = subparsers.add_parser(
        "add-order", help="Add a customer order: PHONE_NUMBER PRODUCT_ID [PRODUCT_ID]..."
    )
    add_parser.add_argument(
        "arguments", nargs=argparse.REMAINDER, help="Phone number followed by product IDs"
    )

    # list
    list_parser = subparsers.add_parser("list", help="List orders")
    list_parser.add_argument(
        "--type", "-t", choices=["all", "customer", "supply"], default="all",
        help="Only list orders of this type",
    )
    list_parser.add_argument(
        "--json", action="store_true", help="Output as JSON"
    )
    list_parser.add_argument(
        "--details", dest="verbose_list", action="store_true", help="Show items and remarks"
    )

    # show
    show_parser = subparsers.add_parser("show", help="Show an order")
    show_parser.add_argument("index", type=int, help="Order number (from 'list')")

    # status
    status_parser = subparsers.add_parser("status", help="Change an order's status")
    status_parser.add_argument("index", type=int, help="Order number (from 'list')")
    status_parser.add_argument("status", help="New status (case-insensitive)")

    # remark
    remark_parser = subparsers.add_parser("remark", help="Set an order's remark")
    remark_parser.add_argument("index", type=int, help="Order number (from 'list')")
    remark_parser.add_argument("text", help="Remark text (empty to clear)")

    # remove
    remove_parser = subparsers.add_parser("remove", help="Remove an order")
    remove_parser.add_argument("index", type=int, help="Order number (from 'list')")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument(
        "--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)"
    )
    serve_parser.add_argument(
        "--port", "-p", type=int, default=8000, help="Port to bind to (default: 8000)"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "init": cmd_init,
        "add-order": cmd_add_order,
        "list": cmd_list,
        "show": cmd_show,
        "status": cmd_status,
        "remark": cmd_remark,
        "remove": cmd_remove,
        "serve": cmd_serve,
    }

    cmd_func = commands.get(args.command)
    if cmd_func:
        return cmd_func(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
