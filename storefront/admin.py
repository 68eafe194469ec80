# storefront/admin.py
import argparse
import json
import sys
from typing import List, Optional

from rich.console import Console

from .client import StoreAPIError, StoreClient

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vibe-admin", description="Vibe Commerce admin CLI")
    parser.add_argument("--base-url", help="Store API URL (defaults to $STORE_API_URL)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---------------------------
    # Product commands
    # ---------------------------
    subparsers.add_parser("list-products", help="List all products")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True, help="ID of the product")

    cp = subparsers.add_parser("create-product", help="Create a new product")
    cp.add_argument("--name", required=True, help="Product name")
    cp.add_argument("--price", type=float, required=True, help="Price")
    cp.add_argument("--stock", type=int, help="Units in stock (default 100)")
    cp.add_argument("--description", help="Product description")

    up = subparsers.add_parser("update-product", help="Update fields of a product")
    up.add_argument("--product-id", required=True, help="ID of the product")
    up.add_argument("--name", help="New name")
    up.add_argument("--price", type=float, help="New price")
    up.add_argument("--stock", type=int, help="New stock")
    up.add_argument("--description", help="New description")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True, help="ID of the product")

    # ---------------------------
    # Order commands
    # ---------------------------
    subparsers.add_parser("list-orders", help="List all orders, newest first")

    go = subparsers.add_parser("get-order", help="Get an order by its ID or order number")
    go.add_argument("--order-id", required=True, help="Order _id or ORD-... number")

    return parser


def run_command(args: argparse.Namespace, c: StoreClient):
    if args.command == "list-products":
        return c.list_products()

    elif args.command == "get-product":
        return c.get_product(args.product_id)

    elif args.command == "create-product":
        return c.create_product(args.name, args.price, args.stock, args.description)

    elif args.command == "update-product":
        fields = {
            k: getattr(args, k)
            for k in ("name", "price", "stock", "description")
            if getattr(args, k) is not None
        }
        return c.update_product(args.product_id, **fields)

    elif args.command == "delete-product":
        return c.delete_product(args.product_id)

    elif args.command == "list-orders":
        return c.list_orders()

    elif args.command == "get-order":
        return c.get_order(args.order_id)

    raise ValueError(f"unknown command: {args.command}")


def main(argv: Optional[List[str]] = None, client: Optional[StoreClient] = None) -> int:
    args = build_parser().parse_args(argv)
    c = client or StoreClient(base_url=args.base_url)
    try:
        result = run_command(args, c)
    except StoreAPIError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        return 1
    console.print_json(json.dumps(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
