# storefront/cli.py
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table
from rich.text import Text

from .client import StoreAPIError, StoreClient
from .session import ERROR, CheckoutError, Storefront

console = Console()

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


def _money(amount: Optional[float]) -> str:
    return f"${(amount or 0):.2f}"


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="🛍️ Products",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("#", justify="right", width=3)
    table.add_column("Name", style="bold", width=24)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Stock", justify="right", width=8)
    table.add_column("ID", style="dim", width=26)

    for i, p in enumerate(products, start=1):
        table.add_row(
            str(i),
            p.get("name", "N/A"),
            _money(p.get("price")),
            str(p.get("stock", 0)),
            p.get("_id", "N/A"),
        )
    console.print(table)


def show_cart(store: Storefront):
    cart = store.cart
    title = Text()
    title.append("🛒 Shopping Cart", style="bold")
    title.append(f" - Total: {_money(cart.total())}", style="bold green")

    if not len(cart):
        console.print(Panel("Your cart is empty 🛍️", title=title, style="blue"))
        return

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("#", justify="right", width=3)
    table.add_column("Product", style="bold", width=28)
    table.add_column("Qty", justify="right", width=6)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Subtotal", justify="right", width=12)

    for i, it in enumerate(cart.items, start=1):
        product = it["product"]
        table.add_row(
            str(i),
            product.get("name", "Unknown"),
            str(it["quantity"]),
            _money(product.get("price")),
            _money(product.get("price", 0) * it["quantity"]),
        )
    console.print(Panel(table, title=title, border_style="blue"))


def show_receipt(order: Dict[str, Any]):
    customer = order.get("customer") or {}
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Item", width=28)
    table.add_column("Qty", justify="right", width=6)
    table.add_column("Subtotal", justify="right", width=12)
    for it in order.get("items", []):
        table.add_row(
            it.get("name") or "?",
            str(it.get("quantity") or 0),
            _money((it.get("price") or 0) * (it.get("quantity") or 0)),
        )

    header = Text()
    header.append(f"Order ID: {order.get('orderId', 'N/A')}\n", style="bold")
    header.append(f"Customer: {customer.get('name', '')} <{customer.get('email', '')}>\n")
    header.append(f"Status: {order.get('status', 'N/A')}\n", style="green")
    header.append(f"Total: {_money(order.get('total'))}", style="bold green")

    console.print(Panel.fit(header, title="✅ Order Confirmed", border_style="green"))
    console.print(table)


def show_orders(orders: List[Dict[str, Any]]):
    if not orders:
        console.print("[italic yellow]No orders found[/italic yellow]")
        return

    table = Table(
        title="📋 Orders",
        box=box.ROUNDED,
        header_style="bold yellow",
        title_style="bold yellow",
        show_lines=True
    )
    table.add_column("Order ID", style="dim", width=18)
    table.add_column("Customer", width=24)
    table.add_column("Contents", width=36)
    table.add_column("Status", width=10)
    table.add_column("Total", justify="right", width=10)

    for order in orders:
        items = order.get("items", [])
        names = [f"{it.get('name') or '?'} x{it.get('quantity') or 0}" for it in items[:3]]
        contents = ", ".join(names) if names else "No items"
        if len(items) > 3:
            contents += f" +{len(items) - 3} more"
        status_style = "green" if order.get("status") == "confirmed" else "yellow"
        table.add_row(
            order.get("orderId", "N/A"),
            (order.get("customer") or {}).get("name", "N/A"),
            contents,
            f"[{status_style}]{order.get('status', 'N/A')}[/{status_style}]",
            _money(order.get("total")),
        )
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def create_header(store: Storefront):
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🛍️ Vibe Commerce",
        f"[bold blue]🛒 Cart ({store.cart.count()})[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# API wrapper
# ---------------------------
def with_spinner(fn, *args, description: str = "Processing...", **kwargs):
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        transient=True,
    ) as progress:
        progress.add_task(description=description, total=None)
        return fn(*args, **kwargs)


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def get_product_completer(store: Storefront):
    names = [p.get("name", "") for p in store.products]
    ids = [p.get("_id", "") for p in store.products]
    return WordCompleter([n for n in (names + ids) if n], ignore_case=True)


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def pick_product(store: Storefront, pool: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Ask for a row number, a product name or an id from ``pool``."""
    raw = prompt_with_autocomplete("Product (#, name or ID)", completer=get_product_completer(store)).strip()
    if raw.isdigit() and 1 <= int(raw) <= len(pool):
        return pool[int(raw) - 1]
    product = store.find_product(raw)
    if product is None:
        console.print(show_status(f"No product matches '{raw}'", False))
    return product


def load_catalog(store: Storefront) -> bool:
    while True:
        with_spinner(store.load_products, description="Loading products...")
        if store.phase != ERROR:
            return True
        console.print(Panel(
            f"[red]{store.error}[/red]\n"
            f"[dim]Make sure the backend server is running on {store.client.base_url}[/dim]",
            title="Error",
            border_style="red",
        ))
        if not Confirm.ask("Retry?"):
            return False


def do_checkout(store: Storefront):
    if not len(store.cart):
        console.print(show_status("Your cart is empty", False))
        return
    show_cart(store)
    store.customer_name = Prompt.ask("Name", default=store.customer_name or None) or ""
    store.customer_email = Prompt.ask("Email", default=store.customer_email or None) or ""
    try:
        order = with_spinner(store.checkout, description="Placing order...")
    except CheckoutError as e:
        console.print(show_status(str(e), False))
        return
    show_receipt(order)
    Prompt.ask("Press Enter to continue shopping", default="")
    store.close_receipt()


# ---------------------------
# Main menu
# ---------------------------
def menu(store: Storefront):
    console.clear()
    console.print(create_header(store))

    if not load_catalog(store):
        sys.exit(1)
    show_products(store.products)

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "➖ Remove from cart"),
            ("2", "➕ Add to cart", "6", "✅ Checkout"),
            ("3", "🛒 View cart", "7", "📋 Order history"),
            ("4", "🔢 Change quantity", "8", "🔄 Reload products"),
            ("", "", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title=f"📋 Menu - 🛒 {store.cart.count()} item(s)", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 9)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            store.open_catalog()
            show_products(store.products)

        elif choice == "2":
            product = pick_product(store, store.products)
            if product:
                store.add_to_cart(product)
                console.print(show_status(f"Added {product['name']} to cart"))

        elif choice == "3":
            store.open_cart()
            show_cart(store)

        elif choice == "4":
            pool = [it["product"] for it in store.cart.items]
            if not pool:
                console.print(show_status("Your cart is empty", False))
                continue
            show_cart(store)
            product = pick_product(store, pool)
            if product:
                qty = IntPrompt.ask("New quantity", default=store.cart.quantity(product["_id"]))
                store.update_quantity(product["_id"], qty)
                show_cart(store)

        elif choice == "5":
            pool = [it["product"] for it in store.cart.items]
            if not pool:
                console.print(show_status("Your cart is empty", False))
                continue
            show_cart(store)
            product = pick_product(store, pool)
            if product:
                store.remove_from_cart(product["_id"])
                show_cart(store)

        elif choice == "6":
            do_checkout(store)

        elif choice == "7":
            try:
                orders = with_spinner(store.client.list_orders, description="Loading orders...")
            except StoreAPIError as e:
                console.print(show_status(f"Error: {e}", False))
                continue
            show_orders(orders)

        elif choice == "8":
            if load_catalog(store):
                show_products(store.products)

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thanks for shopping! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


def main():
    store = Storefront(StoreClient())
    try:
        menu(store)
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
