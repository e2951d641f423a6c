# cli.py - interactive product catalog client with autocomplete
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from product_api.config import get_settings
from sdk.client import ProductApiError, ProductClient
import requests

console = Console()

# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
})


def make_client() -> ProductClient:
    settings = get_settings()
    return ProductClient(base_url=f"http://{settings.host}:{settings.port}", api_key=settings.api_key)


# ---------------------------
# Display helpers
# ---------------------------
def products_table(products: List[Dict[str, Any]]) -> Table:
    table = Table(
        title="📦 Products Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=6)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Description", width=30)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("In stock", justify="center", width=8)

    for p in products:
        in_stock = "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]"
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            p.get("description", ""),
            f"${float(p.get('price', 0)):.2f}",
            p.get("category", "N/A"),
            in_stock,
        )
    return table


def statistics_table(stats: Dict[str, int]) -> Table:
    table = Table(title="📊 Products per category", box=box.ROUNDED, header_style="bold yellow")
    table.add_column("Category", width=20)
    table.add_column("Products", justify="right", width=10)
    for category, count in sorted(stats.items()):
        table.add_row(category, str(count))
    return table


def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return
    console.print(products_table(products))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    API errors are reported in the status panel and yield None.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
            console=console,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
    except ProductApiError as e:
        status_message = f"Error: {e.message}"
        console.print(show_status(status_message, False))
        return None
    except requests.RequestException as e:
        status_message = f"Error: {e}"
        console.print(show_status(status_message, False))
        return None

    if success_msg:
        status_message = success_msg
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Autocompletion helpers
# ---------------------------
def product_completer(products: List[Dict[str, Any]]) -> WordCompleter:
    words = [str(p.get("id", "")) for p in products] + [p.get("name", "") for p in products]
    return WordCompleter([w for w in words if w], ignore_case=True)


def category_completer(products: List[Dict[str, Any]]) -> WordCompleter:
    return WordCompleter(sorted({p.get("category", "") for p in products} - {""}), ignore_case=True)


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_price(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("right", width=30)
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row("[bold blue]🛍️ Product API CLI[/bold blue]", f"[dim]{now}[/dim]")
    return Panel(header, style="bold blue")


# ---------------------------
# Main menu
# ---------------------------
def menu(c: ProductClient):
    global status_message, product_cache

    console.clear()
    console.print(create_header())
    product_cache = try_api(c.list_products, limit=100) or []

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in [
            ("1", "📦 List products", "5", "➕ Create product"),
            ("2", "🔍 Search by name", "6", "✏️ Update product"),
            ("3", "🏷️ Filter by category", "7", "🗑️ Delete product"),
            ("4", "ℹ️ Get product by ID", "8", "📊 Statistics"),
            ("", "", "q", "👋 Quit"),
        ]:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 9)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            page = IntPrompt.ask("Page", default=1)
            products = try_api(c.list_products, page=page, success_msg="Products loaded")
            if products is not None:
                show_products(products)

        elif choice == "2":
            term = prompt_with_autocomplete("Enter search term")
            res = try_api(c.search_products, term, success_msg=f"Search for '{term}' completed")
            if res is not None:
                show_products(res)

        elif choice == "3":
            category = prompt_with_autocomplete("🏷️ Category", completer=category_completer(product_cache))
            res = try_api(c.products_by_category, category)
            if res is not None:
                show_products(res)

        elif choice == "4":
            pid = prompt_with_autocomplete("Enter product ID", completer=product_completer(product_cache))
            resp = try_api(c.get_product, pid)
            if resp:
                show_products([resp])

        elif choice == "5":
            name = prompt_with_autocomplete("Enter product name")
            description = prompt_with_autocomplete("Enter description")
            price = ask_price("💰 Price", default=10.0)
            category = prompt_with_autocomplete("🏷️ Category", completer=category_completer(product_cache))
            in_stock = Confirm.ask("In stock?", default=True)
            resp = try_api(
                c.create_product, name, price, category, in_stock, description,
                success_msg=f"Product '{name}' created"
            )
            if resp:
                show_products([resp])
                product_cache = try_api(c.list_products, limit=100) or []

        elif choice == "6":
            pid = prompt_with_autocomplete("Enter product ID", completer=product_completer(product_cache))
            current = try_api(c.get_product, pid)
            if current:
                fields = {
                    "name": prompt_with_autocomplete("Name", default=current["name"]),
                    "description": prompt_with_autocomplete("Description", default=current.get("description", "")),
                    "price": ask_price("💰 Price", default=current["price"]),
                    "category": prompt_with_autocomplete("Category", default=current["category"]),
                    "inStock": Confirm.ask("In stock?", default=current["inStock"]),
                }
                resp = try_api(c.update_product, pid, fields, success_msg=f"Product {pid} updated")
                if resp:
                    show_products([resp])

        elif choice == "7":
            pid = prompt_with_autocomplete("Enter product ID", completer=product_completer(product_cache))
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                resp = try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                if resp:
                    product_cache = [p for p in product_cache if str(p.get("id")) != pid]

        elif choice == "8":
            stats = try_api(c.statistics)
            if stats is not None:
                console.print(statistics_table(stats))

        elif choice.lower() in ("q", "quit", "exit"):
            console.print(Panel.fit("[bold green]Bye! 👋[/bold green]", title="Goodbye"))
            return

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu(make_client())
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)
