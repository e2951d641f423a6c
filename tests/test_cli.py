# tests/test_cli.py
from rich.console import Console

import cli
from sdk.client import ProductApiError

PRODUCTS = [
    {"id": "1", "name": "Laptop", "description": "16GB", "price": 1200, "category": "electronics", "inStock": True},
    {"id": "3", "name": "Coffee Maker", "description": "Timer", "price": 50, "category": "kitchen", "inStock": False},
]


def test_products_table_has_a_row_per_product():
    table = cli.products_table(PRODUCTS)
    assert table.row_count == 2
    console = Console(record=True, width=120)
    console.print(table)
    text = console.export_text()
    assert "Laptop" in text
    assert "$1200.00" in text


def test_statistics_table():
    table = cli.statistics_table({"kitchen": 1, "electronics": 2})
    assert table.row_count == 2


def test_completers_offer_ids_names_and_categories():
    assert set(cli.product_completer(PRODUCTS).words) == {"1", "3", "Laptop", "Coffee Maker"}
    assert cli.category_completer(PRODUCTS).words == ["electronics", "kitchen"]


def test_try_api_reports_errors():
    def failing():
        raise ProductApiError(404, {"status": "fail", "message": "No product found with specified id"})

    assert cli.try_api(failing) is None
    assert cli.status_message == "Error: No product found with specified id"


def test_try_api_returns_result():
    assert cli.try_api(lambda: [1, 2], success_msg="done") == [1, 2]
    assert cli.status_message == "done"
