from typing import Any, Dict, List

from .middleware import Context, Respond
from .models import Product

# This file contains the handler logic behind every product endpoint.
# Handlers either return a Respond or raise; they never build error bodies.

def _many(products: List[Product]) -> List[Dict[str, Any]]:
    return [p.to_dict() for p in products]

def root_logic(ctx: Context) -> Respond:
    return Respond(200, "Hello World!", media_type="text/plain")

# Product queries
def list_products_logic(ctx: Context) -> Respond:
    q = ctx.query
    products = ctx.store.paginate(q.get("category"), q.get("page", 1), q.get("limit", 10))
    return Respond(200, _many(products))

def search_products_logic(ctx: Context) -> Respond:
    return Respond(200, _many(ctx.store.search(ctx.query.get("name"))))

def products_by_category_logic(ctx: Context) -> Respond:
    return Respond(200, _many(ctx.store.filter_by_category(ctx.query.get("category"))))

def statistics_logic(ctx: Context) -> Respond:
    return Respond(200, ctx.store.statistics())

def get_product_logic(ctx: Context) -> Respond:
    return Respond(200, ctx.store.get(ctx.path_params["product_id"]).to_dict())

# Product mutations
def create_product_logic(ctx: Context) -> Respond:
    product = ctx.store.create(ctx.body)
    return Respond(201, product.to_dict())

def update_product_logic(ctx: Context) -> Respond:
    product = ctx.store.update(ctx.path_params["product_id"], ctx.body)
    return Respond(200, product.to_dict())

def delete_product_logic(ctx: Context) -> Respond:
    product = ctx.store.remove(ctx.path_params["product_id"])
    return Respond(200, product.to_dict())
