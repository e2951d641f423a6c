# product_api/main.py
"""
Application entry point.

Builds the FastAPI app and wires together the product routes, the request
pipeline stages attached to each route, CORS and the framework-level error
handlers. Route behaviour lives in ``logic``; stage behaviour in
``middleware``.
"""

import logging
from typing import Optional, Sequence

import uvicorn
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .database import ProductStore
from .errors import HTTP_500, error_body
from .logging import configure_logging
from . import logic
from .middleware import (
    DELETE_STAGES,
    READ_STAGES,
    WRITE_STAGES,
    Context,
    Handler,
    Respond,
    Stage,
    authenticate,
    run_pipeline,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_response(outcome: Respond) -> Response:
    if outcome.media_type == "application/json":
        return JSONResponse(status_code=outcome.status_code, content=outcome.content)
    return PlainTextResponse(status_code=outcome.status_code, content=outcome.content)


async def _dispatch(request: Request, stages: Sequence[Stage], handler: Handler) -> Response:
    settings: Settings = request.app.state.settings
    if not settings.require_api_key:
        stages = [s for s in stages if s is not authenticate]

    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"

    ctx = Context(
        method=request.method,
        url=url,
        store=request.app.state.store,
        settings=settings,
        headers=request.headers,
        query=request.query_params,
        path_params=dict(request.path_params),
        raw_body=await request.body(),
    )
    return _to_response(run_pipeline(stages, handler, ctx))


# ---------------------------
# Routes
# ---------------------------
@router.get("/")
async def root(request: Request):
    return await _dispatch(request, READ_STAGES, logic.root_logic)

@router.get("/api/products")
async def list_products(request: Request):
    return await _dispatch(request, READ_STAGES, logic.list_products_logic)

# fixed paths are registered before /{product_id} so they are matched first
@router.get("/api/products/search")
async def search_products(request: Request):
    return await _dispatch(request, READ_STAGES, logic.search_products_logic)

@router.get("/api/products/category")
async def products_by_category(request: Request):
    return await _dispatch(request, READ_STAGES, logic.products_by_category_logic)

@router.get("/api/products/statistics")
async def statistics(request: Request):
    return await _dispatch(request, READ_STAGES, logic.statistics_logic)

@router.get("/api/products/{product_id}")
async def get_product(request: Request):
    return await _dispatch(request, READ_STAGES, logic.get_product_logic)

@router.post("/api/products")
async def create_product(request: Request):
    return await _dispatch(request, WRITE_STAGES, logic.create_product_logic)

@router.put("/api/products/{product_id}")
async def update_product(request: Request):
    return await _dispatch(request, WRITE_STAGES, logic.update_product_logic)

@router.delete("/api/products/{product_id}")
async def delete_product(request: Request):
    return await _dispatch(request, DELETE_STAGES, logic.delete_product_logic)


# ---------------------------
# Framework-level errors
# ---------------------------
def register_error_handlers(app: FastAPI) -> None:
    """Render errors raised outside the pipeline in the same JSON shape."""

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        status = "fail" if 400 <= exc.status_code < 500 else "error"
        return JSONResponse(status_code=exc.status_code, content=error_body(status, str(exc.detail)))

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return JSONResponse(status_code=HTTP_500, content={"message": "Error"})


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Service settings; read from the environment when omitted.
        store: Product store to serve; a fresh one (seeded per settings)
            when omitted.

    Returns:
        A fully configured FastAPI application instance.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level)

    if store is None:
        store = ProductStore.seeded() if settings.seed else ProductStore()

    app = FastAPI(title=settings.project_name, version=settings.version)
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(router)
    return app


def run() -> None:
    settings = get_settings()
    server_app = create_app(settings)
    logger.info("Server is running on http://%s:%d", settings.host, settings.port)
    uvicorn.run(server_app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


app = create_app()

if __name__ == "__main__":
    run()
