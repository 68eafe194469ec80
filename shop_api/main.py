# shop_api/main.py
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException

from .config import Settings
from .core import OrderIn, ProductIn, ProductUpdate
from .database import open_store
from .errors import StoreError
from .log import configure_logging, get_logger
from .models import Message, Order, Product
from .seed import ensure_seed_products
from .service import (
    OrderNumbers,
    create_order_logic,
    create_product_logic,
    delete_product_logic,
    get_order_logic,
    get_product_logic,
    list_orders_logic,
    list_products_logic,
    update_product_logic,
)

logger = get_logger(__name__)


# ---------------------------
# Dependencies
# ---------------------------
def get_store(request: Request):
    return request.app.state.store


def get_order_numbers(request: Request) -> OrderNumbers:
    return request.app.state.order_numbers


# ---------------------------
# Error rendering
# ---------------------------
def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err.get("loc", ()) if x != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "Validation failed: " + "; ".join(parts)


async def store_error_handler(request: Request, exc: StoreError):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc)})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"message": _validation_message(exc)})


async def http_error_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error", path=request.url.path, method=request.method)
    return JSONResponse(status_code=500, content={"message": str(exc) or "Internal server error"})


# ---------------------------
# App factory
# ---------------------------
def create_app(store=None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the API over ``store``; one is opened from ``settings`` if not given."""
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_store = app.state.store is None
        if owns_store:
            app.state.store = open_store(settings)
        store = app.state.store
        try:
            if hasattr(store, "ensure_indexes"):
                store.ensure_indexes()
            if settings.seed_catalog:
                ensure_seed_products(store)
            logger.info("store ready", backend=store.name)
        except PyMongoError:
            # keep serving; requests report the outage as 500s
            logger.exception("store unavailable at startup", backend=store.name)
        yield
        if owns_store:
            store.close()

    app = FastAPI(title="Vibe Commerce API", lifespan=lifespan)
    app.state.store = store
    app.state.order_numbers = OrderNumbers()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    # ---------------------------
    # Root / health
    # ---------------------------
    @app.get("/")
    def read_root():
        return {"message": "Vibe Commerce API is running"}

    @app.get("/api/health")
    def health(store=Depends(get_store)):
        return {"status": "ok", "store": store.name, "products": store.count_products()}

    # ---------------------------
    # Product endpoints
    # ---------------------------
    @app.get("/api/products", response_model=List[Product])
    def list_products(store=Depends(get_store)):
        return list_products_logic(store)

    @app.get("/api/products/{product_id}", response_model=Product, responses={404: {"model": Message}})
    def get_product(product_id: str, store=Depends(get_store)):
        return get_product_logic(store, product_id)

    @app.post("/api/products", status_code=201, response_model=Product, responses={400: {"model": Message}})
    def create_product(payload: ProductIn, store=Depends(get_store)):
        return create_product_logic(store, payload)

    @app.put("/api/products/{product_id}", response_model=Product, responses={404: {"model": Message}})
    def update_product(product_id: str, payload: ProductUpdate, store=Depends(get_store)):
        return update_product_logic(store, product_id, payload)

    @app.delete("/api/products/{product_id}", response_model=Message, responses={404: {"model": Message}})
    def delete_product(product_id: str, store=Depends(get_store)):
        return delete_product_logic(store, product_id)

    # ---------------------------
    # Orders
    # ---------------------------
    @app.post("/api/orders", status_code=201, response_model=Order, responses={400: {"model": Message}})
    def create_order(payload: OrderIn, store=Depends(get_store), numbers=Depends(get_order_numbers)):
        return create_order_logic(store, payload, numbers)

    @app.get("/api/orders", response_model=List[Order])
    def list_orders(store=Depends(get_store)):
        return list_orders_logic(store)

    @app.get("/api/orders/{order_id}", response_model=Order, responses={404: {"model": Message}})
    def get_order(order_id: str, store=Depends(get_store)):
        return get_order_logic(store, order_id)

    return app


def run():
    import uvicorn

    configure_logging()
    settings = Settings.from_env()
    uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
