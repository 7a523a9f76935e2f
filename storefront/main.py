from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.core.config import settings
from storefront.core.errors import StorefrontError
from storefront.core.logging import RequestLoggingMiddleware, setup_logging
from storefront.db.backend import build_storage
from storefront.db.storage import Storage
from storefront.routers import auth, cart, checkout, orders, products

logger = setup_logging("storefront")


def create_app(storage: Optional[Storage] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "storage", None) is None:
            app.state.storage = build_storage(settings)
        yield

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        lifespan=lifespan,
        description="Catalog, cart, orders and checkout for the storefront",
    )

    if storage is not None:
        app.state.storage = storage

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.get("/")
    def read_root():
        return {"message": "Welcome to the Storefront API. Visit /docs for Swagger UI."}

    prefix = settings.API_PREFIX
    app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["auth"])
    app.include_router(products.router, prefix=f"{prefix}/products", tags=["products"])
    app.include_router(products.categories_router, prefix=f"{prefix}/categories", tags=["products"])
    app.include_router(cart.router, prefix=f"{prefix}/cart", tags=["cart"])
    app.include_router(orders.router, prefix=f"{prefix}/orders", tags=["orders"])
    app.include_router(checkout.router, prefix=f"{prefix}/checkout", tags=["checkout"])

    app.add_middleware(RequestLoggingMiddleware, service_name="storefront")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"], # Allow all for demo
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
