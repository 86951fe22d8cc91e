"""Storefront FastAPI application.

Processes commands synchronously over HTTP. Every request runs inside the
storefront domain context.

Usage:
    uvicorn storefront.app:create_app --factory --host 0.0.0.0 --port 8000 --reload
"""

import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront.domain import logger, storefront
from storefront.utils.logging import add_context, clear_context


def create_app() -> FastAPI:
    # PROTEAN_ENV selects the config overlay from domain.toml
    storefront.init()

    from storefront.api.catalogue import category_router, color_router, package_router, product_router
    from storefront.api.errors import register_error_handlers
    from storefront.api.routes import cart_router, order_router

    app = FastAPI(
        title="Storefront API",
        description="Product catalogue, session carts and order placement",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context and log the request."""
        add_context(method=request.method, path=request.url.path)
        started = time.perf_counter()
        try:
            with storefront.domain_context():
                response = await call_next(request)
        finally:
            clear_context()

        logger.info(
            "Request served",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response

    register_error_handlers(app)

    for router in (cart_router, order_router, product_router, package_router, category_router, color_router):
        app.include_router(router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    return app
