"""Storefront FastAPI application.

Serves the catalogue, the shared cart and checkout over JSON, plus the static
storefront page under ``/shop/``. Every request runs inside the storefront
domain context.

Usage:
    storefront --port 4000
    uvicorn storefront.app:app --port 4000 --reload
"""

import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from storefront.api import register_exception_handlers, router
from storefront.domain import storefront
from storefront.utils.logging import REQUEST_ID_HEADER, bind_request_context, elapsed_ms, get_logger

logger = get_logger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    storefront.init()
    logger.info("Storefront domain initialized", domain=storefront.name)
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront API",
        description="Mock e-commerce storefront — catalogue, shared cart and checkout",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context and bind request details to the log context."""
        request_id = bind_request_context(
            request.method, request.url.path, request.headers.get(REQUEST_ID_HEADER)
        )
        started = time.perf_counter()

        with storefront.domain_context():
            response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info("Request completed", status_code=response.status_code, duration_ms=elapsed_ms(started))
        return response

    register_exception_handlers(app)
    app.include_router(router)
    app.mount("/shop", StaticFiles(directory=STATIC_DIR, html=True), name="shop")

    # -----------------------------------------------------------------------
    # Health / root
    # -----------------------------------------------------------------------
    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Storefront cart API running"

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": storefront.name})

    return app


app = create_app()
