"""FastAPI application factory for the Storefront API."""

import time
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from storefront import config
from storefront.api.errors import register_exception_handlers
from storefront.api.routes import auth_router, cart_router, catalogue_router, order_router, payment_router
from storefront.api.schemas import HealthResponse
from storefront.catalogue.seed import seed_catalogue
from storefront.domain import logger, storefront
from storefront.utils.logging import add_context, clear_context


@asynccontextmanager
async def _lifespan(app: FastAPI):
    with storefront.domain_context():
        seed_catalogue()
    yield


def create_app() -> FastAPI:
    """Build the API. The ``storefront`` domain must already be initialized."""
    app = FastAPI(
        title="Storefront API",
        description="Catalogue, cart, checkout and order history",
        lifespan=_lifespan,
    )

    # Middleware added last runs first: logging wraps the domain context,
    # which wraps sessions.
    app.add_middleware(
        SessionMiddleware,
        secret_key=config.session_secret(),
        session_cookie=config.SESSION_COOKIE_NAME,
        max_age=config.session_max_age(),
        same_site="lax",
        https_only=config.is_production(),
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the Protean domain context for each request."""
        with storefront.domain_context():
            return await call_next(request)

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        clear_context()
        add_context(request_id=request_id, method=request.method, path=request.url.path)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("request_failed")
            raise
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        if request.url.path.startswith("/api"):
            logger.info("request_completed", status_code=response.status_code, duration_ms=duration_ms)
        response.headers["X-Request-ID"] = request_id
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(catalogue_router)
    app.include_router(cart_router)
    app.include_router(payment_router)
    app.include_router(order_router)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(domain=storefront.name)

    return app
