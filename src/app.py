"""DineDesk FastAPI application.

Single-tenant, single-session ordering server. The catalog, order ledger and
shopping session are built once per application and kept on ``app.state``.
Each request is wrapped in the Protean domain context matching its URL prefix.

Usage:
    uvicorn app:create_app --factory --app-dir src --port 8000
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.exceptions import DatabaseError, ObjectNotFoundError, ValidationError

from menu.api import menu_router
from menu.catalog import Catalog
from menu.domain import menu
from menu.store import JsonCatalogStore
from ordering.api.routes import cart_router, order_router
from ordering.checkout.session import ShoppingSession
from ordering.domain import ordering
from ordering.ledger.ledger import OrderLedger
from ordering.ledger.store import CsvOrderLedgerStore
from shared.config import Settings
from shared.logging import add_context, clear_context, configure_logging, get_logger
from shared.money import CURRENCY

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/menu": menu,
    "/cart": ordering,
    "/orders": ordering,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path.startswith(prefix):
            return domain
    return None


# ---------------------------------------------------------------------------
# Protean exception → HTTP response mapping
# ---------------------------------------------------------------------------
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"error": "validation_error", "messages": exc.messages})


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": "not_found", "messages": {"_entity": [str(exc)]}})


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.error("Request failed", path=request.url.path, error="persistence_failure", detail=str(exc))
    return JSONResponse(
        status_code=503,
        content={"error": "persistence_failure", "messages": {"_store": [str(exc)]}},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(log_dir=settings.log_dir, env=settings.env)

    menu.init()
    ordering.init()

    with menu.domain_context():
        catalog = Catalog.load(JsonCatalogStore(settings.menu_path))
    with ordering.domain_context():
        ledger = OrderLedger(CsvOrderLedgerStore(settings.orders_path))
        session = ShoppingSession(catalog, ledger)

    app = FastAPI(
        title="DineDesk API",
        description="Food ordering: menu, cart, billing and order ledger",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.catalog = catalog
    app.state.ledger = ledger
    app.state.session = session

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the correct Protean domain context for each request."""
        domain = _resolve_domain(request.url.path)
        if domain is not None:
            with domain.domain_context():
                response = await call_next(request)
            return response
        return await call_next(request)

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Bind the request method and path to every log line emitted while handling it."""
        clear_context()
        add_context(method=request.method, path=request.url.path)
        try:
            return await call_next(request)
        finally:
            clear_context()

    app.include_router(menu_router)
    app.include_router(cart_router)
    app.include_router(order_router)

    # -----------------------------------------------------------------------
    # Health / root
    # -----------------------------------------------------------------------
    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "env": settings.env,
                "currency": CURRENCY,
                "domains": {"menu": {"name": menu.name}, "ordering": {"name": ordering.name}},
                "menu_items": len(catalog.items()),
                "next_order_id": ledger.next_id,
            }
        )

    logger.info(
        "Application ready",
        env=settings.env,
        menu_path=str(settings.menu_path),
        orders_path=str(settings.orders_path),
    )
    return app
