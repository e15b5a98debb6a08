"""Warehouse FastAPI application.

Web server that processes stock commands synchronously via HTTP. Every
request under a domain route is wrapped in the warehouse domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml:
#   - unset / "test" → in-memory provider
#   - "production"   → PostgreSQL
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers
from warehouse.domain import warehouse  # noqa: E402

warehouse.init()

_DOMAIN_PREFIXES = ("/products", "/suppliers", "/entries", "/withdrawals")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Warehouse API",
    description="Warehouse inventory: products, suppliers, stock entries and withdrawals",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the warehouse domain context for every domain request."""
    if request.url.path.startswith(_DOMAIN_PREFIXES):
        with warehouse.domain_context():
            response = await call_next(request)
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from warehouse.api import entry_router, product_router, supplier_router, withdrawal_router  # noqa: E402

app.include_router(product_router)
app.include_router(supplier_router)
app.include_router(entry_router)
app.include_router(withdrawal_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": {"name": warehouse.name}})
