"""Stowage FastAPI application.

Web server that processes commands synchronously via HTTP. Every request
runs inside the stowage domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml:
#   - default      → in-memory provider
#   - "production" → SQLite through SQLAlchemy
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from stowage.domain import stowage
from stowage.utils.logging import add_context, clear_context, get_logger

stowage.init()

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Stowage API",
    description="Cargo hold storage: placement, retrieval, waste and reporting",
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
    """Push the stowage domain context and tag log lines with a request id."""
    add_context(request_id=request.headers.get("x-request-id", str(uuid.uuid4())))
    try:
        with stowage.domain_context():
            return await call_next(request)
    finally:
        clear_context()


# ---------------------------------------------------------------------------
# Routers and error handling
# ---------------------------------------------------------------------------
from stowage.api import container_router, item_router, report_router, waste_router  # noqa: E402
from stowage.api.errors import register_error_handlers  # noqa: E402

app.include_router(item_router)
app.include_router(container_router)
app.include_router(waste_router)
app.include_router(report_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": {"name": stowage.name}})
