"""FastAPI application for eanlookup."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eanlookup import __version__
from eanlookup.config import Settings, load_settings
from eanlookup.models import HealthResponse
from eanlookup.routers import ean, search
from eanlookup.services.ean_search import LookupClient

logger = logging.getLogger(__name__)

lookup_client: LookupClient | None = None


def _build_client(cfg: Settings) -> LookupClient | None:
    """Create the shared lookup client, or ``None`` without a token."""
    if not cfg.token:
        logger.warning("No EAN-Search token configured; lookups will return 503")
        return None
    client = LookupClient(cfg.token)
    client.set_timeout(cfg.timeout)
    return client


@asynccontextmanager
async def lifespan(app: FastAPI):  # noqa: ARG001
    """Load settings and create the lookup client on startup."""
    global lookup_client  # noqa: PLW0603
    lookup_client = _build_client(load_settings())
    yield
    lookup_client = None


app = FastAPI(
    title="eanlookup",
    description="Barcode and product lookup service backed by EAN-Search",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(ean.router, prefix="/api", tags=["barcode"])
app.include_router(search.router, prefix="/api/search", tags=["search"])


@app.get("/health", response_model=HealthResponse)
async def health():
    """Liveness check."""
    return HealthResponse(version=__version__, configured=lookup_client is not None)
