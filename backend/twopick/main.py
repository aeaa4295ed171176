"""FastAPI entry point for the 2-Pick draft simulator."""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .routers import catalog, draft, export


@asynccontextmanager
async def lifespan(app: FastAPI):
    import logging
    logger = logging.getLogger(__name__)
    from .config import draft_config
    from .services.catalog_loader import load_catalog_file
    from .services.draft_tracker import reset_tracker
    # A draft cannot be sampled without cards; CatalogLoadError aborts startup
    cards = load_catalog_file(draft_config.catalog_path)
    reset_tracker()
    logger.info(f"Ready: {len(cards)} cards, {draft_config.num_rounds} rounds")
    yield


app = FastAPI(
    title="2-Pick Draft Simulator",
    description="Weighted-rarity 2-Pick deck drafting: pick a class, then 19 rounds of card pairs",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(catalog.router, prefix="/api/catalog", tags=["catalog"])
app.include_router(draft.router, prefix="/api/draft", tags=["draft"])
app.include_router(export.router, prefix="/api/export", tags=["export"])


@app.get("/api/health")
async def health():
    return {"status": "ok"}
