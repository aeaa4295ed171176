"""Card catalog endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from ..models.card import CardClass, Rarity
from ..services.catalog_loader import (
    CatalogLoadError,
    catalog_summary,
    filter_catalog,
    search_cards,
)

router = APIRouter()


@router.get("")
async def list_cards(
    card_class: Optional[CardClass] = Query(None, description="Filter by class"),
    rarity: Optional[Rarity] = Query(None, description="Filter by rarity"),
):
    """List catalog cards, optionally filtered by class and rarity."""
    try:
        cards = filter_catalog(card_class=card_class, rarity=rarity)
    except CatalogLoadError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {
        "count": len(cards),
        "cards": [c.model_dump(mode="json", by_alias=True) for c in cards],
    }


@router.get("/search")
async def search(
    q: str = Query(..., min_length=1, description="Card name, typos allowed"),
    limit: int = Query(10, ge=1, le=50),
):
    """Fuzzy card-name search."""
    try:
        results = search_cards(q, limit=limit)
    except CatalogLoadError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return [
        {"score": r["score"], **r["card"].model_dump(mode="json", by_alias=True)}
        for r in results
    ]


@router.get("/summary")
async def summary():
    """Card counts per class and rarity."""
    try:
        table = catalog_summary()
    except CatalogLoadError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {
        cls: {rarity: int(n) for rarity, n in row.items()}
        for cls, row in table.iterrows()
    }
