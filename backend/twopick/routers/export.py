"""Deck list export."""

from __future__ import annotations

import io

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import StreamingResponse

import pandas as pd

from ..services.deck_stats import deck_table
from ..services.draft_tracker import get_session

router = APIRouter()


@router.get("/deck")
async def export_deck(
    format: str = Query("csv", description="Export format: 'csv' or 'xlsx'"),
):
    """Export the drafted deck sorted by cost, rarity, then name.

    Columns: Name, Cost, Rarity, Class, Count
    """
    session = get_session()
    if session is None or not session.deck:
        raise HTTPException(status_code=404, detail="No deck to export. Start a draft first.")

    df = deck_table(session.deck)
    stem = f"{session.current_class.value.lower()}_2pick"

    if format.lower() == "xlsx":
        buf = io.BytesIO()
        with pd.ExcelWriter(buf, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="Deck")
        buf.seek(0)
        return StreamingResponse(
            buf,
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={"Content-Disposition": f"attachment; filename={stem}.xlsx"},
        )
    else:
        buf = io.StringIO()
        df.to_csv(buf, index=False)
        buf.seek(0)
        return StreamingResponse(
            buf,
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={stem}.csv"},
        )
