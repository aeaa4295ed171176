"""Draft endpoints: class selection, picks, rerolls, and session state."""

from __future__ import annotations

from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from ..config import draft_config
from ..models.card import CardClass
from ..services.deck_stats import mana_curve, owned_counts, sort_deck
from ..services.draft_tracker import (
    choose_class as _choose_class,
    get_previews as _get_previews,
    get_session as _get_session,
    pick_pair as _pick_pair,
    reroll as _reroll,
    restart as _restart,
    seed as _seed,
)
from ..services.sampler import effective_odds

router = APIRouter()


class ClassRequest(BaseModel):
    card_class: CardClass


class PickRequest(BaseModel):
    pair_index: Literal[0, 1]


def _card_json(card) -> dict:
    return card.model_dump(mode="json", by_alias=True)


def _table_json(table) -> list:
    odds = dict(effective_odds(table))
    return [
        {"rarity": rarity.value, "weight": weight, "odds": round(odds.get(rarity, 0.0), 4)}
        for rarity, weight in table
    ]


@router.get("/rules")
async def get_rules():
    """Rarity weight tables for every round, with effective odds."""
    rules = draft_config.round_rules
    return {
        "num_rounds": draft_config.num_rounds,
        "starting_rerolls": draft_config.starting_rerolls,
        "neutral_rate": draft_config.neutral_rate,
        "duplicate_cap": draft_config.duplicate_cap,
        "preview": _table_json(rules.preview),
        "rounds": {str(n): _table_json(t) for n, t in sorted(rules.rounds.items())},
        "reroll": _table_json(rules.reroll),
    }


@router.get("/classes")
async def get_class_previews():
    """The seven class tiles, each with its two starting cards."""
    previews = _get_previews()
    return [
        {"card_class": p.card_class.value, "cards": [_card_json(c) for c in p.cards]}
        for p in previews
    ]


@router.post("/class")
async def choose_class(req: ClassRequest):
    """Pick a class and start drafting."""
    try:
        session = _choose_class(req.card_class)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return session.snapshot()


@router.post("/pick")
async def pick_pair(req: PickRequest):
    """Take pair 0 (options 0, 1) or pair 1 (options 2, 3)."""
    try:
        session = _pick_pair(req.pair_index)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return session.snapshot()


@router.post("/reroll")
async def reroll():
    """Redraw all four options. Does nothing once rerolls run out."""
    try:
        session = _reroll()
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return session.snapshot()


@router.post("/restart")
async def restart(seed: Optional[int] = Query(None, description="Seed the sampler for a reproducible draft")):
    """Discard the current draft and return to class selection."""
    _restart()
    if seed is not None:
        _seed(seed)
    return {"status": "restarted", "phase": "class_selection"}


@router.get("/state")
async def get_state():
    """Round, rerolls, deck, and offered pairs."""
    session = _get_session()
    if session is None:
        return {"phase": "class_selection", "is_finished": False}
    return session.snapshot()


@router.get("/deck")
async def get_deck():
    """Sorted deck list, mana curve, and copy counts for the sidebar."""
    session = _get_session()
    if session is None:
        raise HTTPException(status_code=404, detail="No draft in progress")

    curve = mana_curve(session.deck, draft_config.max_curve_cost)
    labels = [str(i) for i in range(draft_config.max_curve_cost)] + [f"{draft_config.max_curve_cost}+"]
    return {
        "card_class": session.current_class.value,
        "count": session.deck_size,
        "target": draft_config.deck_size,
        "cards": [_card_json(c) for c in sort_deck(session.deck)],
        "mana_curve": [{"cost": label, "count": n} for label, n in zip(labels, curve)],
        "owned": owned_counts(session.deck),
    }
