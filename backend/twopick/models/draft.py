"""Draft session state models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from .card import Card, CardClass


class DraftPhase(str, Enum):
    CLASS_SELECTION = "class_selection"
    DRAFTING = "drafting"
    FINISHED = "finished"


class ClassPreview(BaseModel):
    card_class: CardClass
    cards: list[Card] = []  # the two starting cards shown on the class tile


class DraftSession(BaseModel):
    current_class: Optional[CardClass] = None
    deck: list[Card] = []
    round: int = 1
    rerolls: int = 3
    current_options: list[Card] = []
    is_finished: bool = False

    @property
    def phase(self) -> DraftPhase:
        if self.current_class is None:
            return DraftPhase.CLASS_SELECTION
        if self.is_finished:
            return DraftPhase.FINISHED
        return DraftPhase.DRAFTING

    @property
    def pairs(self) -> list[list[Card]]:
        """Current options grouped as the two pickable pairs {0,1} and {2,3}."""
        opts = self.current_options
        return [opts[i:i + 2] for i in range(0, len(opts), 2)]

    @property
    def deck_size(self) -> int:
        return len(self.deck)

    def snapshot(self) -> dict:
        """JSON-ready view of the session for the presentation layer."""
        data = self.model_dump(mode="json", by_alias=True)
        data["phase"] = self.phase.value
        data["deck_size"] = self.deck_size
        data["pairs"] = [
            [c.model_dump(mode="json", by_alias=True) for c in pair]
            for pair in self.pairs
        ]
        return data
