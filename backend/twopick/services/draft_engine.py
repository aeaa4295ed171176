"""Draft controller: class previews, option generation, picks, and rerolls."""

from __future__ import annotations

import logging
import random
from typing import Optional

from ..config import DraftConfig, WeightTable, draft_config
from ..models.card import Card, CardClass
from ..models.draft import ClassPreview, DraftSession
from .sampler import sample_card, sample_rarity

logger = logging.getLogger(__name__)

# pair_index -> option slots
PAIR_SLOTS: dict[int, tuple[int, int]] = {0: (0, 1), 1: (2, 3)}


class DraftController:
    """Runs the 2-Pick state machine over a caller-owned DraftSession.

    ClassSelection -> Drafting(round 1..N) -> Finished. The controller keeps
    no session of its own; every transition takes the session to mutate and
    returns it. Illegal actions (picking after the last round, rerolling with
    none left) leave the session untouched.
    """

    def __init__(
        self,
        catalog: list[Card],
        config: DraftConfig = draft_config,
        rng: Optional[random.Random] = None,
    ):
        self.catalog = catalog
        self.config = config
        self.rules = config.round_rules
        self.rng = rng or random.Random()

    def _draw(
        self,
        weights: WeightTable,
        card_class: CardClass,
        excluded: list[Card],
        allow_neutral: bool,
        deck: list[Card],
    ) -> Card:
        rarity = sample_rarity(weights, self.rng)
        return sample_card(
            self.catalog,
            rarity,
            card_class,
            excluded=excluded,
            allow_neutral=allow_neutral,
            deck=deck,
            rng=self.rng,
            neutral_rate=self.config.neutral_rate,
            duplicate_cap=self.config.duplicate_cap,
        )

    # ------------------------------------------------------------------
    # Class selection
    # ------------------------------------------------------------------

    def preview_class(self, card_class: CardClass) -> ClassPreview:
        """Two starting cards for a class tile, never neutral, never the same name."""
        weights = self.rules.for_round(0)
        first = self._draw(weights, card_class, [], False, [])
        second = self._draw(weights, card_class, [first], False, [])
        return ClassPreview(card_class=card_class, cards=[first, second])

    def preview_all(self) -> list[ClassPreview]:
        return [self.preview_class(cls) for cls in CardClass.playable()]

    def start(self, preview: ClassPreview) -> DraftSession:
        session = DraftSession(
            current_class=preview.card_class,
            deck=list(preview.cards),
            round=1,
            rerolls=self.config.starting_rerolls,
        )
        self.generate_options(session, self.rules.for_round(1))
        logger.info(f"Draft started as {preview.card_class.value}")
        return session

    # ------------------------------------------------------------------
    # Drafting
    # ------------------------------------------------------------------

    def generate_options(self, session: DraftSession, weights: WeightTable) -> list[Card]:
        """Replace the session's offered cards with a fresh batch.

        Each draw excludes the names already drawn in this batch; copies
        against the deck are governed by the duplicate cap instead.
        """
        options: list[Card] = []
        for _ in range(self.config.options_per_round):
            options.append(
                self._draw(weights, session.current_class, options, True, session.deck)
            )
        session.current_options = options
        return options

    def pick(self, session: DraftSession, pair_index: int) -> DraftSession:
        if session.is_finished or session.current_class is None:
            logger.debug("Pick ignored: no draft in progress")
            return session
        slots = PAIR_SLOTS.get(pair_index)
        if slots is None or len(session.current_options) < max(slots) + 1:
            logger.debug(f"Pick ignored: invalid pair index {pair_index}")
            return session

        session.deck.extend(session.current_options[i] for i in slots)

        if session.round >= self.config.num_rounds:
            session.is_finished = True
            session.current_options = []
            logger.info(f"Draft finished with {len(session.deck)} cards")
        else:
            session.round += 1
            self.generate_options(session, self.rules.for_round(session.round))
        return session

    def reroll(self, session: DraftSession) -> DraftSession:
        if session.is_finished or session.current_class is None:
            logger.debug("Reroll ignored: no draft in progress")
            return session
        if session.rerolls <= 0:
            logger.debug("Reroll ignored: none remaining")
            return session

        session.rerolls -= 1
        self.generate_options(session, self.rules.reroll)
        return session
