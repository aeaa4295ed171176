"""Rarity-weighted card sampling for the 2-Pick draft."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Mapping, Sequence
from typing import Optional, Union

from ..models.card import PLACEHOLDER_CARD, Card, CardClass, Rarity

logger = logging.getLogger(__name__)

WeightsLike = Union[Mapping[Rarity, float], Iterable[tuple[Rarity, float]]]

FALLBACK_RARITY = Rarity.BRONZE


def _pairs(weights: WeightsLike) -> list[tuple[Rarity, float]]:
    if isinstance(weights, Mapping):
        return list(weights.items())
    return list(weights)


def sample_rarity(weights: WeightsLike, rng: Optional[random.Random] = None) -> Rarity:
    """Draw a rarity from an ordered weight table.

    A uniform value in [0, 100) is compared against the running sum of the
    weights in table order; the first rarity whose cumulative weight reaches
    the value wins. Tables that never reach the value (empty, or summing below
    100) fall back to Bronze.
    """
    rng = rng or random
    roll = rng.random() * 100
    cumulative = 0.0
    for rarity, weight in _pairs(weights):
        cumulative += weight
        if roll <= cumulative:
            return rarity
    return FALLBACK_RARITY


def effective_odds(weights: WeightsLike) -> list[tuple[Rarity, float]]:
    """Exact outcome probabilities of sample_rarity for a table.

    Weight past the 100 mark is unreachable, and any shortfall below 100 is
    credited to the Bronze fallback.
    """
    odds: dict[Rarity, float] = {}
    cumulative = 0.0
    for rarity, weight in _pairs(weights):
        low = min(cumulative, 100.0)
        cumulative += weight
        high = min(cumulative, 100.0)
        odds[rarity] = odds.get(rarity, 0.0) + (high - low) / 100.0
    shortfall = max(0.0, 100.0 - cumulative) / 100.0
    if shortfall > 0:
        odds[FALLBACK_RARITY] = odds.get(FALLBACK_RARITY, 0.0) + shortfall
    return list(odds.items())


def sample_card(
    catalog: Sequence[Card],
    rarity: Rarity,
    player_class: CardClass,
    excluded: Iterable[Card] = (),
    allow_neutral: bool = True,
    deck: Sequence[Card] = (),
    rng: Optional[random.Random] = None,
    neutral_rate: float = 0.05,
    duplicate_cap: int = 3,
) -> Card:
    """Pick one card of *rarity* for *player_class*.

    Tiers, first non-empty pool wins:
    - neutral cards, tried with probability *neutral_rate* when *allow_neutral*
    - class cards below *duplicate_cap* copies in *deck*
    - class (and neutral, if allowed) cards with the copy cap relaxed
    - PLACEHOLDER_CARD

    *excluded* removes cards by name from every tier. Never raises.
    """
    if not catalog:
        return PLACEHOLDER_CARD

    rng = rng or random
    excluded_names = {c.name for c in excluded if c is not None}

    def copies(name: str) -> int:
        return sum(1 for c in deck if c.name == name)

    pool: list[Card] = []

    if allow_neutral and rng.random() < neutral_rate:
        pool = [
            c for c in catalog
            if c.card_class is CardClass.NEUTRAL
            and c.rarity is rarity
            and c.name not in excluded_names
        ]

    if not pool:
        pool = [
            c for c in catalog
            if c.card_class is player_class
            and c.rarity is rarity
            and c.name not in excluded_names
            and copies(c.name) < duplicate_cap
        ]

    if not pool:
        pool = [
            c for c in catalog
            if (c.card_class is player_class or (allow_neutral and c.card_class is CardClass.NEUTRAL))
            and c.rarity is rarity
            and c.name not in excluded_names
        ]
        if pool:
            logger.debug(f"Copy cap relaxed for {player_class.value} {rarity.value}")

    if not pool:
        logger.warning(f"No {rarity.value} card available for {player_class.value}; using placeholder")
        return PLACEHOLDER_CARD

    return rng.choice(pool)
