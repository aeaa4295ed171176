"""Deck ordering, mana curve, and copy counts for the sidebar and exports."""

from __future__ import annotations

from collections import Counter

import icu
import pandas as pd

from ..models.card import Card


# Traditional Chinese collation: Han by stroke count, Latin by the root order
_collator = icu.Collator.createInstance(icu.Locale("zh_Hant"))


def _name_key(name: str) -> bytes:
    return _collator.getSortKey(name)


def sort_deck(cards: list[Card]) -> list[Card]:
    """Return a new list ordered by cost, then rarity priority, then zh-Hant collated name."""
    return sorted(
        cards,
        key=lambda c: (c.cost, c.rarity.priority, _name_key(c.name), c.name),
    )


def mana_curve(cards: list[Card], max_cost: int = 8) -> list[int]:
    """Card counts per cost 0..max_cost; anything costlier lands in the last bucket."""
    curve = [0] * (max_cost + 1)
    for card in cards:
        curve[min(card.cost, max_cost)] += 1
    return curve


def owned_counts(cards: list[Card]) -> dict[str, int]:
    return dict(Counter(c.name for c in cards))


def deck_table(cards: list[Card]) -> pd.DataFrame:
    """Sorted deck list with one row per distinct card and a Count column."""
    columns = ["Name", "Cost", "Rarity", "Class", "Count"]
    counts = owned_counts(cards)
    rows = []
    seen: set[str] = set()
    for c in sort_deck(cards):
        if c.name in seen:
            continue
        seen.add(c.name)
        rows.append({
            "Name": c.name,
            "Cost": c.cost,
            "Rarity": c.rarity.value,
            "Class": c.card_class.value,
            "Count": counts[c.name],
        })
    return pd.DataFrame(rows, columns=columns)
