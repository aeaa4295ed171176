"""Card catalog loading, lookup, and summaries."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

import pandas as pd
from pydantic import TypeAdapter, ValidationError
from thefuzz import fuzz, process

from ..models.card import Card, CardClass, Rarity

logger = logging.getLogger(__name__)


class CatalogLoadError(RuntimeError):
    """The card catalog could not be read or parsed. Fatal at startup."""


_card_list_adapter = TypeAdapter(list[Card])

# In-memory catalog, loaded once at startup
_catalog: list[Card] = []
_loaded = False


def load_catalog_json(content: Union[bytes, str]) -> list[Card]:
    """Parse a JSON card list and install it as the active catalog.

    Nothing is installed unless every record validates.
    """
    global _catalog, _loaded
    try:
        raw = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise CatalogLoadError(f"Catalog is not valid JSON: {e}") from e

    if not isinstance(raw, list):
        raise CatalogLoadError("Catalog must be a JSON list of card records")

    try:
        cards = _card_list_adapter.validate_python(raw)
    except ValidationError as e:
        raise CatalogLoadError(f"Catalog has invalid card records: {e}") from e

    _catalog = cards
    _loaded = True
    logger.info(f"Loaded {len(cards)} cards into the catalog")
    return cards


def load_catalog_file(path: Union[str, Path]) -> list[Card]:
    filepath = Path(path)
    try:
        content = filepath.read_bytes()
    except OSError as e:
        raise CatalogLoadError(f"Cannot read catalog at {filepath}: {e}") from e
    cards = load_catalog_json(content)
    logger.info(f"Catalog source: {filepath.name}")
    return cards


def get_catalog() -> list[Card]:
    if not _loaded:
        raise CatalogLoadError("Card catalog has not been loaded")
    return _catalog


def set_catalog(cards: list[Card]) -> None:
    """Install an already-built card list (tests, alternate loaders)."""
    global _catalog, _loaded
    _catalog = list(cards)
    _loaded = True


def clear_catalog() -> None:
    global _catalog, _loaded
    _catalog = []
    _loaded = False


def is_loaded() -> bool:
    return _loaded


def filter_catalog(
    card_class: Optional[CardClass] = None,
    rarity: Optional[Rarity] = None,
) -> list[Card]:
    cards = get_catalog()
    if card_class is not None:
        cards = [c for c in cards if c.card_class is card_class]
    if rarity is not None:
        cards = [c for c in cards if c.rarity is rarity]
    return cards


def search_cards(query: str, limit: int = 10, min_score: int = 60) -> list[dict]:
    """Fuzzy card-name lookup.

    Returns list of {card, score} sorted by match score descending.
    """
    cards = get_catalog()
    if not query or not cards:
        return []

    by_name: dict[str, list[Card]] = {}
    for c in cards:
        by_name.setdefault(c.name, []).append(c)

    matches = process.extract(query, list(by_name), scorer=fuzz.WRatio, limit=limit)
    results = []
    for name, score in matches:
        if score < min_score:
            continue
        for card in by_name[name]:
            results.append({"card": card, "score": score})
    return results[:limit]


def catalog_summary() -> pd.DataFrame:
    """Class x rarity card counts, every class and rarity present."""
    cards = get_catalog()
    classes = [c.value for c in CardClass]
    rarities = [r.value for r in Rarity]
    if not cards:
        return pd.DataFrame(0, index=classes, columns=rarities)

    df = pd.DataFrame(
        [{"class": c.card_class.value, "rarity": c.rarity.value} for c in cards]
    )
    table = pd.crosstab(df["class"], df["rarity"])
    return table.reindex(index=classes, columns=rarities, fill_value=0)
