"""Draft configuration: round weight tables and 2-Pick tuning constants."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from .models.card import Rarity

B, S, G, R = Rarity.BRONZE, Rarity.SILVER, Rarity.GOLD, Rarity.RAINBOW

# Ordered (rarity, weight) pairs. The sampler walks them in order, so order matters.
WeightTable = tuple[tuple[Rarity, float], ...]

DEFAULT_PREVIEW_TABLE: WeightTable = ((R, 80), (G, 20))

DEFAULT_ROUND_TABLES: dict[int, WeightTable] = {
    1: ((B, 100),),
    2: ((S, 100),),
    3: ((G, 100),),
    4: ((R, 50), (G, 50)),
    5: ((B, 50), (S, 50)),
    6: ((S, 50), (G, 50)),
    7: ((B, 80), (S, 20)),
    8: ((S, 80), (G, 20)),
    9: ((S, 60), (G, 40)),
    10: ((B, 65), (G, 22), (S, 10), (R, 3)),
    11: ((S, 65), (B, 20), (G, 12), (R, 3)),
    12: ((G, 67), (S, 20), (B, 10), (R, 3)),
    13: ((B, 80), (S, 20), (R, 1)),
    14: ((S, 70), (G, 30), (R, 1)),
    15: ((S, 59), (G, 40), (R, 1)),
    16: ((B, 80), (S, 20)),
    17: ((S, 80), (B, 20)),
    18: ((G, 80), (S, 20)),
    19: ((R, 80), (G, 20)),
}

DEFAULT_REROLL_TABLE: WeightTable = ((B, 5), (S, 15), (G, 65), (R, 15))

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "cards.json"


class RoundRules(BaseModel):
    """Weight tables for the class preview (round 0), rounds 1..19, and rerolls."""
    preview: WeightTable = DEFAULT_PREVIEW_TABLE
    rounds: dict[int, WeightTable] = Field(default_factory=lambda: dict(DEFAULT_ROUND_TABLES))
    reroll: WeightTable = DEFAULT_REROLL_TABLE

    model_config = {"frozen": True}

    def for_round(self, round_number: int) -> WeightTable:
        if round_number == 0:
            return self.preview
        return self.rounds.get(round_number, ())


class DraftConfig(BaseModel):
    num_rounds: int = 19
    starting_rerolls: int = 3
    options_per_round: int = 4  # two pairs of two
    neutral_rate: float = Field(0.05, ge=0.0, le=1.0)
    duplicate_cap: int = 3  # copies of one name allowed via the class pool
    max_curve_cost: int = 8  # last mana-curve bucket is "8+"
    catalog_path: Path = DEFAULT_CATALOG_PATH

    round_rules: RoundRules = RoundRules()

    @property
    def initial_cards(self) -> int:
        return 2

    @property
    def deck_size(self) -> int:
        return self.initial_cards + 2 * self.num_rounds


# Default draft config singleton
draft_config = DraftConfig()
