"""Card, Rarity, and CardClass models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class Rarity(str, Enum):
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    RAINBOW = "Rainbow"

    @property
    def priority(self) -> int:
        return RARITY_PRIORITY[self]

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            token = value.strip()
            if token in RARITY_TOKENS:
                return cls(RARITY_TOKENS[token])
            for member in cls:
                if member.name.lower() == token.lower() or member.value.lower() == token.lower():
                    return member
        return None


class CardClass(str, Enum):
    FORESTCRAFT = "Forestcraft"
    SWORDCRAFT = "Swordcraft"
    RUNECRAFT = "Runecraft"
    DRAGONCRAFT = "Dragoncraft"
    ABYSSCRAFT = "Abysscraft"
    HAVENCRAFT = "Havencraft"
    PORTALCRAFT = "Portalcraft"
    NEUTRAL = "Neutral"

    @classmethod
    def playable(cls) -> list[CardClass]:
        """The seven draftable classes, in selection-screen order."""
        return [c for c in cls if c is not cls.NEUTRAL]

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            token = value.strip()
            if token in CLASS_TOKENS:
                return cls(CLASS_TOKENS[token])
            for member in cls:
                if member.name.lower() == token.lower() or member.value.lower() == token.lower():
                    return member
        return None


# Sort priority within equal cost
RARITY_PRIORITY: dict[Rarity, int] = {
    Rarity.BRONZE: 1,
    Rarity.SILVER: 2,
    Rarity.GOLD: 3,
    Rarity.RAINBOW: 4,
}

# Tokens used by the zh-Hant card data dumps
RARITY_TOKENS: dict[str, str] = {
    "銅": "Bronze",
    "銀": "Silver",
    "金": "Gold",
    "虹": "Rainbow",
}

CLASS_TOKENS: dict[str, str] = {
    "精靈": "Forestcraft",
    "皇家": "Swordcraft",
    "巫師": "Runecraft",
    "龍族": "Dragoncraft",
    "夜魔": "Abysscraft",
    "主教": "Havencraft",
    "復仇者": "Portalcraft",
    "中立": "Neutral",
}


class Card(BaseModel):
    name: str
    cost: int = Field(0, ge=0)
    rarity: Rarity
    card_class: CardClass = Field(alias="class")
    image: str = ""

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("rarity", mode="before")
    @classmethod
    def _parse_rarity(cls, v):
        return Rarity(v) if isinstance(v, str) else v

    @field_validator("card_class", mode="before")
    @classmethod
    def _parse_class(cls, v):
        return CardClass(v) if isinstance(v, str) else v

    @field_validator("image", mode="before")
    @classmethod
    def _none_image(cls, v):
        return v or ""

    @property
    def is_neutral(self) -> bool:
        return self.card_class is CardClass.NEUTRAL


PLACEHOLDER_CARD = Card(
    name="No Data",
    cost=0,
    rarity=Rarity.BRONZE,
    card_class=CardClass.NEUTRAL,
    image="",
)
