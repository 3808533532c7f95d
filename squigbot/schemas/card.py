from typing import Any

from pydantic import BaseModel


class CardTrait(BaseModel):
    trait_type: str
    value: Any
    # squigs sharing this value, from trait_counts.json
    count: int | None = None


class RankInfo(BaseModel):
    rank: int
    score: float | None = None
    percentile: float | None = None
    total: int | None = None


class CardDetails(BaseModel):
    token_id: str
    name: str
    image_url: str
    opensea_url: str | None = None
    rarity_label: str
    rarity_color: str
    rank: RankInfo | None = None
    traits: dict[str, list[CardTrait]]
