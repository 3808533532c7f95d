import re
from datetime import datetime

from pydantic import BaseModel, field_validator

ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")


class WalletLinkRequest(BaseModel):
    address: str

    @field_validator("address")
    @classmethod
    def check_address(cls, value: str) -> str:
        value = value.strip()
        if not ADDRESS_PATTERN.match(value):
            raise ValueError("Please enter a valid Ethereum wallet address.")
        return value


class WalletPublic(BaseModel):
    address: str
    linked_at: datetime


class TokenItem(BaseModel):
    token_id: str
    image_url: str
    opensea_url: str | None = None


class HoldingsPage(BaseModel):
    collection: str
    title: str
    wallet: str
    total: int
    page: int
    total_pages: int
    items: list[TokenItem]
