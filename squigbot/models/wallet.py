from datetime import datetime, timezone
from sqlmodel import Field, SQLModel


class WalletLink(SQLModel, table=True):
    user_id: int = Field(foreign_key="user.id", primary_key=True)
    address: str = Field(index=True)
    linked_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
