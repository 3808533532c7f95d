from sqlmodel import Field, SQLModel
from datetime import datetime, timezone

class RoomBase(SQLModel):
    room_name: str = Field(index=True)
    max_players: int = Field(default=10)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    disabled: bool = Field(default=False)


class Room(RoomBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    created_by: int = Field(foreign_key="user.id", index=True)
