from ..models.room import RoomBase


class RoomCreate(RoomBase):
    room_name: str
    max_players: int = 10
