from .user import User, UserBase
from .room import Room, RoomBase
from .message import Message
from .wallet import WalletLink
from .game import (
    CharmDrop,
    Participant,
    PickGroup,
    RoundPhase,
    RoundReport,
    RoundResult,
    RouletteSettings,
    Submission,
)

__all__ = [
    "User", "UserBase", "Room", "RoomBase", "Message", "WalletLink",
    "Participant", "PickGroup", "RoundPhase", "RoundReport", "RoundResult",
    "RouletteSettings", "Submission", "CharmDrop",
]
