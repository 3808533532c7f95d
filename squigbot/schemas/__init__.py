from .user import Token, TokenData, UserCreate, UserPublic, UserUpdate
from .room import RoomCreate
from .wallet import HoldingsPage, TokenItem, WalletLinkRequest, WalletPublic
from .card import CardDetails, CardTrait, RankInfo

__all__ = [
    "Token", "TokenData", "UserCreate", "UserPublic", "UserUpdate", "RoomCreate",
    "HoldingsPage", "TokenItem", "WalletLinkRequest", "WalletPublic",
    "CardDetails", "CardTrait", "RankInfo",
]
