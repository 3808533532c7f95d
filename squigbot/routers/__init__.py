from .auth import router as auth_router
from .users import router as users_router
from .rooms import router as rooms_router
from .wallets import router as wallets_router
from .tokens import router as tokens_router
from .websocket_router import router as websocket_router, init_room_manager

__all__ = ["auth_router", "users_router", "rooms_router", "wallets_router", "tokens_router", "websocket_router", "init_room_manager"]
