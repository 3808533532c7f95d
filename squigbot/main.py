import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from broadcaster import Broadcast

from .config import REDIS_URL
from .database import create_db_and_tables
from .middleware import add_cors_middleware
from .routers import auth_router, users_router, rooms_router, wallets_router, tokens_router, websocket_router, init_room_manager

log = logging.getLogger(__name__)

broadcast = Broadcast(REDIS_URL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    await broadcast.connect()
    await init_room_manager(broadcast)
    yield
    await broadcast.disconnect()
    log.info("shutting down")


app = FastAPI(lifespan=lifespan)
app.add_middleware(add_cors_middleware)

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(rooms_router)
app.include_router(wallets_router)
app.include_router(tokens_router)
app.include_router(websocket_router)
