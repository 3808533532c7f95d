import logging
from sqlmodel import Session, select
import jwt
import anyio
from broadcaster import Broadcast

from ..models import Message
from ..database import get_session
from ..auth.utils import decode_username, get_user_by_username
from .websocket_handler import WebSocketHandler

from fastapi import APIRouter, Depends, Query, WebSocket, status
from ..game import RoomManager

log = logging.getLogger(__name__)
router = APIRouter()

room_manager: RoomManager | None = None


def get_room_manager() -> RoomManager:
    """Dependency to get the room manager instance"""
    if room_manager is None:
        raise RuntimeError("Room manager not initialized")
    return room_manager


async def authenticate_websocket(
        websocket: WebSocket, token: str | None, session: Session
):
    """Authenticate WebSocket connection and return the user"""
    if not token:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return None

    try:
        username = decode_username(token)
        if not username:
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
            return None

        current_user = get_user_by_username(session, username=username)
        if not current_user or current_user.disabled:
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
            return None

        return current_user

    except jwt.InvalidTokenError:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return None


async def send_message_history(websocket: WebSocket, room_id: str, session: Session) -> None:
    """Send recent message history to newly connected client"""
    messages = session.exec(
        select(Message)
        .where(Message.room_id == int(room_id))
        .order_by(Message.created_at.desc())
        .limit(50)
    ).all()

    for msg in reversed(messages):
        await websocket.send_json(
            {
                "type": "history",
                "username": msg.username,
                "message": msg.message,
                "timestamp": msg.created_at.isoformat(),
            }
        )


@router.websocket("/ws/{room_id}")
async def websocket_endpoint(
        websocket: WebSocket,
        room_id: str,
        token: str | None = Query(None),
        session: Session = Depends(get_session),
) -> None:
    """Main WebSocket endpoint for room connections"""
    manager = get_room_manager()

    current_user = await authenticate_websocket(websocket, token, session)
    if not current_user:
        return

    username = current_user.username
    await websocket.accept()

    try:
        await send_message_history(websocket, room_id, session)

        async with anyio.create_task_group() as task_group:

            async def run_message_handler() -> None:
                """Task to handle incoming WebSocket messages"""
                await WebSocketHandler.handle_messages(
                    websocket=websocket,
                    room_id=room_id,
                    username=username,
                    display_name=current_user.display_name,
                    session=session,
                    manager=manager,
                )
                task_group.cancel_scope.cancel()

            task_group.start_soon(run_message_handler)

            await WebSocketHandler.broadcast_to_client(
                websocket=websocket, room_id=room_id, username=username, manager=manager
            )

    except Exception as e:
        log.error(f"WebSocket error for user {username}: {e}")
        raise


async def init_room_manager(broadcast: Broadcast) -> None:
    """Initialize the global room manager instance"""
    global room_manager
    room_manager = RoomManager(broadcast)
