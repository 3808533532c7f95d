import json
import logging
from datetime import datetime, timezone
from sqlmodel import Session
from fastapi import WebSocket
from fastapi.websockets import WebSocketState

from ..models import Message, RouletteSettings
from ..game import RoomManager, maybe_reward_charm
from ..game.channel import room_channel_name

log = logging.getLogger(__name__)

SETTING_FIELDS = ("duration_ms", "reminder_offsets_ms", "domain_size", "point_award")


class WebSocketHandler:
    """Handles WebSocket message processing and communication"""

    @staticmethod
    async def handle_messages(
            websocket: WebSocket,
            room_id: str,
            username: str,
            display_name: str | None,
            session: Session,
            manager: RoomManager,
    ) -> None:
        """Main message handling loop for WebSocket connections"""
        room = await manager.get_or_create_room(room_id, session)
        await room.add_player(username, display_name, websocket)

        try:
            await manager.broadcast_to_room(
                room_id,
                {
                    "type": "player_joined",
                    "username": username,
                    "players": room.active_players,
                },
            )

            async for message in websocket.iter_text():
                try:
                    msg_data = json.loads(message)
                    if not isinstance(msg_data, dict):
                        raise ValueError(f"expected a JSON object, got {type(msg_data).__name__}")
                    await WebSocketHandler._process_message(
                        msg_data, websocket, room_id, username, session, manager, room
                    )
                except (json.JSONDecodeError, ValueError) as e:
                    log.error(f"Error processing message from {username}: {e}")
                    await websocket.send_json(
                        {"type": "error", "message": "Invalid message format"}
                    )

        finally:
            await room.remove_player(username)
            await manager.broadcast_to_room(
                room_id,
                {
                    "type": "player_left",
                    "username": username,
                    "players": room.active_players,
                },
            )

    @staticmethod
    async def _process_message(
            msg_data: dict,
            websocket: WebSocket,
            room_id: str,
            username: str,
            session: Session,
            manager: RoomManager,
            room,
    ) -> None:
        """Process individual WebSocket messages based on type"""
        msg_type = msg_data.get("type")

        if msg_type == "pick":
            # picks outside an open window are dropped
            await manager.handle_pick(
                room_id, username, msg_data.get("choice"), msg_data.get("message_id")
            )
        elif msg_type == "start_roulette":
            await WebSocketHandler._handle_start_roulette(msg_data, websocket, room_id, manager)
        elif msg_type == "scores":
            await websocket.send_json(
                {"type": "scores", "session": room.session_number, "scores": room.scoreboard}
            )
        elif msg_type == "new_session":
            await WebSocketHandler._handle_new_session(websocket, room_id, manager, room)
        elif msg_type == "message":
            await WebSocketHandler._handle_chat_message(
                msg_data, room_id, username, session, manager
            )

    @staticmethod
    async def _handle_start_roulette(
            msg_data: dict, websocket: WebSocket, room_id: str, manager: RoomManager
    ) -> None:
        overrides = {field: msg_data[field] for field in SETTING_FIELDS if field in msg_data}
        settings = RouletteSettings(**overrides)
        try:
            await manager.start_roulette(room_id, settings)
        except ValueError as e:
            await websocket.send_json({"type": "error", "message": str(e)})

    @staticmethod
    async def _handle_new_session(websocket: WebSocket, room_id: str, manager: RoomManager, room) -> None:
        try:
            room.new_session()
        except ValueError as e:
            await websocket.send_json({"type": "error", "message": str(e)})
            return
        await manager.broadcast_to_room(
            room_id,
            {"type": "session_reset", "session": room.session_number, "players": room.active_players},
        )

    @staticmethod
    async def _handle_chat_message(
            msg_data: dict,
            room_id: str,
            username: str,
            session: Session,
            manager: RoomManager,
    ) -> None:
        """Handle chat messages"""
        db_message = Message(
            room_id=int(room_id),
            username=username,
            message=msg_data.get("message", ""),
            type="message",
        )
        session.add(db_message)
        session.commit()

        await manager.broadcast_to_room(
            room_id,
            {
                "type": "message",
                "username": username,
                "message": msg_data.get("message", ""),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

        drop = maybe_reward_charm()
        if drop:
            log.info(f"CHARM REWARD: {username} got {drop.reward} $CHARM in room {room_id}")
            await manager.broadcast_to_room(
                room_id,
                {
                    "type": "charm_drop",
                    "username": username,
                    "reward": drop.reward,
                    "lore": drop.lore,
                    "content": drop.announcement(username),
                },
            )

    @staticmethod
    async def broadcast_to_client(
            websocket: WebSocket, room_id: str, username: str, manager: RoomManager
    ) -> None:
        """Forward room events to this client, skipping notices addressed to others"""
        async with manager.broadcast.subscribe(channel=room_channel_name(room_id)) as subscriber:
            async for event in subscriber:
                recipient = json.loads(event.message).get("to")
                if recipient is not None and recipient != username:
                    continue
                if websocket.client_state == WebSocketState.CONNECTED:
                    await websocket.send_text(event.message)
