import asyncio
from broadcaster import Broadcast
from sqlmodel import Session, select
from ..models import Room, RouletteSettings
from .channel import RoomChannel, room_channel_name
from .roulette import RouletteRound
from .session import GameSession

import json
import logging

log = logging.getLogger(__name__)


class RoomManager:
    def __init__(self, broadcast: Broadcast):
        self.broadcast = broadcast
        self.rooms: dict[str, GameSession] = {}
        self._round_tasks: set[asyncio.Task] = set()

    async def get_or_create_room(self, room_id: str, session: Session) -> GameSession:
        if room_id not in self.rooms:
            room = session.exec(select(Room).where(Room.id == int(room_id))).first()
            if not room:
                raise ValueError(f"Room {room_id} not found in database")
            if room.disabled:
                raise ValueError(f"Room {room_id} is disabled")

            self.rooms[room_id] = GameSession(room_id=int(room_id), max_players=room.max_players)
        return self.rooms[room_id]

    def channel_for(self, room_id: str) -> RoomChannel:
        return RoomChannel(self.broadcast, room_id)

    async def broadcast_to_room(self, room_id: str, message: dict) -> None:
        await self.broadcast.publish(
            channel=room_channel_name(room_id), message=json.dumps(message)
        )

    async def start_roulette(
        self, room_id: str, settings: RouletteSettings | None = None
    ) -> RouletteRound:
        room = self.rooms.get(room_id)
        if not room:
            raise ValueError(f"Room {room_id} has no game session")

        round_ = room.start_roulette(self.channel_for(room_id), settings)
        task = asyncio.create_task(self._play_round(room_id, room, round_))
        self._round_tasks.add(task)
        task.add_done_callback(self._round_tasks.discard)
        return round_

    async def _play_round(self, room_id: str, room: GameSession, round_: RouletteRound) -> None:
        try:
            result = await round_.run()
        except Exception as e:
            log.error(f"Error running round in room {room_id}: {e}")
            room.finish_round(round_)
            await self.broadcast_to_room(
                room_id, {"type": "error", "message": "Failed to run round"}
            )
            return

        room.finish_round(round_)
        await self.broadcast_to_room(
            room_id,
            {
                "type": "round_complete",
                "result": result.model_dump(),
                "scores": room.scoreboard,
            },
        )

    async def handle_pick(
        self, room_id: str, username: str, raw_choice, message_id: str | None
    ) -> bool:
        room = self.rooms.get(room_id)
        if not room or room.active_round is None:
            return False
        return room.active_round.submit(username, raw_choice, message_id)

    async def wait_for_rounds(self) -> None:
        if self._round_tasks:
            await asyncio.gather(*self._round_tasks, return_exceptions=True)
