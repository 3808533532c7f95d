import json
import logging
import uuid
from typing import Protocol

from broadcaster import Broadcast

log = logging.getLogger(__name__)


class Announcer(Protocol):
    async def send(self, content: dict) -> str: ...

    async def edit(self, handle: str, content: dict) -> None: ...

    async def notify(self, participant_id: str, content: dict) -> None: ...


def room_channel_name(room_id: str) -> str:
    return f"chatroom_{room_id}"


class RoomChannel:
    """Bot messages for one room, published as events on the room's broadcast channel.

    Clients render ``bot_message`` events and replace them in place on
    ``bot_message_edited``. ``notice`` events carry a ``to`` field and are only
    forwarded to that user by the websocket layer.
    """

    def __init__(self, broadcast: Broadcast, room_id: str):
        self.broadcast = broadcast
        self.room_id = room_id

    async def _publish(self, event: dict) -> None:
        await self.broadcast.publish(channel=room_channel_name(self.room_id), message=json.dumps(event))

    async def send(self, content: dict) -> str:
        handle = uuid.uuid4().hex[:12]
        await self._publish({"type": "bot_message", "message_id": handle, **content})
        return handle

    async def edit(self, handle: str, content: dict) -> None:
        await self._publish({"type": "bot_message_edited", "message_id": handle, **content})

    async def notify(self, participant_id: str, content: dict) -> None:
        await self._publish({"type": "notice", "to": participant_id, **content})
