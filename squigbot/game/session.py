import time
from fastapi import WebSocket

from ..models import Participant, RoundPhase, RouletteSettings
from .channel import Announcer
from .roulette import RouletteRound

import logging

log = logging.getLogger(__name__)


class GameSession:
    """Players, scores and played rounds of one room.

    Scores and the used-round set live as long as the session; they only
    start over through ``new_session``.
    """

    def __init__(self, room_id: int, max_players: int):
        log.info(f"Creating new game session for room {room_id}")
        self.room_id = room_id
        self.max_players = max_players

        self._connections: dict[str, WebSocket] = {}
        self._player_info: dict[str, Participant] = {}

        self.session_number = 1
        self.round_number = 1
        self.scores: dict[str, int] = {}
        self.used_rounds: set[str] = set()
        self.active_round: RouletteRound | None = None

    def __len__(self) -> int:
        return len(self._connections)

    @property
    def is_full(self) -> bool:
        return len(self._connections) >= self.max_players

    @property
    def active_players(self) -> list[str]:
        return list(self._player_info)

    @property
    def players(self) -> dict[str, Participant]:
        return dict(self._player_info)

    @property
    def scoreboard(self) -> list[dict]:
        ranked = sorted(self.scores.items(), key=lambda item: (-item[1], item[0]))
        return [{"username": username, "points": points} for username, points in ranked]

    async def add_player(self, username: str, display_name: str | None, websocket: WebSocket) -> None:
        if self.is_full:
            raise ValueError(f"Room {self.room_id} is full")
        if username in self._connections:
            raise ValueError(f"Player {username} already in room")

        log.info(f"Adding player {username} to room {self.room_id}")
        self._connections[username] = websocket
        self._player_info[username] = Participant(
            id=username, display_name=display_name, connected_at=time.time()
        )

    async def remove_player(self, username: str) -> None:
        if username not in self._connections:
            return

        log.info(f"Removing player {username} from room {self.room_id}")
        del self._connections[username]
        del self._player_info[username]

    def start_roulette(self, channel: Announcer, settings: RouletteSettings | None = None) -> RouletteRound:
        if self.active_round is not None:
            raise ValueError(f"A round is already running in room {self.room_id}")
        if not self._player_info:
            raise ValueError(f"No players in room {self.room_id}")

        self.active_round = RouletteRound(
            channel,
            self.players,
            self.scores,
            self.used_rounds,
            round_number=self.round_number,
            settings=settings,
        )
        return self.active_round

    def finish_round(self, round_: RouletteRound) -> None:
        if self.active_round is round_:
            self.active_round = None
        if round_.phase not in (RoundPhase.PENDING, RoundPhase.SHORT_CIRCUITED):
            self.round_number += 1

    def new_session(self) -> None:
        if self.active_round is not None:
            raise ValueError(f"A round is still running in room {self.room_id}")
        self.session_number += 1
        self.round_number = 1
        self.scores = {}
        self.used_rounds = set()
