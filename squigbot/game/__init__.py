from .channel import Announcer, RoomChannel
from .collector import PickCollector, parse_choice
from .roulette import ROULETTE_ID, ROULETTE_NAME, RouletteRound, RoundStateError
from .rules import apply_wins, mark_used, match_winners, resolve, should_run
from .summary import summarize
from .session import GameSession
from .room_manager import RoomManager
from .charm import maybe_reward_charm

__all__ = [
    "Announcer", "RoomChannel", "PickCollector", "parse_choice",
    "ROULETTE_ID", "ROULETTE_NAME", "RouletteRound", "RoundStateError",
    "apply_wins", "mark_used", "match_winners", "resolve", "should_run",
    "summarize", "GameSession", "RoomManager", "maybe_reward_charm",
]
