from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from .. import config


class Participant(BaseModel):
    id: str
    display_name: str | None = None
    connected_at: float = 0.0


class RouletteSettings(BaseModel):
    duration_ms: int = Field(default=config.ROULETTE_DURATION_MS, gt=0)
    reminder_offsets_ms: tuple[int, ...] = config.ROULETTE_REMINDER_OFFSETS_MS
    domain_size: int = Field(default=config.ROULETTE_DOMAIN_SIZE, ge=1)
    point_award: int = Field(default=config.ROULETTE_POINT_AWARD, ge=0)

    @property
    def domain(self) -> range:
        return range(1, self.domain_size + 1)


class Submission(BaseModel):
    source_id: str
    raw_choice: Any = None
    prompt_handle: str | None = None


class RoundPhase(str, Enum):
    PENDING = "pending"
    SHORT_CIRCUITED = "short_circuited"
    COLLECTING = "collecting"
    CLOSED = "closed"
    NO_PICKS_REPORTED = "no_picks_reported"
    RESOLVED = "resolved"
    SCORED = "scored"
    REPORTED = "reported"


class RoundResult(BaseModel):
    id: str
    name: str
    rolled: int = 0
    picks: dict[str, int] = Field(default_factory=dict)
    winners: list[str] = Field(default_factory=list)
    points_awarded: int


class PickGroup(BaseModel):
    value: int
    names: list[str] = Field(default_factory=list)


class RoundReport(BaseModel):
    title: str
    rolled: int
    groups: list[PickGroup]
    winners: list[str]
    points_awarded: int

    def render(self) -> str:
        lines = [f"**{group.value}** — {', '.join(group.names) if group.names else '—'}" for group in self.groups]
        if self.winners:
            verdict = f"Winners (+{self.points_awarded}): {', '.join(self.winners)}"
        else:
            verdict = "No matches this time!"
        return "\n".join([f"Rolled: **{self.rolled}**", "", "**Picks:**", *lines, "", verdict])


class CharmDrop(BaseModel):
    reward: int
    lore: str

    def announcement(self, username: str) -> str:
        return f"🎁 **{username}** just got **{self.reward} $CHARM**!\n*{self.lore}*"
