"""Squig Roulette: players pick 1-6, the bot rolls a die, matches score points."""

import logging
import random
from typing import Iterable, Mapping, MutableMapping, MutableSet

from ..models import Participant, RoundPhase, RoundResult, RouletteSettings, Submission
from . import prompt as render
from .channel import Announcer
from .collector import PickCollector
from .rules import apply_wins, mark_used, match_winners, resolve, should_run
from .summary import summarize

log = logging.getLogger(__name__)

ROULETTE_ID = "roulette_1to6_v1"
ROULETTE_NAME = "Squig Roulette"

_TRANSITIONS = {
    RoundPhase.PENDING: {RoundPhase.SHORT_CIRCUITED, RoundPhase.COLLECTING},
    RoundPhase.COLLECTING: {RoundPhase.CLOSED},
    RoundPhase.CLOSED: {RoundPhase.NO_PICKS_REPORTED, RoundPhase.RESOLVED},
    RoundPhase.RESOLVED: {RoundPhase.SCORED},
    RoundPhase.SCORED: {RoundPhase.REPORTED},
}


class RoundStateError(RuntimeError):
    pass


class RouletteRound:
    """A single play of Squig Roulette.

    ``scores`` and ``used_rounds`` belong to the caller and are shared across
    rounds; the round only adds to them. A round whose id is already in
    ``used_rounds`` returns an empty result without posting anything.
    """

    def __init__(
            self,
            channel: Announcer,
            players: Mapping[str, Participant],
            scores: MutableMapping[str, int],
            used_rounds: MutableSet[str] | None,
            *,
            round_number: int = 1,
            settings: RouletteSettings | None = None,
            eligible_ids: Iterable[str] | None = None,
            rng: random.Random | None = None,
            round_id: str = ROULETTE_ID,
    ):
        self.channel = channel
        self.players = players
        self.scores = scores
        self.used_rounds = used_rounds
        self.round_number = round_number
        self.settings = settings or RouletteSettings()
        self.eligible_ids = frozenset(players.keys() if eligible_ids is None else eligible_ids)
        self.rng = rng
        self.round_id = round_id

        self.phase = RoundPhase.PENDING
        self.collector: PickCollector | None = None

    @property
    def prompt_handle(self) -> str | None:
        return self.collector.handle if self.collector else None

    def _advance(self, phase: RoundPhase) -> None:
        if phase not in _TRANSITIONS.get(self.phase, set()):
            raise RoundStateError(f"Round {self.round_id} cannot move from {self.phase.value} to {phase.value}")
        self.phase = phase

    def _result(self, rolled: int = 0, picks: dict[str, int] | None = None,
                winners: list[str] | None = None) -> RoundResult:
        return RoundResult(
            id=self.round_id,
            name=ROULETTE_NAME,
            rolled=rolled,
            picks=picks or {},
            winners=winners or [],
            points_awarded=self.settings.point_award,
        )

    def name_of(self, participant_id: str) -> str | None:
        player = self.players.get(participant_id)
        if player is None:
            return None
        return player.display_name or player.id

    def submit(self, source_id: str, raw_choice, prompt_handle: str | None) -> bool:
        if self.phase is not RoundPhase.COLLECTING or self.collector is None:
            return False
        return self.collector.submit(
            Submission(source_id=source_id, raw_choice=raw_choice, prompt_handle=prompt_handle)
        )

    async def run(self) -> RoundResult:
        if self.phase is not RoundPhase.PENDING:
            raise RoundStateError(f"Round {self.round_id} has already run")
        if not should_run(self.used_rounds, self.round_id):
            self._advance(RoundPhase.SHORT_CIRCUITED)
            log.info(f"Round {self.round_id} already played this session, skipping")
            return self._result()

        invitation = render.render_prompt(self.round_number, self.settings)
        handle = await self.channel.send(invitation)
        self.collector = PickCollector(self.channel, handle, invitation, self.eligible_ids, self.settings)
        self._advance(RoundPhase.COLLECTING)

        picks = await self.collector.collect()
        self._advance(RoundPhase.CLOSED)

        if not picks:
            await self._announce(render.no_picks(self.round_number, self.settings))
            self._advance(RoundPhase.NO_PICKS_REPORTED)
            mark_used(self.used_rounds, self.round_id)
            return self._result()

        rolled = resolve(self.settings.domain, self.rng)
        winners = match_winners(picks, rolled)
        self._advance(RoundPhase.RESOLVED)

        apply_wins(self.scores, winners, self.settings.point_award)
        self._advance(RoundPhase.SCORED)
        log.info(f"Round {self.round_id} rolled {rolled}: {len(winners)} of {len(picks)} players matched")

        report = summarize(
            picks, rolled, winners, self.name_of, self.settings.domain_size, self.settings.point_award
        )
        await self._announce(render.results(report.render()))
        self._advance(RoundPhase.REPORTED)

        mark_used(self.used_rounds, self.round_id)
        return self._result(rolled, picks, winners)

    async def _announce(self, content: dict) -> None:
        try:
            await self.channel.send(content)
        except Exception:
            log.debug(f"Failed to announce result of {self.round_id}")
