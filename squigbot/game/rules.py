"""Outcome draw, winner matching, score updates and the single-use round guard."""

import random
from typing import Iterable, MutableMapping, MutableSet, Sequence


def resolve(domain: Sequence[int], rng: random.Random | None = None) -> int:
    return (rng or random).choice(domain)


def match_winners(picks: dict[str, int], outcome: int) -> list[str]:
    return [participant_id for participant_id, value in picks.items() if value == outcome]


def apply_wins(ledger: MutableMapping[str, int], winners: Iterable[str], point_award: int) -> None:
    # not idempotent; callers rely on the round guard
    for participant_id in winners:
        ledger[participant_id] = ledger.get(participant_id, 0) + point_award


def should_run(used_rounds: MutableSet[str] | None, round_id: str) -> bool:
    return used_rounds is None or round_id not in used_rounds


def mark_used(used_rounds: MutableSet[str] | None, round_id: str) -> None:
    if used_rounds is not None:
        used_rounds.add(round_id)
