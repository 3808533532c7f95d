from typing import Callable

from ..models import PickGroup, RoundReport

RESULTS_TITLE = "🎲 Squig Roulette — Results"


def fallback_name(participant_id: str) -> str:
    return f"@{participant_id}"


def summarize(
        picks: dict[str, int],
        outcome: int,
        winners: list[str],
        name_of: Callable[[str], str | None],
        domain_size: int,
        points_awarded: int,
) -> RoundReport:
    def label(participant_id: str) -> str:
        return name_of(participant_id) or fallback_name(participant_id)

    by_value: dict[int, list[str]] = {}
    for participant_id, value in picks.items():
        by_value.setdefault(value, []).append(label(participant_id))

    return RoundReport(
        title=RESULTS_TITLE,
        rolled=outcome,
        groups=[PickGroup(value=value, names=by_value.get(value, [])) for value in range(1, domain_size + 1)],
        winners=[label(participant_id) for participant_id in winners],
        points_awarded=points_awarded,
    )
