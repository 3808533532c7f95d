"""Displayable content for a Squig Roulette round.

Content is a plain dict so it can be published over the room channel as JSON
and edited in place by the collector.
"""

from ..models import RouletteSettings

CHOICE_PREFIX = "roulette_"
BUTTONS_PER_ROW = 3


def _seconds(ms: int) -> str:
    return f"{ms // 1000}s" if ms % 1000 == 0 else f"{ms / 1000:g}s"


def round_title(round_number: int) -> str:
    return f"Round {round_number}: 🎲 Squig Roulette"


def round_rules(settings: RouletteSettings) -> str:
    return "\n".join([
        f"Pick a number **1–{settings.domain_size}** below.",
        "I’ll roll a die at the end.",
        f"**Match = +{settings.point_award} points.** No match = 0.",
    ])


def opening_footer(settings: RouletteSettings) -> str:
    footer = f"You have {settings.duration_ms // 1000} seconds."
    offsets = [_seconds(ms) for ms in settings.reminder_offsets_ms if 0 < ms < settings.duration_ms]
    if offsets:
        footer += f" Alerts at {' and '.join(offsets)}."
    return footer


def choice_rows(settings: RouletteSettings, disabled: bool = False) -> list[list[dict]]:
    buttons = [
        {"id": f"{CHOICE_PREFIX}{value}", "label": str(value), "disabled": disabled}
        for value in settings.domain
    ]
    return [buttons[i:i + BUTTONS_PER_ROW] for i in range(0, len(buttons), BUTTONS_PER_ROW)]


def render_prompt(round_number: int, settings: RouletteSettings) -> dict:
    return {
        "title": round_title(round_number),
        "description": round_rules(settings),
        "footer": opening_footer(settings),
        "components": choice_rows(settings),
    }


def reminder_footer(remaining_ms: int) -> str:
    return f"{max(remaining_ms, 0) // 1000} seconds left…"


def with_reminder(prompt: dict, remaining_ms: int) -> dict:
    return {**prompt, "footer": reminder_footer(remaining_ms)}


def disabled(prompt: dict) -> dict:
    rows = [[{**button, "disabled": True} for button in row] for row in prompt.get("components", [])]
    return {**prompt, "components": rows}


def no_picks(round_number: int, settings: RouletteSettings) -> dict:
    return {
        "title": round_title(round_number),
        "description": f"{round_rules(settings)}\n\nNo picks were made. Moving on…",
    }


def results(description: str) -> dict:
    return {"title": "🎲 Squig Roulette — Results", "description": description}
