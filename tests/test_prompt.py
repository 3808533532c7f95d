from squigbot.game import prompt as render
from squigbot.models import RouletteSettings


def test_default_invitation() -> None:
    invitation = render.render_prompt(2, RouletteSettings(duration_ms=30_000, reminder_offsets_ms=(10_000, 20_000)))

    assert invitation["title"] == "Round 2: 🎲 Squig Roulette"
    assert "Pick a number **1–6** below." in invitation["description"]
    assert "**Match = +2 points.** No match = 0." in invitation["description"]
    assert invitation["footer"] == "You have 30 seconds. Alerts at 10s and 20s."
    assert [[b["id"] for b in row] for row in invitation["components"]] == [
        ["roulette_1", "roulette_2", "roulette_3"],
        ["roulette_4", "roulette_5", "roulette_6"],
    ]


def test_reminder_variants_keep_the_rest_of_the_prompt() -> None:
    invitation = render.render_prompt(1, RouletteSettings())

    first = render.with_reminder(invitation, 20_000)
    second = render.with_reminder(invitation, 10_000)

    assert first["footer"] == "20 seconds left…"
    assert second["footer"] == "10 seconds left…"
    assert first["components"] == invitation["components"]
    assert invitation["footer"] != first["footer"]


def test_disabled_does_not_touch_the_original() -> None:
    invitation = render.render_prompt(1, RouletteSettings())

    closed = render.disabled(invitation)

    assert all(b["disabled"] for row in closed["components"] for b in row)
    assert not any(b["disabled"] for row in invitation["components"] for b in row)


def test_no_picks_report() -> None:
    content = render.no_picks(3, RouletteSettings())

    assert content["title"] == "Round 3: 🎲 Squig Roulette"
    assert content["description"].endswith("No picks were made. Moving on…")
