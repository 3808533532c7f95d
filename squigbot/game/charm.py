"""Random $CHARM drops for chatty players."""

import random

from .. import config
from ..models import CharmDrop

# 100 three times out of four
CHARM_REWARDS = (100, 100, 100, 200)

CHARM_LORE = (
    "A Squig blinked and $CHARM fell out of the sky.",
    "The spirals aligned. You’ve been dripped on.",
    "You weren’t supposed to find this... but the Squigs don’t care.",
    "A whisper reached your wallet: ‘take it, fast.’",
    "This reward was meant for someone else. The Squigs disagreed.",
    "The Charmkeeper slipped. You caught it.",
    "A Squig coughed up 200 $CHARM. Please wash your hands.",
    "This token came from *somewhere very wet*. Don’t ask.",
)


def maybe_reward_charm(odds: int | None = None, rng: random.Random | None = None) -> CharmDrop | None:
    """One roll in ``odds`` (``CHARM_ODDS`` by default) drops $CHARM; otherwise None."""
    rng = rng or random
    odds = config.CHARM_ODDS if odds is None else odds
    if odds < 1 or rng.randrange(odds) != 0:
        return None
    return CharmDrop(reward=rng.choice(CHARM_REWARDS), lore=rng.choice(CHARM_LORE))
