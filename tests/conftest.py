"""Shared fixtures. The environment is set before any squigbot import reads it."""

import asyncio
import os
import random
import tempfile
from pathlib import Path

_DB_DIR = Path(tempfile.mkdtemp(prefix="squigbot-tests-"))
os.environ["SQLITE_URL"] = f"sqlite:///{_DB_DIR / 'test.db'}"
os.environ["REDIS_URL"] = "memory://"
os.environ["DEV"] = "true"
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("ETHERSCAN_API_KEY", "test-key")

import pytest

from squigbot.models import Participant, RoundPhase, RouletteSettings


class FakeChannel:
    """Records everything the round posts."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, dict]] = []
        self.edits: list[tuple[str, dict]] = []
        self.notices: list[tuple[str, dict]] = []
        self.fail_edits = False
        self._count = 0

    async def send(self, content: dict) -> str:
        self._count += 1
        handle = f"msg-{self._count}"
        self.sent.append((handle, content))
        return handle

    async def edit(self, handle: str, content: dict) -> None:
        if self.fail_edits:
            raise RuntimeError("message was deleted")
        self.edits.append((handle, content))

    async def notify(self, participant_id: str, content: dict) -> None:
        self.notices.append((participant_id, content))

    def notices_for(self, participant_id: str) -> list[str]:
        return [content["content"] for pid, content in self.notices if pid == participant_id]


class FixedRoll(random.Random):
    def __init__(self, value: int) -> None:
        super().__init__()
        self.value = value
        self.calls = 0

    def choice(self, seq):
        self.calls += 1
        return self.value


async def wait_for_phase(round_, phase: RoundPhase = RoundPhase.COLLECTING) -> None:
    for _ in range(200):
        if round_.phase is phase:
            return
        await asyncio.sleep(0.005)
    raise AssertionError(f"round never reached {phase.value}, stuck in {round_.phase.value}")


@pytest.fixture
def channel() -> FakeChannel:
    return FakeChannel()


@pytest.fixture
def fast_settings() -> RouletteSettings:
    return RouletteSettings(duration_ms=400, reminder_offsets_ms=(100, 200), domain_size=6, point_award=2)


@pytest.fixture
def players() -> dict[str, Participant]:
    return {
        "alice": Participant(id="alice", display_name="Alice"),
        "bob": Participant(id="bob"),
        "carol": Participant(id="carol", display_name="Carol"),
    }
