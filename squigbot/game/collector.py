import logging
import math
from typing import Iterable

import anyio

from ..models import RouletteSettings, Submission
from . import prompt as render
from .channel import Announcer

log = logging.getLogger(__name__)


def parse_choice(raw, domain: range) -> int | None:
    """Accepts ``3``, ``"3"`` or the button id ``"roulette_3"``; anything outside ``domain`` is None."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        text = raw.strip()
        if text.startswith(render.CHOICE_PREFIX):
            text = text[len(render.CHOICE_PREFIX):]
        try:
            value = int(text)
        except ValueError:
            return None
    elif isinstance(raw, int):
        value = raw
    else:
        return None
    return value if value in domain else None


class PickCollector:
    """One timed acceptance window over a posted prompt.

    Submissions are queued by ``submit`` and applied one at a time in arrival
    order by ``collect``. Reminder edits run alongside and only replace
    ``prompt``, the content last shown, never ``picks``.
    """

    def __init__(
            self,
            channel: Announcer,
            handle: str,
            prompt: dict,
            eligible_ids: Iterable[str],
            settings: RouletteSettings,
    ):
        self.channel = channel
        self.handle = handle
        self.prompt = prompt
        self.eligible = frozenset(eligible_ids)
        self.settings = settings
        self.picks: dict[str, int] = {}
        self.closed = False
        self._send, self._receive = anyio.create_memory_object_stream(math.inf)

    def submit(self, submission: Submission) -> bool:
        """Queue a submission; returns False once the window has closed."""
        if self.closed:
            return False
        try:
            self._send.send_nowait(submission)
        except (anyio.ClosedResourceError, anyio.BrokenResourceError):
            return False
        return True

    async def collect(self) -> dict[str, int]:
        duration_ms = self.settings.duration_ms
        log.info(f"Collecting picks on {self.handle} from {len(self.eligible)} players for {duration_ms}ms")

        async with anyio.create_task_group() as task_group:
            for offset_ms in self.settings.reminder_offsets_ms:
                if 0 < offset_ms < duration_ms:
                    task_group.start_soon(self._remind, offset_ms)

            with anyio.move_on_after(duration_ms / 1000):
                async with self._receive:
                    async for submission in self._receive:
                        await self._apply(submission)

            self._close()
            task_group.cancel_scope.cancel()

        await self._edit(render.disabled(self.prompt))
        log.info(f"Closed {self.handle} with {len(self.picks)} picks")
        return dict(self.picks)

    def _close(self) -> None:
        self.closed = True
        self._send.close()

    async def _apply(self, submission: Submission) -> None:
        source_id = submission.source_id
        if submission.prompt_handle != self.handle:
            await self._notify(source_id, "That round is no longer open.")
            return
        if source_id not in self.eligible:
            await self._notify(source_id, "You're not playing in this round.")
            return

        choice = parse_choice(submission.raw_choice, self.settings.domain)
        if choice is None:
            await self._notify(source_id, "Invalid choice.")
            return

        self.picks[source_id] = choice
        await self._notify(source_id, f"You picked **{choice}** 🎯")

    async def _remind(self, offset_ms: int) -> None:
        await anyio.sleep(offset_ms / 1000)
        if not self.closed:
            self.prompt = render.with_reminder(self.prompt, self.settings.duration_ms - offset_ms)
            await self._edit(self.prompt)

    async def _edit(self, content: dict) -> None:
        try:
            await self.channel.edit(self.handle, content)
        except Exception:
            log.debug(f"Failed to edit prompt {self.handle}")

    async def _notify(self, participant_id: str, text: str) -> None:
        try:
            await self.channel.notify(participant_id, {"content": text, "message_id": self.handle})
        except Exception:
            log.debug(f"Failed to notify {participant_id}")
